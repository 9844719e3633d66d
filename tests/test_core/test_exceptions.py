# tests/test_core/test_exceptions.py
"""Tests for A_core/A12_exceptions.py - Exception hierarchy."""

import pytest

from A_core.A12_exceptions import (
    ConfigurationError,
    ParsingError,
    ReadingOrderError,
)


class TestReadingOrderError:
    """Tests for the base exception class."""

    def test_basic_message(self):
        """Test exception with just a message."""
        exc = ReadingOrderError("Something went wrong")
        assert str(exc) == "Something went wrong"
        assert exc.message == "Something went wrong"
        assert exc.context == {}

    def test_with_context(self):
        """Test exception with context dictionary."""
        exc = ReadingOrderError("Error occurred", context={"file": "test.pdf", "page": 3})
        assert "file=test.pdf" in str(exc)
        assert "page=3" in str(exc)

    def test_inheritance(self):
        """Test that all exceptions inherit from base."""
        assert isinstance(ConfigurationError("x"), ReadingOrderError)
        assert isinstance(ParsingError("x"), ReadingOrderError)
        assert isinstance(ReadingOrderError("x"), Exception)


class TestConfigurationError:
    """Tests for ConfigurationError."""

    def test_basic(self):
        """Test basic configuration error."""
        exc = ConfigurationError("Bad threshold")
        assert exc.message == "Bad threshold"
        assert exc.config_key is None

    def test_with_key_info(self):
        """Test with configuration key information."""
        exc = ConfigurationError(
            "Invalid value",
            config_key="histogram_resolution_scale",
            expected_type="greater_than",
            actual_value=0,
        )
        assert exc.config_key == "histogram_resolution_scale"
        assert exc.actual_value == 0
        assert "key=histogram_resolution_scale" in str(exc)
        assert "actual=0" in str(exc)


class TestParsingError:
    """Tests for ParsingError."""

    def test_with_file_info(self):
        """Test with file path and page number."""
        exc = ParsingError("Cannot read page", file_path="paper.pdf", page_number=2)
        assert exc.file_path == "paper.pdf"
        assert exc.page_number == 2
        assert "file=paper.pdf" in str(exc)
        assert "page=2" in str(exc)

    def test_catchable_as_base(self):
        """Test catching a subclass through the base class."""
        with pytest.raises(ReadingOrderError):
            raise ParsingError("broken")
