# A_core/A12_exceptions.py
"""
Exception hierarchy for the reading-order engine.

The ordering algorithm itself never raises on malformed geometry; these
exceptions cover the layers around it.

Hierarchy:
    ReadingOrderError (base)
    ├── ConfigurationError     # Invalid config values or types
    └── ParsingError           # PDF could not be opened or read

Usage:
    from A_core.A12_exceptions import ConfigurationError

    try:
        config = OrderingConfig.from_dict(raw)
    except ConfigurationError as e:
        logger.error(f"Bad config: {e.message} ({e.config_key})")
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class ReadingOrderError(Exception):
    """
    Base exception for all reading-order errors.

    Attributes:
        message: Human-readable error description.
        context: Additional context data for debugging.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} [{ctx_str}]"
        return self.message


class ConfigurationError(ReadingOrderError):
    """
    Raised when configuration is invalid.

    Examples:
        - Negative cut threshold
        - Zero histogram resolution
        - Non-numeric tolerance in config.yaml
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        expected_type: Optional[str] = None,
        actual_value: Optional[Any] = None,
    ):
        """
        Args:
            message: Error description.
            config_key: The problematic configuration key.
            expected_type: Expected type or constraint.
            actual_value: The rejected value.
        """
        context: Dict[str, Any] = {}
        if config_key:
            context["key"] = config_key
        if expected_type:
            context["expected"] = expected_type
        if actual_value is not None:
            context["actual"] = repr(actual_value)

        super().__init__(message, context)
        self.config_key = config_key
        self.expected_type = expected_type
        self.actual_value = actual_value


class ParsingError(ReadingOrderError):
    """Raised when a PDF cannot be opened or a page cannot be read."""

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        page_number: Optional[int] = None,
    ):
        context: Dict[str, Any] = {}
        if file_path:
            context["file"] = file_path
        if page_number is not None:
            context["page"] = page_number

        super().__init__(message, context)
        self.file_path = file_path
        self.page_number = page_number


__all__ = [
    "ReadingOrderError",
    "ConfigurationError",
    "ParsingError",
]
