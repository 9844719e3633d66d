# tests/test_core/test_layout_models.py
"""Tests for A_core/A01_layout_models.py - labels, elements and page regions."""

import math

import pytest

from A_core.A01_layout_models import (
    LayoutBox,
    LayoutElement,
    PageRegion,
    SemanticLabel,
    is_title,
    semantic_priority,
)


class TestSemanticPriority:
    """Tests for the fixed label ranking."""

    @pytest.mark.parametrize(
        "label,expected",
        [
            (SemanticLabel.CROSS_LAYOUT, 0),
            (SemanticLabel.HORIZONTAL_TITLE, 1),
            (SemanticLabel.VERTICAL_TITLE, 1),
            (SemanticLabel.VISION, 2),
            (SemanticLabel.REGULAR, 3),
        ],
    )
    def test_priorities(self, label, expected):
        assert semantic_priority(label) == expected

    def test_unknown_label_ranks_as_regular(self):
        """Labels outside the enum rank with regular text."""
        assert semantic_priority("footnote") == 3

    def test_is_title(self):
        assert is_title(SemanticLabel.HORIZONTAL_TITLE)
        assert is_title(SemanticLabel.VERTICAL_TITLE)
        assert not is_title(SemanticLabel.CROSS_LAYOUT)

    def test_label_is_string(self):
        """Labels can be compared to their string values."""
        assert SemanticLabel.VISION == "vision"


class TestLayoutBox:
    """Tests for the reference element."""

    def test_satisfies_protocol(self):
        assert isinstance(LayoutBox(1, (0, 0, 10, 10)), LayoutElement)

    def test_defaults(self):
        box = LayoutBox(7, (10, 20, 30, 60))
        assert box.id() == 7
        assert box.semantic_label() == SemanticLabel.REGULAR
        assert not box.should_mask()
        assert box.width == 20
        assert box.height == 40

    def test_center_derived(self):
        assert LayoutBox(1, (10, 20, 30, 60)).center() == (20.0, 40.0)

    def test_center_supplied(self):
        box = LayoutBox(1, (10, 20, 30, 60), center_point=(11.0, 21.0))
        assert box.center() == (11.0, 21.0)

    def test_iou_identical(self):
        a = LayoutBox(1, (0, 0, 10, 10))
        assert a.iou(LayoutBox(2, (0, 0, 10, 10))) == pytest.approx(1.0)

    def test_iou_partial(self):
        a = LayoutBox(1, (0, 0, 10, 10))
        b = LayoutBox(2, (5, 0, 15, 10))
        assert a.iou(b) == pytest.approx(50 / 150)

    def test_iou_disjoint_and_touching(self):
        a = LayoutBox(1, (0, 0, 10, 10))
        assert a.iou(LayoutBox(2, (20, 20, 30, 30))) == 0.0
        assert a.iou(LayoutBox(3, (10, 0, 20, 10))) == 0.0

    def test_iou_nan_is_zero(self):
        a = LayoutBox(1, (0, 0, 10, 10))
        assert a.iou(LayoutBox(2, (math.nan, 0, 10, 10))) == 0.0

    def test_frozen(self):
        box = LayoutBox(1, (0, 0, 10, 10))
        with pytest.raises(Exception):
            box.block_id = 2


class TestPageRegion:
    """Tests for page rectangle validation and coercion."""

    def test_geometry(self):
        region = PageRegion(0, 0, 300, 400)
        assert region.width == 300
        assert region.height == 400
        assert region.center == (150.0, 200.0)
        assert region.diagonal == pytest.approx(500.0)

    def test_from_size(self):
        assert PageRegion.from_size(612, 792).as_tuple() == (0.0, 0.0, 612.0, 792.0)

    @pytest.mark.parametrize(
        "coords",
        [
            (0, 0, 0, 100),
            (0, 0, 100, -5),
            (10, 0, 5, 100),
            (0, 0, math.inf, 100),
            (0, math.nan, 100, 100),
        ],
    )
    def test_invalid(self, coords):
        assert not PageRegion(*coords).is_valid()

    def test_valid(self):
        assert PageRegion(-10, -10, 10, 10).is_valid()

    def test_coerce_tuple(self):
        assert PageRegion.coerce((0, 0, 50, 60)) == PageRegion(0.0, 0.0, 50.0, 60.0)

    def test_coerce_passthrough(self):
        region = PageRegion(0, 0, 1, 1)
        assert PageRegion.coerce(region) is region

    @pytest.mark.parametrize(
        "value",
        [None, "0,0,1,1", (0, 0, 1), (0, 0, 1, 1, 1), ("a", 0, 1, 1), 5, (0, 0, 10**400, 1)],
    )
    def test_coerce_rejects(self, value):
        assert PageRegion.coerce(value) is None
