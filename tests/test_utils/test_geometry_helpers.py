# tests/test_utils/test_geometry_helpers.py
"""Tests for Z_utils/Z01_geometry_helpers.py - NaN-safe comparisons and box geometry."""

import math

import pytest

from Z_utils.Z01_geometry_helpers import (
    axis_gaps,
    box_distance,
    boxes_overlap,
    horizontal_extent,
    is_finite_bounds,
    nan_safe_median,
    row_major_cmp,
    sort_row_major,
    total_cmp,
)


class TestTotalCmp:
    def test_ordering(self):
        assert total_cmp(1.0, 2.0) == -1
        assert total_cmp(2.0, 1.0) == 1
        assert total_cmp(2.0, 2.0) == 0

    def test_nan_is_equal(self):
        assert total_cmp(math.nan, 1.0) == 0
        assert total_cmp(1.0, math.nan) == 0


class TestRowMajor:
    def test_same_row_by_x(self):
        assert row_major_cmp((100, 50), (10, 55), 10.0) == 1

    def test_different_rows_by_y(self):
        assert row_major_cmp((10, 80), (100, 50), 10.0) == 1

    def test_sort_is_stable(self):
        items = [("a", (5, 5)), ("b", (5, 5)), ("c", (0, 100))]
        ordered = sort_row_major(items, lambda item: item[1], 10.0)
        assert [name for name, _ in ordered] == ["a", "b", "c"]

    def test_sort_tolerates_nan(self):
        items = [(0, (math.nan, 5)), (1, (3, math.nan)), (2, (1, 1))]
        ordered = sort_row_major(items, lambda item: item[1], 10.0)
        assert sorted(i for i, _ in ordered) == [0, 1, 2]


class TestMedian:
    def test_odd(self):
        assert nan_safe_median([3.0, 1.0, 2.0]) == 2.0

    def test_even_averages(self):
        assert nan_safe_median([1.0, 4.0, 2.0, 3.0]) == 2.5

    def test_empty(self):
        assert nan_safe_median([]) == 0.0


class TestBoxGeometry:
    def test_overlap_strict(self):
        assert boxes_overlap((0, 0, 10, 10), (5, 5, 15, 15))
        assert not boxes_overlap((0, 0, 10, 10), (10, 0, 20, 10))

    def test_gaps(self):
        assert axis_gaps((0, 0, 10, 10), (30, 50, 40, 60)) == (20.0, 40.0)
        assert axis_gaps((0, 0, 10, 10), (5, 5, 15, 15)) == (0.0, 0.0)

    def test_distance(self):
        assert box_distance((0, 0, 10, 10), (13, 14, 20, 20)) == pytest.approx(5.0)

    def test_finite_bounds(self):
        assert is_finite_bounds((0, 0, 1, 1))
        assert not is_finite_bounds((0, math.inf, 1, 1))

    def test_horizontal_extent_skips_nan(self):
        assert horizontal_extent([(10, 0, 50, 1), (math.nan, 0, 900, 1), (0, 0, 30, 1)]) == (0, 50)
        assert horizontal_extent([]) is None
