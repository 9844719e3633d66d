# tests/test_ordering/test_projection_histogram.py
"""Tests for B_ordering/B02_projection_histogram.py - histograms and gap search."""

import math

import pytest

from B_ordering.B02_projection_histogram import (
    Axis,
    bin_count_for,
    build_projection_histogram,
    find_cut,
    find_largest_gap,
    find_largest_gap_in_ranges,
    occupied_bin_ranges,
)


class TestAxis:
    def test_span_and_coordinate(self):
        bounds = (1.0, 2.0, 3.0, 4.0)
        assert Axis.HORIZONTAL.span(bounds) == (2.0, 4.0)
        assert Axis.VERTICAL.span(bounds) == (1.0, 3.0)
        assert Axis.HORIZONTAL.coordinate((10.0, 20.0)) == 20.0
        assert Axis.VERTICAL.coordinate((10.0, 20.0)) == 10.0

    def test_other(self):
        assert Axis.HORIZONTAL.other is Axis.VERTICAL
        assert Axis.VERTICAL.other is Axis.HORIZONTAL


class TestBinCount:
    @pytest.mark.parametrize(
        "extent,scale,expected",
        [(500, 0.5, 250), (101, 0.5, 50), (1, 0.5, 0), (0, 0.5, 0), (-10, 0.5, 0), (math.inf, 0.5, 0)],
    )
    def test_bin_count_for(self, extent, scale, expected):
        assert bin_count_for(extent, scale) == expected


class TestBuildHistogram:
    def test_integer_span(self, make_box):
        hist = build_projection_histogram([make_box(0, 0, 2, 1, 5)], Axis.HORIZONTAL, 0, 10, 10)
        assert hist == [0, 0, 1, 1, 1, 0, 0, 0, 0, 0]

    def test_fractional_span_touches_partial_bins(self, make_box):
        hist = build_projection_histogram([make_box(0, 0, 2.5, 1, 4.2)], Axis.HORIZONTAL, 0, 10, 10)
        assert hist == [0, 0, 1, 1, 1, 0, 0, 0, 0, 0]

    def test_clamped(self, make_box):
        boxes = [make_box(0, -5, 0, 3, 1), make_box(1, 8, 0, 20, 1)]
        hist = build_projection_histogram(boxes, Axis.VERTICAL, 0, 10, 10)
        assert hist == [1, 1, 1, 0, 0, 0, 0, 0, 1, 1]

    def test_counts_stack(self, make_box):
        boxes = [make_box(0, 0, 0, 4, 1), make_box(1, 2, 0, 6, 1)]
        hist = build_projection_histogram(boxes, Axis.VERTICAL, 0, 8, 4)
        assert hist == [1, 2, 1, 0]

    def test_non_finite_spans_skipped(self, make_box):
        boxes = [make_box(0, math.nan, 0, 5, 1), make_box(1, 0, 0, math.inf, 1)]
        assert build_projection_histogram(boxes, Axis.VERTICAL, 0, 10, 5) == [0] * 5

    def test_no_bins(self, make_box):
        assert build_projection_histogram([make_box(0, 0, 0, 5, 5)], Axis.VERTICAL, 0, 10, 0) == []


class TestFindLargestGap:
    def test_middle_of_run(self):
        assert find_largest_gap([1, 0, 0, 0, 1, 0, 0, 1], 2) == 2

    def test_earliest_wins_ties(self):
        assert find_largest_gap([0, 0, 1, 0, 0], 1) == 1

    def test_later_strictly_longer_wins(self):
        assert find_largest_gap([0, 1, 0, 0, 0], 1) == 3

    def test_below_minimum(self):
        assert find_largest_gap([1, 0, 1], 2) is None

    def test_runs_are_not_merged_across_occupied_bins(self):
        assert find_largest_gap([0, 0, 1, 0, 0, 1, 0, 0], 3) is None

    def test_all_empty(self):
        assert find_largest_gap([0] * 6, 1) == 3

    def test_empty_histogram(self):
        assert find_largest_gap([], 0) is None


class TestFindCut:
    def test_stacked_blocks(self, stacked_blocks, default_config):
        cut = find_cut(stacked_blocks, Axis.HORIZONTAL, 0.0, 400.0, default_config)
        assert cut == pytest.approx(124.0)

    def test_gap_below_threshold(self, make_box, default_config):
        boxes = [make_box(0, 0, 0, 100, 100), make_box(1, 0, 110, 100, 200)]
        assert find_cut(boxes, Axis.HORIZONTAL, 0.0, 200.0, default_config) is None

    def test_no_range(self, stacked_blocks, default_config):
        assert find_cut(stacked_blocks, Axis.HORIZONTAL, 10.0, 10.0, default_config) is None

    def test_huge_range_without_dense_histogram(self, make_box, default_config):
        """Two boxes 1e300 apart on one axis are split without allocating per-bin counts."""
        boxes = [make_box(0, 0, 0, 10, 10), make_box(1, 1e300, 0, 1e300 + 10, 10)]
        cut = find_cut(boxes, Axis.VERTICAL, 0.0, 1e300, default_config)
        assert cut is not None
        assert 10 < cut < 1e300

    def test_billion_pixel_range(self, make_box, default_config):
        boxes = [make_box(0, 0, 0, 100, 10), make_box(1, 1e9, 0, 1e9 + 100, 10)]
        cut = find_cut(boxes, Axis.VERTICAL, 0.0, 1e9 + 100, default_config)
        assert 100 < cut < 1e9


class TestOccupiedRanges:
    def test_matches_histogram_bins(self, make_box):
        boxes = [make_box(0, 0, 2.5, 1, 4.2), make_box(1, 0, 7, 1, 8)]
        assert occupied_bin_ranges(boxes, Axis.HORIZONTAL, 0, 10, 10) == [(2, 4), (7, 7)]

    def test_overlapping_and_adjacent_ranges_merge(self, make_box):
        boxes = [make_box(0, 0, 0, 4, 1), make_box(1, 2, 0, 6, 1), make_box(2, 6, 0, 7, 1)]
        assert occupied_bin_ranges(boxes, Axis.VERTICAL, 0, 10, 10) == [(0, 6)]

    def test_clamped_and_non_finite(self, make_box):
        boxes = [
            make_box(0, -5, 0, 3, 1),
            make_box(1, 8, 0, 20, 1),
            make_box(2, math.nan, 0, 5, 1),
            make_box(3, -30, 0, -20, 1),
        ]
        assert occupied_bin_ranges(boxes, Axis.VERTICAL, 0, 10, 10) == [(0, 2), (8, 9)]

    def test_no_bins(self, make_box):
        assert occupied_bin_ranges([make_box(0, 0, 0, 5, 5)], Axis.VERTICAL, 0, 10, 0) == []

    @pytest.mark.parametrize(
        "histogram,min_gap_bins",
        [
            ([1, 0, 0, 0, 1, 0, 0, 1], 2),
            ([0, 0, 1, 0, 0], 1),
            ([0, 1, 0, 0, 0], 1),
            ([1, 0, 1], 2),
            ([0, 0, 1, 0, 0, 1, 0, 0], 3),
            ([0] * 6, 1),
            ([2, 2, 1], 0),
        ],
    )
    def test_gap_agrees_with_dense_scan(self, histogram, min_gap_bins):
        occupied = []
        for i, count in enumerate(histogram):
            if count:
                occupied.append((i, i))
        expected = find_largest_gap(histogram, min_gap_bins)
        assert find_largest_gap_in_ranges(occupied, len(histogram), min_gap_bins) == expected
