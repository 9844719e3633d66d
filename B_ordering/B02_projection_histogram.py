# B_ordering/B02_projection_histogram.py
"""
Projection histograms and gap search for the recursive cutter.

Each element projects its span on one axis onto a row of bins; a run of
empty bins is whitespace that crosses the whole region and is a candidate
cut. Histograms live only for one cut attempt.

find_cut never materializes the per-bin counts: it merges the bin ranges
the elements touch and reads the empty runs from the spaces between them,
so a page with coordinates near 1e300 costs the same as a letter page.

Axis naming follows the cut line: a HORIZONTAL cut splits rows at a y
coordinate (projection onto y), a VERTICAL cut splits columns at an x
coordinate (projection onto x).

Example:
    >>> hist = build_projection_histogram(boxes, Axis.HORIZONTAL, 0.0, 500.0, 250)
    >>> find_largest_gap(hist, min_gap_bins=7)
    62
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from A_core.A01_layout_models import LayoutElement
from G_config.ordering_config import OrderingConfig
from Z_utils.Z01_geometry_helpers import Bounds, Point

# Inclusive (first_bin, last_bin)
BinRange = Tuple[int, int]


class Axis(str, Enum):
    """Direction of the cut line."""

    HORIZONTAL = "horizontal"  # row cut at y
    VERTICAL = "vertical"  # column cut at x

    def span(self, bounds: Bounds) -> Tuple[float, float]:
        """Projection of a box onto the axis the cut coordinate lives on."""
        if self is Axis.HORIZONTAL:
            return bounds[1], bounds[3]
        return bounds[0], bounds[2]

    def coordinate(self, point: Point) -> float:
        return point[1] if self is Axis.HORIZONTAL else point[0]

    @property
    def other(self) -> "Axis":
        return Axis.VERTICAL if self is Axis.HORIZONTAL else Axis.HORIZONTAL


def bin_count_for(extent: float, scale: float) -> int:
    """
    Number of bins for a range: floor(extent x scale).

    Returns 0 (no cut possible) for non-positive or non-finite products.
    """
    value = extent * scale
    if not math.isfinite(value) or value <= 0:
        return 0
    return int(math.floor(value))


def _bin_range(a: float, b: float, lo: float, bin_size: float, bin_count: int) -> Optional[BinRange]:
    """Inclusive, clamped bins touched by the span [a, b]; None when it touches none."""
    start_f = (a - lo) / bin_size
    end_f = (b - lo) / bin_size
    if not (math.isfinite(start_f) and math.isfinite(end_f)):
        return None
    start = max(int(math.floor(start_f)), 0)
    end = min(int(math.ceil(end_f)) - 1, bin_count - 1)
    if start > end:
        return None
    return start, end


def _bin_size(lo: float, hi: float, bin_count: int) -> Optional[float]:
    if bin_count <= 0:
        return None
    size = (hi - lo) / bin_count
    if not (math.isfinite(size) and size > 0):
        return None
    return size


def build_projection_histogram(
    elements: Sequence[LayoutElement],
    axis: Axis,
    lo: float,
    hi: float,
    bin_count: int,
) -> List[int]:
    """
    Count, per bin, the elements whose projected span touches it.

    A span [a, b] covers bins floor((a - lo) / size) .. ceil((b - lo) / size) - 1,
    clamped to the histogram. Spans with non-finite ends are skipped.

    Allocates one slot per bin; the cutter itself works from
    occupied_bin_ranges so that huge coordinate ranges stay cheap.
    """
    if bin_count <= 0:
        return []
    histogram = [0] * bin_count
    bin_size = _bin_size(lo, hi, bin_count)
    if bin_size is None:
        return histogram

    for element in elements:
        a, b = axis.span(element.bounds())
        touched = _bin_range(a, b, lo, bin_size, bin_count)
        if touched is None:
            continue
        for i in range(touched[0], touched[1] + 1):
            histogram[i] += 1
    return histogram


def occupied_bin_ranges(
    elements: Sequence[LayoutElement],
    axis: Axis,
    lo: float,
    hi: float,
    bin_count: int,
) -> List[BinRange]:
    """
    Sorted, merged inclusive ranges of non-empty bins.

    Same bin arithmetic as build_projection_histogram, but costs
    O(n log n) in the number of elements whatever the bin count.
    """
    bin_size = _bin_size(lo, hi, bin_count)
    if bin_size is None:
        return []

    ranges = []
    for element in elements:
        a, b = axis.span(element.bounds())
        touched = _bin_range(a, b, lo, bin_size, bin_count)
        if touched is not None:
            ranges.append(touched)
    ranges.sort()

    merged: List[BinRange] = []
    for start, end in ranges:
        if merged and start <= merged[-1][1] + 1:
            if end > merged[-1][1]:
                merged[-1] = (merged[-1][0], end)
            continue
        merged.append((start, end))
    return merged


def _empty_runs_from_ranges(occupied: Sequence[BinRange], bin_count: int) -> Iterator[Tuple[int, int]]:
    cursor = 0
    for start, end in occupied:
        if start > cursor:
            yield cursor, start - cursor
        cursor = max(cursor, end + 1)
    if cursor < bin_count:
        yield cursor, bin_count - cursor


def _empty_runs_from_histogram(histogram: Sequence[int]) -> Iterator[Tuple[int, int]]:
    run_start: Optional[int] = None
    for i, count in enumerate(list(histogram) + [1]):
        if count == 0:
            if run_start is None:
                run_start = i
            continue
        if run_start is not None:
            yield run_start, i - run_start
            run_start = None


def _pick_gap(runs: Iterable[Tuple[int, int]], min_gap_bins: int) -> Optional[int]:
    best_start: Optional[int] = None
    best_len = 0
    for run_start, run_len in runs:
        if run_len >= min_gap_bins and run_len > best_len:
            best_start, best_len = run_start, run_len
    if best_start is None:
        return None
    return best_start + best_len // 2


def find_largest_gap(histogram: Sequence[int], min_gap_bins: int) -> Optional[int]:
    """
    Middle index of the longest run of empty bins.

    A run qualifies when it is at least min_gap_bins long; a later run only
    replaces the current best when strictly longer, so ties keep the
    earliest run.
    """
    return _pick_gap(_empty_runs_from_histogram(histogram), min_gap_bins)


def find_largest_gap_in_ranges(
    occupied: Sequence[BinRange],
    bin_count: int,
    min_gap_bins: int,
) -> Optional[int]:
    """find_largest_gap over the empty bins between sorted, merged occupied ranges."""
    return _pick_gap(_empty_runs_from_ranges(occupied, bin_count), min_gap_bins)


def find_cut(
    elements: Sequence[LayoutElement],
    axis: Axis,
    lo: float,
    hi: float,
    config: OrderingConfig,
) -> Optional[float]:
    """
    Cut coordinate inside [lo, hi] at the largest qualifying gap, or None.
    """
    bins = bin_count_for(hi - lo, config.histogram_resolution_scale)
    if bins <= 0:
        return None
    occupied = occupied_bin_ranges(elements, axis, lo, hi, bins)
    index = find_largest_gap_in_ranges(occupied, bins, config.min_gap_bins)
    if index is None:
        return None
    return lo + index / bins * (hi - lo)


__all__ = [
    "Axis",
    "bin_count_for",
    "build_projection_histogram",
    "occupied_bin_ranges",
    "find_largest_gap",
    "find_largest_gap_in_ranges",
    "find_cut",
]
