# Z_utils/Z01_geometry_helpers.py
"""
Geometry helpers shared by the ordering stages.

All coordinate comparisons in the engine go through total_cmp so that NaN
never breaks a sort: incomparable values compare as equal.

Bounds are (x1, y1, x2, y2) tuples as returned by LayoutElement.bounds().
"""

from __future__ import annotations

import math
from functools import cmp_to_key
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, TypeVar

Bounds = Tuple[float, float, float, float]
Point = Tuple[float, float]
T = TypeVar("T")


def total_cmp(a: float, b: float) -> int:
    """Three-way compare; NaN or otherwise incomparable values are equal."""
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def row_major_cmp(a: Point, b: Point, same_row_tolerance: float) -> int:
    """
    Compare two centers top-to-bottom, then left-to-right.

    Centers whose vertical distance is below the tolerance are on the same
    row and are ordered by x.
    """
    if abs(a[1] - b[1]) < same_row_tolerance:
        return total_cmp(a[0], b[0])
    return total_cmp(a[1], b[1])


def sort_row_major(
    items: Iterable[T],
    center_of: Callable[[T], Point],
    same_row_tolerance: float,
) -> List[T]:
    """Stable row-major sort of items by their centers."""
    def compare(a: T, b: T) -> int:
        return row_major_cmp(center_of(a), center_of(b), same_row_tolerance)

    return sorted(items, key=cmp_to_key(compare))


def nan_safe_median(values: Sequence[float]) -> float:
    """
    Median with the even-count rule averaging the two middle values.

    Returns 0.0 for an empty sequence.
    """
    if not values:
        return 0.0
    ordered = sorted(values, key=cmp_to_key(total_cmp))
    mid = len(ordered) // 2
    if len(ordered) % 2 == 1:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) / 2.0


def boxes_overlap(a: Bounds, b: Bounds) -> bool:
    """Strict overlap on both axes; boxes that only touch do not overlap."""
    return a[0] < b[2] and a[2] > b[0] and a[1] < b[3] and a[3] > b[1]


def axis_gaps(a: Bounds, b: Bounds) -> Tuple[float, float]:
    """Horizontal and vertical empty space between two boxes (0 when overlapping)."""
    gap_x = max(0.0, b[0] - a[2], a[0] - b[2])
    gap_y = max(0.0, b[1] - a[3], a[1] - b[3])
    return gap_x, gap_y


def box_distance(a: Bounds, b: Bounds) -> float:
    """Euclidean distance between the closest points of two boxes."""
    gap_x, gap_y = axis_gaps(a, b)
    return math.hypot(gap_x, gap_y)


def is_finite_bounds(bounds: Bounds) -> bool:
    return all(math.isfinite(v) for v in bounds)


def horizontal_extent(bounds_list: Iterable[Bounds]) -> Optional[Tuple[float, float]]:
    """Leftmost x1 and rightmost x2 over the finite boxes, or None."""
    lefts: List[float] = []
    rights: List[float] = []
    for b in bounds_list:
        if math.isfinite(b[0]) and math.isfinite(b[2]):
            lefts.append(b[0])
            rights.append(b[2])
    if not lefts:
        return None
    return min(lefts), max(rights)


__all__ = [
    "Bounds",
    "Point",
    "total_cmp",
    "row_major_cmp",
    "sort_row_major",
    "nan_safe_median",
    "boxes_overlap",
    "axis_gaps",
    "box_distance",
    "is_finite_bounds",
    "horizontal_extent",
]
