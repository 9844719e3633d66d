# B_ordering/B03_recursive_cut.py
"""
Recursive XY cutting of the regular (unmasked) elements.

Key Components:
    - density_ratio: XY-Cut++ tau_d, used to pick which axis to try first
    - sort_by_position: row-major fallback when a region has no cut
    - RecursiveCutter: splits regions at the largest projection gap until
      every region is a single element or cannot be cut

Axis selection (XY-Cut++):
    tau_d = sum(w/h of CROSS_LAYOUT) / sum(w/h of the rest)
    tau_d > density_ratio_threshold -> try a vertical (column) cut first
    otherwise                       -> try a horizontal (row) cut first
    If the preferred axis yields no cut the other one is tried; if neither
    does, the region is sorted by position.

The recursion runs on an explicit work stack, so pathological inputs
(thousands of identical boxes) cannot exhaust the interpreter stack.
"""

from __future__ import annotations

import math
from typing import Generic, List, Optional, Sequence, Tuple, TypeVar

from A_core.A00_logging import get_logger
from A_core.A01_layout_models import LayoutElement, PageRegion, SemanticLabel
from A_core.A02_interfaces import CutDecision, FallbackSortDecision, NullObserver, OrderingObserver
from B_ordering.B02_projection_histogram import Axis, find_cut
from G_config.ordering_config import OrderingConfig
from Z_utils.Z01_geometry_helpers import Bounds, sort_row_major

logger = get_logger(__name__)

E = TypeVar("E", bound=LayoutElement)

# (elements, rectangle, depth)
_WorkItem = Tuple[List[E], Bounds, int]


# =============================================================================
# DENSITY RATIO
# =============================================================================


def density_ratio(elements: Sequence[LayoutElement]) -> float:
    """
    Aspect-ratio weight of cross-layout elements over all other elements.

    Elements without a positive, finite height (or with a non-finite aspect
    ratio) are left out of both sums. Returns 1.0 when the denominator is 0.
    """
    cross = 0.0
    others = 0.0
    for element in elements:
        x1, y1, x2, y2 = element.bounds()
        height = y2 - y1
        if not height > 0:
            continue
        ratio = (x2 - x1) / height
        if not math.isfinite(ratio):
            continue
        if element.semantic_label() == SemanticLabel.CROSS_LAYOUT:
            cross += ratio
        else:
            others += ratio
    if others == 0:
        return 1.0
    return cross / others


def sort_by_position(elements: Sequence[E], same_row_tolerance: float) -> List[E]:
    """Stable top-to-bottom, left-to-right sort by element centers."""
    return sort_row_major(elements, lambda e: e.center(), same_row_tolerance)


# =============================================================================
# RECURSIVE CUTTER
# =============================================================================


class RecursiveCutter(Generic[E]):
    """
    Orders elements by recursively cutting their region at whitespace gaps.

    Elements whose center lies strictly before the cut go to the first half;
    everything else (NaN centers included) goes to the second half. The
    first half is read before the second.
    """

    def __init__(
        self,
        config: Optional[OrderingConfig] = None,
        observer: Optional[OrderingObserver] = None,
    ):
        self.config = config or OrderingConfig()
        self.observer = observer or NullObserver()

    def order(self, elements: Sequence[E], region: PageRegion) -> List[E]:
        """Return the elements in reading order within the region."""
        result: List[E] = []
        stack: List[_WorkItem] = [(list(elements), region.as_tuple(), 0)]

        while stack:
            subset, rect, depth = stack.pop()
            if len(subset) <= 1:
                result.extend(subset)
                continue

            split = self._split(subset, rect, depth)
            if split is None:
                ordered = sort_by_position(subset, self.config.same_row_tolerance)
                self.observer.on_fallback_sort(
                    FallbackSortDecision(
                        element_count=len(ordered),
                        ordered_ids=tuple(e.id() for e in ordered),
                        depth=depth,
                    )
                )
                result.extend(ordered)
                continue

            (first, first_rect), (second, second_rect) = split
            # LIFO: push the second half first so the first half is read first
            stack.append((second, second_rect, depth + 1))
            stack.append((first, first_rect, depth + 1))

        return result

    def _split(
        self,
        subset: List[E],
        rect: Bounds,
        depth: int,
    ) -> Optional[Tuple[Tuple[List[E], Bounds], Tuple[List[E], Bounds]]]:
        tau_d = density_ratio(subset)
        preferred = Axis.VERTICAL if tau_d > self.config.density_ratio_threshold else Axis.HORIZONTAL

        for axis in (preferred, preferred.other):
            cut = self._find_axis_cut(subset, rect, axis)
            if cut is None:
                continue
            first = [e for e in subset if axis.coordinate(e.center()) < cut]
            if not first or len(first) == len(subset):
                continue
            second = [e for e in subset if not axis.coordinate(e.center()) < cut]

            self.observer.on_cut(
                CutDecision(
                    axis=axis.value,
                    coordinate=cut,
                    element_count=len(subset),
                    first_count=len(first),
                    second_count=len(second),
                    density_ratio=tau_d,
                    depth=depth,
                )
            )
            logger.debug(f"{axis.value.capitalize()} cut at {cut:.1f}: {len(first)} / {len(second)}")
            return (first, _shrink(rect, axis, cut, before=True)), (
                second,
                _shrink(rect, axis, cut, before=False),
            )
        return None

    def _find_axis_cut(self, subset: List[E], rect: Bounds, axis: Axis) -> Optional[float]:
        """Histogram over the subset's extent on the axis, clipped to the rectangle."""
        starts: List[float] = []
        ends: List[float] = []
        for element in subset:
            a, b = axis.span(element.bounds())
            if math.isfinite(a) and math.isfinite(b):
                starts.append(a)
                ends.append(b)
        if not starts:
            return None

        rect_lo, rect_hi = axis.span(rect)
        lo = max(min(starts), rect_lo)
        hi = min(max(ends), rect_hi)
        if not hi > lo:
            return None
        return find_cut(subset, axis, lo, hi, self.config)


def _shrink(rect: Bounds, axis: Axis, cut: float, before: bool) -> Bounds:
    x1, y1, x2, y2 = rect
    if axis is Axis.HORIZONTAL:
        return (x1, y1, x2, cut) if before else (x1, cut, x2, y2)
    return (x1, y1, cut, y2) if before else (cut, y1, x2, y2)


__all__ = [
    "density_ratio",
    "sort_by_position",
    "RecursiveCutter",
]
