# B_ordering/B04_masked_reinsertion.py
"""
Folds masked elements back into the order produced by the recursive cutter.

Masked elements are placed one at a time, grouped by semantic priority
(CROSS_LAYOUT, then titles, then VISION, then REGULAR) and row-major within a
group. Each one is inserted immediately before the anchor that minimizes a
4-component weighted distance. Only occupants whose priority is greater
than or equal to the masked element's priority are eligible anchors, so a
figure is never placed relative to a title, but a title may be placed
relative to a figure already in the sequence.

Weighted distance (masked element m, anchor a):
    phi1  0 if the boxes overlap, else 100
    phi2  CROSS_LAYOUT: gap_x + gap_y        others: min(gap_x, gap_y)
    phi3  CROSS_LAYOUT: 0 if m.top <= a.top, else m.top - a.top
          others: a below m -> max(0, a.top - m.bottom)
                  a above m -> 10 x (m.top - a.top)
    phi4  a.left

    weights = (d^2, d, 1, 1/d) x label multipliers, d = max(m.width, m.height)

Components are summed in order and a candidate is dropped as soon as its
partial sum exceeds the best complete distance seen so far.
"""

from __future__ import annotations

import math
from typing import Generic, List, Optional, Sequence, Tuple, TypeVar

from A_core.A00_logging import get_logger
from A_core.A01_layout_models import LayoutElement, SemanticLabel, is_title, semantic_priority
from A_core.A02_interfaces import InsertionDecision, NullObserver, OrderingObserver
from G_config.ordering_config import OrderingConfig
from Z_utils.Z01_geometry_helpers import Bounds, axis_gaps, boxes_overlap, horizontal_extent, sort_row_major

logger = get_logger(__name__)

E = TypeVar("E", bound=LayoutElement)

Weights = Tuple[float, float, float, float]

NO_OVERLAP_PENALTY = 100.0
ABOVE_PENALTY_FACTOR = 10.0

STRATEGY_WEIGHTED = "weighted_distance"
STRATEGY_SPANNING = "spanning_fallback"
STRATEGY_COLUMN = "column_fallback"
STRATEGY_APPEND = "append"

_CROSS_LAYOUT_MULTIPLIERS: Weights = (1.0, 1.0, 0.1, 1.0)
_WIDE_TITLE_MULTIPLIERS: Weights = (1.0, 0.1, 0.1, 1.0)
_TALL_TITLE_MULTIPLIERS: Weights = (0.2, 0.1, 1.0, 1.0)
_DEFAULT_MULTIPLIERS: Weights = (1.0, 1.0, 1.0, 0.1)


# =============================================================================
# DISTANCE COMPONENTS
# =============================================================================


def label_multipliers(label: SemanticLabel, width: float, height: float) -> Weights:
    if label == SemanticLabel.CROSS_LAYOUT:
        return _CROSS_LAYOUT_MULTIPLIERS
    if is_title(label):
        return _WIDE_TITLE_MULTIPLIERS if width > height else _TALL_TITLE_MULTIPLIERS
    return _DEFAULT_MULTIPLIERS


def distance_weights(element: LayoutElement) -> Weights:
    """Per-component weights for a masked element."""
    x1, y1, x2, y2 = element.bounds()
    width, height = x2 - x1, y2 - y1
    d = max(width, height)
    if not (math.isfinite(d) and d > 0):
        d = 1.0
    base = (d * d, d, 1.0, 1.0 / d)
    multipliers = label_multipliers(element.semantic_label(), width, height)
    return (
        base[0] * multipliers[0],
        base[1] * multipliers[1],
        base[2] * multipliers[2],
        base[3] * multipliers[3],
    )


def overlap_component(masked: Bounds, anchor: Bounds) -> float:
    return 0.0 if boxes_overlap(masked, anchor) else NO_OVERLAP_PENALTY


def gap_component(masked: Bounds, anchor: Bounds, cross_layout: bool) -> float:
    gap_x, gap_y = axis_gaps(masked, anchor)
    if cross_layout:
        return gap_x + gap_y
    return min(gap_x, gap_y)


def vertical_component(masked: Bounds, anchor: Bounds, cross_layout: bool) -> float:
    masked_top, masked_bottom = masked[1], masked[3]
    anchor_top = anchor[1]
    if cross_layout:
        return 0.0 if masked_top <= anchor_top else masked_top - anchor_top
    if anchor_top >= masked_top:
        return max(0.0, anchor_top - masked_bottom)
    return ABOVE_PENALTY_FACTOR * (masked_top - anchor_top)


def left_edge_component(anchor: Bounds) -> float:
    return anchor[0]


# =============================================================================
# REINSERTION
# =============================================================================


class ReinsertionMatcher(Generic[E]):
    """
    Inserts masked elements into an existing reading order.

    The result list is re-scanned after every insertion, so masked elements
    placed earlier serve as anchors for later ones.
    """

    def __init__(
        self,
        config: Optional[OrderingConfig] = None,
        observer: Optional[OrderingObserver] = None,
    ):
        self.config = config or OrderingConfig()
        self.observer = observer or NullObserver()

    def processing_order(self, masked: Sequence[E]) -> List[E]:
        """Ascending priority; row-major within one priority."""
        ordered = sort_row_major(masked, lambda e: e.center(), self.config.same_row_tolerance)
        ordered.sort(key=lambda e: semantic_priority(e.semantic_label()))
        return ordered

    def reinsert(
        self,
        ordered_regular: Sequence[E],
        masked: Sequence[E],
        regular: Optional[Sequence[E]] = None,
    ) -> List[E]:
        """
        Merge masked elements into the ordered regular elements.

        Args:
            ordered_regular: Regular elements in reading order.
            masked: Masked elements, any order.
            regular: The regular elements whose horizontal extent sizes the
                spanning fallback; defaults to ordered_regular.

        Returns:
            New list holding every element exactly once.
        """
        result: List[E] = list(ordered_regular)
        extent = horizontal_extent(e.bounds() for e in (regular if regular is not None else ordered_regular))
        regular_width = extent[1] - extent[0] if extent else 0.0

        for element in self.processing_order(masked):
            decision = self._insert(result, element, regular_width)
            self.observer.on_insertion(decision)
            logger.debug(
                f"Inserted {decision.element_id} at {decision.position} via {decision.strategy}"
            )
        return result

    def _insert(self, result: List[E], element: E, regular_width: float) -> InsertionDecision:
        priority = semantic_priority(element.semantic_label())
        position, anchor_id, distance, candidates, pruned = self._best_anchor(result, element, priority)

        if position is not None:
            strategy = STRATEGY_WEIGHTED
        elif not result:
            position, strategy = 0, STRATEGY_APPEND
        else:
            position, strategy = self._fallback_position(result, element, regular_width)
            if position < len(result):
                anchor_id = result[position].id()

        result.insert(position, element)
        return InsertionDecision(
            element_id=element.id(),
            priority=priority,
            anchor_id=anchor_id,
            position=position,
            distance=distance,
            candidates=candidates,
            pruned=pruned,
            strategy=strategy,
        )

    def _best_anchor(
        self,
        result: Sequence[E],
        element: E,
        priority: int,
    ) -> Tuple[Optional[int], Optional[int], Optional[float], int, int]:
        """Position, id and distance of the closest eligible anchor, plus scan counters."""
        masked_bounds = element.bounds()
        cross_layout = element.semantic_label() == SemanticLabel.CROSS_LAYOUT
        w1, w2, w3, w4 = distance_weights(element)

        best_distance = math.inf
        best_position: Optional[int] = None
        best_id: Optional[int] = None
        candidates = 0
        pruned = 0

        for position, occupant in enumerate(result):
            if semantic_priority(occupant.semantic_label()) < priority:
                continue
            candidates += 1
            anchor_bounds = occupant.bounds()

            total = w1 * overlap_component(masked_bounds, anchor_bounds)
            if total > best_distance:
                pruned += 1
                continue
            total += w2 * gap_component(masked_bounds, anchor_bounds, cross_layout)
            if total > best_distance:
                pruned += 1
                continue
            total += w3 * vertical_component(masked_bounds, anchor_bounds, cross_layout)
            if total > best_distance:
                pruned += 1
                continue
            total += w4 * left_edge_component(anchor_bounds)

            # Strict comparison keeps the earliest position on ties
            if total < best_distance:
                best_distance = total
                best_position = position
                best_id = occupant.id()

        distance = best_distance if best_position is not None else None
        return best_position, best_id, distance, candidates, pruned

    def _fallback_position(self, result: Sequence[E], element: E, regular_width: float) -> Tuple[int, str]:
        """Position used when no occupant is an eligible anchor."""
        x1, _, x2, _ = element.bounds()
        _, masked_cy = element.center()

        if (x2 - x1) > self.config.spanning_width_ratio * regular_width:
            for position, occupant in enumerate(result):
                if occupant.center()[1] > masked_cy:
                    return position, STRATEGY_SPANNING
            return len(result), STRATEGY_APPEND

        for position, occupant in enumerate(result):
            same_column = abs(occupant.bounds()[0] - x1) < self.config.same_column_tolerance
            if same_column and occupant.center()[1] > masked_cy:
                return position, STRATEGY_COLUMN
        return len(result), STRATEGY_APPEND


__all__ = [
    "STRATEGY_WEIGHTED",
    "STRATEGY_SPANNING",
    "STRATEGY_COLUMN",
    "STRATEGY_APPEND",
    "label_multipliers",
    "distance_weights",
    "overlap_component",
    "gap_component",
    "vertical_component",
    "left_edge_component",
    "ReinsertionMatcher",
]
