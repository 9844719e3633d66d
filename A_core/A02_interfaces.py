# A_core/A02_interfaces.py
"""
Diagnostic interfaces for the ordering engine.

The engine reports what it decided (partition, cuts, fallback sorts,
insertions) to an injectable OrderingObserver instead of printing. Decision
records are frozen, so an observer can keep them but cannot feed anything
back into the ordering.

INVARIANT: Observers never influence the returned ordering.
"""
from __future__ import annotations

import logging
from abc import ABC
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from A_core.A00_logging import get_logger


# -----------------------------------------------------------------------------
# Decision records
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class PartitionDecision:
    """Outcome of the mask pre-segmentation."""

    regular_ids: Tuple[int, ...]
    masked_ids: Tuple[int, ...]
    median_width: float
    reasons: Tuple[Tuple[int, str], ...] = ()


@dataclass(frozen=True)
class CutDecision:
    """
    A successful cut of a region.

    axis is "horizontal" for a row cut (split at a y coordinate) and
    "vertical" for a column cut (split at an x coordinate).
    """

    axis: str
    coordinate: float
    element_count: int
    first_count: int
    second_count: int
    density_ratio: float
    depth: int


@dataclass(frozen=True)
class FallbackSortDecision:
    """A region where no cut was found and positional sorting was used."""

    element_count: int
    ordered_ids: Tuple[int, ...]
    depth: int


@dataclass(frozen=True)
class InsertionDecision:
    """
    Placement of one masked element.

    anchor_id is None when no eligible anchor existed. strategy is one of
    "weighted_distance", "spanning_fallback", "column_fallback" or "append".
    """

    element_id: int
    priority: int
    anchor_id: Optional[int]
    position: int
    distance: Optional[float]
    candidates: int
    pruned: int
    strategy: str


OrderingDecision = Union[PartitionDecision, CutDecision, FallbackSortDecision, InsertionDecision]


# -----------------------------------------------------------------------------
# Observers
# -----------------------------------------------------------------------------


class OrderingObserver(ABC):
    """
    Receives decision records while a page is being ordered.

    All hooks default to no-ops; override the ones you need.
    """

    def on_partition(self, decision: PartitionDecision) -> None:
        pass

    def on_cut(self, decision: CutDecision) -> None:
        pass

    def on_fallback_sort(self, decision: FallbackSortDecision) -> None:
        pass

    def on_insertion(self, decision: InsertionDecision) -> None:
        pass


class NullObserver(OrderingObserver):
    """Observer that ignores everything. Used when none is injected."""


@dataclass
class RecordingObserver(OrderingObserver):
    """Collects every decision in arrival order, for tests and debugging."""

    events: List[OrderingDecision] = field(default_factory=list)

    def on_partition(self, decision: PartitionDecision) -> None:
        self.events.append(decision)

    def on_cut(self, decision: CutDecision) -> None:
        self.events.append(decision)

    def on_fallback_sort(self, decision: FallbackSortDecision) -> None:
        self.events.append(decision)

    def on_insertion(self, decision: InsertionDecision) -> None:
        self.events.append(decision)

    @property
    def cuts(self) -> List[CutDecision]:
        return [e for e in self.events if isinstance(e, CutDecision)]

    @property
    def insertions(self) -> List[InsertionDecision]:
        return [e for e in self.events if isinstance(e, InsertionDecision)]

    @property
    def fallback_sorts(self) -> List[FallbackSortDecision]:
        return [e for e in self.events if isinstance(e, FallbackSortDecision)]

    def insertion_for(self, element_id: int) -> Optional[InsertionDecision]:
        for decision in self.insertions:
            if decision.element_id == element_id:
                return decision
        return None

    def summary(self) -> Dict[str, int]:
        return {
            "cuts": len(self.cuts),
            "fallback_sorts": len(self.fallback_sorts),
            "insertions": len(self.insertions),
        }


class LoggingObserver(OrderingObserver):
    """Writes each decision to a logger, one line per decision."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.DEBUG):
        self.logger = logger or get_logger(__name__)
        self.level = level

    def on_partition(self, decision: PartitionDecision) -> None:
        self.logger.log(
            self.level,
            f"[XYCut] Partition: {len(decision.regular_ids)} regular, "
            f"{len(decision.masked_ids)} masked (median width {decision.median_width:.1f})",
        )

    def on_cut(self, decision: CutDecision) -> None:
        self.logger.log(
            self.level,
            f"[XYCut] {decision.axis.capitalize()} cut at {decision.coordinate:.1f}, "
            f"splitting {decision.element_count} elements -> "
            f"{decision.first_count} / {decision.second_count} "
            f"(depth {decision.depth}, tau_d={decision.density_ratio:.2f})",
        )

    def on_fallback_sort(self, decision: FallbackSortDecision) -> None:
        self.logger.log(
            self.level,
            f"[XYCut] No cuts found, sorting {decision.element_count} elements by position "
            f"(depth {decision.depth})",
        )

    def on_insertion(self, decision: InsertionDecision) -> None:
        anchor = "end" if decision.anchor_id is None else f"before {decision.anchor_id}"
        self.logger.log(
            self.level,
            f"[XYCut] Insert {decision.element_id} (priority {decision.priority}) {anchor} "
            f"at {decision.position} via {decision.strategy} "
            f"({decision.candidates} candidates, {decision.pruned} pruned)",
        )


__all__ = [
    "PartitionDecision",
    "CutDecision",
    "FallbackSortDecision",
    "InsertionDecision",
    "OrderingDecision",
    "OrderingObserver",
    "NullObserver",
    "RecordingObserver",
    "LoggingObserver",
]
