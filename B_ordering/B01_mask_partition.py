# B_ordering/B01_mask_partition.py
"""
Mask pre-segmentation for XY-Cut++ ordering.

Structural elements (titles, figures, tables, elements spanning several
columns) break the projection gaps the recursive cutter relies on, so they
are set aside ("masked") before cutting and folded back in afterwards.

An element is masked when any of the following holds:
    1. its own mask flag is set;
    2. it is wider than spanning_beta x the median width of all elements
       and overlaps at least min_cross_overlaps other elements;
    3. it is central on the page, isolated from every non-maskable element,
       and its mask flag is set.

Rule 3 can only fire for elements rule 1 already masks; it is evaluated so
that the recorded reason says "isolated_visual" for such elements.

Example:
    >>> partition = partition_by_mask(boxes, PageRegion.from_size(612, 792))
    >>> partition.masked_ids
    [0, 4]
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Generic, List, Optional, Sequence, TypeVar

from A_core.A00_logging import get_logger
from A_core.A01_layout_models import LayoutElement, PageRegion
from G_config.ordering_config import OrderingConfig
from Z_utils.Z01_geometry_helpers import Bounds, box_distance, boxes_overlap, nan_safe_median

logger = get_logger(__name__)

E = TypeVar("E", bound=LayoutElement)

REASON_CROSS_LAYOUT = "cross_layout"
REASON_ISOLATED_VISUAL = "isolated_visual"
REASON_MASK_FLAG = "mask_flag"


@dataclass
class MaskPartition(Generic[E]):
    """
    Disjoint split of the input elements.

    Both lists keep the input order. reasons maps each masked id to the
    first rule that masked it.
    """

    regular: List[E] = field(default_factory=list)
    masked: List[E] = field(default_factory=list)
    reasons: Dict[int, str] = field(default_factory=dict)

    @property
    def regular_ids(self) -> List[int]:
        return [e.id() for e in self.regular]

    @property
    def masked_ids(self) -> List[int]:
        return [e.id() for e in self.masked]


def element_width(bounds: Bounds) -> float:
    return bounds[2] - bounds[0]


def median_width(elements: Sequence[LayoutElement]) -> float:
    """Median element width; even counts average the two middle widths."""
    return nan_safe_median([element_width(e.bounds()) for e in elements])


def count_overlaps(index: int, bounds_list: Sequence[Bounds]) -> int:
    """Number of other boxes strictly overlapping the box at index."""
    target = bounds_list[index]
    return sum(
        1
        for j, other in enumerate(bounds_list)
        if j != index and boxes_overlap(target, other)
    )


def _is_central(element: LayoutElement, page_region: PageRegion, ratio: float) -> bool:
    diagonal = page_region.diagonal
    if not diagonal > 0:
        return False
    cx, cy = element.center()
    px, py = page_region.center
    return math.hypot(cx - px, cy - py) / diagonal <= ratio


def _is_isolated(
    index: int,
    bounds_list: Sequence[Bounds],
    non_maskable: Sequence[int],
    min_distance: float,
) -> bool:
    """True when every non-maskable element is farther than min_distance."""
    target = bounds_list[index]
    for j in non_maskable:
        if j == index:
            continue
        # NaN distances never count as isolated
        if not box_distance(target, bounds_list[j]) > min_distance:
            return False
    return True


def partition_by_mask(
    elements: Sequence[E],
    page_region: PageRegion,
    config: Optional[OrderingConfig] = None,
) -> MaskPartition[E]:
    """
    Split elements into regular and masked groups.

    Args:
        elements: Elements of one page, in caller order.
        page_region: The page rectangle (used for the centrality test).
        config: Thresholds; defaults to OrderingConfig().

    Returns:
        MaskPartition whose id sets are disjoint and cover the input.
    """
    cfg = config or OrderingConfig()
    partition: MaskPartition[E] = MaskPartition()
    if not elements:
        return partition

    bounds_list = [e.bounds() for e in elements]
    spanning_width = cfg.spanning_beta * median_width(elements)
    non_maskable = [i for i, e in enumerate(elements) if not e.should_mask()]

    for i, element in enumerate(elements):
        reason = None
        if element_width(bounds_list[i]) > spanning_width and (
            count_overlaps(i, bounds_list) >= cfg.min_cross_overlaps
        ):
            reason = REASON_CROSS_LAYOUT
        elif element.should_mask():
            if _is_central(element, page_region, cfg.central_distance_ratio) and _is_isolated(
                i, bounds_list, non_maskable, cfg.isolation_distance
            ):
                reason = REASON_ISOLATED_VISUAL
            else:
                reason = REASON_MASK_FLAG

        if reason is None:
            partition.regular.append(element)
        else:
            partition.masked.append(element)
            partition.reasons[element.id()] = reason

    logger.debug(
        f"Mask partition: {len(partition.regular)} regular, {len(partition.masked)} masked "
        f"(spanning width > {spanning_width:.1f})"
    )
    return partition


__all__ = [
    "MaskPartition",
    "REASON_CROSS_LAYOUT",
    "REASON_ISOLATED_VISUAL",
    "REASON_MASK_FLAG",
    "element_width",
    "median_width",
    "count_overlaps",
    "partition_by_mask",
]
