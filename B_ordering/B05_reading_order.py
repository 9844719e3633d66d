# B_ordering/B05_reading_order.py
"""
XY-Cut++ reading order for the layout elements of one page.

Pipeline:
    1. B01 partition: split elements into regular and masked
    2. B03 recursive cut: order the regular elements
    3. B04 reinsertion: fold the masked elements back in

The computation is pure: the same elements, page rectangle and config always
give the same order, and nothing is shared between calls. Malformed geometry
never raises; an invalid page rectangle or empty input gives an empty order.

Example:
    >>> from A_core.A01_layout_models import LayoutBox, SemanticLabel
    >>> boxes = [
    ...     LayoutBox(0, (50, 300, 550, 400)),
    ...     LayoutBox(1, (50, 100, 550, 200)),
    ...     LayoutBox(2, (60, 20, 540, 60), SemanticLabel.CROSS_LAYOUT, mask=True),
    ... ]
    >>> compute_reading_order(boxes, (0, 0, 600, 800))
    [2, 1, 0]
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, TypeVar

from A_core.A00_logging import get_logger, timed
from A_core.A01_layout_models import LayoutElement, PageRegion
from A_core.A02_interfaces import NullObserver, OrderingObserver, PartitionDecision
from B_ordering.B01_mask_partition import median_width, partition_by_mask
from B_ordering.B03_recursive_cut import RecursiveCutter
from B_ordering.B04_masked_reinsertion import ReinsertionMatcher
from G_config.ordering_config import OrderingConfig

logger = get_logger(__name__)

E = TypeVar("E", bound=LayoutElement)


class XYCutPlusPlus:
    """
    Reusable XY-Cut++ orderer.

    Holds only its configuration and observer, so one instance can order
    any number of pages.
    """

    def __init__(
        self,
        config: Optional[OrderingConfig] = None,
        observer: Optional[OrderingObserver] = None,
    ):
        self.config = config or OrderingConfig()
        self.observer = observer or NullObserver()

    @timed()
    def compute_order(self, elements: Iterable[LayoutElement], page_rect: Any) -> List[int]:
        """
        Reading order of the elements as a list of ids.

        Args:
            elements: Objects implementing LayoutElement; ids unique.
            page_rect: PageRegion or (x_min, y_min, x_max, y_max).

        Returns:
            A permutation of the input ids, or [] when the rectangle is
            invalid or there are no elements.
        """
        return [element.id() for element in self.order_elements(elements, page_rect)]

    def order_elements(self, elements: Iterable[E], page_rect: Any) -> List[E]:
        """Same as compute_order but returns the element objects."""
        region = PageRegion.coerce(page_rect)
        if region is None or not region.is_valid():
            logger.warning(f"Invalid page rectangle {page_rect!r}, returning empty order")
            return []

        items = list(elements)
        if not items:
            return []

        partition = partition_by_mask(items, region, self.config)
        self.observer.on_partition(
            PartitionDecision(
                regular_ids=tuple(partition.regular_ids),
                masked_ids=tuple(partition.masked_ids),
                median_width=median_width(items),
                reasons=tuple(partition.reasons.items()),
            )
        )

        cutter: RecursiveCutter[E] = RecursiveCutter(self.config, self.observer)
        regular_order = cutter.order(partition.regular, region)

        matcher: ReinsertionMatcher[E] = ReinsertionMatcher(self.config, self.observer)
        ordered = matcher.reinsert(regular_order, partition.masked, partition.regular)

        logger.debug(
            f"Ordered {len(ordered)} elements "
            f"({len(partition.regular)} regular, {len(partition.masked)} masked)"
        )
        return ordered


def compute_reading_order(
    elements: Iterable[LayoutElement],
    page_rect: Any,
    config: Optional[OrderingConfig] = None,
    observer: Optional[OrderingObserver] = None,
) -> List[int]:
    """
    Compute the reading order of one page.

    Args:
        elements: Objects implementing LayoutElement.
        page_rect: PageRegion or (x_min, y_min, x_max, y_max).
        config: Optional OrderingConfig; defaults to OrderingConfig().
        observer: Optional OrderingObserver receiving decision records.

    Returns:
        Element ids in reading order.
    """
    return XYCutPlusPlus(config, observer).compute_order(elements, page_rect)


def order_elements(
    elements: Iterable[E],
    page_rect: Any,
    config: Optional[OrderingConfig] = None,
    observer: Optional[OrderingObserver] = None,
) -> List[E]:
    """Like compute_reading_order but returns the elements themselves."""
    return XYCutPlusPlus(config, observer).order_elements(elements, page_rect)


__all__ = [
    "XYCutPlusPlus",
    "compute_reading_order",
    "order_elements",
]
