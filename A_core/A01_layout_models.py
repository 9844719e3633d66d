# A_core/A01_layout_models.py
"""
Layout models for reading-order detection.

Provides:
- SemanticLabel: coarse element classes produced by an upstream detector
- semantic_priority: fixed rank used while folding masked elements back in
- LayoutElement: the capability any element type must offer (a Protocol,
  so detector outputs never need to inherit from anything here)
- LayoutBox: a ready-made frozen element implementing LayoutElement
- PageRegion: the page rectangle a single ordering call works in

Coordinates follow PDF/image conventions: x grows to the right, y grows
downwards, boxes are (x1, y1, x2, y2) with x1 <= x2 and y1 <= y2.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Protocol, Tuple, runtime_checkable

Bounds = Tuple[float, float, float, float]


# -------------------------
# Semantic labels
# -------------------------


class SemanticLabel(str, Enum):
    """
    Coarse semantic class of a layout element.

    CROSS_LAYOUT elements span several column-equivalent regions (a title
    above two columns, a full-width table). Titles are split by orientation
    because their insertion weights differ.
    """

    CROSS_LAYOUT = "cross_layout"
    HORIZONTAL_TITLE = "horizontal_title"
    VERTICAL_TITLE = "vertical_title"
    VISION = "vision"  # figures, tables, images
    REGULAR = "regular"  # flowing body text


_PRIORITY = {
    SemanticLabel.CROSS_LAYOUT: 0,
    SemanticLabel.HORIZONTAL_TITLE: 1,
    SemanticLabel.VERTICAL_TITLE: 1,
    SemanticLabel.VISION: 2,
    SemanticLabel.REGULAR: 3,
}


def semantic_priority(label: SemanticLabel) -> int:
    """
    Rank of a label during reinsertion; lower values are placed first.

    Unknown labels rank with regular text.
    """
    return _PRIORITY.get(label, 3)


def is_title(label: SemanticLabel) -> bool:
    return label in (SemanticLabel.HORIZONTAL_TITLE, SemanticLabel.VERTICAL_TITLE)


# -------------------------
# Element capability
# -------------------------


@runtime_checkable
class LayoutElement(Protocol):
    """
    Capability required of every element passed to the ordering engine.

    Any object with these methods can be ordered; ids must be unique within
    one call.
    """

    def id(self) -> int:
        ...

    def bounds(self) -> Bounds:
        ...

    def center(self) -> Tuple[float, float]:
        ...

    def iou(self, other: Any) -> float:
        ...

    def should_mask(self) -> bool:
        ...

    def semantic_label(self) -> SemanticLabel:
        ...


@dataclass(frozen=True)
class LayoutBox:
    """
    Reference LayoutElement implementation.

    Attributes:
        block_id: Unique id within the page.
        bbox: (x1, y1, x2, y2).
        label: Semantic class from the detector.
        mask: Whether the detector marks this element for masking
            (titles, figures, tables).
        center_point: Caller-supplied center; defaults to the box center.
        text: Optional text content, carried along for callers only.
    """

    block_id: int
    bbox: Bounds
    label: SemanticLabel = SemanticLabel.REGULAR
    mask: bool = False
    center_point: Optional[Tuple[float, float]] = None
    text: str = ""

    @property
    def width(self) -> float:
        return self.bbox[2] - self.bbox[0]

    @property
    def height(self) -> float:
        return self.bbox[3] - self.bbox[1]

    def id(self) -> int:
        return self.block_id

    def bounds(self) -> Bounds:
        return self.bbox

    def center(self) -> Tuple[float, float]:
        if self.center_point is not None:
            return self.center_point
        x1, y1, x2, y2 = self.bbox
        return ((x1 + x2) / 2.0, (y1 + y2) / 2.0)

    def iou(self, other: Any) -> float:
        """Intersection over union in [0, 1]; degenerate or NaN boxes give 0."""
        ax1, ay1, ax2, ay2 = self.bbox
        bx1, by1, bx2, by2 = other.bounds()

        inter_w = min(ax2, bx2) - max(ax1, bx1)
        inter_h = min(ay2, by2) - max(ay1, by1)
        if not (inter_w > 0 and inter_h > 0):
            return 0.0

        intersection = inter_w * inter_h
        union = (ax2 - ax1) * (ay2 - ay1) + (bx2 - bx1) * (by2 - by1) - intersection
        if not (union > 0) or not math.isfinite(union):
            return 0.0
        return max(0.0, min(1.0, intersection / union))

    def should_mask(self) -> bool:
        return self.mask

    def semantic_label(self) -> SemanticLabel:
        return self.label


# -------------------------
# Page region
# -------------------------


@dataclass(frozen=True)
class PageRegion:
    """
    Rectangle of the page being ordered.

    A region is valid only when all four values are finite and it has a
    strictly positive width and height.
    """

    x_min: float
    y_min: float
    x_max: float
    y_max: float

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    @property
    def center(self) -> Tuple[float, float]:
        return ((self.x_min + self.x_max) / 2.0, (self.y_min + self.y_max) / 2.0)

    @property
    def diagonal(self) -> float:
        return math.hypot(self.width, self.height)

    def is_valid(self) -> bool:
        values = (self.x_min, self.y_min, self.x_max, self.y_max)
        if not all(math.isfinite(v) for v in values):
            return False
        return self.width > 0 and self.height > 0

    def as_tuple(self) -> Bounds:
        return (self.x_min, self.y_min, self.x_max, self.y_max)

    @classmethod
    def from_size(cls, width: float, height: float) -> "PageRegion":
        """Region anchored at the origin."""
        return cls(0.0, 0.0, float(width), float(height))

    @classmethod
    def coerce(cls, value: Any) -> Optional["PageRegion"]:
        """
        Accept a PageRegion or any 4-number sequence.

        Returns None when the value cannot be read as a rectangle; validity
        (finite, positive size) is checked separately with is_valid().
        """
        if isinstance(value, PageRegion):
            return value
        if value is None or isinstance(value, (str, bytes)):
            return None
        try:
            coords = tuple(float(v) for v in value)
        except (TypeError, ValueError, OverflowError):
            return None
        if len(coords) != 4:
            return None
        return cls(*coords)


__all__ = [
    "Bounds",
    "SemanticLabel",
    "semantic_priority",
    "is_title",
    "LayoutElement",
    "LayoutBox",
    "PageRegion",
]
