# B_ordering/B06_pdf_page_elements.py
"""
PyMuPDF adapter: layout elements from a PDF page, and a per-PDF diagnostic.

Classification is deliberately coarse (no detector, no OCR):
    - image blocks                                  -> VISION, masked
    - text blocks with a large font and few lines   -> title, masked
        wider than tall                             -> HORIZONTAL_TITLE
        otherwise                                   -> VERTICAL_TITLE
        at least cross_layout_width_ratio x page    -> CROSS_LAYOUT
    - other text blocks                             -> REGULAR

"Large font" means the block's largest span size is at least
title_font_ratio x the median of the per-block largest sizes on the page.

Example:
    >>> results = analyze_pdf_reading_order("paper.pdf")
    >>> results[0]["order"]
    [0, 2, 1, 3]
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import fitz  # PyMuPDF

from A_core.A00_logging import LogContext, get_logger
from A_core.A01_layout_models import LayoutBox, PageRegion, SemanticLabel
from A_core.A02_interfaces import OrderingObserver, RecordingObserver
from A_core.A12_exceptions import ParsingError
from B_ordering.B05_reading_order import order_elements
from G_config.ordering_config import OrderingConfig
from Z_utils.Z01_geometry_helpers import nan_safe_median

logger = get_logger(__name__)

TEXT_BLOCK = 0
IMAGE_BLOCK = 1
PREVIEW_CHARS = 60


# =============================================================================
# BLOCK HELPERS
# =============================================================================


def _block_text(block: Dict[str, Any]) -> str:
    lines = []
    for line in block.get("lines", []):
        text = "".join(span.get("text", "") for span in line.get("spans", []))
        if text.strip():
            lines.append(text.strip())
    return " ".join(lines)


def _block_font_size(block: Dict[str, Any]) -> float:
    sizes = [
        float(span.get("size", 0.0))
        for line in block.get("lines", [])
        for span in line.get("spans", [])
        if span.get("text", "").strip()
    ]
    return max(sizes) if sizes else 0.0


def _title_label(bbox: tuple, page_width: float, cfg: OrderingConfig) -> SemanticLabel:
    width = bbox[2] - bbox[0]
    height = bbox[3] - bbox[1]
    if page_width > 0 and width >= cfg.cross_layout_width_ratio * page_width:
        return SemanticLabel.CROSS_LAYOUT
    if width >= height:
        return SemanticLabel.HORIZONTAL_TITLE
    return SemanticLabel.VERTICAL_TITLE


# =============================================================================
# PAGE ADAPTER
# =============================================================================


def elements_from_page(page: "fitz.Page", config: Optional[OrderingConfig] = None) -> List[LayoutBox]:
    """
    Build LayoutBoxes from the blocks of one PyMuPDF page.

    Ids are assigned in extraction order starting at 0. Text blocks with no
    visible text are skipped.
    """
    cfg = config or OrderingConfig()
    blocks = page.get_text("dict").get("blocks", [])
    page_width = page.rect.width

    text_blocks = [
        b for b in blocks if b.get("type") == TEXT_BLOCK and _block_text(b)
    ]
    median_font = nan_safe_median([_block_font_size(b) for b in text_blocks])

    elements: List[LayoutBox] = []
    for block in blocks:
        bbox = tuple(float(v) for v in block["bbox"])
        block_type = block.get("type")

        if block_type == IMAGE_BLOCK:
            elements.append(
                LayoutBox(len(elements), bbox, SemanticLabel.VISION, mask=True)
            )
            continue
        if block_type != TEXT_BLOCK:
            continue

        text = _block_text(block)
        if not text:
            continue

        font_size = _block_font_size(block)
        n_lines = len(block.get("lines", []))
        is_title = (
            median_font > 0
            and font_size >= cfg.title_font_ratio * median_font
            and n_lines <= cfg.title_max_lines
        )
        if is_title:
            label = _title_label(bbox, page_width, cfg)
            elements.append(LayoutBox(len(elements), bbox, label, mask=True, text=text))
        else:
            elements.append(LayoutBox(len(elements), bbox, SemanticLabel.REGULAR, text=text))

    logger.debug(
        f"Page {page.number + 1}: {len(elements)} elements "
        f"({sum(1 for e in elements if e.mask)} masked, median font {median_font:.1f})"
    )
    return elements


def order_page(
    page: "fitz.Page",
    config: Optional[OrderingConfig] = None,
    observer: Optional[OrderingObserver] = None,
) -> List[LayoutBox]:
    """Elements of a PyMuPDF page in reading order."""
    cfg = config or OrderingConfig()
    elements = elements_from_page(page, cfg)
    region = PageRegion.coerce(page.rect)
    return order_elements(elements, region, cfg, observer)


def analyze_pdf_reading_order(
    pdf_path: Union[str, Path],
    config: Optional[OrderingConfig] = None,
) -> List[Dict[str, Any]]:
    """
    Order every page of a PDF (diagnostic tool).

    Args:
        pdf_path: Path to PDF file
        config: Optional OrderingConfig

    Returns:
        List of per-page dicts: page_num, page_size, total_elements,
        masked_elements, cuts, order (ids) and previews (text snippets in
        reading order).

    Raises:
        ParsingError: If the file cannot be opened as a PDF.
    """
    cfg = config or OrderingConfig()
    path = str(pdf_path)

    with LogContext(logger, f"reading order for {Path(path).name}"):
        try:
            doc = fitz.open(path)
        except (OSError, RuntimeError, ValueError) as e:
            raise ParsingError(f"Cannot open PDF: {e}", file_path=path) from e

        results: List[Dict[str, Any]] = []
        try:
            for page_num in range(len(doc)):
                page = doc[page_num]
                recorder = RecordingObserver()
                ordered = order_page(page, cfg, recorder)

                results.append(
                    {
                        "page_num": page_num + 1,
                        "page_size": f"{page.rect.width:.0f}x{page.rect.height:.0f}",
                        "total_elements": len(ordered),
                        "masked_elements": len(recorder.insertions),
                        "cuts": len(recorder.cuts),
                        "order": [e.block_id for e in ordered],
                        "previews": [
                            e.text[:PREVIEW_CHARS] if e.text else f"<{e.label.value}>"
                            for e in ordered
                        ],
                    }
                )
        finally:
            doc.close()

    return results


__all__ = [
    "elements_from_page",
    "order_page",
    "analyze_pdf_reading_order",
]
