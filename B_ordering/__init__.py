# B_ordering/__init__.py
"""
Reading-order layer: XY-Cut++ ordering of the layout elements of one page.

Data flow: B01 partitions elements into regular and masked, B03 orders the
regular ones by recursive histogram cuts (B02), B04 folds the masked ones
back in, and B05 ties the stages together.

Key Components:
    - B01_mask_partition: Mask pre-segmentation (titles, figures, spanning elements)
    - B02_projection_histogram: Projection histograms and gap search
    - B03_recursive_cut: Density-driven recursive XY cutting with positional fallback
    - B04_masked_reinsertion: Priority-constrained weighted-distance reinsertion
    - B05_reading_order: XYCutPlusPlus orchestrator and compute_reading_order entry point
    - B06_pdf_page_elements: PyMuPDF page adapter and per-PDF diagnostic

Example:
    >>> from B_ordering import compute_reading_order
    >>> compute_reading_order(boxes, (0, 0, 612, 792))
    [3, 0, 1, 2]
"""

from .B05_reading_order import XYCutPlusPlus, compute_reading_order, order_elements

__all__ = [
    "XYCutPlusPlus",
    "compute_reading_order",
    "order_elements",
]
