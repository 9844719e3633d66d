# tests/conftest.py
"""
Pytest configuration and fixtures for the reading-order tests.

Provides:
- make_box: factory for LayoutBox elements
- Standard page regions and configurations
- Sample page layouts (stacked blocks, two columns with a spanning title)
- Temporary YAML config files

Usage:
    # In test files, fixtures are automatically available:
    def test_stacked(stacked_blocks, letter_page):
        assert compute_reading_order(stacked_blocks, letter_page) == [0, 1, 2]
"""

import sys
from pathlib import Path
from typing import Callable, List, Optional, Tuple

import pytest

# Add the project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from A_core.A01_layout_models import LayoutBox, PageRegion, SemanticLabel  # noqa: E402
from G_config.ordering_config import OrderingConfig  # noqa: E402


# =============================================================================
# ELEMENT FACTORIES
# =============================================================================


@pytest.fixture
def make_box() -> Callable[..., LayoutBox]:
    """Factory for LayoutBox elements: make_box(id, x1, y1, x2, y2, label=..., mask=...)."""

    def _make(
        block_id: int,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        label: SemanticLabel = SemanticLabel.REGULAR,
        mask: bool = False,
        center: Optional[Tuple[float, float]] = None,
    ) -> LayoutBox:
        return LayoutBox(block_id, (x1, y1, x2, y2), label, mask, center)

    return _make


# =============================================================================
# PAGES AND CONFIGURATION
# =============================================================================


@pytest.fixture
def default_config() -> OrderingConfig:
    """Provide the default ordering configuration."""
    return OrderingConfig()


@pytest.fixture
def letter_page() -> PageRegion:
    """US Letter page in points."""
    return PageRegion.from_size(612, 792)


@pytest.fixture
def small_page() -> PageRegion:
    """500 x 500 page used by the stacked-block scenarios."""
    return PageRegion.from_size(500, 500)


# =============================================================================
# SAMPLE LAYOUTS
# =============================================================================


@pytest.fixture
def stacked_blocks(make_box) -> List[LayoutBox]:
    """Three full-width blocks stacked with 50px gaps, given bottom-up."""
    return [
        make_box(2, 50, 300, 450, 400),
        make_box(0, 50, 0, 450, 100),
        make_box(1, 50, 150, 450, 250),
    ]


@pytest.fixture
def two_column_page(make_box) -> List[LayoutBox]:
    """
    Cross-layout title over two columns of three paragraphs each.

    Ids: 0 title, 1-3 left column, 4-6 right column.
    """
    title = make_box(0, 61, 40, 551, 80, SemanticLabel.CROSS_LAYOUT, mask=True)
    # 10px paragraph gaps are below the cut threshold, the 32px gutter is not
    left = [make_box(1 + i, 50, 120 + i * 150, 290, 260 + i * 150) for i in range(3)]
    right = [make_box(4 + i, 322, 120 + i * 150, 562, 260 + i * 150) for i in range(3)]
    # Shuffle so the result cannot come from input order
    return [right[2], left[1], title, right[0], left[2], right[1], left[0]]


@pytest.fixture
def yaml_config_file(tmp_path) -> Path:
    """Write a config.yaml with a partial reading_order section."""
    path = tmp_path / "config.yaml"
    path.write_text(
        "reading_order:\n"
        "  min_cut_threshold: 20.0\n"
        "  histogram_resolution_scale: 1.0\n"
        "logging:\n"
        "  level: DEBUG\n"
        "  console: false\n",
        encoding="utf-8",
    )
    return path
