# G_config/G01_config_keys.py
"""
Configuration key constants for the reading-order engine.

Each key carries its default value and a description, so the pydantic
config model, the YAML file and the docs share one source of truth.

Usage:
    from G_config.G01_config_keys import ConfigKey, OrderingKey, get_config_value

    section = get_config_value(raw, ConfigKey.READING_ORDER)
    threshold = get_config_value(section, OrderingKey.MIN_CUT_THRESHOLD)
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict


class ConfigKeyBase(str, Enum):
    """
    Base class for configuration key enums.

    Inherits from str so keys compare equal to their YAML names.
    """

    _default: Any
    _description: str

    def __new__(cls, key: str, default: Any = None, description: str = "") -> "ConfigKeyBase":
        obj = str.__new__(cls, key)
        obj._value_ = key
        obj._default = default
        obj._description = description
        return obj

    @property
    def default(self) -> Any:
        return self._default

    @property
    def description(self) -> str:
        return self._description


class ConfigKey(ConfigKeyBase):
    """Top-level keys of config.yaml."""

    READING_ORDER = ("reading_order", {}, "Reading-order engine settings")
    LOGGING = ("logging", {}, "Logging settings")


class OrderingKey(ConfigKeyBase):
    """
    Keys of the reading_order section.

    The first three are the public tuning knobs; the rest are empirically
    chosen constants exposed so they can be adjusted per corpus.
    """

    # Recursive cutter
    MIN_CUT_THRESHOLD = ("min_cut_threshold", 15.0, "Minimum empty projection run (px) treated as a cut")
    HISTOGRAM_RESOLUTION_SCALE = ("histogram_resolution_scale", 0.5, "Histogram bins per pixel")
    SAME_ROW_TOLERANCE = ("same_row_tolerance", 10.0, "Max center-y difference (px) for the same row")
    DENSITY_RATIO_THRESHOLD = ("density_ratio_threshold", 0.9, "tau_d above this tries column cuts first")

    # Mask partition
    SPANNING_BETA = ("spanning_beta", 1.3, "Width multiple of the median width for cross-layout masking")
    MIN_CROSS_OVERLAPS = ("min_cross_overlaps", 2, "Overlapped elements required for cross-layout masking")
    CENTRAL_DISTANCE_RATIO = ("central_distance_ratio", 0.2, "Max center distance / page diagonal for central elements")
    ISOLATION_DISTANCE = ("isolation_distance", 50.0, "Min distance (px) to non-maskable elements for isolation")

    # Reinsertion fallback
    SPANNING_WIDTH_RATIO = ("spanning_width_ratio", 0.6, "Width share of the regular extent treated as spanning")
    SAME_COLUMN_TOLERANCE = ("same_column_tolerance", 100.0, "Max left-edge difference (px) for the same column")

    # PDF page adapter
    TITLE_FONT_RATIO = ("title_font_ratio", 1.3, "Font size multiple of the page median marking a title")
    TITLE_MAX_LINES = ("title_max_lines", 3, "Max lines in a text block classified as a title")
    CROSS_LAYOUT_WIDTH_RATIO = ("cross_layout_width_ratio", 0.55, "Page width share making a title cross-layout")


class LoggingKey(ConfigKeyBase):
    """Keys of the logging section."""

    LEVEL = ("level", "INFO", "Minimum log level")
    LOG_FILE = ("log_file", None, "Optional rotating log file path")
    CONSOLE = ("console", True, "Write log records to stdout")


def get_config_value(config: Dict[str, Any], key: ConfigKeyBase, default: Any = None) -> Any:
    """
    Get a value by typed key, falling back to the explicit or key default.

    Example:
        >>> get_config_value({"min_cut_threshold": 20}, OrderingKey.MIN_CUT_THRESHOLD)
        20
    """
    if default is None:
        default = key.default
    return config.get(key.value, default)


__all__ = [
    "ConfigKeyBase",
    "ConfigKey",
    "OrderingKey",
    "LoggingKey",
    "get_config_value",
]
