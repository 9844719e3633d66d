# G_config/ordering_config.py
"""
Configuration for the reading-order engine.

OrderingConfig is an immutable pydantic model; every field has a default, so
OrderingConfig() is the standard configuration. Values can also come from the
reading_order section of a YAML file:

    reading_order:
      min_cut_threshold: 15.0
      histogram_resolution_scale: 0.5
      same_row_tolerance: 10.0

Usage:
    from G_config import OrderingConfig, load_config

    config = load_config()                      # G_config/config.yaml
    config = OrderingConfig.from_dict({"min_cut_threshold": 8})
    finer = config.with_overrides(histogram_resolution_scale=2.0)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from A_core.A00_logging import configure_logging, get_logger
from A_core.A12_exceptions import ConfigurationError
from G_config.G01_config_keys import ConfigKey, LoggingKey, OrderingKey, get_config_value

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"


def _field(key: OrderingKey, **constraints: Any) -> Any:
    return Field(default=key.default, description=key.description, **constraints)


class OrderingConfig(BaseModel):
    """Tuning parameters of the partitioner, cutter and reinsertion matcher."""

    model_config = ConfigDict(frozen=True, extra="forbid", allow_inf_nan=False)

    # Recursive cutter
    min_cut_threshold: float = _field(OrderingKey.MIN_CUT_THRESHOLD, ge=0.0)
    histogram_resolution_scale: float = _field(OrderingKey.HISTOGRAM_RESOLUTION_SCALE, gt=0.0)
    same_row_tolerance: float = _field(OrderingKey.SAME_ROW_TOLERANCE, ge=0.0)
    density_ratio_threshold: float = _field(OrderingKey.DENSITY_RATIO_THRESHOLD, ge=0.0)

    # Mask partition
    spanning_beta: float = _field(OrderingKey.SPANNING_BETA, gt=0.0)
    min_cross_overlaps: int = _field(OrderingKey.MIN_CROSS_OVERLAPS, ge=0)
    central_distance_ratio: float = _field(OrderingKey.CENTRAL_DISTANCE_RATIO, ge=0.0)
    isolation_distance: float = _field(OrderingKey.ISOLATION_DISTANCE, ge=0.0)

    # Reinsertion fallback
    spanning_width_ratio: float = _field(OrderingKey.SPANNING_WIDTH_RATIO, ge=0.0)
    same_column_tolerance: float = _field(OrderingKey.SAME_COLUMN_TOLERANCE, ge=0.0)

    # PDF page adapter
    title_font_ratio: float = _field(OrderingKey.TITLE_FONT_RATIO, gt=0.0)
    title_max_lines: int = _field(OrderingKey.TITLE_MAX_LINES, ge=1)
    cross_layout_width_ratio: float = _field(OrderingKey.CROSS_LAYOUT_WIDTH_RATIO, gt=0.0)

    @property
    def min_gap_bins(self) -> int:
        """Minimum qualifying gap in histogram bins (truncated)."""
        return int(self.min_cut_threshold * self.histogram_resolution_scale)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "OrderingConfig":
        """
        Build a config from a plain dictionary.

        Unknown keys are dropped with a warning. Invalid values raise
        ConfigurationError naming the offending key.
        """
        known = set(cls.model_fields)
        unknown = sorted(str(k) for k in d if k not in known)
        if unknown:
            logger.warning(f"Ignoring unknown reading_order keys: {', '.join(unknown)}")
        values = {k: v for k, v in d.items() if k in known}
        try:
            return cls(**values)
        except ValidationError as e:
            raise _to_configuration_error(e) from e

    @classmethod
    def from_yaml(cls, config_path: Optional[Union[str, Path]] = None) -> "OrderingConfig":
        """
        Load the reading_order section of a YAML file.

        A missing or unreadable file falls back to defaults; a present but
        invalid section raises ConfigurationError.
        """
        path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        full_config = _read_yaml(path)
        if full_config is None:
            return cls()

        section = get_config_value(full_config, ConfigKey.READING_ORDER)
        if section is None:
            return cls()
        if not isinstance(section, dict):
            raise ConfigurationError(
                "reading_order section must be a mapping",
                config_key=ConfigKey.READING_ORDER.value,
                expected_type="mapping",
                actual_value=section,
            )
        return cls.from_dict(section)

    def with_overrides(self, **overrides: Any) -> "OrderingConfig":
        """Return a validated copy with some fields replaced."""
        unknown = sorted(k for k in overrides if k not in type(self).model_fields)
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration key(s): {', '.join(unknown)}",
                config_key=unknown[0],
            )
        data = self.model_dump()
        data.update(overrides)
        return type(self).from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


def _to_configuration_error(error: ValidationError) -> ConfigurationError:
    first = error.errors()[0]
    key = ".".join(str(part) for part in first.get("loc", ())) or None
    return ConfigurationError(
        f"Invalid reading_order configuration: {first.get('msg', 'invalid value')}",
        config_key=key,
        expected_type=first.get("type"),
        actual_value=first.get("input"),
    )


def _read_yaml(path: Path) -> Optional[Dict[str, Any]]:
    if not path.exists():
        logger.warning(f"Config file not found: {path}, using defaults")
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Failed to load {path}: {e}")
        return None
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.error(f"Config file {path} does not contain a mapping, using defaults")
        return None
    return data


def load_config(config_path: Optional[Union[str, Path]] = None) -> OrderingConfig:
    """
    Load the ordering configuration from config.yaml.

    Args:
        config_path: Optional path; defaults to G_config/config.yaml.

    Example:
        from G_config import load_config
        config = load_config()
        print(config.min_cut_threshold)
    """
    return OrderingConfig.from_yaml(config_path)


def setup_logging(config_path: Optional[Union[str, Path]] = None) -> logging.Logger:
    """
    Configure package logging from the logging section of config.yaml.

    Raises:
        ConfigurationError: If the level is not a known logging level name.
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    full_config = _read_yaml(path) or {}
    section = get_config_value(full_config, ConfigKey.LOGGING) or {}

    level_name = str(get_config_value(section, LoggingKey.LEVEL)).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ConfigurationError(
            f"Unknown log level: {level_name}",
            config_key=LoggingKey.LEVEL.value,
            expected_type="DEBUG|INFO|WARNING|ERROR|CRITICAL",
            actual_value=level_name,
        )

    return configure_logging(
        log_level=level,
        log_file=get_config_value(section, LoggingKey.LOG_FILE),
        enable_console_logging=bool(get_config_value(section, LoggingKey.CONSOLE)),
    )


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "OrderingConfig",
    "load_config",
    "setup_logging",
]
