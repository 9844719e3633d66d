# G_config/__init__.py
"""
Configuration module for the reading-order engine.

RECOMMENDED: Load configuration from config.yaml:

    from G_config import load_config

    config = load_config()
    print(config.min_cut_threshold)

Tune the engine by editing G_config/config.yaml:

    reading_order:
      min_cut_threshold: 15.0          # px of empty projection needed for a cut
      histogram_resolution_scale: 0.5  # histogram bins per px
      same_row_tolerance: 10.0         # px of center-y drift within one row

Or build a config programmatically:

    from G_config import OrderingConfig

    config = OrderingConfig(min_cut_threshold=8.0)
    finer = config.with_overrides(histogram_resolution_scale=2.0)
"""

from .ordering_config import (
    DEFAULT_CONFIG_PATH,
    OrderingConfig,
    load_config,
    setup_logging,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "OrderingConfig",
    "load_config",
    "setup_logging",
]
