"""
Configuration management with typed Pydantic models.

Provides validation thresholds, display rounding and logging
settings with YAML loading.
"""

from runboard.config.loader import config_from_dict, load_config
from runboard.config.settings import (
    AggregationConfig,
    ChartMode,
    DashboardConfig,
    LoggingConfig,
    ValidationConfig,
)

__all__ = [
    "AggregationConfig",
    "ChartMode",
    "DashboardConfig",
    "LoggingConfig",
    "ValidationConfig",
    "config_from_dict",
    "load_config",
]
