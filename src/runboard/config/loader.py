"""
Configuration loading utilities.

Reads YAML profiles with ${VAR} / ${VAR:default} expansion and lets a
profile inherit from a base.yaml kept in the same directory. Every
section is optional; an empty file yields the defaults.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from runboard.config.settings import (
    AggregationConfig,
    DashboardConfig,
    LoggingConfig,
    ValidationConfig,
)

BASE_CONFIG_NAME = "base.yaml"

_ENV_REFERENCE = re.compile(r"\$\{(?P<name>[^}:]+)(?::(?P<default>[^}]*))?\}")


def _expand_env(value: Any) -> Any:
    """
    Expand environment references in every string of a YAML tree.

    An unset variable without a default expands to ''.
    """
    if isinstance(value, str):
        return _ENV_REFERENCE.sub(
            lambda m: os.environ.get(m["name"], m["default"] or ""), value
        )
    if isinstance(value, dict):
        return {key: _expand_env(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_expand_env(item) for item in value]
    return value


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into base section by section; override wins per key."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _merge(current, value)
        else:
            merged[key] = value
    return merged


def load_yaml(path: Path) -> dict[str, Any]:
    """
    Read one YAML profile.

    Args:
        path: Path to the YAML file.

    Returns:
        The expanded mapping, empty for an empty file.

    Raises:
        ValueError: If the document is not a mapping.
    """
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Config file must contain a mapping, got {type(data).__name__}: {path}"
        raise ValueError(msg)
    return _expand_env(data)


def config_from_dict(data: dict[str, Any]) -> DashboardConfig:
    """
    Build a DashboardConfig from a plain mapping.

    Args:
        data: Mapping with optional 'validation', 'aggregation'
            and 'logging' sections.

    Returns:
        Fully validated DashboardConfig instance.
    """
    validation_data = data.get("validation") or {}
    aggregation_data = data.get("aggregation") or {}
    logging_data = data.get("logging") or {}

    return DashboardConfig(
        validation=ValidationConfig(**validation_data),
        aggregation=AggregationConfig(**aggregation_data),
        logging=LoggingConfig(**logging_data),
    )


def load_config(
    config_path: Path | None = None,
    base_path: Path | None = None,
) -> DashboardConfig:
    """
    Load dashboard configuration from YAML file(s).

    Args:
        config_path: Path to the main configuration file. Defaults are
            returned when omitted.
        base_path: Optional path to base configuration for inheritance.

    Returns:
        Fully validated DashboardConfig instance.
    """
    if config_path is None:
        return DashboardConfig()

    if base_path is None:
        sibling = config_path.parent / BASE_CONFIG_NAME
        if sibling.exists() and sibling.resolve() != config_path.resolve():
            base_path = sibling

    data = load_yaml(config_path)
    if base_path is not None:
        data = _merge(load_yaml(base_path), data)

    return config_from_dict(data)
