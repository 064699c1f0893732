"""YAML config loader with dotted-key lookup."""

import hashlib
from pathlib import Path
from typing import Any

import yaml

from glance.config.schema import GlanceConfig


def load_config(path: str | Path) -> GlanceConfig:
    """Load and validate config from a YAML file.

    Missing sections fall back to the schema defaults.
    """
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    return GlanceConfig(**raw)


def config_hash(config: GlanceConfig) -> str:
    """Compute a deterministic SHA256 hash of the config."""
    data = config.model_dump_json(indent=None)
    return hashlib.sha256(data.encode()).hexdigest()[:16]


def get_config_value(config: GlanceConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'display.max_bar_mm'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj
