"""Configuration handling for dependency-review."""
from __future__ import annotations

from dependency_review.config.defaults import DEFAULT_CONFIG_NAMES, get_default_config
from dependency_review.config.loader import (
    find_config_file,
    load_config,
    load_config_file,
)
from dependency_review.models.config import ReviewConfig

__all__ = [
    "DEFAULT_CONFIG_NAMES",
    "ReviewConfig",
    "find_config_file",
    "get_default_config",
    "load_config",
    "load_config_file",
]
