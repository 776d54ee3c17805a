"""Default configuration values for dependency-review."""

from __future__ import annotations

from dependency_review.models.config import ReviewConfig

# Default configuration file names to search for
DEFAULT_CONFIG_NAMES = [".dependency-review.yaml", ".dependency-review.yml"]


def get_default_config() -> ReviewConfig:
    """Get the default configuration.

    Returns:
        ReviewConfig with all defaults (fail on any runtime vulnerability,
        both checks enabled, scorecard lookups enabled).
    """
    return ReviewConfig()
