"""Configuration file discovery and loading for dependency-review."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from pydantic import ValidationError

from dependency_review.config.defaults import DEFAULT_CONFIG_NAMES, get_default_config
from dependency_review.exceptions import ConfigurationError
from dependency_review.models.config import ReviewConfig


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find configuration file in the specified directory.

    Searches for `.dependency-review.yaml` first, then `.dependency-review.yml`.

    Args:
        start_dir: Directory to search. Defaults to current working directory.

    Returns:
        Path to the configuration file if found, None otherwise.
    """
    search_dir = start_dir or Path.cwd()
    for name in DEFAULT_CONFIG_NAMES:
        config_path = search_dir / name
        if config_path.exists():
            return config_path
    return None


def read_config_file(path: Path) -> dict[str, Any]:
    """Read raw configuration values from a YAML file.

    Args:
        path: Path to the configuration file.

    Returns:
        Mapping of configuration keys to values. Empty for empty files.

    Raises:
        ConfigurationError: If file cannot be read, has invalid YAML,
            or its root is not a mapping.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, PermissionError) as e:
        raise ConfigurationError(
            f"Cannot read configuration file '{path}': {e}"
        ) from e

    if not content.strip():
        return {}

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML syntax in '{path}': {e}"
        ) from e

    # YAML that parses to None (only comments)
    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid configuration in '{path}': "
            f"expected a mapping at root level, got {type(data).__name__}"
        )

    return data


def load_config_file(path: Path) -> ReviewConfig:
    """Load and validate configuration from a YAML file.

    Args:
        path: Path to the configuration file.

    Returns:
        Validated ReviewConfig instance.

    Raises:
        ConfigurationError: If the file is unreadable, malformed, or the
            configuration it describes is invalid.
    """
    return _validate(read_config_file(path), source=f"'{path}'")


def _validate(data: Mapping[str, Any], source: str) -> ReviewConfig:
    try:
        return ReviewConfig.model_validate(dict(data))
    except ValidationError as e:
        error_messages = _format_validation_errors(e)
        raise ConfigurationError(
            f"Invalid configuration in {source}: {error_messages}"
        ) from e


def _format_validation_errors(error: ValidationError) -> str:
    """Format Pydantic validation errors into a readable string.

    Args:
        error: The Pydantic ValidationError.

    Returns:
        Formatted error message string.
    """
    messages: list[str] = []
    for err in error.errors():
        loc = ".".join(str(x) for x in err["loc"]) if err["loc"] else "root"
        msg = err["msg"]
        messages.append(f"{loc}: {msg}")
    return "; ".join(messages)


def _to_aliases(overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Translate field names to configuration file keys, dropping unset values."""
    translated: dict[str, Any] = {}
    for name, value in overrides.items():
        if value is None:
            continue
        field = ReviewConfig.model_fields.get(name)
        key = field.alias if field is not None and field.alias else name
        translated[key] = value
    return translated


def _normalize_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    """Map snake_case field names in a config file to their kebab-case keys."""
    normalized: dict[str, Any] = {}
    for key, value in data.items():
        field = ReviewConfig.model_fields.get(str(key))
        normalized[field.alias if field is not None and field.alias else key] = value
    return normalized


def load_config(
    config_path: str | None = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> ReviewConfig:
    """Load configuration from file, apply overrides, and validate once.

    If a config_path is provided, loads from that file. Otherwise, searches
    for a configuration file in the current directory. Values from
    ``overrides`` (keyed by ReviewConfig field name, None meaning "not
    given") take precedence over file values.

    Args:
        config_path: Optional path to configuration file.
            If provided, must exist and be valid.
        overrides: Optional explicit values, typically from the CLI.

    Returns:
        Validated ReviewConfig.

    Raises:
        ConfigurationError: If the configuration file is invalid, or the
            merged configuration violates a policy rule.
    """
    if config_path is not None:
        path: Path | None = Path(config_path)
    else:
        path = find_config_file()

    explicit = _to_aliases(overrides or {})
    if path is None and not explicit:
        return get_default_config()

    data = _normalize_keys(read_config_file(path)) if path is not None else {}
    data.update(explicit)

    source = f"'{path}'" if path is not None else "command line options"
    return _validate(data, source=source)
