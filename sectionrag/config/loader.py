"""YAML configuration loader with environment variable overrides.

Configuration is loaded in layers (later layers override earlier):

  1. Field defaults in :class:`~sectionrag.config.settings.Settings`
  2. The YAML file given with ``--config``
  3. ``.env`` file and environment variables

The YAML file may use flat keys (``qdrant_url: ...``) or one level of
sections whose keys are joined with an underscore::

    qdrant:
      url: http://localhost:6333
      collection: docs
    chunk:
      target_len: 800
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from sectionrag.config.settings import Settings
from sectionrag.utils.errors import ConfigurationError


def load_settings(path: str | Path | None = None) -> Settings:
    """Build :class:`Settings` from an optional YAML file plus the environment.

    Args:
        path: YAML configuration file, or ``None`` for environment-only settings.

    Returns:
        Fully resolved settings.

    Raises:
        ConfigurationError: If the file is missing or unreadable, contains
            unknown keys, or any value fails validation.
    """
    try:
        env_settings = Settings()
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid environment configuration: {_describe(exc)}") from exc

    if path is None:
        return env_settings

    yaml_values = _flatten(_read_yaml(Path(path)))
    unknown = sorted(set(yaml_values) - set(Settings.model_fields))
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys in {path}: {', '.join(unknown)}")

    # Only values that were actually set in the environment override YAML.
    merged = {**yaml_values, **env_settings.model_dump(exclude_unset=True)}
    try:
        return Settings(**merged)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration in {path}: {_describe(exc)}") from exc


def _read_yaml(config_path: Path) -> dict[str, Any]:
    if not config_path.is_file():
        raise ConfigurationError(f"Config file not found: {config_path}")
    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a mapping")
    return data


def _flatten(data: dict[str, Any]) -> dict[str, Any]:
    """Turn ``{"qdrant": {"url": u}}`` into ``{"qdrant_url": u}``; flat keys pass through."""
    flat: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            for sub_key, sub_value in value.items():
                flat[f"{key}_{sub_key}"] = sub_value
        else:
            flat[str(key)] = value
    return flat


def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
