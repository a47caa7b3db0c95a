"""Engine settings loader.

Reads engine settings from a JSON or YAML file and validates them against
``SETTINGS_SCHEMA``. Settings cover the default strategy and the bounds of the
search cube used for range boundaries and overlap:

    default_strategy: dynamic
    search_bounds:
      max_major: 20
      max_minor: 50
      max_patch: 50

Every key is optional; missing keys fall back to the built-in defaults.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from collections.abc import Iterable

import yaml
from jsonschema import Draft202012Validator

from .models import DEFAULT_BOUNDS, SearchBounds, Strategy

CONFIG_PATH_ENV_VAR = "HCLSEMVER_CONFIG"

_BOUND_SCHEMA = {"type": "integer", "minimum": 0}

SETTINGS_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "default_strategy": {
            "type": "string",
            "enum": [strategy.value for strategy in Strategy],
        },
        "search_bounds": {
            "type": "object",
            "properties": {
                "max_major": _BOUND_SCHEMA,
                "max_minor": _BOUND_SCHEMA,
                "max_patch": _BOUND_SCHEMA,
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": False,
}


class ConfigError(RuntimeError):
    """Raised when the settings file cannot be loaded or is invalid."""


@dataclass(slots=True, frozen=True)
class Settings:
    """Top-level settings container."""

    default_strategy: Strategy = Strategy.DYNAMIC
    bounds: SearchBounds = field(default=DEFAULT_BOUNDS)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create Settings from an already validated mapping."""
        strategy = Strategy.from_value(data.get("default_strategy", Strategy.DYNAMIC))
        raw_bounds = data.get("search_bounds") or {}
        bounds = SearchBounds(
            max_major=raw_bounds.get("max_major", DEFAULT_BOUNDS.max_major),
            max_minor=raw_bounds.get("max_minor", DEFAULT_BOUNDS.max_minor),
            max_patch=raw_bounds.get("max_patch", DEFAULT_BOUNDS.max_patch),
        )
        return cls(default_strategy=strategy, bounds=bounds)

    def to_dict(self) -> dict[str, object]:
        return {
            "default_strategy": self.default_strategy.value,
            "search_bounds": self.bounds.to_dict(),
        }


def _resolve_config_path(path: Path | str | None = None) -> Path | None:
    """Resolve the settings file path.

    Priority:
    1. Explicit path argument
    2. HCLSEMVER_CONFIG environment variable
    3. None (built-in defaults)
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    return None


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def _decode(content: str) -> Any:
    # JSON first, YAML if that fails.
    try:
        return json.loads(content)
    except json.JSONDecodeError:
        pass
    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid JSON or YAML in configuration file: {exc}") from exc


def validate_settings(data: Any) -> None:
    """Validate a decoded settings document against SETTINGS_SCHEMA.

    Raises:
        ConfigError: With one line per schema violation.
    """
    validator = Draft202012Validator(SETTINGS_SCHEMA)
    errors = sorted(
        validator.iter_errors(data), key=lambda e: "/".join(str(p) for p in e.path)
    )
    if errors:
        raise ConfigError("Configuration failed validation:\n" + _format_errors(errors))


def load_settings(path: Path | str | None = None) -> Settings:
    """Load and validate settings from a JSON or YAML file.

    Args:
        path: Optional path to the settings file. If not provided, uses the
            HCLSEMVER_CONFIG env var or falls back to built-in defaults.

    Returns:
        A Settings object.

    Raises:
        ConfigError: If the file cannot be read or contains invalid data.
    """
    config_path = _resolve_config_path(path)
    if config_path is None:
        return Settings()

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    if not content.strip():
        raise ConfigError(f"Configuration file is empty: {config_path}")

    data = _decode(content)
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    validate_settings(data)
    return Settings.from_dict(data)
