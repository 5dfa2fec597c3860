"""Configuration loading and validation."""

from __future__ import annotations

import copy
import os
from typing import Any

import yaml

from modulith.errors import ConfigError, ConfigNotFoundError

__all__ = ["Config", "DEFAULTS"]

DEFAULTS: dict[str, Any] = {
    "modules": {
        "root": "./src/modules",
        "config_file": "config/module.json",
        "default_priority": 999,
        "follow_symlinks": False,
    },
    "routes": {
        "extensions": [".py", ".ts", ".js"],
    },
    "migrations": {
        "dir": "database/migrations",
        "extensions": [".py", ".ts", ".js"],
    },
    "seeders": {
        "dir": "database/seeders",
        "extensions": [".py", ".ts", ".js"],
    },
}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """Configuration accessor with dot-path key support.

    Values passed in ``data`` are merged over :data:`DEFAULTS`, so every
    documented key resolves even when the caller supplies a partial mapping.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = _deep_merge(DEFAULTS, data or {})

    @classmethod
    def load(cls, yaml_path: str) -> Config:
        """Load configuration from a YAML file.

        Raises:
            ConfigNotFoundError: If the file does not exist.
            ConfigError: If the YAML is invalid or is not a mapping.
        """
        if not os.path.isfile(yaml_path):
            raise ConfigNotFoundError(config_path=yaml_path)

        with open(yaml_path, encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(message=f"Invalid YAML in {yaml_path}: {e}") from e

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(
                message=f"Config must be a mapping, got {type(data).__name__}"
            )
        return cls(data)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-path key."""
        parts = key.split(".")
        current: Any = self._data
        for part in parts:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current

    def extensions(self, section: str) -> tuple[str, ...]:
        """Return the file extensions accepted for ``section`` as a tuple."""
        value = self.get(f"{section}.extensions", [])
        if isinstance(value, str):
            value = [value]
        return tuple(value)
