"""Module config loading and descriptor construction for the registry system."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from modulith.errors import ConfigParseError
from modulith.registry.types import DiscoveredModule, ModuleConfig, ModuleDescriptor

if TYPE_CHECKING:
    from modulith.config import Config

logger = logging.getLogger(__name__)

__all__ = [
    "load_module_config",
    "parse_dependencies",
    "find_routes_file",
    "build_descriptor",
]


def load_module_config(config_path: Path, module: str) -> ModuleConfig | None:
    """Load and validate a ``module.json`` file.

    Returns None if the file does not exist (a directory without a config is
    simply not a module).

    Raises:
        ConfigParseError: If the file cannot be read, is not valid JSON, is
            not a JSON object, or fails validation.
    """
    config_path = Path(config_path)
    if not config_path.is_file():
        return None

    try:
        content = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigParseError(module=module, config_path=str(config_path), reason=str(e)) from e

    try:
        parsed = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigParseError(
            module=module, config_path=str(config_path), reason=f"invalid JSON: {e}"
        ) from e

    if not isinstance(parsed, dict):
        raise ConfigParseError(
            module=module,
            config_path=str(config_path),
            reason=f"config must be a JSON object, got {type(parsed).__name__}",
        )

    try:
        return ModuleConfig.model_validate(parsed)
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigParseError(module=module, config_path=str(config_path), reason=errors) from e


def parse_dependencies(module: str, deps_raw: list[str]) -> list[str]:
    """Normalize a dependency list: drop blanks and duplicates, keep declaration order."""
    if not deps_raw:
        return []

    result: list[str] = []
    for dep in deps_raw:
        dep = dep.strip()
        if not dep:
            logger.warning("Empty dependency name in module '%s', skipping", module)
            continue
        if dep in result:
            continue
        result.append(dep)
    return result


def find_routes_file(module_path: Path, module: str, extensions: tuple[str, ...]) -> Path | None:
    """Probe ``routes/<module>.<ext>`` for each extension in order."""
    routes_dir = Path(module_path) / "routes"
    for ext in extensions:
        candidate = routes_dir / f"{module}{ext}"
        if candidate.is_file():
            return candidate
    return None


def _existing_dir(path: Path) -> Path | None:
    return path if path.is_dir() else None


def build_descriptor(dm: DiscoveredModule, module_config: ModuleConfig, config: Config) -> ModuleDescriptor:
    """Combine a parsed config with the locations probed under the module directory."""
    default_priority = config.get("modules.default_priority", 999)
    return ModuleDescriptor(
        name=dm.name,
        path=dm.path,
        config=module_config,
        enabled=module_config.enabled,
        dependencies=parse_dependencies(dm.name, module_config.dependencies),
        priority=module_config.priority(default_priority),
        migrations_path=_existing_dir(dm.path / config.get("migrations.dir")),
        seeders_path=_existing_dir(dm.path / config.get("seeders.dir")),
        routes_file=find_routes_file(dm.path, dm.name, config.extensions("routes")),
        display_name=module_config.display_name,
        version=module_config.version,
        description=module_config.description,
    )
