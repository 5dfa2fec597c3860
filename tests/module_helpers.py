"""Helpers for building module trees and descriptors in tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from modulith.registry.types import ModuleDescriptor


def write_module(
    root: Path,
    name: str,
    *,
    enabled: bool = True,
    dependencies: list[str] | None = None,
    priority: int | None = None,
    migrations: list[str] | None = None,
    seeders: list[str] | None = None,
    routes: str | None = None,
    extra: dict[str, Any] | None = None,
) -> Path:
    """Create ``root/<name>`` with a module.json and optional files."""
    module_dir = root / name
    (module_dir / "config").mkdir(parents=True, exist_ok=True)

    config: dict[str, Any] = {
        "name": name,
        "displayName": name.title(),
        "version": "1.0.0",
        "description": f"The {name} module",
        "enabled": enabled,
        "dependencies": dependencies or [],
        "routes": {"prefix": f"/api/{name}", "middleware": []},
        "migrations": {"path": "database/migrations"},
        "seeders": {"path": "database/seeders"},
    }
    if priority is not None:
        config["migrations"]["priority"] = priority
    if extra:
        config.update(extra)
    (module_dir / "config" / "module.json").write_text(json.dumps(config))

    if migrations is not None:
        mig_dir = module_dir / "database" / "migrations"
        mig_dir.mkdir(parents=True, exist_ok=True)
        for filename in migrations:
            (mig_dir / filename).write_text("")

    if seeders is not None:
        seed_dir = module_dir / "database" / "seeders"
        seed_dir.mkdir(parents=True, exist_ok=True)
        for filename in seeders:
            (seed_dir / filename).write_text("")

    if routes is not None:
        (module_dir / "routes").mkdir(parents=True, exist_ok=True)
        (module_dir / "routes" / f"{name}.py").write_text(routes)

    return module_dir


def descriptor(
    name: str,
    dependencies: list[str] | None = None,
    priority: int = 999,
    enabled: bool = True,
) -> ModuleDescriptor:
    """Build an in-memory descriptor without touching the filesystem."""
    return ModuleDescriptor(
        name=name,
        path=Path("/modules") / name,
        enabled=enabled,
        dependencies=list(dependencies or []),
        priority=priority,
    )
