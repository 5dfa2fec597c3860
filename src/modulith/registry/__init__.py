"""modulith registry and module discovery system.

Provides module discovery, lookup, and dependency-respecting load order.

Usage::

    from modulith.registry import Registry

    registry = Registry(modules_dir="./src/modules")
    registry.discover()
    order = registry.load_order()
"""

from __future__ import annotations

from modulith.registry.dependencies import dependency_edges, resolve_load_order
from modulith.registry.metadata import load_module_config
from modulith.registry.registry import Registry
from modulith.registry.routes import import_routes_file
from modulith.registry.scanner import list_module_files, scan_modules
from modulith.registry.types import (
    DiscoveredModule,
    MigrationsConfig,
    ModuleConfig,
    ModuleDescriptor,
    RoutesConfig,
    SeedersConfig,
)

__all__ = [
    "DiscoveredModule",
    "MigrationsConfig",
    "ModuleConfig",
    "ModuleDescriptor",
    "Registry",
    "RoutesConfig",
    "SeedersConfig",
    "dependency_edges",
    "import_routes_file",
    "list_module_files",
    "load_module_config",
    "resolve_load_order",
    "scan_modules",
]
