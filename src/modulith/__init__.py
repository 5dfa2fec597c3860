"""modulith - Module discovery, load order, and migration ordering for modular monoliths."""

from __future__ import annotations

# Core
from modulith.registry import Registry, resolve_load_order
from modulith.registry.types import DEFAULT_PRIORITY, ModuleConfig, ModuleDescriptor

# Database
from modulith.database import MigrationOrchestrator, ModuleFileSet

# Config
from modulith.config import Config

# Errors
from modulith.errors import (
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    CycleError,
    DiscoveryIOError,
    ErrorCodes,
    InvalidInputError,
    MissingDependencyError,
    ModuleNotFoundError,
    ModulithError,
)

# Reports
from modulith.report import (
    check_modules,
    format_dependency_tree,
    format_load_order,
    format_migration_order,
    format_seeder_order,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "Registry",
    "resolve_load_order",
    "ModuleConfig",
    "ModuleDescriptor",
    "DEFAULT_PRIORITY",
    # Database
    "MigrationOrchestrator",
    "ModuleFileSet",
    # Config
    "Config",
    # Errors
    "ErrorCodes",
    "ModulithError",
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "DiscoveryIOError",
    "ModuleNotFoundError",
    "MissingDependencyError",
    "CycleError",
    "InvalidInputError",
    # Reports
    "format_load_order",
    "format_dependency_tree",
    "format_migration_order",
    "format_seeder_order",
    "check_modules",
]
