"""Registry types: ModuleConfig, ModuleDescriptor, DiscoveredModule."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "DEFAULT_PRIORITY",
    "RoutesConfig",
    "MigrationsConfig",
    "SeedersConfig",
    "ModuleConfig",
    "ModuleDescriptor",
    "DiscoveredModule",
]

DEFAULT_PRIORITY = 999


class RoutesConfig(BaseModel):
    """The ``routes`` block of a module config."""

    model_config = ConfigDict(extra="allow")

    prefix: str = ""
    middleware: list[str] = Field(default_factory=list)


class MigrationsConfig(BaseModel):
    """The ``migrations`` block of a module config."""

    model_config = ConfigDict(extra="allow")

    path: str | None = None
    priority: int | None = None


class SeedersConfig(BaseModel):
    """The ``seeders`` block of a module config."""

    model_config = ConfigDict(extra="allow")

    path: str | None = None


class ModuleConfig(BaseModel):
    """Declarative module record parsed from ``config/module.json``.

    JSON keys use camelCase (``displayName``); attributes are snake_case.
    Unknown keys are kept so that application-specific settings survive a
    round trip through the registry.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str | None = None
    display_name: str | None = Field(default=None, alias="displayName")
    version: str = "1.0.0"
    description: str = ""
    enabled: bool = False
    dependencies: list[str] = Field(default_factory=list)
    routes: RoutesConfig = Field(default_factory=RoutesConfig)
    migrations: MigrationsConfig = Field(default_factory=MigrationsConfig)
    seeders: SeedersConfig = Field(default_factory=SeedersConfig)

    def priority(self, default: int = DEFAULT_PRIORITY) -> int:
        """Migration priority, falling back to ``default`` when not declared."""
        if self.migrations.priority is None:
            return default
        return self.migrations.priority


@dataclass
class ModuleDescriptor:
    """One discovered module: its config plus the resolved on-disk locations."""

    name: str
    path: Path
    config: ModuleConfig = field(default_factory=ModuleConfig)
    enabled: bool = True
    dependencies: list[str] = field(default_factory=list)
    priority: int = DEFAULT_PRIORITY
    migrations_path: Path | None = None
    seeders_path: Path | None = None
    routes_file: Path | None = None
    display_name: str | None = None
    version: str = "1.0.0"
    description: str = ""


@dataclass
class DiscoveredModule:
    """Intermediate representation of a module directory found by the scanner."""

    name: str
    path: Path
    config_path: Path
