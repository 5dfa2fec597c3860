"""Priority-ordered discovery of module migration and seeder files.

Unlike route loading, which follows the dependency graph, migrations and
seeders are ordered by declared priority alone (lower runs first). Within a
module, files are ordered by name. The orchestrator only reports order; an
external runner executes the files strictly in the returned sequence.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from modulith.config import Config
from modulith.errors import ConfigParseError, DiscoveryIOError
from modulith.registry.metadata import load_module_config
from modulith.registry.scanner import list_module_files, scan_modules
from modulith.registry.types import DiscoveredModule

if TYPE_CHECKING:
    from modulith.registry.registry import Registry

logger = logging.getLogger(__name__)

__all__ = ["ModuleFileSet", "MigrationOrchestrator", "MIGRATIONS", "SEEDERS"]

MIGRATIONS = "migrations"
SEEDERS = "seeders"


@dataclass
class ModuleFileSet:
    """Ordered migration or seeder files of one module."""

    module: str
    priority: int
    path: Path
    files: list[str] = field(default_factory=list)

    @property
    def file_paths(self) -> list[Path]:
        """Absolute file paths in execution order."""
        return [self.path / name for name in self.files]


class MigrationOrchestrator:
    """Computes migration and seeder execution order across modules."""

    def __init__(
        self,
        config: Config | None = None,
        modules_dir: str | Path | None = None,
    ) -> None:
        self._config = config if config is not None else Config()
        if modules_dir is not None:
            self._root = Path(modules_dir)
        else:
            self._root = Path(self._config.get("modules.root", "./src/modules"))

    @classmethod
    def from_registry(cls, registry: Registry) -> MigrationOrchestrator:
        """Build an orchestrator that reads the same modules root as ``registry``."""
        return cls(config=registry.config, modules_dir=registry.root)

    @property
    def root(self) -> Path:
        """The modules root directory."""
        return self._root

    # ----- Discovery -----

    def _scan(self, kind: str) -> list[DiscoveredModule]:
        try:
            return scan_modules(
                self._root,
                config_file=self._config.get("modules.config_file", "config/module.json"),
                follow_symlinks=self._config.get("modules.follow_symlinks", False),
            )
        except DiscoveryIOError as e:
            logger.error("Error discovering module %s: %s", kind, e)
            return []

    def _collect(self, dm: DiscoveredModule, kind: str) -> ModuleFileSet | None:
        """Read one module's config and file list. Failures exclude the module."""
        try:
            module_config = load_module_config(dm.config_path, dm.name)
        except ConfigParseError as e:
            logger.warning("Skipping %s of module %s: %s", kind, dm.name, e)
            return None

        if module_config is None or not module_config.enabled:
            return None

        directory = dm.path / self._config.get(f"{kind}.dir")
        try:
            files = list_module_files(directory, self._config.extensions(kind))
        except OSError as e:
            logger.warning("Cannot read %s directory %s: %s", kind, directory, e)
            return None

        if not files:
            return None

        default_priority = self._config.get("modules.default_priority", 999)
        return ModuleFileSet(
            module=dm.name,
            priority=module_config.priority(default_priority),
            path=directory,
            files=files,
        )

    @staticmethod
    def _order(sets: list[ModuleFileSet | None]) -> list[ModuleFileSet]:
        # Stable sort: equal priorities keep scan order
        return sorted((s for s in sets if s is not None), key=lambda s: s.priority)

    def _discover(self, kind: str) -> list[ModuleFileSet]:
        return self._order([self._collect(dm, kind) for dm in self._scan(kind)])

    async def _discover_async(self, kind: str) -> list[ModuleFileSet]:
        discovered = await asyncio.to_thread(self._scan, kind)
        results = await asyncio.gather(*(asyncio.to_thread(self._collect, dm, kind) for dm in discovered))
        return self._order(list(results))

    def discover_migrations(self) -> list[ModuleFileSet]:
        """Return enabled modules with migrations, ascending by priority."""
        return self._discover(MIGRATIONS)

    def discover_seeders(self) -> list[ModuleFileSet]:
        """Return enabled modules with seeders, ascending by priority."""
        return self._discover(SEEDERS)

    async def discover_migrations_async(self) -> list[ModuleFileSet]:
        """Async variant of :meth:`discover_migrations` with concurrent module reads."""
        return await self._discover_async(MIGRATIONS)

    async def discover_seeders_async(self) -> list[ModuleFileSet]:
        """Async variant of :meth:`discover_seeders` with concurrent module reads."""
        return await self._discover_async(SEEDERS)

    # ----- Flattened file lists -----

    def get_all_migrations(self) -> list[Path]:
        """All migration files in global execution order."""
        return [p for file_set in self.discover_migrations() for p in file_set.file_paths]

    def get_all_seeders(self) -> list[Path]:
        """All seeder files in global execution order."""
        return [p for file_set in self.discover_seeders() for p in file_set.file_paths]

    def _module_files(self, name: str, kind: str) -> list[Path]:
        directory = self._root.resolve() / name / self._config.get(f"{kind}.dir")
        try:
            files = list_module_files(directory, self._config.extensions(kind))
        except OSError as e:
            logger.warning("Cannot read %s directory %s: %s", kind, directory, e)
            return []
        return [directory / f for f in files]

    def get_module_migrations(self, name: str) -> list[Path]:
        """Migration files of one module, by name. Missing directory gives []."""
        return self._module_files(name, MIGRATIONS)

    def get_module_seeders(self, name: str) -> list[Path]:
        """Seeder files of one module, by name. Missing directory gives []."""
        return self._module_files(name, SEEDERS)
