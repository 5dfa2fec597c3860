"""Migration and seeder ordering for modules."""

from __future__ import annotations

from modulith.database.orchestrator import MigrationOrchestrator, ModuleFileSet

__all__ = ["MigrationOrchestrator", "ModuleFileSet"]
