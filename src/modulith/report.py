"""Plain-text reports of load order, dependency tree, and migration order.

These functions are the surface a command-line front end calls: each
returns a string, and :func:`check_modules` turns resolution errors into an
exit code.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from modulith.errors import ModulithError
from modulith.registry.dependencies import resolve_load_order

if TYPE_CHECKING:
    from modulith.database.orchestrator import MigrationOrchestrator, ModuleFileSet
    from modulith.registry.registry import Registry

__all__ = [
    "format_load_order",
    "format_dependency_tree",
    "format_migration_order",
    "format_seeder_order",
    "check_modules",
]

_RULE = "-" * 60


def format_load_order(registry: Registry, focus: str | None = None) -> str:
    """Render the load order as ``a -> b -> c``."""
    return " -> ".join(resolve_load_order(registry, focus=focus))


def format_dependency_tree(registry: Registry, focus: str | None = None) -> str:
    """Render each module in load order with its priority and dependencies.

    Raises:
        MissingDependencyError: If resolution fails.
        CycleError: If resolution fails.
        ModuleNotFoundError: If ``focus`` is not an enabled module.
    """
    order = resolve_load_order(registry, focus=focus)

    lines = ["Module Dependency Tree:", _RULE]
    for name in order:
        descriptor = registry.get(name)
        lines.append("")
        lines.append(f"{name} (priority: {descriptor.priority})")
        if descriptor.dependencies:
            lines.append(f"  Dependencies: {', '.join(descriptor.dependencies)}")
        else:
            lines.append("  No dependencies")
    lines.append("")
    lines.append(_RULE)
    lines.append(f"Load order: {' -> '.join(order)}")
    return "\n".join(lines)


def _format_file_sets(title: str, file_sets: list[ModuleFileSet]) -> str:
    lines = [title, _RULE]
    for file_set in file_sets:
        lines.append("")
        lines.append(f"{file_set.priority}. Module: {file_set.module}")
        for index, name in enumerate(file_set.files, start=1):
            lines.append(f"   {index}. {name}")
    lines.append("")
    lines.append(_RULE)
    return "\n".join(lines)


def format_migration_order(orchestrator: MigrationOrchestrator) -> str:
    """Render migration execution order grouped by module."""
    return _format_file_sets("Migration execution order:", orchestrator.discover_migrations())


def format_seeder_order(orchestrator: MigrationOrchestrator) -> str:
    """Render seeder execution order grouped by module."""
    return _format_file_sets("Seeder execution order:", orchestrator.discover_seeders())


def check_modules(registry: Registry, focus: str | None = None, out: TextIO | None = None) -> int:
    """Print the dependency tree and return an exit code.

    Returns 0 when the load order resolves. On a resolution error the error
    is printed and 1 is returned.
    """
    stream = out if out is not None else sys.stdout
    try:
        tree = format_dependency_tree(registry, focus=focus)
    except ModulithError as e:
        stream.write(f"Dependency error: {e.message}\n")
        return 1

    stream.write(tree + "\n")
    stream.write("Module dependencies are valid\n")
    return 0
