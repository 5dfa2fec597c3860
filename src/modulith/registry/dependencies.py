"""Load order resolution via priority-seeded depth-first topological sort."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Iterator, Union

from modulith.errors import CycleError, MissingDependencyError, ModuleNotFoundError
from modulith.registry.types import ModuleDescriptor

if TYPE_CHECKING:
    from modulith.registry.registry import Registry

logger = logging.getLogger(__name__)

__all__ = ["resolve_load_order", "dependency_edges"]

ModuleSource = Union["Registry", Iterable[ModuleDescriptor]]

_UNVISITED = 0
_IN_PROGRESS = 1
_DONE = 2


def _enabled_modules(source: ModuleSource) -> dict[str, ModuleDescriptor]:
    """Snapshot the enabled descriptors of a registry or iterable, keeping order."""
    if hasattr(source, "iter"):
        descriptors: Iterable[ModuleDescriptor] = (d for _, d in source.iter())
    else:
        descriptors = source
    return {d.name: d for d in descriptors if d.enabled}


def dependency_edges(source: ModuleSource) -> dict[str, list[str]]:
    """Return ``{module: [dependency, ...]}`` for every enabled module."""
    return {name: list(d.dependencies) for name, d in _enabled_modules(source).items()}


def resolve_load_order(source: ModuleSource, focus: str | None = None) -> list[str]:
    """Resolve the order in which modules must be loaded.

    Modules are considered in ascending priority (ties keep discovery order)
    and each one is preceded by its dependencies, depth-first. The result is
    a topological order of the dependency graph that follows the priority
    sequence wherever the graph leaves a choice.

    Args:
        source: A Registry, or any iterable of ModuleDescriptor. Disabled
            descriptors are ignored.
        focus: If given, resolve only this module and its transitive
            dependencies.

    Returns:
        Module names, dependencies before dependents, each exactly once.

    Raises:
        MissingDependencyError: A module depends on names that are not enabled
            modules. Every missing name of that module is reported.
        CycleError: The dependency graph contains a cycle.
        ModuleNotFoundError: ``focus`` is not an enabled module.
    """
    modules = _enabled_modules(source)

    if focus is not None:
        if focus not in modules:
            raise ModuleNotFoundError(module=focus)
        seeds = [focus]
    else:
        # sorted() is stable, so equal priorities keep discovery order
        seeds = sorted(modules, key=lambda name: modules[name].priority)

    state: dict[str, int] = {}
    order: list[str] = []
    for seed in seeds:
        if state.get(seed, _UNVISITED) == _DONE:
            continue
        _visit(seed, modules, state, order)

    logger.debug("Resolved load order: %s", order)
    return order


def _enter(name: str, modules: dict[str, ModuleDescriptor], state: dict[str, int]) -> Iterator[str]:
    missing = [dep for dep in modules[name].dependencies if dep not in modules]
    if missing:
        raise MissingDependencyError(module=name, missing=missing)
    state[name] = _IN_PROGRESS
    return iter(modules[name].dependencies)


def _visit(
    start: str,
    modules: dict[str, ModuleDescriptor],
    state: dict[str, int],
    order: list[str],
) -> None:
    stack: list[tuple[str, Iterator[str]]] = [(start, _enter(start, modules, state))]

    while stack:
        name, deps = stack[-1]
        for dep in deps:
            dep_state = state.get(dep, _UNVISITED)
            if dep_state == _DONE:
                continue
            if dep_state == _IN_PROGRESS:
                path = [frame[0] for frame in stack]
                cycle = path[path.index(dep):] + [dep]
                raise CycleError(module_a=name, module_b=dep, cycle_path=cycle)
            stack.append((dep, _enter(dep, modules, state)))
            break
        else:
            stack.pop()
            state[name] = _DONE
            order.append(name)
