"""Central module registry for discovering and querying feature modules."""

from __future__ import annotations

import asyncio
import logging
import threading
from pathlib import Path
from typing import Any, Callable, Iterator

from modulith.config import Config
from modulith.errors import (
    ConfigParseError,
    DiscoveryIOError,
    InvalidInputError,
)
from modulith.registry.dependencies import resolve_load_order
from modulith.registry.metadata import build_descriptor, load_module_config
from modulith.registry.routes import RouteLoader, import_routes_file
from modulith.registry.scanner import scan_modules
from modulith.registry.types import DiscoveredModule, ModuleConfig, ModuleDescriptor

logger = logging.getLogger(__name__)

__all__ = ["Registry"]


class Registry:
    """Caller-owned catalog of modules discovered under a modules root.

    Discover once, query many times. Discovery is single-writer: callers
    must not run two discovery passes on the same registry concurrently.
    """

    def __init__(
        self,
        config: Config | None = None,
        modules_dir: str | Path | None = None,
    ) -> None:
        """Initialize the Registry.

        Args:
            config: Optional Config object. Defaults are used when omitted.
            modules_dir: Modules root. Overrides ``modules.root`` from config.
        """
        self._config = config if config is not None else Config()
        if modules_dir is not None:
            self._root = Path(modules_dir)
        else:
            self._root = Path(self._config.get("modules.root", "./src/modules"))

        self._modules: dict[str, ModuleDescriptor] = {}
        self._loaded_routes: set[str] = set()
        self._callbacks: dict[str, list[Callable[..., Any]]] = {
            "register": [],
            "unregister": [],
        }
        self._write_lock = threading.RLock()

    @property
    def root(self) -> Path:
        """The modules root directory."""
        return self._root

    @property
    def config(self) -> Config:
        """The configuration used for discovery."""
        return self._config

    # ----- Discovery -----

    def _scan(self, strict: bool) -> list[DiscoveredModule] | None:
        try:
            return scan_modules(
                self._root,
                config_file=self._config.get("modules.config_file", "config/module.json"),
                follow_symlinks=self._config.get("modules.follow_symlinks", False),
            )
        except DiscoveryIOError as e:
            if strict:
                raise
            logger.error("Failed to discover modules: %s", e)
            return None

    def _load(self, dm: DiscoveredModule) -> ModuleDescriptor | None:
        """Load one module's descriptor. Per-module failures are logged, never raised."""
        try:
            module_config = load_module_config(dm.config_path, dm.name)
        except ConfigParseError as e:
            logger.warning("Module %s has no valid config: %s", dm.name, e)
            return None

        if module_config is None:
            logger.debug("Directory %s has no module config, skipping", dm.path)
            return None

        return build_descriptor(dm, module_config, self._config)

    def _apply(self, results: list[ModuleDescriptor | None], log: bool) -> int:
        registered = 0
        for descriptor in results:
            if descriptor is None:
                continue
            if not descriptor.enabled:
                logger.debug("Module %s is disabled", descriptor.name)
                self.unregister(descriptor.name)
                continue
            self._store(descriptor)
            registered += 1
            if log:
                logger.info("Module discovered: %s", descriptor.name)

        if log:
            logger.info("Total modules discovered: %d", self.count)
        return registered

    def discover(self, log: bool = False, strict: bool = False) -> int:
        """Discover modules under the modules root and add them to the catalog.

        Re-running discovery replaces entries of the same name, drops entries
        whose config is now disabled, and keeps entries that are no longer on
        disk.

        Args:
            log: Log one INFO line per discovered module, plus a total.
            strict: Propagate DiscoveryIOError instead of logging it.

        Returns:
            Number of modules registered in this discovery pass.

        Raises:
            DiscoveryIOError: If ``strict`` and the modules root cannot be read.
        """
        discovered = self._scan(strict)
        if discovered is None:
            return 0
        return self._apply([self._load(dm) for dm in discovered], log)

    async def discover_async(self, log: bool = False, strict: bool = False) -> int:
        """Async variant of :meth:`discover`.

        Module configs are read concurrently; results are applied in scan
        order so the catalog order matches a synchronous discovery.
        """
        discovered = await asyncio.to_thread(self._scan, strict)
        if discovered is None:
            return 0
        results = await asyncio.gather(*(asyncio.to_thread(self._load, dm) for dm in discovered))
        return self._apply(list(results), log)

    # ----- Manual Registration -----

    def _store(self, descriptor: ModuleDescriptor) -> None:
        with self._write_lock:
            self._modules[descriptor.name] = descriptor
        self._trigger_event("register", descriptor.name, descriptor)

    def register(self, descriptor: ModuleDescriptor) -> None:
        """Add a descriptor to the catalog, replacing any entry of the same name.

        Raises:
            InvalidInputError: If the descriptor has an empty name.
        """
        if not descriptor.name:
            raise InvalidInputError(message="Module name must be a non-empty string")
        self._store(descriptor)

    def unregister(self, name: str) -> bool:
        """Remove a module from the registry.

        Returns False if module was not registered.
        """
        with self._write_lock:
            if name not in self._modules:
                return False
            descriptor = self._modules.pop(name)
            self._loaded_routes.discard(name)

        self._trigger_event("unregister", name, descriptor)
        return True

    # ----- Query Methods -----

    def get(self, name: str) -> ModuleDescriptor | None:
        """Look up a module descriptor by name. Returns None if not found."""
        with self._write_lock:
            return self._modules.get(name)

    def get_module_config(self, name: str) -> ModuleConfig | None:
        """Return the parsed config of a module, or None if not found."""
        descriptor = self.get(name)
        return descriptor.config if descriptor is not None else None

    def has(self, name: str) -> bool:
        """Check whether a module is registered."""
        with self._write_lock:
            return name in self._modules

    def list(self, prefix: str | None = None) -> list[str]:
        """Return sorted list of registered module names, optionally filtered by prefix."""
        with self._write_lock:
            names = list(self._modules.keys())
        if prefix is not None:
            names = [n for n in names if n.startswith(prefix)]
        return sorted(names)

    def iter(self) -> Iterator[tuple[str, ModuleDescriptor]]:
        """Return an iterator of (name, descriptor) tuples in discovery order (snapshot-based)."""
        with self._write_lock:
            items = list(self._modules.items())
        return iter(items)

    @property
    def count(self) -> int:
        """Number of registered modules."""
        with self._write_lock:
            return len(self._modules)

    @property
    def module_names(self) -> list[str]:
        """Registered module names in discovery order."""
        with self._write_lock:
            return list(self._modules.keys())

    # ----- Load Order -----

    def load_order(self, focus: str | None = None) -> list[str]:
        """Resolve the dependency-respecting load order. See :func:`resolve_load_order`."""
        return resolve_load_order(self, focus=focus)

    # ----- Routes -----

    @property
    def loaded_routes(self) -> set[str]:
        """Names of modules whose routes have been loaded by this registry."""
        with self._write_lock:
            return set(self._loaded_routes)

    def load_module_routes(self, name: str, loader: RouteLoader | None = None, log: bool = False) -> bool:
        """Load one module's routes at most once.

        Returns True if the loader ran successfully in this call. Modules
        that are unknown, have no routes file, or were already loaded are
        skipped. Loader failures are logged and leave the module unloaded.
        """
        descriptor = self.get(name)
        if descriptor is None or descriptor.routes_file is None:
            return False

        with self._write_lock:
            if name in self._loaded_routes:
                return False

        route_loader = loader if loader is not None else import_routes_file
        try:
            route_loader(name, descriptor.routes_file)
        except Exception as e:
            logger.error("Failed to load routes for module %s: %s", name, e)
            return False

        with self._write_lock:
            self._loaded_routes.add(name)
        if log:
            logger.info("Routes loaded for module: %s", name)
        return True

    def load_routes(self, loader: RouteLoader | None = None, log: bool = False) -> list[str]:
        """Load every module's routes in load order.

        Returns the names whose routes were loaded by this call.

        Raises:
            MissingDependencyError: Before any loader runs, if resolution fails.
            CycleError: Before any loader runs, if resolution fails.
        """
        order = self.load_order()
        if log:
            logger.info("Loading module routes in order: %s", ", ".join(order))
        return [name for name in order if self.load_module_routes(name, loader=loader, log=log)]

    # ----- Event System -----

    def on(self, event: str, callback: Callable[..., Any]) -> None:
        """Register an event callback.

        Args:
            event: Event name ('register' or 'unregister').
            callback: Callable(name, descriptor) to invoke on the event.

        Raises:
            InvalidInputError: If event name is invalid.
        """
        with self._write_lock:
            if event not in self._callbacks:
                raise InvalidInputError(message=f"Invalid event: {event}. Must be 'register' or 'unregister'")
            self._callbacks[event].append(callback)

    def _trigger_event(self, event: str, name: str, descriptor: ModuleDescriptor) -> None:
        """Trigger all callbacks for an event. Errors are logged and swallowed."""
        with self._write_lock:
            callbacks = list(self._callbacks.get(event, []))
        for cb in callbacks:
            try:
                cb(name, descriptor)
            except Exception as e:
                logger.error(
                    "Callback error for event '%s' on module '%s': %s",
                    event,
                    name,
                    e,
                )
