"""Default route loader: import a module's Python routes file."""

from __future__ import annotations

import importlib.util
from pathlib import Path
from types import ModuleType
from typing import Any, Callable

from modulith.errors import InvalidInputError

__all__ = ["RouteLoader", "import_routes_file"]

RouteLoader = Callable[[str, Path], Any]
"""Called as ``loader(module_name, routes_file)``; registers the module's routes."""


def import_routes_file(module: str, routes_file: Path) -> ModuleType:
    """Import ``routes_file`` so that its top-level route registrations run.

    Only ``.py`` files can be imported; other routes files need a loader
    supplied by the host framework.

    Raises:
        InvalidInputError: If the file is not a Python source file.
        ImportError: If an import spec cannot be created.
    """
    routes_file = Path(routes_file)
    if routes_file.suffix != ".py":
        raise InvalidInputError(
            message=f"Cannot import routes file '{routes_file.name}' for module '{module}': not a .py file"
        )

    spec = importlib.util.spec_from_file_location(f"modulith_routes_{module}", str(routes_file))
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot create import spec for {routes_file}")

    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod
