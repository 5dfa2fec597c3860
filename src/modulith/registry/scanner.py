"""Directory scanner for discovering module directories and their files."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from modulith.errors import DiscoveryIOError
from modulith.registry.types import DiscoveredModule

logger = logging.getLogger(__name__)

__all__ = ["scan_modules", "list_module_files"]

_SKIP_DIR_NAMES = {"__pycache__", "node_modules"}


def _is_hidden(name: str) -> bool:
    return name.startswith(".") or name.startswith("_")


def scan_modules(
    root: Path,
    config_file: str = "config/module.json",
    follow_symlinks: bool = False,
) -> list[DiscoveredModule]:
    """List the module directories directly under ``root``.

    Every subdirectory except dot directories, ``__pycache__`` and
    ``node_modules`` is a candidate module named after the directory.
    Whether it actually carries a config is decided later by the registry.
    Results are sorted by name so discovery order does not depend
    on the filesystem's enumeration order.

    Raises:
        DiscoveryIOError: If ``root`` is missing or cannot be enumerated.
    """
    root = Path(root).resolve()
    if not root.is_dir():
        raise DiscoveryIOError(path=str(root), reason="not a directory")

    try:
        entries = list(os.scandir(root))
    except OSError as e:
        raise DiscoveryIOError(path=str(root), reason=str(e)) from e

    results: list[DiscoveredModule] = []
    for entry in sorted(entries, key=lambda e: e.name):
        name = entry.name
        if name.startswith(".") or name in _SKIP_DIR_NAMES:
            continue

        try:
            if entry.is_symlink() and not follow_symlinks:
                continue
            if not entry.is_dir(follow_symlinks=follow_symlinks):
                continue
        except OSError as e:
            logger.error("OS error accessing %s: %s", entry.path, e)
            continue

        module_path = Path(entry.path)
        results.append(
            DiscoveredModule(
                name=name,
                path=module_path,
                config_path=module_path / config_file,
            )
        )

    return results


def list_module_files(directory: Path, extensions: tuple[str, ...]) -> list[str]:
    """Return the sorted names of files in ``directory`` matching ``extensions``.

    A missing directory yields an empty list. Files starting with ``.`` or
    ``_`` are skipped. Filenames are timestamp-prefixed by convention, so
    lexicographic order is execution order.

    Raises:
        OSError: If the directory exists but cannot be read.
    """
    directory = Path(directory)
    if not directory.is_dir():
        return []

    names: list[str] = []
    with os.scandir(directory) as it:
        for entry in it:
            if _is_hidden(entry.name):
                continue
            if not entry.is_file():
                continue
            if extensions and Path(entry.name).suffix not in extensions:
                continue
            names.append(entry.name)
    return sorted(names)
