"""Shared fixtures: build module trees on disk under tmp_path."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from module_helpers import write_module
from modulith.registry import Registry


# === Fixtures ===


@pytest.fixture
def modules_root(tmp_path: Path) -> Path:
    """An empty modules root directory."""
    root = tmp_path / "modules"
    root.mkdir()
    return root


@pytest.fixture
def make_module(modules_root: Path) -> Callable[..., Path]:
    """Factory writing a module directory under ``modules_root``."""

    def factory(name: str, **kwargs: Any) -> Path:
        return write_module(modules_root, name, **kwargs)

    return factory


@pytest.fixture
def erp_modules(make_module: Callable[..., Path]) -> None:
    """core <- billing <- reports, with priorities that disagree with dependencies."""
    make_module(
        "core",
        priority=10,
        migrations=["2024_01_01_create_users.py", "2024_01_02_create_roles.py"],
        seeders=["01_admin_user.py"],
        routes="ROUTES = ['/api/core']\n",
    )
    make_module(
        "billing",
        priority=20,
        dependencies=["core"],
        migrations=["2024_03_01_create_invoices.py"],
        routes="ROUTES = ['/api/billing']\n",
    )
    make_module(
        "reports",
        priority=5,
        dependencies=["billing"],
        migrations=["2024_04_01_create_report_cache.py"],
        seeders=["01_default_reports.py"],
    )


@pytest.fixture
def registry(modules_root: Path) -> Registry:
    """A Registry pointed at ``modules_root`` (discover NOT called)."""
    return Registry(modules_dir=modules_root)
