"""Tests for the plain-text reports and check_modules()."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from module_helpers import descriptor
from modulith.database.orchestrator import MigrationOrchestrator
from modulith.errors import CycleError
from modulith.registry import Registry
from modulith.report import (
    check_modules,
    format_dependency_tree,
    format_load_order,
    format_migration_order,
    format_seeder_order,
)


@pytest.fixture
def discovered(registry: Registry, erp_modules: None) -> Registry:
    registry.discover()
    return registry


def _cyclic_registry() -> Registry:
    reg = Registry()
    reg.register(descriptor("x", ["y"]))
    reg.register(descriptor("y", ["x"]))
    return reg


class TestLoadOrderReport:
    def test_format_load_order(self, discovered: Registry) -> None:
        """Load order is rendered with arrows."""
        assert format_load_order(discovered) == "core -> billing -> reports"

    def test_focused(self, discovered: Registry) -> None:
        """A focus limits the order to the module's dependencies."""
        assert format_load_order(discovered, focus="billing") == "core -> billing"


class TestDependencyTree:
    def test_tree_contents(self, discovered: Registry) -> None:
        """Each module shows its priority and dependencies."""
        tree = format_dependency_tree(discovered)
        assert "core (priority: 10)" in tree
        assert "  No dependencies" in tree
        assert "billing (priority: 20)" in tree
        assert "  Dependencies: core" in tree
        assert tree.endswith("Load order: core -> billing -> reports")

    def test_tree_raises_on_cycle(self) -> None:
        """Resolution errors propagate from the tree renderer."""
        with pytest.raises(CycleError):
            format_dependency_tree(_cyclic_registry())


class TestFileOrderReports:
    def test_migration_order(self, erp_modules: None, modules_root: Path) -> None:
        """Migration order lists modules by priority with numbered files."""
        text = format_migration_order(MigrationOrchestrator(modules_dir=modules_root))
        lines = text.splitlines()
        assert lines[0] == "Migration execution order:"
        assert "5. Module: reports" in lines
        assert "   1. 2024_01_01_create_users.py" in lines
        assert "   2. 2024_01_02_create_roles.py" in lines
        assert text.index("Module: reports") < text.index("Module: core") < text.index("Module: billing")

    def test_seeder_order(self, erp_modules: None, modules_root: Path) -> None:
        """Seeder order uses the same layout."""
        text = format_seeder_order(MigrationOrchestrator(modules_dir=modules_root))
        assert text.startswith("Seeder execution order:")
        assert "10. Module: core" in text
        assert "billing" not in text


class TestCheckModules:
    def test_valid_returns_zero(self, discovered: Registry) -> None:
        """A resolvable registry prints the tree and returns 0."""
        out = io.StringIO()
        assert check_modules(discovered, out=out) == 0
        assert "Load order: core -> billing -> reports" in out.getvalue()
        assert "Module dependencies are valid" in out.getvalue()

    def test_cycle_returns_one(self) -> None:
        """A cycle prints the error and returns 1 without a tree."""
        out = io.StringIO()
        assert check_modules(_cyclic_registry(), out=out) == 1
        text = out.getvalue()
        assert text.startswith("Dependency error: Circular dependency detected")
        assert "Load order" not in text

    def test_missing_dependency_returns_one(self) -> None:
        """A missing dependency prints the missing names and returns 1."""
        reg = Registry()
        reg.register(descriptor("reports", ["billing"]))
        out = io.StringIO()
        assert check_modules(reg, out=out) == 1
        assert "billing" in out.getvalue()

    def test_unknown_focus_returns_one(self, discovered: Registry) -> None:
        """An unknown focus module is reported as an error."""
        out = io.StringIO()
        assert check_modules(discovered, focus="ghost", out=out) == 1
        assert "Module not found: ghost" in out.getvalue()

    def test_defaults_to_stdout(self, discovered: Registry, capsys: pytest.CaptureFixture[str]) -> None:
        """Without out=, the report goes to stdout."""
        check_modules(discovered)
        assert "Load order" in capsys.readouterr().out
