"""Error hierarchy for the modulith framework."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

__all__ = [
    "ModulithError",
    "ConfigNotFoundError",
    "ConfigError",
    "ConfigParseError",
    "DiscoveryIOError",
    "ModuleNotFoundError",
    "MissingDependencyError",
    "CycleError",
    "InvalidInputError",
    "ErrorCodes",
]


class ModulithError(Exception):
    """Base error for all modulith framework errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
        trace_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.trace_id = trace_id
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigNotFoundError(ModulithError):
    """Raised when a configuration file cannot be found."""

    def __init__(self, config_path: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_NOT_FOUND",
            message=f"Configuration file not found: {config_path}",
            details={"config_path": config_path},
            **kwargs,
        )


class ConfigError(ModulithError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="CONFIG_INVALID", message=message, **kwargs)


class ConfigParseError(ModulithError):
    """Raised when a module's config file is malformed or unreadable."""

    def __init__(self, module: str, config_path: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_PARSE_ERROR",
            message=f"Invalid config for module '{module}' ({config_path}): {reason}",
            details={"module": module, "config_path": config_path, "reason": reason},
            **kwargs,
        )

    @property
    def module(self) -> str:
        """The module whose config could not be parsed."""
        return self.details["module"]


class DiscoveryIOError(ModulithError):
    """Raised when the modules root cannot be enumerated."""

    def __init__(self, path: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="DISCOVERY_IO_ERROR",
            message=f"Cannot read modules directory {path}: {reason}",
            details={"path": path, "reason": reason},
            **kwargs,
        )

    @property
    def path(self) -> str:
        """The directory that could not be read."""
        return self.details["path"]


class ModuleNotFoundError(ModulithError):
    """Raised when a module cannot be found."""

    def __init__(self, module: str, **kwargs: Any) -> None:
        super().__init__(
            code="MODULE_NOT_FOUND",
            message=f"Module not found: {module}",
            details={"module": module},
            **kwargs,
        )

    @property
    def module(self) -> str:
        """The module name that was looked up."""
        return self.details["module"]


class MissingDependencyError(ModulithError):
    """Raised when a module declares dependencies that are not known enabled modules."""

    def __init__(self, module: str, missing: list[str], **kwargs: Any) -> None:
        super().__init__(
            code="MISSING_DEPENDENCY",
            message=f"Dependencies {', '.join(missing)} required by {module} are not available",
            details={"module": module, "missing": list(missing)},
            **kwargs,
        )

    @property
    def module(self) -> str:
        """The module that declared the missing dependencies."""
        return self.details["module"]

    @property
    def missing(self) -> list[str]:
        """Every missing dependency name, in declaration order."""
        return self.details["missing"]


class CycleError(ModulithError):
    """Raised when a dependency cycle is detected during load order resolution."""

    def __init__(
        self,
        module_a: str,
        module_b: str,
        cycle_path: list[str] | None = None,
        **kwargs: Any,
    ) -> None:
        path = cycle_path or [module_b, module_a, module_b]
        super().__init__(
            code="CIRCULAR_DEPENDENCY",
            message=f"Circular dependency detected: {module_a} <-> {module_b} ({' -> '.join(path)})",
            details={"module_a": module_a, "module_b": module_b, "cycle_path": path},
            **kwargs,
        )

    @property
    def module_a(self) -> str:
        """The module whose dependency declaration closes the cycle."""
        return self.details["module_a"]

    @property
    def module_b(self) -> str:
        """The dependency that was already being resolved."""
        return self.details["module_b"]

    @property
    def cycle_path(self) -> list[str]:
        """The modules along the cycle, first and last entries equal."""
        return self.details["cycle_path"]


class InvalidInputError(ModulithError):
    """Raised for invalid input."""

    def __init__(self, message: str = "Invalid input", **kwargs: Any) -> None:
        super().__init__(code="GENERAL_INVALID_INPUT", message=message, **kwargs)


class ErrorCodes:
    """All framework error codes as constants.

    Use these instead of hardcoding error code strings.

    Example:
        if error.code == ErrorCodes.CIRCULAR_DEPENDENCY:
            report_cycle(error.module_a, error.module_b)
    """

    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_INVALID = "CONFIG_INVALID"
    CONFIG_PARSE_ERROR = "CONFIG_PARSE_ERROR"
    DISCOVERY_IO_ERROR = "DISCOVERY_IO_ERROR"
    MODULE_NOT_FOUND = "MODULE_NOT_FOUND"
    MISSING_DEPENDENCY = "MISSING_DEPENDENCY"
    CIRCULAR_DEPENDENCY = "CIRCULAR_DEPENDENCY"
    GENERAL_INVALID_INPUT = "GENERAL_INVALID_INPUT"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ErrorCodes is immutable")
