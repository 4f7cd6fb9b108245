"""Unified exception hierarchy for chalkcore.

Every failure raised or returned by the library derives from ChalkError.
This module provides:
- Base exception hierarchy with stable error codes
- ErrorRegistry for mapping codes back to exception classes

Usage:
    from chalkcore.exceptions import (
        ChalkError,
        NonRepresentableBitmaskError,
        UnknownActionError,
    )

Integrators may define thin subclasses for application-specific errors:
    @register_error("ACCOUNT_LOCKED")
    class AccountLockedError(ChalkError):
        code = "ACCOUNT_LOCKED"
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar, cast

__all__ = [
    # Base hierarchy
    "ChalkError",
    "ConfigurationError",
    "UnknownActionError",
    "NonRepresentableBitmaskError",
    "PermissionOutOfRangeError",
    "ValidationError",
    # Registry
    "ErrorRegistry",
    "error_registry",
    "register_error",
]


# ---- Exception Hierarchy ----------------------------------------------------


class ChalkError(Exception):
    """Base exception for chalkcore.

    Attributes:
        code: Stable error code string (e.g. "UNKNOWN_ACTION").
        message: Human-readable error description.
        details: Additional context as keyword arguments.
    """

    code: str = "INTERNAL_ERROR"
    message: str = "An internal error occurred"

    def __init__(self, message: str | None = None, code: str | None = None, **kwargs: Any) -> None:
        self.message = message or self.message
        self.code = code or self.code
        self.details = kwargs
        super().__init__(self.message)


class ConfigurationError(ChalkError):
    """Invalid or missing configuration."""

    code: str = "CONFIGURATION_ERROR"


class UnknownActionError(ChalkError):
    """A symbolic action code has no entry in the action flag table."""

    code: str = "UNKNOWN_ACTION"
    message: str = "Unknown action code"


class NonRepresentableBitmaskError(ChalkError):
    """A bitmask holds bits that no configured action flag covers.

    Raised by encoding, and propagated by ``can`` so that a corrupt stored
    mask is never confused with an ordinary denial.
    """

    code: str = "NON_REPRESENTABLE_BITMASK"
    message: str = "Bitmask cannot be decomposed into configured action flags"


class PermissionOutOfRangeError(ChalkError):
    """Absolute bitmask write outside ``[0, sum_of_all_flags]``.

    Returned inside a PermissionUpdate result, never raised by
    ``set_permissions``.
    """

    code: str = "PERMISSION_OUT_OF_RANGE"
    message: str = "Permission value out of range"


class ValidationError(ChalkError):
    """Record validation or persistence failure."""

    code: str = "VALIDATION_ERROR"
    message: str = "Record validation failed"


# ---- Error Registry ---------------------------------------------------------

_E = TypeVar("_E", bound=type[ChalkError])


class ErrorRegistry:
    """Registry mapping stable error codes to exception classes."""

    def __init__(self) -> None:
        self._errors: dict[str, type[ChalkError]] = {}

    def register(self, code: str, error_cls: type[ChalkError]) -> None:
        self._errors[code] = error_cls

    def get(self, code: str) -> type[ChalkError] | None:
        return self._errors.get(code)

    def all(self) -> dict[str, type[ChalkError]]:
        return dict(self._errors)


error_registry = ErrorRegistry()


def register_error(code: str) -> Callable[[_E], _E]:
    """Decorator to register a custom error type.

    Usage:
        @register_error("MY_CUSTOM_ERROR")
        class MyCustomError(ChalkError):
            code = "MY_CUSTOM_ERROR"
    """

    def decorator(cls: _E) -> _E:
        error_registry.register(code, cls)
        return cls

    return cast(Callable[[_E], _E], decorator)


# Register base errors
error_registry.register("INTERNAL_ERROR", ChalkError)
error_registry.register("CONFIGURATION_ERROR", ConfigurationError)
error_registry.register("UNKNOWN_ACTION", UnknownActionError)
error_registry.register("NON_REPRESENTABLE_BITMASK", NonRepresentableBitmaskError)
error_registry.register("PERMISSION_OUT_OF_RANGE", PermissionOutOfRangeError)
error_registry.register("VALIDATION_ERROR", ValidationError)
