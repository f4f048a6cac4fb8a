"""Unified exception hierarchy for authztree.

All errors raised by the package inherit from AuthzError. This module provides:
- Base exception hierarchy with stable error codes
- ErrorRegistry for protocol mapping

Usage:
    from authztree.exceptions import (
        AuthzError,
        ConfigurationError,
        CapabilityError,
    )

Applications may define thin subclasses for their own errors:
    @register_error("ACME_ERROR")
    class AcmeError(AuthzError):
        code = "ACME_ERROR"
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar, cast

__all__ = [
    # Base hierarchy
    "AuthzError",
    "ConfigurationError",
    "CapabilityError",
    "NotImplementedFeatureError",
    # Registry
    "ErrorRegistry",
    "error_registry",
    "register_error",
]


# ---- Exception Hierarchy ----------------------------------------------------


class AuthzError(Exception):
    """Base exception for authztree.

    Attributes:
        code: Stable error code string for protocol mapping (e.g. "CONFIGURATION_ERROR").
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


class ConfigurationError(AuthzError):
    """Invalid or missing hierarchy description or extension payload."""

    code: str = "CONFIGURATION_ERROR"
    message: str = "Invalid configuration"


class CapabilityError(AuthzError):
    """A group tried to perform a capability it does not hold."""

    code: str = "PERMISSION_DENIED"
    message: str = "Capability not held"


class NotImplementedFeatureError(AuthzError, NotImplementedError):
    """Operation is documented but not implemented yet."""

    code: str = "NOT_IMPLEMENTED"
    message: str = "Not implemented yet"


# ---- Error Registry for Protocol Mapping ------------------------------------

_E = TypeVar("_E", bound=type[AuthzError])


class ErrorRegistry:
    """Registry for mapping internal errors to external protocol codes."""

    def __init__(self) -> None:
        self._errors: dict[str, type[AuthzError]] = {}

    def register(self, code: str, error_cls: type[AuthzError]) -> None:
        self._errors[code] = error_cls

    def get(self, code: str) -> type[AuthzError] | None:
        return self._errors.get(code)

    def all(self) -> dict[str, type[AuthzError]]:
        return dict(self._errors)


error_registry = ErrorRegistry()


def register_error(code: str) -> Callable[[_E], _E]:
    """Decorator to register a custom error type.

    Usage:
        @register_error("MY_CUSTOM_ERROR")
        class MyCustomError(AuthzError):
            code = "MY_CUSTOM_ERROR"
    """

    def decorator(cls: _E) -> _E:
        error_registry.register(code, cls)
        return cls

    return cast(Callable[[_E], _E], decorator)


# Register base errors
error_registry.register("INTERNAL_ERROR", AuthzError)
error_registry.register("CONFIGURATION_ERROR", ConfigurationError)
error_registry.register("PERMISSION_DENIED", CapabilityError)
error_registry.register("NOT_IMPLEMENTED", NotImplementedFeatureError)
