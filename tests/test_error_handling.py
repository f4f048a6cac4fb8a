"""Tests for the error hierarchy and error registry."""

from __future__ import annotations

import pytest

from authztree import (
    AuthzError,
    CapabilityError,
    ConfigurationError,
    NotImplementedFeatureError,
    error_registry,
    register_error,
)


class TestErrorHierarchy:
    """Tests for AuthzError and subclasses."""

    def test_defaults(self) -> None:
        error = ConfigurationError()
        assert error.code == "CONFIGURATION_ERROR"
        assert error.message == "Invalid configuration"
        assert error.details == {}

    def test_message_and_details(self) -> None:
        error = CapabilityError("Group 'spies' cannot 'vote'", group="spies", capability="vote")
        assert str(error) == "Group 'spies' cannot 'vote'"
        assert error.code == "PERMISSION_DENIED"
        assert error.details == {"group": "spies", "capability": "vote"}

    def test_subclasses(self) -> None:
        for cls in (ConfigurationError, CapabilityError, NotImplementedFeatureError):
            assert issubclass(cls, AuthzError)
        assert issubclass(NotImplementedFeatureError, NotImplementedError)

    def test_code_override(self) -> None:
        assert AuthzError("boom", code="CUSTOM").code == "CUSTOM"


class TestErrorRegistry:
    """Tests for the code → class registry."""

    def test_base_errors_registered(self) -> None:
        assert error_registry.get("CONFIGURATION_ERROR") is ConfigurationError
        assert error_registry.get("PERMISSION_DENIED") is CapabilityError
        assert error_registry.get("NOT_IMPLEMENTED") is NotImplementedFeatureError
        assert error_registry.get("UNKNOWN") is None

    def test_register_error_decorator(self) -> None:
        @register_error("SPY_ERROR")
        class SpyError(AuthzError):
            code = "SPY_ERROR"

        assert error_registry.get("SPY_ERROR") is SpyError
        assert "SPY_ERROR" in error_registry.all()

    def test_raised_errors_propagate(self) -> None:
        with pytest.raises(AuthzError):
            raise ConfigurationError("No groups data")
