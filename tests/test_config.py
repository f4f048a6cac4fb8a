"""Tests for AuthzConfig and HierarchyDescription."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from authztree import AuthzConfig, HierarchyDescription, LogLevel, load_config_from_env


class TestAuthzConfig:
    """Tests for AuthzConfig model."""

    def test_create_default_config(self) -> None:
        config = AuthzConfig()
        assert config.log_level == LogLevel.INFO
        assert config.log_json is False
        assert config.service_name is None
        assert config.name_permissions is True

    def test_log_level_from_string(self) -> None:
        config = AuthzConfig(log_level="debug")
        assert config.log_level == LogLevel.DEBUG

    def test_log_level_invalid(self) -> None:
        with pytest.raises(ValueError, match="Invalid log level"):
            AuthzConfig(log_level="INVALID")

    def test_extra_fields_forbidden(self) -> None:
        with pytest.raises(ValidationError):
            AuthzConfig(redis_url="redis://localhost")  # type: ignore[call-arg]


class TestLoadConfigFromEnv:
    """Tests for load_config_from_env."""

    def test_defaults(self, monkeypatch) -> None:
        for var in ("LOG_LEVEL", "LOG_JSON", "SERVICE_NAME", "AUTHZ_NAME_PERMISSIONS"):
            monkeypatch.delenv(var, raising=False)
        config = load_config_from_env()
        assert config.log_level == LogLevel.INFO
        assert config.log_json is False
        assert config.name_permissions is True

    def test_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        monkeypatch.setenv("LOG_JSON", "true")
        monkeypatch.setenv("SERVICE_NAME", "spyland")
        monkeypatch.setenv("AUTHZ_NAME_PERMISSIONS", "no")
        config = load_config_from_env()
        assert config.log_level == LogLevel.WARNING
        assert config.log_json is True
        assert config.service_name == "spyland"
        assert config.name_permissions is False


class TestHierarchyDescription:
    """Tests for HierarchyDescription validation."""

    def test_valid(self, groups) -> None:
        description = HierarchyDescription(groups=groups, namespace="SpyLand")
        assert description.groups["spymasters"] == ["spies", "moles"]
        assert description.namespace == "SpyLand"

    def test_bare_string_wrapped(self) -> None:
        description = HierarchyDescription(groups={"spies": "informants"})
        assert description.groups == {"spies": ["informants"]}

    def test_empty_groups(self) -> None:
        with pytest.raises(ValidationError, match="No groups data"):
            HierarchyDescription(groups={})

    def test_empty_names(self) -> None:
        with pytest.raises(ValidationError, match="non-empty"):
            HierarchyDescription(groups={"": ["base"]})
        with pytest.raises(ValidationError, match="empty subordinate"):
            HierarchyDescription(groups={"spies": ["informants", ""]})
