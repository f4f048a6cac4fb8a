"""Configuration contract for authztree.

This module provides Pydantic-validated models for:
- Runtime settings (log level, log format, self-naming permissions)
- Hierarchy descriptions (group name → ordered subordinate names)

Loading a hierarchy description from a file is left to callers; whatever
they parse is validated through ``HierarchyDescription`` before a graph is built.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class LogLevel(str, Enum):
    """Standard log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class AuthzConfig(BaseModel):
    """Runtime configuration shared by every hierarchy in a registry."""

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Use JSON log format (default: plain text)",
    )
    service_name: Optional[str] = Field(
        default=None,
        description="Service logger to set to the configured level",
    )

    # Resolution
    name_permissions: bool = Field(
        default=True,
        description="Grant each group the singular and plural of its own name on handle creation",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Convert string to LogLevel enum."""
        if isinstance(v, LogLevel):
            return v
        if isinstance(v, str):
            try:
                return LogLevel[v.upper()]
            except KeyError:
                raise ValueError(f"Invalid log level: {v}. Must be one of {[e.value for e in LogLevel]}")
        raise ValueError(f"Log level must be string or LogLevel enum, got {type(v)}")

    model_config = {
        "use_enum_values": True,
        "extra": "forbid",
    }


class HierarchyDescription(BaseModel):
    """Validated hierarchy description.

    ``groups`` maps each group name to the ordered names of the groups it
    is senior to. A single subordinate may be given as a bare string.
    """

    groups: dict[str, list[str]] = Field(
        description="Group name → ordered subordinate group names",
    )
    namespace: Optional[str] = Field(
        default=None,
        description="Isolation key; None or empty selects the default hierarchy",
    )

    @field_validator("groups", mode="before")
    @classmethod
    def wrap_single_subordinates(cls, v: object) -> object:
        if isinstance(v, dict):
            return {k: [s] if isinstance(s, str) else s for k, s in v.items()}
        return v

    @field_validator("groups")
    @classmethod
    def validate_groups(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        if not v:
            raise ValueError("No groups data")
        for group, subordinates in v.items():
            if not group:
                raise ValueError("Group names must be non-empty strings")
            for name in subordinates:
                if not name:
                    raise ValueError(f"Group '{group}' lists an empty subordinate name")
        return v

    model_config = {"extra": "forbid"}


def load_config_from_env() -> AuthzConfig:
    """Load configuration from environment variables.

    This is the ONLY place where os.getenv is allowed.

    Environment variables:
    - LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - LOG_JSON: Use JSON log format (true/false, default: false)
    - SERVICE_NAME: Service name for logger identification
    - AUTHZ_NAME_PERMISSIONS: Self-naming permissions (true/false, default: true)

    Returns:
        AuthzConfig instance with values from environment or defaults.
    """
    import os

    _TRUTHY = ("true", "1", "yes", "on")

    return AuthzConfig(
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_json=os.getenv("LOG_JSON", "false").lower() in _TRUTHY,
        service_name=os.getenv("SERVICE_NAME"),
        name_permissions=os.getenv("AUTHZ_NAME_PERMISSIONS", "true").lower() in _TRUTHY,
    )


__all__ = [
    "AuthzConfig",
    "HierarchyDescription",
    "LogLevel",
    "load_config_from_env",
]
