"""Centralized logging utilities for authztree.

This module provides:
- Logging configuration from AuthzConfig
- Safe preview utilities for capability payloads
- Structured logging with hierarchy namespace and group context
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from .config import AuthzConfig, LogLevel

_RESERVED_ATTRS = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "message", "pathname", "process", "processName", "relativeCreated",
        "thread", "threadName", "exc_info", "exc_text", "stack_info",
        "taskName", "namespace", "group",
    }
)


def safe_preview(value: Any, limit: int = 240) -> str:
    """Create a length-bounded, single-line preview of a value for logging.

    Args:
        value: The value to preview (any type)
        limit: Maximum length of the preview (default: 240)

    Returns:
        A truncated string representation
    """
    if value is None:
        return ""

    if isinstance(value, str):
        s = value
    elif isinstance(value, (dict, list, tuple)):
        try:
            s = json.dumps(value, default=str, ensure_ascii=False)
        except (TypeError, ValueError):
            s = str(value)
    else:
        s = str(value)

    s = " ".join(s.split())

    if len(s) > limit:
        return s[: limit - 1] + "…"

    return s


class AuthzFormatter(logging.Formatter):
    """Formatter that includes hierarchy context, as JSON or plain text."""

    def __init__(self, json_format: bool = True, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.json_format = json_format

    def format(self, record: logging.LogRecord) -> str:
        namespace = getattr(record, "namespace", None)
        group = getattr(record, "group", None)

        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # The default namespace is the empty string, so test against None.
        if namespace is not None:
            log_data["namespace"] = namespace
        if group is not None:
            log_data["group"] = group

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = safe_preview(value)

        if self.json_format:
            return json.dumps(log_data, default=str, ensure_ascii=False)

        parts = [
            f"[{log_data['timestamp']}]",
            f"{log_data['level']}",
            f"{log_data['logger']}",
        ]
        if namespace:
            parts.append(f"namespace={namespace}")
        if group is not None:
            parts.append(f"group={group}")
        parts.append(f": {log_data['message']}")
        return " ".join(parts)


class AuthzLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds namespace and group to log records.

    Usage:
        logger = get_authz_logger(__name__, namespace="SpyLand")
        logger.info("Granted", group="spies")
    """

    def __init__(
        self,
        logger: logging.Logger,
        namespace: Optional[str] = None,
        group: Optional[str] = None,
    ):
        super().__init__(logger, {})
        self.namespace = namespace
        self.group = group

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        namespace = kwargs.pop("namespace", self.namespace)
        group = kwargs.pop("group", self.group)

        extra = kwargs.get("extra", {})
        if namespace is not None:
            extra["namespace"] = namespace
        if group is not None:
            extra["group"] = group
        kwargs["extra"] = extra

        return msg, kwargs


def setup_logging(
    config: Optional[AuthzConfig] = None,
    json_format: Optional[bool] = None,
    service_name: Optional[str] = None,
) -> None:
    """Configure the root logger for an application using authztree.

    Args:
        config: AuthzConfig instance (if None, loads from environment)
        json_format: Override ``config.log_json``
        service_name: Optional logger name to set to the same level
    """
    if config is None:
        from .config import load_config_from_env
        config = load_config_from_env()

    level_map = {
        LogLevel.DEBUG: logging.DEBUG,
        LogLevel.INFO: logging.INFO,
        LogLevel.WARNING: logging.WARNING,
        LogLevel.ERROR: logging.ERROR,
        LogLevel.CRITICAL: logging.CRITICAL,
    }
    log_level = level_map.get(config.log_level, logging.INFO)
    if json_format is None:
        json_format = config.log_json

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(AuthzFormatter(json_format=json_format))
    root_logger.addHandler(console_handler)

    service_name = service_name or config.service_name
    if service_name:
        logging.getLogger(service_name).setLevel(log_level)


def get_authz_logger(
    name: str,
    namespace: Optional[str] = None,
    group: Optional[str] = None,
) -> AuthzLoggerAdapter:
    """Get a logger adapter carrying hierarchy context.

    Args:
        name: Logger name (typically __name__)
        namespace: Optional hierarchy namespace to include in all logs
        group: Optional group name to include in all logs

    Returns:
        AuthzLoggerAdapter instance
    """
    logger = logging.getLogger(name)
    return AuthzLoggerAdapter(logger, namespace=namespace, group=group)


__all__ = [
    "safe_preview",
    "AuthzFormatter",
    "AuthzLoggerAdapter",
    "setup_logging",
    "get_authz_logger",
]
