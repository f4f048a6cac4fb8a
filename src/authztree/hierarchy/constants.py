"""Reserved names for authorization hierarchies.

Provides:
- ``SUPERUSER`` — the apex group, capable of everything.
- ``BASE`` — the floor group, capable only of what is granted on it directly.
- ``CAN`` — the capability-query capability, never held by the floor.
- ``DEFAULT_NAMESPACE`` — key of the always-available global hierarchy.
"""

from __future__ import annotations

SUPERUSER = "superuser"
BASE = "base"
CAN = "can"

DEFAULT_NAMESPACE = ""


__all__ = [
    "BASE",
    "CAN",
    "DEFAULT_NAMESPACE",
    "SUPERUSER",
]
