"""Namespaced registry of hierarchies.

Several independent hierarchies can live in one process, each under its
own namespace key. The default namespace (``""``) always resolves, to an
empty hierarchy until one is built for it.

Building a hierarchy under a namespace replaces whatever was registered
there before; handles into the old hierarchy keep working against the
old, now unregistered, graph. Build hierarchies before concurrent use.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping, Sequence
from typing import Optional

from pydantic import ValidationError

from ..config import AuthzConfig, HierarchyDescription
from ..exceptions import ConfigurationError
from ..logging import get_authz_logger
from .constants import DEFAULT_NAMESPACE
from .graph import HierarchyGraph
from .handles import Hierarchy

logger = get_authz_logger(__name__)


class HierarchyRegistry:
    """Namespace → ``Hierarchy`` registry."""

    def __init__(self, config: Optional[AuthzConfig] = None) -> None:
        self.config = config or AuthzConfig()
        self._hierarchies: dict[str, Hierarchy] = {}
        self._lock = threading.Lock()

    def setup_hierarchy(
        self,
        groups: Mapping[str, Sequence[str] | str] | None,
        namespace: Optional[str] = None,
    ) -> Hierarchy:
        """Build a hierarchy and register it under ``namespace``.

        Args:
            groups: Group name → ordered names of the groups it is senior to.
            namespace: Isolation key; None or ``""`` selects the default hierarchy.

        Returns:
            The root handle through which the hierarchy is used.

        Raises:
            ConfigurationError: If ``groups`` is empty, absent or malformed.
        """
        if not groups:
            raise ConfigurationError("No groups data", namespace=namespace)
        try:
            description = HierarchyDescription(groups=dict(groups), namespace=namespace)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid hierarchy description: {e}", namespace=namespace) from e

        key = description.namespace or DEFAULT_NAMESPACE
        hierarchy = Hierarchy(HierarchyGraph.build(description.groups, key), self.config)

        with self._lock:
            replaced = key in self._hierarchies
            self._hierarchies[key] = hierarchy

        logger.info(
            "%s hierarchy with %d groups",
            "Rebuilt" if replaced else "Built",
            len(hierarchy.list_groups()),
            namespace=key,
        )
        return hierarchy

    def get(self, namespace: Optional[str] = None) -> Hierarchy:
        """Return the hierarchy registered under ``namespace``.

        Raises:
            ConfigurationError: If a non-default namespace has no hierarchy.
        """
        key = namespace or DEFAULT_NAMESPACE
        hierarchy = self._hierarchies.get(key)
        if hierarchy is not None:
            return hierarchy
        if key != DEFAULT_NAMESPACE:
            raise ConfigurationError(f"No hierarchy registered for namespace '{key}'", namespace=key)
        with self._lock:
            return self._hierarchies.setdefault(
                DEFAULT_NAMESPACE, Hierarchy(HierarchyGraph.empty(), self.config)
            )

    def namespaces(self) -> list[str]:
        return sorted(self._hierarchies)

    def __contains__(self, namespace: object) -> bool:
        return namespace in self._hierarchies


default_registry = HierarchyRegistry()


def setup_hierarchy(
    groups: Mapping[str, Sequence[str] | str] | None,
    namespace: Optional[str] = None,
) -> Hierarchy:
    """Build and register a hierarchy in ``default_registry``."""
    return default_registry.setup_hierarchy(groups, namespace)


def get_hierarchy(namespace: Optional[str] = None) -> Hierarchy:
    """Look up a hierarchy in ``default_registry``."""
    return default_registry.get(namespace)


__all__ = [
    "HierarchyRegistry",
    "default_registry",
    "get_hierarchy",
    "setup_hierarchy",
]
