"""Handles through which callers use a hierarchy.

Provides:
- ``Hierarchy`` — root handle returned by ``setup_hierarchy()``. Creates
  group handles and grants capabilities on any group by name.
- ``Group`` — handle for one group. Answers ``can`` queries, performs
  capabilities and grants capabilities on its own group only.

Each handle type only exposes the extension operations legal for it:
the ``*_on_group`` forms live on ``Hierarchy``, the plain forms on ``Group``.
"""

from __future__ import annotations

import functools
from collections.abc import Iterable, Mapping
from typing import Any, Callable, Optional

from ..config import AuthzConfig
from ..exceptions import CapabilityError, ConfigurationError, NotImplementedFeatureError
from ..logging import get_authz_logger, safe_preview
from .capabilities import (
    Behavior,
    Capability,
    CapabilityRegistry,
    coerce_abilities,
    coerce_permissions,
    coerce_plugins,
)
from .constants import BASE
from .graph import HierarchyGraph
from .inflect import name_forms
from .resolver import resolve


class _HierarchyView:
    """Read-only queries shared by both handle types."""

    _graph: HierarchyGraph

    @property
    def namespace(self) -> str:
        return self._graph.namespace

    def group_exists(self, name: str) -> bool:
        """True if ``name`` is a group anywhere in the hierarchy."""
        return name in self._graph

    def list_groups(self) -> list[str]:
        """All group names in the hierarchy, sorted."""
        return self._graph.group_names()

    def subgroup_exists(self, subgroup: str, group: Optional[str] = None) -> bool:
        """True if ``subgroup`` sits anywhere beneath ``group``.

        Not implemented yet.
        """
        raise NotImplementedFeatureError(
            "subgroup_exists method not implemented yet",
            subgroup=subgroup,
            group=group,
        )


def _grant_permissions(registry: CapabilityRegistry, log: Any, cando: Any) -> None:
    names = coerce_permissions(cando)
    registry.grant_permissions(names)
    log.debug("Granted permissions %s", safe_preview(names), group=registry.owner)


def _grant_abilities(registry: CapabilityRegistry, log: Any, code: Mapping[str, Behavior]) -> None:
    abilities = coerce_abilities(code)
    registry.grant_abilities(abilities)
    log.debug("Granted abilities %s", safe_preview(sorted(abilities)), group=registry.owner)


def _install_plugins(registry: CapabilityRegistry, log: Any, plugins: Any) -> None:
    bundles = coerce_plugins(plugins)
    registry.install_plugins(bundles)
    log.debug("Installed plugins %s", safe_preview([b.name for b in bundles]), group=registry.owner)


class Hierarchy(_HierarchyView):
    """Root handle for one hierarchy.

    Usage::

        authz = setup_hierarchy(groups, "SpyLand")
        spies = authz.get_group("spies")
        authz.setup_permissions_on_group("spies", ["fly_helicopter"])
    """

    def __init__(self, graph: HierarchyGraph, config: Optional[AuthzConfig] = None) -> None:
        self._graph = graph
        self.config = config or AuthzConfig()
        self._log = get_authz_logger(__name__, namespace=graph.namespace)

    @property
    def graph(self) -> HierarchyGraph:
        return self._graph

    def get_group(self, name: str) -> Group:
        """Return a handle for group ``name``.

        Unknown names fall back to ``base`` with a warning. The singular
        and plural of the group name are granted as permissions on the
        group each time a handle is created.

        Raises:
            ConfigurationError: If ``name`` is empty.
        """
        if not name:
            raise ConfigurationError("No group name")

        if name not in self._graph:
            self._log.warning("Unknown group: %s - using '%s' instead", name, BASE, group=name)
            name = BASE

        group = Group(self, name)
        if self.config.name_permissions:
            group.setup_permissions(list(name_forms(name)))
        return group

    def new(self, name: str) -> Group:
        """Alias for ``get_group``."""
        return self.get_group(name)

    def dump_hierarchy(self) -> str:
        """Quick printout of the hierarchy structure. The format may change."""
        return self._graph.dump()

    # -- Extension operations on any group --------------------------------------

    def _registry_for(self, group: Any) -> CapabilityRegistry:
        if isinstance(group, Group):
            raise ConfigurationError("Pass a group name, not a group handle", group=group.group_name)
        if not group:
            raise ConfigurationError("Parameter(s) missing")
        return self._graph.node(group).capabilities

    def setup_permissions_on_group(self, group: str, cando: str | Iterable[str]) -> None:
        """Grant bare permissions on ``group``. See ``Group.setup_permissions``."""
        if not cando:
            raise ConfigurationError("Parameter(s) missing")
        _grant_permissions(self._registry_for(group), self._log, cando)

    def setup_abilities_on_group(
        self,
        group: str,
        code: Optional[Mapping[str, Behavior]] = None,
        /,
        **abilities: Behavior,
    ) -> None:
        """Grant abilities on ``group``. See ``Group.setup_abilities``."""
        _grant_abilities(self._registry_for(group), self._log, {**(code or {}), **abilities})

    def setup_plugins_on_group(self, group: str, plugins: Any) -> None:
        """Install plugin bundles on ``group``. See ``Group.setup_plugins``."""
        if not plugins:
            raise ConfigurationError("Parameter(s) missing")
        _install_plugins(self._registry_for(group), self._log, plugins)

    def __repr__(self) -> str:
        return f"Hierarchy(namespace={self.namespace!r})"


class Group(_HierarchyView):
    """Handle for one group within one hierarchy.

    Handles carry no capability data of their own; two handles for the
    same group of the same hierarchy are equal.
    """

    def __init__(self, hierarchy: Hierarchy, name: str) -> None:
        self._hierarchy = hierarchy
        self._graph = hierarchy.graph
        self._name = name
        self._log = get_authz_logger(__name__, namespace=self._graph.namespace, group=name)

    @property
    def group_name(self) -> str:
        return self._name

    @property
    def hierarchy(self) -> Hierarchy:
        return self._hierarchy

    @property
    def _registry(self) -> CapabilityRegistry:
        return self._graph.node(self._name).capabilities

    # -- Queries ----------------------------------------------------------------

    def capability(self, name: str) -> Optional[Capability]:
        """The definition of ``name`` this group would use, if it holds it."""
        return resolve(self._graph, self._name, name)

    def can(self, name: str) -> Optional[Callable[..., Any]]:
        """Return a callable for capability ``name``, or None.

        The callable is bound to this handle: for an ability it runs the
        ability's behaviour, for a bare permission it does nothing.
        """
        found = self.capability(name)
        if found is None:
            return None
        return functools.partial(found.behavior, self)

    def perform(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Run capability ``name`` with this handle as first argument.

        Raises:
            CapabilityError: If the group does not hold ``name``.
        """
        action = self.can(name)
        if action is None:
            raise CapabilityError(
                f"Group '{self._name}' cannot '{name}'",
                group=self._name,
                capability=name,
                namespace=self.namespace,
            )
        return action(*args, **kwargs)

    # -- Extension operations on this group -------------------------------------

    def setup_permissions(self, cando: str | Iterable[str]) -> None:
        """Grant one or more bare permissions on this group.

        Raises:
            ConfigurationError: If ``cando`` is empty.
        """
        _grant_permissions(self._registry, self._log, cando)

    def setup_abilities(
        self, code: Optional[Mapping[str, Behavior]] = None, /, **abilities: Behavior
    ) -> None:
        """Grant abilities on this group.

        Abilities come as a mapping, keyword arguments or both. Each
        behaviour is called with the acting group handle first, followed
        by the caller's arguments::

            spies.setup_abilities(encode_text=lambda group, text: text[::-1])
            spymasters.perform("encode_text", "abc")  # "cba"

        Raises:
            ConfigurationError: If no abilities are given or one is not callable.
        """
        _grant_abilities(self._registry, self._log, {**(code or {}), **abilities})

    def setup_plugins(self, plugins: Any) -> None:
        """Install one plugin bundle or a list of them on this group.

        A plugin is a ``PluginBundle``, a mapping of name → callable, a
        class or module whose public functions become its members, or the
        dotted import path of such a class or module.

        Raises:
            ConfigurationError: If no plugin is given or a plugin is empty.
        """
        _install_plugins(self._registry, self._log, plugins)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Group):
            return NotImplemented
        return self._graph is other._graph and self._name == other._name

    def __hash__(self) -> int:
        return hash((id(self._graph), self._name))

    def __repr__(self) -> str:
        return f"Group({self._name!r}, namespace={self.namespace!r})"


__all__ = ["Group", "Hierarchy"]
