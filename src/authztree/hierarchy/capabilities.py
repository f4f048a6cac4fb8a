"""Per-group capability storage.

A capability is a named thing a group may do. It is either a bare
permission (no behaviour) or an ability bound to a callable. Plugin
bundles attach many abilities at once and are consulted after everything
else reachable from the group that owns them.

Provides:
- ``Capability`` — a resolved capability entry.
- ``PluginBundle`` — a named collection of capability → callable pairs.
- ``CapabilityRegistry`` — the mutable store behind one group node.
"""

from __future__ import annotations

import importlib
import inspect
import threading
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from ..exceptions import ConfigurationError

Behavior = Callable[..., Any]


def noop(*args: Any, **kwargs: Any) -> None:
    """Behaviour of a bare permission."""
    return None


@dataclass(frozen=True)
class Capability:
    """A capability defined on one group.

    Attributes:
        name: Capability name.
        behavior: Callable invoked with the acting group handle first.
        owner: Name of the group whose registry defines it.
        source: ``"permission"``, ``"ability"`` or the plugin bundle name.
    """

    name: str
    behavior: Behavior = noop
    owner: Optional[str] = None
    source: str = "permission"

    @property
    def is_permission(self) -> bool:
        return self.behavior is noop


@dataclass(frozen=True)
class PluginBundle:
    """Named collection of capability → callable pairs attached as a unit."""

    name: str
    members: Mapping[str, Behavior] = field(default_factory=dict)

    @classmethod
    def from_object(cls, obj: Any) -> PluginBundle:
        """Build a bundle from the public functions of a class or module.

        Functions defined on a class take the acting group handle in
        place of ``self``. A module contributes the names in its
        ``__all__`` or, without one, only the functions it defines itself;
        names it merely imports are left out.

        Raises:
            ConfigurationError: If ``obj`` is neither a class nor a module.
        """
        if inspect.ismodule(obj):
            name = obj.__name__
            exported = getattr(obj, "__all__", None)
            if exported is not None:
                candidates = [attr for attr in exported if hasattr(obj, attr)]
            else:
                candidates = [
                    attr for attr in vars(obj)
                    if getattr(getattr(obj, attr), "__module__", None) == name
                ]
        elif inspect.isclass(obj):
            name = obj.__qualname__
            candidates = dir(obj)
        else:
            raise ConfigurationError("Not a plugin", plugin=repr(obj))

        members = {
            attr: getattr(obj, attr)
            for attr in candidates
            if not attr.startswith("_") and inspect.isroutine(getattr(obj, attr))
        }
        return cls(name=name, members=members)

    @classmethod
    def from_path(cls, path: str) -> PluginBundle:
        """Build a bundle from a dotted import path.

        ``path`` names a module (``"spyland.gadgets"``) or a class inside
        one (``"spyland.gadgets.Toolkit"``).

        Raises:
            ConfigurationError: If nothing importable lives at ``path``.
        """
        try:
            return cls.from_object(importlib.import_module(path))
        except (ImportError, ValueError, TypeError):
            pass

        module_name, _, attr = path.rpartition(".")
        try:
            target = getattr(importlib.import_module(module_name), attr)
        except (ImportError, ValueError, TypeError, AttributeError):
            raise ConfigurationError(f"Cannot import plugin '{path}'", plugin=path) from None
        return cls.from_object(target)

    @classmethod
    def coerce(cls, plugin: Any) -> PluginBundle:
        if isinstance(plugin, PluginBundle):
            bundle = plugin
        elif isinstance(plugin, Mapping):
            bundle = cls(name="<mapping>", members=dict(plugin))
        elif isinstance(plugin, str):
            bundle = cls.from_path(plugin)
        else:
            bundle = cls.from_object(plugin)

        if not bundle.members:
            raise ConfigurationError("Nothing to plug in", plugin=bundle.name)
        for member, behavior in bundle.members.items():
            if not callable(behavior):
                raise ConfigurationError(
                    f"Plugin member '{member}' is not callable",
                    plugin=bundle.name,
                )
        return bundle


def coerce_permissions(cando: str | Iterable[str] | None) -> list[str]:
    """Normalize a single permission name or a list of names."""
    if not cando:
        raise ConfigurationError("Nothing to permit")
    names = [cando] if isinstance(cando, str) else list(cando)
    if not names or not all(isinstance(n, str) and n for n in names):
        raise ConfigurationError("Permission names must be non-empty strings", permissions=names)
    return names


def coerce_abilities(code: Mapping[str, Behavior] | None) -> dict[str, Behavior]:
    """Validate capability name → callable pairs."""
    if not code:
        raise ConfigurationError("Nothing to set up")
    for name, behavior in code.items():
        if not callable(behavior):
            raise ConfigurationError(f"Ability '{name}' is not callable", ability=name)
    return dict(code)


def coerce_plugins(plugins: Any) -> list[PluginBundle]:
    """Normalize one plugin or a list of plugins into bundles."""
    if not plugins:
        raise ConfigurationError("Nothing to plug in")
    if isinstance(plugins, (list, tuple)):
        return [PluginBundle.coerce(p) for p in plugins]
    return [PluginBundle.coerce(plugins)]


class CapabilityRegistry:
    """Capabilities attached directly to one group.

    Writes are serialized by a per-registry lock. Readers never lock: each
    write replaces a whole entry or the whole bundle tuple, so a concurrent
    reader sees either the old or the new definition.
    """

    def __init__(self, owner: str | None) -> None:
        self.owner = owner
        self._local: dict[str, Capability] = {}
        self._plugins: tuple[PluginBundle, ...] = ()
        self._lock = threading.Lock()

    def grant_permissions(self, names: Iterable[str]) -> None:
        with self._lock:
            for name in names:
                self._local[name] = Capability(name=name, owner=self.owner)

    def grant_abilities(self, code: Mapping[str, Behavior]) -> None:
        with self._lock:
            for name, behavior in code.items():
                self._local[name] = Capability(
                    name=name, behavior=behavior, owner=self.owner, source="ability"
                )

    def install_plugins(self, bundles: Iterable[PluginBundle]) -> None:
        with self._lock:
            self._plugins = self._plugins + tuple(bundles)

    def local(self, name: str) -> Optional[Capability]:
        """Capability granted directly on this group, if any."""
        return self._local.get(name)

    def from_plugins(self, name: str) -> Optional[Capability]:
        """Capability provided by the first installed bundle that has ``name``."""
        for bundle in self._plugins:
            behavior = bundle.members.get(name)
            if behavior is not None:
                return Capability(name=name, behavior=behavior, owner=self.owner, source=bundle.name)
        return None

    def names(self) -> set[str]:
        """Names defined on this group, locally or through its bundles."""
        names = set(self._local)
        for bundle in self._plugins:
            names.update(bundle.members)
        return names

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and (self.local(name) is not None or self.from_plugins(name) is not None)


__all__ = [
    "Behavior",
    "Capability",
    "CapabilityRegistry",
    "PluginBundle",
    "coerce_abilities",
    "coerce_permissions",
    "coerce_plugins",
    "noop",
]
