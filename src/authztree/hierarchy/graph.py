"""Group graph construction and traversal.

A hierarchy is a DAG of group nodes. Each edge points from a senior group
to a subordinate whose capabilities it inherits. Two reserved groups are
always present: ``superuser`` (apex) and ``base`` (floor). Below ``base``
sits the hierarchy root, which carries the built-in ``can`` capability.

The node set and edges are fixed once built; only the capability
registries hanging off each node change afterwards.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Optional

from ..exceptions import ConfigurationError
from .capabilities import CapabilityRegistry
from .constants import BASE, CAN, DEFAULT_NAMESPACE, SUPERUSER


def _can(group: Any, name: str) -> Any:
    return group.can(name)


@dataclass(eq=False)
class GroupNode:
    """One group in a hierarchy.

    ``name`` is None only for the hierarchy root beneath ``base``.
    """

    name: Optional[str]
    subordinates: tuple[str, ...] = ()
    capabilities: CapabilityRegistry = field(init=False)

    def __post_init__(self) -> None:
        self.capabilities = CapabilityRegistry(self.name)

    @property
    def is_root(self) -> bool:
        return self.name is None


class HierarchyGraph:
    """Immutable group graph plus the mutable registries of its nodes."""

    def __init__(self, nodes: Mapping[str, GroupNode], namespace: str = DEFAULT_NAMESPACE) -> None:
        self.namespace = namespace
        self.nodes: Mapping[str, GroupNode] = MappingProxyType(dict(nodes))
        self.root = GroupNode(None)
        self.root.capabilities.grant_abilities({CAN: _can})

    @classmethod
    def build(
        cls,
        groups: Mapping[str, Sequence[str]] | None,
        namespace: str | None = None,
    ) -> HierarchyGraph:
        """Build a graph from group name → ordered subordinate names.

        Subordinates that are not themselves keys become nodes too. Every
        group left without subordinates, ``superuser`` included, is wired
        to ``base``.

        Raises:
            ConfigurationError: If ``groups`` is empty or absent, or if it
                gives ``base`` subordinates of its own.
        """
        if not groups:
            raise ConfigurationError("No groups data")
        if groups.get(BASE):
            raise ConfigurationError("The base group cannot have subordinates", group=BASE)

        edges: dict[str, list[str]] = {}
        for group, subordinates in groups.items():
            edges.setdefault(group, [])
            for subordinate in subordinates:
                edges.setdefault(subordinate, [])
                if subordinate not in edges[group]:
                    edges[group].append(subordinate)

        edges.setdefault(SUPERUSER, [])
        edges[BASE] = []

        nodes = {
            name: GroupNode(name, tuple(subs) if subs or name == BASE else (BASE,))
            for name, subs in edges.items()
        }
        return cls(nodes, namespace or DEFAULT_NAMESPACE)

    @classmethod
    def empty(cls, namespace: str = DEFAULT_NAMESPACE) -> HierarchyGraph:
        """Graph holding only the reserved groups."""
        return cls.build({SUPERUSER: [BASE]}, namespace)

    # -- Lookup ---------------------------------------------------------------

    def __contains__(self, name: object) -> bool:
        return name in self.nodes

    def node(self, name: str) -> GroupNode:
        try:
            return self.nodes[name]
        except KeyError:
            raise ConfigurationError(f"Unknown group: {name}", group=name, namespace=self.namespace) from None

    def group_names(self) -> list[str]:
        return sorted(self.nodes)

    def children(self, node: GroupNode) -> list[GroupNode]:
        """Direct subordinates of ``node`` in declaration order."""
        if node.is_root:
            return []
        if node.name == BASE:
            return [self.root]
        return [self.nodes[name] for name in node.subordinates]

    # -- Traversal ------------------------------------------------------------

    def dump(self) -> str:
        """Tab-indented listing from ``superuser`` down to the root.

        Shared subordinates are repeated under every senior. Intended for
        quick printouts only; the format may change.
        """
        label = self.namespace or "(default)"
        lines: list[str] = []

        def visit(node: GroupNode, depth: int) -> None:
            lines.append("\t" * depth + (label if node.is_root else node.name))
            for child in self.children(node):
                visit(child, depth + 1)

        visit(self.nodes[SUPERUSER], 0)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"HierarchyGraph(namespace={self.namespace!r}, groups={len(self.nodes)})"


__all__ = ["GroupNode", "HierarchyGraph"]
