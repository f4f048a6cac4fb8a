"""Capability resolution.

``resolve()`` decides whether a group holds a capability and returns the
definition that wins. The search is depth-first over senior → subordinate
edges, left to right, stopping at the first node that defines the name:

1. the node's own grants,
2. its subordinates, recursively, in declaration order,
3. the node's plugin bundles, in installation order.

The apex and the floor are handled before the generic search.
"""

from __future__ import annotations

from typing import Optional

from .capabilities import Capability
from .constants import BASE, CAN, SUPERUSER
from .graph import GroupNode, HierarchyGraph


def _search(graph: HierarchyGraph, node: GroupNode, name: str, seen: set[int]) -> Optional[Capability]:
    if id(node) in seen:
        return None
    seen.add(id(node))

    found = node.capabilities.local(name)
    if found is not None:
        return found
    for child in graph.children(node):
        found = _search(graph, child, name, seen)
        if found is not None:
            return found
    return node.capabilities.from_plugins(name)


def resolve(graph: HierarchyGraph, group: str, name: str) -> Optional[Capability]:
    """Find the capability ``name`` as seen from ``group``.

    Args:
        graph: Hierarchy to search.
        group: Name of the queried group.
        name: Capability name.

    Returns:
        The nearest definition, or None if the group does not hold it.
        ``superuser`` never gets None: with no definition anywhere it
        receives a bare permission.
    """
    node = graph.node(group)

    if group == BASE:
        if name == CAN:
            return None
        caps = node.capabilities
        return caps.local(name) or caps.from_plugins(name)

    found = _search(graph, node, name, set())
    if found is None and group == SUPERUSER:
        return Capability(name=name, owner=SUPERUSER)
    return found


__all__ = ["resolve"]
