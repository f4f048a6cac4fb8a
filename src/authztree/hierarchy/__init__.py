"""Inheritance-based authorization hierarchies.

Defines:
- HierarchyGraph: Groups and their senior → subordinate edges
- CapabilityRegistry: Permissions, abilities and plugin bundles per group
- resolve(): Nearest-definition capability lookup with apex/floor rules
- Hierarchy / Group: Root and per-group handles
- HierarchyRegistry: Namespaced hierarchies, with a process-wide default
"""

from .capabilities import Capability, CapabilityRegistry, PluginBundle, noop
from .constants import BASE, CAN, DEFAULT_NAMESPACE, SUPERUSER
from .graph import GroupNode, HierarchyGraph
from .handles import Group, Hierarchy
from .inflect import name_forms
from .registry import HierarchyRegistry, default_registry, get_hierarchy, setup_hierarchy
from .resolver import resolve

__all__ = [
    "BASE",
    "CAN",
    "DEFAULT_NAMESPACE",
    "SUPERUSER",
    "Capability",
    "CapabilityRegistry",
    "Group",
    "GroupNode",
    "Hierarchy",
    "HierarchyGraph",
    "HierarchyRegistry",
    "PluginBundle",
    "default_registry",
    "get_hierarchy",
    "name_forms",
    "noop",
    "resolve",
    "setup_hierarchy",
]
