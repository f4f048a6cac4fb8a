"""Shared fixtures: the SpyLand hierarchy."""

from __future__ import annotations

import pytest

from authztree import Hierarchy, HierarchyRegistry


@pytest.fixture
def groups() -> dict[str, list[str]]:
    return {
        "superuser": ["spymasters", "politicians"],
        "spymasters": ["spies", "moles"],
        "spies": ["informants"],
        "informants": ["base"],
        "moles": ["base"],
        "politicians": ["citizens"],
        "citizens": ["base"],
    }


@pytest.fixture
def registry() -> HierarchyRegistry:
    return HierarchyRegistry()


@pytest.fixture
def spyland(registry: HierarchyRegistry, groups: dict[str, list[str]]) -> Hierarchy:
    return registry.setup_hierarchy(groups, "SpyLand")
