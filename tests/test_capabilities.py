"""Tests for the per-group capability registry and plugin bundles."""

from __future__ import annotations

import types

import pytest

from authztree import ConfigurationError, PluginBundle
from authztree.hierarchy.capabilities import (
    CapabilityRegistry,
    coerce_abilities,
    coerce_permissions,
    coerce_plugins,
    noop,
)
from authztree.hierarchy.inflect import name_forms


class Toolkit:
    def pick_lock(self, door):
        return f"opened {door}"

    def _internal(self):
        pass


def _make_module(name: str, source: str) -> types.ModuleType:
    module = types.ModuleType(name)
    exec(source, module.__dict__)
    return module


class TestCapabilityRegistry:
    """Tests for CapabilityRegistry."""

    def test_grant_permissions(self) -> None:
        registry = CapabilityRegistry("spies")
        registry.grant_permissions(["read_secrets"])
        found = registry.local("read_secrets")
        assert found is not None
        assert found.behavior is noop
        assert found.owner == "spies"
        assert found.source == "permission"

    def test_grant_abilities(self) -> None:
        registry = CapabilityRegistry("spies")
        registry.grant_abilities({"encode_text": str.upper})
        found = registry.local("encode_text")
        assert found.behavior is str.upper
        assert found.source == "ability"
        assert not found.is_permission

    def test_plugins_not_local(self) -> None:
        registry = CapabilityRegistry("spies")
        registry.install_plugins([PluginBundle("Kit", {"hide": noop})])
        assert registry.local("hide") is None
        assert registry.from_plugins("hide").source == "Kit"
        assert "hide" in registry
        assert "seek" not in registry

    def test_names(self) -> None:
        registry = CapabilityRegistry("spies")
        registry.grant_permissions(["a"])
        registry.install_plugins([PluginBundle("Kit", {"b": noop})])
        assert registry.names() == {"a", "b"}


class TestPluginBundle:
    """Tests for building bundles from classes, modules and mappings."""

    def test_from_class(self) -> None:
        bundle = PluginBundle.from_object(Toolkit)
        assert bundle.name == "Toolkit"
        assert set(bundle.members) == {"pick_lock"}

    def test_from_module(self) -> None:
        module = _make_module("gadgets", "def fly(group):\n    return 'flying'\n")
        bundle = PluginBundle.coerce(module)
        assert bundle.name == "gadgets"
        assert set(bundle.members) == {"fly"}

    def test_module_imports_left_out(self) -> None:
        module = _make_module(
            "gadgets",
            "from os.path import join\ndef fly(group):\n    return 'flying'\n",
        )
        bundle = PluginBundle.coerce(module)
        assert "join" not in bundle.members
        assert set(bundle.members) == {"fly"}

    def test_module_all_honoured(self) -> None:
        module = _make_module(
            "gadgets",
            "__all__ = ['fly']\n"
            "def fly(group):\n    return 'flying'\n"
            "def self_destruct(group):\n    return 'boom'\n",
        )
        assert set(PluginBundle.coerce(module).members) == {"fly"}

    def test_from_module_path(self) -> None:
        bundle = PluginBundle.coerce("textwrap")
        assert bundle.name == "textwrap"
        assert "dedent" in bundle.members
        assert "TextWrapper" not in bundle.members

    def test_from_class_path(self) -> None:
        bundle = PluginBundle.coerce("string.Formatter")
        assert bundle.name == "Formatter"
        assert "vformat" in bundle.members

    def test_unimportable_path(self) -> None:
        with pytest.raises(ConfigurationError, match="Cannot import plugin 'My::Spies'"):
            PluginBundle.coerce("My::Spies")
        with pytest.raises(ConfigurationError, match="Cannot import plugin"):
            PluginBundle.coerce("textwrap.no_such_thing")

    def test_instance_is_not_a_plugin(self) -> None:
        with pytest.raises(ConfigurationError, match="Not a plugin"):
            PluginBundle.coerce(Toolkit())
        with pytest.raises(ConfigurationError, match="Not a plugin"):
            PluginBundle.coerce(42)

    def test_from_mapping(self) -> None:
        bundle = PluginBundle.coerce({"hide": noop})
        assert bundle.members == {"hide": noop}

    def test_non_callable_member(self) -> None:
        with pytest.raises(ConfigurationError, match="not callable"):
            PluginBundle.coerce(PluginBundle("Bad", {"hide": "nowhere"}))


class TestPayloadCoercion:
    """Tests for extension payload normalization."""

    def test_single_permission(self) -> None:
        assert coerce_permissions("vote") == ["vote"]

    def test_permission_list(self) -> None:
        assert coerce_permissions(("vote", "protest")) == ["vote", "protest"]

    def test_empty_permissions(self) -> None:
        for empty in (None, "", [], ()):
            with pytest.raises(ConfigurationError):
                coerce_permissions(empty)

    def test_blank_permission_name(self) -> None:
        with pytest.raises(ConfigurationError):
            coerce_permissions(["vote", ""])

    def test_empty_abilities(self) -> None:
        with pytest.raises(ConfigurationError):
            coerce_abilities({})

    def test_plugin_list(self) -> None:
        bundles = coerce_plugins([Toolkit, {"hide": noop}])
        assert [b.name for b in bundles] == ["Toolkit", "<mapping>"]


class TestNameForms:
    """Tests for singular/plural group name forms."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("spies", ("spies", "spy")),
            ("spy", ("spies", "spy")),
            ("informants", ("informants", "informant")),
            ("citizens", ("citizens", "citizen")),
        ],
    )
    def test_forms(self, name: str, expected: tuple[str, str]) -> None:
        assert name_forms(name) == expected
