"""Tests for the root registry."""

from unittest.mock import Mock

import pytest

from cmdtree.arguments import word
from cmdtree.config import Configuration
from cmdtree.models import RegistrationEnvironment, TreeSealedError
from cmdtree.registry import RootRegistry
from cmdtree.schema import CMDTREE_CONFIG_SCHEMA

from .testtools import FakeSource


def test_get_root_is_idempotent(registry):
    root = registry.get_root("tools")
    assert registry.get_root("tools") is root
    assert root.parent is None
    assert registry.roots == {"tools": root}


def test_roots_share_registry_policy_and_logger(registry):
    root = registry.get_root("tools")
    assert root.policy is registry.policy
    assert root.log is registry.log


def test_permission_root_protects_direct_children(registry):
    registry.get_permission_root("x", "perm.x")
    child = registry.get_root("x").get_child("y")

    assert child.required_permissions == {"perm.x"}
    gate = child.compile().requirement
    assert gate(FakeSource("holder", {"perm.x"}))
    assert not gate(FakeSource("other", {"perm.y"}))


def test_permission_root_protection_is_one_level(registry):
    root = registry.get_permission_root("x", "perm.x")
    grandchild = root.get_child("y").get_child("z")
    assert grandchild.required_permissions == set()
    assert grandchild.requirements == []


def test_permission_root_called_twice(registry):
    first = registry.get_permission_root("x", "perm.x")
    second = registry.get_permission_root("x", "perm.x")
    assert first is second
    assert len(first.requirements) == 1


def test_earlier_child_is_protected_when_fetched_again(registry):
    child = registry.get_root("x").get_child("y")
    registry.get_permission_root("x", "perm.x")
    assert child.required_permissions == set()
    assert registry.get_root("x").get_child("y") is child
    assert child.required_permissions == {"perm.x"}


def test_existing_child_can_be_read_after_registration(registry, dispatcher):
    root = registry.get_root("x")
    child = root.get_child("y")
    registry.get_permission_root("x", "perm.x")
    registry.register_all(dispatcher)

    assert root.get_child("y") is child
    assert child.required_permissions == set()
    with pytest.raises(TreeSealedError):
        root.get_child("z")


def test_unprotected_child_of_permission_root(registry):
    root = registry.get_permission_root("x", "perm.x")
    assert root.get_unprotected_child("open").requirements == []


def test_admin_root_defaults(registry):
    admin = registry.get_admin_root()
    assert registry.get_admin_root() is admin
    assert admin.name == "admin"
    assert admin.required_permissions == {"commands.admin.root"}
    assert admin.get_child("reload").required_permissions == {"commands.admin.root"}


def test_admin_root_from_config(policy, test_logger):
    config = Configuration({"admin_root": "staff", "admin_permission": "staff.use"}, logger=test_logger, schema=CMDTREE_CONFIG_SCHEMA)
    registry = RootRegistry.from_config(config, policy)
    admin = registry.get_admin_root()
    assert admin.name == "staff"
    assert admin.required_permissions == {"staff.use"}
    assert registry.log is test_logger


class TestRegisterAll:
    """The one-shot registration pass."""

    def test_registers_every_root(self, registry, dispatcher):
        registry.get_root("a").on_execute(lambda ctx: 1)
        registry.get_root("b").get_child("c").on_execute(lambda ctx: 2)

        assert sorted(registry.register_all(dispatcher)) == ["a", "b"]
        assert sorted(dispatcher.roots) == ["a", "b"]
        assert dispatcher.environments["a"] == RegistrationEnvironment.ALL

    def test_environment_is_passed(self, registry):
        host = Mock()
        registry.get_root("a")
        registry.register_all(host, RegistrationEnvironment.DEDICATED)
        compiled, environment = host.register.call_args.args
        assert compiled.name == "a"
        assert environment == RegistrationEnvironment.DEDICATED

    def test_environment_from_config(self, policy, test_logger, dispatcher):
        config = Configuration({"environment": "embedded"}, logger=test_logger, schema=CMDTREE_CONFIG_SCHEMA)
        registry = RootRegistry.from_config(config, policy)
        registry.get_root("a")

        registry.register_all(dispatcher)
        assert dispatcher.environments["a"] == RegistrationEnvironment.EMBEDDED

    def test_invalid_environment_falls_back(self, policy, test_logger, dispatcher):
        config = Configuration({"environment": "everywhere"}, logger=test_logger, schema=CMDTREE_CONFIG_SCHEMA)
        registry = RootRegistry.from_config(config, policy)
        registry.get_root("a")

        assert registry.register_all(dispatcher) == ["a"]
        assert dispatcher.environments["a"] == RegistrationEnvironment.ALL
        test_logger.error.assert_called_once()

    def test_non_literal_root_is_skipped(self, registry, dispatcher, test_logger):
        registry.get_root("bad").set_type(word())
        registry.get_root("good").on_execute(lambda ctx: 1)

        assert registry.register_all(dispatcher) == ["good"]
        assert list(dispatcher.roots) == ["good"]
        test_logger.error.assert_called_once()
        assert "bad" in test_logger.error.call_args.args

    def test_refused_root_does_not_block_others(self, registry, test_logger):
        host = Mock()
        host.register.side_effect = [ValueError("nope"), None]
        registry.get_root("first")
        registry.get_root("second")

        assert registry.register_all(host) == ["second"]
        assert host.register.call_count == 2
        test_logger.exception.assert_called_once()

    def test_second_call_is_ignored(self, registry, dispatcher, test_logger):
        registry.get_root("a")
        registry.register_all(dispatcher)
        host = Mock()

        assert registry.register_all(host) == []
        host.register.assert_not_called()
        test_logger.warning.assert_called_once()

    def test_trees_are_sealed(self, registry, dispatcher):
        root = registry.get_root("a")
        child = root.get_child("b")
        registry.register_all(dispatcher)

        assert registry.registered
        assert registry.get_root("a") is root
        with pytest.raises(TreeSealedError):
            child.on_execute(lambda ctx: 1)
        with pytest.raises(TreeSealedError):
            registry.get_root("late")

    def test_empty_registry(self, registry, dispatcher):
        assert registry.register_all(dispatcher) == []
        assert dispatcher.roots == {}

