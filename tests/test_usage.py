import pytest

from cmdtree.arguments import greedy_string, integer
from cmdtree.usage import get_all_usage, get_commands_usage, get_help


@pytest.fixture
def commands(registry):
    admin = registry.get_permission_root("admin", "ops.admin")
    admin.get_child("reload").on_execute(lambda ctx: 1)
    admin.get_child("kick").get_child("target").set_type(integer()).on_execute(lambda ctx: 1)
    registry.get_root("say").get_child("message").set_type(greedy_string()).on_execute(lambda ctx: 1)
    registry.get_root("about").on_execute(lambda ctx: 1)
    registry.get_root("empty")
    return registry


def test_all_usage(commands):
    compiled = commands.get_root("admin").compile()
    assert get_all_usage(compiled) == ["admin kick <target>", "admin reload"]


def test_all_usage_executable_root(commands):
    assert get_all_usage(commands.get_root("about").compile()) == ["about"]


def test_all_usage_for_source(commands, operator, visitor):
    compiled = commands.get_root("admin").compile()
    assert get_all_usage(compiled, operator) == ["admin kick <target>", "admin reload"]
    assert get_all_usage(compiled, visitor) == []


def test_commands_usage(commands, visitor):
    assert get_commands_usage(commands, visitor) == {
        "about": ["about"],
        "say": ["say <message>"],
    }
    assert list(get_commands_usage(commands)) == ["about", "admin", "say"]


def test_help(commands, visitor):
    assert get_help(commands, visitor) == "Available commands:\n\nabout:\n  about\n\nsay:\n  say <message>"


def test_help_without_commands(registry):
    assert get_help(registry) == "Available commands:"
