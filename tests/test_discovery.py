import pytest

from cmdtree.arguments import word
from cmdtree.discovery import CommandArg, command_path, mount_commands, parse_docstring
from cmdtree.models import ArgumentKind
from cmdtree.node import CommandNode


class Plugin:
    "Commands mounted in the tests"

    def __init__(self):
        self.calls = []

    def run_reload(self, context):
        """Reload the configuration."""
        self.calls.append(("reload", dict(context.arguments)))
        return 1

    def run_wall__set(self, context):
        """<path> [mode] Set the wallpaper."""
        self.calls.append(("wall set", dict(context.arguments)))
        return 1

    def run_toggle_special(self, context):
        """<next|pause|clear> Control the playlist."""
        self.calls.append(("toggle-special", context.path))
        return 1

    def run_(self, context):
        "Nothing to mount"

    def helper(self):
        "Not a command"

    run_label = "not callable"


@pytest.mark.parametrize(
    ("docstring", "args", "short"),
    [
        ("", [], ""),
        ("Reload the configuration.", [], "Reload the configuration."),
        ("<name> Show a scratchpad", [CommandArg("name", True)], "Show a scratchpad"),
        ("<path> [mode] Set it", [CommandArg("path", True), CommandArg("mode", False)], "Set it"),
        ("<a|b>\n\nmore text", [CommandArg("a|b", True)], ""),
        ("Toggle the <name> scratchpad", [], "Toggle the <name> scratchpad"),
    ],
)
def test_parse_docstring(docstring, args, short):
    assert parse_docstring(docstring) == (args, short)


def test_command_arg():
    assert CommandArg("next|pause|", True).choices == ["next", "pause"]
    assert CommandArg("fast lane| slow", True).choices == ["fast_lane", "slow"]
    assert CommandArg("name", True).choices == []
    assert CommandArg("file name", False).node_name == "file_name"


@pytest.mark.parametrize(
    ("name", "path"),
    [
        ("reload", ["reload"]),
        ("toggle_special", ["toggle-special"]),
        ("wall__next", ["wall", "next"]),
        ("a__b_c__d", ["a", "b-c", "d"]),
    ],
)
def test_command_path(name, path):
    assert command_path(name) == path


class TestMount:
    @pytest.fixture
    def plugin(self):
        return Plugin()

    @pytest.fixture
    def root(self, plugin, test_logger):
        root = CommandNode("tool", logger=test_logger)
        mount_commands(root, plugin)
        return root

    def test_mounted_paths(self, root):
        assert sorted(root.children) == ["reload", "toggle-special", "wall"]
        assert list(root.get_child("wall").children) == ["set"]

    def test_no_arguments(self, root, dispatcher, plugin, visitor):
        dispatcher.register(root.compile(), None)
        assert dispatcher.execute("tool reload", visitor) == 1
        assert plugin.calls == [("reload", {})]

    def test_required_and_optional(self, root, dispatcher, plugin, visitor):
        set_node = root.get_child("wall").get_child("set")
        assert set_node.executor is None
        path = set_node.get_child("path")
        assert path.argument_spec == word()
        assert path.executor is not None
        assert path.get_child("mode").executor is not None

        dispatcher.register(root.compile(), None)
        dispatcher.execute("tool wall set /tmp/a.png", visitor)
        dispatcher.execute("tool wall set /tmp/a.png fill", visitor)
        assert plugin.calls == [
            ("wall set", {"path": "/tmp/a.png"}),
            ("wall set", {"path": "/tmp/a.png", "mode": "fill"}),
        ]

    def test_choices_are_literals(self, root, dispatcher, plugin, visitor):
        toggle = root.get_child("toggle-special").compile()
        assert sorted(toggle.children) == ["clear", "next", "pause"]
        assert all(child.is_literal and child.is_executable for child in toggle.children.values())
        assert not toggle.is_executable

        dispatcher.register(root.compile(), None)
        dispatcher.execute("tool toggle-special pause", visitor)
        assert plugin.calls == [("toggle-special", ["tool", "toggle-special", "pause"])]

    def test_returns_deepest_nodes(self, plugin):
        root = CommandNode("tool")
        mounted = mount_commands(root, plugin)
        assert sorted(node.path for node in mounted) == [
            "tool reload",
            "tool toggle-special clear",
            "tool toggle-special next",
            "tool toggle-special pause",
            "tool wall set path mode",
        ]

    def test_custom_prefix(self):
        class Other:
            def cmd_ping(self, context):
                return 1

        root = CommandNode("tool")
        mount_commands(root, Other(), prefix="cmd_")
        compiled = root.get_child("ping").compile()
        assert compiled.is_literal
        assert compiled.is_executable

    def test_argument_kinds(self, root):
        compiled = root.get_child("wall").get_child("set").compile()
        assert isinstance(compiled.children["path"].kind, ArgumentKind)
        assert compiled.children["path"].children["mode"].kind.spec == word()


def test_choices_with_spaces_are_mounted(test_logger):
    class Lanes:
        def run_lane(self, context):
            """<fast lane|slow> Pick a lane."""
            return 1

    root = CommandNode("tool", logger=test_logger)
    mount_commands(root, Lanes())
    assert sorted(root.get_child("lane").children) == ["fast_lane", "slow"]
