"""Mount the `run_*` methods of an object as commands.

Method names give the path (`run_wall__next` is mounted as "wall next",
`run_toggle_special` as "toggle-special"). The first docstring line may start
with arguments: `<arg>` is required, `[arg]` optional and `<a|b>` offers the
literal choices `a` and `b`.
"""

from __future__ import annotations

import inspect
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .arguments import word

if TYPE_CHECKING:
    from .models import Executor
    from .node import CommandNode

__all__ = ["CommandArg", "command_path", "mount_commands", "parse_docstring"]

# Regex pattern to match args: <required> or [optional]
_ARG_PATTERN = re.compile(r"([<\[])([^>\]]+)([>\]])")


@dataclass
class CommandArg:
    """An argument parsed from a command's docstring."""

    value: str  # e.g., "next|pause|clear" or "name"
    required: bool  # True for <arg>, False for [arg]

    @property
    def choices(self) -> list[str]:
        """Literal choices as node names, empty for a free argument."""
        if "|" not in self.value:
            return []
        return ["_".join(choice.split()) for choice in self.value.split("|") if choice.strip()]

    @property
    def node_name(self) -> str:
        """Name of the argument node."""
        return "_".join(self.value.split())


def parse_docstring(docstring: str) -> tuple[list[CommandArg], str]:
    """Parse the leading arguments of a docstring.

    Args:
        docstring: The raw docstring to parse

    Returns:
        Tuple of (args, short_description)
    """
    if not docstring:
        return [], ""

    first_line = docstring.strip().split("\n")[0].strip()

    args: list[CommandArg] = []
    last_end = 0

    for match in _ARG_PATTERN.finditer(first_line):
        # stop at the first marker preceded by plain text
        if match.start() != last_end and first_line[last_end : match.start()].strip():
            break
        args.append(CommandArg(value=match.group(2).strip(), required=match.group(1) == "<"))
        last_end = match.end()
        while last_end < len(first_line) and first_line[last_end] == " ":
            last_end += 1

    return args, first_line[last_end:].strip()


def command_path(name: str) -> list[str]:
    """Split a method name (without prefix) into node names."""
    return [segment.replace("_", "-") for segment in name.split("__") if segment]


def _mount_arguments(command: CommandNode, args: list[CommandArg], executor: Executor) -> list[CommandNode]:
    """Create the argument nodes below `command` and attach `executor` where the input may end."""
    frontier = [command]
    for index, arg in enumerate(args):
        if not any(later.required for later in args[index:]):
            for node in frontier:
                node.on_execute(executor)
        next_frontier: list[CommandNode] = []
        for node in frontier:
            if arg.choices:
                next_frontier.extend(node.get_child(choice) for choice in arg.choices)
            else:
                next_frontier.append(node.get_child(arg.node_name).set_type(word()))
        frontier = next_frontier
    for node in frontier:
        node.on_execute(executor)
    return frontier


def mount_commands(node: CommandNode, obj: object, prefix: str = "run_") -> list[CommandNode]:
    """Mount every method of `obj` named `<prefix>...` below `node`.

    Methods are called with the `CommandContext` and return the result code.

    Args:
        node: where to mount the commands
        obj: any object (usually a plugin instance)
        prefix: method name prefix

    Returns:
        The deepest nodes created for each command
    """
    mounted: list[CommandNode] = []

    for attr in sorted(dir(obj)):
        if not attr.startswith(prefix):
            continue
        method = getattr(obj, attr)
        if not callable(method):
            continue
        path = command_path(attr[len(prefix) :])
        if not path:
            continue

        target = node
        for segment in path:
            target = target.get_child(segment)

        args, _ = parse_docstring(inspect.getdoc(method) or "")
        mounted.extend(_mount_arguments(target, args, method))
        node.log.debug("Mounted %s from %s", target.path, type(obj).__name__)

    return mounted
