"""Compiled command structures, invocation contexts and errors.

The compiled tree is what a host dispatcher consumes: every node is either a
literal (matches its exact name) or an argument (typed, optionally suggesting
values). The distinction is a tagged union, `LiteralKind | ArgumentKind`.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import IntEnum, StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .arguments import ArgumentSpec

__all__ = [
    "ArgumentKind",
    "CmdTreeError",
    "CommandContext",
    "CommandResult",
    "CompiledNode",
    "ConfigError",
    "Executor",
    "InvalidNodeNameError",
    "LiteralKind",
    "NodeKind",
    "RegistrationEnvironment",
    "Requirement",
    "SuggestionContext",
    "SuggestionProvider",
    "TreeSealedError",
]


class CmdTreeError(Exception):
    """Base class for command tree errors."""


class InvalidNodeNameError(CmdTreeError, ValueError):
    """A node name is empty or contains whitespace."""


class TreeSealedError(CmdTreeError):
    """A tree was mutated after it was handed to the host dispatcher."""


class ConfigError(CmdTreeError):
    """Used for configuration errors which already triggered logging."""


class CommandResult(IntEnum):
    """Result codes returned by executors."""

    FAILURE = 0
    SUCCESS = 1


class RegistrationEnvironment(StrEnum):
    """Marker passed along with each root when registering with the host."""

    ALL = "all"
    DEDICATED = "dedicated"
    EMBEDDED = "embedded"


@dataclass
class CommandContext:
    """What an executor receives when the host invokes a command."""

    source: Any
    input: str
    arguments: dict[str, Any] = field(default_factory=dict)
    path: list[str] = field(default_factory=list)

    def get_argument(self, name: str, default: Any = None) -> Any:  # noqa: ANN401
        """Return the parsed value of argument `name`."""
        return self.arguments.get(name, default)


@dataclass
class SuggestionContext:
    """Partial input handed to suggestion providers."""

    source: Any
    input: str
    remaining: str = ""
    arguments: dict[str, Any] = field(default_factory=dict)


Requirement = Callable[[Any], bool]
Executor = Callable[[CommandContext], int]
SuggestionProvider = Callable[[SuggestionContext], Awaitable[list[str]]]


@dataclass(frozen=True)
class LiteralKind:
    """Matches only the node's exact name text."""


@dataclass(frozen=True)
class ArgumentKind:
    """A typed argument, optionally offering completions."""

    spec: ArgumentSpec
    suggestions: SuggestionProvider | None = None


NodeKind = LiteralKind | ArgumentKind


@dataclass
class CompiledNode:
    """A node of the compiled tree, ready for the host dispatcher."""

    name: str
    kind: NodeKind
    requirement: Requirement | None = None
    executor: Executor | None = None
    children: dict[str, CompiledNode] = field(default_factory=dict)

    @property
    def is_literal(self) -> bool:
        """Return True for literal nodes."""
        return isinstance(self.kind, LiteralKind)

    @property
    def is_executable(self) -> bool:
        """Return True if invoking this node runs an executor."""
        return self.executor is not None

    def then(self, child: CompiledNode) -> CompiledNode:
        """Attach `child` beneath this node and return self."""
        self.children[child.name] = child
        return self

    def can_use(self, source: Any) -> bool:  # noqa: ANN401
        """Evaluate the reachability gate for `source`."""
        return self.requirement is None or self.requirement(source)

    def usage_token(self) -> str:
        """Return how this node appears in a usage line."""
        if isinstance(self.kind, ArgumentKind):
            return f"<{self.name}>"
        return self.name
