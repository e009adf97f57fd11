"""Declarative command tree nodes and their compiler.

Call sites obtain nodes (`RootRegistry.get_root`, `CommandNode.get_child`)
and configure them with the fluent setters. `compile` then turns a subtree
into `CompiledNode` objects for the host dispatcher.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import TYPE_CHECKING

from .arguments import string
from .logging_setup import get_logger
from .models import (
    ArgumentKind,
    CommandContext,
    CommandResult,
    CompiledNode,
    InvalidNodeNameError,
    LiteralKind,
    NodeKind,
    TreeSealedError,
)
from .requirements import PermissionPolicy, all_of
from .suggestions import fixed_suggestions

if TYPE_CHECKING:
    from .arguments import ArgumentSpec
    from .models import Executor, Requirement, SuggestionProvider

__all__ = ["CommandNode", "check_node_name"]


def check_node_name(name: str) -> str:
    """Validate a node name.

    Raises:
        InvalidNodeNameError: if the name is empty or contains whitespace
    """
    if not isinstance(name, str) or not name:
        msg = f"Invalid command node name: {name!r}"
        raise InvalidNodeNameError(msg)
    if any(char.isspace() for char in name):
        msg = f"Command node names can't contain whitespace: {name!r}"
        raise InvalidNodeNameError(msg)
    return name


class CommandNode:  # pylint: disable=too-many-instance-attributes
    """A single named point in the command tree.

    A node without argument spec is a literal. Its requirements are all
    checked (AND) when the host decides whether the node is reachable.
    """

    def __init__(
        self,
        name: str,
        parent: CommandNode | None = None,
        *,
        policy: PermissionPolicy | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.name = check_node_name(name)
        self.parent = parent
        self.children: dict[str, CommandNode] = {}
        self.executor: Executor | None = None
        self.argument_spec: ArgumentSpec | None = None
        self.requirements: list[Requirement] = []
        self.required_permissions: set[str] = set()
        self.suggestion_provider: SuggestionProvider | None = None
        self.protect_direct_children = False
        self.sealed = False

        if parent is not None:
            self.policy = policy or parent.policy
            self.log = logger or parent.log
        else:
            self.policy = policy or PermissionPolicy()
            self.log = logger or get_logger("cmdtree")

    def __repr__(self) -> str:
        return f"<CommandNode {self.path!r}>"

    @property
    def path(self) -> str:
        """Space separated names from the root to this node."""
        if self.parent is None:
            return self.name
        return f"{self.parent.path} {self.name}"

    @property
    def permission_path(self) -> str:
        """Derived permission string, eg: "admin.command.root" or "admin.command.reload"."""
        return self._permission_path(as_parent=False)

    def _permission_path(self, as_parent: bool) -> str:
        if self.parent is not None:
            return f"{self.parent._permission_path(as_parent=True)}.{self.name}"
        result = f"{self.name}.command"
        if not as_parent:
            result += ".root"
        return result

    @property
    def protection_permissions(self) -> list[str]:
        """Permissions inherited by protected children."""
        return sorted(self.required_permissions)

    def _ensure_mutable(self) -> None:
        if self.sealed:
            msg = f"Command '{self.path}' was already registered and can't be changed"
            raise TreeSealedError(msg)

    # Tree access

    def get_child(self, name: str) -> CommandNode:
        """Return the child called `name`, creating it on first use.

        Children of a node protecting its direct children inherit its permissions.
        """
        if self.protect_direct_children:
            return self.get_protected_child(name)
        return self.get_unprotected_child(name)

    def get_unprotected_child(self, name: str) -> CommandNode:
        """Return the child called `name` without adding protections."""
        child = self.children.get(name)
        if child is None:
            self._ensure_mutable()
            child = CommandNode(name, self)
            self.children[name] = child
        return child

    def get_protected_child(self, name: str) -> CommandNode:
        """Return the child called `name`, requiring this node's permissions.

        Once sealed, an existing child is returned unchanged.
        """
        child = self.get_unprotected_child(name)
        if child.sealed:
            return child
        for permission in self.protection_permissions:
            child.requires(permission)
        return child

    def walk(self) -> Iterator[CommandNode]:
        """Iterate over this node and all its descendants, depth first."""
        yield self
        for child in self.children.values():
            yield from child.walk()

    # Configuration

    def requires(self, requirement: Requirement | str) -> CommandNode:
        """Add a requirement.

        Args:
            requirement: a predicate over the invocation source, or a
                permission string checked through the permission policy

        Returns:
            self
        """
        if isinstance(requirement, str) and requirement in self.required_permissions:
            return self
        self._ensure_mutable()
        if isinstance(requirement, str):
            self.policy.declare(requirement)
            self.required_permissions.add(requirement)
            requirement = self.policy.requirement(requirement)
        self.requirements.append(requirement)
        return self

    def on_execute(self, executor: Executor) -> CommandNode:
        """Set the executor, making the node executable."""
        self._ensure_mutable()
        self.executor = executor
        return self

    def set_type(self, argument_spec: ArgumentSpec) -> CommandNode:
        """Turn the node into a typed argument."""
        self._ensure_mutable()
        self.argument_spec = argument_spec
        return self

    def suggests(self, provider: SuggestionProvider | Iterable[str]) -> CommandNode:
        """Set the suggestion provider, or a fixed collection of strings to suggest."""
        self._ensure_mutable()
        if isinstance(provider, str):
            provider = [provider]
        if not callable(provider):
            provider = fixed_suggestions(provider)
        self.suggestion_provider = provider
        return self

    def set_protect_direct_children(self, value: bool = True) -> CommandNode:
        """Make children obtained through `get_child` inherit this node's permissions."""
        self._ensure_mutable()
        self.protect_direct_children = value
        return self

    # Compilation

    def effective_kind(self) -> NodeKind:
        """Return the kind this node compiles to."""
        spec = self.argument_spec
        if spec is None and self.suggestion_provider is not None:
            spec = string()
        if spec is None:
            return LiteralKind()
        return ArgumentKind(spec, self.suggestion_provider)

    def compile(self) -> CompiledNode:
        """Compile this node and its whole subtree.

        Returns:
            The compiled node, with its compiled children attached
        """
        result = CompiledNode(self.name, self.effective_kind())

        if self.requirements:
            result.requirement = all_of(self.requirements)

        if self.executor is not None:
            result.executor = self._guard(self.executor)

        for child in self.children.values():
            result.then(child.compile())

        return result

    def _guard(self, executor: Executor) -> Callable[[CommandContext], int]:
        """Wrap `executor` so failures are logged and turned into a FAILURE result."""

        def _execute(context: CommandContext) -> int:
            try:
                return executor(context)
            except Exception as e:  # pylint: disable=broad-exception-caught
                self.log.exception("Error executing the command at node '%s': %s", self.name, e)
                return CommandResult.FAILURE

        return _execute

    def seal(self) -> None:
        """Refuse any further change to this subtree."""
        for node in self.walk():
            node.sealed = True

