"""Commands acting on a principal picked by name."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from .arguments import principal
from .constants import PRINCIPAL_NOT_FOUND
from .host import FeedbackSource
from .models import CommandResult

if TYPE_CHECKING:
    from .models import CommandContext
    from .node import CommandNode

__all__ = ["PrincipalSelection", "add_principal_selection"]

PrincipalSelection = Callable[["CommandContext", Any], int]


def add_principal_selection(parent: CommandNode, name: str, selection: PrincipalSelection | None = None) -> CommandNode:
    """Add a child argument selecting a principal by name.

    When `selection` is given, it becomes the executor: it receives the
    context and the resolved principal. An unknown name is reported to the
    source and yields a FAILURE result.

    Args:
        parent: the node getting the new child
        name: the argument name
        selection: optional callback run with the selected principal

    Returns:
        The argument node
    """
    node = parent.get_child(name)
    node.set_type(principal())

    if selection is None:
        return node

    def _select(context: CommandContext) -> int:
        # hosts may hand over the raw name or an already resolved principal
        value = context.get_argument(name)
        target = node.policy.lookup(context.source, value) if isinstance(value, str) else value
        if target is None:
            if isinstance(context.source, FeedbackSource):
                context.source.send_feedback(PRINCIPAL_NOT_FOUND)
            return CommandResult.FAILURE
        return selection(context, target)

    node.on_execute(_select)
    return node
