"""Interfaces of the collaborators the command tree talks to.

None of these are implemented here: the host runtime supplies them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .models import CompiledNode, RegistrationEnvironment

__all__ = ["Authorizer", "FeedbackSource", "HostDispatcher", "PermissionDeclarer", "PrincipalResolver"]


class HostDispatcher(Protocol):
    """The runtime parsing raw input and walking the compiled tree."""

    def register(self, node: CompiledNode, environment: RegistrationEnvironment) -> None:
        """Register a literal-rooted compiled tree."""


class Authorizer(Protocol):
    """Decides whether a principal holds a permission."""

    def has_permission(self, principal: Any, permission: str) -> bool:  # noqa: ANN401
        """Return True if `principal` holds `permission`."""


@runtime_checkable
class PermissionDeclarer(Protocol):
    """Authorizers offering this are told about every permission in use."""

    def register_permission(self, permission: str) -> None:
        """Declare `permission` so it can be listed or granted."""


class PrincipalResolver(Protocol):
    """Resolves invocation sources and names to principals."""

    def resolve(self, source: Any) -> Any | None:  # noqa: ANN401
        """Return the principal behind `source`, or None."""

    def lookup(self, source: Any, name: str) -> Any | None:  # noqa: ANN401
        """Return the principal called `name` as seen from `source`, or None."""


@runtime_checkable
class FeedbackSource(Protocol):
    """An invocation source able to receive messages."""

    def send_feedback(self, message: str) -> None:
        """Show `message` to whoever issued the command."""
