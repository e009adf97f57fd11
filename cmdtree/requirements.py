"""Requirement composition and permission checks."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .host import PermissionDeclarer

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .host import Authorizer, PrincipalResolver
    from .models import Requirement

__all__ = ["PermissionPolicy", "all_of"]


def all_of(requirements: Sequence[Requirement]) -> Requirement:
    """Combine requirements into a single conjunctive predicate.

    A single requirement is returned as-is. Otherwise the combined
    predicate stops at the first requirement returning False.

    Args:
        requirements: the predicates to combine (at least one)

    Returns:
        The combined predicate
    """
    if not requirements:
        msg = "all_of() needs at least one requirement"
        raise ValueError(msg)
    if len(requirements) == 1:
        return requirements[0]

    checks = tuple(requirements)

    def _all(source: Any) -> bool:  # noqa: ANN401
        return all(check(source) for check in checks)

    return _all


class PermissionPolicy:
    """Turns permission strings into requirements.

    Sources are resolved to principals through the resolver, then the
    authorizer decides. Without a resolver, an authorizer, or a resolved
    principal, the check fails.
    """

    def __init__(self, authorizer: Authorizer | None = None, resolver: PrincipalResolver | None = None) -> None:
        self.authorizer = authorizer
        self.resolver = resolver
        self.declared: set[str] = set()

    def declare(self, permission: str) -> None:
        """Remember `permission` and forward it to the authorizer if it accepts declarations."""
        if permission in self.declared:
            return
        self.declared.add(permission)
        if isinstance(self.authorizer, PermissionDeclarer):
            self.authorizer.register_permission(permission)

    def check(self, source: Any, permission: str) -> bool:  # noqa: ANN401
        """Return True if the principal behind `source` holds `permission`."""
        if self.resolver is None or self.authorizer is None:
            return False
        principal = self.resolver.resolve(source)
        if principal is None:
            return False
        return bool(self.authorizer.has_permission(principal, permission))

    def requirement(self, permission: str) -> Requirement:
        """Build a requirement checking `permission`."""

        def _has_permission(source: Any) -> bool:  # noqa: ANN401
            return self.check(source, permission)

        return _has_permission

    def lookup(self, source: Any, name: str) -> Any | None:  # noqa: ANN401
        """Find the principal called `name`, None if unknown or no resolver is set."""
        if self.resolver is None:
            return None
        return self.resolver.lookup(source, name)
