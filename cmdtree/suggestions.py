"""Suggestion providers."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .models import SuggestionContext, SuggestionProvider

__all__ = ["fixed_suggestions"]


def fixed_suggestions(strings: Iterable[str]) -> SuggestionProvider:
    """Build a provider always offering `strings`, in order.

    The partial input is ignored: filtering is up to the host dispatcher.
    """
    values = list(strings)

    async def _suggest(_context: SuggestionContext) -> list[str]:
        return list(values)

    return _suggest
