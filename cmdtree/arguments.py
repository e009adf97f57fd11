"""Argument type descriptors.

An `ArgumentSpec` only describes an argument (a type identifier plus
constraints); parsing the raw text is left to the host dispatcher.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

__all__ = [
    "ArgumentSpec",
    "ArgumentTypeId",
    "StringMode",
    "boolean",
    "floating",
    "greedy_string",
    "integer",
    "principal",
    "string",
    "word",
]


class ArgumentTypeId(StrEnum):
    """Type identifiers understood by host dispatchers."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    PRINCIPAL = "principal"


class StringMode(StrEnum):
    """How much input a string argument consumes."""

    SINGLE_WORD = "single_word"
    QUOTABLE_PHRASE = "quotable_phrase"
    GREEDY_PHRASE = "greedy_phrase"


@dataclass(frozen=True)
class ArgumentSpec:
    """Describes a typed argument."""

    type_id: str
    constraints: dict[str, Any] = field(default_factory=dict, hash=False)

    def get(self, name: str, default: Any = None) -> Any:  # noqa: ANN401
        """Return the constraint `name`."""
        return self.constraints.get(name, default)

    def __str__(self) -> str:
        if not self.constraints:
            return self.type_id
        details = ", ".join(f"{k}={v!r}" for k, v in sorted(self.constraints.items()))
        return f"{self.type_id}({details})"


def _check_bounds(minimum: float | None, maximum: float | None) -> None:
    if minimum is not None and maximum is not None and minimum > maximum:
        msg = f"minimum ({minimum}) is greater than maximum ({maximum})"
        raise ValueError(msg)


def word() -> ArgumentSpec:
    """A single word, no spaces."""
    return ArgumentSpec(ArgumentTypeId.STRING, {"mode": StringMode.SINGLE_WORD})


def string() -> ArgumentSpec:
    """A word, or a quoted phrase."""
    return ArgumentSpec(ArgumentTypeId.STRING, {"mode": StringMode.QUOTABLE_PHRASE})


def greedy_string() -> ArgumentSpec:
    """All the remaining input."""
    return ArgumentSpec(ArgumentTypeId.STRING, {"mode": StringMode.GREEDY_PHRASE})


def integer(minimum: int | None = None, maximum: int | None = None) -> ArgumentSpec:
    """An integer, optionally bounded (inclusive).

    Args:
        minimum: smallest accepted value
        maximum: largest accepted value

    Raises:
        ValueError: if minimum is greater than maximum
    """
    _check_bounds(minimum, maximum)
    constraints = {k: v for k, v in (("min", minimum), ("max", maximum)) if v is not None}
    return ArgumentSpec(ArgumentTypeId.INTEGER, constraints)


def floating(minimum: float | None = None, maximum: float | None = None) -> ArgumentSpec:
    """A float, optionally bounded (inclusive)."""
    _check_bounds(minimum, maximum)
    constraints = {k: v for k, v in (("min", minimum), ("max", maximum)) if v is not None}
    return ArgumentSpec(ArgumentTypeId.FLOAT, constraints)


def boolean() -> ArgumentSpec:
    """A true/false value."""
    return ArgumentSpec(ArgumentTypeId.BOOLEAN)


def principal(single: bool = True) -> ArgumentSpec:
    """An actor name, resolved by the host's principal lookup."""
    return ArgumentSpec(ArgumentTypeId.PRINCIPAL, {"single": single})
