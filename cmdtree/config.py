"""Configuration section wrapper with schema defaults and typed getters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import logging

    from .validation import ConfigItems

__all__ = ["BOOL_STRINGS", "Configuration", "coerce_to_bool"]

ConfigValueType = float | bool | str | list | dict

_FALSE_STRINGS = frozenset({"false", "no", "off", "0", "disabled"})
# accepted by the validator for bool fields
BOOL_STRINGS = _FALSE_STRINGS | {"true", "yes", "on", "1", "enabled"}


def coerce_to_bool(value: ConfigValueType | None, default: bool = False) -> bool:
    """Coerce a loosely typed value to a boolean.

    None gives `default`, empty or falsy strings ("false", "no", "off", "0",
    "disabled") give False, other strings give True.
    """
    if value is None:
        return default
    if isinstance(value, str):
        if not value.strip():
            return False
        return value.lower().strip() not in _FALSE_STRINGS
    return bool(value)


class Configuration(dict):
    """The `[cmdtree]` configuration section.

    Missing keys fall back to the schema defaults, then to the default
    given by the caller.
    """

    def __init__(
        self,
        *args: Any,  # noqa: ANN401
        logger: logging.Logger,
        schema: ConfigItems | None = None,
        **kwargs: Any,  # noqa: ANN401
    ) -> None:
        super().__init__(*args, **kwargs)
        self.log = logger
        self._schema_defaults: dict[str, ConfigValueType] = {}
        if schema:
            self._schema_defaults = {field.name: field.default for field in schema if field.default is not None}

    def get(self, name: str, default: ConfigValueType | None = None) -> ConfigValueType | None:  # type: ignore[override]
        """Get a value, falling back to the schema default then `default`."""
        if name in self:
            return self[name]
        return self._schema_defaults.get(name, default)

    def get_bool(self, name: str, default: bool = False) -> bool:
        """Get a boolean value, see `coerce_to_bool`."""
        return coerce_to_bool(self.get(name), default)

    def get_str(self, name: str, default: str = "") -> str:
        """Get a string value."""
        value = self.get(name)
        if value is None:
            return default
        return str(value)

