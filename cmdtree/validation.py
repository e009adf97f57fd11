"""Configuration schema definitions and validation.

`ConfigField` describes one expected key, `ConfigItems` groups them and
`ConfigValidator` checks a section against them, with typo hints for
unknown keys.
"""

import difflib
import logging
from dataclasses import dataclass
from typing import Any

from .config import BOOL_STRINGS

__all__ = [
    "ConfigField",
    "ConfigItems",
    "ConfigValidator",
    "format_config_error",
]


@dataclass
class ConfigField:
    """Describes an expected configuration field.

    Attributes:
        name: The configuration key name
        field_type: Expected type (str, bool, list or dict)
        required: Whether the field is required
        default: Default value if not provided
        description: Human-readable description
        choices: List of valid values for enum-like fields
    """

    name: str
    field_type: type = str
    required: bool = False
    default: Any = None
    description: str = ""
    choices: list | None = None


class ConfigItems(list):
    """A list of ConfigField items with lookup by name."""

    def __init__(self, *args: ConfigField) -> None:
        super().__init__(args)

    def get(self, name: str) -> ConfigField | None:
        """Get a ConfigField by name."""
        for prop in self:
            if prop.name == name:
                return prop
        return None


def _find_similar_key(unknown_key: str, known_keys: list[str]) -> str | None:
    """Return the closest known key, if any is close enough."""
    matches = difflib.get_close_matches(unknown_key, known_keys, n=1)
    if matches:
        return matches[0]
    return None


def format_config_error(section: str, field: str, message: str, suggestion: str = "") -> str:
    """Format a configuration error message.

    Args:
        section: Configuration section name
        field: Field name that has the error
        message: Error description
        suggestion: Optional suggestion for fixing the error

    Returns:
        Formatted error message
    """
    msg = f"[{section}] Config error for '{field}': {message}"
    if suggestion:
        msg += f" -> {suggestion}"
    return msg


class ConfigValidator:
    """Validates a configuration section against a schema."""

    def __init__(self, config: dict, section: str, logger: logging.Logger) -> None:
        self.config = config
        self.section = section
        self.log = logger

    def validate(self, schema: ConfigItems) -> list[str]:
        """Validate the section.

        Returns:
            List of error messages (empty if validation passed)
        """
        errors = []

        for field_def in schema:
            value = self.config.get(field_def.name)

            if value is None:
                if field_def.required:
                    errors.append(
                        format_config_error(self.section, field_def.name, "Missing required field", f"Add '{field_def.name}' to [{self.section}]")
                    )
                continue

            type_error = self._check_type(field_def, value)
            if type_error:
                errors.append(type_error)
                continue

            if field_def.choices is not None and value not in field_def.choices:
                choices_str = ", ".join(repr(c) for c in field_def.choices)
                errors.append(format_config_error(self.section, field_def.name, f"Invalid value {value!r}", f"Valid options: {choices_str}"))

        return errors

    def _check_type(self, field_def: ConfigField, value: Any) -> str | None:  # noqa: ANN401
        """Return an error message if `value` doesn't match the field type."""
        expected = field_def.field_type
        if expected is bool:
            if isinstance(value, bool) or (isinstance(value, str) and value.lower() in BOOL_STRINGS):
                return None
            return format_config_error(
                self.section, field_def.name, f"Expected bool, got {type(value).__name__}", "Use true/false (without quotes)"
            )
        if isinstance(value, expected):
            return None
        return format_config_error(self.section, field_def.name, f"Expected {expected.__name__}, got {type(value).__name__}")

    def warn_unknown_keys(self, schema: ConfigItems) -> list[str]:
        """Log warnings for unknown configuration keys.

        Returns:
            List of warning messages
        """
        warnings = []
        known_keys = [f.name for f in schema]

        for key in self.config:
            if key in known_keys:
                continue

            similar = _find_similar_key(key, known_keys)
            if similar:
                msg = f"[{self.section}] Unknown option '{key}' (did you mean '{similar}'?)"
            else:
                msg = f"[{self.section}] Unknown option '{key}' - will be ignored"

            self.log.warning(msg)
            warnings.append(msg)

        return warnings
