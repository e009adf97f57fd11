"""Configuration file loading.

Reads TOML files asynchronously, follows `include` directives and wraps the
`[cmdtree]` section into a `Configuration`.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

from aiofiles import open as aiopen
from aiofiles import os as aios

from .config import Configuration
from .constants import CONFIG_FILE, CONFIG_SECTION
from .models import ConfigError
from .schema import CMDTREE_CONFIG_SCHEMA
from .validation import ConfigValidator

if TYPE_CHECKING:
    import logging

__all__ = ["ConfigLoader", "merge"]


def merge(merged: dict[str, Any], obj2: dict[str, Any]) -> dict[str, Any]:
    """Merge the content of obj2 into merged.

    Nested dicts are merged, lists are concatenated, other values replaced.

    Eg:
        merge({"a": {"b": 1}}, {"a": {"c": 2}}) == {"a": {"b": 1, "c": 2}}
    """
    for key, value in obj2.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merge(merged[key], value)
        elif key in merged and isinstance(merged[key], list) and isinstance(value, list):
            merged[key] += value
        else:
            merged[key] = value
    return merged


class ConfigLoader:
    """Loads and merges configuration files."""

    def __init__(self, log: logging.Logger) -> None:
        self.log = log
        self._seen: set[Path] = set()

    async def load(self, config_filename: str | Path = "") -> Configuration:
        """Load the configuration and return its `[cmdtree]` section.

        Args:
            config_filename: path of the file, defaults to CONFIG_FILE

        Raises:
            ConfigError: if a file is missing or can't be parsed
        """
        self._seen.clear()
        fname = Path(os.path.expandvars(str(config_filename))).expanduser() if config_filename else CONFIG_FILE
        raw = await self._open_config(fname)

        section = Configuration(raw.get(CONFIG_SECTION, {}), logger=self.log, schema=CMDTREE_CONFIG_SCHEMA)
        validator = ConfigValidator(section, CONFIG_SECTION, self.log)
        for error in validator.validate(CMDTREE_CONFIG_SCHEMA):
            self.log.error(error)
        validator.warn_unknown_keys(CMDTREE_CONFIG_SCHEMA)
        return section

    async def _open_config(self, fname: Path) -> dict[str, Any]:
        """Load `fname` and the files it includes."""
        fname = fname.resolve()
        if fname in self._seen:
            self.log.warning("Skipping %s: already included", fname)
            return {}
        self._seen.add(fname)

        config = await self._load_config_file(fname)

        for extra_config in list(config.get(CONFIG_SECTION, {}).get("include", [])):
            extra_path = Path(os.path.expandvars(extra_config)).expanduser()
            if not extra_path.is_absolute():
                extra_path = fname.parent / extra_path
            merge(config, await self._open_config(extra_path))

        return config

    async def _load_config_file(self, fname: Path) -> dict[str, Any]:
        """Load a single TOML file.

        Raises:
            ConfigError: If file not found or has syntax errors
        """
        if not await aios.path.exists(fname):
            self.log.critical("Config file not found! Please create %s", fname)
            raise ConfigError(str(fname))

        self.log.info("Loading %s", fname)
        async with aiopen(fname, encoding="utf-8") as f:
            content = await f.read()
        try:
            return tomllib.loads(content)
        except tomllib.TOMLDecodeError as e:
            self.log.critical("Problem reading %s: %s", fname, e)
            raise ConfigError(str(fname)) from e
