"""Shared constants for cmdtree."""

import os
from pathlib import Path

__all__ = [
    "CONFIG_FILE",
    "CONFIG_SECTION",
    "DEFAULT_ADMIN_PERMISSION",
    "DEFAULT_ADMIN_ROOT",
    "PRINCIPAL_NOT_FOUND",
]

# Config file path - use XDG_CONFIG_HOME with fallback to ~/.config
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
CONFIG_FILE = _xdg_config_home / "cmdtree" / "config.toml"

CONFIG_SECTION = "cmdtree"

# Administrative root
DEFAULT_ADMIN_ROOT = "admin"
DEFAULT_ADMIN_PERMISSION = "commands.admin.root"

PRINCIPAL_NOT_FOUND = "Principal not found!"
