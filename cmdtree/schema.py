"""Schema of the `[cmdtree]` configuration section."""

from .constants import DEFAULT_ADMIN_PERMISSION, DEFAULT_ADMIN_ROOT
from .models import RegistrationEnvironment
from .validation import ConfigField, ConfigItems

__all__ = ["CMDTREE_CONFIG_SCHEMA"]

CMDTREE_CONFIG_SCHEMA = ConfigItems(
    ConfigField("admin_root", str, default=DEFAULT_ADMIN_ROOT, description="Name of the administrative root command"),
    ConfigField(
        "admin_permission",
        str,
        default=DEFAULT_ADMIN_PERMISSION,
        description="Permission required by the administrative root and its direct children",
    ),
    ConfigField(
        "environment",
        str,
        default=RegistrationEnvironment.ALL.value,
        description="Registration environment passed to the host dispatcher",
        choices=[environment.value for environment in RegistrationEnvironment],
    ),
    ConfigField("debug", bool, default=False, description="Enable debug logging"),
    ConfigField("log_file", str, description="Also write logs to this file"),
    ConfigField("include", list, description="Additional config files to merge"),
)
