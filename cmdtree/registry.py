"""Root registry: named top-level commands and their one-shot registration."""

from __future__ import annotations

import logging

from .config import Configuration
from .constants import DEFAULT_ADMIN_PERMISSION, DEFAULT_ADMIN_ROOT
from .host import HostDispatcher
from .logging_setup import get_logger
from .models import RegistrationEnvironment, TreeSealedError
from .node import CommandNode
from .requirements import PermissionPolicy
from .schema import CMDTREE_CONFIG_SCHEMA

__all__ = ["RootRegistry"]


class RootRegistry:
    """Owns the root command nodes.

    Independent call sites fetch roots by name (creating them on first use)
    and grow their subtrees. `register_all` then compiles every root once and
    hands the results to the host dispatcher; the trees are sealed afterwards.
    """

    def __init__(
        self,
        policy: PermissionPolicy | None = None,
        config: Configuration | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.log = logger or get_logger("cmdtree")
        self.policy = policy or PermissionPolicy()
        self.config = config if config is not None else Configuration(logger=self.log, schema=CMDTREE_CONFIG_SCHEMA)
        self.roots: dict[str, CommandNode] = {}
        self.registered = False
        self._admin_root: CommandNode | None = None

    @classmethod
    def from_config(cls, config: Configuration, policy: PermissionPolicy | None = None) -> RootRegistry:
        """Create a registry using a loaded `[cmdtree]` section."""
        return cls(policy=policy, config=config, logger=config.log)

    def get_root(self, name: str) -> CommandNode:
        """Return the root called `name`, creating it on first use."""
        root = self.roots.get(name)
        if root is None:
            if self.registered:
                msg = f"Can't add root command '{name}': commands were already registered"
                raise TreeSealedError(msg)
            root = CommandNode(name, policy=self.policy, logger=self.log)
            self.roots[name] = root
        return root

    def get_permission_root(self, name: str, permission: str) -> CommandNode:
        """Return the root `name`, requiring `permission` on it and its direct children.

        Children created earlier only get `permission` the next time they are
        fetched through `get_child`, the root gate still covers them.
        """
        root = self.get_root(name)
        root.requires(permission)
        if not root.protect_direct_children:
            root.set_protect_direct_children(True)
        return root

    def get_admin_root(self) -> CommandNode:
        """Return the administrative root (see `admin_root` and `admin_permission`)."""
        if self._admin_root is None:
            self._admin_root = self.get_permission_root(
                self.config.get_str("admin_root", DEFAULT_ADMIN_ROOT),
                self.config.get_str("admin_permission", DEFAULT_ADMIN_PERMISSION),
            )
        return self._admin_root

    def configured_environment(self) -> RegistrationEnvironment:
        """Return the `environment` setting, ALL if it is invalid."""
        value = self.config.get_str("environment", RegistrationEnvironment.ALL)
        try:
            return RegistrationEnvironment(value)
        except ValueError:
            self.log.error("Invalid registration environment %r, using %r", value, RegistrationEnvironment.ALL.value)
            return RegistrationEnvironment.ALL

    def register_all(
        self,
        dispatcher: HostDispatcher,
        environment: RegistrationEnvironment | None = None,
    ) -> list[str]:
        """Compile every root and register it with `dispatcher`.

        A root failing to compile or register is logged and skipped, the
        others are still registered.

        Args:
            dispatcher: the host dispatcher
            environment: passed along with each root, defaults to the
                configured `environment`

        Returns:
            The names of the registered roots
        """
        if self.registered:
            self.log.warning("Commands were already registered, ignoring")
            return []

        if environment is None:
            environment = self.configured_environment()
        self.log.info("Registering %d root command(s)", len(self.roots))
        registered: list[str] = []

        for root_name, root in self.roots.items():
            try:
                compiled = root.compile()
            except Exception:  # pylint: disable=broad-exception-caught
                self.log.exception("Failed to compile command '%s'", root_name)
                continue

            if not compiled.is_literal:
                self.log.error("Failed to register command '%s', not a literal: %s", root_name, compiled.kind)
                continue

            try:
                dispatcher.register(compiled, environment)
            except Exception:  # pylint: disable=broad-exception-caught
                self.log.exception("Host refused command '%s'", root_name)
                continue

            self.log.debug("Registered command '%s'", root_name)
            registered.append(root_name)

        self.registered = True
        for root in self.roots.values():
            root.seal()
        return registered
