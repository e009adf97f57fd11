"""Usage listings for compiled command trees."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models import CompiledNode
    from .registry import RootRegistry

__all__ = ["get_all_usage", "get_commands_usage", "get_help"]

_NO_SOURCE = object()


def get_all_usage(node: CompiledNode, source: Any = _NO_SOURCE, prefix: str = "") -> list[str]:  # noqa: ANN401
    """List the usage of every executable path below (and including) `node`.

    Args:
        node: compiled node to start from
        source: when given, skip nodes this source can't reach
        prefix: usage of the parent nodes

    Returns:
        Usage lines, eg: ["admin reload", "say <say>"]
    """
    if source is not _NO_SOURCE and not node.can_use(source):
        return []

    usage = f"{prefix} {node.usage_token()}".strip()
    result = [usage] if node.is_executable else []
    for name in sorted(node.children):
        result.extend(get_all_usage(node.children[name], source, usage))
    return result


def get_commands_usage(registry: RootRegistry, source: Any = _NO_SOURCE) -> dict[str, list[str]]:  # noqa: ANN401
    """Map every root name to its usage lines.

    Roots without any reachable executable path are left out.
    """
    result: dict[str, list[str]] = {}
    for root_name in sorted(registry.roots):
        lines = get_all_usage(registry.roots[root_name].compile(), source)
        if lines:
            result[root_name] = lines
    return result


def get_help(registry: RootRegistry, source: Any = _NO_SOURCE) -> str:  # noqa: ANN401
    """Get the help text listing all commands, grouped by root.

    Args:
        registry: the root registry
        source: when given, only list what this source can run
    """
    lines = ["Available commands:"]
    for root_name, usages in get_commands_usage(registry, source).items():
        lines.append(f"\n{root_name}:")
        lines.extend(f"  {usage}" for usage in usages)
    return "\n".join(lines)
