"""Tool registry shared by the tool modules and the server.

Input schemas are not declared here: FastMCP derives them from each
handler's signature and docstring when ``create_server`` registers it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass(frozen=True)
class ToolSpec:
    """One MCP tool: its public name, summary and handler."""

    name: str
    description: str
    handler: Callable[..., dict[str, Any]]
    category: str = "general"


TOOL_REGISTRY: dict[str, ToolSpec] = {}


def register_tool(
    name: str,
    description: str,
    handler: Callable[..., dict[str, Any]],
    *,
    category: str = "general",
) -> ToolSpec:
    """Register a tool, replacing any earlier tool of the same name."""
    spec = ToolSpec(name=name, description=description, handler=handler, category=category)
    TOOL_REGISTRY[name] = spec
    return spec


def get_categories() -> dict[str, list[ToolSpec]]:
    """Return tools grouped by category, in registration order."""
    categories: dict[str, list[ToolSpec]] = {}
    for tool in TOOL_REGISTRY.values():
        categories.setdefault(tool.category, []).append(tool)
    return categories
