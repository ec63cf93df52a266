"""Adapters for exposing azmcp commands via FastMCP."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from fastmcp import FastMCP
from fastmcp.server.middleware import Middleware, MiddlewareContext
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent
from mcp.types import ToolAnnotations as MCPToolAnnotations

from azmcp.executor import CommandRunner
from azmcp.registry import CommandLeaf, CommandRegistry
from azmcp.schema import input_schema
from azmcp_server.cloud import build_in_memory_services
from azmcp_server.services import ServiceProvider
from azmcp_server.tools import build_registry

logger = logging.getLogger(__name__)

HIDDEN_TAG = "hidden"


class LeafToolAdapter(Tool):
    """Expose a :class:`CommandLeaf` as a FastMCP tool."""

    def __init__(self, leaf: CommandLeaf, runner: CommandRunner) -> None:
        """Create a FastMCP tool wrapper for the provided leaf."""
        super().__init__(
            name=leaf.full_name,
            description=leaf.description,
            parameters=input_schema(leaf.option_model),
            annotations=MCPToolAnnotations(
                title=leaf.title or None,
                readOnlyHint=leaf.annotations.read_only,
                destructiveHint=leaf.annotations.destructive,
                idempotentHint=leaf.annotations.idempotent,
                openWorldHint=leaf.annotations.open_world,
            ),
            tags={HIDDEN_TAG} if leaf.hidden else set(),
        )
        self._leaf = leaf
        self._runner = runner

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        """Run the leaf and return its envelope as JSON text content."""
        envelope = await self._runner.run_arguments(self._leaf, arguments)
        return ToolResult(content=[TextContent(type="text", text=envelope.to_json())])


class HiddenToolFilter(Middleware):
    """Drop hidden tools from listings while leaving them callable."""

    async def on_list_tools(self, context: MiddlewareContext, call_next: Any) -> Any:
        tools = await call_next(context)
        return [tool for tool in tools if HIDDEN_TAG not in tool.tags]


def select_leaves(
    registry: CommandRegistry,
    *,
    read_only: bool = False,
    namespaces: Iterable[str] | None = None,
) -> list[CommandLeaf]:
    """Pick the leaves served for the given mode and namespace filter.

    Raises:
        KeyError: If ``namespaces`` names no registered top-level group.

    """
    names = list(namespaces or [])
    leaves = registry.group_commands(names) if names else registry.all_leaves()
    if read_only:
        leaves = [leaf for leaf in leaves if leaf.annotations.read_only]
    return leaves


def to_fastmcp_tools(
    leaves: Sequence[CommandLeaf], runner: CommandRunner
) -> list[Tool]:
    """Convert registry leaves into FastMCP-compatible tools."""
    return [LeafToolAdapter(leaf, runner) for leaf in leaves]


def build_fastmcp_app(
    services: ServiceProvider | None = None,
    *,
    read_only: bool = False,
    namespaces: Iterable[str] | None = None,
    runner: CommandRunner | None = None,
) -> tuple[FastMCP, list[CommandLeaf]]:
    """Create a FastMCP server instance with the azmcp commands registered."""
    registry = build_registry(services or build_in_memory_services())
    runner = runner or CommandRunner()
    app = FastMCP(
        name="azmcp-server",
        instructions=(
            "Azure cloud operations exposed over the Model Context Protocol. "
            "Every tool returns a JSON envelope with status, message and results."
        ),
    )
    app.add_middleware(HiddenToolFilter())
    leaves = select_leaves(registry, read_only=read_only, namespaces=namespaces)
    for tool in to_fastmcp_tools(leaves, runner):
        app.add_tool(tool)
    logger.info("Registered %d tools.", len(leaves))
    return app, leaves
