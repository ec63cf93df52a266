"""Transport-free MCP dispatcher over the command registry.

This module exposes the registry through the two operations of the tool
protocol, discovery and invocation, while leaving network plumbing to the
FastMCP adapter. Handler-level failures come back as ordinary envelopes;
only malformed requests are reported with ``isError``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from azmcp.errors import MCPError, raise_mcp_error
from azmcp.executor import CommandRunner
from azmcp.registry import CommandLeaf, CommandRegistry
from azmcp.schema import project_tool

logger = logging.getLogger(__name__)

JSON_MIME_TYPE = "application/json"


def _content(text: str, *, is_error: bool) -> dict[str, Any]:
    return {
        "content": [{"type": "text", "text": text, "mimeType": JSON_MIME_TYPE}],
        "isError": is_error,
    }


class MCPServer:
    """Dispatcher mapping tool names onto registry leaves.

    Attributes:
        registry: Sealed command registry served by this dispatcher.
        runner: Runner used to execute tool calls.
        read_only: When true, only read-only tools are listed or callable.

    """

    def __init__(
        self,
        registry: CommandRegistry,
        runner: CommandRunner | None = None,
        *,
        read_only: bool = False,
        namespaces: Iterable[str] | None = None,
    ) -> None:
        """Create a dispatcher, optionally restricted to some namespaces.

        Raises:
            KeyError: If ``namespaces`` names no registered top-level group.

        """
        self.registry = registry
        self.runner = runner or CommandRunner()
        self.read_only = read_only
        names = list(namespaces or [])
        leaves = registry.group_commands(names) if names else registry.all_leaves()
        self._tools: dict[str, CommandLeaf] = {leaf.full_name: leaf for leaf in leaves}

    def _listable(self, leaf: CommandLeaf) -> bool:
        if leaf.hidden:
            return False
        return not self.read_only or leaf.annotations.read_only

    def available_tools(self) -> list[str]:
        """List the names of discoverable tools.

        Returns:
            Sorted list of tool names.

        """
        return sorted(name for name, leaf in self._tools.items() if self._listable(leaf))

    def list_tools(self) -> list[dict[str, Any]]:
        """Produce tool descriptors for discovery."""
        tools = [project_tool(self._tools[name]) for name in self.available_tools()]
        logger.info("Listing %d tools.", len(tools))
        return tools

    def to_catalog(self) -> dict[str, dict[str, Any]]:
        """Produce a catalog keyed by tool name."""
        return {tool["name"]: tool for tool in self.list_tools()}

    def _lookup(self, name: str) -> CommandLeaf:
        leaf = self._tools.get(name) or self.registry.resolve(name)
        if leaf is None or leaf.full_name not in self._tools:
            raise_mcp_error("ToolNotFound", f"Could not find command: {name}")
        if self.read_only and not leaf.annotations.read_only:
            raise_mcp_error(
                "ReadOnlyMode",
                f"Tool '{name}' is not available in read-only mode",
            )
        return leaf

    async def call_tool(
        self, name: str, arguments: Mapping[str, object] | None
    ) -> dict[str, Any]:
        """Execute a tool and wrap its envelope as tool-call content.

        Args:
            name: Full name of the tool to invoke.
            arguments: JSON argument map supplied by the caller.

        Returns:
            Mapping with ``content`` and ``isError`` keys.

        """
        try:
            if arguments is None:
                raise_mcp_error(
                    "InvalidRequest", "Cannot call tools with null parameters."
                )
            leaf = self._lookup(name)
        except MCPError as error:
            logger.warning("Rejected call to '%s': %s", name, error)
            return _content(json.dumps(error.to_dict()), is_error=True)

        logger.debug("Invoking '%s'.", name)
        envelope = await self.runner.run_arguments(leaf, arguments)
        return _content(envelope.to_json(), is_error=False)
