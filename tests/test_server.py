"""Tests for the transport-free MCP dispatcher."""

from __future__ import annotations

import json

import pytest

from azmcp.registry import CommandRegistry
from azmcp.server import MCPServer


def _payload(result: dict[str, object]) -> dict[str, object]:
    return json.loads(result["content"][0]["text"])


class TestMCPServer:
    """Behavioral coverage for MCPServer."""

    def test_lists_visible_tools(self, registry: CommandRegistry) -> None:
        """Hidden leaves are callable but not advertised."""
        # Arrange
        server = MCPServer(registry)

        # Act
        names = server.available_tools()

        # Assert
        assert "azmcp_storage_blob_list" in names
        assert "azmcp_tools_list" not in names
        assert names == sorted(names)

    def test_catalog_holds_descriptors(self, registry: CommandRegistry) -> None:
        """Catalog entries carry schema and annotations."""
        catalog = MCPServer(registry).to_catalog()

        entry = catalog["azmcp_appconfig_kv_delete"]
        assert entry["description"].startswith("Delete a key-value pair")
        assert entry["annotations"]["destructiveHint"] is True
        assert "account-name" in entry["inputSchema"]["required"]

    @pytest.mark.anyio()
    async def test_call_returns_envelope(
        self, registry: CommandRegistry, subscription: str
    ) -> None:
        """Successful calls embed the envelope as JSON text."""
        server = MCPServer(registry)

        result = await server.call_tool(
            "azmcp_storage_account_list", {"subscription": subscription}
        )

        assert result["isError"] is False
        assert result["content"][0]["mimeType"] == "application/json"
        envelope = _payload(result)
        assert envelope["status"] == 200
        assert envelope["results"] == {"accounts": ["contosodata"]}

    @pytest.mark.anyio()
    async def test_handler_failures_are_not_protocol_errors(
        self, registry: CommandRegistry, subscription: str
    ) -> None:
        """Command failures come back as ordinary envelopes."""
        server = MCPServer(registry)

        result = await server.call_tool(
            "azmcp_storage_table_list",
            {"subscription": subscription, "account-name": "missing"},
        )

        assert result["isError"] is False
        assert _payload(result)["status"] == 404

    @pytest.mark.anyio()
    async def test_unknown_tool_is_an_error(self, registry: CommandRegistry) -> None:
        server = MCPServer(registry)

        result = await server.call_tool("azmcp_nope", {})

        assert result["isError"] is True
        error = _payload(result)["error"]
        assert error["type"] == "ToolNotFound"
        assert error["message"] == "Could not find command: azmcp_nope"

    @pytest.mark.anyio()
    async def test_null_arguments_are_rejected(self, registry: CommandRegistry) -> None:
        server = MCPServer(registry)

        result = await server.call_tool("azmcp_subscription_list", None)

        assert result["isError"] is True
        assert _payload(result)["error"]["type"] == "InvalidRequest"

    @pytest.mark.anyio()
    async def test_hidden_tool_is_callable(self, registry: CommandRegistry) -> None:
        server = MCPServer(registry)

        result = await server.call_tool("azmcp_tools_list", {})

        assert result["isError"] is False
        assert _payload(result)["status"] == 200

    @pytest.mark.anyio()
    async def test_read_only_mode_blocks_writes(
        self, registry: CommandRegistry, subscription: str
    ) -> None:
        """Write tools are neither listed nor callable in read-only mode."""
        server = MCPServer(registry, read_only=True)

        result = await server.call_tool(
            "azmcp_appconfig_kv_set",
            {
                "subscription": subscription,
                "account-name": "contoso-config",
                "key": "App:Color",
                "value": "green",
            },
        )

        assert "azmcp_appconfig_kv_set" not in server.available_tools()
        assert "azmcp_appconfig_kv_show" in server.available_tools()
        assert result["isError"] is True
        assert _payload(result)["error"]["type"] == "ReadOnlyMode"

    @pytest.mark.anyio()
    async def test_namespace_filter(self, registry: CommandRegistry) -> None:
        """Only tools in the selected namespaces are served."""
        server = MCPServer(registry, namespaces=["storage"])

        result = await server.call_tool("azmcp_cosmos_account_list", {})

        assert all(name.startswith("azmcp_storage_") for name in server.available_tools())
        assert result["isError"] is True

    def test_unknown_namespace_raises(self, registry: CommandRegistry) -> None:
        with pytest.raises(KeyError):
            MCPServer(registry, namespaces=["compute"])
