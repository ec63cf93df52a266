"""End-to-end coverage for the FastMCP server wrapper."""

from __future__ import annotations

import json

import pytest
from fastmcp.client import Client
from fastmcp.exceptions import ToolError

from azmcp_server.fastmcp_adapter import build_fastmcp_app
from azmcp_server.services import ServiceProvider


def _envelope(result) -> dict[str, object]:
    return json.loads(result.content[0].text)


@pytest.mark.anyio()
async def test_fastmcp_server_supports_tool_discovery(
    services: ServiceProvider, subscription: str
) -> None:
    """The FastMCP server exposes the azmcp commands via the official protocol."""
    app, leaves = build_fastmcp_app(services)

    async with Client(app) as client:
        tools = await client.list_tools()
        tool_names = {tool.name for tool in tools}

        assert "azmcp_storage_account_list" in tool_names
        assert "azmcp_monitor_metrics_query" in tool_names
        assert "azmcp_tools_list" not in tool_names
        assert "azmcp_tools_list" in {leaf.full_name for leaf in leaves}

        result = await client.call_tool(
            "azmcp_storage_account_list", {"subscription": subscription}
        )
        envelope = _envelope(result)
        assert envelope["status"] == 200
        assert envelope["results"] == {"accounts": ["contosodata"]}


@pytest.mark.anyio()
async def test_fastmcp_tools_advertise_annotations(services: ServiceProvider) -> None:
    """Behavior hints and input schemas survive the protocol round trip."""
    app, _ = build_fastmcp_app(services)

    async with Client(app) as client:
        tools = {tool.name: tool for tool in await client.list_tools()}

    delete = tools["azmcp_appconfig_kv_delete"]
    assert delete.annotations.destructiveHint is True
    assert delete.annotations.readOnlyHint is False
    assert "subscription" in delete.inputSchema["required"]
    assert tools["azmcp_storage_account_list"].annotations.readOnlyHint is True


@pytest.mark.anyio()
async def test_fastmcp_hidden_tool_remains_callable(services: ServiceProvider) -> None:
    """Hidden commands are left out of listings but can still be invoked."""
    app, _ = build_fastmcp_app(services)

    async with Client(app) as client:
        result = await client.call_tool("azmcp_tools_list", {})

    envelope = _envelope(result)
    assert envelope["status"] == 200
    assert any(entry["command"] == "storage blob list" for entry in envelope["results"])


@pytest.mark.anyio()
async def test_fastmcp_reports_command_failures_in_envelope(
    services: ServiceProvider, subscription: str
) -> None:
    """Command failures are envelopes, not protocol errors."""
    app, _ = build_fastmcp_app(services)

    async with Client(app) as client:
        result = await client.call_tool(
            "azmcp_keyvault_key_get",
            {"subscription": subscription, "vault": "contoso-kv", "key": "absent"},
        )

    envelope = _envelope(result)
    assert envelope["status"] == 404
    assert envelope["message"].startswith("Key not found.")


@pytest.mark.anyio()
async def test_fastmcp_read_only_mode(
    services: ServiceProvider, subscription: str
) -> None:
    """Read-only servers do not register write tools."""
    app, leaves = build_fastmcp_app(services, read_only=True, namespaces=["appconfig"])

    async with Client(app) as client:
        tool_names = {tool.name for tool in await client.list_tools()}
        with pytest.raises(ToolError):
            await client.call_tool(
                "azmcp_appconfig_kv_set",
                {
                    "subscription": subscription,
                    "account-name": "contoso-config",
                    "key": "App:Color",
                    "value": "green",
                },
            )

    assert tool_names == {leaf.full_name for leaf in leaves}
    assert "azmcp_appconfig_kv_show" in tool_names
    assert "azmcp_appconfig_kv_set" not in tool_names
