"""Tool descriptor projection."""

from __future__ import annotations

from azmcp.options import OptionDefinition, ValueKind
from azmcp.registry import CommandLeaf, CommandRegistry, ToolAnnotations
from azmcp.schema import input_schema, project_catalog, project_tool


def test_input_schema_maps_value_kinds() -> None:
    """Each value kind projects onto its JSON Schema type."""
    options = [
        OptionDefinition("name", description="Name", required=True),
        OptionDefinition("count", ValueKind.INT),
        OptionDefinition("ratio", ValueKind.DOUBLE),
        OptionDefinition("flag", ValueKind.BOOL),
        OptionDefinition("tags", ValueKind.STRING_ARRAY),
    ]

    schema = input_schema(options)

    assert schema["type"] == "object"
    assert schema["required"] == ["name"]
    assert schema["properties"]["name"] == {"type": "string", "description": "Name"}
    assert schema["properties"]["count"]["type"] == "integer"
    assert schema["properties"]["ratio"]["type"] == "number"
    assert schema["properties"]["flag"]["type"] == "boolean"
    assert schema["properties"]["tags"]["items"] == {"type": "string"}


def test_project_tool_carries_annotations() -> None:
    """Declared behavior hints appear on the descriptor."""
    leaf = CommandLeaf(
        "delete",
        "Delete a setting",
        lambda _c, _a: None,
        title="Delete Setting",
        annotations=ToolAnnotations(destructive=True, read_only=False),
        full_name="azmcp_appconfig_kv_delete",
    )

    tool = project_tool(leaf)

    assert tool["name"] == "azmcp_appconfig_kv_delete"
    assert tool["annotations"] == {
        "destructiveHint": True,
        "readOnlyHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
        "title": "Delete Setting",
    }


def test_catalog_skips_hidden_leaves() -> None:
    """Hidden leaves never show up in the projected catalog."""
    registry = CommandRegistry()
    registry.register("a", CommandLeaf("visible", "v", lambda _c, _a: None))
    registry.register("a", CommandLeaf("secret", "s", lambda _c, _a: None, hidden=True))

    names = [tool["name"] for tool in project_catalog(registry)]

    assert names == ["azmcp_a_visible"]
