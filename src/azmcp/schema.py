"""Projection of leaf commands into discoverable tool descriptors."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from azmcp.options import OptionDefinition, ValueKind
from azmcp.registry import CommandLeaf, CommandRegistry

_JSON_TYPES: dict[ValueKind, str] = {
    ValueKind.STRING: "string",
    ValueKind.BOOL: "boolean",
    ValueKind.INT: "integer",
    ValueKind.DOUBLE: "number",
    ValueKind.STRING_ARRAY: "array",
}


def json_type_of(kind: ValueKind) -> str:
    """Return the JSON Schema type name for a value kind."""
    return _JSON_TYPES[kind]


def _property(option: OptionDefinition) -> dict[str, Any]:
    schema: dict[str, Any] = {
        "type": json_type_of(option.value_kind),
        "description": option.description,
    }
    if option.value_kind is ValueKind.STRING_ARRAY:
        schema["items"] = {"type": "string"}
    return schema


def input_schema(options: Iterable[OptionDefinition]) -> dict[str, Any]:
    """Build the JSON Schema object describing an option model."""
    declared = list(options)
    return {
        "type": "object",
        "properties": {option.name: _property(option) for option in declared},
        "required": [option.name for option in declared if option.required],
    }


def annotations_of(leaf: CommandLeaf) -> dict[str, Any]:
    """Return the MCP tool annotations declared on a leaf."""
    return {
        "destructiveHint": leaf.annotations.destructive,
        "readOnlyHint": leaf.annotations.read_only,
        "idempotentHint": leaf.annotations.idempotent,
        "openWorldHint": leaf.annotations.open_world,
        "title": leaf.title or None,
    }


def project_tool(leaf: CommandLeaf) -> dict[str, Any]:
    """Render one leaf as a tool descriptor."""
    return {
        "name": leaf.full_name,
        "description": leaf.description,
        "inputSchema": input_schema(leaf.option_model),
        "annotations": annotations_of(leaf),
    }


def project_catalog(registry: CommandRegistry) -> list[dict[str, Any]]:
    """Render every visible leaf of ``registry`` as a tool descriptor."""
    return [project_tool(leaf) for leaf in registry.list_visible()]
