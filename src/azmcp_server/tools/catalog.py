"""Self-describing ``tools list`` command."""

from __future__ import annotations

from azmcp.executor import CommandArgs, CommandContext
from azmcp.registry import SEPARATOR, CommandLeaf, CommandRegistry
from azmcp_server.tools.common import READ_ONLY


def _command_words(registry: CommandRegistry, leaf: CommandLeaf) -> str:
    prefix = f"{registry.root.name}{SEPARATOR}"
    return leaf.full_name.removeprefix(prefix).replace(SEPARATOR, " ")


def _leaf_to_dict(registry: CommandRegistry, leaf: CommandLeaf) -> dict[str, object]:
    return {
        "name": leaf.name,
        "description": leaf.description,
        "command": _command_words(registry, leaf),
        "options": [
            {
                "name": option.name,
                "description": option.description,
                "required": option.required,
            }
            for option in leaf.option_model
            if not option.hidden
        ],
    }


def tools_list_command(registry: CommandRegistry) -> CommandLeaf:
    """Create the hidden ``tools list`` command over ``registry``."""

    def handler(context: CommandContext, args: CommandArgs) -> object:
        return [_leaf_to_dict(registry, leaf) for leaf in registry.list_visible()]

    return CommandLeaf(
        name="list",
        title="List Available Tools",
        description=(
            "List all available commands and their tools in a hierarchical "
            "structure. This command returns detailed information about each "
            "command, including its name, description, full command path, and all "
            "supported arguments."
        ),
        handler=handler,
        hidden=True,
        annotations=READ_ONLY,
    )


def register(registry: CommandRegistry) -> None:
    """Register the tools area."""
    registry.add_group(
        "tools",
        "CLI tools operations - Commands for discovering and exploring the "
        "functionality available in this CLI tool.",
    )
    registry.register("tools", tools_list_command(registry))
