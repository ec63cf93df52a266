"""App Configuration commands."""

from __future__ import annotations

from azmcp.executor import CommandArgs, CommandContext
from azmcp.options import OptionContributor, OptionDefinition
from azmcp.registry import CommandLeaf, CommandRegistry
from azmcp.response import CommandOutput, results_or_none
from azmcp_server.models import AppConfigStore, KeyValueSetting
from azmcp_server.services import ServiceProvider
from azmcp_server.tools.common import (
    DESTRUCTIVE,
    READ_ONLY,
    SUBSCRIPTION_CHAIN,
    WRITE,
    call_scope,
    optional_str,
)

ACCOUNT = OptionDefinition(
    name="account-name",
    description="The name of the App Configuration store (e.g., my-appconfig).",
    required=True,
)

KEY = OptionDefinition(
    name="key",
    description="The name of the key to access within the App Configuration store.",
    required=True,
)

VALUE = OptionDefinition(
    name="value",
    description="The value to set for the configuration key.",
    required=True,
)

LABEL = OptionDefinition(
    name="label",
    description=(
        "The label to apply to the configuration key. Labels are used to group and "
        "organize settings."
    ),
)

KEY_FILTER = OptionDefinition(
    name="key",
    description=(
        "Specifies the key filter, if any, to be used when retrieving key-values. "
        "The filter can be an exact match or end with '*' for a prefix search "
        "(e.g., 'App*'). If omitted all keys will be retrieved."
    ),
)

LABEL_FILTER = OptionDefinition(
    name="label",
    description=(
        "Specifies the label filter, if any, to be used when retrieving key-values. "
        "The filter can be an exact match or end with '*' for a prefix search "
        "(e.g., 'Prod*'). If omitted, all labels will be retrieved."
    ),
)

APPCONFIG_STORE = OptionContributor(name="appconfig-store", options=(ACCOUNT,))
KEY_VALUE = OptionContributor(name="appconfig-key-value", options=(KEY, LABEL))

KEY_VALUE_CHAIN = (*SUBSCRIPTION_CHAIN, APPCONFIG_STORE, KEY_VALUE)


def _store_to_dict(store: AppConfigStore) -> dict[str, object]:
    return {"name": store.name, "location": store.location}


def _setting_to_dict(setting: KeyValueSetting) -> dict[str, object]:
    return {
        "key": setting.key,
        "value": setting.value,
        "label": setting.label,
        "contentType": setting.content_type,
        "eTag": setting.etag,
        "lastModified": setting.last_modified,
        "locked": setting.locked,
    }


def account_list_command(services: ServiceProvider) -> CommandLeaf:
    """Create the ``appconfig account list`` command."""

    async def handler(context: CommandContext, args: CommandArgs) -> object:
        stores = await services.appconfig.list_accounts(
            str(args["subscription"]), **call_scope(context, args)
        )
        return results_or_none("accounts", [_store_to_dict(store) for store in stores])

    return CommandLeaf(
        name="list",
        title="List App Configuration Stores",
        description=(
            "List all App Configuration stores in a subscription. This command "
            "retrieves and displays all App Configuration store names and details "
            "available in the specified subscription. Results are returned as a "
            "JSON array."
        ),
        handler=handler,
        contributors=SUBSCRIPTION_CHAIN,
        annotations=READ_ONLY,
    )


def kv_list_command(services: ServiceProvider) -> CommandLeaf:
    """Create the ``appconfig kv list`` command."""

    async def handler(context: CommandContext, args: CommandArgs) -> object:
        settings = await services.appconfig.list_settings(
            str(args["account-name"]),
            str(args["subscription"]),
            optional_str(args, "key"),
            optional_str(args, "label"),
            **call_scope(context, args),
        )
        return results_or_none(
            "settings", [_setting_to_dict(setting) for setting in settings]
        )

    return CommandLeaf(
        name="list",
        title="List App Configuration Key-Value Settings",
        description=(
            "List all key-values in an App Configuration store. This command "
            "retrieves and displays all key-value pairs from the specified store. "
            "Each key-value includes its key, value, label, content type, ETag, last "
            "modified time, and lock status."
        ),
        handler=handler,
        options=(KEY_FILTER, LABEL_FILTER),
        contributors=(*SUBSCRIPTION_CHAIN, APPCONFIG_STORE),
        annotations=READ_ONLY,
    )


def kv_show_command(services: ServiceProvider) -> CommandLeaf:
    """Create the ``appconfig kv show`` command."""

    async def handler(context: CommandContext, args: CommandArgs) -> object:
        setting = await services.appconfig.get_setting(
            str(args["account-name"]),
            str(args["key"]),
            str(args["subscription"]),
            optional_str(args, "label"),
            **call_scope(context, args),
        )
        return {"setting": _setting_to_dict(setting)}

    return CommandLeaf(
        name="show",
        title="Show App Configuration Key-Value Setting",
        description=(
            "Show a specific key-value setting in an App Configuration store. This "
            "command retrieves and displays the value, label, content type, ETag, "
            "last modified time, and lock status for a specific setting. You must "
            "specify an account name and key. Optionally, you can specify a label "
            "otherwise the setting with default label will be retrieved."
        ),
        handler=handler,
        contributors=KEY_VALUE_CHAIN,
        annotations=READ_ONLY,
    )


def kv_set_command(services: ServiceProvider) -> CommandLeaf:
    """Create the ``appconfig kv set`` command."""

    async def handler(context: CommandContext, args: CommandArgs) -> object:
        setting = await services.appconfig.set_setting(
            str(args["account-name"]),
            str(args["key"]),
            str(args["value"]),
            str(args["subscription"]),
            optional_str(args, "label"),
            **call_scope(context, args),
        )
        return {"key": setting.key, "value": setting.value, "label": setting.label}

    return CommandLeaf(
        name="set",
        title="Set App Configuration Key-Value Setting",
        description=(
            "Set a key-value setting in an App Configuration store. This command "
            "creates or updates a key-value setting with the specified value. You "
            "must specify an account name, key, and value. Optionally, you can "
            "specify a label otherwise the default label will be used."
        ),
        handler=handler,
        options=(VALUE,),
        contributors=KEY_VALUE_CHAIN,
        annotations=WRITE,
    )


def kv_delete_command(services: ServiceProvider) -> CommandLeaf:
    """Create the ``appconfig kv delete`` command."""

    async def handler(context: CommandContext, args: CommandArgs) -> object:
        key = str(args["key"])
        label = optional_str(args, "label")
        await services.appconfig.delete_setting(
            str(args["account-name"]),
            key,
            str(args["subscription"]),
            label,
            **call_scope(context, args),
        )
        return {"key": key, "label": label}

    return CommandLeaf(
        name="delete",
        title="Delete App Configuration Key-Value Setting",
        description=(
            "Delete a key-value pair from an App Configuration store. This command "
            "removes the specified key-value pair from the store. If a label is "
            "specified, only the labeled version is deleted. If no label is "
            "specified, the key-value with the matching key and the default label "
            "will be deleted."
        ),
        handler=handler,
        contributors=KEY_VALUE_CHAIN,
        annotations=DESTRUCTIVE,
    )


def _lock_command(services: ServiceProvider, *, locked: bool) -> CommandLeaf:
    verb = "lock" if locked else "unlock"

    async def handler(context: CommandContext, args: CommandArgs) -> object:
        setting = await services.appconfig.set_lock(
            str(args["account-name"]),
            str(args["key"]),
            locked,
            str(args["subscription"]),
            optional_str(args, "label"),
            **call_scope(context, args),
        )
        return CommandOutput(
            results={"key": setting.key, "label": setting.label},
            message=f"Key-value '{setting.key}' {verb}ed.",
        )

    if locked:
        description = (
            "Lock a key-value in an App Configuration store. This command sets a "
            "key-value to read-only mode, preventing any modifications to its value. "
            "You must specify an account name and key. Optionally, you can specify a "
            "label to lock a specific labeled version of the key-value."
        )
    else:
        description = (
            "Unlock a key-value setting in an App Configuration store. This command "
            "removes the read-only mode from a key-value setting, allowing "
            "modifications to its value. You must specify an account name and key. "
            "Optionally, you can specify a label to unlock a specific labeled "
            "version of the setting."
        )
    return CommandLeaf(
        name=verb,
        title=f"{verb.capitalize()} App Configuration Key-Value Setting",
        description=description,
        handler=handler,
        contributors=KEY_VALUE_CHAIN,
        annotations=WRITE,
    )


def kv_lock_command(services: ServiceProvider) -> CommandLeaf:
    """Create the ``appconfig kv lock`` command."""
    return _lock_command(services, locked=True)


def kv_unlock_command(services: ServiceProvider) -> CommandLeaf:
    """Create the ``appconfig kv unlock`` command."""
    return _lock_command(services, locked=False)


def register(registry: CommandRegistry, services: ServiceProvider) -> None:
    """Register the appconfig area."""
    registry.add_group(
        "appconfig",
        "App Configuration operations - Commands for managing App Configuration "
        "stores.",
    )
    registry.add_group("appconfig.account", "App Configuration store operations")
    registry.add_group("appconfig.kv", "App Configuration key-value setting operations")
    registry.register("appconfig.account", account_list_command(services))
    for factory in (
        kv_list_command,
        kv_show_command,
        kv_set_command,
        kv_delete_command,
        kv_lock_command,
        kv_unlock_command,
    ):
        registry.register("appconfig.kv", factory(services))
