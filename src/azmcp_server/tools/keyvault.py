"""Key Vault key commands."""

from __future__ import annotations

from azmcp.classifier import ErrorClassificationRule
from azmcp.errors import RequestFailedError
from azmcp.executor import CommandArgs, CommandContext
from azmcp.options import OptionContributor, OptionDefinition, ValueKind
from azmcp.registry import CommandLeaf, CommandRegistry
from azmcp.response import results_or_none
from azmcp.validation import one_of
from azmcp_server.models import VaultKey
from azmcp_server.services import ServiceProvider
from azmcp_server.tools.common import (
    READ_ONLY,
    SUBSCRIPTION_CHAIN,
    WRITE_NON_IDEMPOTENT,
    call_scope,
)

KEY_TYPES = ("RSA", "EC", "OCT")

VAULT = OptionDefinition(
    name="vault",
    description="The name of the Key Vault.",
    required=True,
)

KEY = OptionDefinition(
    name="key",
    description="The name of the key to retrieve/modify from the Key Vault.",
    required=True,
)

KEY_TYPE = OptionDefinition(
    name="key-type",
    description="The type of key to create (RSA, EC, OCT).",
    required=True,
)

INCLUDE_MANAGED = OptionDefinition(
    name="include-managed",
    value_kind=ValueKind.BOOL,
    description="Whether or not to include managed keys in results.",
    default=False,
)


def _missing_key(exc: BaseException) -> bool:
    return isinstance(exc, RequestFailedError) and exc.status == 404


KEYVAULT_RULES = (
    ErrorClassificationRule(
        predicate=_missing_key,
        status=404,
        message=lambda exc: f"Key not found. Details: {exc}",
    ),
)

KEY_VAULT = OptionContributor(
    name="key-vault", options=(VAULT,), error_rules=KEYVAULT_RULES
)


def _key_to_dict(key: VaultKey) -> dict[str, object]:
    return {
        "name": key.name,
        "keyType": key.key_type,
        "enabled": key.enabled,
        "notBefore": key.not_before,
        "expiresOn": key.expires_on,
        "createdOn": key.created_on,
        "updatedOn": key.updated_on,
    }


def key_list_command(services: ServiceProvider) -> CommandLeaf:
    """Create the ``keyvault key list`` command."""

    async def handler(context: CommandContext, args: CommandArgs) -> object:
        keys = await services.keyvault.list_keys(
            str(args["vault"]),
            bool(args.get("include-managed")),
            str(args["subscription"]),
            **call_scope(context, args),
        )
        return results_or_none("keys", keys)

    return CommandLeaf(
        name="list",
        title="List Key Vault Keys",
        description=(
            "List all keys in an Azure Key Vault. This command retrieves and "
            "displays the names of all keys stored in the specified vault."
        ),
        handler=handler,
        options=(INCLUDE_MANAGED,),
        contributors=(*SUBSCRIPTION_CHAIN, KEY_VAULT),
        annotations=READ_ONLY,
    )


def key_get_command(services: ServiceProvider) -> CommandLeaf:
    """Create the ``keyvault key get`` command."""

    async def handler(context: CommandContext, args: CommandArgs) -> object:
        key = await services.keyvault.get_key(
            str(args["vault"]),
            str(args["key"]),
            str(args["subscription"]),
            **call_scope(context, args),
        )
        return _key_to_dict(key)

    return CommandLeaf(
        name="get",
        title="Get Key Vault Key",
        description=(
            "Get a key from an Azure Key Vault. This command retrieves and displays "
            "details about a specific key in the specified vault."
        ),
        handler=handler,
        options=(KEY,),
        contributors=(*SUBSCRIPTION_CHAIN, KEY_VAULT),
        annotations=READ_ONLY,
    )


def key_create_command(services: ServiceProvider) -> CommandLeaf:
    """Create the ``keyvault key create`` command."""

    async def handler(context: CommandContext, args: CommandArgs) -> object:
        key = await services.keyvault.create_key(
            str(args["vault"]),
            str(args["key"]),
            str(args["key-type"]).upper(),
            str(args["subscription"]),
            **call_scope(context, args),
        )
        return _key_to_dict(key)

    return CommandLeaf(
        name="create",
        title="Create Key Vault Key",
        description=(
            "Create a new key in an Azure Key Vault. This command creates a key with "
            "the specified name and type in the given vault. Key types: RSA (RSA key "
            "pair), EC (Elliptic Curve key pair), OCT (symmetric key)."
        ),
        handler=handler,
        options=(KEY, KEY_TYPE),
        contributors=(*SUBSCRIPTION_CHAIN, KEY_VAULT),
        validators=(one_of("key-type", KEY_TYPES),),
        annotations=WRITE_NON_IDEMPOTENT,
    )


def register(registry: CommandRegistry, services: ServiceProvider) -> None:
    """Register the keyvault area."""
    registry.add_group(
        "keyvault",
        "Key Vault operations - Commands for managing and accessing Azure Key "
        "Vault resources.",
    )
    registry.add_group("keyvault.key", "Key Vault key operations")
    registry.register("keyvault.key", key_list_command(services))
    registry.register("keyvault.key", key_get_command(services))
    registry.register("keyvault.key", key_create_command(services))
