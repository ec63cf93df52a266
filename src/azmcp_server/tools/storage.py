"""Storage account, table and blob commands."""

from __future__ import annotations

from azmcp.executor import CommandArgs, CommandContext
from azmcp.options import OptionContributor, OptionDefinition
from azmcp.registry import CommandLeaf, CommandRegistry
from azmcp.response import results_or_none
from azmcp_server.models import BlobContainer
from azmcp_server.services import ServiceProvider
from azmcp_server.tools.common import READ_ONLY, SUBSCRIPTION_CHAIN, call_scope

ACCOUNT_NAME = OptionDefinition(
    name="account-name",
    description="The name of the Azure Storage account. This is the unique name you "
    "chose for your storage account (e.g., 'mystorageaccount').",
    required=True,
)

CONTAINER_NAME = OptionDefinition(
    name="container-name",
    description="The name of the container to access within the storage account.",
    required=True,
)

STORAGE_ACCOUNT = OptionContributor(name="storage-account", options=(ACCOUNT_NAME,))
BLOB_CONTAINER = OptionContributor(name="blob-container", options=(CONTAINER_NAME,))


def _container_to_dict(container: BlobContainer) -> dict[str, object]:
    return {
        "name": container.name,
        "lastModified": container.last_modified,
        "eTag": container.etag,
        "publicAccess": container.public_access,
        "leaseStatus": container.lease_status,
        "metadata": container.metadata,
    }


def account_list_command(services: ServiceProvider) -> CommandLeaf:
    """Create the ``storage account list`` command."""

    async def handler(context: CommandContext, args: CommandArgs) -> object:
        accounts = await services.storage.list_accounts(
            str(args["subscription"]), **call_scope(context, args)
        )
        return results_or_none("accounts", [account.name for account in accounts])

    return CommandLeaf(
        name="list",
        title="List Storage Accounts",
        description=(
            "List all Storage accounts in a subscription. This command retrieves all "
            "Storage accounts available in the specified subscription. Results "
            "include account names and are returned as a JSON array."
        ),
        handler=handler,
        contributors=SUBSCRIPTION_CHAIN,
        annotations=READ_ONLY,
    )


def table_list_command(services: ServiceProvider) -> CommandLeaf:
    """Create the ``storage table list`` command."""

    async def handler(context: CommandContext, args: CommandArgs) -> object:
        tables = await services.storage.list_tables(
            str(args["account-name"]),
            str(args["subscription"]),
            **call_scope(context, args),
        )
        return results_or_none("tables", tables)

    return CommandLeaf(
        name="list",
        title="List Storage Tables",
        description=(
            "List all tables in a Storage account. This command retrieves and "
            "displays all tables available in the specified Storage account. "
            "Results include table names and are returned as a JSON array."
        ),
        handler=handler,
        contributors=(*SUBSCRIPTION_CHAIN, STORAGE_ACCOUNT),
        annotations=READ_ONLY,
    )


def container_list_command(services: ServiceProvider) -> CommandLeaf:
    """Create the ``storage blob container list`` command."""

    async def handler(context: CommandContext, args: CommandArgs) -> object:
        containers = await services.storage.list_containers(
            str(args["account-name"]),
            str(args["subscription"]),
            **call_scope(context, args),
        )
        return results_or_none("containers", containers)

    return CommandLeaf(
        name="list",
        title="List Storage Containers",
        description=(
            "List all containers in a Storage account. This command retrieves and "
            "displays all containers available in the specified account. Results "
            "include container names and are returned as a JSON array."
        ),
        handler=handler,
        contributors=(*SUBSCRIPTION_CHAIN, STORAGE_ACCOUNT),
        annotations=READ_ONLY,
    )


def container_details_command(services: ServiceProvider) -> CommandLeaf:
    """Create the ``storage blob container details`` command."""

    async def handler(context: CommandContext, args: CommandArgs) -> object:
        container = await services.storage.get_container(
            str(args["account-name"]),
            str(args["container-name"]),
            str(args["subscription"]),
            **call_scope(context, args),
        )
        return {"details": _container_to_dict(container)}

    return CommandLeaf(
        name="details",
        title="Get Storage Container Details",
        description=(
            "Get detailed properties of a storage container including metadata, "
            "lease status, and access level. Requires account-name and "
            "container-name."
        ),
        handler=handler,
        contributors=(*SUBSCRIPTION_CHAIN, STORAGE_ACCOUNT, BLOB_CONTAINER),
        annotations=READ_ONLY,
    )


def blob_list_command(services: ServiceProvider) -> CommandLeaf:
    """Create the ``storage blob list`` command."""

    async def handler(context: CommandContext, args: CommandArgs) -> object:
        blobs = await services.storage.list_blobs(
            str(args["account-name"]),
            str(args["container-name"]),
            str(args["subscription"]),
            **call_scope(context, args),
        )
        return results_or_none("blobs", blobs)

    return CommandLeaf(
        name="list",
        title="List Storage Blobs",
        description=(
            "List all blobs in a Storage container. This command retrieves and "
            "displays all blobs available in the specified container and Storage "
            "account. Results are returned as a JSON array. Requires account-name "
            "and container-name."
        ),
        handler=handler,
        contributors=(*SUBSCRIPTION_CHAIN, STORAGE_ACCOUNT, BLOB_CONTAINER),
        annotations=READ_ONLY,
    )


def register(registry: CommandRegistry, services: ServiceProvider) -> None:
    """Register the storage area."""
    registry.add_group(
        "storage",
        "Storage operations - Commands for managing and accessing Azure Storage "
        "resources. Includes operations for containers, blobs, and tables.",
    )
    registry.add_group("storage.account", "Storage accounts operations")
    registry.add_group("storage.table", "Storage table operations")
    registry.add_group("storage.blob", "Storage blob operations")
    registry.add_group("storage.blob.container", "Storage blob container operations")
    registry.register("storage.account", account_list_command(services))
    registry.register("storage.table", table_list_command(services))
    registry.register("storage.blob", blob_list_command(services))
    registry.register("storage.blob.container", container_list_command(services))
    registry.register("storage.blob.container", container_details_command(services))
