"""Cosmos DB commands."""

from __future__ import annotations

from azmcp.classifier import ErrorClassificationRule, of_type
from azmcp.executor import CommandArgs, CommandContext
from azmcp.options import OptionContributor, OptionDefinition
from azmcp.registry import CommandLeaf, CommandRegistry
from azmcp.response import results_or_none
from azmcp_server.services import CosmosError, ServiceProvider
from azmcp_server.tools.common import READ_ONLY, SUBSCRIPTION_CHAIN, call_scope

DEFAULT_QUERY = "SELECT * FROM c"

ACCOUNT_NAME = OptionDefinition(
    name="account-name",
    description="The name of the Cosmos DB account to query (e.g., my-cosmos-account).",
    required=True,
)

DATABASE_NAME = OptionDefinition(
    name="database-name",
    description="The name of the database to query (e.g., my-database).",
    required=True,
)

CONTAINER_NAME = OptionDefinition(
    name="container-name",
    description="The name of the container to query (e.g., my-container).",
    required=True,
)

QUERY = OptionDefinition(
    name="query",
    description="SQL query to execute against the container. Uses Cosmos DB SQL syntax.",
    default=DEFAULT_QUERY,
)

COSMOS_RULES = (
    ErrorClassificationRule(
        predicate=of_type(CosmosError),
        status=lambda exc: exc.status,  # type: ignore[attr-defined]
    ),
)

COSMOS_ACCOUNT = OptionContributor(
    name="cosmos-account", options=(ACCOUNT_NAME,), error_rules=COSMOS_RULES
)
COSMOS_DATABASE = OptionContributor(name="cosmos-database", options=(DATABASE_NAME,))
COSMOS_CONTAINER = OptionContributor(name="cosmos-container", options=(CONTAINER_NAME,))


def account_list_command(services: ServiceProvider) -> CommandLeaf:
    """Create the ``cosmos account list`` command."""

    async def handler(context: CommandContext, args: CommandArgs) -> object:
        accounts = await services.cosmos.list_accounts(
            str(args["subscription"]), **call_scope(context, args)
        )
        return results_or_none("accounts", [account.name for account in accounts])

    return CommandLeaf(
        name="list",
        title="List Cosmos DB Accounts",
        description=(
            "List all Cosmos DB accounts in a subscription. This command retrieves "
            "and displays all Cosmos DB accounts available in the specified "
            "subscription. Results include account names and are returned as a "
            "JSON array."
        ),
        handler=handler,
        contributors=SUBSCRIPTION_CHAIN,
        error_rules=COSMOS_RULES,
        annotations=READ_ONLY,
    )


def database_list_command(services: ServiceProvider) -> CommandLeaf:
    """Create the ``cosmos database list`` command."""

    async def handler(context: CommandContext, args: CommandArgs) -> object:
        databases = await services.cosmos.list_databases(
            str(args["account-name"]),
            str(args["subscription"]),
            **call_scope(context, args),
        )
        return results_or_none("databases", databases)

    return CommandLeaf(
        name="list",
        title="List Cosmos DB Databases",
        description=(
            "List all databases in a Cosmos DB account. This command retrieves and "
            "displays all databases available in the specified Cosmos DB account. "
            "Results include database names and are returned as a JSON array."
        ),
        handler=handler,
        contributors=(*SUBSCRIPTION_CHAIN, COSMOS_ACCOUNT),
        annotations=READ_ONLY,
    )


def container_list_command(services: ServiceProvider) -> CommandLeaf:
    """Create the ``cosmos database container list`` command."""

    async def handler(context: CommandContext, args: CommandArgs) -> object:
        containers = await services.cosmos.list_containers(
            str(args["account-name"]),
            str(args["database-name"]),
            str(args["subscription"]),
            **call_scope(context, args),
        )
        return results_or_none("containers", containers)

    return CommandLeaf(
        name="list",
        title="List Cosmos DB Containers",
        description=(
            "List all containers in a Cosmos DB database. This command retrieves and "
            "displays all containers within the specified database and Cosmos DB "
            "account. Results include container names and are returned as a JSON "
            "array."
        ),
        handler=handler,
        contributors=(*SUBSCRIPTION_CHAIN, COSMOS_ACCOUNT, COSMOS_DATABASE),
        annotations=READ_ONLY,
    )


def item_query_command(services: ServiceProvider) -> CommandLeaf:
    """Create the ``cosmos database container item query`` command."""

    async def handler(context: CommandContext, args: CommandArgs) -> object:
        items = await services.cosmos.query_items(
            str(args["account-name"]),
            str(args["database-name"]),
            str(args["container-name"]),
            str(args.get("query") or DEFAULT_QUERY),
            str(args["subscription"]),
            **call_scope(context, args),
        )
        return results_or_none("items", items)

    return CommandLeaf(
        name="query",
        title="Query Cosmos DB Container",
        description=(
            "Execute a SQL query against items in a Cosmos DB container. Requires "
            "account-name, database-name, and container-name. The query parameter "
            "accepts SQL query syntax. Results are returned as a JSON array of "
            "documents."
        ),
        handler=handler,
        options=(QUERY,),
        contributors=(
            *SUBSCRIPTION_CHAIN,
            COSMOS_ACCOUNT,
            COSMOS_DATABASE,
            COSMOS_CONTAINER,
        ),
        annotations=READ_ONLY,
    )


def register(registry: CommandRegistry, services: ServiceProvider) -> None:
    """Register the cosmos area."""
    registry.add_group(
        "cosmos",
        "Cosmos DB operations - Commands for managing and querying Azure Cosmos DB "
        "resources. Includes operations for databases, containers, and document "
        "queries.",
    )
    registry.add_group("cosmos.account", "Cosmos DB account operations")
    registry.add_group("cosmos.database", "Cosmos DB database operations")
    registry.add_group("cosmos.database.container", "Cosmos DB container operations")
    registry.add_group("cosmos.database.container.item", "Cosmos DB item operations")
    registry.register("cosmos.account", account_list_command(services))
    registry.register("cosmos.database", database_list_command(services))
    registry.register("cosmos.database.container", container_list_command(services))
    registry.register("cosmos.database.container.item", item_query_command(services))
