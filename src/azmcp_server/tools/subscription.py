"""Subscription and resource group commands."""

from __future__ import annotations

from azmcp.executor import CommandArgs, CommandContext
from azmcp.registry import CommandLeaf, CommandRegistry
from azmcp.response import results_or_none
from azmcp_server.models import ResourceGroup, Subscription
from azmcp_server.services import ServiceProvider
from azmcp_server.tools.common import GLOBAL, READ_ONLY, SUBSCRIPTION_CHAIN, call_scope


def _subscription_to_dict(subscription: Subscription) -> dict[str, object]:
    return {
        "subscriptionId": subscription.subscription_id,
        "displayName": subscription.display_name,
        "state": subscription.state,
        "tenantId": subscription.tenant_id,
    }


def _group_to_dict(group: ResourceGroup) -> dict[str, object]:
    return {"name": group.name, "id": group.id, "location": group.location}


def subscription_list_command(services: ServiceProvider) -> CommandLeaf:
    """Create the ``subscription list`` command."""

    async def handler(context: CommandContext, args: CommandArgs) -> object:
        subscriptions = await services.subscriptions.list_subscriptions(
            **call_scope(context, args)
        )
        return results_or_none(
            "subscriptions", [_subscription_to_dict(sub) for sub in subscriptions]
        )

    return CommandLeaf(
        name="list",
        title="List Azure Subscriptions",
        description=(
            "List all Azure subscriptions accessible to your account. Optionally "
            "specify tenant and auth-method. Results include subscription names and "
            "IDs, returned as a JSON array."
        ),
        handler=handler,
        contributors=(GLOBAL,),
        annotations=READ_ONLY,
    )


def group_list_command(services: ServiceProvider) -> CommandLeaf:
    """Create the ``group list`` command."""

    async def handler(context: CommandContext, args: CommandArgs) -> object:
        groups = await services.resource_groups.list_resource_groups(
            str(args["subscription"]), **call_scope(context, args)
        )
        return results_or_none("groups", [_group_to_dict(group) for group in groups])

    return CommandLeaf(
        name="list",
        title="List Resource Groups",
        description=(
            "List all resource groups in a subscription. This command retrieves all "
            "resource groups available in the specified subscription. Results "
            "include resource group names and IDs, returned as a JSON array."
        ),
        handler=handler,
        contributors=SUBSCRIPTION_CHAIN,
        annotations=READ_ONLY,
    )


def register(registry: CommandRegistry, services: ServiceProvider) -> None:
    """Register the subscription and group areas."""
    registry.add_group(
        "subscription",
        "Azure subscription operations - Commands for listing and managing Azure "
        "subscriptions accessible to your account.",
    )
    registry.add_group(
        "group",
        "Resource group operations - Commands for listing and managing Azure "
        "resource groups in your subscriptions.",
    )
    registry.register("subscription", subscription_list_command(services))
    registry.register("group", group_list_command(services))
