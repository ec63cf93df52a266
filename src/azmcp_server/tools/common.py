"""Option contributors and helpers shared by the command areas."""

from __future__ import annotations

from typing import Any

from azmcp.classifier import GLOBAL_RULES
from azmcp.executor import CommandArgs, CommandContext
from azmcp.options import (
    AUTH_METHOD,
    RESOURCE_GROUP,
    RETRY_OPTIONS,
    SUBSCRIPTION,
    TENANT,
    OptionContributor,
)
from azmcp.registry import ToolAnnotations
from azmcp.validation import one_of

GLOBAL = OptionContributor(
    name="global",
    options=(TENANT, AUTH_METHOD, *RETRY_OPTIONS),
    validators=(
        one_of("auth-method", ("credential", "key", "connectionString")),
        one_of("retry-mode", ("fixed", "exponential")),
    ),
    error_rules=GLOBAL_RULES,
)

SUBSCRIPTION_SCOPE = OptionContributor(name="subscription", options=(SUBSCRIPTION,))

RESOURCE_GROUP_SCOPE = OptionContributor(
    name="resource-group", options=(RESOURCE_GROUP,)
)

SUBSCRIPTION_CHAIN: tuple[OptionContributor, ...] = (GLOBAL, SUBSCRIPTION_SCOPE)

READ_ONLY = ToolAnnotations()
WRITE = ToolAnnotations(read_only=False)
WRITE_NON_IDEMPOTENT = ToolAnnotations(read_only=False, idempotent=False)
DESTRUCTIVE = ToolAnnotations(destructive=True, read_only=False)


def call_scope(context: CommandContext, args: CommandArgs) -> dict[str, Any]:
    """Keyword arguments every collaborator call receives."""
    return {
        "tenant": args.tenant,
        "retry_policy": args.retry_policy,
        "deadline": context.deadline,
    }


def optional_str(args: CommandArgs, name: str) -> str | None:
    """Return a string option, treating blank values as absent."""
    value = args.get(name)
    if value is None or not str(value).strip():
        return None
    return str(value)
