"""Typed option descriptors and the contributors that compose them."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from azmcp.classifier import ErrorClassificationRule

Validator = Callable[[Mapping[str, object]], "str | None"]


class ValueKind(str, Enum):
    """Value types an option may declare."""

    STRING = "string"
    BOOL = "bool"
    INT = "int"
    DOUBLE = "double"
    STRING_ARRAY = "stringArray"


@dataclass(frozen=True)
class OptionDefinition:
    """Named, typed parameter declared by a leaf or one of its contributors.

    Attributes:
        name: Option name without the leading ``--``.
        value_kind: Declared value type used for coercion and schema projection.
        description: Human-readable description surfaced to callers.
        required: Whether the caller must supply the option.
        default: Value bound when the caller omits the option.
        hidden: Whether the option is left out of the ``tools list`` catalog.

    """

    name: str
    value_kind: ValueKind = ValueKind.STRING
    description: str = ""
    required: bool = False
    default: object | None = None
    hidden: bool = False

    @property
    def flag(self) -> str:
        """Return the command-line spelling of the option."""
        return f"--{self.name}"

    def with_required(self, required: bool) -> OptionDefinition:
        """Return a copy of the option with a different required flag."""
        return OptionDefinition(
            name=self.name,
            value_kind=self.value_kind,
            description=self.description,
            required=required,
            default=self.default,
            hidden=self.hidden,
        )


@dataclass(frozen=True)
class OptionContributor:
    """Reusable bundle of options, validators and error rules.

    A leaf lists its contributors ancestor-first; registration, binding,
    validation and classification fold over that list.
    """

    name: str
    options: tuple[OptionDefinition, ...] = ()
    validators: tuple[Validator, ...] = ()
    error_rules: tuple[ErrorClassificationRule, ...] = ()


def compose_options(
    contributors: Iterable[OptionContributor], own: Iterable[OptionDefinition]
) -> tuple[OptionDefinition, ...]:
    """Concatenate contributor options followed by the leaf's own options.

    Raises:
        ValueError: If two options share a name (case-insensitively).

    """
    composed: list[OptionDefinition] = []
    seen: set[str] = set()
    for option in [*(o for c in contributors for o in c.options), *own]:
        key = option.name.lower()
        if key in seen:
            raise ValueError(f"Option '--{option.name}' is declared more than once")
        seen.add(key)
        composed.append(option)
    return tuple(composed)


class RetryPolicy(BaseModel):
    """Retry settings forwarded, uninterpreted, to collaborators."""

    model_config = ConfigDict(frozen=True)

    max_retries: int = Field(default=3, ge=0)
    delay: float = Field(default=2.0, ge=0)
    max_delay: float = Field(default=10.0, ge=0)
    mode: Literal["fixed", "exponential"] = "exponential"
    network_timeout: float = Field(default=100.0, gt=0)


TENANT = OptionDefinition(
    name="tenant",
    description=(
        "The Azure Active Directory tenant ID or name. This can be either the GUID "
        "identifier or the display name of your Azure AD tenant."
    ),
    hidden=True,
)

AUTH_METHOD = OptionDefinition(
    name="auth-method",
    description=(
        "Authentication method to use. Options: 'credential' (Azure CLI/managed "
        "identity), 'key' (access key), or 'connectionString'."
    ),
    default="credential",
)

SUBSCRIPTION = OptionDefinition(
    name="subscription",
    description=(
        "The Azure subscription ID or name. This can be either the GUID identifier "
        "or the display name of the Azure subscription to use."
    ),
    required=True,
)

RESOURCE_GROUP = OptionDefinition(
    name="resource-group",
    description=(
        "The name of the Azure resource group. This is a logical container for "
        "Azure resources."
    ),
    required=True,
)

RETRY_DELAY = OptionDefinition(
    name="retry-delay",
    value_kind=ValueKind.DOUBLE,
    description=(
        "Initial delay in seconds between retry attempts. For exponential backoff, "
        "this value is used as the base."
    ),
    default=2.0,
    hidden=True,
)

RETRY_MAX_DELAY = OptionDefinition(
    name="retry-max-delay",
    value_kind=ValueKind.DOUBLE,
    description=(
        "Maximum delay in seconds between retries, regardless of the retry strategy."
    ),
    default=10.0,
    hidden=True,
)

RETRY_MAX_RETRIES = OptionDefinition(
    name="retry-max-retries",
    value_kind=ValueKind.INT,
    description=(
        "Maximum number of retry attempts for failed operations before giving up."
    ),
    default=3,
    hidden=True,
)

RETRY_MODE = OptionDefinition(
    name="retry-mode",
    description=(
        "Retry strategy to use. 'fixed' uses consistent delays, 'exponential' "
        "increases delay between attempts."
    ),
    default="exponential",
    hidden=True,
)

RETRY_NETWORK_TIMEOUT = OptionDefinition(
    name="retry-network-timeout",
    value_kind=ValueKind.DOUBLE,
    description=(
        "Network operation timeout in seconds. Operations taking longer than this "
        "will be cancelled."
    ),
    default=100.0,
    hidden=True,
)

RETRY_OPTIONS: tuple[OptionDefinition, ...] = (
    RETRY_DELAY,
    RETRY_MAX_DELAY,
    RETRY_MAX_RETRIES,
    RETRY_MODE,
    RETRY_NETWORK_TIMEOUT,
)


def retry_policy_from(
    values: Mapping[str, object], supplied: Iterable[str]
) -> RetryPolicy | None:
    """Build a retry policy only when the caller supplied a retry option."""
    supplied_names = set(supplied)
    if not any(option.name in supplied_names for option in RETRY_OPTIONS):
        return None
    return RetryPolicy(
        max_retries=values.get(RETRY_MAX_RETRIES.name, RETRY_MAX_RETRIES.default),
        delay=values.get(RETRY_DELAY.name, RETRY_DELAY.default),
        max_delay=values.get(RETRY_MAX_DELAY.name, RETRY_MAX_DELAY.default),
        mode=values.get(RETRY_MODE.name, RETRY_MODE.default),
        network_timeout=values.get(
            RETRY_NETWORK_TIMEOUT.name, RETRY_NETWORK_TIMEOUT.default
        ),
    )
