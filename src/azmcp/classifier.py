"""Ordered rule tables that map failures onto envelope status and message."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from azmcp.errors import (
    AuthenticationError,
    AuthorizationError,
    ErrorKind,
    NotFoundError,
    RequestFailedError,
    ServiceUnavailableError,
    ValidationError,
    error_kind_of,
)

TROUBLESHOOTING_SUFFIX = (
    ". To mitigate this issue, please refer to the troubleshooting guidelines "
    "here at https://aka.ms/azmcp/troubleshooting."
)

Predicate = Callable[[BaseException], bool]
MessageFormatter = Callable[[BaseException], str]


@dataclass(frozen=True)
class ErrorClassificationRule:
    """Map exceptions matching ``predicate`` to a status and message.

    Attributes:
        predicate: Returns True when the rule applies to the exception.
        status: Fixed status code, or a callable deriving it from the exception.
        message: Formats the envelope message for the exception.

    """

    predicate: Predicate
    status: int | Callable[[BaseException], int]
    message: MessageFormatter = str

    def status_for(self, exc: BaseException) -> int:
        """Return the status this rule assigns to ``exc``."""
        if callable(self.status):
            return self.status(exc)
        return self.status


@dataclass(frozen=True)
class Classification:
    """Status and message chosen for a failure."""

    status: int
    message: str


def of_type(*types: type[BaseException]) -> Predicate:
    """Predicate matching instances of any of ``types``."""
    return lambda exc: isinstance(exc, types)


def of_kind(*kinds: ErrorKind) -> Predicate:
    """Predicate matching exceptions tagged with any of ``kinds``."""
    return lambda exc: error_kind_of(exc) in kinds


DEFAULT_RULE = ErrorClassificationRule(
    predicate=lambda _exc: True,
    status=500,
    message=lambda exc: f"{exc}{TROUBLESHOOTING_SUFFIX}",
)

GLOBAL_RULES: tuple[ErrorClassificationRule, ...] = (
    ErrorClassificationRule(
        predicate=of_type(AuthenticationError),
        status=401,
        message=lambda exc: (
            "Authentication failed. Please run 'az login' to sign in to Azure. "
            f"Details: {exc}"
        ),
    ),
    ErrorClassificationRule(
        predicate=of_kind(ErrorKind.AUTHORIZATION),
        status=403,
        message=lambda exc: f"Authorization failed. Details: {exc}",
    ),
    ErrorClassificationRule(predicate=of_type(NotFoundError), status=404),
    ErrorClassificationRule(predicate=of_type(ValidationError), status=400),
    ErrorClassificationRule(
        predicate=of_type(RequestFailedError),
        status=lambda exc: exc.status,  # type: ignore[attr-defined]
    ),
    ErrorClassificationRule(
        predicate=of_type(ServiceUnavailableError, ConnectionError),
        status=503,
        message=lambda exc: (
            f"Service unavailable or network connectivity issues. Details: {exc}"
        ),
    ),
    ErrorClassificationRule(
        predicate=of_type(TimeoutError),
        status=504,
        message=lambda exc: f"Request timed out. Details: {exc}",
    ),
)


class ErrorClassifier:
    """Walk rule tables nearest-family-first, ending with the default rule."""

    def __init__(self, families: Iterable[Sequence[ErrorClassificationRule]]) -> None:
        """Create a classifier from rule lists ordered nearest family first."""
        self._rules: tuple[ErrorClassificationRule, ...] = (
            *(rule for family in families for rule in family),
            DEFAULT_RULE,
        )

    @property
    def rules(self) -> tuple[ErrorClassificationRule, ...]:
        """Return the flattened, ordered rule chain."""
        return self._rules

    def classify(self, exc: BaseException) -> Classification:
        """Return the classification of the first rule matching ``exc``."""
        for rule in self._rules:
            if rule.predicate(exc):
                return Classification(status=rule.status_for(exc), message=rule.message(exc))
        raise AssertionError("default rule always matches")  # pragma: no cover
