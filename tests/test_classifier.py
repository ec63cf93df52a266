"""Error classification rule chains."""

from __future__ import annotations

import pytest

from azmcp.classifier import (
    GLOBAL_RULES,
    TROUBLESHOOTING_SUFFIX,
    ErrorClassificationRule,
    ErrorClassifier,
    of_type,
)
from azmcp.errors import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    RequestFailedError,
    ServiceUnavailableError,
    ValidationError,
)


@pytest.fixture()
def classifier() -> ErrorClassifier:
    return ErrorClassifier([GLOBAL_RULES])


@pytest.mark.parametrize(
    ("exc", "status"),
    [
        (AuthenticationError("no token"), 401),
        (AuthorizationError("denied"), 403),
        (PermissionError("denied"), 403),
        (NotFoundError("missing"), 404),
        (ValidationError("bad input"), 400),
        (RequestFailedError("conflict", status=409), 409),
        (ServiceUnavailableError("down"), 503),
        (ConnectionError("reset"), 503),
        (TimeoutError("slow"), 504),
        (RuntimeError("boom"), 500),
    ],
)
def test_global_rules_map_statuses(
    classifier: ErrorClassifier, exc: BaseException, status: int
) -> None:
    """Each well-known failure maps onto its status code."""
    assert classifier.classify(exc).status == status


def test_not_found_keeps_collaborator_message(classifier: ErrorClassifier) -> None:
    """Not-found failures surface the collaborator's own text."""
    result = classifier.classify(NotFoundError("Storage account 'x' not found"))

    assert result.message == "Storage account 'x' not found"


def test_default_rule_appends_troubleshooting_suffix(
    classifier: ErrorClassifier,
) -> None:
    """Unclassified failures get the generic remediation text."""
    result = classifier.classify(RuntimeError("boom"))

    assert result.status == 500
    assert result.message == f"boom{TROUBLESHOOTING_SUFFIX}"


def test_authentication_message_mentions_login(classifier: ErrorClassifier) -> None:
    """Credential failures explain how to sign in."""
    result = classifier.classify(AuthenticationError("expired"))

    assert "az login" in result.message
    assert result.message.endswith("Details: expired")
    assert TROUBLESHOOTING_SUFFIX not in result.message


def test_nearest_family_wins() -> None:
    """A leaf-level rule shadows the global rule for the same failure."""
    leaf_rule = ErrorClassificationRule(
        predicate=of_type(NotFoundError),
        status=404,
        message=lambda exc: f"Key not found. Details: {exc}",
    )
    classifier = ErrorClassifier([(leaf_rule,), GLOBAL_RULES])

    result = classifier.classify(NotFoundError("gone"))

    assert result.message == "Key not found. Details: gone"


def test_rule_chain_ends_with_default() -> None:
    """An empty family list still classifies through the default rule."""
    classifier = ErrorClassifier([])

    assert len(classifier.rules) == 1
    assert classifier.classify(ValueError("x")).status == 500
