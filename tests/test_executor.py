"""Invocation pipeline: bind, validate, execute and envelope."""

from __future__ import annotations

import pytest

from azmcp.classifier import GLOBAL_RULES, TROUBLESHOOTING_SUFFIX
from azmcp.codec import tokenize
from azmcp.errors import ErrorKind, NotFoundError
from azmcp.executor import (
    CommandArgs,
    CommandContext,
    CommandRunner,
    Failure,
    Success,
    execute,
)
from azmcp.options import RETRY_OPTIONS, OptionContributor, OptionDefinition
from azmcp.registry import CommandLeaf
from azmcp.response import CommandOutput
from azmcp.validation import exactly_one_of


class SpyHandler:
    """Record every call and return a canned result."""

    def __init__(self, result: object = None) -> None:
        self.result = result
        self.calls: list[tuple[CommandContext, CommandArgs]] = []

    def __call__(self, context: CommandContext, args: CommandArgs) -> object:
        self.calls.append((context, args))
        return self.result


RETRY = OptionContributor("retry", options=RETRY_OPTIONS)
GLOBAL = OptionContributor("global", error_rules=GLOBAL_RULES)


def _leaf(handler, **kwargs) -> CommandLeaf:
    return CommandLeaf(
        "run",
        "Run something",
        handler,
        full_name="azmcp_test_run",
        **kwargs,
    )


@pytest.mark.anyio()
async def test_missing_required_option_skips_handler() -> None:
    """Binding failures short-circuit before the handler runs."""
    # Arrange
    spy = SpyHandler()
    leaf = _leaf(
        spy,
        options=(
            OptionDefinition("a", required=True),
            OptionDefinition("b", required=True),
        ),
    )

    # Act
    envelope = await CommandRunner().run_arguments(leaf, {})

    # Assert
    assert spy.calls == []
    assert envelope.status == 400
    assert envelope.message == "Missing Required options: --a, --b"
    assert envelope.results is None


@pytest.mark.anyio()
async def test_validator_failure_is_a_bad_request() -> None:
    """Cross-field validators run after binding and before execution."""
    spy = SpyHandler()
    leaf = _leaf(
        spy,
        options=(OptionDefinition("resource-id"), OptionDefinition("resource-name")),
        validators=(exactly_one_of(("resource-id",), ("resource-name",)),),
    )

    envelope = await CommandRunner().run_arguments(
        leaf, {"resource-id": "/a", "resource-name": "b"}
    )

    assert spy.calls == []
    assert envelope.status == 400
    assert envelope.message.startswith("Exactly one of")


@pytest.mark.anyio()
async def test_empty_collection_becomes_null_results() -> None:
    """Handlers returning nothing useful produce ``results: null``."""
    leaf = _leaf(SpyHandler([]))

    envelope = await CommandRunner().run_arguments(leaf, {})

    assert envelope.status == 200
    assert envelope.message == "Success"
    assert envelope.results is None


@pytest.mark.anyio()
async def test_handler_receives_bound_values() -> None:
    """Handlers see typed values for every declared option."""
    spy = SpyHandler({"ok": True})
    leaf = _leaf(spy, options=(OptionDefinition("name", required=True),))

    envelope = await CommandRunner().run_arguments(leaf, {"name": "x y"})

    assert envelope.results == {"ok": True}
    (_context, args) = spy.calls[0]
    assert args["name"] == "x y"
    assert args.supplied == ("name",)


@pytest.mark.anyio()
@pytest.mark.parametrize("key", ["it's", 'say "hi"', "x --name evil"])
async def test_argument_names_cannot_smuggle_options(key: str) -> None:
    """Odd argument names are unknown options, never extra tokens."""
    spy = SpyHandler({"ok": True})
    leaf = _leaf(spy, options=(OptionDefinition("name", required=True),))

    envelope = await CommandRunner().run_arguments(leaf, {"name": "good", key: "bad"})

    assert envelope.status == 200
    (_context, args) = spy.calls[0]
    assert args["name"] == "good"
    assert args.supplied == ("name",)


@pytest.mark.anyio()
async def test_async_handlers_are_awaited() -> None:
    """Coroutine handlers are awaited like plain ones are called."""

    async def handler(_context, _args):
        return ["a"]

    envelope = await CommandRunner().run_arguments(_leaf(handler), {})

    assert envelope.results == ["a"]


@pytest.mark.anyio()
async def test_command_output_sets_message() -> None:
    """A handler may override the success message."""
    leaf = _leaf(SpyHandler(CommandOutput({"key": "k"}, message="Key-value 'k' locked.")))

    envelope = await CommandRunner().run_arguments(leaf, {})

    assert envelope.message == "Key-value 'k' locked."
    assert envelope.results == {"key": "k"}


@pytest.mark.anyio()
async def test_handler_exception_is_classified() -> None:
    """Raised failures become envelopes carrying the exception details."""

    def handler(_context, _args):
        raise NotFoundError("Storage account 'x' not found")

    leaf = _leaf(handler, contributors=(GLOBAL,))

    envelope = await CommandRunner().run_arguments(leaf, {})

    assert envelope.status == 404
    assert envelope.message == "Storage account 'x' not found"
    assert envelope.results == {
        "message": "Storage account 'x' not found",
        "type": "NotFoundError",
    }


@pytest.mark.anyio()
async def test_leaf_without_rules_maps_known_errors_to_default() -> None:
    """Without contributed rules even typed failures land on the default rule."""

    def handler(_context, _args):
        raise NotFoundError("Storage account 'x' not found")

    envelope = await CommandRunner().run_arguments(_leaf(handler), {})

    assert envelope.status == 500
    assert envelope.message == f"Storage account 'x' not found{TROUBLESHOOTING_SUFFIX}"


@pytest.mark.anyio()
async def test_unexpected_exception_is_internal_error() -> None:
    """Unknown failures fall through to the default rule."""

    def handler(_context, _args):
        raise RuntimeError("boom")

    envelope = await CommandRunner().run_arguments(_leaf(handler), {})

    assert envelope.status == 500
    assert envelope.message == f"boom{TROUBLESHOOTING_SUFFIX}"


@pytest.mark.anyio()
async def test_retry_policy_only_built_when_supplied() -> None:
    """The retry policy is absent unless a retry option was given."""
    spy = SpyHandler()
    leaf = _leaf(spy, contributors=(RETRY,))
    runner = CommandRunner()

    await runner.run_arguments(leaf, {})
    await runner.run_arguments(leaf, {"retry-max-retries": 5})

    assert spy.calls[0][1].retry_policy is None
    policy = spy.calls[1][1].retry_policy
    assert policy is not None
    assert policy.max_retries == 5
    assert policy.mode == "exponential"


@pytest.mark.anyio()
async def test_invalid_retry_policy_is_a_bad_request() -> None:
    """Out-of-range retry values are rejected before execution."""
    spy = SpyHandler()
    leaf = _leaf(spy, contributors=(RETRY,))

    envelope = await CommandRunner().run_arguments(leaf, {"retry-max-retries": -1})

    assert spy.calls == []
    assert envelope.status == 400
    assert envelope.message.startswith("Invalid retry policy")


@pytest.mark.anyio()
async def test_timeout_sets_context_deadline() -> None:
    """A runner timeout becomes a deadline on each fresh context."""
    spy = SpyHandler()
    leaf = _leaf(spy)

    await CommandRunner().run(leaf, tokenize(""))
    await CommandRunner(timeout=30).run(leaf, tokenize(""))

    assert spy.calls[0][0].deadline is None
    assert spy.calls[1][0].deadline is not None


@pytest.mark.anyio()
async def test_execute_returns_tagged_outcomes() -> None:
    """Execution captures results and failures without raising."""

    def failing(_context, _args):
        raise TimeoutError("slow")

    args = CommandArgs(values={})

    ok = await execute(_leaf(SpyHandler(1)), CommandContext(), args)
    failed = await execute(_leaf(failing), CommandContext(), args)

    assert ok == Success(1)
    assert isinstance(failed, Failure)
    assert failed.kind is ErrorKind.TIMEOUT
    assert failed.detail == "slow"
