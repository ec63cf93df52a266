"""Bind, validate, execute and envelope a single leaf invocation."""

from __future__ import annotations

import inspect
import logging
import time
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Union

from pydantic import ValidationError as PydanticValidationError

from azmcp.classifier import ErrorClassifier
from azmcp.codec import Token, argument_tokens, bind
from azmcp.errors import ErrorKind, error_kind_of
from azmcp.options import RetryPolicy, retry_policy_from
from azmcp.registry import CommandLeaf
from azmcp.response import CommandOutput, ResponseEnvelope
from azmcp.validation import run_validators

logger = logging.getLogger(__name__)


@dataclass
class CommandContext:
    """Per-call ambient data handed to every handler.

    Attributes:
        deadline: Optional monotonic deadline forwarded to collaborators.

    """

    deadline: float | None = None


@dataclass(frozen=True)
class CommandArgs(Mapping[str, object]):
    """Read-only view of the bound option values handed to a handler."""

    values: Mapping[str, object]
    supplied: tuple[str, ...] = ()
    retry_policy: RetryPolicy | None = None

    def __getitem__(self, name: str) -> object:
        return self.values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    @property
    def tenant(self) -> str | None:
        """Return the tenant hint, if the leaf declares one."""
        value = self.values.get("tenant")
        return str(value) if value else None


@dataclass(frozen=True)
class Success:
    """Handler completed and produced ``value``."""

    value: object


@dataclass(frozen=True)
class Failure:
    """Handler raised; ``kind`` tags the failure for classification."""

    kind: ErrorKind
    detail: str
    exception: BaseException = field(compare=False)


Outcome = Union[Success, Failure]


async def execute(leaf: CommandLeaf, context: CommandContext, args: CommandArgs) -> Outcome:
    """Invoke a leaf's handler and capture its result as an :data:`Outcome`."""
    try:
        result = leaf.handler(context, args)
        if inspect.isawaitable(result):
            result = await result
    except Exception as exc:
        return Failure(kind=error_kind_of(exc), detail=str(exc), exception=exc)
    return Success(result)


def _is_empty_collection(value: object) -> bool:
    return isinstance(value, (list, tuple, dict, set)) and not value


class CommandRunner:
    """Drive invocations through bind, validate, execute and classify.

    The runner holds no per-call state, so one instance may serve any number
    of concurrent invocations.

    Attributes:
        timeout: Seconds each call may take; becomes the context deadline.

    """

    def __init__(self, timeout: float | None = None) -> None:
        """Create a runner whose handlers receive a fresh context per call."""
        self.timeout = timeout

    def new_context(self) -> CommandContext:
        """Build the context handed to one handler invocation."""
        if self.timeout is None:
            return CommandContext()
        return CommandContext(deadline=time.monotonic() + self.timeout)

    async def run_arguments(
        self, leaf: CommandLeaf, arguments: Mapping[str, object] | None
    ) -> ResponseEnvelope:
        """Invoke ``leaf`` with a JSON argument map (the tool-call path)."""
        tokens = argument_tokens(arguments)
        return await self.run(leaf, tokens)

    async def run(self, leaf: CommandLeaf, tokens: Sequence[Token]) -> ResponseEnvelope:
        """Invoke ``leaf`` with a token stream and return its envelope.

        No exception raised by the handler escapes this method.
        """
        started = time.perf_counter()
        logger.debug("Executing '%s'.", leaf.full_name)
        envelope = await self._run(leaf, tokens)
        envelope.duration = int((time.perf_counter() - started) * 1000)
        logger.debug(
            "Finished '%s' with status %d in %d ms.",
            leaf.full_name,
            envelope.status,
            envelope.duration,
        )
        return envelope

    async def _run(self, leaf: CommandLeaf, tokens: Sequence[Token]) -> ResponseEnvelope:
        bound = bind(tokens, leaf.option_model)
        if not bound.ok:
            return ResponseEnvelope.failure(400, "; ".join(bound.errors))

        problems = run_validators(leaf.all_validators, bound.values)
        if problems:
            return ResponseEnvelope.failure(400, " ".join(problems))

        try:
            retry_policy = retry_policy_from(bound.values, bound.supplied)
        except PydanticValidationError as error:
            return ResponseEnvelope.failure(400, f"Invalid retry policy: {error}")

        args = CommandArgs(
            values=dict(bound.values),
            supplied=tuple(bound.supplied),
            retry_policy=retry_policy,
        )
        outcome = await execute(leaf, self.new_context(), args)
        if isinstance(outcome, Failure):
            return self._failure_envelope(leaf, outcome)
        return self._success_envelope(outcome)

    @staticmethod
    def _success_envelope(outcome: Success) -> ResponseEnvelope:
        value = outcome.value
        if isinstance(value, CommandOutput):
            return ResponseEnvelope(results=value.results, message=value.message)
        if _is_empty_collection(value):
            value = None
        return ResponseEnvelope(results=value)

    @staticmethod
    def _failure_envelope(leaf: CommandLeaf, failure: Failure) -> ResponseEnvelope:
        logger.error(
            "An exception occurred running '%s'.",
            leaf.full_name,
            exc_info=failure.exception,
        )
        classification = ErrorClassifier(leaf.rule_families()).classify(failure.exception)
        return ResponseEnvelope.failure(
            classification.status,
            classification.message,
            results={
                "message": failure.detail,
                "type": type(failure.exception).__name__,
            },
        )
