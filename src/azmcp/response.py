"""Uniform response envelope returned by every invocation."""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Sized
from dataclasses import dataclass, field
from typing import Any

SUCCESS_MESSAGE = "Success"


@dataclass
class ResponseEnvelope:
    """Result of one invocation, on success and on failure alike.

    Attributes:
        status: HTTP-like status code; 200 means no error path was taken.
        message: Human-readable outcome message.
        results: Handler payload, or ``None`` when there is nothing to return.
        duration: Wall-clock milliseconds spent; not part of equality.

    """

    status: int = 200
    message: str | None = SUCCESS_MESSAGE
    results: Any | None = None
    duration: int = field(default=0, compare=False)

    @property
    def is_error(self) -> bool:
        """Return whether the envelope reports a failure."""
        return self.status >= 400

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON shape of the envelope."""
        return {
            "status": self.status,
            "message": self.message,
            "results": self.results,
            "duration": self.duration,
        }

    def to_json(self, *, indent: int | None = None) -> str:
        """Serialize the envelope to JSON.

        Returns:
            JSON representation of the envelope.

        """
        return json.dumps(
            self.to_dict(), indent=indent, ensure_ascii=False, default=_json_default
        )

    @classmethod
    def failure(
        cls, status: int, message: str, results: Any | None = None
    ) -> ResponseEnvelope:
        """Create an envelope describing a failure."""
        return cls(status=status, message=message, results=results)


@dataclass(frozen=True)
class CommandOutput:
    """Handler return value carrying results and a custom success message."""

    results: Any | None
    message: str = SUCCESS_MESSAGE


def results_or_none(key: str, items: Sized | None) -> dict[str, Any] | None:
    """Wrap ``items`` under ``key``, or return ``None`` when empty."""
    if not items:
        return None
    return {key: items}


def _json_default(value: object) -> object:
    model_dump = getattr(value, "model_dump", None)
    if callable(model_dump):
        return model_dump(mode="json")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (set, frozenset)):
        return list(value)
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return str(value)
