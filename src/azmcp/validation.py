"""Cross-field validators applied after a successful bind.

A validator is a pure callable over the bound values that returns ``None``
when satisfied or an error message otherwise.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from azmcp.options import Validator


def _present(values: Mapping[str, object], name: str) -> bool:
    value = values.get(name)
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, list):
        return bool(value)
    return True


def _flags(names: Iterable[str]) -> str:
    return ", ".join(f"--{name}" for name in names)


def exactly_one_of(*groups: Sequence[str]) -> Validator:
    """Require exactly one group of options to be fully present.

    A group counts as present when any of its options is supplied; a present
    group must then supply all of its options.
    """

    def validate(values: Mapping[str, object]) -> str | None:
        described = " or ".join(f"{{{_flags(group)}}}" for group in groups)
        started = [group for group in groups if any(_present(values, n) for n in group)]
        if len(started) != 1:
            return f"Exactly one of {described} must be provided."
        incomplete = [name for name in started[0] if not _present(values, name)]
        if incomplete:
            return (
                f"Options {_flags(started[0])} must be provided together; "
                f"missing {_flags(incomplete)}."
            )
        return None

    return validate


def comma_separated(name: str, example: str = "CPU,memory") -> Validator:
    """Require a comma-separated list with no blank entries."""

    def validate(values: Mapping[str, object]) -> str | None:
        raw = values.get(name)
        if raw is None:
            return None
        items = [item.strip() for item in str(raw).split(",")]
        if not items or any(not item for item in items):
            return (
                f"Invalid format for --{name}. Provide a comma-separated list of "
                f"values (e.g. {example})."
            )
        return None

    return validate


def one_of(name: str, choices: Iterable[str]) -> Validator:
    """Require an option's value to be one of ``choices`` (case-insensitive)."""
    allowed = tuple(choices)

    def validate(values: Mapping[str, object]) -> str | None:
        raw = values.get(name)
        if raw is None or str(raw).lower() in {c.lower() for c in allowed}:
            return None
        return (
            f"Invalid value '{raw}' for --{name}. "
            f"Allowed values: {', '.join(allowed)}."
        )

    return validate


def positive(name: str) -> Validator:
    """Require a numeric option, when present, to be greater than zero."""

    def validate(values: Mapping[str, object]) -> str | None:
        raw = values.get(name)
        if raw is None or (isinstance(raw, (int, float)) and raw > 0):
            return None
        return f"--{name} must be greater than zero."

    return validate


def run_validators(
    validators: Iterable[Validator], values: Mapping[str, object]
) -> list[str]:
    """Apply validators in order and collect every failure message."""
    return [
        message for validator in validators if (message := validator(values))
    ]
