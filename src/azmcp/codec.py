"""Conversion between JSON argument maps and command-line token streams.

Two directions are supported. :func:`encode_arguments` turns the name/value map
supplied by a tool caller into ``--name value`` tokens using a quoting grammar
that :func:`tokenize` reads back exactly. :func:`bind` then resolves a token
stream against a leaf's option model, coercing raw text into typed values and
collecting every problem as a human-readable error instead of raising.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import NamedTuple

from azmcp.options import OptionDefinition, ValueKind

_QUOTES = ("'", '"')


class Token(NamedTuple):
    """A decoded token and whether any part of it was quoted."""

    text: str
    quoted: bool = False


@dataclass
class BoundInvocation:
    """Typed option values plus the errors collected while binding.

    Attributes:
        values: Bound value for every declared option, defaults included.
        supplied: Declared names of the options the caller actually provided.
        errors: Binding problems in the order they were found.

    """

    values: dict[str, object] = field(default_factory=dict)
    supplied: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Return whether binding produced no errors."""
        return not self.errors


def _needs_quotes(text: str) -> bool:
    if text == "" or text.startswith("--"):
        return True
    return any(char.isspace() or char in _QUOTES for char in text)


def quote(text: str) -> str:
    """Quote a string so that :func:`tokenize` yields it back unchanged."""
    if not _needs_quotes(text):
        return text
    has_single = "'" in text
    has_double = '"' in text
    if has_single and has_double:
        return '"' + text.replace('"', '""') + '"'
    if has_single:
        return f'"{text}"'
    return f"'{text}'"


def _scalar_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return json.dumps(value)
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def encode_value(value: object) -> str:
    """Render one JSON value as a single, possibly quoted, token."""
    if isinstance(value, (list, tuple)):
        return quote(" ".join(_scalar_text(item) for item in value))
    return quote(_scalar_text(value))


def encode_arguments(arguments: Mapping[str, object] | None) -> list[str]:
    """Encode a JSON argument map as ``--name value`` tokens in map order.

    ``None`` values are skipped so the option's default applies. Every other
    key, booleans included, produces an explicit ``--name value`` pair.
    """
    tokens: list[str] = []
    for name, value in (arguments or {}).items():
        if value is None:
            continue
        tokens.append(f"--{name}")
        tokens.append(encode_value(value))
    return tokens


def to_command_line(arguments: Mapping[str, object] | None) -> str:
    """Encode a JSON argument map as one command-line string."""
    return " ".join(encode_arguments(arguments))


def tokenize(text: str) -> list[Token]:
    """Split a command line into tokens, honouring the quoting grammar.

    Raises:
        ValueError: If a quoted span is not terminated.

    """
    tokens: list[Token] = []
    buffer: list[str] = []
    in_token = False
    quoted = False
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char in _QUOTES:
            in_token = True
            quoted = True
            index += 1
            while True:
                if index >= length:
                    raise ValueError(f"Unterminated {char} quote in command line")
                current = text[index]
                if current == char:
                    if index + 1 < length and text[index + 1] == char:
                        buffer.append(char)
                        index += 2
                        continue
                    index += 1
                    break
                buffer.append(current)
                index += 1
            continue
        if char.isspace():
            if in_token:
                tokens.append(Token("".join(buffer), quoted))
                buffer, in_token, quoted = [], False, False
            index += 1
            continue
        buffer.append(char)
        in_token = True
        index += 1
    if in_token:
        tokens.append(Token("".join(buffer), quoted))
    return tokens


def decode_value(text: str) -> str:
    """Decode a single encoded value token back into its string."""
    tokens = tokenize(text)
    if len(tokens) != 1:
        raise ValueError(f"Expected exactly one token, found {len(tokens)}")
    return tokens[0].text


def argument_tokens(arguments: Mapping[str, object] | None) -> list[Token]:
    """Build the token stream for a JSON argument map without re-scanning names.

    Each name becomes one option token as given, so a name holding quotes or
    whitespace stays a single (unknown) option. Each value goes through the
    quoting grammar on its own and always yields exactly one token.
    """
    tokens: list[Token] = []
    for name, value in (arguments or {}).items():
        if value is None:
            continue
        tokens.append(Token(f"--{name}"))
        (value_token,) = tokenize(encode_value(value))
        tokens.append(value_token)
    return tokens


def literal_tokens(argv: Iterable[str]) -> list[Token]:
    """Wrap already-split shell arguments as tokens."""
    return [Token(arg) for arg in argv]


def _is_option(token: Token) -> bool:
    return not token.quoted and token.text.startswith("--") and len(token.text) > 2


class _CoercionError(ValueError):
    pass


def _coerce(raw: str, kind: ValueKind) -> object:
    if kind is ValueKind.STRING:
        return raw
    if kind is ValueKind.BOOL:
        lowered = raw.strip().lower()
        if lowered not in ("true", "false"):
            raise _CoercionError(raw)
        return lowered == "true"
    try:
        if kind is ValueKind.INT:
            return int(raw)
        if kind is ValueKind.DOUBLE:
            return float(raw)
    except ValueError as error:
        raise _CoercionError(raw) from error
    raise _CoercionError(raw)


def _is_missing(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, list):
        return not value
    return False


def bind(tokens: Sequence[Token], options: Sequence[OptionDefinition]) -> BoundInvocation:
    """Resolve a token stream against an option model.

    Option names match case-insensitively. Unknown options, and the value that
    follows them, are skipped. Unsupplied options receive their default.

    Args:
        tokens: Decoded tokens, as produced by :func:`tokenize`.
        options: Composed option model of the target leaf.

    Returns:
        BoundInvocation holding typed values and any binding errors.

    """
    lookup = {option.name.lower(): option for option in options}
    bound = BoundInvocation(
        values={option.name: option.default for option in options}
    )
    supplied: dict[str, None] = {}
    failed: set[str] = set()

    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if not _is_option(token):
            continue
        option = lookup.get(token.text[2:].lower())
        takes_many = option is not None and option.value_kind is ValueKind.STRING_ARRAY
        raw_values: list[str] = []
        while index < len(tokens) and not _is_option(tokens[index]):
            raw_values.append(tokens[index].text)
            index += 1
            if not takes_many:
                break
        if option is None:
            continue

        supplied[option.name] = None
        failed.discard(option.name)
        if option.value_kind is ValueKind.STRING_ARRAY:
            bound.values[option.name] = [
                item for raw in raw_values for item in raw.split()
            ]
            continue
        if not raw_values:
            if option.value_kind is ValueKind.BOOL:
                bound.values[option.name] = True
                continue
            failed.add(option.name)
            bound.errors.append(
                f"Required argument missing for option: '{option.flag}'."
            )
            continue
        try:
            bound.values[option.name] = _coerce(raw_values[0], option.value_kind)
        except _CoercionError:
            failed.add(option.name)
            bound.errors.append(
                f"Cannot parse argument '{raw_values[0]}' for option "
                f"'{option.flag}' as expected type '{option.value_kind.value}'."
            )

    missing = [
        option.flag
        for option in options
        if option.required
        and option.name not in failed
        and (option.name not in supplied or _is_missing(bound.values[option.name]))
    ]
    if missing:
        bound.errors.append(f"Missing Required options: {', '.join(missing)}")
    bound.supplied = list(supplied)
    return bound
