"""Argument codec: encoding, tokenizing and binding."""

from __future__ import annotations

import pytest

from azmcp.codec import (
    Token,
    argument_tokens,
    bind,
    decode_value,
    encode_arguments,
    encode_value,
    quote,
    to_command_line,
    tokenize,
)
from azmcp.options import OptionDefinition, ValueKind

ROUND_TRIP_VALUES = [
    "O'Connor's Database",
    'He said "Hello World" to everyone',
    """echo "User's home: '$HOME'" && echo 'Path: "$PATH"'""",
    "naïve café ☕ ünïcödé",
    "tab\tand\nnewline",
    "",
    "--looks-like-an-option",
    "plain",
]


@pytest.mark.parametrize("value", ROUND_TRIP_VALUES)
def test_encoded_strings_round_trip(value: str) -> None:
    """Every encoded string decodes back to the original text."""
    assert decode_value(encode_value(value)) == value


def test_quote_prefers_single_quotes() -> None:
    """Whitespace-only strings use single quotes; apostrophes switch to double."""
    assert quote("plain") == "plain"
    assert quote("two words") == "'two words'"
    assert quote("O'Connor") == '"O\'Connor"'
    assert quote('say "hi"') == "'say \"hi\"'"


def test_quote_doubles_embedded_double_quotes_when_both_present() -> None:
    """Strings holding both quote characters are wrapped in doubled double quotes."""
    assert quote("it's \"x\"") == "\"it's \"\"x\"\"\""


def test_encode_arguments_renders_each_kind() -> None:
    """Scalars, arrays and booleans all produce explicit name/value pairs."""
    # Arrange
    arguments = {
        "name": "demo",
        "count": 3,
        "ratio": 0.5,
        "flag": False,
        "skipped": None,
        "tags": ["a", "b"],
    }

    # Act
    tokens = encode_arguments(arguments)

    # Assert
    assert tokens == [
        "--name",
        "demo",
        "--count",
        "3",
        "--ratio",
        "0.5",
        "--flag",
        "false",
        "--tags",
        "'a b'",
    ]


def test_encoding_is_deterministic() -> None:
    """Encoding the same map twice yields identical command lines."""
    arguments = {"query": "SELECT * FROM c WHERE c.name = 'x'", "limit": 10}

    assert to_command_line(arguments) == to_command_line(dict(arguments))


def test_tokenize_joins_adjacent_fragments() -> None:
    """Quoted and unquoted fragments without whitespace form one token."""
    assert tokenize("""abc'def ghi'"x" next""") == [
        Token("abcdef ghix", quoted=True),
        Token("next"),
    ]


def test_tokenize_rejects_unterminated_quote() -> None:
    """An open quote without its closing partner is an error."""
    with pytest.raises(ValueError):
        tokenize("--name 'unfinished")


def test_argument_tokens_pairs_each_name_with_one_value() -> None:
    """Names stay whole and each value decodes to exactly one token."""
    tokens = argument_tokens(
        {"name": "two words", "flag": True, "skip": None, "it's": "--x"}
    )

    assert tokens == [
        Token("--name"),
        Token("two words", quoted=True),
        Token("--flag"),
        Token("true"),
        Token("--it's"),
        Token("--x", quoted=True),
    ]


@pytest.mark.parametrize(
    "key",
    ["it's", 'say "hi"', "x --subscription evil", "a 'b\" c"],
)
def test_odd_argument_names_never_inject_options(key: str) -> None:
    """Names with quotes or whitespace bind nothing and raise nothing."""
    options = [OptionDefinition("subscription")]

    bound = bind(argument_tokens({"subscription": "good", key: "evil"}), options)

    assert bound.ok
    assert bound.values == {"subscription": "good"}
    assert bound.supplied == ["subscription"]


class TestBind:
    """Binding token streams against option models."""

    def test_missing_required_options_are_reported_together(self) -> None:
        """All absent required options appear in one message, in order."""
        options = [
            OptionDefinition("a", required=True),
            OptionDefinition("b", required=True),
        ]

        bound = bind([], options)

        assert bound.errors == ["Missing Required options: --a, --b"]

    def test_option_names_match_case_insensitively(self) -> None:
        """An upper-case key binds to the lower-case option."""
        options = [OptionDefinition("subscription", required=True)]

        bound = bind(tokenize(to_command_line({"SUBSCRIPTION": "sub1"})), options)

        assert bound.ok
        assert bound.values["subscription"] == "sub1"
        assert bound.supplied == ["subscription"]

    def test_unknown_options_are_ignored(self) -> None:
        """Unregistered keys and their values are skipped without error."""
        options = [OptionDefinition("subscription")]

        bound = bind(
            tokenize(to_command_line({"subscription": "sub1", "unknown": "value"})),
            options,
        )

        assert bound.ok
        assert bound.values == {"subscription": "sub1"}

    def test_null_value_falls_back_to_default(self) -> None:
        """An explicit null leaves the option at its declared default."""
        options = [OptionDefinition("retry-mode", default="exponential")]

        bound = bind(tokenize(to_command_line({"retry-mode": None})), options)

        assert bound.ok
        assert bound.values["retry-mode"] == "exponential"
        assert bound.supplied == []

    def test_values_are_coerced_to_declared_kinds(self) -> None:
        """Integers, doubles and booleans are parsed from their text."""
        options = [
            OptionDefinition("count", ValueKind.INT),
            OptionDefinition("ratio", ValueKind.DOUBLE),
            OptionDefinition("flag", ValueKind.BOOL, default=True),
        ]

        bound = bind(
            tokenize(to_command_line({"count": 7, "ratio": 1.25, "flag": False})),
            options,
        )

        assert bound.values == {"count": 7, "ratio": 1.25, "flag": False}

    def test_unparseable_value_reports_type_error(self) -> None:
        """A value that cannot be coerced produces a typed error message."""
        options = [OptionDefinition("count", ValueKind.INT, required=True)]

        bound = bind(tokenize("--count abc"), options)

        assert bound.errors == [
            "Cannot parse argument 'abc' for option '--count' as expected type 'int'."
        ]

    def test_option_without_value_is_an_error(self) -> None:
        """A non-boolean option followed by nothing reports the missing value."""
        options = [OptionDefinition("name", required=True)]

        bound = bind(tokenize("--name"), options)

        assert bound.errors == ["Required argument missing for option: '--name'."]

    def test_bare_boolean_flag_binds_true(self) -> None:
        """A boolean option with no value is treated as set."""
        options = [
            OptionDefinition("include-managed", ValueKind.BOOL, default=False),
            OptionDefinition("vault"),
        ]

        bound = bind(tokenize("--include-managed --vault kv"), options)

        assert bound.values == {"include-managed": True, "vault": "kv"}

    def test_string_array_collects_every_value(self) -> None:
        """Array options gather all following values, split on whitespace."""
        options = [
            OptionDefinition("tags", ValueKind.STRING_ARRAY),
            OptionDefinition("other"),
        ]

        bound = bind(tokenize("--tags 'a b' c --other x"), options)

        assert bound.values == {"tags": ["a", "b", "c"], "other": "x"}

    def test_repeated_option_keeps_last_value(self) -> None:
        """Later occurrences of an option override earlier ones."""
        options = [OptionDefinition("name")]

        bound = bind(tokenize("--name one --name two"), options)

        assert bound.values["name"] == "two"

    def test_quoted_option_lookalike_is_a_value(self) -> None:
        """A quoted value starting with dashes is not read as an option."""
        options = [OptionDefinition("name", required=True)]

        bound = bind(tokenize(to_command_line({"name": "--dashes"})), options)

        assert bound.ok
        assert bound.values["name"] == "--dashes"

    def test_blank_required_value_counts_as_missing(self) -> None:
        """An empty string does not satisfy a required option."""
        options = [OptionDefinition("name", required=True)]

        bound = bind(tokenize(to_command_line({"name": ""})), options)

        assert bound.errors == ["Missing Required options: --name"]
