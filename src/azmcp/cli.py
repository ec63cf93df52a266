"""Literal command-line interface for the azmcp command tree."""

from __future__ import annotations

import argparse
import json
from collections.abc import Callable
from functools import partial

import anyio

from azmcp.codec import literal_tokens
from azmcp.config import configure_logging, get_settings
from azmcp.executor import CommandRunner
from azmcp.registry import CommandRegistry
from azmcp.response import ResponseEnvelope
from azmcp.server import MCPServer

RegistryFactory = Callable[[], tuple[CommandRegistry, CommandRunner]]


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="azmcp",
        description="Run an Azure MCP command from the command line.",
    )
    parser.add_argument(
        "--catalog",
        action="store_true",
        help="Print the available tool catalog as JSON.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level for stderr output (default: from settings).",
    )
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Command words followed by --option value pairs.",
    )
    return parser


def _default_factory() -> tuple[CommandRegistry, CommandRunner]:
    # azmcp_server imports azmcp, so resolve it lazily.
    from azmcp_server.tools import build_runtime

    return build_runtime(get_settings())


def _split_command(words: list[str]) -> tuple[list[str], list[str]]:
    for index, word in enumerate(words):
        if word.startswith("--"):
            return words[:index], words[index:]
    return words, []


def main(
    argv: list[str] | None = None, factory: RegistryFactory | None = None
) -> int:
    """Entry point for the CLI.

    Returns:
        ``0`` when the command succeeded, ``1`` when its envelope reports an error.

    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level or get_settings().log_level)

    registry, runner = (factory or _default_factory)()

    if args.catalog:
        print(json.dumps(MCPServer(registry, runner).to_catalog(), indent=2))
        return 0

    words, rest = _split_command(args.command)
    leaf = registry.resolve_path(words)
    if leaf is None:
        envelope = ResponseEnvelope.failure(
            404, f"Could not find command: {' '.join(words) or '<empty>'}"
        )
    else:
        envelope = anyio.run(partial(runner.run, leaf, literal_tokens(rest)))

    print(envelope.to_json(indent=2))
    return 1 if envelope.is_error else 0


if __name__ == "__main__":
    raise SystemExit(main())
