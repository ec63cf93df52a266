"""Entry point for the Azure MCP server."""

from __future__ import annotations

import argparse
import logging

from azmcp.config import Settings, configure_logging, get_settings
from azmcp_server.cloud import build_in_memory_services
from azmcp_server.fastmcp_adapter import build_fastmcp_app

logger = logging.getLogger(__name__)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    """Create the argument parser, with defaults taken from ``settings``."""
    parser = argparse.ArgumentParser(description="Azure MCP server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http", "sse"],
        default=settings.transport,
        help="Transport to serve the MCP protocol over.",
    )
    parser.add_argument("--host", default=settings.host, help="Bind address for HTTP/SSE.")
    parser.add_argument(
        "--port", type=int, default=settings.port, help="Port for HTTP/SSE."
    )
    parser.add_argument("--path", default=settings.path, help="HTTP endpoint path.")
    parser.add_argument(
        "--namespace",
        action="append",
        default=None,
        help="Expose only this top-level command group; may be repeated.",
    )
    parser.add_argument(
        "--read-only",
        action="store_true",
        default=settings.read_only,
        help="Only expose tools annotated as read-only.",
    )
    parser.add_argument(
        "--log-level", default=settings.log_level, help="Logging level for stderr."
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Build the FastMCP app and serve it on the selected transport."""
    settings = get_settings()
    args = build_parser(settings).parse_args(argv)
    configure_logging(args.log_level)

    services = build_in_memory_services(cache_ttl=settings.cache_ttl_seconds)
    app, leaves = build_fastmcp_app(
        services,
        read_only=args.read_only,
        namespaces=args.namespace or settings.namespaces,
    )
    logger.info("Serving %d tools over %s.", len(leaves), args.transport)

    if args.transport == "stdio":
        app.run(transport="stdio")
    else:
        app.run(transport=args.transport, host=args.host, port=args.port, path=args.path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
