"""Entry point for the toolrpc server."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from toolrpc.dispatcher import Dispatcher
from toolrpc_server.config import (
    DEFAULT_HOST,
    DEFAULT_PATH,
    DEFAULT_PORT,
    TRANSPORTS,
    ServerConfig,
)
from toolrpc_server.fastmcp_adapter import build_fastmcp_app
from toolrpc_server.stdio import serve_stdio
from toolrpc_server.tools import build_registry
from toolrpc_server.websocket import run_websocket

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the server."""
    parser = argparse.ArgumentParser(description="Serve tools over JSON-RPC.")
    parser.add_argument(
        "--transport",
        choices=TRANSPORTS,
        default="websocket",
        help="Transport used to serve requests.",
    )
    parser.add_argument(
        "--stdio",
        action="store_true",
        help="Shortcut for --transport stdio.",
    )
    parser.add_argument("--host", default=DEFAULT_HOST, help="Bind address.")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="Bind port.")
    parser.add_argument(
        "--path", default=DEFAULT_PATH, help="HTTP path for the fastmcp transport."
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level.")
    parser.add_argument(
        "--no-traceback",
        action="store_true",
        help="Omit stack traces from Internal Error replies.",
    )
    parser.add_argument(
        "--catalog",
        action="store_true",
        help="Print the available tool catalog as JSON and exit.",
    )
    return parser


def configure_logging(level: str) -> None:
    """Send log records to stderr; stdout is reserved for the stdio transport."""
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    """Register the default tools and serve them on the chosen transport."""
    parser = build_parser()
    args = parser.parse_args(argv)
    config = ServerConfig.from_namespace(args)
    configure_logging(config.log_level)

    registry = build_registry()
    if args.catalog:
        print(json.dumps({"tools": registry.list_descriptors()}, indent=2))
        return 0

    if config.transport == "fastmcp":
        app, _ = build_fastmcp_app(registry)
        app.run(
            transport="http", host=config.host, port=config.port, path=config.path
        )
        return 0

    dispatcher = Dispatcher(registry, include_traceback=config.include_traceback)
    try:
        if config.transport == "stdio":
            asyncio.run(serve_stdio(dispatcher))
        else:
            asyncio.run(run_websocket(dispatcher, config.host, config.port))
    except KeyboardInterrupt:
        logger.info("Interrupted; shutting down")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
