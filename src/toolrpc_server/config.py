"""Process configuration for the toolrpc server."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Literal, cast

Transport = Literal["stdio", "websocket", "fastmcp"]

TRANSPORTS: tuple[Transport, ...] = ("stdio", "websocket", "fastmcp")
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8765
DEFAULT_PATH = "/mcp"


@dataclass(frozen=True)
class ServerConfig:
    """Settings resolved from the command line.

    Attributes:
        transport: Which transport serves the dispatcher.
        host: Interface the network transports bind to.
        port: Port the network transports bind to.
        path: HTTP path used by the FastMCP transport.
        log_level: Root logging level name.
        include_traceback: Attach stack traces to Internal Error replies.
    """

    transport: Transport = "websocket"
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    path: str = DEFAULT_PATH
    log_level: str = "INFO"
    include_traceback: bool = True

    @classmethod
    def from_namespace(cls, args: argparse.Namespace) -> ServerConfig:
        """Build a config from parsed command-line arguments."""
        transport = "stdio" if args.stdio else args.transport
        return cls(
            transport=cast(Transport, transport),
            host=args.host,
            port=args.port,
            path=args.path,
            log_level=args.log_level.upper(),
            include_traceback=not args.no_traceback,
        )
