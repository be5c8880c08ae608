"""Default tools and transports for the toolrpc dispatcher."""

from toolrpc_server.config import ServerConfig
from toolrpc_server.tools import build_registry, build_tools

__all__ = ["ServerConfig", "build_registry", "build_tools"]
