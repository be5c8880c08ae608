"""Tool registration helpers for the default server."""

from __future__ import annotations

from toolrpc.tools import ToolDefinition, ToolRegistry
from toolrpc_server.tools.arithmetic import add_tool
from toolrpc_server.tools.clock import time_tool
from toolrpc_server.tools.greeting import greet_tool


def build_tools() -> list[ToolDefinition]:
    """Instantiate the default tool definitions."""
    return [greet_tool(), add_tool(), time_tool()]


def build_registry() -> ToolRegistry:
    """Create a registry populated with the default tools."""
    registry = ToolRegistry()
    registry.register_tools(*build_tools())
    return registry
