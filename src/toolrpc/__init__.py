"""toolrpc package initialization."""

from toolrpc._version import __version__
from toolrpc.dispatcher import Dispatcher
from toolrpc.errors import RPCError
from toolrpc.tools import ToolDefinition, ToolParameters, ToolRegistry

__all__ = [
    "Dispatcher",
    "RPCError",
    "ToolDefinition",
    "ToolParameters",
    "ToolRegistry",
    "__version__",
]
