"""Request routing for the tool protocol.

The dispatcher maps the fixed method set (``handshake``, ``list_tools`` and
``call_tool``) onto a :class:`~toolrpc.tools.ToolRegistry`. It keeps no
per-request state, so a single instance can serve many concurrent requests
from any number of connections.
"""

from __future__ import annotations

import logging
import traceback
from collections.abc import Awaitable, Mapping
from typing import Any, Callable

from pydantic_core import PydanticSerializationError

from toolrpc._version import __version__
from toolrpc.errors import (
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    RPCError,
    raise_rpc_error,
)
from toolrpc.messages import (
    Request,
    build_error,
    build_success,
    extract_id,
    parse_request,
)
from toolrpc.schema import validate
from toolrpc.tools import ToolRegistry

logger = logging.getLogger(__name__)

PROTOCOL_NAME = "mcp-like"
PROTOCOL_VERSION = "0.1.0"

Reply = dict[str, Any]
SendReply = Callable[[Reply], Awaitable[None]]


class Dispatcher:
    """Route parsed requests to protocol methods and build replies."""

    def __init__(
        self,
        registry: ToolRegistry,
        *,
        server_name: str = "toolrpc",
        server_version: str = __version__,
        include_traceback: bool = True,
    ) -> None:
        """Create a dispatcher over ``registry``.

        Args:
            registry: Tools available to ``list_tools`` and ``call_tool``.
            server_name: Name reported by ``handshake``.
            server_version: Version reported by ``handshake``.
            include_traceback: Attach a stack trace to Internal Error replies.
        """
        self._registry = registry
        self._server_name = server_name
        self._server_version = server_version
        self._include_traceback = include_traceback
        self._methods: dict[str, Callable[[Any], Awaitable[Any]]] = {
            "handshake": self._handshake,
            "list_tools": self._list_tools,
            "call_tool": self._call_tool,
        }

    @property
    def registry(self) -> ToolRegistry:
        """Registry backing this dispatcher."""
        return self._registry

    async def dispatch(self, request: Request) -> Any:
        """Execute ``request`` and return its result value.

        Raises:
            MethodNotFoundError: If the method is not part of the protocol.
            InvalidParamsError: If parameters fail validation.
            Exception: Anything raised by a tool handler.
        """
        method = self._methods.get(request.method)
        if method is None:
            raise_rpc_error(
                MethodNotFoundError,
                f"Method not found: {request.method}",
                {"method": request.method},
            )
        return await method(request.params)

    async def handle(self, message: Any) -> Reply | None:
        """Handle one decoded message and return the reply to send, if any.

        Malformed envelopes are answered with Invalid Request when they carry
        a non-null ``id`` and dropped otherwise. Notifications are executed
        but never answered. Every other request gets exactly one reply.
        """
        request = parse_request(message)
        if request is None:
            request_id = extract_id(message)
            if request_id is None:
                logger.debug("Dropping malformed envelope without id")
                return None
            return self._error_reply(request_id, InvalidRequestError("Invalid Request"))

        try:
            result = await self.dispatch(request)
            reply = build_success(request.id, result).to_dict()
        except RPCError as error:
            logger.debug("Request %r failed: %s", request.method, error.message)
            reply = self._error_reply(request.id, error)
        except Exception as exc:
            logger.exception("Request %r raised", request.method)
            reply = self._internal_error(request.id, exc)

        if request.is_notification:
            return None
        return reply

    async def handle_raw(self, message: Any, send: SendReply) -> None:
        """Handle ``message`` and pass the reply, if any, to ``send``."""
        reply = await self.handle(message)
        if reply is not None:
            await send(reply)

    def _error_reply(self, request_id: Any, error: RPCError) -> Reply:
        try:
            return build_error(
                request_id, error.code, error.message, error.data
            ).to_dict()
        except PydanticSerializationError as exc:
            logger.exception("Error data for %r is not JSON serializable", error)
            return self._internal_error(request_id, exc)

    def _internal_error(self, request_id: Any, exc: Exception) -> Reply:
        data: dict[str, str] = {"message": str(exc)}
        if self._include_traceback:
            data["stack"] = "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__)
            )
        error = InternalError("Internal error", data)
        return build_error(request_id, error.code, error.message, error.data).to_dict()

    async def _handshake(self, _params: Any) -> dict[str, Any]:
        return {
            "protocol": PROTOCOL_NAME,
            "version": PROTOCOL_VERSION,
            "server": {"name": self._server_name, "version": self._server_version},
        }

    async def _list_tools(self, _params: Any) -> dict[str, Any]:
        return {"tools": self._registry.list_descriptors()}

    async def _call_tool(self, params: Any) -> dict[str, Any]:
        if not isinstance(params, Mapping):
            raise_rpc_error(InvalidParamsError, "params must be an object.")
        name = params.get("name")
        if not isinstance(name, str):
            raise_rpc_error(InvalidParamsError, "name must be a string.")
        tool = self._registry.get(name)
        if tool is None:
            raise_rpc_error(InvalidParamsError, f"Unknown tool: {name}", {"tool": name})

        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}
        elif not isinstance(arguments, Mapping):
            raise_rpc_error(InvalidParamsError, "arguments must be an object.")

        validate(arguments, tool.input_schema)
        output = await tool.invoke(dict(arguments))
        return {"output": output}
