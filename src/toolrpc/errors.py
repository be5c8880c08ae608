"""Error types for JSON-RPC dispatch."""

from __future__ import annotations

from typing import NoReturn, TypedDict

INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class _ErrorPayloadBase(TypedDict):
    code: int
    message: str


class ErrorPayload(_ErrorPayloadBase, total=False):
    """Structured JSON payload for the ``error`` member of a reply."""

    data: object


class RPCError(Exception):
    """Structured dispatch error carrying a JSON-RPC error code."""

    code: int = INTERNAL_ERROR

    def __init__(self, message: str, data: object | None = None) -> None:
        """Create a structured error with an optional detail payload."""
        super().__init__(message)
        self.message = message
        self.data = data

    def to_dict(self) -> ErrorPayload:
        """Return the wire error object, omitting ``data`` when absent."""
        payload: ErrorPayload = {"code": self.code, "message": self.message}
        if self.data is not None:
            payload["data"] = self.data
        return payload


class InvalidRequestError(RPCError):
    """The envelope is not a valid request."""

    code = INVALID_REQUEST


class MethodNotFoundError(RPCError):
    """The requested top-level method does not exist."""

    code = METHOD_NOT_FOUND


class InvalidParamsError(RPCError):
    """Parameters are missing, mistyped or name an unknown tool."""

    code = INVALID_PARAMS


class InternalError(RPCError):
    """A handler or conversion failed unexpectedly."""

    code = INTERNAL_ERROR


def raise_rpc_error(
    kind: type[RPCError], message: str, data: object | None = None
) -> NoReturn:
    """Raise an :class:`RPCError` subclass with a structured payload."""
    raise kind(message, data)
