"""JSON-RPC 2.0 envelope models and constructors.

Requests are parsed from already-decoded JSON objects; responses are pydantic
models rendered to JSON-ready dictionaries by :meth:`Response.to_dict`.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

JSONRPC_VERSION = "2.0"


class Request(BaseModel):
    """A parsed inbound request.

    ``id`` is kept verbatim, whatever its JSON type. Whether the request is a
    notification depends on the presence of the ``id`` key, not its value.
    """

    model_config = ConfigDict(frozen=True)

    method: str
    id: Any = None
    params: Any = None

    @property
    def is_notification(self) -> bool:
        """Return whether the sender expects no reply."""
        return "id" not in self.model_fields_set


class ErrorObject(BaseModel):
    """The ``error`` member of an error reply."""

    code: int
    message: str
    data: Any = None


class Response(BaseModel):
    """An outbound reply carrying exactly one of ``result`` or ``error``."""

    jsonrpc: Literal["2.0"] = JSONRPC_VERSION
    id: Any = None
    result: Any = None
    error: ErrorObject | None = None

    @property
    def is_error(self) -> bool:
        """Return whether this is an error reply."""
        return self.error is not None

    def to_dict(self) -> dict[str, Any]:
        """Render the wire form of the reply.

        Raises:
            pydantic_core.PydanticSerializationError: If the result or error
                data holds a value with no JSON representation.
        """
        if self.error is None:
            return self.model_dump(mode="json", include={"jsonrpc", "id", "result"})
        payload = self.model_dump(mode="json", include={"jsonrpc", "id"})
        payload["error"] = self.error.model_dump(
            mode="json", exclude={"data"} if self.error.data is None else None
        )
        return payload


def parse_request(raw: Any) -> Request | None:
    """Parse a decoded JSON value into a :class:`Request`.

    Args:
        raw: Decoded JSON value received from a transport.

    Returns:
        The request, or ``None`` when ``raw`` is not an object tagged
        ``jsonrpc: "2.0"`` with a textual ``method``.
    """
    if not isinstance(raw, Mapping):
        return None
    if raw.get("jsonrpc") != JSONRPC_VERSION:
        return None
    if not isinstance(raw.get("method"), str):
        return None
    fields = {key: raw[key] for key in ("id", "method", "params") if key in raw}
    return Request.model_validate(fields)


def extract_id(raw: Any) -> Any:
    """Return the ``id`` of a raw object, or ``None`` when it has none."""
    if isinstance(raw, Mapping):
        return raw.get("id")
    return None


def build_success(request_id: Any, result: Any) -> Response:
    """Construct a success reply."""
    return Response(id=request_id, result=result)


def build_error(
    request_id: Any, code: int, message: str, data: Any = None
) -> Response:
    """Construct an error reply."""
    return Response(
        id=request_id, error=ErrorObject(code=code, message=message, data=data)
    )


def _reject_constant(token: str) -> None:
    raise ValueError(f"{token} is not valid JSON")


def decode_message(frame: str | bytes | bytearray) -> Any | None:
    """Decode one transport frame into a JSON value.

    Args:
        frame: A text line or frame, or UTF-8 encoded bytes.

    Returns:
        The decoded value, or ``None`` if the frame is not valid JSON.
    """
    try:
        text = frame.decode("utf-8") if isinstance(frame, (bytes, bytearray)) else frame
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError:
        logger.debug("Dropping undecodable frame: %.80r", frame)
        return None
