"""Server clock tool."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from toolrpc.tools import ToolDefinition


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_iso(moment: datetime) -> str:
    """Render a UTC timestamp as ISO 8601 with millisecond precision and ``Z``."""
    return (
        moment.astimezone(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


def time_tool(clock: Callable[[], datetime] = _utcnow) -> ToolDefinition:
    """Create the time tool definition.

    Args:
        clock: Source of the current time, replaceable in tests.
    """

    def handler(_: dict[str, object]) -> dict[str, str]:
        return {"iso": format_iso(clock())}

    return ToolDefinition(
        name="time",
        description="Returns the current server time (ISO 8601).",
        input_schema={"type": "object", "properties": {}},
        handler=handler,
    )
