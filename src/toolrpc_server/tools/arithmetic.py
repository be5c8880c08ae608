"""Arithmetic tools."""

from __future__ import annotations

from toolrpc.tools import ToolDefinition, ToolParameters


class AddParams(ToolParameters):
    """Parameters for the add tool.

    ``int`` is listed first so integral inputs keep an integral sum.
    """

    a: int | float
    b: int | float


def add_tool() -> ToolDefinition:
    """Create the add tool definition."""

    def handler(raw_params: dict[str, object]) -> dict[str, int | float]:
        params = AddParams.model_validate(raw_params)
        return {"sum": params.a + params.b}

    return ToolDefinition(
        name="add",
        description="Adds two numbers (a + b).",
        input_schema={
            "type": "object",
            "properties": {"a": {"type": "number"}, "b": {"type": "number"}},
            "required": ["a", "b"],
        },
        handler=handler,
    )
