"""Greeting tool."""

from __future__ import annotations

from toolrpc.tools import ToolDefinition, ToolParameters


class GreetParams(ToolParameters):
    """Parameters for the greet tool."""

    name: str


def greet_tool() -> ToolDefinition:
    """Create the greet tool definition."""

    def handler(raw_params: dict[str, object]) -> dict[str, str]:
        params = GreetParams.model_validate(raw_params)
        return {"message": f"Hello, {params.name}! 👋"}

    return ToolDefinition(
        name="greet",
        description="Greets a user by name.",
        input_schema={
            "type": "object",
            "properties": {"name": {"type": "string", "description": "Name to greet"}},
            "required": ["name"],
        },
        handler=handler,
    )
