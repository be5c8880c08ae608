"""Adapters for exposing registered tools via FastMCP."""

from __future__ import annotations

from typing import Any

from fastmcp import FastMCP
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult

from toolrpc.schema import validate
from toolrpc.tools import ToolDefinition, ToolRegistry


class ToolDefinitionAdapter(Tool):
    """Expose a :class:`ToolDefinition` as a FastMCP tool."""

    def __init__(self, definition: ToolDefinition) -> None:
        """Create a FastMCP tool wrapper for the provided definition."""
        super().__init__(
            name=definition.name,
            description=definition.description,
            parameters=definition.input_schema,
            tags=set(),
        )
        self._definition = definition

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        """Validate arguments and delegate to the wrapped handler."""
        validate(arguments, self._definition.input_schema)
        output = await self._definition.invoke(arguments)
        return ToolResult(structured_content={"output": output})


def build_fastmcp_app(registry: ToolRegistry) -> tuple[FastMCP, list[ToolDefinition]]:
    """Create a FastMCP server instance with every registered tool."""
    app = FastMCP(
        name="toolrpc",
        instructions="Small utility tools exposed over the Model Context Protocol.",
    )
    definitions = list(registry)
    for definition in definitions:
        app.add_tool(ToolDefinitionAdapter(definition))
    return app, definitions
