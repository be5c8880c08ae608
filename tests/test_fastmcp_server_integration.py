"""End-to-end coverage for the FastMCP adapter."""

from __future__ import annotations

import pytest
from fastmcp.client import Client

from toolrpc_server.fastmcp_adapter import build_fastmcp_app
from toolrpc_server.tools import build_registry


@pytest.mark.anyio()
async def test_fastmcp_server_supports_tool_discovery() -> None:
    """The FastMCP server exposes the default toolset via the official protocol."""
    app, definitions = build_fastmcp_app(build_registry())

    async with Client(app) as client:
        tools = await client.list_tools()
        schemas = {tool.name: tool.inputSchema for tool in tools}

        assert set(schemas) == {"greet", "add", "time"}
        assert schemas["add"]["required"] == ["a", "b"]

        result = await client.call_tool("add", {"a": 2, "b": 3})
        assert result.structured_content == {"output": {"sum": 5}}

    assert [definition.name for definition in definitions] == ["greet", "add", "time"]


@pytest.mark.anyio()
async def test_fastmcp_reports_validation_errors() -> None:
    """Schema violations surface as tool errors through FastMCP client calls."""
    app, _ = build_fastmcp_app(build_registry())

    async with Client(app) as client:
        result = await client.call_tool("add", {"a": 2}, raise_on_error=False)

    assert result.is_error is True
