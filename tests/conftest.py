"""Shared test fixtures."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from toolrpc.dispatcher import Dispatcher
from toolrpc.tools import ToolDefinition, ToolRegistry
from toolrpc_server.tools import build_registry


@pytest.fixture()
def anyio_backend() -> str:
    """Run anyio-marked tests on asyncio only."""
    return "asyncio"


@pytest.fixture()
def registry() -> ToolRegistry:
    """Provide a registry holding the default tools."""
    return build_registry()


@pytest.fixture()
def dispatcher(registry: ToolRegistry) -> Dispatcher:
    """Provide a dispatcher over the default tools."""
    return Dispatcher(registry)


@pytest.fixture()
def slow_tool() -> ToolDefinition:
    """Provide an async tool that sleeps for ``delay`` seconds before echoing."""

    async def handler(arguments: dict[str, Any]) -> dict[str, Any]:
        await asyncio.sleep(arguments["delay"])
        return {"echo": arguments["tag"]}

    return ToolDefinition(
        name="slow",
        description="Sleeps, then echoes its tag.",
        input_schema={
            "type": "object",
            "properties": {"delay": {"type": "number"}, "tag": {"type": "string"}},
            "required": ["delay", "tag"],
        },
        handler=handler,
    )

