"""Tool definitions and the registry that owns them."""

from __future__ import annotations

import asyncio
import copy
import inspect
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

ToolHandler = Callable[[dict[str, Any]], Any]


class ToolParameters(BaseModel):
    """Base model handlers use to coerce their validated arguments.

    Undeclared keys are ignored, matching the open object schemas the
    dispatcher validates against.
    """

    model_config = ConfigDict(extra="ignore")


@dataclass(frozen=True)
class ToolDefinition:
    """Description of a tool that can be registered with the server.

    Attributes:
        name: Unique name of the tool.
        description: Human-readable description of the tool purpose.
        input_schema: Shallow object schema describing the tool arguments.
        handler: Callable that executes the tool logic. It may return an
            awaitable, in which case the result is awaited.
        blocking: Run a synchronous handler in a worker thread instead of on
            the event loop.
    """

    name: str
    description: str
    input_schema: dict[str, Any]
    handler: ToolHandler
    blocking: bool = False

    async def invoke(self, arguments: dict[str, Any]) -> Any:
        """Run the handler with already-validated arguments.

        Args:
            arguments: Arguments that passed schema validation.

        Returns:
            Whatever the handler produced.
        """
        if self.blocking:
            result = await asyncio.to_thread(self.handler, arguments)
        else:
            result = self.handler(arguments)
        if inspect.isawaitable(result):
            result = await result
        return result

    def descriptor(self) -> dict[str, Any]:
        """Return a discovery-friendly description of the tool."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": copy.deepcopy(self.input_schema),
        }


class ToolRegistry:
    """Mapping from tool name to :class:`ToolDefinition`.

    Populated once at startup and read-only afterwards, so lookups need no
    locking. Iteration follows first-registration order.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._tools: dict[str, ToolDefinition] = {}

    def register(self, tool: ToolDefinition) -> None:
        """Register a tool, replacing any existing tool with the same name.

        Args:
            tool: Tool definition to register.
        """
        if tool.name in self._tools:
            logger.debug("Replacing registered tool %r", tool.name)
        else:
            logger.debug("Registering tool %r", tool.name)
        self._tools[tool.name] = tool

    def register_tools(self, *tools: ToolDefinition) -> None:
        """Register multiple tools at once.

        Args:
            *tools: Collection of tool definitions to register.
        """
        for tool in tools:
            self.register(tool)

    def get(self, name: str) -> ToolDefinition | None:
        """Return the tool registered under ``name`` or ``None``."""
        return self._tools.get(name)

    def names(self) -> list[str]:
        """List registered tool names in registration order."""
        return list(self._tools)

    def list_descriptors(self) -> list[dict[str, Any]]:
        """Produce ``{name, description, inputSchema}`` for every tool.

        Returns:
            Descriptors in first-registration order, with schemas copied
            verbatim.
        """
        return [tool.descriptor() for tool in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[ToolDefinition]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)
