"""Newline-delimited JSON transport over text streams."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
import threading
from collections.abc import AsyncIterable, AsyncIterator, Awaitable
from typing import Any, Callable, TextIO

from toolrpc.dispatcher import Dispatcher
from toolrpc.messages import decode_message

logger = logging.getLogger(__name__)

WriteText = Callable[[str], Awaitable[None]]


class LineStream:
    """Serve one JSON envelope per line and write one JSON reply per line.

    Every line is dispatched as its own task, so a slow tool does not hold up
    later lines. Replies are written under a single lock and may therefore
    arrive in completion order rather than request order.
    """

    def __init__(self, dispatcher: Dispatcher, write: WriteText) -> None:
        """Create a line stream that writes replies through ``write``."""
        self._dispatcher = dispatcher
        self._write = write
        self._lock = asyncio.Lock()
        self._pending: set[asyncio.Task[None]] = set()

    async def send(self, reply: dict[str, Any]) -> None:
        """Write ``reply`` as a single line."""
        line = json.dumps(reply) + "\n"
        async with self._lock:
            await self._write(line)

    async def handle_line(self, line: str) -> None:
        """Decode and dispatch one line; blank or undecodable lines are dropped."""
        if not line.strip():
            return
        message = decode_message(line)
        if message is None:
            return
        await self._dispatcher.handle_raw(message, self.send)

    async def serve(self, lines: AsyncIterable[str]) -> None:
        """Dispatch every line of ``lines`` and wait for outstanding replies."""
        async for line in lines:
            task = asyncio.create_task(self._handle_logged(line))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
        if self._pending:
            await asyncio.gather(*self._pending)

    async def _handle_logged(self, line: str) -> None:
        try:
            await self.handle_line(line)
        except Exception:
            logger.exception("Failed to deliver reply")


async def read_lines(stream: TextIO) -> AsyncIterator[str]:
    """Yield lines from a blocking text stream without stalling the loop.

    Reads happen on a daemon thread, so a ``readline`` still blocked on stdin
    does not hold up event loop or interpreter shutdown.
    """
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue[str] = asyncio.Queue()

    def pump() -> None:
        try:
            for line in iter(stream.readline, ""):
                loop.call_soon_threadsafe(queue.put_nowait, line)
            loop.call_soon_threadsafe(queue.put_nowait, "")
        except RuntimeError:
            # loop closed while this thread was blocked reading
            return

    threading.Thread(target=pump, name="stdin-reader", daemon=True).start()
    while line := await queue.get():
        yield line


async def serve_stdio(
    dispatcher: Dispatcher,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> None:
    """Serve ``dispatcher`` over standard input and output until EOF."""
    source = stdin if stdin is not None else sys.stdin
    sink = stdout if stdout is not None else sys.stdout

    async def write(text: str) -> None:
        sink.write(text)
        sink.flush()

    logger.info("Serving on stdio")
    await LineStream(dispatcher, write).serve(read_lines(source))
    logger.info("stdin closed; stopping")
