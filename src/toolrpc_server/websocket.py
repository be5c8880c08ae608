"""WebSocket transport built on the ``websockets`` asyncio server."""

from __future__ import annotations

import asyncio
import json
import logging
from http import HTTPStatus
from typing import Any, Callable, Coroutine

from websockets.asyncio.server import Server, ServerConnection, serve
from websockets.exceptions import ConnectionClosed
from websockets.http11 import Request, Response

from toolrpc.dispatcher import Dispatcher
from toolrpc.messages import decode_message

logger = logging.getLogger(__name__)

ConnectionHandler = Callable[[ServerConnection], Coroutine[Any, Any, None]]


def reject_plain_http(connection: ServerConnection, request: Request) -> Response | None:
    """Answer requests that do not ask for a WebSocket upgrade with 400."""
    if request.headers.get("Upgrade", "").lower() != "websocket":
        return connection.respond(
            HTTPStatus.BAD_REQUEST, "Expected WebSocket upgrade\n"
        )
    return None


def connection_handler(dispatcher: Dispatcher) -> ConnectionHandler:
    """Create a per-connection coroutine serving ``dispatcher``.

    Each frame is dispatched as its own task. Replies are sent as text frames
    under a per-connection lock.
    """

    async def handler(connection: ServerConnection) -> None:
        lock = asyncio.Lock()
        pending: set[asyncio.Task[None]] = set()

        async def send(reply: dict[str, Any]) -> None:
            async with lock:
                await connection.send(json.dumps(reply))

        async def handle_frame(message: Any) -> None:
            try:
                await dispatcher.handle_raw(message, send)
            except ConnectionClosed:
                logger.debug("Connection %s closed before reply", connection.id)
            except Exception:
                logger.exception("Failed to deliver reply")

        logger.debug("Connection %s opened", connection.id)
        try:
            async for frame in connection:
                message = decode_message(frame)
                if message is None:
                    continue
                task = asyncio.create_task(handle_frame(message))
                pending.add(task)
                task.add_done_callback(pending.discard)
        except ConnectionClosed as exc:
            logger.debug("Connection %s closed: %s", connection.id, exc)
        if pending:
            await asyncio.gather(*pending)
        logger.debug("Connection %s finished", connection.id)

    return handler


def websocket_server(dispatcher: Dispatcher, host: str, port: int) -> serve:
    """Create (but do not start) a WebSocket server for ``dispatcher``.

    The returned object is awaitable and an async context manager.
    """
    return serve(
        connection_handler(dispatcher),
        host,
        port,
        process_request=reject_plain_http,
    )


async def run_websocket(dispatcher: Dispatcher, host: str, port: int) -> None:
    """Serve ``dispatcher`` over WebSocket until cancelled."""
    async with websocket_server(dispatcher, host, port) as server:
        _log_listening(server)
        await server.serve_forever()


def _log_listening(server: Server) -> None:
    for sock in server.sockets:
        address = sock.getsockname()
        logger.info("WebSocket listening on ws://%s:%s", address[0], address[1])
