"""CLI-level coverage for the server entry point."""

from __future__ import annotations

import json

import pytest

from toolrpc.dispatcher import Dispatcher
from toolrpc_server import main as server_main
from toolrpc_server.config import ServerConfig


class _DummyApp:
    """Shim FastMCP app to capture run invocations without network I/O."""

    def __init__(self) -> None:
        self.run_calls: list[dict[str, object]] = []

    def run(self, *, transport: str, **kwargs: object) -> None:
        self.run_calls.append({"transport": transport, **kwargs})


def test_catalog_flag(capsys: pytest.CaptureFixture[str]) -> None:
    """--catalog prints the tool descriptors and exits."""
    # Act
    exit_code = server_main.main(["--catalog"])

    # Assert
    assert exit_code == 0
    catalog = json.loads(capsys.readouterr().out)
    assert [tool["name"] for tool in catalog["tools"]] == ["greet", "add", "time"]
    assert catalog["tools"][1]["inputSchema"]["required"] == ["a", "b"]


def test_main_runs_fastmcp_with_transport(monkeypatch: pytest.MonkeyPatch) -> None:
    """The fastmcp transport delegates to FastMCP.run with HTTP settings."""
    dummy_app = _DummyApp()
    monkeypatch.setattr(
        server_main, "build_fastmcp_app", lambda _registry: (dummy_app, [])
    )

    exit_code = server_main.main(
        ["--transport", "fastmcp", "--host", "0.0.0.0", "--port", "9000"]
    )

    assert exit_code == 0
    assert dummy_app.run_calls == [
        {"transport": "http", "host": "0.0.0.0", "port": 9000, "path": "/mcp"}
    ]


def test_stdio_shortcut_selects_stdio(monkeypatch: pytest.MonkeyPatch) -> None:
    """--stdio serves on standard streams with the configured dispatcher."""
    served: list[Dispatcher] = []

    async def fake_serve_stdio(dispatcher: Dispatcher) -> None:
        served.append(dispatcher)

    monkeypatch.setattr(server_main, "serve_stdio", fake_serve_stdio)

    exit_code = server_main.main(["--stdio", "--transport", "websocket"])

    assert exit_code == 0
    assert len(served) == 1
    assert served[0].registry.names() == ["greet", "add", "time"]


def test_websocket_is_default(monkeypatch: pytest.MonkeyPatch) -> None:
    """Without flags the WebSocket transport binds the default address."""
    calls: list[tuple[str, int]] = []

    async def fake_run_websocket(_dispatcher: Dispatcher, host: str, port: int) -> None:
        calls.append((host, port))

    monkeypatch.setattr(server_main, "run_websocket", fake_run_websocket)

    assert server_main.main([]) == 0
    assert calls == [("127.0.0.1", 8765)]


def test_config_from_arguments() -> None:
    """Parsed arguments are frozen into a ServerConfig."""
    args = server_main.build_parser().parse_args(
        ["--transport", "stdio", "--log-level", "debug", "--no-traceback"]
    )

    config = ServerConfig.from_namespace(args)

    assert config == ServerConfig(
        transport="stdio", log_level="DEBUG", include_traceback=False
    )
