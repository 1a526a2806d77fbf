"""A JSON-RPC client for MCP servers reached over a child process's streams."""

from __future__ import annotations

from typing import Any, Optional, Protocol

from .mcp_stdio import McpError, StdioTransport

PROTOCOL_VERSION = "2024-11-05"
CLIENT_INFO = {"name": "lx", "version": "0.1.0"}


class _Transport(Protocol):
    def send(self, request: Any) -> dict: ...

    def notify(self, request: Any) -> None: ...

    def close(self) -> None: ...


class McpClient:
    """Numbered requests and notifications over a transport."""

    def __init__(self, transport: _Transport) -> None:
        self._transport: Optional[_Transport] = transport
        self._next_id = 0

    def __enter__(self) -> McpClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        if self._transport is not None:
            self.close()

    def _live(self) -> _Transport:
        if self._transport is None:
            raise McpError("mcp: client not found")
        return self._transport

    def request(self, method: str, params: Any) -> Any:
        """Send a request and return its result; server errors raise McpError."""
        transport = self._live()
        self._next_id += 1
        response = transport.send(
            {"jsonrpc": "2.0", "id": self._next_id, "method": method, "params": params}
        )
        if "error" in response:
            error = response["error"]
            message = error.get("message") if isinstance(error, dict) else None
            if not isinstance(message, str):
                message = "unknown"
            raise McpError(f"mcp: server error: {message}")
        if "result" not in response:
            raise McpError("mcp: no result in response")
        return response["result"]

    def notify(self, method: str) -> None:
        """Send a notification, which gets no reply."""
        self._live().notify({"jsonrpc": "2.0", "method": method})

    def close(self) -> None:
        """Shut the transport down; the client cannot be used afterwards."""
        if self._transport is None:
            raise McpError("mcp.close: client not found")
        transport, self._transport = self._transport, None
        transport.close()


def parse_stdio_config(target: Any) -> tuple[str, list[str]]:
    """Command and arguments from a "stdio://cmd arg ..." URI or a config dict."""
    if isinstance(target, str):
        if not target.startswith("stdio://"):
            raise McpError(f"mcp.connect: unsupported URI: {target}")
        parts = target[len("stdio://"):].lstrip("/").split()
        if not parts:
            raise McpError("mcp.connect: empty stdio path")
        return parts[0], parts[1:]
    if isinstance(target, dict):
        command = target.get("command")
        if not isinstance(command, str):
            raise McpError("mcp.connect: needs 'command' field")
        if "args" not in target:
            return command, []
        args = target["args"]
        if not isinstance(args, list):
            raise McpError("mcp.connect: args must be List")
        if not all(isinstance(a, str) for a in args):
            raise McpError("mcp.connect: args must be [Str]")
        return command, list(args)
    raise TypeError("mcp.connect: expects URI Str or config Record")


def connect(target: Any) -> McpClient:
    """Start a server process and complete the initialize handshake."""
    command, args = parse_stdio_config(target)
    client = McpClient(StdioTransport(command, args))
    try:
        client.request(
            "initialize",
            {
                "protocolVersion": PROTOCOL_VERSION,
                "capabilities": {},
                "clientInfo": dict(CLIENT_INFO),
            },
        )
        client.notify("notifications/initialized")
    except BaseException:
        client.close()
        raise
    return client