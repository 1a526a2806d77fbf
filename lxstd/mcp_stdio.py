"""Line-delimited JSON-RPC transport over a child process's standard streams."""

from __future__ import annotations

import contextlib
import json
import subprocess
from typing import Any, Sequence


class McpError(Exception):
    """A failure talking to an MCP server."""


class StdioTransport:
    """A server process spoken to with one JSON message per line."""

    def __init__(self, command: str, args: Sequence[str] = ()) -> None:
        try:
            self._process = subprocess.Popen(
                [command, *args],
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=None,
                text=True,
                encoding="utf-8",
            )
        except OSError as exc:
            raise McpError(f"mcp stdio: spawn: {exc}") from exc

    def __enter__(self) -> StdioTransport:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _write(self, request: Any) -> None:
        try:
            line = json.dumps(request, separators=(",", ":"), ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise McpError(f"mcp stdio: encode: {exc}") from exc
        stdin = self._process.stdin
        try:
            stdin.write(line + "\n")
        except (OSError, ValueError) as exc:
            raise McpError(f"mcp stdio: write: {exc}") from exc
        try:
            stdin.flush()
        except (OSError, ValueError) as exc:
            raise McpError(f"mcp stdio: flush: {exc}") from exc

    def send(self, request: Any) -> dict:
        """Send a request and return the next message that carries an id."""
        self._write(request)
        while True:
            try:
                line = self._process.stdout.readline()
            except (OSError, ValueError) as exc:
                raise McpError(f"mcp stdio: read: {exc}") from exc
            if line == "":
                raise McpError("mcp stdio: server disconnected")
            try:
                message = json.loads(line.strip())
            except ValueError as exc:
                raise McpError(f"mcp stdio: decode: {exc}") from exc
            if isinstance(message, dict) and "id" in message:
                return message

    def notify(self, request: Any) -> None:
        """Send a message that expects no reply."""
        self._write(request)

    def close(self) -> None:
        """Close the pipes and stop the server if it is still running."""
        for stream in (self._process.stdin, self._process.stdout):
            with contextlib.suppress(OSError, ValueError):
                stream.close()
        if self._process.poll() is None:
            try:
                self._process.kill()
            except OSError as exc:
                raise McpError(f"mcp stdio: kill: {exc}") from exc
            try:
                self._process.wait()
            except OSError as exc:
                raise McpError(f"mcp stdio: wait: {exc}") from exc