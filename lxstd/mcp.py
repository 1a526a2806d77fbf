"""MCP operations over a connected client: tools, resources and prompts."""

from __future__ import annotations

from typing import Any

from .mcp_client import McpClient
from .values import from_json, to_json


class ToolError(Exception):
    """The server reported that a tool call failed."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def extract_text(result: Any) -> str:
    """Join the text items of a result's content with newlines."""
    if not isinstance(result, dict):
        return ""
    content = result.get("content")
    if not isinstance(content, list):
        return ""
    return "\n".join(
        item["text"]
        for item in content
        if isinstance(item, dict)
        and item.get("type") == "text"
        and isinstance(item.get("text"), str)
    )


def _listing(client: McpClient, method: str, field: str) -> list:
    result = client.request(method, {})
    value = result.get(field) if isinstance(result, dict) else None
    return from_json(value if value is not None else [])


def list_tools(client: McpClient) -> list:
    """The tools the server offers."""
    return _listing(client, "tools/list", "tools")


def call(client: McpClient, tool: str, arguments: Any = None) -> Any:
    """Call a tool; return its text output, or the whole result if it has none."""
    if not isinstance(tool, str):
        raise TypeError("mcp.call: tool name must be Str")
    result = client.request("tools/call", {"name": tool, "arguments": to_json(arguments)})
    if isinstance(result, dict) and result.get("isError") is True:
        raise ToolError(extract_text(result))
    text = extract_text(result)
    if text:
        return text
    return from_json(result)


def list_resources(client: McpClient) -> list:
    """The resources the server offers."""
    return _listing(client, "resources/list", "resources")


def read_resource(client: McpClient, uri: str) -> Any:
    """Read one resource by URI."""
    if not isinstance(uri, str):
        raise TypeError("mcp.read_resource: uri must be Str")
    return from_json(client.request("resources/read", {"uri": uri}))


def list_prompts(client: McpClient) -> list:
    """The prompts the server offers."""
    return _listing(client, "prompts/list", "prompts")


def get_prompt(client: McpClient, name: str, arguments: Any = None) -> Any:
    """Fetch a prompt filled in with arguments."""
    if not isinstance(name, str):
        raise TypeError("mcp.get_prompt: name must be Str")
    return from_json(
        client.request("prompts/get", {"name": name, "arguments": to_json(arguments)})
    )