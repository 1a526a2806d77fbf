import sys
import textwrap

import pytest

from lxstd.mcp_client import McpClient, connect, parse_stdio_config
from lxstd.mcp_stdio import McpError

SERVER = textwrap.dedent(
    """
    import json, sys
    for line in sys.stdin:
        msg = json.loads(line)
        if "id" not in msg:
            continue
        print(json.dumps({"jsonrpc": "2.0", "method": "log"}), flush=True)
        reply = {"method": msg["method"], "params": msg.get("params")}
        print(json.dumps({"jsonrpc": "2.0", "id": msg["id"], "result": reply}), flush=True)
    """
)


class FakeTransport:
    def __init__(self, responses):
        self.responses = list(responses)
        self.sent = []
        self.notified = []
        self.closed = False

    def send(self, request):
        self.sent.append(request)
        return self.responses.pop(0)

    def notify(self, request):
        self.notified.append(request)

    def close(self):
        self.closed = True


def test_request_numbers_ids_and_returns_result():
    transport = FakeTransport([{"id": 1, "result": "a"}, {"id": 2, "result": "b"}])
    client = McpClient(transport)
    assert client.request("m1", {}) == "a"
    assert client.request("m2", {"x": 1}) == "b"
    assert [r["id"] for r in transport.sent] == [1, 2]
    assert transport.sent[1] == {
        "jsonrpc": "2.0",
        "id": 2,
        "method": "m2",
        "params": {"x": 1},
    }


def test_server_error_message():
    client = McpClient(FakeTransport([{"id": 1, "error": {"message": "boom"}}]))
    with pytest.raises(McpError, match="mcp: server error: boom"):
        client.request("m", {})


def test_server_error_without_message():
    client = McpClient(FakeTransport([{"id": 1, "error": {}}]))
    with pytest.raises(McpError, match="unknown"):
        client.request("m", {})


def test_missing_result():
    client = McpClient(FakeTransport([{"id": 1}]))
    with pytest.raises(McpError, match="no result"):
        client.request("m", {})


def test_notify_shape():
    transport = FakeTransport([])
    McpClient(transport).notify("notifications/initialized")
    assert transport.notified == [
        {"jsonrpc": "2.0", "method": "notifications/initialized"}
    ]


def test_close_twice_and_use_after_close():
    transport = FakeTransport([])
    client = McpClient(transport)
    client.close()
    assert transport.closed is True
    with pytest.raises(McpError):
        client.close()
    with pytest.raises(McpError):
        client.request("m", {})


def test_parse_stdio_uri():
    assert parse_stdio_config("stdio:///usr/bin/server --flag value") == (
        "usr/bin/server",
        ["--flag", "value"],
    )


def test_parse_stdio_record():
    assert parse_stdio_config({"command": "srv", "args": ["a", "b"]}) == ("srv", ["a", "b"])
    assert parse_stdio_config({"command": "srv"}) == ("srv", [])


@pytest.mark.parametrize(
    "target",
    [
        "http://localhost/mcp",
        "stdio://",
        {"args": []},
        {"command": "srv", "args": "a"},
        {"command": "srv", "args": [1]},
    ],
)
def test_parse_stdio_errors(target):
    with pytest.raises(McpError):
        parse_stdio_config(target)


def test_parse_stdio_wrong_type():
    with pytest.raises(TypeError):
        parse_stdio_config(42)


def test_connect_to_real_process():
    client = connect({"command": sys.executable, "args": ["-c", SERVER]})
    with client:
        result = client.request("tools/list", {"k": "v"})
        assert result == {"method": "tools/list", "params": {"k": "v"}}
    with pytest.raises(McpError):
        client.request("tools/list", {})


def test_connect_spawn_failure():
    with pytest.raises(McpError, match="spawn"):
        connect({"command": "definitely-not-a-real-command-xyz"})