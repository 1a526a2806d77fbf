import sys
import textwrap

import pytest

from lxstd.mcp_stdio import McpError, StdioTransport

ECHO_SERVER = textwrap.dedent(
    """
    import json, sys
    seen = []
    for line in sys.stdin:
        req = json.loads(line)
        if "id" not in req:
            seen.append(req.get("method"))
            continue
        sys.stdout.write(json.dumps({"jsonrpc": "2.0", "method": "log"}) + "\\n")
        reply = {"jsonrpc": "2.0", "id": req["id"],
                 "result": {"params": req.get("params"), "seen": seen}}
        sys.stdout.write(json.dumps(reply) + "\\n")
        sys.stdout.flush()
    """
)


def _python(script):
    return StdioTransport(sys.executable, ["-c", script])


def test_send_returns_matching_response_skipping_notifications():
    with _python(ECHO_SERVER) as transport:
        reply = transport.send({"jsonrpc": "2.0", "id": 1, "method": "m", "params": {"a": 1}})
    assert reply["id"] == 1
    assert reply["result"]["params"] == {"a": 1}


def test_multiple_requests_in_sequence():
    with _python(ECHO_SERVER) as transport:
        ids = [transport.send({"id": n, "method": "m"})["id"] for n in (1, 2, 3)]
    assert ids == [1, 2, 3]


def test_notify_is_delivered_without_reply():
    with _python(ECHO_SERVER) as transport:
        transport.notify({"jsonrpc": "2.0", "method": "notifications/initialized"})
        reply = transport.send({"id": 7, "method": "m"})
    assert reply["result"]["seen"] == ["notifications/initialized"]


def test_server_disconnect_raises():
    with _python("import sys; sys.stdin.readline()") as transport:
        with pytest.raises(McpError, match="disconnected"):
            transport.send({"id": 1, "method": "m"})


def test_bad_json_from_server_raises():
    script = "import sys; sys.stdin.readline(); print('not json', flush=True)"
    with _python(script) as transport:
        with pytest.raises(McpError, match="decode"):
            transport.send({"id": 1, "method": "m"})


def test_unencodable_request_raises():
    with _python(ECHO_SERVER) as transport:
        with pytest.raises(McpError, match="encode"):
            transport.send({"id": 1, "params": object()})


def test_spawn_failure_raises():
    with pytest.raises(McpError, match="spawn"):
        StdioTransport("/nonexistent/mcp-server-binary", [])


def test_close_stops_running_server_and_blocks_further_sends():
    transport = _python("import time; time.sleep(60)")
    transport.close()
    with pytest.raises(McpError):
        transport.send({"id": 1, "method": "m"})


def test_close_twice_is_harmless():
    transport = _python(ECHO_SERVER)
    transport.close()
    transport.close()
    with pytest.raises(McpError):
        transport.notify({"method": "x"})