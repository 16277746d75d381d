# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import socket
import threading
import time
from contextlib import contextmanager

import httpx

from ccswitch.config import HttpSettings
from ccswitch.errors import ErrorCategory
from ccswitch.http.adapters import StubHttpClient, network_error_response, status_response
from ccswitch.http.headers import header_value, merge_headers
from ccswitch.http.httpx_client import HttpxClient
from ccswitch.http.models import HttpRequest
from ccswitch.http.url import is_valid_base_url, join_url


def _mock_client(handler, **settings_kwargs):
    settings = HttpSettings(user_agent="UA/1.0", **settings_kwargs)
    return HttpxClient(settings, client=httpx.Client(transport=httpx.MockTransport(handler)))


@contextmanager
def _tcp_server(handle):
    """Serve one connection on 127.0.0.1 with `handle(conn, stop)` in a background thread."""
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    stop = threading.Event()

    def serve():
        try:
            conn, _ = listener.accept()
        except OSError:
            return
        with conn:
            handle(conn, stop)

    thread = threading.Thread(target=serve, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{listener.getsockname()[1]}"
    finally:
        stop.set()
        listener.close()
        thread.join(timeout=5.0)


def _socket_client(timeout):
    return HttpxClient(HttpSettings(timeout=timeout), client=httpx.Client(trust_env=False))


def test_join_url_uses_exactly_one_slash():
    assert join_url("https://host", "/v1/models") == "https://host/v1/models"
    assert join_url("https://host/", "/v1/models") == "https://host/v1/models"
    assert join_url("https://host/api/", "v1/models") == "https://host/api/v1/models"
    assert join_url("https://host", "/") == "https://host/"
    assert join_url("https://host/", "/") == "https://host/"


def test_is_valid_base_url():
    assert is_valid_base_url("https://api.example.com")
    assert is_valid_base_url("http://localhost:8080/proxy")
    assert not is_valid_base_url("")
    assert not is_valid_base_url("api.example.com")
    assert not is_valid_base_url("ftp://example.com")
    assert not is_valid_base_url("https://")
    assert not is_valid_base_url("https://host:99999")


def test_merge_headers_later_layers_win_case_insensitively():
    merged = merge_headers(
        {"Accept": "application/json", "Authorization": "Bearer a"},
        None,
        {"authorization": "Bearer b", "X-Extra": "1"},
    )
    assert merged == {"Accept": "application/json", "authorization": "Bearer b", "X-Extra": "1"}
    assert header_value(merged, "AUTHORIZATION") == "Bearer b"
    assert header_value(merged, "missing", "fallback") == "fallback"


def test_httpx_client_success_drains_and_discards_body():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["headers"] = dict(request.headers)
        seen["body"] = request.content
        return httpx.Response(201, content=b"x" * 1024)

    client = _mock_client(handler)
    resp = client.request(HttpRequest(url="https://stub.example/v1/chat/completions", method="POST", headers={"X": "1"}, body=b"{}"))
    assert resp.ok is True
    assert resp.status_code == 201
    assert resp.meta["body_bytes_drained"] == 1024
    assert not hasattr(resp, "content")
    assert seen["method"] == "POST"
    assert seen["headers"]["user-agent"] == "UA/1.0"
    assert seen["headers"]["x"] == "1"
    assert seen["body"] == b"{}"


def test_httpx_client_server_error_is_transport_success():
    client = _mock_client(lambda request: httpx.Response(503))
    resp = client.request(HttpRequest(url="https://stub.example/health"))
    assert resp.ok is True
    assert resp.status_code == 503
    assert resp.error_category == ErrorCategory.NONE


def test_httpx_client_connect_error_is_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Name or service not known", request=request)

    resp = _mock_client(handler).request(HttpRequest(url="https://nowhere.invalid/v1/models"))
    assert resp.ok is False
    assert resp.status_code is None
    assert resp.error_category == ErrorCategory.NETWORK_ERROR
    assert resp.error_type == "ConnectError"
    assert "Name or service not known" in resp.error_message


def test_httpx_client_read_timeout_is_reported_as_timeout():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    resp = _mock_client(handler).request(HttpRequest(url="https://slow.example/v1/models"))
    assert resp.ok is False
    assert resp.timed_out is True
    assert resp.error_category == ErrorCategory.TIMEOUT
    assert resp.error_message == "timeout"


def test_httpx_client_enforces_deadline_while_draining():
    def slow_body():
        yield b"a"
        time.sleep(0.2)
        yield b"b"

    client = _mock_client(lambda request: httpx.Response(200, content=slow_body()))
    started = time.monotonic()
    resp = client.request(HttpRequest(url="https://slow.example/", timeout=0.05))
    assert time.monotonic() - started < 1.0
    assert resp.ok is False
    assert resp.error_category == ErrorCategory.TIMEOUT


def test_stub_client_matches_method_then_url():
    stub = StubHttpClient()
    stub.add("https://h/v1/models", status_response(200))
    stub.add("https://h/v1/models", status_response(405), method="POST")
    assert stub.request(HttpRequest(url="https://h/v1/models")).status_code == 200
    assert stub.request(HttpRequest(url="https://h/v1/models", method="POST")).status_code == 405
    missing = stub.request(HttpRequest(url="https://h/other"))
    assert missing.ok is False
    assert missing.error_category == ErrorCategory.NETWORK_ERROR
    assert stub.requested_paths() == ["/v1/models", "/v1/models", "/other"]


def test_network_error_response_helpers():
    assert network_error_response(timed_out=True).timed_out is True
    refused = network_error_response("connection refused")
    assert refused.timed_out is False
    assert refused.error_message == "connection refused"


def test_httpx_client_sends_single_user_agent_and_closes_connection():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["user_agent"] = request.headers.get_list("user-agent")
        seen["connection"] = request.headers.get("connection")
        return httpx.Response(200)

    _mock_client(handler).request(HttpRequest(url="https://stub.example/v1/models", headers={"user-agent": "custom/2.0"}))
    assert seen["user_agent"] == ["custom/2.0"]
    assert seen["connection"] == "close"


def test_silent_server_times_out_without_hanging():
    def accept_and_stay_silent(conn, stop):
        stop.wait(5.0)

    client = _socket_client(0.5)
    with _tcp_server(accept_and_stay_silent) as base_url:
        started = time.monotonic()
        resp = client.request(HttpRequest(url=f"{base_url}/v1/models"))
        elapsed = time.monotonic() - started
    client.close()

    assert elapsed < 3.0
    assert resp.ok is False
    assert resp.status_code is None
    assert resp.error_category == ErrorCategory.TIMEOUT
    assert resp.error_message == "timeout"


def test_trickled_status_line_hits_wall_clock_deadline():
    reply = b"HTTP/1.1 200 OK\r\nContent-Length: 0\r\n\r\n"

    def trickle(conn, stop):
        for i in range(len(reply)):
            if stop.wait(0.2):
                return
            try:
                conn.sendall(reply[i : i + 1])
            except OSError:
                return

    client = _socket_client(1.0)
    with _tcp_server(trickle) as base_url:
        started = time.monotonic()
        resp = client.request(HttpRequest(url=f"{base_url}/v1/models"))
        elapsed = time.monotonic() - started
    client.close()

    # Each byte arrives well within the per-read timeout; only the overall deadline can stop this.
    assert elapsed < 3.0
    assert resp.ok is False
    assert resp.status_code is None
    assert resp.error_category == ErrorCategory.TIMEOUT
    assert resp.timed_out is True


def test_fast_local_server_is_unaffected_by_deadline():
    def respond(conn, stop):  # noqa: ARG001
        conn.recv(65536)
        conn.sendall(b"HTTP/1.1 204 No Content\r\nConnection: close\r\n\r\n")

    client = _socket_client(2.0)
    with _tcp_server(respond) as base_url:
        resp = client.request(HttpRequest(url=f"{base_url}/v1/models"))
    client.close()

    assert resp.ok is True
    assert resp.status_code == 204
