"""
Pytest configuration and shared fixtures for embedded-servers tests.
"""

from collections.abc import Callable
import json
from typing import Any
from urllib.parse import parse_qsl

import httpx
import pytest

from embedded_servers.http.request import HttpRequest, Transport
from embedded_servers.http.response import HttpResponse
from embedded_servers.servers.embedded_server import AbstractEmbeddedServer


async def echo_app(scope: dict[str, Any], receive: Callable, send: Callable) -> None:
    """ASGI application used as the embedded server in tests.

    Routes:
        /resource: fixed resource with ETag and Cache-Control, 304 when
            If-None-Match matches
        /redirect: 302 to /resource
        /multi: two X-Multi headers
        anything else: JSON echo of method, path, root_path, query, headers
            and body

    Routes are matched on the path relative to ``root_path``.
    """
    if scope["type"] == "lifespan":
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    body = b""
    more_body = True
    while more_body:
        message = await receive()
        body += message.get("body", b"")
        more_body = message.get("more_body", False)

    request_headers = [(k.decode("latin-1"), v.decode("latin-1")) for k, v in scope["headers"]]
    root_path = scope.get("root_path", "")
    path = scope["path"]
    if root_path and path.startswith(root_path):
        path = path[len(root_path):] or "/"

    if path == "/resource":
        if ("if-none-match", '"v1"') in request_headers:
            status, content, headers = 304, b"", [(b"etag", b'"v1"')]
        else:
            status, content = 200, b"resource"
            headers = [
                (b"content-type", b"text/plain; charset=utf-8"),
                (b"etag", b'"v1"'),
                (b"cache-control", b"max-age=60"),
            ]
    elif path == "/redirect":
        status, content, headers = 302, b"", [(b"location", b"/resource")]
    elif path == "/multi":
        status, content = 200, b"multi"
        headers = [(b"x-multi", b"a"), (b"x-multi", b"b")]
    else:
        status = 200
        content = json.dumps(
            {
                "method": scope["method"],
                "path": path,
                "root_path": root_path,
                "query": parse_qsl(scope["query_string"].decode("latin-1"), keep_blank_values=True),
                "headers": request_headers,
                "body": body.decode("utf-8"),
            }
        ).encode("utf-8")
        headers = [(b"content-type", b"application/json")]

    await send({"type": "http.response.start", "status": status, "headers": headers})
    await send({"type": "http.response.body", "body": content})


class FakeEmbeddedServer(AbstractEmbeddedServer):
    """Embedded server recording lifecycle calls without opening sockets."""

    def __init__(self, configuration=None, port: int = 8080):
        super().__init__(configuration)
        self.fixed_port = port
        self.start_calls = 0
        self.stop_calls = 0

    def _do_start(self) -> None:
        self.start_calls += 1

    def _do_stop(self) -> None:
        self.stop_calls += 1

    def _get_port(self) -> int:
        return self.fixed_port


class RecordingTransport(Transport):
    """Transport recording executed requests and returning a canned response."""

    def __init__(self, response: HttpResponse | None = None, error: Exception | None = None):
        self.response = response or HttpResponse(200, "ok")
        self.error = error
        self.requests: list[HttpRequest] = []

    def do_execute(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def embedded_app() -> Callable:
    """ASGI application served by the plugin's embedded server."""
    return echo_app


@pytest.fixture
def fake_server() -> FakeEmbeddedServer:
    """Embedded server that does not bind any port."""
    return FakeEmbeddedServer()


@pytest.fixture
def recording_transport() -> RecordingTransport:
    """Transport returning a 200 response."""
    return RecordingTransport()


@pytest.fixture
def mock_httpx_client():
    """Factory of httpx clients answering through a handler function."""
    clients = []

    def factory(handler):
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()
