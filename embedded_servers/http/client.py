"""
HTTP client preparing requests against an embedded server.

Requests are sent with httpx.
"""

import logging
import time
from urllib.parse import urlencode

import httpx

from embedded_servers.config import TIMEOUT_CONSTANTS
from embedded_servers.http.header import HttpHeader, header
from embedded_servers.http.headers import COOKIE
from embedded_servers.http.method import HttpMethod
from embedded_servers.http.request import HttpRequest, Transport
from embedded_servers.http.response import HttpResponse
from embedded_servers.servers.embedded_server import EmbeddedServer
from embedded_servers.utils.preconditions import not_null

logger = logging.getLogger(__name__)


class HttpxTransport(Transport):
    """Transport sending requests with an ``httpx.Client``."""

    def __init__(self, client: httpx.Client):
        self.client = client

    def do_execute(self, request: HttpRequest) -> HttpResponse:
        headers = [(h.name, value) for h in request.headers for value in h.values]
        if request.cookies:
            headers.append((COOKIE, "; ".join(c.to_header_value() for c in request.cookies)))

        content = None
        if request.form_params:
            content = urlencode([(p.name, p.value) for p in request.form_params])
        elif request.body is not None:
            content = request.body

        http_request = self.client.build_request(
            request.method.verb,
            request.url,
            params=[(p.name, p.value) for p in request.query_params],
            headers=headers,
            content=content,
        )

        start = time.perf_counter_ns()
        http_response = self.client.send(http_request)
        duration = time.perf_counter_ns() - start

        logger.debug(
            f"{request.method} {http_request.url} -> {http_response.status_code} "
            f"in {duration // 1_000_000} ms"
        )

        return HttpResponse(
            http_response.status_code,
            http_response.text,
            self._read_headers(http_response.headers),
            duration,
        )

    @staticmethod
    def _read_headers(headers: httpx.Headers) -> list[HttpHeader]:
        """Group raw response headers by name, keeping the first name casing seen."""
        names: dict[str, str] = {}
        values: dict[str, list[str]] = {}
        for raw_name, raw_value in headers.raw:
            name = raw_name.decode(headers.encoding)
            key = name.lower()
            names.setdefault(key, name)
            values.setdefault(key, []).append(raw_value.decode(headers.encoding))
        return [header(names[key], values[key]) for key in names]


class HttpClient:
    """Prepare requests against an embedded server.

    The server URL is read each time a request is prepared, so the client
    keeps working when the server is restarted on another port.
    """

    def __init__(self, server: EmbeddedServer | str, timeout: float | None = None):
        """Initialize HTTP client.

        Args:
            server: Embedded server, or base URL of a running server
            timeout: Request timeout in seconds, defaults to the server
                configuration or EMBEDDED_SERVERS_CLIENT_TIMEOUT
        """
        self.server = not_null(server, "server")
        if timeout is None:
            configuration = getattr(server, "configuration", None)
            timeout = configuration.client_timeout if configuration else TIMEOUT_CONSTANTS["client"]
        self.timeout = timeout
        self.client = httpx.Client(timeout=timeout)
        self.transport = HttpxTransport(self.client)

    @property
    def base_url(self) -> str:
        url = self.server if isinstance(self.server, str) else self.server.url
        return url.rstrip("/")

    def url(self, path: str) -> str:
        """Build the absolute URL of a path on the server."""
        if path.startswith(("http://", "https://")):
            return path
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}{path}"

    def prepare_request(self, method: HttpMethod | str, path: str) -> HttpRequest:
        """Create a request.

        Args:
            method: HTTP method, or its verb
            path: Path on the server, or absolute URL

        Returns:
            New request, to be executed with ``execute()``
        """
        if isinstance(method, str):
            method = HttpMethod.of(method)
        return HttpRequest(method, self.url(not_null(path, "path")), self.transport)

    def prepare_get(self, path: str) -> HttpRequest:
        return self.prepare_request(HttpMethod.GET, path)

    def prepare_post(self, path: str) -> HttpRequest:
        return self.prepare_request(HttpMethod.POST, path)

    def prepare_put(self, path: str) -> HttpRequest:
        return self.prepare_request(HttpMethod.PUT, path)

    def prepare_patch(self, path: str) -> HttpRequest:
        return self.prepare_request(HttpMethod.PATCH, path)

    def prepare_delete(self, path: str) -> HttpRequest:
        return self.prepare_request(HttpMethod.DELETE, path)

    def prepare_head(self, path: str) -> HttpRequest:
        return self.prepare_request(HttpMethod.HEAD, path)

    def prepare_options(self, path: str) -> HttpRequest:
        return self.prepare_request(HttpMethod.OPTIONS, path)

    def close(self) -> None:
        self.client.close()

    def is_closed(self) -> bool:
        return self.client.is_closed

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __del__(self):
        """Clean up HTTP client."""
        if hasattr(self, "client"):
            self.client.close()
