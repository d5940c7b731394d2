"""
HTTP response returned by request execution.
"""

from collections.abc import Iterable

from embedded_servers.http.header import HttpHeader
from embedded_servers.http.headers import (
    CACHE_CONTROL,
    CONTENT_ENCODING,
    CONTENT_TYPE,
    ETAG,
    LOCATION,
)
from embedded_servers.utils.preconditions import not_null


class HttpResponse:
    """Read-only view of an executed HTTP exchange.

    Header lookups ignore case. Convenience accessors return None when the
    header is missing.
    """

    def __init__(
        self,
        status: int,
        body: str,
        headers: Iterable[HttpHeader] = (),
        request_duration: int = 0,
    ):
        """Initialize response.

        Args:
            status: HTTP status code
            body: Response body, decoded
            headers: Response headers
            request_duration: Duration of the exchange in nanoseconds, as
                measured by the transport
        """
        self._status = status
        self._body = body
        self._request_duration = request_duration
        self._headers: dict[str, HttpHeader] = {}
        for h in headers:
            self._headers[h.name.lower()] = h

    @property
    def status(self) -> int:
        return self._status

    @property
    def body(self) -> str:
        return self._body

    @property
    def request_duration(self) -> int:
        """Duration of request execution in nanoseconds."""
        return self._request_duration

    @property
    def request_duration_in_millis(self) -> int:
        """Duration of request execution in milliseconds."""
        return self._request_duration // 1_000_000

    @property
    def headers(self) -> tuple[HttpHeader, ...]:
        return tuple(self._headers.values())

    def contains_header(self, name: str) -> bool:
        return self.get_header(name) is not None

    def get_header(self, name: str) -> HttpHeader | None:
        """Get a response header.

        Args:
            name: Header name, case-insensitive

        Returns:
            Header, None if the response does not have it

        Raises:
            ValidationError: If name is None
        """
        return self._headers.get(not_null(name, "name").lower())

    def has_etag_header(self) -> bool:
        return self.contains_header(ETAG)

    def get_etag(self) -> HttpHeader | None:
        return self.get_header(ETAG)

    def get_content_type(self) -> HttpHeader | None:
        return self.get_header(CONTENT_TYPE)

    def get_content_encoding(self) -> HttpHeader | None:
        return self.get_header(CONTENT_ENCODING)

    def get_location(self) -> HttpHeader | None:
        return self.get_header(LOCATION)

    def get_cache_control(self) -> HttpHeader | None:
        return self.get_header(CACHE_CONTROL)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self._status}, headers={list(self._headers.values())})"
