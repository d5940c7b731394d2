"""
Fluent HTTP request builder.

An ``HttpRequest`` accumulates headers, parameters, body and cookies, then
hands itself to a ``Transport`` on ``execute()``. Every builder method checks
its arguments before anything is recorded and returns the request itself,
so a chain always works on a single request::

    response = (
        client.prepare_post("/users")
        .accept_json()
        .add_form_param("name", "john")
        .execute()
    )

A request is owned by the chain that built it and should not be shared
between threads.
"""

from abc import ABC, abstractmethod
from datetime import datetime
import logging

from embedded_servers.exceptions import HttpClientError, UnsupportedOperationError
from embedded_servers.http.cookie import Cookie
from embedded_servers.http.header import HttpHeader, header
from embedded_servers.http.headers import (
    ACCEPT,
    ACCEPT_ENCODING,
    ACCEPT_LANGUAGE,
    APPLICATION_FORM_URL_ENCODED,
    APPLICATION_JSON,
    APPLICATION_XML,
    CONTENT_TYPE,
    GZIP_DEFLATE,
    IF_MATCH,
    IF_MODIFIED_SINCE,
    IF_NONE_MATCH,
    IF_UNMODIFIED_SINCE,
    MULTI_VALUED_HEADERS,
    MULTIPART_FORM_DATA,
    ORIGIN,
    REFERER,
    REQUESTED_WITH,
    USER_AGENT,
    X_CSRF_TOKEN,
    X_HTTP_METHOD_OVERRIDE,
    XML_HTTP_REQUEST,
)
from embedded_servers.http.method import HttpMethod
from embedded_servers.http.parameter import HttpParameter, param
from embedded_servers.http.response import HttpResponse
from embedded_servers.utils.dates import format_http_date
from embedded_servers.utils.preconditions import not_blank, not_null

logger = logging.getLogger(__name__)


class Transport(ABC):
    """Network layer executing built requests."""

    @abstractmethod
    def do_execute(self, request: "HttpRequest") -> HttpResponse:
        """Send a request and read its response.

        Implementations can assume that the request content has already been
        validated. Any exception raised here is translated into an
        ``HttpClientError`` by ``HttpRequest.execute``.

        Args:
            request: Request to send

        Returns:
            HTTP response
        """
        pass


class HttpRequest:
    """HTTP request being built."""

    def __init__(self, method: HttpMethod, url: str, transport: Transport):
        """Initialize request.

        Args:
            method: HTTP method
            url: Absolute URL of the request, without query string
            transport: Transport used to execute the request
        """
        self._method = not_null(method, "method")
        self._url = not_blank(url, "url")
        self._transport = not_null(transport, "transport")
        self._headers: dict[str, HttpHeader] = {}
        self._query_params: list[HttpParameter] = []
        self._form_params: list[HttpParameter] = []
        self._body: str | None = None
        self._cookies: dict[str, Cookie] = {}

    @property
    def method(self) -> HttpMethod:
        return self._method

    @property
    def url(self) -> str:
        return self._url

    @property
    def headers(self) -> tuple[HttpHeader, ...]:
        return tuple(self._headers.values())

    @property
    def query_params(self) -> tuple[HttpParameter, ...]:
        return tuple(self._query_params)

    @property
    def form_params(self) -> tuple[HttpParameter, ...]:
        return tuple(self._form_params)

    @property
    def body(self) -> str | None:
        return self._body

    @property
    def cookies(self) -> tuple[Cookie, ...]:
        return tuple(self._cookies.values())

    def get_header(self, name: str) -> HttpHeader | None:
        """Get a request header, None if it has not been set."""
        return self._headers.get(not_null(name, "name").lower())

    def contains_header(self, name: str) -> bool:
        return self.get_header(name) is not None

    # Headers

    def add_header(self, name: str, value: str) -> "HttpRequest":
        """Add a header value.

        The value is appended to the existing values of the header, if any.

        Raises:
            ValidationError: If name is blank or value is None
        """
        key = not_blank(name, "name").lower()
        not_null(value, "value")
        current = self._headers.get(key)
        values = (*current.values, value) if current else (value,)
        self._headers[key] = header(current.name if current else name, values)
        return self

    def set_header(self, name: str, value: str) -> "HttpRequest":
        """Set a header, replacing all of its existing values.

        Raises:
            ValidationError: If name is blank or value is None
        """
        self._headers[not_blank(name, "name").lower()] = header(name, value)
        return self

    def _put_header(self, name: str, value: str) -> "HttpRequest":
        if name.lower() in MULTI_VALUED_HEADERS:
            current = self.get_header(name)
            if current and value in current.values:
                return self
            return self.add_header(name, value)
        return self.set_header(name, value)

    def accept(self, media_type: str) -> "HttpRequest":
        return self._put_header(ACCEPT, not_blank(media_type, "media_type"))

    def accept_json(self) -> "HttpRequest":
        return self.accept(APPLICATION_JSON)

    def accept_xml(self) -> "HttpRequest":
        return self.accept(APPLICATION_XML)

    def accept_language(self, lang: str) -> "HttpRequest":
        return self._put_header(ACCEPT_LANGUAGE, not_blank(lang, "lang"))

    def add_accept_encoding(self, encoding: str) -> "HttpRequest":
        return self._put_header(ACCEPT_ENCODING, not_blank(encoding, "encoding"))

    def accept_gzip(self) -> "HttpRequest":
        return self.add_accept_encoding(GZIP_DEFLATE)

    def add_origin(self, origin: str) -> "HttpRequest":
        return self._put_header(ORIGIN, not_blank(origin, "origin"))

    def add_referer(self, referer: str) -> "HttpRequest":
        return self._put_header(REFERER, not_blank(referer, "referer"))

    def add_if_none_match(self, etag: str) -> "HttpRequest":
        return self._put_header(IF_NONE_MATCH, not_blank(etag, "etag"))

    def add_if_match(self, etag: str) -> "HttpRequest":
        return self._put_header(IF_MATCH, not_blank(etag, "etag"))

    def add_if_modified_since(self, date: datetime | float) -> "HttpRequest":
        """Add an If-Modified-Since header.

        Args:
            date: Datetime (naive values are taken as UTC) or POSIX timestamp,
                sent as e.g. "Wed, 21 Oct 2015 07:28:00 GMT"

        Raises:
            ValidationError: If date is None, or neither a datetime nor a number
        """
        return self._put_header(IF_MODIFIED_SINCE, format_http_date(not_null(date, "date")))

    def add_if_unmodified_since(self, date: datetime | float) -> "HttpRequest":
        """Add an If-Unmodified-Since header, formatted as If-Modified-Since."""
        return self._put_header(IF_UNMODIFIED_SINCE, format_http_date(not_null(date, "date")))

    def with_user_agent(self, user_agent: str) -> "HttpRequest":
        return self._put_header(USER_AGENT, not_blank(user_agent, "user_agent"))

    def as_xml_http_request(self) -> "HttpRequest":
        """Mark the request as an asynchronous browser request (X-Requested-With)."""
        return self._put_header(REQUESTED_WITH, XML_HTTP_REQUEST)

    def add_csrf_token(self, token: str) -> "HttpRequest":
        return self._put_header(X_CSRF_TOKEN, not_blank(token, "token"))

    def add_x_http_method_override(self, method: str) -> "HttpRequest":
        return self._put_header(X_HTTP_METHOD_OVERRIDE, not_blank(method, "method"))

    def override_put(self) -> "HttpRequest":
        return self.add_x_http_method_override(HttpMethod.PUT.verb)

    def override_delete(self) -> "HttpRequest":
        return self.add_x_http_method_override(HttpMethod.DELETE.verb)

    # Content type

    def as_json(self) -> "HttpRequest":
        return self._put_header(CONTENT_TYPE, APPLICATION_JSON)

    def as_xml(self) -> "HttpRequest":
        return self._put_header(CONTENT_TYPE, APPLICATION_XML)

    def as_form_url_encoded(self) -> "HttpRequest":
        return self._put_header(CONTENT_TYPE, APPLICATION_FORM_URL_ENCODED)

    def as_multipart_form_data(self) -> "HttpRequest":
        return self._put_header(CONTENT_TYPE, MULTIPART_FORM_DATA)

    # Parameters

    def add_query_param(self, name: str, value: str) -> "HttpRequest":
        return self.add_query_params(param(name, value))

    def add_query_params(self, parameter: HttpParameter, *parameters: HttpParameter) -> "HttpRequest":
        """Append query parameters, keeping repeated names.

        Raises:
            ValidationError: If a parameter is None
        """
        for p in (parameter, *parameters):
            self._query_params.append(not_null(p, "parameter"))
        return self

    def add_form_param(self, name: str, value: str) -> "HttpRequest":
        return self.add_form_params(param(name, value))

    def add_form_params(self, parameter: HttpParameter, *parameters: HttpParameter) -> "HttpRequest":
        """Append form parameters and mark the request as form-url-encoded.

        Form parameters replace a body previously set with ``set_body``.

        Raises:
            UnsupportedOperationError: If the method does not allow a body
            ValidationError: If a parameter is None
        """
        self._check_body_allowed("body parameters")
        all_parameters = [not_null(p, "parameter") for p in (parameter, *parameters)]

        if self._body is not None:
            logger.warning(f"Form parameters replace the body of {self._method} {self._url}")
            self._body = None

        self._form_params.extend(all_parameters)
        return self.as_form_url_encoded()

    # Body and cookies

    def set_body(self, body: str) -> "HttpRequest":
        """Set the request body.

        A body replaces form parameters previously added.

        Raises:
            UnsupportedOperationError: If the method does not allow a body
            ValidationError: If body is None
        """
        self._check_body_allowed("request body")
        not_null(body, "body")

        if self._form_params:
            logger.warning(f"Body replaces the form parameters of {self._method} {self._url}")
            self._form_params.clear()

        self._body = body
        return self

    def add_cookie(self, cookie: Cookie) -> "HttpRequest":
        """Add a cookie, replacing a previous cookie with the same name.

        Raises:
            ValidationError: If cookie is None
        """
        not_null(cookie, "cookie")
        self._cookies[cookie.name] = cookie
        return self

    def _check_body_allowed(self, what: str) -> None:
        if not self._method.body_allowed:
            raise UnsupportedOperationError(f"Http method {self._method} does not support {what}")

    # Execution

    def execute(self) -> HttpResponse:
        """Execute the request.

        Returns:
            HTTP response

        Raises:
            HttpClientError: If the transport fails for any reason; the
                original error is available as ``cause``
        """
        logger.debug(f"Executing {self._method} {self._url}")
        try:
            return self._transport.do_execute(self)
        except Exception as e:
            logger.debug(f"Request {self._method} {self._url} failed: {e!r}")
            raise HttpClientError(f"Request {self._method} {self._url} failed: {e}") from e

    def execute_json(self) -> HttpResponse:
        """Execute the request with JSON content type and JSON accept headers."""
        return self.as_json().accept_json().execute()

    def execute_xml(self) -> HttpResponse:
        """Execute the request with XML content type and XML accept headers."""
        return self.as_xml().accept_xml().execute()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._method} {self._url})"
