"""
Exceptions raised by embedded-servers.
"""


class EmbeddedServersError(Exception):
    """Base exception for embedded-servers errors."""

    pass


class ValidationError(EmbeddedServersError, ValueError):
    """Raised when a required argument is None, blank or empty."""

    pass


class UnsupportedOperationError(EmbeddedServersError):
    """Raised when an operation is not compatible with the request's HTTP method."""

    pass


class HttpClientError(EmbeddedServersError):
    """Raised when the execution of an HTTP request fails.

    The original error is chained and available through ``cause``.
    """

    @property
    def cause(self) -> BaseException | None:
        """Original error raised by the transport."""
        return self.__cause__


class EmbeddedServerError(EmbeddedServersError):
    """Raised when an embedded server cannot be started or stopped."""

    pass
