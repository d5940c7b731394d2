"""
Server lifecycle rule.

A ``ServerRule`` starts an embedded server before a test and stops it after,
whatever the outcome of the test::

    with ServerRule(UvicornEmbeddedServer(app)) as rule:
        client = HttpClient(rule.server)
        ...
"""

from collections.abc import Callable
import functools
import logging
from typing import Any

from embedded_servers.servers.embedded_server import EmbeddedServer

logger = logging.getLogger(__name__)


class ServerRule:
    """Start and stop an embedded server around a test unit.

    The rule owns its server: nothing else should start or stop it. Errors
    raised by the server while starting or stopping propagate unchanged.
    """

    def __init__(self, server: EmbeddedServer):
        """Initialize rule.

        Args:
            server: Embedded server managed by this rule
        """
        self._server = server

    @property
    def server(self) -> EmbeddedServer:
        return self._server

    @property
    def port(self) -> int | None:
        return self._server.port

    @property
    def url(self) -> str:
        return self._server.url

    def before(self) -> None:
        """Hook run before the test unit."""
        self.start()

    def after(self) -> None:
        """Hook run after the test unit, even when it failed."""
        self.stop()

    def start(self) -> None:
        """Start the server, does nothing if it is already started."""
        if self._server.is_started():
            return
        self._server.start()

    def stop(self) -> None:
        """Stop the server, does nothing if it is already stopped."""
        if not self._server.is_started():
            return
        self._server.stop()

    def restart(self) -> None:
        self.stop()
        self.start()

    def is_started(self) -> bool:
        return self._server.is_started()

    def __enter__(self) -> "ServerRule":
        self.before()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        if exc_type is not None:
            logger.info(f"Test failed with {exc_type.__name__}, stopping {self._server!r}")
        self.after()

    def scoped(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Decorate a function so that it runs with the server started.

        Args:
            func: Test function

        Returns:
            Wrapped function starting the server before the call and
            stopping it after
        """

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            with self:
                return func(*args, **kwargs)

        return wrapper

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._server!r})"
