"""
Embedded server running an ASGI application with uvicorn.
"""

import logging
import threading
import time
from typing import Any

import uvicorn

from embedded_servers.config import STARTUP_POLL_INTERVAL, EmbeddedConfiguration
from embedded_servers.exceptions import EmbeddedServerError
from embedded_servers.servers.embedded_server import AbstractEmbeddedServer

logger = logging.getLogger(__name__)


class ContextPathApp:
    """ASGI application mounted under a context path.

    Requests under the context path reach the application with the context
    path appended to ``root_path``; ``path`` keeps the full request path, as
    uvicorn and Starlette's ``Mount`` do. Other requests get a 404.
    """

    def __init__(self, app: Any, context_path: str):
        self.app = app
        self.context_path = context_path

    def matches(self, path: str) -> bool:
        return path == self.context_path or path.startswith(self.context_path + "/")

    async def __call__(self, scope, receive, send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        if not self.matches(scope["path"]):
            logger.debug(f"Rejecting {scope['path']} outside of {self.context_path}")
            if scope["type"] == "http":
                await send(
                    {
                        "type": "http.response.start",
                        "status": 404,
                        "headers": [(b"content-type", b"text/plain; charset=utf-8")],
                    }
                )
                await send({"type": "http.response.body", "body": b"Not Found"})
            else:
                await send({"type": "websocket.close", "code": 1000})
            return

        scope = dict(scope, root_path=scope.get("root_path", "") + self.context_path)
        await self.app(scope, receive, send)


class UvicornEmbeddedServer(AbstractEmbeddedServer):
    """Serve an ASGI application from a background thread.

    With the default port (0) each start binds a new ephemeral port, read
    back from the listening socket once uvicorn has started. The application
    is mounted under the configured context path.
    """

    def __init__(self, app: Any, configuration: EmbeddedConfiguration | None = None):
        """Initialize server.

        Args:
            app: ASGI application to serve
            configuration: Server configuration, defaults read from the environment
        """
        super().__init__(configuration)
        self.app = app
        self._server: uvicorn.Server | None = None
        self._thread: threading.Thread | None = None
        self._exit: SystemExit | None = None

    def _mounted_app(self) -> Any:
        context_path = self.configuration.path.rstrip("/")
        if not context_path:
            return self.app
        return ContextPathApp(self.app, context_path)

    def _serve(self, server: uvicorn.Server) -> None:
        try:
            server.run()
        except SystemExit as e:
            # uvicorn exits when it cannot bind or start the application
            logger.debug(f"uvicorn exited with code {e.code}")
            self._exit = e

    def _do_start(self) -> None:
        config = uvicorn.Config(
            self._mounted_app(),
            host=self.configuration.host,
            port=self.configuration.port,
            log_level=self.configuration.log_level,
        )
        server = uvicorn.Server(config)
        self._exit = None
        thread = threading.Thread(
            target=self._serve, args=(server,), name="embedded-uvicorn", daemon=True
        )
        thread.start()

        deadline = time.monotonic() + self.configuration.startup_timeout
        while not server.started:
            if not thread.is_alive():
                raise EmbeddedServerError(
                    f"Server failed to start on {self.configuration.host}:{self.configuration.port}"
                ) from self._exit
            if time.monotonic() > deadline:
                server.should_exit = True
                thread.join(self.configuration.shutdown_timeout)
                raise EmbeddedServerError(
                    f"Server did not start within {self.configuration.startup_timeout} seconds"
                )
            time.sleep(STARTUP_POLL_INTERVAL)

        self._server = server
        self._thread = thread

    def _do_stop(self) -> None:
        self._server.should_exit = True
        self._thread.join(self.configuration.shutdown_timeout)
        if self._thread.is_alive():
            raise EmbeddedServerError(
                f"Server did not stop within {self.configuration.shutdown_timeout} seconds"
            )

        self._server = None
        self._thread = None

    def _get_port(self) -> int:
        for listener in self._server.servers:
            for sock in listener.sockets:
                return sock.getsockname()[1]
        return self.configuration.port
