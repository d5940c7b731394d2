"""
Embedded server capability.
"""

from abc import ABC, abstractmethod
import logging

from embedded_servers.config import EmbeddedConfiguration

logger = logging.getLogger(__name__)


class EmbeddedServer(ABC):
    """Server that can be started and stopped from test code."""

    @abstractmethod
    def start(self) -> None:
        pass

    @abstractmethod
    def stop(self) -> None:
        pass

    @abstractmethod
    def restart(self) -> None:
        pass

    @abstractmethod
    def is_started(self) -> bool:
        pass

    @property
    @abstractmethod
    def port(self) -> int | None:
        """Port the server listens on, None when the server is stopped."""
        pass

    @property
    @abstractmethod
    def url(self) -> str:
        """Base URL of the server, including its context path."""
        pass


class AbstractEmbeddedServer(EmbeddedServer):
    """Base class implementing the started/stopped state machine.

    ``start`` and ``stop`` are idempotent: subclasses only implement a single
    clean start in ``_do_start`` and a single clean stop in ``_do_stop``.
    Errors raised by these hooks propagate unchanged and leave the state as
    it was.
    """

    def __init__(self, configuration: EmbeddedConfiguration | None = None):
        self.configuration = configuration or EmbeddedConfiguration()
        self._started = False

    def start(self) -> None:
        if self._started:
            logger.debug(f"{self!r} already started")
            return

        logger.info(f"Starting {self!r}")
        self._do_start()
        self._started = True
        logger.info(f"{self!r} started on port {self.port}")

    def stop(self) -> None:
        if not self._started:
            logger.debug(f"{self!r} already stopped")
            return

        logger.info(f"Stopping {self!r}")
        self._do_stop()
        self._started = False
        logger.info(f"{self!r} stopped")

    def restart(self) -> None:
        self.stop()
        self.start()

    def is_started(self) -> bool:
        return self._started

    @property
    def port(self) -> int | None:
        return self._get_port() if self._started else None

    @property
    def url(self) -> str:
        return f"http://{self.configuration.host}:{self.port}{self.configuration.path}"

    @abstractmethod
    def _do_start(self) -> None:
        pass

    @abstractmethod
    def _do_stop(self) -> None:
        pass

    @abstractmethod
    def _get_port(self) -> int:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.configuration.host}:{self.configuration.port})"
