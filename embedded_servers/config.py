"""
Configuration settings for embedded servers and HTTP clients.
"""

import logging
import os

from pydantic import BaseModel, Field, field_validator

# Defaults, overridable through the environment
DEFAULT_HOST = os.environ.get("EMBEDDED_SERVERS_HOST", "127.0.0.1")
DEFAULT_PORT = int(os.environ.get("EMBEDDED_SERVERS_PORT", "0"))
DEFAULT_PATH = os.environ.get("EMBEDDED_SERVERS_PATH", "/")
DEFAULT_LOG_LEVEL = os.environ.get("EMBEDDED_SERVERS_LOG_LEVEL", "warning").lower()

TIMEOUT_CONSTANTS = {
    "startup": float(os.environ.get("EMBEDDED_SERVERS_STARTUP_TIMEOUT", "10")),
    "shutdown": float(os.environ.get("EMBEDDED_SERVERS_SHUTDOWN_TIMEOUT", "10")),
    "client": float(os.environ.get("EMBEDDED_SERVERS_CLIENT_TIMEOUT", "30")),
}

# Interval between two checks of the server state while waiting for startup
STARTUP_POLL_INTERVAL = 0.01

LOG_LEVELS = ("critical", "error", "warning", "info", "debug", "trace")


class EmbeddedConfiguration(BaseModel):
    """Configuration of an embedded server."""

    host: str = Field(default=DEFAULT_HOST, description="Interface the server binds to")
    port: int = Field(default=DEFAULT_PORT, description="Port to bind to, 0 for an ephemeral port")
    path: str = Field(default=DEFAULT_PATH, description="Context path the application is mounted under")
    startup_timeout: float = Field(
        default=TIMEOUT_CONSTANTS["startup"], description="Seconds to wait for server startup"
    )
    shutdown_timeout: float = Field(
        default=TIMEOUT_CONSTANTS["shutdown"], description="Seconds to wait for server shutdown"
    )
    client_timeout: float = Field(
        default=TIMEOUT_CONSTANTS["client"], description="HTTP client timeout in seconds"
    )
    log_level: str = Field(default=DEFAULT_LOG_LEVEL, description="Server log level")

    model_config = {"frozen": True}

    @field_validator("port")
    @classmethod
    def check_port(cls, value: int) -> int:
        if not 0 <= value <= 65535:
            raise ValueError(f"Port must be between 0 and 65535, got {value}")
        return value

    @field_validator("path")
    @classmethod
    def normalize_path(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith("/"):
            value = "/" + value
        return value

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        value = value.lower()
        if value not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return value

    @classmethod
    def from_env(cls) -> "EmbeddedConfiguration":
        """Build a configuration from the EMBEDDED_SERVERS_* environment variables.

        Returns:
            Configuration read from the current environment
        """
        return cls(
            host=os.environ.get("EMBEDDED_SERVERS_HOST", "127.0.0.1"),
            port=int(os.environ.get("EMBEDDED_SERVERS_PORT", "0")),
            path=os.environ.get("EMBEDDED_SERVERS_PATH", "/"),
            startup_timeout=float(os.environ.get("EMBEDDED_SERVERS_STARTUP_TIMEOUT", "10")),
            shutdown_timeout=float(os.environ.get("EMBEDDED_SERVERS_SHUTDOWN_TIMEOUT", "10")),
            client_timeout=float(os.environ.get("EMBEDDED_SERVERS_CLIENT_TIMEOUT", "30")),
            log_level=os.environ.get("EMBEDDED_SERVERS_LOG_LEVEL", "warning"),
        )


def setup_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Set the level of the embedded_servers logger.

    Args:
        level: Level name, case-insensitive ("trace" maps to DEBUG)
    """
    name = "DEBUG" if level.lower() == "trace" else level.upper()
    logging.getLogger("embedded_servers").setLevel(getattr(logging, name, logging.WARNING))
