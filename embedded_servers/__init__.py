"""
Embedded servers and HTTP client for testing web applications.
"""

from embedded_servers.config import EmbeddedConfiguration
from embedded_servers.exceptions import (
    EmbeddedServerError,
    EmbeddedServersError,
    HttpClientError,
    UnsupportedOperationError,
    ValidationError,
)
from embedded_servers.http import HttpClient, HttpMethod, HttpRequest, HttpResponse, header
from embedded_servers.rules import ServerRule
from embedded_servers.servers import EmbeddedServer, UvicornEmbeddedServer

__version__ = "0.1.0"

__all__ = [
    "EmbeddedConfiguration",
    "EmbeddedServer",
    "EmbeddedServerError",
    "EmbeddedServersError",
    "HttpClient",
    "HttpClientError",
    "HttpMethod",
    "HttpRequest",
    "HttpResponse",
    "ServerRule",
    "UnsupportedOperationError",
    "UvicornEmbeddedServer",
    "ValidationError",
    "header",
]
