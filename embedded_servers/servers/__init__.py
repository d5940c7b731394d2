"""
Embedded servers that can be started and stopped around tests.
"""

from embedded_servers.servers.embedded_server import AbstractEmbeddedServer, EmbeddedServer
from embedded_servers.servers.uvicorn_server import UvicornEmbeddedServer

__all__ = ["AbstractEmbeddedServer", "EmbeddedServer", "UvicornEmbeddedServer"]
