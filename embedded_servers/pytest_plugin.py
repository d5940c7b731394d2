"""
pytest plugin running tests against an embedded server.

Enable it with ``-p embedded_servers.pytest_plugin`` and provide the ASGI
application to serve as the ``embedded_app`` fixture.
"""

from collections.abc import Generator

import pytest

from embedded_servers.config import DEFAULT_LOG_LEVEL, EmbeddedConfiguration, setup_logging
from embedded_servers.http.client import HttpClient
from embedded_servers.injection import (
    find_configuration,
    has_injected_fields,
    inject_fields,
    needs_http_client,
    reset_fields,
)
from embedded_servers.rules.server_rule import ServerRule
from embedded_servers.servers.embedded_server import EmbeddedServer
from embedded_servers.servers.uvicorn_server import UvicornEmbeddedServer


def pytest_configure(config: pytest.Config) -> None:
    setup_logging(DEFAULT_LOG_LEVEL)


@pytest.fixture
def embedded_configuration(request: pytest.FixtureRequest) -> EmbeddedConfiguration:
    """Server configuration, declared by the test class or read from the environment."""
    if request.cls is not None:
        configuration = find_configuration(request.cls)
        if configuration is not None:
            return configuration
    return EmbeddedConfiguration.from_env()


@pytest.fixture
def server_rule(embedded_app, embedded_configuration) -> Generator[ServerRule, None, None]:
    """Rule holding the embedded server started for the current test."""
    with ServerRule(UvicornEmbeddedServer(embedded_app, embedded_configuration)) as rule:
        yield rule


@pytest.fixture
def embedded_server(server_rule: ServerRule) -> EmbeddedServer:
    """Embedded server started for the current test."""
    return server_rule.server


@pytest.fixture
def http_client(embedded_server: EmbeddedServer) -> Generator[HttpClient, None, None]:
    """HTTP client targeting the embedded server."""
    with HttpClient(embedded_server) as client:
        yield client


@pytest.fixture(autouse=True)
def _inject_embedded_fields(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    instance = request.instance
    if instance is None or not has_injected_fields(type(instance)):
        yield
        return

    server = request.getfixturevalue("embedded_server")
    client = request.getfixturevalue("http_client") if needs_http_client(type(instance)) else None
    inject_fields(instance, server, client)
    yield
    reset_fields(instance)
