"""
Tests for field injection into test classes.
"""

from typing import Annotated, ClassVar
from unittest.mock import Mock

import pytest

from embedded_servers.config import EmbeddedConfiguration
from embedded_servers.exceptions import ValidationError
from embedded_servers.injection import (
    InjectHttpClient,
    InjectServer,
    ServerConfiguration,
    find_configuration,
    has_injected_fields,
    inject_fields,
    needs_http_client,
    reset_fields,
)
from embedded_servers.utils.reflection import mark


class BaseSuite:
    server: Annotated[object, InjectServer]


class ClientSuite(BaseSuite):
    client: Annotated[object, InjectHttpClient]
    shared_server: ClassVar[Annotated[object, InjectServer]] = None

    @staticmethod
    @mark(ServerConfiguration)
    def configuration():
        return EmbeddedConfiguration(port=8089)


class PlainSuite:
    name: str


class TestInjection:
    """Test inject_fields and reset_fields."""

    def test_inject_fields(self):
        suite = ClientSuite()
        server, client = Mock(), Mock()

        inject_fields(suite, server, client)

        assert suite.server is server
        assert suite.client is client
        assert ClientSuite.shared_server is server

        reset_fields(suite)

        assert suite.server is None
        assert suite.client is None
        assert ClientSuite.shared_server is None

    def test_inherited_fields(self):
        suite = ClientSuite()
        inject_fields(suite, "server")

        assert suite.server == "server"
        assert suite.client is None

        reset_fields(suite)

    def test_has_injected_fields(self):
        assert has_injected_fields(ClientSuite)
        assert has_injected_fields(BaseSuite)
        assert not has_injected_fields(PlainSuite)

    def test_needs_http_client(self):
        assert needs_http_client(ClientSuite)
        assert not needs_http_client(BaseSuite)


class TestFindConfiguration:
    """Test find_configuration."""

    def test_configuration_method(self):
        assert find_configuration(ClientSuite).port == 8089

    def test_no_configuration_method(self):
        assert find_configuration(PlainSuite) is None

    def test_invalid_configuration(self):
        class InvalidSuite:
            @staticmethod
            @mark(ServerConfiguration)
            def configuration():
                return {"port": 8089}

        with pytest.raises(ValidationError, match="must return an EmbeddedConfiguration"):
            find_configuration(InvalidSuite)
