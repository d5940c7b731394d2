"""
Injection of embedded servers and HTTP clients into test classes.

Fields are selected with markers::

    class TestUsers:
        server: Annotated[EmbeddedServer, InjectServer]
        client: Annotated[HttpClient, InjectHttpClient]

        @staticmethod
        @mark(ServerConfiguration)
        def configuration():
            return EmbeddedConfiguration(port=8080)
"""

import logging
from typing import Any

from embedded_servers.config import EmbeddedConfiguration
from embedded_servers.exceptions import ValidationError
from embedded_servers.utils.reflection import (
    find_fields_marked_with,
    find_static_methods_marked_with,
    invoke,
    setter,
)

logger = logging.getLogger(__name__)


class Marker:
    """Marker attached to fields or methods."""

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return self.name


# Field receiving the embedded server
InjectServer = Marker("InjectServer")

# Field receiving the HTTP client
InjectHttpClient = Marker("InjectHttpClient")

# Static method returning the server configuration
ServerConfiguration = Marker("ServerConfiguration")


def find_configuration(klass: type) -> EmbeddedConfiguration | None:
    """Get the configuration declared by a test class.

    Args:
        klass: Test class

    Returns:
        Result of the static method marked with ``ServerConfiguration``,
        None if the class has no such method

    Raises:
        ValidationError: If the method does not return an EmbeddedConfiguration
    """
    methods = find_static_methods_marked_with(klass, ServerConfiguration)
    if not methods:
        return None

    if len(methods) > 1:
        logger.warning(
            f"{klass.__name__} has several configuration methods, using {methods[0].name}"
        )

    configuration = invoke(methods[0])
    if not isinstance(configuration, EmbeddedConfiguration):
        raise ValidationError(
            f"{klass.__name__}.{methods[0].name} must return an EmbeddedConfiguration, "
            f"got {type(configuration).__name__}"
        )
    return configuration


def has_injected_fields(klass: type) -> bool:
    return bool(
        find_fields_marked_with(klass, InjectServer)
        or find_fields_marked_with(klass, InjectHttpClient)
    )


def needs_http_client(klass: type) -> bool:
    return bool(find_fields_marked_with(klass, InjectHttpClient))


def inject_fields(instance: Any, server: Any, client: Any = None) -> None:
    """Set the marked fields of a test instance.

    Args:
        instance: Test instance
        server: Value of fields marked with ``InjectServer``
        client: Value of fields marked with ``InjectHttpClient``
    """
    klass = type(instance)
    for field in find_fields_marked_with(klass, InjectServer):
        setter(instance, field, server)
    for field in find_fields_marked_with(klass, InjectHttpClient):
        setter(instance, field, client)


def reset_fields(instance: Any) -> None:
    """Reset the marked fields of a test instance to None."""
    inject_fields(instance, None, None)
