"""
Query and form parameters.
"""

from dataclasses import dataclass

from embedded_servers.utils.preconditions import not_blank, not_null


@dataclass(frozen=True)
class HttpParameter:
    """Name/value pair sent as a query or form parameter, without encoding."""

    name: str
    value: str

    def __post_init__(self):
        not_blank(self.name, "name")
        not_null(self.value, "value")


def param(name: str, value: str) -> HttpParameter:
    """Create a parameter.

    Raises:
        ValidationError: If name is blank or value is None
    """
    return HttpParameter(name, value)
