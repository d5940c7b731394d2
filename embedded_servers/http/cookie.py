"""
HTTP cookies.
"""

from dataclasses import dataclass

from embedded_servers.utils.preconditions import not_blank, not_null


@dataclass(frozen=True)
class Cookie:
    """Cookie attached to a request.

    Only name and value are sent to the server; the other attributes are
    kept for tests asserting on them.
    """

    name: str
    value: str
    domain: str | None = None
    path: str | None = None
    secure: bool = False
    http_only: bool = False
    max_age: int | None = None

    def __post_init__(self):
        not_blank(self.name, "name")
        not_null(self.value, "value")

    def to_header_value(self) -> str:
        """Serialize the cookie as a ``name=value`` pair of a Cookie header."""
        return f"{self.name}={self.value}"


def cookie(
    name: str,
    value: str,
    domain: str | None = None,
    path: str | None = None,
    secure: bool = False,
    http_only: bool = False,
    max_age: int | None = None,
) -> Cookie:
    """Create a cookie.

    Raises:
        ValidationError: If name is blank or value is None
    """
    return Cookie(name, value, domain, path, secure, http_only, max_age)
