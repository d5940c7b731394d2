"""
HTTP methods.
"""

from enum import Enum


class HttpMethod(Enum):
    """HTTP method, with a flag telling whether a request body is allowed."""

    GET = ("GET", False)
    HEAD = ("HEAD", False)
    OPTIONS = ("OPTIONS", False)
    DELETE = ("DELETE", False)
    POST = ("POST", True)
    PUT = ("PUT", True)
    PATCH = ("PATCH", True)

    def __init__(self, verb: str, body_allowed: bool):
        self.verb = verb
        self.body_allowed = body_allowed

    def __str__(self) -> str:
        return self.verb

    @classmethod
    def of(cls, verb: str) -> "HttpMethod":
        """Get the method matching a verb, ignoring case.

        Raises:
            ValueError: If the verb is not a known HTTP method
        """
        try:
            return cls[verb.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown HTTP method: {verb}") from None
