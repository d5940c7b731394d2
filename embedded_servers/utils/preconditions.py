"""
Argument checks shared by the HTTP model and the request builder.
"""

from collections.abc import Sized
from typing import TypeVar

from embedded_servers.exceptions import ValidationError

T = TypeVar("T")
S = TypeVar("S", bound=Sized)


def not_null(value: T | None, name: str) -> T:
    """Ensure that a value is not None.

    Args:
        value: Value to check
        name: Argument name, used in the error message

    Returns:
        The value itself

    Raises:
        ValidationError: If value is None
    """
    if value is None:
        raise ValidationError(f"{name} must not be None")
    return value


def not_blank(value: str | None, name: str) -> str:
    """Ensure that a string is neither None nor made of whitespace only.

    Args:
        value: String to check
        name: Argument name, used in the error message

    Returns:
        The string itself, unchanged

    Raises:
        ValidationError: If value is None, empty or blank
    """
    not_null(value, name)
    if not value.strip():
        raise ValidationError(f"{name} must not be blank")
    return value


def not_empty(value: S | None, name: str) -> S:
    """Ensure that a collection is neither None nor empty.

    Raises:
        ValidationError: If value is None or empty
    """
    not_null(value, name)
    if len(value) == 0:
        raise ValidationError(f"{name} must not be empty")
    return value
