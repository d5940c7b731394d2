"""
Case-insensitive, multi-valued HTTP header.
"""

from collections.abc import Iterable

from embedded_servers.utils.preconditions import not_blank, not_empty, not_null


class HttpHeader:
    """HTTP header: a name and a non-empty, ordered list of values.

    Headers are immutable and compared by name, ignoring case, and values,
    in order. Use ``header`` to create one.
    """

    __slots__ = ("_name", "_values")

    def __init__(self, name: str, values: Iterable[str]):
        self._name = not_blank(name, "name")
        values = tuple(not_null(values, "values"))
        for value in not_empty(values, "values"):
            not_null(value, "value")
        self._values = values

    @property
    def name(self) -> str:
        return self._name

    @property
    def values(self) -> tuple[str, ...]:
        return self._values

    def get_first_value(self) -> str:
        return self._values[0]

    def get_last_value(self) -> str:
        """Get the last value; same as the first one for single-valued headers."""
        return self._values[-1]

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if isinstance(other, HttpHeader):
            return self._name.lower() == other._name.lower() and self._values == other._values
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._name.lower(), self._values))

    def __repr__(self) -> str:
        return f"{type(self).__name__} {{{self._name} = {list(self._values)}}}"


def header(name: str, values: str | Iterable[str]) -> HttpHeader:
    """Create a header.

    Args:
        name: Header name, must not be blank
        values: Single value, or iterable of values that must not be empty
            nor contain None

    Returns:
        New header

    Raises:
        ValidationError: If name is blank, values is empty or a value is None
    """
    if values is None or isinstance(values, str):
        values = [not_null(values, "value")]
    return HttpHeader(name, values)
