"""
Discovery of marked fields and methods on a class and its ancestors.

A field is a class-level annotation. Fields annotated with ``ClassVar`` are
static. Markers are attached to fields as ``Annotated`` metadata::

    class MyTest:
        server: Annotated[EmbeddedServer, InjectServer]
        client: ClassVar[Annotated[HttpClient, InjectHttpClient]]

and to methods with the ``mark`` decorator.
"""

from collections.abc import Callable
from dataclasses import dataclass
import inspect
import logging
from typing import Annotated, Any, ClassVar, get_args, get_origin

logger = logging.getLogger(__name__)

# Attribute holding the markers attached to a function by ``mark``
MARKERS_ATTRIBUTE = "__embedded_markers__"


@dataclass(frozen=True)
class Field:
    """Class-level annotated attribute."""

    name: str
    owner: type
    annotation: Any
    markers: tuple[Any, ...] = ()
    static: bool = False

    def is_marked_with(self, marker: Any) -> bool:
        return any(m is marker for m in self.markers)


@dataclass(frozen=True)
class Method:
    """Static method or class method declared on a class."""

    name: str
    owner: type
    function: Callable[..., Any]
    markers: tuple[Any, ...] = ()

    def is_marked_with(self, marker: Any) -> bool:
        return any(m is marker for m in self.markers)


def mark(*markers: Any) -> Callable:
    """Attach markers to a function.

    Works on plain functions and on ``staticmethod``/``classmethod`` objects
    whatever the decorator order.
    """

    def decorator(func):
        target = func.__func__ if isinstance(func, (staticmethod, classmethod)) else func
        existing = getattr(target, MARKERS_ATTRIBUTE, ())
        setattr(target, MARKERS_ATTRIBUTE, existing + markers)
        return func

    return decorator


def _hierarchy(klass: type) -> list[type]:
    return [k for k in klass.__mro__ if k is not object]


def _parse_annotation(annotation: Any) -> tuple[Any, tuple[Any, ...], bool]:
    static = False
    if annotation is ClassVar:
        return Any, (), True
    if get_origin(annotation) is ClassVar:
        static = True
        annotation = get_args(annotation)[0]

    markers: tuple[Any, ...] = ()
    if get_origin(annotation) is Annotated:
        markers = tuple(annotation.__metadata__)
        annotation = get_args(annotation)[0]

    return annotation, markers, static


def find_all_fields(klass: type) -> list[Field]:
    """Get all fields declared on a class and its ancestors.

    Fields of the class come first, then those of its parents in MRO order.

    Args:
        klass: Class to inspect

    Returns:
        List of fields
    """
    fields = []
    for owner in _hierarchy(klass):
        try:
            annotations = inspect.get_annotations(owner, eval_str=True)
        except NameError as e:
            # Unresolved forward references cannot carry markers
            logger.debug(f"Cannot resolve annotations of {owner.__name__}: {e}")
            annotations = inspect.get_annotations(owner)
        for name, annotation in annotations.items():
            annotation, markers, static = _parse_annotation(annotation)
            fields.append(Field(name, owner, annotation, markers, static))
    return fields


def find_static_fields(klass: type) -> list[Field]:
    """Get all ``ClassVar`` fields declared on a class and its ancestors."""
    return [f for f in find_all_fields(klass) if f.static]


def find_fields_marked_with(klass: type, marker: Any) -> list[Field]:
    """Get all fields of a class and its ancestors carrying a marker."""
    return [f for f in find_all_fields(klass) if f.is_marked_with(marker)]


def find_static_fields_marked_with(klass: type, marker: Any) -> list[Field]:
    """Get all static fields of a class and its ancestors carrying a marker."""
    return [f for f in find_static_fields(klass) if f.is_marked_with(marker)]


def find_static_methods(klass: type) -> list[Method]:
    """Get all static and class methods declared on a class and its ancestors.

    A method overridden in a subclass is only reported once, for the subclass.
    """
    methods = []
    seen = set()
    for owner in _hierarchy(klass):
        for name, value in vars(owner).items():
            if name in seen or not isinstance(value, (staticmethod, classmethod)):
                continue
            seen.add(name)
            markers = getattr(value.__func__, MARKERS_ATTRIBUTE, ())
            methods.append(Method(name, owner, getattr(klass, name), markers))
    return methods


def find_static_methods_marked_with(klass: type, marker: Any) -> list[Method]:
    """Get all static and class methods of a class and its ancestors carrying a marker."""
    return [m for m in find_static_methods(klass) if m.is_marked_with(marker)]


def setter(instance: Any, field: Field, value: Any) -> None:
    """Set the value of a field.

    Static fields are set on the class that declares them, other fields on
    the instance.
    """
    target = field.owner if field.static else instance
    logger.debug(f"Setting field {field.name} on {target!r}")
    setattr(target, field.name, value)


def getter(target: Any, field: Field) -> Any:
    """Get the value of a field, None if it is not set.

    When target is None the field is read on the class declaring it.
    """
    return getattr(field.owner if target is None else target, field.name, None)


def invoke(method: Method) -> Any:
    """Invoke a static method without arguments."""
    return method.function()
