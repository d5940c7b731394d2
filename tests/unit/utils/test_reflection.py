"""
Tests for marker-based field and method discovery.
"""

from typing import Annotated, ClassVar

from embedded_servers.utils.reflection import (
    find_all_fields,
    find_fields_marked_with,
    find_static_fields,
    find_static_fields_marked_with,
    find_static_methods,
    find_static_methods_marked_with,
    getter,
    invoke,
    mark,
    setter,
)

FOO = object()
BAR = object()


class Parent:
    parent_field: Annotated[str, FOO]
    parent_static: ClassVar[Annotated[str, FOO]] = "parent"
    plain: int

    @staticmethod
    @mark(BAR)
    def parent_static_method():
        return "parent"

    def instance_method(self):
        return "instance"


class Child(Parent):
    child_field: Annotated[str, FOO, BAR]
    child_static: ClassVar[int] = 1

    @mark(FOO)
    @classmethod
    def child_class_method(cls):
        return cls.__name__

    @staticmethod
    def unmarked():
        return None


class TestFields:
    """Test field discovery."""

    def test_find_all_fields(self):
        fields = find_all_fields(Child)

        assert [f.name for f in fields] == [
            "child_field",
            "child_static",
            "parent_field",
            "parent_static",
            "plain",
        ]
        assert fields[0].owner is Child
        assert fields[0].annotation is str
        assert fields[2].owner is Parent

    def test_find_static_fields(self):
        assert [f.name for f in find_static_fields(Child)] == ["child_static", "parent_static"]

    def test_find_fields_marked_with(self):
        assert [f.name for f in find_fields_marked_with(Child, FOO)] == [
            "child_field",
            "parent_field",
            "parent_static",
        ]
        assert [f.name for f in find_fields_marked_with(Child, BAR)] == ["child_field"]

    def test_find_static_fields_marked_with(self):
        assert [f.name for f in find_static_fields_marked_with(Child, FOO)] == ["parent_static"]

    def test_class_without_annotations(self):
        class Empty:
            pass

        assert find_all_fields(Empty) == []


class TestMethods:
    """Test static method discovery."""

    def test_find_static_methods(self):
        names = [m.name for m in find_static_methods(Child)]

        assert names == ["child_class_method", "unmarked", "parent_static_method"]

    def test_find_static_methods_marked_with(self):
        assert [m.name for m in find_static_methods_marked_with(Child, BAR)] == [
            "parent_static_method"
        ]
        assert [m.name for m in find_static_methods_marked_with(Child, FOO)] == [
            "child_class_method"
        ]

    def test_invoke(self):
        method = find_static_methods_marked_with(Child, FOO)[0]

        assert invoke(method) == "Child"

    def test_overridden_method_is_reported_once(self):
        class Override(Child):
            @staticmethod
            def unmarked():
                return "override"

        methods = [m for m in find_static_methods(Override) if m.name == "unmarked"]

        assert len(methods) == 1
        assert methods[0].owner is Override
        assert invoke(methods[0]) == "override"


class TestAccessors:
    """Test setter and getter."""

    def test_instance_field(self):
        instance = Child()
        field = find_fields_marked_with(Child, BAR)[0]

        setter(instance, field, "value")

        assert instance.child_field == "value"
        assert getter(instance, field) == "value"

    def test_static_field(self):
        class Holder:
            value: ClassVar[Annotated[str, FOO]] = "initial"

        field = find_static_fields(Holder)[0]
        setter(Holder(), field, "changed")

        assert Holder.value == "changed"
        assert getter(None, field) == "changed"

    def test_getter_unset_field(self):
        field = find_fields_marked_with(Child, BAR)[0]

        assert getter(Child(), field) is None
