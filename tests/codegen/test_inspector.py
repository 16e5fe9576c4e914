"""Tests for the interface inspector."""

from abc import abstractmethod

from beangen.codegen.inspector import InterfaceInspector
from beangen.identity import SupportsIdentity


class Root(SupportsIdentity):
    @abstractmethod
    def get_name(self) -> str: ...


class Left(Root):
    @abstractmethod
    def get_left(self) -> int: ...


class Right(Root):
    @abstractmethod
    def get_right(self) -> int: ...


class Diamond(Left, Right):
    """Inherits Root along two paths."""

    CONSTANT = 3

    @abstractmethod
    def set_name(self, name: str) -> None: ...

    def describe(self) -> str:
        return "diamond"


class Lonely(SupportsIdentity):
    @abstractmethod
    def get_only(self) -> str: ...


class TestInterfaceInspector:
    """Tests for InterfaceInspector."""

    def test_supertypes_visit_each_type_once(self) -> None:
        """Test that diamond inheritance does not revisit types."""
        types = InterfaceInspector().supertypes(Diamond)
        assert types == [Diamond, Left, Right, Root]

    def test_supertypes_skip_capability_and_object(self) -> None:
        """Test that object, ABC and the identity capability are not inspected."""
        types = InterfaceInspector().supertypes(Lonely)
        assert types == [Lonely]

    def test_methods_cover_hierarchy(self) -> None:
        """Test that methods of all supertypes are yielded."""
        names = [sig.name for sig in InterfaceInspector().methods(Diamond)]
        assert names == ["set_name", "describe", "get_left", "get_right", "get_name"]

    def test_methods_ignore_attributes_and_dunders(self) -> None:
        """Test that plain attributes and dunder methods are skipped."""
        names = {sig.name for sig in InterfaceInspector().methods(Diamond)}
        assert "CONSTANT" not in names
        assert "__init__" not in names
        assert "__subclasshook__" not in names

    def test_declaring_type_recorded(self) -> None:
        """Test that signatures know where they are declared."""
        by_name = {sig.name: sig for sig in InterfaceInspector().methods(Diamond)}
        assert by_name["get_name"].declaring_type is Root
        assert by_name["describe"].declaring_type is Diamond
        assert not by_name["describe"].is_abstract

    def test_no_supertypes(self) -> None:
        """Test an interface without bean supertypes."""
        sigs = list(InterfaceInspector().methods(Lonely))
        assert [s.name for s in sigs] == ["get_only"]
