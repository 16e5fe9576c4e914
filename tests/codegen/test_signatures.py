"""Tests for method signatures and the override relation."""

from abc import ABC, abstractmethod
from typing import Any

from beangen.codegen.signatures import (
    MethodSignature,
    is_function_member,
    overrides,
    same_type,
)


class Named(ABC):
    @abstractmethod
    def get_name(self) -> str: ...

    @abstractmethod
    def set_name(self, name: str) -> None: ...


class Person(Named):
    @abstractmethod
    def get_name(self) -> str: ...

    def greet(self, other: "Person", loud: bool = False) -> str:
        return f"hi {other}"


class Untyped(ABC):
    @abstractmethod
    def get_name(self): ...


class Unrelated(ABC):
    @abstractmethod
    def get_name(self) -> str: ...


class Tools:
    @staticmethod
    def make(value: int) -> int:
        return value

    @classmethod
    def build(cls, value: str) -> str:
        return value


def _sig(owner: type, name: str) -> MethodSignature:
    return MethodSignature.from_member(owner, name, vars(owner)[name])


class TestMethodSignature:
    """Tests for building signatures from class members."""

    def test_getter_signature(self) -> None:
        """Test an abstract getter."""
        sig = _sig(Named, "get_name")
        assert sig.declaring_type is Named
        assert sig.name == "get_name"
        assert sig.return_type is str
        assert sig.parameter_types == ()
        assert sig.is_abstract

    def test_setter_signature_excludes_self(self) -> None:
        """Test that the bound argument is not a parameter."""
        sig = _sig(Named, "set_name")
        assert sig.parameter_types == (str,)
        assert sig.return_type is type(None)
        assert sig.arity == 1

    def test_concrete_method_with_forward_reference(self) -> None:
        """Test forward references and defaulted parameters."""
        sig = _sig(Person, "greet")
        assert not sig.is_abstract
        assert sig.parameter_types == (Person,)
        assert sig.return_type is str

    def test_unannotated_is_any(self) -> None:
        """Test that missing annotations become Any."""
        sig = _sig(Untyped, "get_name")
        assert sig.return_type is Any

    def test_static_and_class_methods(self) -> None:
        """Test unwrapping of staticmethod and classmethod."""
        static = _sig(Tools, "make")
        assert static.parameter_types == (int,)
        klass = _sig(Tools, "build")
        assert klass.parameter_types == (str,)

    def test_str(self) -> None:
        """Test readable rendering."""
        assert str(_sig(Named, "set_name")) == "Named.set_name(str) -> NoneType"

    def test_is_function_member(self) -> None:
        """Test recognition of method-like members."""
        assert is_function_member(vars(Tools)["make"])
        assert is_function_member(vars(Tools)["build"])
        assert is_function_member(vars(Named)["get_name"])
        assert not is_function_member(42)
        assert not is_function_member(property(lambda self: 1))


class TestOverrides:
    """Tests for the overridable-signature relation."""

    def test_subtype_redeclaration_overrides(self) -> None:
        """Test that a subtype redeclaration stands in for the base one."""
        base = _sig(Named, "get_name")
        sub = _sig(Person, "get_name")
        assert overrides(base, sub)

    def test_relation_is_directional(self) -> None:
        """Test that a base declaration does not override a subtype's."""
        base = _sig(Named, "get_name")
        sub = _sig(Person, "get_name")
        assert not overrides(sub, base)

    def test_same_signature_overrides_itself(self) -> None:
        """Test reflexivity."""
        sig = _sig(Named, "get_name")
        assert overrides(sig, sig)

    def test_unrelated_types_do_not_override(self) -> None:
        """Test that unrelated declaring types never match."""
        assert not overrides(_sig(Unrelated, "get_name"), _sig(Person, "get_name"))

    def test_name_mismatch(self) -> None:
        """Test that different names never match."""
        assert not overrides(_sig(Named, "get_name"), _sig(Named, "set_name"))

    def test_return_type_mismatch(self) -> None:
        """Test that differing return types do not match."""
        base = _sig(Named, "get_name")
        other = MethodSignature(Person, "get_name", return_type=int)
        assert not overrides(base, other)

    def test_parameter_mismatch(self) -> None:
        """Test that differing parameter types of equal arity do not match."""
        base = _sig(Named, "set_name")
        other = MethodSignature(Person, "set_name", type(None), (int,))
        assert not overrides(base, other)

    def test_untyped_matches_typed(self) -> None:
        """Test that unannotated declarations match annotated ones."""
        base = _sig(Named, "get_name")
        other = MethodSignature(Person, "get_name")
        assert overrides(base, other)


class TestSameType:
    """Tests for type comparison."""

    def test_any_is_wildcard(self) -> None:
        """Test Any on either side."""
        assert same_type(Any, int)
        assert same_type(str, Any)

    def test_plain_types(self) -> None:
        """Test plain equality."""
        assert same_type(int, int)
        assert not same_type(int, str)
        assert same_type(list[int], list[int])
