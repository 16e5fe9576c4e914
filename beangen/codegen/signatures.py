"""Method signatures of interface members and the override relation between them."""

import inspect
import typing
from dataclasses import dataclass, field
from typing import Any

from beangen.logger import get_logger

logger = get_logger(__name__)

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


@dataclass(frozen=True)
class MethodSignature:
    """A method declared directly on a class.

    ``parameter_types`` excludes the bound ``self``/``cls`` argument. Members
    without annotations carry ``typing.Any`` in place of a type.
    """

    declaring_type: type
    name: str
    return_type: Any = Any
    parameter_types: tuple[Any, ...] = ()
    is_abstract: bool = False
    variadic: bool = field(default=False, compare=False)

    @property
    def qualified_name(self) -> str:
        return f"{self.declaring_type.__qualname__}.{self.name}"

    @property
    def arity(self) -> int:
        return len(self.parameter_types)

    @classmethod
    def from_member(cls, owner: type, name: str, member: Any) -> "MethodSignature":
        """Build a signature from a class ``__dict__`` entry.

        Args:
            owner: Class declaring the member
            name: Attribute name of the member
            member: Function, staticmethod or classmethod object

        Returns:
            MethodSignature describing the member
        """
        is_abstract = bool(getattr(member, "__isabstractmethod__", False))
        bound = not isinstance(member, staticmethod)
        func = member
        if isinstance(member, (staticmethod, classmethod)):
            func = member.__func__

        hints = _type_hints(func)
        try:
            params = list(inspect.signature(func).parameters.values())
        except (TypeError, ValueError):
            logger.debug("No signature available for %s.%s", owner.__qualname__, name)
            params = []

        if bound and params and params[0].kind in _POSITIONAL:
            params = params[1:]

        variadic = any(
            p.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
            for p in params
        )
        parameter_types = tuple(
            hints.get(p.name, Any)
            for p in params
            if p.kind in _POSITIONAL and p.default is inspect.Parameter.empty
        )

        return cls(
            declaring_type=owner,
            name=name,
            return_type=hints.get("return", Any),
            parameter_types=parameter_types,
            is_abstract=is_abstract,
            variadic=variadic,
        )

    def __str__(self) -> str:
        params = ", ".join(_type_name(t) for t in self.parameter_types)
        return f"{self.qualified_name}({params}) -> {_type_name(self.return_type)}"


def is_function_member(member: Any) -> bool:
    """Whether a class ``__dict__`` entry is a method."""
    return inspect.isfunction(member) or isinstance(member, (staticmethod, classmethod))


def overrides(candidate: MethodSignature, processed: MethodSignature) -> bool:
    """Whether ``candidate`` is equal to, or can be overridden by, ``processed``.

    A method already seen lower in the hierarchy stands in for an equivalent
    declaration on one of its supertypes: the candidate's declaring type must
    be a supertype of (or the same as) the processed one's, the names and
    return types must agree, and the parameter lists must agree when they
    have the same length.
    """
    if candidate.name != processed.name:
        return False
    if not issubclass(processed.declaring_type, candidate.declaring_type):
        return False
    if not same_type(candidate.return_type, processed.return_type):
        return False
    if candidate.arity == processed.arity:
        return all(
            same_type(a, b)
            for a, b in zip(candidate.parameter_types, processed.parameter_types)
        )
    return True


def same_type(first: Any, second: Any) -> bool:
    """Type equality where an unannotated slot matches anything."""
    if first is Any or second is Any:
        return True
    return first == second


def _type_hints(func: Any) -> dict[str, Any]:
    try:
        return typing.get_type_hints(func)
    except (NameError, TypeError, AttributeError) as e:
        # Unresolvable forward references fall back to the raw annotations
        logger.debug("Could not resolve type hints of %r: %s", func, e)
        return dict(getattr(func, "__annotations__", {}) or {})


def _type_name(tp: Any) -> str:
    if tp is Any:
        return "Any"
    return getattr(tp, "__name__", None) or repr(tp)
