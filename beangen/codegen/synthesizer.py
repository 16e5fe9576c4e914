"""Builds concrete implementation classes for bean-style interfaces.

The generated class subclasses the interface, stores every property in a
backing attribute, implements the abstract getters and setters over those
attributes and satisfies :class:`~beangen.identity.SupportsIdentity`, either
through the interface's own implementation or through an injected
:class:`~beangen.identity.SupportsIdentityImpl` delegate. Equality, hashing
and the string form of an instance depend on its identity key only.
"""

import inspect
from collections.abc import Callable
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from beangen.codegen.resolver import AccessorKind, GenerationContext, Property
from beangen.codegen.signatures import MethodSignature
from beangen.config import GeneratorConfig, get_settings
from beangen.identity import (
    GET_IDENTITY,
    SET_IDENTITY,
    IdentityKey,
    SupportsIdentity,
    SupportsIdentityImpl,
)
from beangen.logger import get_logger
from beangen.utils.exceptions import SynthesisError

logger = get_logger(__name__)

IDENTITY_FIELD = "_identity_support"


@dataclass(frozen=True)
class GeneratedType:
    """A synthesized implementation and what went into it."""

    source: type
    cls: type
    properties: tuple[Property, ...]
    fields: dict[str, str] = field(default_factory=dict)
    identity_injected: bool = False

    @property
    def cache_key(self) -> str:
        return interface_key(self.source)

    @property
    def type_name(self) -> str:
        return self.cls.__qualname__

    @property
    def qualified_name(self) -> str:
        return f"{self.cls.__module__}.{self.cls.__qualname__}"

    def property_names(self) -> list[str]:
        return [prop.name for prop in self.properties]


def interface_key(interface: type) -> str:
    """Dotted name of an interface; distinct classes may share it."""
    return f"{interface.__module__}.{interface.__qualname__}"


def is_implemented(cls: type, name: str) -> bool:
    """Whether ``cls`` resolves ``name`` to a concrete (non-abstract) attribute."""
    member = inspect.getattr_static(cls, name, None)
    if member is None:
        return False
    return not getattr(member, "__isabstractmethod__", False)


class ImplementationSynthesizer:
    """Creates implementation classes from resolved properties."""

    def __init__(self, config: GeneratorConfig | None = None) -> None:
        self.config = config or get_settings().generator

    def type_name(self, interface: type) -> str:
        """Class name for the implementation of ``interface``.

        Nested and function-local interfaces keep their enclosing names. The
        registry adds a numeric suffix when two interfaces still collide.
        """
        parts = [p for p in interface.__qualname__.split(".") if p != "<locals>"]
        return f"{'_'.join(parts)}{self.config.impl_suffix}"

    def module_name(self, interface: type) -> str:
        return f"{interface.__module__}.{self.config.namespace_suffix}"

    def synthesize(self, context: GenerationContext) -> GeneratedType:
        """Build the implementation class for ``context.interface``.

        Args:
            context: Generation state holding the interface and its properties

        Returns:
            GeneratedType wrapping the new class

        Raises:
            SynthesisError: If the class cannot be constructed
        """
        root = context.interface
        type_name = self.type_name(root)
        properties = tuple(context.properties.values())

        namespace: dict[str, Any] = {
            "__module__": self.module_name(root),
            "__qualname__": type_name,
            "__doc__": f"Generated implementation of {root.__qualname__}.",
        }

        fields: dict[str, str] = {}
        for prop in properties:
            required = [
                (signature, kind)
                for signature, kind in prop.accessors()
                if not is_implemented(root, signature.name)
            ]
            if not required:
                logger.debug("Property %s already implemented by %s", prop.name, root)
                continue

            attr = f"{self.config.field_prefix}{prop.name}"
            fields[prop.name] = attr
            for signature, kind in required:
                if kind is AccessorKind.GETTER:
                    accessor = _make_getter(type_name, signature, attr, prop.type)
                else:
                    accessor = _make_setter(type_name, signature, attr, prop.type)
                namespace[signature.name] = accessor

        identity_accessors = (
            (GET_IDENTITY, _make_identity_getter),
            (SET_IDENTITY, _make_identity_setter),
        )
        # Both accessors come from the same holder or neither does
        identity_injected = not all(
            is_implemented(root, name) for name, _ in identity_accessors
        )
        if identity_injected:
            for name, factory in identity_accessors:
                if is_implemented(root, name):
                    logger.warning(
                        "%s implements only part of the identity capability, "
                        "replacing %s with the injected holder",
                        root.__qualname__,
                        name,
                    )
                namespace[name] = _named(factory(), type_name, name)

        namespace["__eq__"] = _named(_make_eq(), type_name, "__eq__")
        namespace["__hash__"] = _named(_make_hash(), type_name, "__hash__")
        namespace["__bean_source__"] = root
        namespace["__bean_properties__"] = MappingProxyType({p.name: p for p in properties})
        namespace["__bean_fields__"] = MappingProxyType(dict(fields))

        bases: tuple[type, ...] = (root,)
        if not issubclass(root, SupportsIdentity):
            bases = (root, SupportsIdentity)

        try:
            cls = type(root)(type_name, bases, namespace)
            cls.__init__ = _named(
                _make_init(cls, tuple(fields.values()), identity_injected),
                type_name,
                "__init__",
            )
            cls.__str__ = _named(_make_str(cls), type_name, "__str__")
        except (TypeError, ValueError, AttributeError) as e:
            logger.exception("Failed to synthesize %s", type_name)
            msg = f"Could not build implementation of {root.__qualname__}: {e}"
            raise SynthesisError(
                msg, interface=interface_key(root), type_name=type_name
            ) from e

        logger.debug(
            "Synthesized %s with fields %s (identity injected: %s)",
            type_name,
            sorted(fields),
            identity_injected,
        )
        return GeneratedType(
            source=root,
            cls=cls,
            properties=properties,
            fields=fields,
            identity_injected=identity_injected,
        )


def _named(func: Callable, type_name: str, name: str) -> Callable:
    func.__name__ = name
    func.__qualname__ = f"{type_name}.{name}"
    return func


def _make_getter(
    type_name: str, signature: MethodSignature, attr: str, prop_type: Any
) -> Callable:
    def getter(self):
        return getattr(self, attr, None)

    getter.__doc__ = f"Return the value stored in ``{attr}``."
    getter.__annotations__ = {"return": prop_type}
    return _named(getter, type_name, signature.name)


def _make_setter(
    type_name: str, signature: MethodSignature, attr: str, prop_type: Any
) -> Callable:
    def setter(self, value):
        setattr(self, attr, value)

    setter.__doc__ = f"Replace the value stored in ``{attr}``."
    setter.__annotations__ = {"value": prop_type, "return": None}
    return _named(setter, type_name, signature.name)


def _make_identity_getter() -> Callable:
    def get_identity(self) -> IdentityKey | None:
        return getattr(self, IDENTITY_FIELD).get_identity()

    return get_identity


def _make_identity_setter() -> Callable:
    def set_identity(self, key: IdentityKey | None) -> None:
        getattr(self, IDENTITY_FIELD).set_identity(key)

    return set_identity


def _make_init(cls: type, attrs: tuple[str, ...], inject_identity: bool) -> Callable:
    # Fields exist before the interface's own __init__ runs so it may use accessors
    def __init__(self):
        for attr in attrs:
            setattr(self, attr, None)
        if inject_identity:
            setattr(self, IDENTITY_FIELD, SupportsIdentityImpl())
        super(cls, self).__init__()

    return __init__


def _make_eq() -> Callable:
    def __eq__(self, other):
        if other is self:
            return True
        if not isinstance(other, SupportsIdentity):
            return False
        if not isinstance(other, type(self)):
            return NotImplemented
        key = self.get_identity()
        if key is None:
            # unset identity: equal only to itself
            return False
        return key == other.get_identity()

    return __eq__


def _make_hash() -> Callable:
    def __hash__(self):
        key = self.get_identity()
        return hash(key) if key is not None else 0

    return __hash__


def _make_str(cls: type) -> Callable:
    def __str__(self):
        key = self.get_identity()
        if key is not None:
            return str(key)
        return super(cls, self).__str__()

    return __str__

