"""Infers bean properties from getter and setter declarations."""

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from beangen.codegen.signatures import MethodSignature, overrides, same_type
from beangen.identity import identity_method_names
from beangen.logger import get_logger
from beangen.utils.exceptions import UnsupportedMethodShapeError

logger = get_logger(__name__)


class AccessorKind(str, Enum):
    """Role of an accessor method."""

    GETTER = "getter"
    SETTER = "setter"


# Longest prefixes first; "is" strips two characters, the rest three
_PREFIXES: tuple[tuple[str, AccessorKind], ...] = (
    ("get", AccessorKind.GETTER),
    ("has", AccessorKind.GETTER),
    ("set", AccessorKind.SETTER),
    ("is", AccessorKind.GETTER),
)


def accessor_kind(method_name: str) -> AccessorKind | None:
    """Classify a method name as getter, setter, or neither."""
    for prefix, kind in _PREFIXES:
        if method_name.startswith(prefix):
            return kind
    return None


def property_name(method_name: str) -> str:
    """Derive the property name from an accessor name.

    ``getLabel``, ``get_label``, ``isLabel`` and ``has_label`` all map to
    ``label``. Returns an empty string when nothing follows the prefix.
    """
    for prefix, _ in _PREFIXES:
        if method_name.startswith(prefix):
            rest = method_name[len(prefix):]
            if rest.startswith("_"):
                rest = rest[1:]
            return rest[:1].lower() + rest[1:]
    return ""


def is_bean_method(method_name: str) -> bool:
    return accessor_kind(method_name) is not None and bool(property_name(method_name))


@dataclass(frozen=True)
class Property:
    """A named, typed attribute inferred from accessor declarations.

    ``aliases`` holds further accessors backed by the same value, e.g. an
    ``is_active`` declared next to ``get_active``.
    """

    name: str
    type: Any
    getter: MethodSignature | None = None
    setter: MethodSignature | None = None
    aliases: tuple[MethodSignature, ...] = ()

    @property
    def read_only(self) -> bool:
        return self.setter is None

    @property
    def write_only(self) -> bool:
        return self.getter is None

    def accessors(self) -> list[tuple[MethodSignature, AccessorKind]]:
        """All accessor signatures of the property with their roles."""
        result = []
        if self.getter is not None:
            result.append((self.getter, AccessorKind.GETTER))
        if self.setter is not None:
            result.append((self.setter, AccessorKind.SETTER))
        for alias in self.aliases:
            result.append((alias, accessor_kind(alias.name)))
        return result


@dataclass
class GenerationContext:
    """State of a single generation request.

    Tracks which methods have been turned into properties or recognised as
    already implemented. A fresh context is created for every request.
    """

    interface: type
    processed: list[MethodSignature] = field(default_factory=list)
    properties: dict[str, Property] = field(default_factory=dict)

    @property
    def interface_name(self) -> str:
        return f"{self.interface.__module__}.{self.interface.__qualname__}"

    def is_processed(self, signature: MethodSignature) -> bool:
        return any(overrides(signature, seen) for seen in self.processed)

    def mark_processed(self, signature: MethodSignature) -> None:
        self.processed.append(signature)


class PropertyResolver:
    """Turns abstract accessor declarations into properties."""

    def resolve(
        self,
        methods: Iterable[MethodSignature],
        context: GenerationContext,
    ) -> list[Property]:
        """Resolve the properties declared by ``methods``.

        Args:
            methods: Signatures from the interface hierarchy, subtypes first
            context: Request-scoped generation state

        Returns:
            Properties in declaration order

        Raises:
            UnsupportedMethodShapeError: If an abstract method is not a
                bean-style getter or setter
        """
        identity_methods = identity_method_names()

        for signature in methods:
            if context.is_processed(signature):
                logger.debug("Skipping already processed %s", signature)
                continue

            # never shadow a real implementation
            if not signature.is_abstract:
                context.mark_processed(signature)
                continue

            if signature.name in identity_methods:
                context.mark_processed(signature)
                continue

            self._add_accessor(signature, context)
            context.mark_processed(signature)

        return list(context.properties.values())

    def _add_accessor(
        self, signature: MethodSignature, context: GenerationContext
    ) -> None:
        kind = accessor_kind(signature.name)
        name = property_name(signature.name)
        if kind is None or not name:
            msg = (
                "Non-bean style method found, an implementation cannot be "
                f"generated for it: {signature}"
            )
            raise self._shape_error(msg, signature, context)

        if kind is AccessorKind.SETTER:
            if signature.arity != 1 or signature.variadic:
                msg = (
                    f"Setter {signature} must take exactly one argument, "
                    f"found {signature.arity}"
                )
                raise self._shape_error(msg, signature, context)
            prop_type = signature.parameter_types[0]
        else:
            if signature.arity != 0 or signature.variadic:
                msg = f"Getter {signature} must not take arguments"
                raise self._shape_error(msg, signature, context)
            prop_type = signature.return_type

        existing = context.properties.get(name)
        if existing is None:
            context.properties[name] = Property(
                name=name,
                type=prop_type,
                getter=signature if kind is AccessorKind.GETTER else None,
                setter=signature if kind is AccessorKind.SETTER else None,
            )
            return

        context.properties[name] = self._merge(existing, signature, kind, prop_type)

    def _merge(
        self,
        prop: Property,
        signature: MethodSignature,
        kind: AccessorKind,
        prop_type: Any,
    ) -> Property:
        if not same_type(prop.type, prop_type):
            logger.warning(
                "Conflicting types for property %s: keeping %r, ignoring %r from %s",
                prop.name,
                prop.type,
                prop_type,
                signature.qualified_name,
            )
        elif prop.type is Any:
            prop = replace(prop, type=prop_type)

        current = prop.getter if kind is AccessorKind.GETTER else prop.setter
        if current is None:
            if kind is AccessorKind.GETTER:
                return replace(prop, getter=signature)
            return replace(prop, setter=signature)

        # same name declared again by an unrelated interface
        known = {accessor.name for accessor, _ in prop.accessors()}
        if signature.name in known:
            return prop
        return replace(prop, aliases=(*prop.aliases, signature))

    @staticmethod
    def _shape_error(
        message: str, signature: MethodSignature, context: GenerationContext
    ) -> UnsupportedMethodShapeError:
        return UnsupportedMethodShapeError(
            message,
            interface=context.interface_name,
            method=signature.name,
            declaring_type=signature.declaring_type.__qualname__,
        )
