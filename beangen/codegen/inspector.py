"""Walks an interface's supertype graph and collects declared methods."""

from abc import ABC
from collections.abc import Iterator

from beangen.codegen.signatures import MethodSignature, is_function_member
from beangen.identity import SupportsIdentity, SupportsIdentityImpl
from beangen.logger import get_logger

logger = get_logger(__name__)

# Types whose members never contribute bean properties
_OPAQUE_TYPES: frozenset[type] = frozenset(
    {object, ABC, SupportsIdentity, SupportsIdentityImpl}
)


class InterfaceInspector:
    """Collects method signatures across an interface hierarchy."""

    def supertypes(self, root: type) -> list[type]:
        """Return ``root`` followed by its transitive bases.

        Types are listed in method resolution order, so every type appears
        once however many paths lead to it, and always ahead of its own bases.

        Args:
            root: Interface to inspect

        Returns:
            Ordered list of types, root first
        """
        return [tp for tp in root.__mro__ if tp not in _OPAQUE_TYPES]

    def methods(self, root: type) -> Iterator[MethodSignature]:
        """Yield every method declared in the hierarchy of ``root``.

        Subtypes are yielded before their bases so that redeclarations are
        seen before the declarations they override.
        """
        for tp in self.supertypes(root):
            yield from self.declared_methods(tp)

    def declared_methods(self, tp: type) -> Iterator[MethodSignature]:
        """Yield the methods declared directly on ``tp``."""
        for name, member in vars(tp).items():
            if name.startswith("__") and name.endswith("__"):
                continue
            if not is_function_member(member):
                continue
            signature = MethodSignature.from_member(tp, name, member)
            logger.debug("Found method %s", signature)
            yield signature
