"""Identity capability required of every generated bean implementation.

An object supports identity when it can report and accept an opaque
:class:`IdentityKey`. Generated implementations derive equality, hashing and
their string form from that key alone.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

GET_IDENTITY = "get_identity"
SET_IDENTITY = "set_identity"


@dataclass(frozen=True)
class IdentityKey:
    """Opaque key identifying a bean instance."""

    value: Any

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class UriKey(IdentityKey):
    """Key of a named resource."""


@dataclass(frozen=True)
class BNodeKey(IdentityKey):
    """Key of an anonymous node."""


class SupportsIdentity(ABC):
    """Capability of holding an identity key."""

    @abstractmethod
    def get_identity(self) -> IdentityKey | None:
        """Return the identity key, or None when unset."""

    @abstractmethod
    def set_identity(self, key: IdentityKey | None) -> None:
        """Replace the identity key."""


class SupportsIdentityImpl(SupportsIdentity):
    """Default identity holder; starts with no key."""

    def __init__(self, key: IdentityKey | None = None) -> None:
        self._key = key

    def get_identity(self) -> IdentityKey | None:
        return self._key

    def set_identity(self, key: IdentityKey | None) -> None:
        self._key = key


def identity_method_names() -> frozenset[str]:
    """Names of the accessors that make up the identity capability."""
    return frozenset({GET_IDENTITY, SET_IDENTITY})
