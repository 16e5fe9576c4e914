"""Generate implementations of bean-style interfaces at runtime."""

from beangen.codegen import (
    GeneratedType,
    TypeRegistry,
    default_registry,
    generate_instance_class,
    new_instance,
    obtain,
)
from beangen.identity import (
    BNodeKey,
    IdentityKey,
    SupportsIdentity,
    SupportsIdentityImpl,
    UriKey,
)

__version__ = "0.1.0"

__all__ = [
    "BNodeKey",
    "GeneratedType",
    "IdentityKey",
    "SupportsIdentity",
    "SupportsIdentityImpl",
    "TypeRegistry",
    "UriKey",
    "default_registry",
    "generate_instance_class",
    "new_instance",
    "obtain",
]
