"""Runtime generation of bean interface implementations."""

from beangen.codegen.inspector import InterfaceInspector
from beangen.codegen.registry import (
    TypeNamespace,
    TypeRegistry,
    default_registry,
    generate_instance_class,
    new_instance,
    obtain,
)
from beangen.codegen.resolver import GenerationContext, Property, PropertyResolver
from beangen.codegen.signatures import MethodSignature, overrides
from beangen.codegen.synthesizer import GeneratedType, ImplementationSynthesizer
from beangen.codegen.validator import validate

__all__ = [
    "GeneratedType",
    "GenerationContext",
    "ImplementationSynthesizer",
    "InterfaceInspector",
    "MethodSignature",
    "Property",
    "PropertyResolver",
    "TypeNamespace",
    "TypeRegistry",
    "default_registry",
    "generate_instance_class",
    "new_instance",
    "obtain",
    "overrides",
    "validate",
]
