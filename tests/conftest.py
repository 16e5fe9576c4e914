"""Shared pytest fixtures and configuration."""

from collections.abc import Generator

import pytest

from beangen.codegen.inspector import InterfaceInspector
from beangen.codegen.registry import TypeNamespace, TypeRegistry
from beangen.codegen.resolver import GenerationContext, PropertyResolver
from beangen.codegen.synthesizer import ImplementationSynthesizer
from beangen.config import GeneratorConfig


@pytest.fixture
def generator_config() -> GeneratorConfig:
    """Generator configuration with default naming."""
    return GeneratorConfig()


@pytest.fixture
def registry(generator_config: GeneratorConfig) -> Generator[TypeRegistry, None, None]:
    """Fresh registry per test so cached classes never leak between tests."""
    reg = TypeRegistry(config=generator_config, namespace=TypeNamespace())
    yield reg
    reg.clear()


@pytest.fixture
def synthesizer(generator_config: GeneratorConfig) -> ImplementationSynthesizer:
    """Synthesizer using the test configuration."""
    return ImplementationSynthesizer(generator_config)


@pytest.fixture
def resolve():
    """Resolve the properties of an interface into a fresh context."""

    def _resolve(interface: type) -> GenerationContext:
        context = GenerationContext(interface)
        PropertyResolver().resolve(InterfaceInspector().methods(interface), context)
        return context

    return _resolve
