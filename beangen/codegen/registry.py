"""Process-wide registry of generated implementation classes."""

import sys
import threading
from types import ModuleType
from typing import ClassVar, TypeVar

from beangen.codegen.inspector import InterfaceInspector
from beangen.codegen.resolver import GenerationContext, PropertyResolver
from beangen.codegen.synthesizer import (
    GeneratedType,
    ImplementationSynthesizer,
    interface_key,
)
from beangen.codegen.validator import validate
from beangen.config import GeneratorConfig, get_settings
from beangen.identity import SupportsIdentity
from beangen.logger import get_logger
from beangen.utils.exceptions import (
    BeanGenError,
    MissingIdentityCapabilityError,
    RegistryInconsistencyError,
)

logger = get_logger(__name__)

T = TypeVar("T")


class TypeNamespace:
    """Modules holding generated classes, addressable by qualified name.

    Every generated class is published as an attribute of a module named
    after its ``__module__``. With ``install`` enabled those modules are also
    registered in ``sys.modules`` (never replacing an existing entry) so
    instances of generated classes can be pickled.
    """

    def __init__(self, install: bool = False) -> None:
        self.install = install
        self._modules: dict[str, ModuleType] = {}
        self._lock = threading.Lock()

    def define(self, cls: type, unique: bool = False) -> str:
        """Publish ``cls`` and return its qualified name.

        Args:
            cls: Class to publish under its ``__module__`` and ``__qualname__``
            unique: Rename ``cls`` with a numeric suffix instead of replacing
                a different class already published under the same name

        Returns:
            Qualified name the class is published under
        """
        with self._lock:
            module = self._modules.get(cls.__module__)
            if module is None:
                module = ModuleType(cls.__module__, "Generated bean implementations.")
                self._modules[cls.__module__] = module
                if self.install and cls.__module__ not in sys.modules:
                    sys.modules[cls.__module__] = module
            if unique:
                _rename_if_taken(module, cls)
            setattr(module, cls.__qualname__, cls)
        return f"{cls.__module__}.{cls.__qualname__}"

    def load(self, qualified_name: str) -> type:
        """Return the class published under ``qualified_name``.

        Raises:
            LookupError: If no such class is published
        """
        module_name, _, type_name = qualified_name.rpartition(".")
        module = self._modules.get(module_name)
        cls = getattr(module, type_name, None) if module is not None else None
        if not isinstance(cls, type):
            msg = f"No generated class named {qualified_name}"
            raise LookupError(msg)
        return cls

    def discard(self, qualified_name: str) -> None:
        """Remove a published class, if present."""
        module_name, _, type_name = qualified_name.rpartition(".")
        with self._lock:
            module = self._modules.get(module_name)
            if module is not None and hasattr(module, type_name):
                delattr(module, type_name)

    def names(self) -> list[str]:
        """Qualified names of all published classes."""
        with self._lock:
            return sorted(
                f"{name}.{attr}"
                for name, module in self._modules.items()
                for attr, value in vars(module).items()
                if isinstance(value, type)
            )

    def clear(self) -> None:
        with self._lock:
            for name, module in self._modules.items():
                if sys.modules.get(name) is module:
                    del sys.modules[name]
            self._modules.clear()


def _rename_if_taken(module: ModuleType, cls: type) -> None:
    base = cls.__qualname__
    name = base
    counter = 2
    while getattr(module, name, cls) is not cls:
        name = f"{base}{counter}"
        counter += 1
    if name != base:
        logger.info("%s.%s is taken, publishing as %s", module.__name__, base, name)
        cls.__name__ = name
        cls.__qualname__ = name


class TypeRegistry:
    """Generates and caches one implementation class per interface.

    Requests for the same interface are serialised; the first one generates
    the class and later ones load it from the namespace. Requests for
    different interfaces run independently.
    """

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        namespace: TypeNamespace | None = None,
    ) -> None:
        self.config = config or get_settings().generator
        self.namespace = namespace or TypeNamespace(install=self.config.install_namespace)
        self.inspector = InterfaceInspector()
        self.resolver = PropertyResolver()
        self.synthesizer = ImplementationSynthesizer(self.config)

        # Keyed by the class itself: equal qualnames do not imply the same class
        self._generated: dict[type, GeneratedType] = {}
        self._locks: dict[type, threading.Lock] = {}
        self._guard = threading.Lock()

    def obtain(self, interface: type[T]) -> type[T]:
        """Return the implementation class of ``interface``, generating it once.

        Args:
            interface: Bean-style interface supporting identity

        Returns:
            Concrete class implementing ``interface``

        Raises:
            MissingIdentityCapabilityError: If ``interface`` lacks the identity capability
            UnsupportedMethodShapeError: If an abstract method is not an accessor
            SynthesisError: If the class cannot be built
            ValidationError: If the class cannot be instantiated
            RegistryInconsistencyError: If a cached class can no longer be loaded
        """
        self._check_identity_capability(interface)

        with self._lock_for(interface):
            generated = self._generated.get(interface)
            if generated is not None:
                return self._load(generated)

            generated = self._generate(interface)
            self.namespace.define(generated.cls, unique=True)
            with self._guard:
                self._generated[interface] = generated

        logger.info(
            "Generated %s for %s with properties %s",
            generated.qualified_name,
            generated.cache_key,
            generated.property_names(),
        )
        return generated.cls

    def describe(self, interface: type) -> GeneratedType:
        """Return the generation record of ``interface``, generating it if needed."""
        self.obtain(interface)
        return self._generated[interface]

    def contains(self, interface: type) -> bool:
        return interface in self._generated

    def interfaces(self) -> list[str]:
        """Qualified names of the interfaces with a generated class."""
        with self._guard:
            return sorted(interface_key(interface) for interface in self._generated)

    def clear(self) -> None:
        """Forget every generated class (mainly for testing)."""
        with self._guard:
            self._generated.clear()
            self._locks.clear()
        self.namespace.clear()

    def __len__(self) -> int:
        return len(self._generated)

    def _lock_for(self, interface: type) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(interface)
            if lock is None:
                lock = self._locks[interface] = threading.Lock()
            return lock

    def _load(self, generated: GeneratedType) -> type:
        try:
            cls = self.namespace.load(generated.qualified_name)
        except LookupError as e:
            logger.error(
                "Previously generated %s cannot be loaded", generated.qualified_name
            )
            msg = f"Previously created class {generated.qualified_name} cannot be loaded"
            raise RegistryInconsistencyError(
                msg, interface=generated.cache_key, type_name=generated.qualified_name
            ) from e

        if cls is not generated.cls:
            msg = f"Class published as {generated.qualified_name} is not the one generated"
            raise RegistryInconsistencyError(
                msg, interface=generated.cache_key, type_name=generated.qualified_name
            )
        return cls

    def _generate(self, interface: type) -> GeneratedType:
        context = GenerationContext(interface)
        logger.debug("Generating implementation for %s", context.interface_name)
        try:
            self.resolver.resolve(self.inspector.methods(interface), context)
            generated = self.synthesizer.synthesize(context)
            validate(generated)
        except BeanGenError as e:
            logger.warning(
                "Generation for %s failed: %s", context.interface_name, e.message
            )
            raise
        return generated

    @staticmethod
    def _check_identity_capability(interface: object) -> None:
        if isinstance(interface, type) and issubclass(interface, SupportsIdentity):
            return
        name = (
            interface_key(interface)
            if isinstance(interface, type)
            else repr(interface)
        )
        msg = (
            f"{name} does not implement SupportsIdentity, cannot generate "
            "a suitable implementation"
        )
        raise MissingIdentityCapabilityError(msg, interface=name)


class _DefaultRegistry:
    """Holds the lazily created process-wide registry."""

    _instance: ClassVar[TypeRegistry | None] = None
    _lock: ClassVar[threading.Lock] = threading.Lock()

    @classmethod
    def get(cls) -> TypeRegistry:
        with cls._lock:
            if cls._instance is None:
                cls._instance = TypeRegistry()
            return cls._instance


def default_registry() -> TypeRegistry:
    """Process-wide registry used by the module-level helpers."""
    return _DefaultRegistry.get()


def obtain(interface: type[T]) -> type[T]:
    """Return the implementation class of ``interface`` from the default registry."""
    return default_registry().obtain(interface)


generate_instance_class = obtain


def new_instance(interface: type[T]) -> T:
    """Create a fresh instance implementing ``interface``."""
    return default_registry().obtain(interface)()
