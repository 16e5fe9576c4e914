"""Utility modules for the bean implementation generator."""

from beangen.logger import get_logger, setup_logging
from beangen.utils.exceptions import (
    BeanGenError,
    ConfigurationError,
    MissingIdentityCapabilityError,
    RegistryInconsistencyError,
    SynthesisError,
    UnsupportedMethodShapeError,
    ValidationError,
)

__all__ = [
    # Exceptions
    "BeanGenError",
    "ConfigurationError",
    "MissingIdentityCapabilityError",
    "RegistryInconsistencyError",
    "SynthesisError",
    "UnsupportedMethodShapeError",
    "ValidationError",
    # Logging
    "get_logger",
    "setup_logging",
]
