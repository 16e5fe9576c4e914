"""Custom exceptions for the bean implementation generator."""

from typing import Any, Dict, Optional


class BeanGenError(Exception):
    """Base exception for implementation generation errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}


class ConfigurationError(BeanGenError):
    """Configuration related errors."""
    pass


class MissingIdentityCapabilityError(ConfigurationError):
    """The interface does not satisfy the identity capability."""

    def __init__(self, message: str, interface: Optional[str] = None):
        super().__init__(message)
        if interface:
            self.details["interface"] = interface


class UnsupportedMethodShapeError(BeanGenError):
    """An abstract method is not a bean-style getter or setter."""

    def __init__(
        self,
        message: str,
        interface: Optional[str] = None,
        method: Optional[str] = None,
        declaring_type: Optional[str] = None,
    ):
        super().__init__(message)
        if interface:
            self.details["interface"] = interface
        if method:
            self.details["method"] = method
        if declaring_type:
            self.details["declaring_type"] = declaring_type


class SynthesisError(BeanGenError):
    """Building the implementation class failed."""

    def __init__(
        self,
        message: str,
        interface: Optional[str] = None,
        type_name: Optional[str] = None,
    ):
        super().__init__(message)
        if interface:
            self.details["interface"] = interface
        if type_name:
            self.details["type_name"] = type_name


class RegistryInconsistencyError(BeanGenError):
    """A previously generated type can no longer be loaded."""

    def __init__(
        self,
        message: str,
        interface: Optional[str] = None,
        type_name: Optional[str] = None,
    ):
        super().__init__(message)
        if interface:
            self.details["interface"] = interface
        if type_name:
            self.details["type_name"] = type_name


class ValidationError(BeanGenError):
    """The generated type could not be instantiated."""

    def __init__(
        self,
        message: str,
        type_name: Optional[str] = None,
        errors: Optional[list] = None,
    ):
        super().__init__(message)
        if type_name:
            self.details["type_name"] = type_name
        if errors:
            self.details["errors"] = errors
