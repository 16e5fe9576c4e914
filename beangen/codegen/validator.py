"""Checks that a generated implementation can actually be instantiated."""

from beangen.codegen.synthesizer import GeneratedType
from beangen.logger import get_logger
from beangen.utils.exceptions import ValidationError

logger = get_logger(__name__)


def validate(generated: GeneratedType) -> None:
    """Create one instance of the generated class with no arguments.

    Raises:
        ValidationError: If the class is still abstract or its constructor fails
    """
    cls = generated.cls
    missing = sorted(getattr(cls, "__abstractmethods__", ()))
    if missing:
        msg = (
            f"{generated.type_name} leaves abstract methods unimplemented: "
            f"{', '.join(missing)}"
        )
        raise ValidationError(msg, type_name=generated.qualified_name, errors=missing)

    try:
        cls()
    except Exception as e:
        logger.warning("Instantiating %s failed: %s", generated.type_name, e)
        msg = f"Cannot instantiate {generated.type_name}: {e}"
        raise ValidationError(msg, type_name=generated.qualified_name) from e
