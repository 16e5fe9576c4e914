"""Tests for custom exceptions."""

from beangen.utils.exceptions import (
    BeanGenError,
    ConfigurationError,
    MissingIdentityCapabilityError,
    RegistryInconsistencyError,
    SynthesisError,
    UnsupportedMethodShapeError,
    ValidationError,
)


class TestBeanGenError:
    """Test base BeanGenError."""

    def test_basic_error(self) -> None:
        """Test basic error creation."""
        error = BeanGenError("Test error")
        assert str(error) == "Test error"
        assert error.message == "Test error"
        assert error.code == "BeanGenError"
        assert error.details == {}

    def test_error_with_code(self) -> None:
        """Test error with custom code."""
        error = BeanGenError("Test error", code="GEN_001")
        assert error.code == "GEN_001"

    def test_error_with_details(self) -> None:
        """Test error with details."""
        details = {"interface": "pkg.Widget"}
        error = BeanGenError("Generation failed", details=details)
        assert error.details == details


class TestMissingIdentityCapabilityError:
    """Test MissingIdentityCapabilityError."""

    def test_details(self) -> None:
        """Test interface detail."""
        error = MissingIdentityCapabilityError("no identity", interface="pkg.Widget")
        assert error.details["interface"] == "pkg.Widget"
        assert error.code == "MissingIdentityCapabilityError"

    def test_inheritance(self) -> None:
        """Test that a missing capability is a configuration error."""
        error = MissingIdentityCapabilityError("no identity")
        assert isinstance(error, ConfigurationError)
        assert isinstance(error, BeanGenError)
        assert error.details == {}


class TestUnsupportedMethodShapeError:
    """Test UnsupportedMethodShapeError."""

    def test_minimal(self) -> None:
        """Test error with minimal info."""
        error = UnsupportedMethodShapeError("bad method")
        assert error.details == {}

    def test_full(self) -> None:
        """Test error with full info."""
        error = UnsupportedMethodShapeError(
            "bad method",
            interface="pkg.Totals",
            method="computeTotal",
            declaring_type="Totals",
        )
        assert error.details == {
            "interface": "pkg.Totals",
            "method": "computeTotal",
            "declaring_type": "Totals",
        }


class TestRegistryErrors:
    """Test synthesis, registry and validation errors."""

    def test_registry_inconsistency_is_not_synthesis_error(self) -> None:
        """Test that the two failure kinds are distinct."""
        error = RegistryInconsistencyError(
            "cannot load", interface="pkg.Widget", type_name="pkg.impl.WidgetImpl"
        )
        assert not isinstance(error, SynthesisError)
        assert error.details["type_name"] == "pkg.impl.WidgetImpl"

    def test_synthesis_error(self) -> None:
        """Test synthesis error details."""
        error = SynthesisError("cannot build", type_name="WidgetImpl")
        assert error.details == {"type_name": "WidgetImpl"}

    def test_validation_error(self) -> None:
        """Test validation error details."""
        error = ValidationError("cannot create", type_name="WidgetImpl", errors=["get_x"])
        assert error.details["errors"] == ["get_x"]
        assert isinstance(error, BeanGenError)
