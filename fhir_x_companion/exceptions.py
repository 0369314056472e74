"""FHIR codec exceptions for structural and contract errors."""

from typing import Any


class FHIRError(Exception):
    """Base exception for FHIR codec operations."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class FHIRValidationError(FHIRError):
    """Raised when a wire payload breaks the codec contract."""

    pass


class ResourceTypeMismatchError(FHIRValidationError):
    """Raised when the resourceType discriminator is not the expected one."""

    def __init__(self, expected: str, actual: Any):
        super().__init__(
            f"Expected FHIR {expected} resource, got resourceType={actual!r}",
            {"expected": expected, "actual": actual},
        )
        self.expected = expected
        self.actual = actual


class MissingRequiredFieldError(FHIRValidationError):
    """Raised when a domain-required field has no safe default."""

    def __init__(self, resource_type: str, field: str):
        super().__init__(
            f"Cannot convert FHIR {resource_type}: missing {field}",
            {"resource_type": resource_type, "field": field},
        )
        self.resource_type = resource_type
        self.field = field


class InvalidFieldError(FHIRValidationError):
    """Raised when a domain-required field is present but cannot be parsed."""

    def __init__(self, resource_type: str, field: str, value: Any):
        super().__init__(
            f"Cannot convert FHIR {resource_type}: invalid {field} {value!r}",
            {"resource_type": resource_type, "field": field, "value": value},
        )
        self.resource_type = resource_type
        self.field = field
        self.value = value


class UnknownCodeError(FHIRValidationError):
    """Raised when a coded wire value has no domain counterpart."""

    def __init__(self, field: str, code: Any):
        super().__init__(
            f"Unrecognised value {code!r} for {field}",
            {"field": field, "code": code},
        )
        self.field = field
        self.code = code


class ExtensionDepthError(FHIRValidationError):
    """Raised when an inbound extension tree is nested too deeply."""

    def __init__(self, max_depth: int):
        super().__init__(
            f"Extension nesting exceeds maximum depth of {max_depth}",
            {"max_depth": max_depth},
        )
        self.max_depth = max_depth
