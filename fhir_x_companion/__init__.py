"""
FHIR x Companion: Bidirectional mapping library between veterinary domain records and FHIR R4.

Usage:
    # Individual converters
    from fhir_x_companion import to_fhir, to_domain
    fhir_patient = to_fhir.companion.convert(companion)
    companion = to_domain.companion.convert(fhir_patient)

    # DTO boundary (resourceType and extension depth checked on decode)
    from fhir_x_companion import dto
    companion = dto.from_companion_request_dto(payload)

    # Reference helpers
    from fhir_x_companion import make_ref, extract_ref, extract_id_from_ref
"""

__version__ = "0.1.0"

from fhir_x_companion import dto, to_domain, to_fhir
from fhir_x_companion.exceptions import (
    ExtensionDepthError,
    FHIRError,
    FHIRValidationError,
    InvalidFieldError,
    MissingRequiredFieldError,
    ResourceTypeMismatchError,
    UnknownCodeError,
)
from fhir_x_companion.types import extract_id_from_ref, extract_ref, make_ref

__all__ = [
    # Conversion modules
    "to_fhir",
    "to_domain",
    "dto",
    # Errors
    "FHIRError",
    "FHIRValidationError",
    "ResourceTypeMismatchError",
    "MissingRequiredFieldError",
    "InvalidFieldError",
    "UnknownCodeError",
    "ExtensionDepthError",
    # Reference helpers
    "make_ref",
    "extract_ref",
    "extract_id_from_ref",
]
