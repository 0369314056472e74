"""
Request/response DTO boundary.

Response DTOs are the wire JSON produced by the encoders. Request DTOs are
checked for the expected resourceType and a bounded extension depth before the
decoder sees them.
"""

from typing import Any

from . import to_domain, to_fhir
from .domain_lib import MAX_EXTENSION_DEPTH, check_extension_depth
from .exceptions import ResourceTypeMismatchError
from .models import (
    Appointment,
    Coding,
    Companion,
    Organisation,
    Parent,
    User,
    UserOrganization,
    UserProfile,
)
from .types import FHIRDict

# Domain kind → FHIR resourceType discriminator
RESOURCE_TYPES: dict[str, str] = {
    "companion": "Patient",
    "appointment": "Appointment",
    "organisation": "Organization",
    "parent": "RelatedPerson",
    "practitioner": "Practitioner",
    "user_organization": "PractitionerRole",
}


def _check_request(dto: Any, kind: str, max_extension_depth: int) -> FHIRDict:
    """
    Validate an inbound payload before decoding.

    Args:
        dto: Request payload
        kind: Key into RESOURCE_TYPES
        max_extension_depth: Deepest extension nesting accepted

    Returns:
        The payload, unchanged

    Raises:
        ResourceTypeMismatchError: Payload is not an object or has the wrong resourceType
        ExtensionDepthError: Extension tree nests deeper than max_extension_depth
    """
    expected = RESOURCE_TYPES[kind]
    if not isinstance(dto, dict):
        raise ResourceTypeMismatchError(expected, type(dto).__name__)
    actual = dto.get("resourceType")
    if actual != expected:
        raise ResourceTypeMismatchError(expected, actual)
    check_extension_depth(dto, max_extension_depth)
    return dto


# =============================================================================
# Responses (domain → wire)
# =============================================================================


def to_companion_response_dto(companion: Companion) -> FHIRDict:
    return to_fhir.companion.convert(companion)


def to_appointment_response_dto(appointment: Appointment) -> FHIRDict:
    return to_fhir.appointment.convert(appointment)


def to_organisation_response_dto(
    organisation: Organisation, *, type_coding: Coding | None = None
) -> FHIRDict:
    return to_fhir.organisation.convert(organisation, type_coding=type_coding)


def to_parent_response_dto(parent: Parent) -> FHIRDict:
    return to_fhir.parent.convert(parent)


def to_practitioner_response_dto(
    user: User, profile: UserProfile | None = None
) -> FHIRDict:
    return to_fhir.user.convert(user, profile)


def to_user_organization_response_dto(
    user_organization: UserOrganization, *, role_coding: Coding | None = None
) -> FHIRDict:
    return to_fhir.user_organization.convert(user_organization, role_coding=role_coding)


# =============================================================================
# Requests (wire → domain)
# =============================================================================


def from_companion_request_dto(
    dto: Any, *, max_extension_depth: int = MAX_EXTENSION_DEPTH
) -> Companion:
    """Decode a Patient request into a Companion."""
    return to_domain.companion.convert(
        _check_request(dto, "companion", max_extension_depth)
    )


def from_appointment_request_dto(
    dto: Any, *, max_extension_depth: int = MAX_EXTENSION_DEPTH
) -> Appointment:
    return to_domain.appointment.convert(
        _check_request(dto, "appointment", max_extension_depth)
    )


def from_organisation_request_dto(
    dto: Any, *, max_extension_depth: int = MAX_EXTENSION_DEPTH
) -> Organisation:
    return to_domain.organisation.convert(
        _check_request(dto, "organisation", max_extension_depth)
    )


def from_parent_request_dto(
    dto: Any, *, max_extension_depth: int = MAX_EXTENSION_DEPTH
) -> Parent:
    return to_domain.parent.convert(_check_request(dto, "parent", max_extension_depth))


def from_user_organization_request_dto(
    dto: Any, *, max_extension_depth: int = MAX_EXTENSION_DEPTH
) -> UserOrganization:
    return to_domain.user_organization.convert(
        _check_request(dto, "user_organization", max_extension_depth)
    )
