"""
FHIR → domain conversion modules.

Each module exposes a `convert` function for transforming FHIR wire JSON to domain records.
Practitioner has no module here: it is an encode-only projection.

Usage:
    from fhir_x_companion.to_domain import companion
    companion_record = companion.convert(fhir_patient)
"""

from fhir_x_companion.to_domain import (
    appointment,
    companion,
    organisation,
    parent,
    user_organization,
)

__all__ = [
    "appointment",
    "companion",
    "organisation",
    "parent",
    "user_organization",
]
