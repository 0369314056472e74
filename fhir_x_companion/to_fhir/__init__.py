"""
Domain → FHIR conversion modules.

Each module exposes a `convert` function for transforming domain records to FHIR wire JSON.

Usage:
    from fhir_x_companion.to_fhir import companion
    fhir_patient = companion.convert(companion_record)
"""

from fhir_x_companion.to_fhir import (
    appointment,
    companion,
    organisation,
    parent,
    user,
    user_organization,
)

__all__ = [
    "appointment",
    "companion",
    "organisation",
    "parent",
    "user",
    "user_organization",
]
