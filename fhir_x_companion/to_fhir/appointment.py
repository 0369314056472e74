"""Appointment → FHIR Appointment"""

from typing import get_args

from ..chidian_ext import mapper
from ..fhir_lib import (
    add_boolean_extension,
    add_decimal_extension,
    add_integer_extension,
    add_string_extension,
    codeable_concept,
    coding,
    format_datetime,
    nested_extension,
)
from ..models import (
    Appointment,
    AppointmentParticipant,
    AppointmentService,
    AppointmentStatus,
    Pricing,
)
from ..types import FHIRDict, make_ref
from ..urls import AppointmentUrl, Shared

# Domain status → wire status; the two vocabularies are identical today but
# every value goes through this table in both directions.
STATUS_TO_WIRE: dict[str, str] = {status: status for status in get_args(AppointmentStatus)}

# Participation type codes for tagged participants
PRIMARY_PERFORMER = ("PPRF", "primary performer")
SUPPORT_PERFORMER = ("SPRF", "support performer")
LOCATION = ("LOC", "location")


def _participant(
    reference: FHIRDict | None, participation: tuple[str, str] | None = None
) -> FHIRDict | None:
    """Build an accepted participant, optionally tagged with a participation type."""
    if reference is None:
        return None
    participant: FHIRDict = {}
    if participation is not None:
        code, display = participation
        participant["type"] = [
            {"coding": [coding(Shared.PARTICIPATION_TYPE, code, display)]}
        ]
    participant["actor"] = reference
    participant["status"] = "accepted"
    return participant


def _staff_participant(
    staff: AppointmentParticipant | None, participation: tuple[str, str]
) -> FHIRDict | None:
    if staff is None:
        return None
    return _participant(make_ref("Practitioner", staff.id, staff.name), participation)


def _participants(src: Appointment) -> list[FHIRDict]:
    companion = src.companion
    parent = companion.parent
    room = src.room

    fixed = [
        _participant(make_ref("Patient", companion.id, companion.name)),
        _participant(make_ref("RelatedPerson", parent.id, parent.name) if parent else None),
        _staff_participant(src.lead, PRIMARY_PERFORMER),
        _participant(make_ref("Organization", src.organisation_id, src.organisation_name)),
    ]
    support = [_staff_participant(staff, SUPPORT_PERFORMER) for staff in src.support_staff]
    location = [
        _participant(make_ref("Location", room.id, room.name) if room else None, LOCATION)
    ]
    return [p for p in fixed + support + location if p]


def _service_type(service: AppointmentService | None) -> list[FHIRDict] | None:
    if service is None:
        return None
    concept = codeable_concept(
        AppointmentUrl.SERVICE_SYSTEM, service.id, service.name, text=service.name
    )
    return [concept] if concept else None


def _specialty(service: AppointmentService | None) -> list[FHIRDict] | None:
    if service is None or service.speciality is None:
        return None
    speciality = service.speciality
    concept = codeable_concept(
        AppointmentUrl.SPECIALITY_SYSTEM,
        speciality.id,
        speciality.name,
        text=speciality.name,
    )
    return [concept] if concept else None


def _pricing_extension(pricing: Pricing | None) -> FHIRDict | None:
    if pricing is None:
        return None
    nested: list[FHIRDict] = []
    add_decimal_extension(nested, "baseCost", pricing.base_cost)
    add_decimal_extension(nested, "finalCost", pricing.final_cost)
    add_integer_extension(nested, "quantity", pricing.quantity)
    add_decimal_extension(nested, "discountPercent", pricing.discount_percent)
    return nested_extension(AppointmentUrl.PRICING, nested)


def _extensions(src: Appointment) -> list[FHIRDict]:
    extensions: list[FHIRDict] = []
    # Species/breed travel with the appointment so it reads without a Patient fetch
    add_string_extension(extensions, AppointmentUrl.SPECIES, src.companion.species)
    add_string_extension(extensions, AppointmentUrl.BREED, src.companion.breed)
    add_boolean_extension(extensions, AppointmentUrl.IS_EMERGENCY, src.is_emergency)
    pricing = _pricing_extension(src.pricing)
    if pricing:
        extensions.append(pricing)
    return extensions


@mapper
def _to_fhir_appointment(src: Appointment):
    """Core mapping from Appointment to FHIR Appointment structure."""
    return {
        "resourceType": "Appointment",
        "id": src.id,
        "status": STATUS_TO_WIRE[src.status] if src.status else None,
        "serviceType": _service_type(src.appointment_type),
        "specialty": _specialty(src.appointment_type),
        "description": src.concern,
        "start": format_datetime(src.start_time),
        "end": format_datetime(src.end_time),
        "minutesDuration": src.duration_minutes,
        "participant": _participants(src),
        "extension": _extensions(src),
    }


def convert(src: Appointment) -> FHIRDict:
    """Convert an Appointment to a FHIR Appointment.

    Args:
        src: Appointment domain record

    Returns:
        FHIR Appointment resource as wire JSON
    """
    return _to_fhir_appointment(src)
