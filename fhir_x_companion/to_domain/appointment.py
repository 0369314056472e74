"""FHIR Appointment → Appointment"""

import logging
from typing import Any

from ..chidian_ext import coalesce, grab
from ..domain_lib import (
    as_list,
    child_extensions,
    codings,
    concept_text,
    find_extension,
    first_item,
    non_empty_str,
    parse_boolean_extension,
    parse_datetime,
    parse_decimal_extension,
    parse_integer_extension,
    parse_string_extension,
)
from ..exceptions import UnknownCodeError
from ..models import (
    Appointment,
    AppointmentCompanion,
    AppointmentParent,
    AppointmentParticipant,
    AppointmentService,
    Pricing,
)
from ..to_fhir.appointment import (
    LOCATION,
    PRIMARY_PERFORMER,
    STATUS_TO_WIRE,
    SUPPORT_PERFORMER,
)
from ..types import FHIRDict, extract_id_from_ref, ref_has_prefix
from ..urls import AppointmentUrl

logger = logging.getLogger(__name__)

WIRE_TO_STATUS: dict[str, str] = {wire: status for status, wire in STATUS_TO_WIRE.items()}


def _participants(src: FHIRDict) -> list[FHIRDict]:
    return [p for p in as_list(src.get("participant")) if isinstance(p, dict)]


def _by_prefix(participants: list[FHIRDict], resource_type: str) -> FHIRDict | None:
    """First participant whose actor references the given resource type."""
    for participant in participants:
        if ref_has_prefix(participant.get("actor"), resource_type):
            return participant
    return None


def _by_type_code(participants: list[FHIRDict], code: str) -> list[FHIRDict]:
    """Participants tagged with the given participation type code."""
    return [
        participant
        for participant in participants
        if any(
            c.get("code") == code
            for concept in as_list(participant.get("type"))
            for c in codings(concept)
        )
    ]


def _actor(participant: FHIRDict | None) -> tuple[str | None, str | None]:
    """(id, display) of a participant's actor."""
    if participant is None:
        return None, None
    return (
        extract_id_from_ref(grab(participant, "actor")),
        non_empty_str(grab(participant, "actor.display")),
    )


def _staff(participant: FHIRDict | None) -> AppointmentParticipant | None:
    actor_id, display = _actor(participant)
    if actor_id is None:
        return None
    return AppointmentParticipant(id=actor_id, name=display)


def _parse_status(status: Any) -> str | None:
    if status is None:
        return None
    if not isinstance(status, str) or status not in WIRE_TO_STATUS:
        raise UnknownCodeError("Appointment.status", status)
    return WIRE_TO_STATUS[status]


def _parse_concept(concepts: Any) -> tuple[str | None, str | None]:
    """(code, display) of the first coded entry, display falling back to text."""
    concept = first_item(concepts)
    if concept is None:
        return None, None
    for c in codings(concept):
        code = non_empty_str(c.get("code"))
        if code:
            return code, non_empty_str(c.get("display")) or concept_text(concept)
    return None, concept_text(concept)


def _parse_service(src: FHIRDict) -> AppointmentService | None:
    service_id, service_name = _parse_concept(src.get("serviceType"))
    if service_id is None:
        return None
    speciality_id, speciality_name = _parse_concept(
        coalesce(src, "specialty", "speciality")
    )
    speciality = (
        AppointmentParticipant(id=speciality_id, name=speciality_name)
        if speciality_id
        else None
    )
    return AppointmentService(id=service_id, name=service_name, speciality=speciality)


def _parse_pricing(extensions: Any) -> Pricing | None:
    """Pricing with zero costs and quantity 1 standing in for missing children."""
    pricing = find_extension(extensions, AppointmentUrl.PRICING)
    if pricing is None:
        return None
    nested = child_extensions(pricing)
    base_cost = parse_decimal_extension(nested, "baseCost")
    final_cost = parse_decimal_extension(nested, "finalCost")
    quantity = parse_integer_extension(nested, "quantity")
    return Pricing(
        base_cost=base_cost if base_cost is not None else 0,
        final_cost=final_cost if final_cost is not None else 0,
        quantity=quantity if quantity is not None else 1,
        discount_percent=parse_decimal_extension(nested, "discountPercent"),
    )


def _parse_companion(participants: list[FHIRDict], extensions: Any) -> AppointmentCompanion:
    companion_id, companion_name = _actor(_by_prefix(participants, "Patient"))
    parent_id, parent_name = _actor(_by_prefix(participants, "RelatedPerson"))
    return AppointmentCompanion(
        id=companion_id,
        name=companion_name,
        species=parse_string_extension(extensions, AppointmentUrl.SPECIES),
        breed=parse_string_extension(extensions, AppointmentUrl.BREED),
        parent=AppointmentParent(id=parent_id, name=parent_name) if parent_id else None,
    )


def convert(src: FHIRDict) -> Appointment:
    """Convert a FHIR Appointment to an Appointment.

    Participants are located by reference prefix (Patient, RelatedPerson,
    Organization) or participation type code (PPRF, SPRF, LOC), never by
    position.

    Args:
        src: FHIR Appointment resource as wire JSON

    Returns:
        Appointment domain record

    Raises:
        UnknownCodeError: If the wire status has no domain counterpart
    """
    extensions = src.get("extension")
    participants = _participants(src)

    leads = _by_type_code(participants, PRIMARY_PERFORMER[0])
    rooms = _by_type_code(participants, LOCATION[0])
    if len(rooms) > 1:
        logger.warning("Appointment has %d rooms; only the first is used", len(rooms))

    organisation_id, organisation_name = _actor(_by_prefix(participants, "Organization"))
    support_staff = [
        staff
        for staff in (
            _staff(p) for p in _by_type_code(participants, SUPPORT_PERFORMER[0])
        )
        if staff is not None
    ]

    minutes = src.get("minutesDuration")

    return Appointment(
        id=non_empty_str(src.get("id")),
        companion=_parse_companion(participants, extensions),
        lead=_staff(leads[0]) if leads else None,
        support_staff=support_staff,
        room=_staff(rooms[0]) if rooms else None,
        appointment_type=_parse_service(src),
        organisation_id=organisation_id,
        organisation_name=organisation_name,
        start_time=parse_datetime(src.get("start")),
        end_time=parse_datetime(src.get("end")),
        duration_minutes=minutes
        if isinstance(minutes, int) and not isinstance(minutes, bool)
        else None,
        status=_parse_status(src.get("status")),
        is_emergency=parse_boolean_extension(extensions, AppointmentUrl.IS_EMERGENCY),
        concern=non_empty_str(src.get("description")),
        pricing=_parse_pricing(extensions),
    )
