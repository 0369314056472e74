"""Tests for the Appointment ⇄ Appointment codec."""

import logging
from datetime import datetime, timezone

import pytest

from fhir_x_companion.exceptions import UnknownCodeError
from fhir_x_companion.models import (
    Appointment,
    AppointmentCompanion,
    AppointmentParent,
    AppointmentParticipant,
    AppointmentService,
    Pricing,
)
from fhir_x_companion.to_domain import appointment as appointment_to_domain
from fhir_x_companion.to_fhir import appointment as appointment_to_fhir
from fhir_x_companion.urls import AppointmentUrl, Shared


@pytest.fixture(scope="module")
def full_appointment() -> Appointment:
    return Appointment(
        id="apt-1",
        companion=AppointmentCompanion(
            id="c-1",
            name="Biscuit",
            species="Dog",
            breed="Beagle",
            parent=AppointmentParent(id="p-1", name="Sam Taylor"),
        ),
        lead=AppointmentParticipant(id="vet-1", name="Dr Patel"),
        support_staff=[
            AppointmentParticipant(id="nurse-1", name="Jo"),
            AppointmentParticipant(id="nurse-2", name="Ade"),
        ],
        room=AppointmentParticipant(id="room-3", name="Consult 3"),
        appointment_type=AppointmentService(
            id="svc-vax",
            name="Vaccination",
            speciality=AppointmentParticipant(id="sp-gp", name="General Practice"),
        ),
        organisation_id="org-1",
        organisation_name="Harbourside Vets",
        start_time=datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc),
        end_time=datetime(2024, 5, 1, 10, 30, tzinfo=timezone.utc),
        duration_minutes=30,
        status="UPCOMING",
        is_emergency=False,
        concern="Annual booster",
        pricing=Pricing(base_cost=80.0, final_cost=72.0, quantity=1, discount_percent=10.0),
    )


@pytest.fixture(scope="module")
def full_resource(full_appointment) -> dict:
    return appointment_to_fhir.convert(full_appointment)


def _type_code(participant: dict) -> str | None:
    types = participant.get("type")
    return types[0]["coding"][0]["code"] if types else None


class TestAppointmentToFhir:
    def test_basic_fields(self, full_resource):
        assert full_resource["resourceType"] == "Appointment"
        assert full_resource["status"] == "UPCOMING"
        assert full_resource["description"] == "Annual booster"
        assert full_resource["start"] == "2024-05-01T10:00:00+00:00"
        assert full_resource["minutesDuration"] == 30

    def test_participant_layout(self, full_resource):
        actors = [p["actor"]["reference"] for p in full_resource["participant"]]
        assert actors == [
            "Patient/c-1",
            "RelatedPerson/p-1",
            "Practitioner/vet-1",
            "Organization/org-1",
            "Practitioner/nurse-1",
            "Practitioner/nurse-2",
            "Location/room-3",
        ]
        codes = [_type_code(p) for p in full_resource["participant"]]
        assert codes == [None, None, "PPRF", None, "SPRF", "SPRF", "LOC"]
        assert all(p["status"] == "accepted" for p in full_resource["participant"])

    def test_participation_type_system(self, full_resource):
        lead = full_resource["participant"][2]
        assert lead["type"][0]["coding"][0]["system"] == Shared.PARTICIPATION_TYPE.value

    def test_service_and_speciality(self, full_resource):
        assert full_resource["serviceType"][0]["coding"][0] == {
            "system": AppointmentUrl.SERVICE_SYSTEM.value,
            "code": "svc-vax",
            "display": "Vaccination",
        }
        assert full_resource["specialty"][0]["coding"][0]["code"] == "sp-gp"

    def test_pricing_extension(self, full_resource):
        (pricing,) = [
            e for e in full_resource["extension"] if e["url"] == AppointmentUrl.PRICING.value
        ]
        assert pricing["extension"] == [
            {"url": "baseCost", "valueDecimal": 80.0},
            {"url": "finalCost", "valueDecimal": 72.0},
            {"url": "quantity", "valueInteger": 1},
            {"url": "discountPercent", "valueDecimal": 10.0},
        ]

    def test_emergency_false_is_emitted(self, full_resource):
        (flag,) = [
            e for e in full_resource["extension"] if e["url"] == AppointmentUrl.IS_EMERGENCY.value
        ]
        assert flag["valueBoolean"] is False

    def test_empty_appointment(self):
        assert appointment_to_fhir.convert(Appointment()) == {"resourceType": "Appointment"}


class TestAppointmentToDomain:
    def test_round_trip(self, full_appointment, full_resource):
        assert appointment_to_domain.convert(full_resource) == full_appointment

    def test_participant_order_independence(self, full_resource):
        participants = full_resource["participant"]
        reordered = {**full_resource, "participant": list(reversed(participants))}
        reference = appointment_to_domain.convert(full_resource)
        result = appointment_to_domain.convert(reordered)
        assert result.lead == reference.lead
        assert result.room == reference.room
        assert result.companion == reference.companion
        assert result.organisation_id == reference.organisation_id
        assert {s.id for s in result.support_staff} == {s.id for s in reference.support_staff}

    def test_lead_and_support_swapped(self, full_resource):
        participants = list(full_resource["participant"])
        lead, support = participants[2], participants[4]
        participants[2], participants[4] = support, lead
        result = appointment_to_domain.convert({**full_resource, "participant": participants})
        assert result == appointment_to_domain.convert(full_resource)

    def test_pricing_defaults(self):
        result = appointment_to_domain.convert(
            {
                "resourceType": "Appointment",
                "extension": [
                    {
                        "url": AppointmentUrl.PRICING.value,
                        "extension": [{"url": "baseCost", "valueDecimal": 50}],
                    }
                ],
            }
        )
        assert result.pricing == Pricing(base_cost=50.0, final_cost=0, quantity=1)
        assert result.pricing.discount_percent is None

    def test_unknown_status_raises(self, full_resource):
        with pytest.raises(UnknownCodeError) as exc:
            appointment_to_domain.convert({**full_resource, "status": "booked"})
        assert exc.value.code == "booked"

    def test_absent_status_is_none(self):
        assert appointment_to_domain.convert({"resourceType": "Appointment"}).status is None

    def test_every_status_survives(self):
        for status in appointment_to_fhir.STATUS_TO_WIRE:
            wire = appointment_to_fhir.convert(Appointment(status=status))
            assert appointment_to_domain.convert(wire).status == status

    def test_speciality_spelling_accepted(self, full_resource):
        resource = dict(full_resource)
        resource["speciality"] = resource.pop("specialty")
        result = appointment_to_domain.convert(resource)
        assert result.appointment_type.speciality.id == "sp-gp"

    def test_extra_rooms_are_ignored(self, full_resource, caplog):
        extra_room = {
            "type": [{"coding": [{"system": Shared.PARTICIPATION_TYPE.value, "code": "LOC"}]}],
            "actor": {"reference": "Location/room-9"},
            "status": "accepted",
        }
        resource = {**full_resource, "participant": full_resource["participant"] + [extra_room]}
        with caplog.at_level(logging.WARNING):
            result = appointment_to_domain.convert(resource)
        assert result.room.id == "room-3"
        assert "2 rooms" in caplog.text

    def test_empty_resource(self):
        result = appointment_to_domain.convert({"resourceType": "Appointment"})
        assert result == Appointment()
