"""Tests for the request/response DTO boundary."""

from datetime import date

import pytest

from fhir_x_companion import dto
from fhir_x_companion.exceptions import (
    ExtensionDepthError,
    FHIRValidationError,
    ResourceTypeMismatchError,
)
from fhir_x_companion.models import (
    Companion,
    Organisation,
    Parent,
    User,
    UserOrganization,
)


@pytest.fixture(scope="module")
def companion() -> Companion:
    return Companion(name="Tom", type="cat", breed="Moggy", date_of_birth=date(2021, 9, 9))


class TestResourceTypes:
    def test_discriminators(self):
        assert dto.RESOURCE_TYPES == {
            "companion": "Patient",
            "appointment": "Appointment",
            "organisation": "Organization",
            "parent": "RelatedPerson",
            "practitioner": "Practitioner",
            "user_organization": "PractitionerRole",
        }

    def test_responses_carry_discriminator(self, companion):
        responses = {
            "companion": dto.to_companion_response_dto(companion),
            "organisation": dto.to_organisation_response_dto(Organisation(name="X")),
            "parent": dto.to_parent_response_dto(Parent()),
            "practitioner": dto.to_practitioner_response_dto(User(user_id="u-1")),
            "user_organization": dto.to_user_organization_response_dto(
                UserOrganization(
                    practitioner_reference="u-1",
                    organization_reference="o-1",
                    role_code="ADMIN",
                )
            ),
        }
        for kind, response in responses.items():
            assert response["resourceType"] == dto.RESOURCE_TYPES[kind]


class TestRequests:
    def test_companion_round_trip(self, companion):
        payload = dto.to_companion_response_dto(companion)
        assert dto.from_companion_request_dto(payload) == companion

    @pytest.mark.parametrize(
        "decode",
        [
            dto.from_companion_request_dto,
            dto.from_appointment_request_dto,
            dto.from_organisation_request_dto,
            dto.from_parent_request_dto,
            dto.from_user_organization_request_dto,
        ],
    )
    def test_wrong_resource_type(self, decode):
        with pytest.raises(ResourceTypeMismatchError) as exc:
            decode({"resourceType": "Observation"})
        assert exc.value.actual == "Observation"
        assert isinstance(exc.value, FHIRValidationError)

    def test_missing_resource_type(self):
        with pytest.raises(ResourceTypeMismatchError) as exc:
            dto.from_parent_request_dto({"name": [{"text": "Sam"}]})
        assert exc.value.expected == "RelatedPerson"
        assert exc.value.actual is None

    def test_non_object_payload(self):
        with pytest.raises(ResourceTypeMismatchError):
            dto.from_appointment_request_dto(["not", "a", "resource"])

    def test_extension_depth_enforced(self):
        payload = {
            "resourceType": "Organization",
            "name": "Deep",
            "extension": [{"url": "a", "extension": [{"url": "b", "extension": [{"url": "c"}]}]}],
        }
        with pytest.raises(ExtensionDepthError):
            dto.from_organisation_request_dto(payload, max_extension_depth=2)
        assert dto.from_organisation_request_dto(payload).name == "Deep"

    def test_organisation_request(self):
        result = dto.from_organisation_request_dto(
            {"resourceType": "Organization", "name": "Harbourside Vets"}
        )
        assert result.name == "Harbourside Vets"
        assert result.type == "HOSPITAL"
