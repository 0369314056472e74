"""Tests for the User + UserProfile → Practitioner encoder."""

from datetime import date

import pytest

from fhir_x_companion.models import (
    Address,
    PersonalDetails,
    ProfessionalDetails,
    User,
    UserProfile,
)
from fhir_x_companion.to_fhir import user as user_to_fhir
from fhir_x_companion.urls import PractitionerUrl, Shared


@pytest.fixture(scope="module")
def user() -> User:
    return User(
        user_id="u-9",
        email="a.patel@example.org",
        first_name="Asha",
        last_name="Patel",
        is_active=True,
    )


@pytest.fixture(scope="module")
def profile() -> UserProfile:
    return UserProfile(
        personal_details=PersonalDetails(
            gender="FEMALE",
            date_of_birth=date(1985, 7, 14),
            employment_type="FULL_TIME",
            address=Address(city="Bristol", country="GB"),
            phone_number="+44 117 000 0001",
            profile_picture_url="https://cdn.example.org/asha.jpg",
        ),
        professional_details=ProfessionalDetails(
            medical_license_number="RCVS-7781",
            years_of_experience=12.5,
            specialization="Surgery",
            qualification="BVSc MRCVS",
            biography="Small animal surgeon.",
            linkedin="https://linkedin.example/asha",
        ),
    )


@pytest.fixture(scope="module")
def practitioner(user, profile) -> dict:
    return user_to_fhir.convert(user, profile)


class TestUserToFhir:
    def test_basic_fields(self, practitioner):
        assert practitioner["resourceType"] == "Practitioner"
        assert practitioner["id"] == "u-9"
        assert practitioner["active"] is True
        assert practitioner["gender"] == "female"
        assert practitioner["birthDate"] == "1985-07-14"
        assert practitioner["name"][0]["text"] == "Asha Patel"
        assert practitioner["address"] == [{"city": "Bristol", "country": "GB"}]
        assert practitioner["photo"] == [{"url": "https://cdn.example.org/asha.jpg"}]

    def test_telecom(self, practitioner):
        assert practitioner["telecom"] == [
            {"system": "phone", "value": "+44 117 000 0001"},
            {"system": "email", "value": "a.patel@example.org"},
            {"system": "url", "value": "https://linkedin.example/asha"},
        ]

    def test_license_identifier(self, practitioner):
        (ident,) = practitioner["identifier"]
        assert ident["system"] == PractitionerUrl.LICENSE_IDENTIFIER.value
        assert ident["value"] == "RCVS-7781"
        assert ident["type"]["coding"][0]["system"] == Shared.IDENTIFIER_TYPE.value

    def test_qualifications(self, practitioner):
        assert practitioner["qualification"] == [
            {"code": {"text": "BVSc MRCVS"}},
            {
                "code": {
                    "coding": [
                        {
                            "system": PractitionerUrl.SPECIALIZATION_SYSTEM.value,
                            "code": "Surgery",
                            "display": "Surgery",
                        }
                    ],
                    "text": "Surgery",
                }
            },
        ]

    def test_extensions(self, practitioner):
        assert practitioner["extension"] == [
            {"url": PractitionerUrl.YEARS_OF_EXPERIENCE.value, "valueDecimal": 12.5},
            {"url": PractitionerUrl.BIOGRAPHY.value, "valueString": "Small animal surgeon."},
            {"url": PractitionerUrl.EMPLOYMENT_TYPE.value, "valueString": "FULL_TIME"},
        ]

    def test_specialization_without_qualification(self, user):
        profile = UserProfile(professional_details=ProfessionalDetails(specialization="Dentistry"))
        practitioner = user_to_fhir.convert(user, profile)
        (qualification,) = practitioner["qualification"]
        assert qualification["code"]["coding"][0]["code"] == "Dentistry"
        assert "identifier" not in practitioner

    def test_user_without_profile(self):
        practitioner = user_to_fhir.convert(User(user_id="u-1"))
        assert practitioner == {"resourceType": "Practitioner", "id": "u-1"}
