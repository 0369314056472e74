"""Tests for the Parent ⇄ RelatedPerson codec."""

from datetime import date

import pytest

from fhir_x_companion.models import Address, Parent
from fhir_x_companion.to_domain import parent as parent_to_domain
from fhir_x_companion.to_fhir import parent as parent_to_fhir
from fhir_x_companion.urls import ParentUrl


@pytest.fixture(scope="module")
def full_parent() -> Parent:
    return Parent(
        id="p-1",
        first_name="Sam",
        last_name="Taylor",
        birth_date=date(1988, 11, 3),
        email="sam@example.org",
        phone_number="+44 7700 900123",
        address=Address(address_line="4 Elm Rd", city="Bath", country="GB"),
        profile_image_url="https://cdn.example.org/sam.jpg",
        currency="GBP",
        is_profile_complete=True,
    )


class TestParentToFhir:
    def test_fields(self, full_parent):
        resource = parent_to_fhir.convert(full_parent)
        assert resource["resourceType"] == "RelatedPerson"
        assert resource["name"] == [
            {"use": "official", "text": "Sam Taylor", "given": ["Sam"], "family": "Taylor"}
        ]
        assert resource["telecom"] == [
            {"system": "email", "value": "sam@example.org"},
            {"system": "phone", "value": "+44 7700 900123"},
        ]
        assert resource["birthDate"] == "1988-11-03"
        assert resource["extension"] == [
            {"url": ParentUrl.CURRENCY.value, "valueString": "GBP"},
            {"url": ParentUrl.PROFILE_COMPLETE.value, "valueBoolean": True},
        ]

    def test_first_name_only(self):
        resource = parent_to_fhir.convert(Parent(first_name="Cher"))
        assert resource["name"] == [{"use": "official", "text": "Cher", "given": ["Cher"]}]

    def test_empty_parent(self):
        assert parent_to_fhir.convert(Parent()) == {"resourceType": "RelatedPerson"}


class TestParentToDomain:
    def test_round_trip(self, full_parent):
        assert parent_to_domain.convert(parent_to_fhir.convert(full_parent)) == full_parent

    def test_text_only_name(self):
        result = parent_to_domain.convert(
            {"resourceType": "RelatedPerson", "name": [{"text": "Mary Jane Watson"}]}
        )
        assert result.first_name == "Mary"
        assert result.last_name == "Jane Watson"

    def test_single_word_text_name(self):
        result = parent_to_domain.convert(
            {"resourceType": "RelatedPerson", "name": [{"text": "Prince"}]}
        )
        assert result.first_name == "Prince"
        assert result.last_name is None

    def test_profile_complete_absent_stays_none(self):
        result = parent_to_domain.convert({"resourceType": "RelatedPerson"})
        assert result.is_profile_complete is None
        assert result == Parent()
