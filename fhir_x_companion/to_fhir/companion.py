"""Companion → FHIR Patient"""

import logging

from ..chidian_ext import mapper
from ..fhir_lib import (
    add_boolean_extension,
    add_date_extension,
    add_datetime_extension,
    add_decimal_extension,
    add_identifier,
    add_string_extension,
    add_url_extension,
    codeable_concept,
    format_date,
    format_datetime,
    nested_extension,
    photo,
)
from ..models import (
    BreedingInfo,
    BreedingParent,
    Companion,
    MedicalRecord,
    PhysicalAttribute,
)
from ..types import FHIRDict
from ..urls import CompanionUrl

logger = logging.getLogger(__name__)

# Companion type → (animal-species code, display); "other" has no code
SPECIES_MAP: dict[str, tuple[str | None, str]] = {
    "dog": ("canislf", "Dog"),
    "cat": ("feliscat", "Cat"),
    "horse": ("equuscab", "Horse"),
    "other": (None, "Other"),
}

# Wire child URL for each physical attribute field
PHYSICAL_ATTRIBUTE_FIELDS: dict[str, str] = {
    "coat_type": "coatType",
    "coat_colour": "coatColour",
    "eye_colour": "eyeColour",
    "height": "height",
    "weight": "weight",
    "markings": "markings",
    "build": "build",
}

# Wire child URL for each string field of a breeding parent
BREEDING_PARENT_FIELDS: dict[str, str] = {
    "name": "name",
    "registration_number": "registrationNumber",
    "breed": "breed",
    "microchip_number": "microchipNumber",
    "owner_breeder_name": "ownerBreederName",
}


def _active(status: str | None) -> bool | None:
    """active → True, archived → False, anything else stays absent."""
    if status == "active":
        return True
    if status == "archived":
        return False
    return None


def _species(companion_type: str) -> FHIRDict | None:
    entry = SPECIES_MAP.get(companion_type)
    if entry is None:
        return None
    code, display = entry
    return codeable_concept(CompanionUrl.SPECIES_SYSTEM, code, display, text=display)


def _gender_status(is_neutered: bool | None) -> FHIRDict | None:
    """Neuter status only when explicitly stated."""
    if is_neutered is None:
        return None
    code, display = ("neutered", "Neutered") if is_neutered else ("intact", "Intact")
    return codeable_concept(CompanionUrl.GENDER_STATUS_SYSTEM, code, display, text=display)


def _animal(companion: Companion) -> FHIRDict:
    return {
        "species": _species(companion.type),
        "breed": {"text": companion.breed},
        "genderStatus": _gender_status(companion.is_neutered),
    }


def _identifiers(companion: Companion) -> list[FHIRDict]:
    identifiers: list[FHIRDict] = []
    add_identifier(
        identifiers, CompanionUrl.MICROCHIP_IDENTIFIER, companion.microchip_number
    )
    add_identifier(
        identifiers, CompanionUrl.PASSPORT_IDENTIFIER, companion.passport_number
    )
    return identifiers


def _physical_attribute_extension(
    attributes: PhysicalAttribute | None,
) -> FHIRDict | None:
    if attributes is None:
        return None
    nested: list[FHIRDict] = []
    for field, url in PHYSICAL_ATTRIBUTE_FIELDS.items():
        add_string_extension(nested, url, getattr(attributes, field))
    return nested_extension(CompanionUrl.PHYSICAL_ATTRIBUTES, nested)


def _breeding_parent_extension(
    details: BreedingParent | None, url: str
) -> FHIRDict | None:
    if details is None:
        return None
    nested: list[FHIRDict] = []
    for field, child_url in BREEDING_PARENT_FIELDS.items():
        add_string_extension(nested, child_url, getattr(details, field))
    add_date_extension(nested, "dateOfBirth", details.date_of_birth)
    return nested_extension(url, nested)


def _breeding_info_extension(breeding_info: BreedingInfo | None) -> FHIRDict | None:
    if breeding_info is None:
        return None
    nested = [
        ext
        for ext in [
            _breeding_parent_extension(breeding_info.sire, "sire"),
            _breeding_parent_extension(breeding_info.dam, "dam"),
        ]
        if ext
    ]
    return nested_extension(CompanionUrl.BREEDING_INFO, nested)


def _medical_record_extension(record: MedicalRecord) -> FHIRDict | None:
    """One extension per record; all three children are required."""
    nested: list[FHIRDict] = []
    add_url_extension(nested, "fileUrl", record.file_url)
    add_string_extension(nested, "fileName", record.file_name)
    add_datetime_extension(nested, "uploadedAt", record.uploaded_at)
    if len(nested) < 3:
        logger.warning(
            "Dropping incomplete medical record %r", record.file_name or record.file_url
        )
        return None
    return nested_extension(CompanionUrl.MEDICAL_RECORD, nested)


def _insurance_extension(companion: Companion) -> FHIRDict | None:
    if not companion.is_insured and companion.insurance is None:
        return None
    insurance = companion.insurance
    nested: list[FHIRDict] = [{"url": "isInsured", "valueBoolean": companion.is_insured}]
    if insurance is not None:
        add_string_extension(nested, "companyName", insurance.company_name)
        add_string_extension(nested, "policyNumber", insurance.policy_number)
    return nested_extension(CompanionUrl.INSURANCE, nested)


def _extensions(companion: Companion) -> list[FHIRDict]:
    extensions: list[FHIRDict] = []

    add_decimal_extension(extensions, CompanionUrl.WEIGHT, companion.current_weight)
    add_string_extension(extensions, CompanionUrl.COLOUR, companion.colour)
    add_string_extension(extensions, CompanionUrl.ALLERGY, companion.allergy)
    add_string_extension(extensions, CompanionUrl.BLOOD_GROUP, companion.blood_group)
    add_string_extension(
        extensions, CompanionUrl.AGE_WHEN_NEUTERED, companion.age_when_neutered
    )
    add_string_extension(
        extensions, CompanionUrl.COUNTRY_OF_ORIGIN, companion.country_of_origin
    )
    add_string_extension(extensions, CompanionUrl.SOURCE, companion.source)

    composites = [
        _physical_attribute_extension(companion.physical_attribute),
        _breeding_info_extension(companion.breeding_info),
    ]
    composites.extend(
        _medical_record_extension(record) for record in companion.medical_records or []
    )
    composites.append(_insurance_extension(companion))
    extensions.extend(ext for ext in composites if ext)

    add_boolean_extension(
        extensions, CompanionUrl.PROFILE_COMPLETE, companion.is_profile_complete
    )
    return extensions


@mapper
def _to_fhir_patient(src: Companion):
    """Core mapping from Companion to FHIR Patient structure."""
    return {
        "resourceType": "Patient",
        "id": src.id,
        "meta": {"lastUpdated": format_datetime(src.updated_at)},
        "active": _active(src.status),
        "identifier": _identifiers(src),
        "name": [{"text": src.name}],
        "gender": src.gender,
        "birthDate": format_date(src.date_of_birth),
        "photo": photo(src.photo_url),
        "animal": _animal(src),
        "extension": _extensions(src),
    }


def convert(src: Companion) -> FHIRDict:
    """Convert a Companion to a FHIR Patient.

    Args:
        src: Companion domain record

    Returns:
        FHIR Patient resource as wire JSON
    """
    return _to_fhir_patient(src)
