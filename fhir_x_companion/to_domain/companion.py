"""FHIR Patient → Companion"""

import logging
from datetime import date
from typing import Any, get_args

from ..chidian_ext import grab
from ..domain_lib import (
    as_list,
    child_extensions,
    codings,
    concept_text,
    filter_extensions,
    find_coding,
    find_extension,
    find_identifier_value,
    first_item,
    non_empty_str,
    parse_boolean_extension,
    parse_date,
    parse_date_extension,
    parse_datetime,
    parse_datetime_extension,
    parse_decimal_extension,
    parse_string_extension,
    parse_url_extension,
)
from ..exceptions import InvalidFieldError, MissingRequiredFieldError
from ..models import (
    BreedingInfo,
    BreedingParent,
    Companion,
    InsuranceDetails,
    MedicalRecord,
    PhysicalAttribute,
    SourceType,
)
from ..to_fhir.companion import (
    BREEDING_PARENT_FIELDS,
    PHYSICAL_ATTRIBUTE_FIELDS,
    SPECIES_MAP,
)
from ..types import FHIRDict
from ..urls import CompanionUrl

logger = logging.getLogger(__name__)

SOURCE_VALUES = frozenset(get_args(SourceType))

_SPECIES_BY_CODE = {code: kind for kind, (code, _) in SPECIES_MAP.items() if code}
_SPECIES_BY_DISPLAY = {display.lower(): kind for kind, (_, display) in SPECIES_MAP.items()}


def _require(value: Any, field: str) -> Any:
    if value is None:
        raise MissingRequiredFieldError("Patient", field)
    return value


def _parse_name(names: Any) -> str | None:
    """Text of the first name entry, falling back to given[0] then family."""
    primary = first_item(names)
    if primary is None:
        return None
    text = non_empty_str(primary.get("text"))
    if text:
        return text.strip()
    given = next(
        (g for g in as_list(primary.get("given")) if non_empty_str(g)), None
    )
    if given:
        return given.strip()
    family = non_empty_str(primary.get("family"))
    return family.strip() if family else None


def _parse_birth_date(value: Any) -> date:
    """Birth date; an unparseable value is invalid rather than missing."""
    _require(non_empty_str(value), "birthDate")
    parsed = parse_date(value)
    if parsed is None:
        raise InvalidFieldError("Patient", "birthDate", value)
    return parsed


def _parse_gender(gender: Any) -> str:
    if gender in ("male", "female"):
        return gender
    return "unknown"


def _parse_status(active: Any) -> str | None:
    if isinstance(active, bool):
        return "active" if active else "archived"
    return None


def _parse_species(species: Any) -> str | None:
    """Companion type from the species concept; None if the concept is absent."""
    text = concept_text(species)
    if not text and not codings(species):
        return None
    match = find_coding(species, CompanionUrl.SPECIES_SYSTEM, _SPECIES_BY_CODE)
    if match is not None:
        return _SPECIES_BY_CODE[match["code"]]
    if text and text.lower() in _SPECIES_BY_DISPLAY:
        return _SPECIES_BY_DISPLAY[text.lower()]
    return "other"


def _parse_breed(breed: Any) -> str | None:
    for c in codings(breed):
        display = non_empty_str(c.get("display"))
        if display:
            return display
    return concept_text(breed)


def _parse_gender_status(gender_status: Any) -> bool | None:
    match = find_coding(gender_status, CompanionUrl.GENDER_STATUS_SYSTEM)
    code = match["code"].lower() if match else (concept_text(gender_status) or "").lower()
    if code == "neutered":
        return True
    if code == "intact":
        return False
    return None


def _parse_physical_attribute(extensions: Any) -> PhysicalAttribute | None:
    nested = child_extensions(find_extension(extensions, CompanionUrl.PHYSICAL_ATTRIBUTES))
    if not nested:
        return None
    values = {
        field: parse_string_extension(nested, url)
        for field, url in PHYSICAL_ATTRIBUTE_FIELDS.items()
    }
    if all(v is None for v in values.values()):
        return None
    return PhysicalAttribute(**values)


def _parse_breeding_parent(nested: list[FHIRDict], url: str) -> BreedingParent | None:
    parent_nested = child_extensions(find_extension(nested, url))
    if not parent_nested:
        return None
    values: dict[str, Any] = {
        field: parse_string_extension(parent_nested, child_url)
        for field, child_url in BREEDING_PARENT_FIELDS.items()
    }
    values["date_of_birth"] = parse_date_extension(parent_nested, "dateOfBirth")
    if all(v is None for v in values.values()):
        return None
    return BreedingParent(**values)


def _parse_breeding_info(extensions: Any) -> BreedingInfo | None:
    nested = child_extensions(find_extension(extensions, CompanionUrl.BREEDING_INFO))
    if not nested:
        return None
    sire = _parse_breeding_parent(nested, "sire")
    dam = _parse_breeding_parent(nested, "dam")
    if sire is None and dam is None:
        return None
    return BreedingInfo(sire=sire, dam=dam)


def _parse_medical_records(extensions: Any) -> list[MedicalRecord] | None:
    """One record per medical-record extension; incomplete ones are dropped."""
    records: list[MedicalRecord] = []
    for ext in filter_extensions(extensions, CompanionUrl.MEDICAL_RECORD):
        nested = child_extensions(ext)
        file_url = parse_url_extension(nested, "fileUrl")
        file_name = parse_string_extension(nested, "fileName")
        uploaded_at = parse_datetime_extension(nested, "uploadedAt")
        if file_url and file_name and uploaded_at:
            records.append(
                MedicalRecord(file_url=file_url, file_name=file_name, uploaded_at=uploaded_at)
            )
        else:
            logger.warning("Dropping malformed medical record extension")
    return records or None


def _parse_insurance(extensions: Any) -> tuple[bool, InsuranceDetails | None]:
    nested = child_extensions(find_extension(extensions, CompanionUrl.INSURANCE))
    is_insured = parse_boolean_extension(nested, "isInsured") or False
    company_name = parse_string_extension(nested, "companyName")
    policy_number = parse_string_extension(nested, "policyNumber")
    if not company_name and not policy_number:
        return is_insured, None
    return is_insured, InsuranceDetails(
        is_insured=is_insured, company_name=company_name, policy_number=policy_number
    )


def _parse_allergy(extensions: Any) -> str | None:
    value = parse_string_extension(extensions, CompanionUrl.ALLERGY)
    if value is None:
        return None
    return value.strip() or None


def _parse_source(extensions: Any) -> str | None:
    value = parse_string_extension(extensions, CompanionUrl.SOURCE)
    return value if value in SOURCE_VALUES else None


def _parse_photo(photos: Any) -> str | None:
    for attachment in as_list(photos):
        url = non_empty_str(grab(attachment, "url"))
        if url:
            return url
    return None


def convert(src: FHIRDict) -> Companion:
    """Convert a FHIR Patient to a Companion.

    Args:
        src: FHIR Patient resource as wire JSON

    Returns:
        Companion domain record

    Raises:
        MissingRequiredFieldError: If name, species, breed or birthDate is absent
        InvalidFieldError: If birthDate is present but not a FHIR date
    """
    extensions = src.get("extension")
    identifiers = src.get("identifier")

    name = _require(_parse_name(src.get("name")), "name")
    species = _require(_parse_species(grab(src, "animal.species")), "animal.species")
    breed = _require(_parse_breed(grab(src, "animal.breed")), "animal.breed")
    date_of_birth = _parse_birth_date(src.get("birthDate"))

    if len(as_list(src.get("name"))) > 1:
        logger.warning("Patient has %d names; only the first is used", len(src["name"]))

    is_insured, insurance = _parse_insurance(extensions)

    return Companion(
        id=non_empty_str(src.get("id")),
        name=name,
        type=species,
        breed=breed,
        date_of_birth=date_of_birth,
        gender=_parse_gender(src.get("gender")),
        photo_url=_parse_photo(src.get("photo")),
        current_weight=parse_decimal_extension(extensions, CompanionUrl.WEIGHT),
        colour=parse_string_extension(extensions, CompanionUrl.COLOUR),
        allergy=_parse_allergy(extensions),
        blood_group=parse_string_extension(extensions, CompanionUrl.BLOOD_GROUP),
        is_neutered=_parse_gender_status(grab(src, "animal.genderStatus")),
        age_when_neutered=parse_string_extension(
            extensions, CompanionUrl.AGE_WHEN_NEUTERED
        ),
        microchip_number=find_identifier_value(
            identifiers, CompanionUrl.MICROCHIP_IDENTIFIER
        ),
        passport_number=find_identifier_value(
            identifiers, CompanionUrl.PASSPORT_IDENTIFIER
        ),
        is_insured=is_insured,
        insurance=insurance,
        country_of_origin=parse_string_extension(
            extensions, CompanionUrl.COUNTRY_OF_ORIGIN
        ),
        source=_parse_source(extensions),
        status=_parse_status(src.get("active")),
        physical_attribute=_parse_physical_attribute(extensions),
        breeding_info=_parse_breeding_info(extensions),
        medical_records=_parse_medical_records(extensions),
        is_profile_complete=parse_boolean_extension(
            extensions, CompanionUrl.PROFILE_COMPLETE
        ),
        updated_at=parse_datetime(grab(src, "meta.lastUpdated")),
    )
