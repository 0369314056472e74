"""Parent → FHIR RelatedPerson"""

from ..address import to_fhir_address
from ..chidian_ext import mapper
from ..fhir_lib import (
    add_boolean_extension,
    add_string_extension,
    format_date,
    photo,
    telecom,
)
from ..models import Parent
from ..types import FHIRDict
from ..urls import ParentUrl


def _name(src: Parent) -> FHIRDict | None:
    """Official name; text is the trimmed join of first and last name."""
    text = " ".join(part for part in [src.first_name, src.last_name] if part).strip()
    if not text:
        return None
    return {
        "use": "official",
        "text": text,
        "given": [src.first_name],
        "family": src.last_name,
    }


def _extensions(src: Parent) -> list[FHIRDict]:
    extensions: list[FHIRDict] = []
    add_string_extension(extensions, ParentUrl.CURRENCY, src.currency)
    add_boolean_extension(extensions, ParentUrl.PROFILE_COMPLETE, src.is_profile_complete)
    return extensions


@mapper
def _to_fhir_related_person(src: Parent):
    """Core mapping from Parent to FHIR RelatedPerson structure."""
    return {
        "resourceType": "RelatedPerson",
        "id": src.id,
        "name": [_name(src)],
        "telecom": telecom(("email", src.email), ("phone", src.phone_number)),
        "birthDate": format_date(src.birth_date),
        "address": [to_fhir_address(src.address)] if src.address else None,
        "photo": photo(src.profile_image_url),
        "extension": _extensions(src),
    }


def convert(src: Parent) -> FHIRDict:
    """Convert a Parent to a FHIR RelatedPerson.

    Args:
        src: Parent domain record

    Returns:
        FHIR RelatedPerson resource as wire JSON
    """
    return _to_fhir_related_person(src)
