"""Organisation → FHIR Organization"""

from ..address import to_fhir_address
from ..chidian_ext import KEEP, mapper
from ..fhir_lib import (
    add_identifier,
    add_string_extension,
    add_url_extension,
    codeable_concept,
    override_concept,
    telecom,
)
from ..models import Coding, Organisation
from ..types import FHIRDict
from ..urls import OrganisationUrl

# Organisation type → (code, display) in the organisation-type code system
ORGANISATION_TYPE_MAP: dict[str, tuple[str, str]] = {
    "HOSPITAL": ("hospital", "Hospital"),
    "BREEDER": ("breeder", "Breeder"),
    "BOARDER": ("boarder", "Boarder"),
    "GROOMER": ("groomer", "Groomer"),
}


def _identifiers(org: Organisation) -> list[FHIRDict]:
    identifiers: list[FHIRDict] = []
    add_identifier(identifiers, OrganisationUrl.TAX_IDENTIFIER, org.tax_id, use="official")
    add_identifier(identifiers, OrganisationUrl.DUNS_IDENTIFIER, org.duns_number)
    return identifiers


def _type(org: Organisation, type_coding: Coding | None) -> list[FHIRDict] | None:
    """Type concept from the override coding, else the built-in table."""
    if type_coding is not None:
        return [override_concept(type_coding)]
    entry = ORGANISATION_TYPE_MAP.get(org.type)
    if entry is None:
        return None
    code, display = entry
    return [codeable_concept(OrganisationUrl.TYPE_SYSTEM, code, display, text=display)]


def _extensions(org: Organisation) -> list[FHIRDict]:
    extensions: list[FHIRDict] = []
    # Mirrors the tax identifier
    add_string_extension(extensions, OrganisationUrl.TAX_ID, org.tax_id)
    # isVerified has no "not stated" state and is always emitted
    extensions.append(
        {
            "url": OrganisationUrl.IS_VERIFIED.value,
            "valueBoolean": KEEP(org.is_verified),
        }
    )
    add_url_extension(extensions, OrganisationUrl.IMAGE, org.image_url)
    add_string_extension(
        extensions, OrganisationUrl.HEALTH_SAFETY_CERT, org.health_and_safety_cert_no
    )
    add_string_extension(
        extensions,
        OrganisationUrl.ANIMAL_WELFARE_CERT,
        org.animal_welfare_compliance_cert_no,
    )
    add_string_extension(
        extensions, OrganisationUrl.FIRE_EMERGENCY_CERT, org.fire_and_emergency_cert_no
    )
    add_string_extension(extensions, OrganisationUrl.GOOGLE_PLACE_ID, org.google_places_id)
    return extensions


@mapper
def _to_fhir_organization(src: Organisation, type_coding: Coding | None):
    """Core mapping from Organisation to FHIR Organization structure."""
    return {
        "resourceType": "Organization",
        "id": src.id,
        "active": src.is_active,
        "identifier": _identifiers(src),
        "type": _type(src, type_coding),
        "name": src.name,
        "telecom": telecom(("phone", src.phone_no), ("url", src.website)),
        "address": [to_fhir_address(src.address)] if src.address else None,
        "extension": _extensions(src),
    }


def convert(src: Organisation, *, type_coding: Coding | None = None) -> FHIRDict:
    """Convert an Organisation to a FHIR Organization.

    Args:
        src: Organisation domain record
        type_coding: Optional coding overriding the built-in type table, for
            sub-types the table does not know about

    Returns:
        FHIR Organization resource as wire JSON
    """
    return _to_fhir_organization(src, type_coding)
