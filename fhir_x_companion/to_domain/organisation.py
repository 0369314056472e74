"""FHIR Organization → Organisation"""

import logging
from typing import Any

from ..address import to_domain_address
from ..domain_lib import (
    as_list,
    find_coding,
    find_identifier_value,
    find_telecom_value,
    first_item,
    non_empty_str,
    parse_boolean_extension,
    parse_string_extension,
    parse_url_extension,
)
from ..models import Organisation
from ..to_fhir.organisation import ORGANISATION_TYPE_MAP
from ..types import FHIRDict
from ..urls import OrganisationUrl

logger = logging.getLogger(__name__)

DEFAULT_ORGANISATION_TYPE = "HOSPITAL"

_TYPE_BY_CODE = {code: org_type for org_type, (code, _) in ORGANISATION_TYPE_MAP.items()}


def _parse_type(concepts: Any) -> str:
    """First recognised type code across all type concepts, else HOSPITAL."""
    match = find_coding(concepts if isinstance(concepts, list) else [], codes=_TYPE_BY_CODE)
    if match is None:
        return DEFAULT_ORGANISATION_TYPE
    return _TYPE_BY_CODE[match["code"]]


def convert(src: FHIRDict) -> Organisation:
    """Convert a FHIR Organization to an Organisation.

    Args:
        src: FHIR Organization resource as wire JSON

    Returns:
        Organisation domain record
    """
    extensions = src.get("extension")
    identifiers = src.get("identifier")
    addresses = as_list(src.get("address"))
    first_address = first_item(addresses)

    if len(addresses) > 1:
        logger.warning(
            "Organization %s has %d addresses; only first preserved",
            src.get("id"),
            len(addresses),
        )

    active = src.get("active")

    return Organisation(
        id=non_empty_str(src.get("id")),
        name=non_empty_str(src.get("name")) or "",
        tax_id=find_identifier_value(identifiers, OrganisationUrl.TAX_IDENTIFIER)
        or parse_string_extension(extensions, OrganisationUrl.TAX_ID),
        duns_number=find_identifier_value(identifiers, OrganisationUrl.DUNS_IDENTIFIER),
        image_url=parse_url_extension(extensions, OrganisationUrl.IMAGE),
        type=_parse_type(src.get("type")),
        phone_no=find_telecom_value(src.get("telecom"), "phone"),
        website=find_telecom_value(src.get("telecom"), "url"),
        address=to_domain_address(first_address) if first_address else None,
        is_verified=parse_boolean_extension(extensions, OrganisationUrl.IS_VERIFIED)
        or False,
        is_active=active if isinstance(active, bool) else False,
        health_and_safety_cert_no=parse_string_extension(
            extensions, OrganisationUrl.HEALTH_SAFETY_CERT
        ),
        animal_welfare_compliance_cert_no=parse_string_extension(
            extensions, OrganisationUrl.ANIMAL_WELFARE_CERT
        ),
        fire_and_emergency_cert_no=parse_string_extension(
            extensions, OrganisationUrl.FIRE_EMERGENCY_CERT
        ),
        google_places_id=parse_string_extension(
            extensions, OrganisationUrl.GOOGLE_PLACE_ID
        ),
    )
