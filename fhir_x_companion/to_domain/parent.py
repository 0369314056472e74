"""FHIR RelatedPerson → Parent"""

import logging
from typing import Any

from ..address import to_domain_address
from ..chidian_ext import grab
from ..domain_lib import (
    as_list,
    find_telecom_value,
    first_item,
    non_empty_str,
    parse_boolean_extension,
    parse_date,
    parse_string_extension,
)
from ..models import Parent
from ..types import FHIRDict
from ..urls import ParentUrl

logger = logging.getLogger(__name__)


def _parse_name(names: Any) -> tuple[str | None, str | None]:
    """(first, last) from given[0]/family, or split from a text-only name."""
    name = first_item(names)
    if name is None:
        return None, None
    given = next((g for g in as_list(name.get("given")) if non_empty_str(g)), None)
    family = non_empty_str(name.get("family"))
    if given or family:
        return given, family
    text = non_empty_str(name.get("text"))
    if text is None:
        return None, None
    first, _, rest = text.strip().partition(" ")
    return first, rest.strip() or None


def _parse_photo(photos: Any) -> str | None:
    for attachment in as_list(photos):
        url = non_empty_str(grab(attachment, "url"))
        if url:
            return url
    return None


def convert(src: FHIRDict) -> Parent:
    """Convert a FHIR RelatedPerson to a Parent.

    Args:
        src: FHIR RelatedPerson resource as wire JSON

    Returns:
        Parent domain record
    """
    extensions = src.get("extension")
    addresses = as_list(src.get("address"))
    first_address = first_item(addresses)
    first_name, last_name = _parse_name(src.get("name"))

    if len(addresses) > 1:
        logger.warning(
            "RelatedPerson has %d addresses; only first preserved", len(addresses)
        )

    return Parent(
        id=non_empty_str(src.get("id")),
        first_name=first_name,
        last_name=last_name,
        birth_date=parse_date(src.get("birthDate")),
        email=find_telecom_value(src.get("telecom"), "email"),
        phone_number=find_telecom_value(src.get("telecom"), "phone"),
        address=to_domain_address(first_address) if first_address else None,
        profile_image_url=_parse_photo(src.get("photo")),
        currency=parse_string_extension(extensions, ParentUrl.CURRENCY),
        is_profile_complete=parse_boolean_extension(
            extensions, ParentUrl.PROFILE_COMPLETE
        ),
    )
