"""FHIR PractitionerRole → UserOrganization"""

from typing import Any

from ..domain_lib import as_list, concept_text, find_coding, non_empty_str
from ..models import UserOrganization
from ..types import FHIRDict, extract_ref
from ..urls import PractitionerRoleUrl


def _parse_role(concepts: Any) -> tuple[str, str | None]:
    """(code, display) preferring the organisation-role coding over any other.

    Display falls back to the text of the concept holding the matched coding.
    """
    concepts = [c for c in as_list(concepts) if isinstance(c, dict)]
    for system in (PractitionerRoleUrl.ROLE_SYSTEM, None):
        for concept in concepts:
            match = find_coding(concept, system=system)
            if match is not None:
                display = non_empty_str(match.get("display")) or concept_text(concept)
                return match["code"], display
    return "", concept_text(concepts[0]) if concepts else None


def convert(src: FHIRDict) -> UserOrganization:
    """Convert a FHIR PractitionerRole to a UserOrganization.

    References keep their "Type/id" form.
    """
    role_code, role_display = _parse_role(src.get("code"))
    active = src.get("active")

    return UserOrganization(
        id=non_empty_str(src.get("id")),
        practitioner_reference=extract_ref(src.get("practitioner")) or "",
        organization_reference=extract_ref(src.get("organization")) or "",
        role_code=role_code,
        role_display=role_display,
        active=active if isinstance(active, bool) else True,
    )
