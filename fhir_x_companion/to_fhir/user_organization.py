"""UserOrganization → FHIR PractitionerRole"""

from ..chidian_ext import mapper
from ..fhir_lib import codeable_concept, override_concept
from ..models import Coding, UserOrganization
from ..types import FHIRDict, make_ref
from ..urls import PractitionerRoleUrl

# Role code → display in the organisation-role code system
ROLE_MAP: dict[str, str] = {
    "OWNER": "Owner",
    "ADMIN": "Admin",
    "SUPERVISOR": "Supervisor",
    "VETERINARIAN": "Veterinarian",
    "TECHNICIAN": "Technician",
    "ASSISTANT": "Assistant",
    "RECEPTIONIST": "Receptionist",
}


def _code(src: UserOrganization, role_coding: Coding | None) -> list[FHIRDict]:
    if role_coding is not None:
        return [override_concept(role_coding)]
    display = src.role_display or ROLE_MAP.get(src.role_code)
    return [
        codeable_concept(
            PractitionerRoleUrl.ROLE_SYSTEM, src.role_code, display, text=display
        )
    ]


@mapper
def _to_fhir_practitioner_role(src: UserOrganization, role_coding: Coding | None):
    """Core mapping from UserOrganization to FHIR PractitionerRole structure."""
    return {
        "resourceType": "PractitionerRole",
        "id": src.id,
        "active": src.active,
        "practitioner": make_ref("Practitioner", src.practitioner_reference),
        "organization": make_ref("Organization", src.organization_reference),
        "code": _code(src, role_coding),
    }


def convert(src: UserOrganization, *, role_coding: Coding | None = None) -> FHIRDict:
    """Convert a UserOrganization to a FHIR PractitionerRole.

    Args:
        src: Practitioner/organisation/role triple
        role_coding: Optional coding overriding the built-in role table

    Returns:
        FHIR PractitionerRole resource as wire JSON
    """
    return _to_fhir_practitioner_role(src, role_coding)
