"""User + UserProfile → FHIR Practitioner

Encode only. Practitioner identity is owned by the auth system, so the FHIR
Practitioner is a read-only projection and there is no reverse converter.
"""

from ..address import to_fhir_address
from ..chidian_ext import mapper
from ..fhir_lib import (
    add_decimal_extension,
    add_identifier,
    add_string_extension,
    codeable_concept,
    format_date,
    photo,
    telecom,
)
from ..models import PersonalDetails, ProfessionalDetails, User, UserProfile
from ..types import FHIRDict
from ..urls import PractitionerUrl, Shared

GENDER_MAP: dict[str, str] = {
    "MALE": "male",
    "FEMALE": "female",
    "OTHER": "other",
}

# v2-0203 identifier type for a medical licence number
LICENSE_TYPE = ("MD", "Medical License number")


def _name(user: User) -> FHIRDict | None:
    text = " ".join(part for part in [user.first_name, user.last_name] if part).strip()
    if not text:
        return None
    return {
        "use": "official",
        "text": text,
        "given": [user.first_name],
        "family": user.last_name,
    }


def _identifiers(professional: ProfessionalDetails) -> list[FHIRDict]:
    identifiers: list[FHIRDict] = []
    code, display = LICENSE_TYPE
    add_identifier(
        identifiers,
        PractitionerUrl.LICENSE_IDENTIFIER,
        professional.medical_license_number,
        use="official",
        type_system=Shared.IDENTIFIER_TYPE,
        type_code=code,
        type_display=display,
    )
    return identifiers


def _qualifications(professional: ProfessionalDetails) -> list[FHIRDict]:
    """Qualification text and specialization coding, each independently optional."""
    specialization = professional.specialization
    return [
        {"code": {"text": professional.qualification}},
        {
            "code": codeable_concept(
                PractitionerUrl.SPECIALIZATION_SYSTEM,
                specialization,
                specialization,
                text=specialization,
            )
        },
    ]


def _extensions(
    personal: PersonalDetails, professional: ProfessionalDetails
) -> list[FHIRDict]:
    extensions: list[FHIRDict] = []
    add_decimal_extension(
        extensions, PractitionerUrl.YEARS_OF_EXPERIENCE, professional.years_of_experience
    )
    add_string_extension(extensions, PractitionerUrl.BIOGRAPHY, professional.biography)
    add_string_extension(
        extensions, PractitionerUrl.EMPLOYMENT_TYPE, personal.employment_type
    )
    return extensions


@mapper
def _to_fhir_practitioner(user: User, profile: UserProfile | None):
    """Core mapping from User and profile to FHIR Practitioner structure."""
    personal = (profile.personal_details if profile else None) or PersonalDetails()
    professional = (
        profile.professional_details if profile else None
    ) or ProfessionalDetails()

    return {
        "resourceType": "Practitioner",
        "id": user.user_id,
        "active": user.is_active,
        "identifier": _identifiers(professional),
        "name": [_name(user)],
        "telecom": telecom(
            ("phone", personal.phone_number),
            ("email", user.email),
            ("url", professional.linkedin),
        ),
        "gender": GENDER_MAP.get(personal.gender) if personal.gender else None,
        "birthDate": format_date(personal.date_of_birth),
        "address": [to_fhir_address(personal.address)] if personal.address else None,
        "photo": photo(personal.profile_picture_url),
        "qualification": _qualifications(professional),
        "extension": _extensions(personal, professional),
    }


def convert(user: User, profile: UserProfile | None = None) -> FHIRDict:
    """
    Convert a User and its optional profile to a FHIR Practitioner.

    Args:
        user: Auth-system user record
        profile: Optional personal and professional details

    Returns:
        FHIR Practitioner resource as wire JSON
    """
    return _to_fhir_practitioner(user, profile)
