"""
Domain records exchanged with the codecs.

These are the ergonomic shapes used by business logic. Optional attributes are
``None`` when not stated; tri-state flags (neuter status, emergency, profile
completion) are ``bool | None`` so "not stated" survives a round-trip.
"""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

CompanionType = Literal["dog", "cat", "horse", "other"]
Gender = Literal["male", "female", "unknown"]
SourceType = Literal["shop", "breeder", "foster_shelter", "friends_family", "unknown"]
RecordStatus = Literal["active", "archived", "inactive"]

AppointmentStatus = Literal[
    "REQUESTED",
    "UPCOMING",
    "CHECKED_IN",
    "IN_PROGRESS",
    "COMPLETED",
    "CANCELLED",
    "NO_SHOW",
    "NO_PAYMENT",
]

OrganisationType = Literal["HOSPITAL", "BREEDER", "BOARDER", "GROOMER"]

RoleCode = Literal[
    "OWNER",
    "ADMIN",
    "SUPERVISOR",
    "VETERINARIAN",
    "TECHNICIAN",
    "ASSISTANT",
    "RECEPTIONIST",
]


class Address(BaseModel):
    address_line: str | None = None
    country: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    latitude: float | None = None
    longitude: float | None = None


class Coding(BaseModel):
    """A caller-supplied coding used to override a built-in code table."""

    system: str
    code: str
    display: str | None = None


# =============================================================================
# Companion
# =============================================================================


class InsuranceDetails(BaseModel):
    """Insurer and policy of a companion.

    ``is_insured`` here mirrors ``Companion.is_insured``, which is the
    authoritative flag: the encoder writes only the companion-level value, and
    decoding copies it into this record.
    """

    is_insured: bool
    company_name: str | None = None
    policy_number: str | None = None


class PhysicalAttribute(BaseModel):
    coat_type: str | None = None
    coat_colour: str | None = None
    eye_colour: str | None = None
    height: str | None = None
    weight: str | None = None
    markings: str | None = None
    build: str | None = None


class BreedingParent(BaseModel):
    name: str | None = None
    registration_number: str | None = None
    breed: str | None = None
    microchip_number: str | None = None
    date_of_birth: date | None = None
    owner_breeder_name: str | None = None


class BreedingInfo(BaseModel):
    sire: BreedingParent | None = None
    dam: BreedingParent | None = None


class MedicalRecord(BaseModel):
    file_url: str
    file_name: str
    uploaded_at: datetime


class Companion(BaseModel):
    """A pet (or other animal) in the care of one or more parents.

    ``is_insured`` is authoritative over ``insurance.is_insured``; a differing
    nested flag is not written to FHIR.
    """

    id: str | None = None
    name: str
    type: CompanionType
    breed: str
    date_of_birth: date
    gender: Gender = "unknown"
    photo_url: str | None = None

    current_weight: float | None = None
    colour: str | None = None
    allergy: str | None = None
    blood_group: str | None = None

    is_neutered: bool | None = None
    age_when_neutered: str | None = None

    microchip_number: str | None = None
    passport_number: str | None = None

    is_insured: bool = False
    insurance: InsuranceDetails | None = None

    country_of_origin: str | None = None
    source: SourceType | None = None
    status: RecordStatus | None = None

    physical_attribute: PhysicalAttribute | None = None
    breeding_info: BreedingInfo | None = None
    medical_records: list[MedicalRecord] | None = None

    is_profile_complete: bool | None = None
    updated_at: datetime | None = None


# =============================================================================
# Appointment
# =============================================================================


class AppointmentParticipant(BaseModel):
    id: str
    name: str | None = None


class AppointmentParent(BaseModel):
    id: str
    name: str | None = None


class AppointmentCompanion(BaseModel):
    id: str | None = None
    name: str | None = None
    species: str | None = None
    breed: str | None = None
    parent: AppointmentParent | None = None


class AppointmentService(BaseModel):
    id: str
    name: str | None = None
    speciality: AppointmentParticipant | None = None


class Pricing(BaseModel):
    base_cost: float
    final_cost: float
    quantity: int = 1
    discount_percent: float | None = None


class Appointment(BaseModel):
    id: str | None = None
    companion: AppointmentCompanion = Field(default_factory=AppointmentCompanion)
    lead: AppointmentParticipant | None = None
    support_staff: list[AppointmentParticipant] = Field(default_factory=list)
    room: AppointmentParticipant | None = None
    appointment_type: AppointmentService | None = None
    organisation_id: str | None = None
    organisation_name: str | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    duration_minutes: int | None = None
    status: AppointmentStatus | None = None
    is_emergency: bool | None = None
    concern: str | None = None
    pricing: Pricing | None = None


# =============================================================================
# Organisation
# =============================================================================


class Organisation(BaseModel):
    """A business (hospital, breeder, boarder, groomer) using the platform.

    ``tax_id`` is the organisation's official registration number.
    """

    id: str | None = None
    name: str
    tax_id: str | None = None
    duns_number: str | None = None
    image_url: str | None = None
    type: OrganisationType = "HOSPITAL"
    phone_no: str | None = None
    website: str | None = None
    address: Address | None = None
    is_verified: bool = False
    is_active: bool = False
    health_and_safety_cert_no: str | None = None
    animal_welfare_compliance_cert_no: str | None = None
    fire_and_emergency_cert_no: str | None = None
    google_places_id: str | None = None


# =============================================================================
# Parent
# =============================================================================


class Parent(BaseModel):
    id: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    birth_date: date | None = None
    email: str | None = None
    phone_number: str | None = None
    address: Address | None = None
    profile_image_url: str | None = None
    currency: str | None = None
    is_profile_complete: bool | None = None


# =============================================================================
# User / Practitioner
# =============================================================================


class User(BaseModel):
    user_id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    is_active: bool | None = None


class PersonalDetails(BaseModel):
    gender: Literal["MALE", "FEMALE", "OTHER"] | None = None
    date_of_birth: date | None = None
    employment_type: Literal["FULL_TIME", "PART_TIME", "CONTRACT"] | None = None
    address: Address | None = None
    phone_number: str | None = None
    profile_picture_url: str | None = None


class ProfessionalDetails(BaseModel):
    medical_license_number: str | None = None
    years_of_experience: float | None = None
    specialization: str | None = None
    qualification: str | None = None
    biography: str | None = None
    linkedin: str | None = None


class UserProfile(BaseModel):
    personal_details: PersonalDetails | None = None
    professional_details: ProfessionalDetails | None = None


class UserOrganization(BaseModel):
    """A practitioner's role within an organisation."""

    id: str | None = None
    practitioner_reference: str
    organization_reference: str
    role_code: str
    role_display: str | None = None
    active: bool = True
