"""
Well-known URLs for the companion FHIR wire contract.

Every identifier system, extension URL and code system used by the codecs is
declared here, grouped by resource. Renaming a value is a breaking change for
every producer and consumer of the wire format.
"""

from enum import Enum


class Shared(str, Enum):
    """URLs used by more than one resource."""

    GEOLOCATION = "http://hl7.org/fhir/StructureDefinition/geolocation"
    GEOLOCATION_LATITUDE = "latitude"
    GEOLOCATION_LONGITUDE = "longitude"
    PARTICIPATION_TYPE = "http://terminology.hl7.org/CodeSystem/v3-ParticipationType"
    IDENTIFIER_TYPE = "http://terminology.hl7.org/CodeSystem/v2-0203"


class CompanionUrl(str, Enum):
    """Patient (companion) systems and extensions."""

    SPECIES_SYSTEM = "http://hl7.org/fhir/animal-species"
    GENDER_STATUS_SYSTEM = "http://hl7.org/fhir/animal-genderstatus"
    MICROCHIP_IDENTIFIER = "http://example.org/fhir/Identifier/microchip"
    PASSPORT_IDENTIFIER = "http://example.org/fhir/Identifier/passport"
    BLOOD_GROUP = "http://example.org/fhir/StructureDefinition/companion-blood-group"
    COLOUR = "http://example.org/fhir/StructureDefinition/companion-colour"
    COUNTRY_OF_ORIGIN = (
        "http://example.org/fhir/StructureDefinition/companion-country-of-origin"
    )
    SOURCE = "http://example.org/fhir/StructureDefinition/companion-source"
    WEIGHT = "http://example.org/fhir/StructureDefinition/companion-weight"
    ALLERGY = "http://example.org/fhir/StructureDefinition/companion-allergy"
    AGE_WHEN_NEUTERED = (
        "http://example.org/fhir/StructureDefinition/companion-age-when-neutered"
    )
    INSURANCE = "http://example.org/fhir/StructureDefinition/companion-insurance"
    PHYSICAL_ATTRIBUTES = (
        "http://example.org/fhir/StructureDefinition/companion-physical-attributes"
    )
    BREEDING_INFO = "http://example.org/fhir/StructureDefinition/companion-breeding-info"
    MEDICAL_RECORD = "http://example.org/fhir/StructureDefinition/companion-medical-record"
    PROFILE_COMPLETE = (
        "http://example.org/fhir/StructureDefinition/companion-profile-complete"
    )


class AppointmentUrl(str, Enum):
    """Appointment extensions and code systems."""

    SPECIES = "http://hl7.org/fhir/animal-species"
    BREED = "http://hl7.org/fhir/animal-breed"
    IS_EMERGENCY = (
        "https://yosemitecrew.com/fhir/StructureDefinition/appointment-is-emergency"
    )
    PRICING = "https://yosemitecrew.com/fhir/StructureDefinition/appointment-pricing"
    SERVICE_SYSTEM = "https://yosemitecrew.com/fhir/CodeSystem/service"
    SPECIALITY_SYSTEM = "https://yosemitecrew.com/fhir/CodeSystem/speciality"


class OrganisationUrl(str, Enum):
    """Organization identifier systems and extensions."""

    TAX_IDENTIFIER = "http://example.org/fhir/NamingSystem/organisation-tax-id"
    TAX_ID = "http://example.org/fhir/StructureDefinition/taxId"
    DUNS_IDENTIFIER = "http://terminology.hl7.org/NamingSystem/DUNSNumber"
    TYPE_SYSTEM = "http://example.org/fhir/CodeSystem/organisation-type"
    IMAGE = "http://example.org/fhir/StructureDefinition/organisation-image"
    IS_VERIFIED = "http://example.org/fhir/StructureDefinition/isVerified"
    HEALTH_SAFETY_CERT = (
        "http://example.org/fhir/StructureDefinition/healthAndSafetyCertificationNumber"
    )
    ANIMAL_WELFARE_CERT = (
        "http://example.org/fhir/StructureDefinition/"
        "animalWelfareComplianceCertificationNumber"
    )
    FIRE_EMERGENCY_CERT = (
        "http://example.org/fhir/StructureDefinition/fireAndEmergencyCertificationNumber"
    )
    GOOGLE_PLACE_ID = "http://example.com/fhir/StructureDefinition/google-place-id"


class ParentUrl(str, Enum):
    """RelatedPerson (parent) extensions."""

    CURRENCY = "http://example.org/fhir/StructureDefinition/parent-currency"
    PROFILE_COMPLETE = (
        "http://example.org/fhir/StructureDefinition/parent-profile-complete"
    )


class PractitionerUrl(str, Enum):
    """Practitioner identifier systems, code systems and extensions."""

    LICENSE_IDENTIFIER = "http://example.org/fhir/NamingSystem/medical-license-number"
    SPECIALIZATION_SYSTEM = "http://example.org/fhir/CodeSystem/practitioner-specialization"
    YEARS_OF_EXPERIENCE = (
        "http://example.org/fhir/StructureDefinition/practitioner-years-of-experience"
    )
    BIOGRAPHY = "http://example.org/fhir/StructureDefinition/practitioner-biography"
    EMPLOYMENT_TYPE = (
        "http://example.org/fhir/StructureDefinition/practitioner-employment-type"
    )


class PractitionerRoleUrl(str, Enum):
    """PractitionerRole code systems."""

    ROLE_SYSTEM = "http://example.org/fhir/CodeSystem/organisation-role"
