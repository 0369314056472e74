"""
Common helper functions for building FHIR wire structures.
Shared utilities used across the to_fhir modules.

The ``add_*`` helpers append a typed extension to a list only when the value
is present; they never append a placeholder. The builders return None when
their input is empty, which the encoders' @mapper(remove_empty=True) strips
from output along with any container left empty.
"""

from datetime import date, datetime
from enum import Enum
from typing import Any

from .models import Coding
from .types import FHIRDict


def _url(url: str | Enum) -> str:
    """Plain string form of a registry URL."""
    return url.value if isinstance(url, Enum) else url


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def format_date(value: date | None) -> str | None:
    """
    Format a date as FHIR date (YYYY-MM-DD).

    Args:
        value: Date (a datetime is truncated to its date part)

    Returns:
        Date string, or None if value is None
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    return value.isoformat()


def format_datetime(value: datetime | None) -> str | None:
    """Format a datetime as ISO 8601, or None."""
    if value is None:
        return None
    return value.isoformat()


# =============================================================================
# Extension builders
# =============================================================================


def add_string_extension(
    extensions: list[FHIRDict], url: str | Enum, value: str | None
) -> None:
    """Append a valueString extension if value is a non-empty string."""
    if _is_blank(value):
        return
    extensions.append({"url": _url(url), "valueString": value})


def add_url_extension(
    extensions: list[FHIRDict], url: str | Enum, value: str | None
) -> None:
    """Append a valueUrl extension if value is a non-empty string."""
    if _is_blank(value):
        return
    extensions.append({"url": _url(url), "valueUrl": value})


def add_decimal_extension(
    extensions: list[FHIRDict], url: str | Enum, value: float | int | None
) -> None:
    """Append a valueDecimal extension if value is a number."""
    if not _is_number(value):
        return
    extensions.append({"url": _url(url), "valueDecimal": value})


def add_integer_extension(
    extensions: list[FHIRDict], url: str | Enum, value: int | None
) -> None:
    """Append a valueInteger extension if value is an int."""
    if not isinstance(value, int) or isinstance(value, bool):
        return
    extensions.append({"url": _url(url), "valueInteger": value})


def add_boolean_extension(
    extensions: list[FHIRDict], url: str | Enum, value: bool | None
) -> None:
    """Append a valueBoolean extension if value is explicitly True or False."""
    if not isinstance(value, bool):
        return
    extensions.append({"url": _url(url), "valueBoolean": value})


def add_date_extension(
    extensions: list[FHIRDict], url: str | Enum, value: date | None
) -> None:
    """Append a valueDate extension if value is set."""
    formatted = format_date(value)
    if formatted is None:
        return
    extensions.append({"url": _url(url), "valueDate": formatted})


def add_datetime_extension(
    extensions: list[FHIRDict], url: str | Enum, value: datetime | None
) -> None:
    """Append a valueDateTime extension if value is set."""
    formatted = format_datetime(value)
    if formatted is None:
        return
    extensions.append({"url": _url(url), "valueDateTime": formatted})


def nested_extension(url: str | Enum, children: list[FHIRDict]) -> FHIRDict | None:
    """
    Wrap child extensions under one parent extension.

    Args:
        url: Parent extension URL
        children: Child extensions

    Returns:
        {"url": url, "extension": children}, or None when there are no children
    """
    if not children:
        return None
    return {"url": _url(url), "extension": children}


# =============================================================================
# Identifier, coding and contact builders
# =============================================================================


def identifier(
    system: str | Enum | None,
    value: str | None,
    use: str | None = None,
    type_system: str | Enum | None = None,
    type_code: str | None = None,
    type_display: str | None = None,
) -> FHIRDict | None:
    """
    Create a FHIR Identifier, or None if value is empty.

    Args:
        system: Identifier system URL
        value: Identifier value
        use: Optional identifier use (e.g. "official")
        type_system: Optional type coding system
        type_code: Optional type code
        type_display: Optional type display

    Returns:
        Identifier dict or None
    """
    if _is_blank(value):
        return None

    result: FHIRDict = {}
    if use:
        result["use"] = use
    if system:
        result["system"] = _url(system)
    result["value"] = value

    if type_code:
        type_coding = coding(type_system, type_code, type_display)
        if type_coding is not None:
            result["type"] = {"coding": [type_coding]}

    return result


def add_identifier(
    identifiers: list[FHIRDict],
    system: str | Enum,
    value: str | None,
    **kwargs: Any,
) -> None:
    """Append an identifier for system if value is present."""
    built = identifier(system, value, **kwargs)
    if built is not None:
        identifiers.append(built)


def coding(
    system: str | Enum | None,
    code: str | None,
    display: str | None = None,
) -> FHIRDict | None:
    """
    Create a FHIR Coding, or None if code is empty.

    Args:
        system: Code system URL
        code: The code value
        display: Optional display text

    Returns:
        Coding dict or None
    """
    if _is_blank(code):
        return None

    result: FHIRDict = {}
    if system:
        result["system"] = _url(system)
    result["code"] = code
    if display:
        result["display"] = display
    return result


def codeable_concept(
    system: str | Enum | None,
    code: str | None,
    display: str | None = None,
    text: str | None = None,
) -> FHIRDict | None:
    """
    Create a FHIR CodeableConcept, or None if both code and text are empty.

    A concept without a code keeps only its text.
    """
    c = coding(system, code, display)
    if c is None:
        if text:
            return {"text": text}
        return None

    result: FHIRDict = {"coding": [c]}
    if text:
        result["text"] = text
    return result


def override_concept(override: Coding) -> FHIRDict:
    """CodeableConcept carrying a caller-supplied coding verbatim."""
    entry: FHIRDict = {"system": override.system, "code": override.code}
    if override.display:
        entry["display"] = override.display
    concept: FHIRDict = {"coding": [entry]}
    if override.display:
        concept["text"] = override.display
    return concept


def telecom(*contacts: tuple[str, str | None]) -> list[FHIRDict] | None:
    """
    Build a telecom list from (system, value) pairs.

    Shared by every resource carrying contact points; systems are the FHIR
    ContactPoint discriminators ("phone", "url", "email").

    Example:
        telecom(("phone", org.phone_no), ("url", org.website))
    """
    points = [
        {"system": system, "value": value}
        for system, value in contacts
        if not _is_blank(value)
    ]
    return points or None


def photo(url: str | None) -> list[FHIRDict] | None:
    """Build a single-attachment photo list, or None."""
    if _is_blank(url):
        return None
    return [{"url": url}]
