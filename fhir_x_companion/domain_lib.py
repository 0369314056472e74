"""
Helpers for reading FHIR wire structures back into domain values.

Every lookup is keyed by URL, system, reference prefix or code; none depends on
list position. Lookups return None when nothing matches and never raise for
missing data. Duplicates resolve to the first matching entry.
"""

import re
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable

from .chidian_ext import grab
from .exceptions import ExtensionDepthError
from .types import FHIRDict

# Inbound extension trees deeper than this are rejected before decoding
MAX_EXTENSION_DEPTH = 8

_EXTENSION_KEYS = ("extension", "modifierExtension")

# FHIR date with day (or month and day) omitted
_PARTIAL_DATE = re.compile(r"(?P<year>\d{4})(?:-(?P<month>\d{2}))?")


def _url(url: str | Enum) -> str:
    return url.value if isinstance(url, Enum) else url


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def as_list(value: Any) -> list:
    """Return value if it is a list, otherwise an empty list."""
    return value if isinstance(value, list) else []


def non_empty_str(value: Any) -> str | None:
    """Return value if it is a non-blank string, otherwise None."""
    if isinstance(value, str) and value.strip():
        return value
    return None


def parse_date(value: Any) -> date | None:
    """
    Parse a FHIR date (or dateTime) into a date.

    The partial forms FHIR allows for ``date`` resolve to the first day of the
    year ("2019" → 2019-01-01) or month ("2019-04" → 2019-04-01).

    Args:
        value: Date string such as "2020-01-15", "2020-01", "2020" or
            "2020-01-15T10:30:00Z"

    Returns:
        date, or None if missing or unparseable
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    partial = _PARTIAL_DATE.fullmatch(text)
    if partial:
        try:
            return date(int(partial["year"]), int(partial["month"] or 1), 1)
        except ValueError:
            return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def parse_datetime(value: Any) -> datetime | None:
    """Parse an ISO 8601 dateTime/instant, or None if missing or unparseable."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None


# =============================================================================
# Extensions
# =============================================================================


def child_extensions(extension: Any) -> list[FHIRDict]:
    """Nested extension list of an extension (empty if none)."""
    return [e for e in as_list(grab(extension, "extension")) if isinstance(e, dict)]


def filter_extensions(extensions: Any, url: str | Enum) -> list[FHIRDict]:
    """All extensions with the given URL, in wire order."""
    target = _url(url)
    return [
        ext
        for ext in as_list(extensions)
        if isinstance(ext, dict) and ext.get("url") == target
    ]


def find_extension(extensions: Any, url: str | Enum) -> FHIRDict | None:
    """First extension with the given URL, or None."""
    matches = filter_extensions(extensions, url)
    return matches[0] if matches else None


def _first_value(
    extensions: Any, url: str | Enum, key: str, accept: Callable[[Any], bool]
) -> Any:
    for ext in filter_extensions(extensions, url):
        value = ext.get(key)
        if accept(value):
            return value
    return None


def parse_string_extension(extensions: Any, url: str | Enum) -> str | None:
    """First valueString for url."""
    return _first_value(extensions, url, "valueString", lambda v: isinstance(v, str))


def parse_decimal_extension(extensions: Any, url: str | Enum) -> float | None:
    """First numeric valueDecimal for url, as float."""
    value = _first_value(extensions, url, "valueDecimal", _is_number)
    return float(value) if value is not None else None


def parse_integer_extension(extensions: Any, url: str | Enum) -> int | None:
    """First valueInteger for url."""
    return _first_value(
        extensions,
        url,
        "valueInteger",
        lambda v: isinstance(v, int) and not isinstance(v, bool),
    )


def parse_boolean_extension(extensions: Any, url: str | Enum) -> bool | None:
    """First valueBoolean for url."""
    return _first_value(extensions, url, "valueBoolean", lambda v: isinstance(v, bool))


def parse_date_extension(extensions: Any, url: str | Enum) -> date | None:
    """First parseable valueDate for url."""
    value = _first_value(
        extensions, url, "valueDate", lambda v: parse_date(v) is not None
    )
    return parse_date(value)


def parse_datetime_extension(extensions: Any, url: str | Enum) -> datetime | None:
    """First parseable valueDateTime for url."""
    value = _first_value(
        extensions, url, "valueDateTime", lambda v: parse_datetime(v) is not None
    )
    return parse_datetime(value)


def parse_url_extension(extensions: Any, url: str | Enum) -> str | None:
    """First valueUrl (or valueUri) for url."""
    for ext in filter_extensions(extensions, url):
        for key in ("valueUrl", "valueUri"):
            value = non_empty_str(ext.get(key))
            if value is not None:
                return value
    return None


def check_extension_depth(resource: Any, max_depth: int = MAX_EXTENSION_DEPTH) -> None:
    """
    Reject resources whose extension trees nest deeper than max_depth.

    Walks the payload iteratively, so an adversarial tree cannot exhaust the
    interpreter stack.

    Raises:
        ExtensionDepthError: When an extension sits below max_depth levels
    """
    stack: list[tuple[Any, int]] = [(resource, 0)]
    while stack:
        node, depth = stack.pop()
        if isinstance(node, list):
            stack.extend((item, depth) for item in node)
        elif isinstance(node, dict):
            for key, value in node.items():
                if key in _EXTENSION_KEYS and isinstance(value, list):
                    if value and depth + 1 > max_depth:
                        raise ExtensionDepthError(max_depth)
                    stack.extend((item, depth + 1) for item in value)
                elif isinstance(value, (dict, list)):
                    stack.append((value, depth))


# =============================================================================
# Identifiers, codings and contact points
# =============================================================================


def find_identifier_value(identifiers: Any, system: str | Enum) -> str | None:
    """Value of the first identifier with the given system."""
    target = _url(system)
    for ident in as_list(identifiers):
        if isinstance(ident, dict) and ident.get("system") == target:
            value = non_empty_str(ident.get("value"))
            if value is not None:
                return value
    return None


def find_telecom_value(telecom: Any, system: str) -> str | None:
    """Value of the first contact point with the given system."""
    for point in as_list(telecom):
        if isinstance(point, dict) and point.get("system") == system:
            value = non_empty_str(point.get("value"))
            if value is not None:
                return value
    return None


def codings(concept: Any) -> list[FHIRDict]:
    """Codings of a CodeableConcept (empty if none)."""
    return [c for c in as_list(grab(concept, "coding")) if isinstance(c, dict)]


def find_coding(
    concepts: Any,
    system: str | Enum | None = None,
    codes: Any = None,
) -> FHIRDict | None:
    """
    First coding across one or more CodeableConcepts matching system and code.

    Args:
        concepts: A CodeableConcept or a list of them
        system: Required coding system, or None for any
        codes: Container of accepted codes, or None for any non-empty code

    Returns:
        The matching coding dict, or None
    """
    target = _url(system) if system is not None else None
    concept_list = concepts if isinstance(concepts, list) else [concepts]
    for concept in concept_list:
        for c in codings(concept):
            code = c.get("code")
            if not isinstance(code, str) or not code:
                continue
            if target is not None and c.get("system") != target:
                continue
            if codes is not None and code not in codes:
                continue
            return c
    return None


def concept_text(concept: Any) -> str | None:
    """Trimmed text of a CodeableConcept, or None."""
    text = non_empty_str(grab(concept, "text"))
    return text.strip() if text is not None else None


def first_item(value: Any) -> FHIRDict | None:
    """First dict element of a list, or None."""
    for item in as_list(value):
        if isinstance(item, dict):
            return item
    return None
