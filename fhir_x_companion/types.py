"""
Shared types and reference helpers for companion FHIR conversions.
"""

from typing import Any, TypeAlias

# Reference string format: "{ResourceType}/{id}"
RefString: TypeAlias = str

# Wire JSON object (a resource or one of its elements)
FHIRDict: TypeAlias = dict[str, Any]


def make_ref(
    resource_type: str, resource_id: str | None, display: str | None = None
) -> FHIRDict | None:
    """Build {"reference": "Type/id"} (plus display), or None if id is empty.

    An id that already carries the "Type/" prefix is not prefixed twice.
    """
    if resource_id is None:
        return None
    rid = str(resource_id).strip()
    if not rid:
        return None
    prefix = f"{resource_type}/"
    ref: FHIRDict = {"reference": rid if rid.startswith(prefix) else prefix + rid}
    if display:
        ref["display"] = display
    return ref


def extract_ref(ref: Any) -> RefString | None:
    """Extract the reference string from a FHIR Reference, or None."""
    if not isinstance(ref, dict):
        return None
    value = ref.get("reference")
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


def extract_id_from_ref(ref: Any) -> str | None:
    """Extract just the ID from a FHIR Reference.

    {"reference": "Patient/123"} → "123"
    """
    ref_str = extract_ref(ref)
    if ref_str is None:
        return None
    return ref_str.split("/")[-1] if "/" in ref_str else ref_str


def ref_has_prefix(ref: Any, resource_type: str) -> bool:
    """True when the reference points at a resource of the given type."""
    ref_str = extract_ref(ref)
    return ref_str is not None and ref_str.startswith(f"{resource_type}/")
