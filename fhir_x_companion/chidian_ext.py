"""
Chidian extensions for the companion FHIR mappings.

Provides helpers that integrate with chidian's grab() and @mapper:
- coalesce(): Try multiple paths, return first non-None
- Reexports from chidian for convenience
"""

from typing import Any, Callable

from chidian import KEEP, grab, mapper


def coalesce(
    source: dict | list,
    *paths: str,
    default: Any = None,
    apply: Callable | None = None,
) -> Any:
    """
    Return the first non-None value from multiple paths.

    Args:
        source: Source wire JSON
        *paths: Path strings to try in order
        default: Default if all paths return None
        apply: Optional function to apply to the result

    Returns:
        First non-None value (optionally transformed), or default

    Example:
        # Accept both spellings of the appointment speciality
        coalesce(d, "specialty", "speciality")
    """
    for path in paths:
        result = grab(source, path)
        if result is not None:
            if apply is not None:
                return apply(result)
            return result
    return default


__all__ = [
    "coalesce",
    "grab",
    "mapper",
    "KEEP",
]
