"""Address ⇄ FHIR Address, shared by the Organization, RelatedPerson and
Practitioner codecs."""

from typing import Any

from .chidian_ext import grab, mapper
from .domain_lib import as_list, child_extensions, filter_extensions, non_empty_str
from .fhir_lib import nested_extension
from .models import Address
from .types import FHIRDict
from .urls import Shared


def _is_decimal(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _geolocation_extension(lat: float | None, lon: float | None) -> FHIRDict | None:
    """Build geolocation extension if both lat/lon present."""
    if lat is None or lon is None:
        return None
    return nested_extension(
        Shared.GEOLOCATION,
        [
            {"url": Shared.GEOLOCATION_LATITUDE.value, "valueDecimal": lat},
            {"url": Shared.GEOLOCATION_LONGITUDE.value, "valueDecimal": lon},
        ],
    )


@mapper
def to_fhir_address(address: Address) -> FHIRDict:
    """Convert a domain Address to a FHIR Address.

    Fields without a value are omitted; an empty domain address yields {}.
    """
    return {
        "line": [address.address_line],
        "city": address.city,
        "state": address.state,
        "postalCode": address.postal_code,
        "country": address.country,
        "extension": [_geolocation_extension(address.latitude, address.longitude)],
    }


def _extract_geolocation(extensions: Any) -> tuple[float | None, float | None]:
    """Extract lat/lon; a partial or non-decimal pair yields (None, None)."""
    for ext in filter_extensions(extensions, Shared.GEOLOCATION):
        lat = lon = None
        for child in child_extensions(ext):
            value = child.get("valueDecimal")
            if not _is_decimal(value):
                continue
            if child.get("url") == Shared.GEOLOCATION_LATITUDE.value and lat is None:
                lat = float(value)
            elif child.get("url") == Shared.GEOLOCATION_LONGITUDE.value and lon is None:
                lon = float(value)
        if lat is not None and lon is not None:
            return lat, lon
    return None, None


def to_domain_address(address: Any) -> Address:
    """Convert a FHIR Address to a domain Address.

    An absent address yields an empty Address rather than an error.
    """
    lines = [line for line in as_list(grab(address, "line")) if non_empty_str(line)]
    lat, lon = _extract_geolocation(grab(address, "extension"))

    return Address(
        address_line=lines[0] if lines else None,
        country=non_empty_str(grab(address, "country")),
        city=non_empty_str(grab(address, "city")),
        state=non_empty_str(grab(address, "state")),
        postal_code=non_empty_str(grab(address, "postalCode")),
        latitude=lat,
        longitude=lon,
    )
