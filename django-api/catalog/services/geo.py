"""Input handling for proximity queries."""

from catalog.conf import CatalogSettings
from catalog.domain.errors import ValidationFailedError
from catalog.domain.validation import check_latitude, check_longitude
from catalog.domain.value_objects import GeoPoint


def resolve_search_area(
    latitude: float,
    longitude: float,
    radius_km: float | None,
    settings: CatalogSettings,
) -> tuple[GeoPoint, float]:
    """Validate the center and settle the radius.

    Out-of-range coordinates are rejected. A missing or non-positive
    radius is replaced by the configured default rather than rejected.

    Raises:
        ValidationFailedError: If latitude or longitude is out of range.
    """
    errors = {
        field: msg
        for field, msg in (
            ("latitude", check_latitude(latitude)),
            ("longitude", check_longitude(longitude)),
        )
        if msg is not None
    }
    if errors:
        raise ValidationFailedError(errors)
    # NaN compares false, so it falls back too
    if radius_km is None or not radius_km > 0:
        radius_km = settings.default_radius_km
    return GeoPoint(latitude, longitude), radius_km
