"""Great-circle proximity queries.

Distances are in kilometres on a spherical Earth. Stores may narrow the
candidate set with ``bounding_box`` first; the haversine check in
``find_within_radius`` is the one that decides membership.
"""

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TypeVar

from catalog.domain.value_objects import GeoPoint

EARTH_RADIUS_KM = 6371.0
KM_PER_DEGREE_LATITUDE = math.pi * EARTH_RADIUS_KM / 180

T = TypeVar("T")

Position = tuple[float | None, float | None]


def haversine_km(a: GeoPoint, b: GeoPoint) -> float:
    """Return the great-circle distance between two points."""
    lat1, lat2 = math.radians(a.latitude), math.radians(b.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(b.longitude - a.longitude)
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(h)))


def find_within_radius(
    center: GeoPoint,
    radius_km: float,
    candidates: Iterable[T],
    position: Callable[[T], Position],
) -> list[T]:
    """Return the candidates within ``radius_km`` of ``center``, nearest first.

    ``position`` maps a candidate to its ``(latitude, longitude)``. A
    candidate missing either coordinate cannot be located and is skipped.
    """
    matches: list[tuple[float, int, T]] = []
    for index, candidate in enumerate(candidates):
        latitude, longitude = position(candidate)
        if latitude is None or longitude is None:
            continue
        distance = haversine_km(center, GeoPoint(latitude, longitude))
        if distance <= radius_km:
            matches.append((distance, index, candidate))
    matches.sort(key=lambda match: (match[0], match[1]))
    return [candidate for _, _, candidate in matches]


@dataclass(frozen=True)
class BoundingBox:
    """Latitude/longitude rectangle enclosing a search circle.

    ``min_longitude``/``max_longitude`` are ``None`` when every longitude
    must be considered (the circle wraps the antimeridian or a pole).
    """

    min_latitude: float
    max_latitude: float
    min_longitude: float | None
    max_longitude: float | None

    def contains(self, latitude: float, longitude: float) -> bool:
        if not self.min_latitude <= latitude <= self.max_latitude:
            return False
        if self.min_longitude is None or self.max_longitude is None:
            return True
        return self.min_longitude <= longitude <= self.max_longitude


def bounding_box(center: GeoPoint, radius_km: float) -> BoundingBox:
    """Return a box that contains every point within ``radius_km`` of ``center``."""
    delta_lat = radius_km / KM_PER_DEGREE_LATITUDE
    min_lat = center.latitude - delta_lat
    max_lat = center.latitude + delta_lat
    if min_lat <= -90 or max_lat >= 90:
        return BoundingBox(max(min_lat, -90.0), min(max_lat, 90.0), None, None)

    angular = radius_km / EARTH_RADIUS_KM
    ratio = math.sin(angular) / math.cos(math.radians(center.latitude))
    if ratio >= 1:
        return BoundingBox(min_lat, max_lat, None, None)
    delta_lon = math.degrees(math.asin(ratio))
    min_lon = center.longitude - delta_lon
    max_lon = center.longitude + delta_lon
    if min_lon < -180 or max_lon > 180:
        return BoundingBox(min_lat, max_lat, None, None)
    return BoundingBox(min_lat, max_lat, min_lon, max_lon)
