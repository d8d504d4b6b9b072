"""Location service.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from collections.abc import Mapping
from typing import Any

from catalog.conf import CatalogSettings
from catalog.domain import Location, LocationDetails, LocationDraft, LocationId
from catalog.domain.drafts import field_names
from catalog.domain.errors import LocationNotFoundError
from catalog.domain.geo import bounding_box, find_within_radius
from catalog.domain.validation import validate_location
from catalog.services.geo import resolve_search_area
from catalog.services.queries import Page, apply_changes, clamp_page, parse_id
from catalog.stores.interfaces import LocationStore, TheatreStore

logger = logging.getLogger(__name__)

LOCATION_FIELDS = field_names(LocationDraft)


class LocationService:
    """Service for location catalog operations."""

    def __init__(
        self,
        store: LocationStore,
        theatre_store: TheatreStore,
        settings: CatalogSettings | None = None,
    ) -> None:
        self._store = store
        self._theatres = theatre_store
        self._settings = settings or CatalogSettings()

    def create_location(self, draft: LocationDraft) -> Location:
        """Validate and persist a new location.

        Raises:
            ValidationFailedError: If a field is out of bounds.
        """
        validate_location(draft)
        location = self._store.add(draft)
        logger.info("Created location %s (%s)", location.id, location.name)
        return location

    def get_location(self, location_id: str) -> Location:
        """Return a location by ID.

        Raises:
            InvalidInputError: If the location_id is not a valid UUID.
            LocationNotFoundError: If the location does not exist or was deleted.
        """
        parsed = parse_id(location_id, LocationId)
        location = self._store.get(parsed)
        if location is None:
            raise LocationNotFoundError(str(parsed))
        return location

    def get_location_details(self, location_id: str) -> LocationDetails:
        """Return a location with the live theatres it hosts.

        Raises:
            InvalidInputError: If the location_id is not a valid UUID.
            LocationNotFoundError: If the location does not exist or was deleted.
        """
        location = self.get_location(location_id)
        return LocationDetails(location, self._theatres.list_by_location(location.id))

    def list_locations(self, limit: int | None = None, offset: int | None = None) -> Page[Location]:
        limit, offset = clamp_page(limit, offset, self._settings)
        return Page(tuple(self._store.list_page(limit, offset)), limit, offset)

    def update_location(self, location_id: str, changes: Mapping[str, Any]) -> Location:
        """Overwrite the supplied fields of a location.

        Raises:
            InvalidInputError: If the id is malformed or a field is unknown.
            LocationNotFoundError: If the location does not exist or was deleted.
            ValidationFailedError: If the resulting location is out of bounds.
        """
        current = self.get_location(location_id)
        updated = apply_changes(current, changes, LOCATION_FIELDS)
        validate_location(updated)
        location = self._store.save(updated)
        logger.info("Updated location %s", location.id)
        return location

    def delete_location(self, location_id: str) -> None:
        """Soft delete a location.

        Raises:
            InvalidInputError: If the location_id is not a valid UUID.
            LocationNotFoundError: If the location does not exist or was already deleted.
        """
        parsed = parse_id(location_id, LocationId)
        if not self._store.delete(parsed):
            raise LocationNotFoundError(str(parsed))
        logger.info("Deleted location %s", parsed)

    def list_active_locations(self) -> list[Location]:
        return self._store.list_active()

    def search_locations(self, query: str) -> list[Location]:
        """Match name, city or country. An empty query matches nothing."""
        if not query:
            return []
        return self._store.search(query)

    def find_nearby_locations(
        self, latitude: float, longitude: float, radius_km: float | None = None
    ) -> list[Location]:
        """Return located locations within the radius, nearest first.

        Raises:
            ValidationFailedError: If the center coordinates are out of range.
        """
        center, radius_km = resolve_search_area(latitude, longitude, radius_km, self._settings)
        candidates = self._store.list_in_box(bounding_box(center, radius_km))
        return find_within_radius(center, radius_km, candidates, _position)


def _position(location: Location) -> tuple[float | None, float | None]:
    return location.latitude, location.longitude
