"""Theatre service."""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import Any

from catalog.conf import CatalogSettings
from catalog.domain import (
    Location,
    LocationId,
    Theatre,
    TheatreDetails,
    TheatreDraft,
    TheatreId,
    TheatreTypeId,
)
from catalog.domain.drafts import field_names
from catalog.domain.errors import (
    LocationNotFoundError,
    TheatreNotFoundError,
    TheatreTypeNotFoundError,
)
from catalog.domain.geo import bounding_box, find_within_radius
from catalog.domain.validation import validate_theatre
from catalog.services.geo import resolve_search_area
from catalog.services.queries import (
    Page,
    apply_changes,
    clamp_page,
    parse_id,
    require_reference,
)
from catalog.stores.interfaces import LocationStore, TheatreStore, TheatreTypeStore

logger = logging.getLogger(__name__)

THEATRE_FIELDS = field_names(TheatreDraft)


class TheatreService:
    """Service for theatre catalog operations."""

    def __init__(
        self,
        store: TheatreStore,
        location_store: LocationStore,
        theatre_type_store: TheatreTypeStore,
        settings: CatalogSettings | None = None,
    ) -> None:
        self._store = store
        self._locations = location_store
        self._theatre_types = theatre_type_store
        self._settings = settings or CatalogSettings()

    def create_theatre(self, draft: TheatreDraft) -> Theatre:
        """Validate and persist a new theatre.

        Raises:
            InvalidInputError: If a referenced id is malformed.
            ValidationFailedError: If a field is out of bounds.
            LocationNotFoundError: If the location is missing or deleted.
            TheatreTypeNotFoundError: If the theatre type is missing or deleted.
        """
        draft = self._normalize_references(draft)
        validate_theatre(draft)
        self._check_references(draft.location_id, draft.theatre_type_id)
        theatre = self._store.add(draft)
        logger.info("Created theatre %s (%s)", theatre.id, theatre.name)
        return theatre

    def get_theatre(self, theatre_id: str) -> Theatre:
        """Return a theatre by ID.

        Raises:
            InvalidInputError: If the theatre_id is not a valid UUID.
            TheatreNotFoundError: If the theatre does not exist or was deleted.
        """
        parsed = parse_id(theatre_id, TheatreId)
        theatre = self._store.get(parsed)
        if theatre is None:
            raise TheatreNotFoundError(str(parsed))
        return theatre

    def list_theatres(self, limit: int | None = None, offset: int | None = None) -> Page[Theatre]:
        limit, offset = clamp_page(limit, offset, self._settings)
        return Page(tuple(self._store.list_page(limit, offset)), limit, offset)

    def update_theatre(self, theatre_id: str, changes: Mapping[str, Any]) -> Theatre:
        """Overwrite the supplied fields of a theatre.

        References are re-checked on every update, even when unchanged.

        Raises:
            TheatreNotFoundError: If the theatre does not exist or was deleted.
            ValidationFailedError: If the resulting theatre is out of bounds.
            LocationNotFoundError: If the location is missing or deleted.
            TheatreTypeNotFoundError: If the theatre type is missing or deleted.
        """
        current = self.get_theatre(theatre_id)
        updated = self._normalize_references(apply_changes(current, changes, THEATRE_FIELDS))
        validate_theatre(updated)
        self._check_references(updated.location_id, updated.theatre_type_id)
        theatre = self._store.save(updated)
        logger.info("Updated theatre %s", theatre.id)
        return theatre

    def delete_theatre(self, theatre_id: str) -> None:
        """Soft delete a theatre. Its shows are left untouched.

        Raises:
            TheatreNotFoundError: If the theatre does not exist or was already deleted.
        """
        parsed = parse_id(theatre_id, TheatreId)
        if not self._store.delete(parsed):
            raise TheatreNotFoundError(str(parsed))
        logger.info("Deleted theatre %s", parsed)

    def list_theatres_by_location(self, location_id: str) -> list[Theatre]:
        return self._store.list_by_location(parse_id(location_id, LocationId))

    def list_theatres_by_theatre_type(self, theatre_type_id: str) -> list[Theatre]:
        return self._store.list_by_theatre_type(parse_id(theatre_type_id, TheatreTypeId))

    def list_active_theatres(self) -> list[Theatre]:
        return self._store.list_active()

    def list_featured_theatres(self) -> list[Theatre]:
        return self._store.list_featured()

    def search_theatres(self, query: str) -> list[Theatre]:
        """Match name or description. An empty query matches nothing."""
        if not query:
            return []
        return self._store.search(query)

    def find_nearby_theatres(
        self, latitude: float, longitude: float, radius_km: float | None = None
    ) -> list[Theatre]:
        """Return theatres whose location lies within the radius, nearest first.

        Raises:
            ValidationFailedError: If the center coordinates are out of range.
        """
        center, radius_km = resolve_search_area(latitude, longitude, radius_km, self._settings)
        candidates = self._store.list_located_in_box(bounding_box(center, radius_km))
        matches = find_within_radius(center, radius_km, candidates, _position)
        return [theatre for theatre, _ in matches]

    def describe_theatres(self, theatres: Sequence[Theatre]) -> list[TheatreDetails]:
        """Attach each theatre's location and theatre type.

        References are read in one batch per store, whatever the number
        of theatres.
        """
        locations = self._locations.get_many({theatre.location_id for theatre in theatres})
        theatre_types = self._theatre_types.get_many(
            {theatre.theatre_type_id for theatre in theatres}
        )
        return [
            TheatreDetails(
                theatre,
                locations.get(theatre.location_id),
                theatre_types.get(theatre.theatre_type_id),
            )
            for theatre in theatres
        ]

    def _normalize_references(self, draft: TheatreDraft | Theatre) -> Any:
        return replace(
            draft,
            location_id=parse_id(draft.location_id, LocationId),
            theatre_type_id=parse_id(draft.theatre_type_id, TheatreTypeId),
        )

    def _check_references(self, location_id: LocationId, theatre_type_id: TheatreTypeId) -> None:
        require_reference(self._locations.get, location_id, LocationNotFoundError)
        require_reference(self._theatre_types.get, theatre_type_id, TheatreTypeNotFoundError)


def _position(pair: tuple[Theatre, Location]) -> tuple[float | None, float | None]:
    _, location = pair
    return location.latitude, location.longitude
