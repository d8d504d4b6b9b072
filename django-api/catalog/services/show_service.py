"""Show service."""

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import replace
from datetime import date
from typing import Any

from catalog.conf import CatalogSettings
from catalog.domain import Show, ShowDetails, ShowDraft, ShowId, ShowTypeId, TheatreId
from catalog.domain.drafts import field_names
from catalog.domain.errors import ShowNotFoundError, ShowTypeNotFoundError, TheatreNotFoundError
from catalog.domain.validation import validate_show
from catalog.services.queries import Page, apply_changes, clamp_page, parse_id, require_reference
from catalog.stores.interfaces import ShowStore, ShowTypeStore, TheatreStore

logger = logging.getLogger(__name__)

SHOW_FIELDS = field_names(ShowDraft)


class ShowService:
    """Service for show catalog operations.

    ``today`` supplies the date that "current" and "upcoming" are measured
    against.
    """

    def __init__(
        self,
        store: ShowStore,
        theatre_store: TheatreStore,
        show_type_store: ShowTypeStore,
        settings: CatalogSettings | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._store = store
        self._theatres = theatre_store
        self._show_types = show_type_store
        self._settings = settings or CatalogSettings()
        self._today = today

    def create_show(self, draft: ShowDraft) -> Show:
        """Validate and persist a new show.

        Raises:
            ValidationFailedError: If a field is out of bounds or the dates are reversed.
            TheatreNotFoundError: If the theatre is missing or deleted.
            ShowTypeNotFoundError: If the show type is missing or deleted.
        """
        draft = self._normalize_references(draft)
        validate_show(draft)
        self._check_references(draft.theatre_id, draft.show_type_id)
        show = self._store.add(draft)
        logger.info("Created show %s (%s)", show.id, show.title)
        return show

    def get_show(self, show_id: str) -> Show:
        """Return a show by ID.

        Raises:
            InvalidInputError: If the show_id is not a valid UUID.
            ShowNotFoundError: If the show does not exist or was deleted.
        """
        parsed = parse_id(show_id, ShowId)
        show = self._store.get(parsed)
        if show is None:
            raise ShowNotFoundError(str(parsed))
        return show

    def list_shows(self, limit: int | None = None, offset: int | None = None) -> Page[Show]:
        limit, offset = clamp_page(limit, offset, self._settings)
        return Page(tuple(self._store.list_page(limit, offset)), limit, offset)

    def update_show(self, show_id: str, changes: Mapping[str, Any]) -> Show:
        """Overwrite the supplied fields of a show.

        The date range is checked on the merged result, so moving only the
        start date past the stored end date is rejected.

        Raises:
            ShowNotFoundError: If the show does not exist or was deleted.
            ValidationFailedError: If the resulting show is out of bounds.
            TheatreNotFoundError: If the theatre is missing or deleted.
            ShowTypeNotFoundError: If the show type is missing or deleted.
        """
        current = self.get_show(show_id)
        updated = self._normalize_references(apply_changes(current, changes, SHOW_FIELDS))
        validate_show(updated)
        self._check_references(updated.theatre_id, updated.show_type_id)
        show = self._store.save(updated)
        logger.info("Updated show %s", show.id)
        return show

    def delete_show(self, show_id: str) -> None:
        """Soft delete a show.

        Raises:
            ShowNotFoundError: If the show does not exist or was already deleted.
        """
        parsed = parse_id(show_id, ShowId)
        if not self._store.delete(parsed):
            raise ShowNotFoundError(str(parsed))
        logger.info("Deleted show %s", parsed)

    def list_shows_by_theatre(self, theatre_id: str) -> list[Show]:
        return self._store.list_by_theatre(parse_id(theatre_id, TheatreId))

    def list_shows_by_show_type(self, show_type_id: str) -> list[Show]:
        return self._store.list_by_show_type(parse_id(show_type_id, ShowTypeId))

    def list_active_shows(self) -> list[Show]:
        return self._store.list_active()

    def list_featured_shows(self) -> list[Show]:
        return self._store.list_featured()

    def list_current_shows(self) -> list[Show]:
        """Active shows that have started and not yet ended."""
        return self._store.list_current(self._today())

    def list_upcoming_shows(self) -> list[Show]:
        """Active shows starting after today."""
        return self._store.list_upcoming(self._today())

    def search_shows(self, query: str) -> list[Show]:
        """Match title, description, director or cast. An empty query matches nothing."""
        if not query:
            return []
        return self._store.search(query)

    def describe_shows(self, shows: Sequence[Show]) -> list[ShowDetails]:
        """Attach each show's theatre and show type, one batch read per store."""
        theatres = self._theatres.get_many({show.theatre_id for show in shows})
        show_types = self._show_types.get_many({show.show_type_id for show in shows})
        return [
            ShowDetails(show, theatres.get(show.theatre_id), show_types.get(show.show_type_id))
            for show in shows
        ]

    def _normalize_references(self, draft: ShowDraft | Show) -> Any:
        return replace(
            draft,
            theatre_id=parse_id(draft.theatre_id, TheatreId),
            show_type_id=parse_id(draft.show_type_id, ShowTypeId),
        )

    def _check_references(self, theatre_id: TheatreId, show_type_id: ShowTypeId) -> None:
        require_reference(self._theatres.get, theatre_id, TheatreNotFoundError)
        require_reference(self._show_types.get, show_type_id, ShowTypeNotFoundError)
