"""Theatre type and show type services.

Both category entities behave the same way: a name unique among live
records, a description and an active flag. ``CategoryService`` holds that
behaviour; the subclasses bind it to a store, an id type and the
not-found error for their kind.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar

from catalog.conf import CatalogSettings
from catalog.domain import CategoryDraft, ShowType, ShowTypeId, TheatreType, TheatreTypeId
from catalog.domain.drafts import field_names
from catalog.domain.errors import (
    EntityNotFoundError,
    InvalidInputError,
    ShowTypeNotFoundError,
    TheatreTypeNotFoundError,
)
from catalog.domain.validation import validate_category
from catalog.services.queries import Page, apply_changes, check_unique_name, clamp_page, parse_id
from catalog.stores.interfaces import CategoryStore, ShowTypeStore, TheatreTypeStore

logger = logging.getLogger(__name__)

C = TypeVar("C", TheatreType, ShowType)
CId = TypeVar("CId", TheatreTypeId, ShowTypeId)

CATEGORY_FIELDS = field_names(CategoryDraft)


class CategoryService(Generic[C, CId]):
    """Shared operations for name-unique lookup tables."""

    entity_label: str
    id_type: type[CId]
    not_found: Callable[[str], EntityNotFoundError]

    def __init__(self, store: CategoryStore[C, CId], settings: CatalogSettings | None = None) -> None:
        self._store = store
        self._settings = settings or CatalogSettings()

    def create(self, draft: CategoryDraft) -> C:
        """Validate and persist a new category.

        Raises:
            ValidationFailedError: If the name or description is out of bounds.
            DuplicateEntryError: If a live category already has the name.
        """
        validate_category(draft)
        check_unique_name(self._store.get_by_name, draft.name, self.entity_label)
        category = self._store.add(draft)
        logger.info("Created %s %s (%s)", self.entity_label, category.id, category.name)
        return category

    def get(self, category_id: str) -> C:
        """Return a category by ID.

        Raises:
            InvalidInputError: If the id is not a valid UUID.
            EntityNotFoundError: The kind-specific error if missing or deleted.
        """
        parsed = parse_id(category_id, self.id_type)
        category = self._store.get(parsed)
        if category is None:
            raise self.not_found(str(parsed))
        return category

    def get_by_name(self, name: str) -> C:
        """Return the live category with exactly this name.

        Raises:
            InvalidInputError: If the name is empty.
            EntityNotFoundError: The kind-specific error if no live category matches.
        """
        if not name:
            raise InvalidInputError("name cannot be empty")
        category = self._store.get_by_name(name)
        if category is None:
            raise self.not_found(None)
        return category

    def list_page(self, limit: int | None = None, offset: int | None = None) -> Page[C]:
        limit, offset = clamp_page(limit, offset, self._settings)
        return Page(tuple(self._store.list_page(limit, offset)), limit, offset)

    def update(self, category_id: str, changes: Mapping[str, Any]) -> C:
        """Overwrite the supplied fields of a category.

        Keeping the current name is always allowed; a new name must not be
        used by another live category.

        Raises:
            DuplicateEntryError: If another live category has the new name.
        """
        current = self.get(category_id)
        updated = apply_changes(current, changes, CATEGORY_FIELDS)
        validate_category(updated)
        check_unique_name(self._store.get_by_name, updated.name, self.entity_label, current.id)
        category = self._store.save(updated)
        logger.info("Updated %s %s", self.entity_label, category.id)
        return category

    def delete(self, category_id: str) -> None:
        """Soft delete a category.

        Raises:
            EntityNotFoundError: The kind-specific error if missing or already deleted.
        """
        parsed = parse_id(category_id, self.id_type)
        if not self._store.delete(parsed):
            raise self.not_found(str(parsed))
        logger.info("Deleted %s %s", self.entity_label, parsed)

    def list_active(self) -> list[C]:
        return self._store.list_active()


class TheatreTypeService(CategoryService[TheatreType, TheatreTypeId]):
    """Service for theatre type operations."""

    entity_label = "theatre type"
    id_type = TheatreTypeId
    not_found = TheatreTypeNotFoundError

    def __init__(self, store: TheatreTypeStore, settings: CatalogSettings | None = None) -> None:
        super().__init__(store, settings)


class ShowTypeService(CategoryService[ShowType, ShowTypeId]):
    """Service for show type operations."""

    entity_label = "show type"
    id_type = ShowTypeId
    not_found = ShowTypeNotFoundError

    def __init__(self, store: ShowTypeStore, settings: CatalogSettings | None = None) -> None:
        super().__init__(store, settings)
