"""Store interfaces (repository pattern).

Stores must be swappable and return domain models. Every query excludes
soft-deleted records unless a method says otherwise.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import date
from typing import Generic, TypeVar

from catalog.domain import (
    CategoryDraft,
    Location,
    LocationDraft,
    LocationId,
    Show,
    ShowDraft,
    ShowId,
    ShowType,
    ShowTypeId,
    Theatre,
    TheatreDraft,
    TheatreId,
    TheatreType,
    TheatreTypeId,
)
from catalog.domain.geo import BoundingBox

C = TypeVar("C", TheatreType, ShowType)
CId = TypeVar("CId", TheatreTypeId, ShowTypeId)


class LocationStore(ABC):
    """Interface for location persistence operations."""

    @abstractmethod
    def add(self, draft: LocationDraft) -> Location:
        """Persist a new location and return it with server-assigned fields."""
        ...

    @abstractmethod
    def get(self, location_id: LocationId, include_deleted: bool = False) -> Location | None:
        """Return a location by ID, or None if not found."""
        ...

    @abstractmethod
    def get_many(self, location_ids: Iterable[LocationId]) -> dict[LocationId, Location]:
        """Return the live locations among ``location_ids``, keyed by id."""
        ...

    @abstractmethod
    def list_page(self, limit: int, offset: int) -> list[Location]:
        """Return a page of locations ordered by created_at descending."""
        ...

    @abstractmethod
    def save(self, location: Location) -> Location:
        """Overwrite a live location and return the stored state."""
        ...

    @abstractmethod
    def delete(self, location_id: LocationId) -> bool:
        """Mark a live location deleted. Return False if none was live."""
        ...

    @abstractmethod
    def list_active(self) -> list[Location]:
        ...

    @abstractmethod
    def search(self, query: str) -> list[Location]:
        """Case-insensitive substring match on name, city and country."""
        ...

    @abstractmethod
    def list_in_box(self, box: BoundingBox) -> list[Location]:
        """Return located locations inside ``box``."""
        ...


class CategoryStore(ABC, Generic[C, CId]):
    """Interface shared by the theatre type and show type stores."""

    @abstractmethod
    def add(self, draft: CategoryDraft) -> C:
        ...

    @abstractmethod
    def get(self, category_id: CId, include_deleted: bool = False) -> C | None:
        ...

    @abstractmethod
    def get_many(self, category_ids: Iterable[CId]) -> dict[CId, C]:
        ...

    @abstractmethod
    def get_by_name(self, name: str) -> C | None:
        """Return the live category with exactly this name, or None."""
        ...

    @abstractmethod
    def list_page(self, limit: int, offset: int) -> list[C]:
        ...

    @abstractmethod
    def save(self, category: C) -> C:
        ...

    @abstractmethod
    def delete(self, category_id: CId) -> bool:
        ...

    @abstractmethod
    def list_active(self) -> list[C]:
        ...


class TheatreTypeStore(CategoryStore[TheatreType, TheatreTypeId]):
    """Interface for theatre type persistence operations."""


class ShowTypeStore(CategoryStore[ShowType, ShowTypeId]):
    """Interface for show type persistence operations."""


class TheatreStore(ABC):
    """Interface for theatre persistence operations."""

    @abstractmethod
    def add(self, draft: TheatreDraft) -> Theatre:
        ...

    @abstractmethod
    def get(self, theatre_id: TheatreId, include_deleted: bool = False) -> Theatre | None:
        ...

    @abstractmethod
    def get_many(self, theatre_ids: Iterable[TheatreId]) -> dict[TheatreId, Theatre]:
        ...

    @abstractmethod
    def list_page(self, limit: int, offset: int) -> list[Theatre]:
        ...

    @abstractmethod
    def save(self, theatre: Theatre) -> Theatre:
        ...

    @abstractmethod
    def delete(self, theatre_id: TheatreId) -> bool:
        ...

    @abstractmethod
    def list_by_location(self, location_id: LocationId) -> list[Theatre]:
        ...

    @abstractmethod
    def list_by_theatre_type(self, theatre_type_id: TheatreTypeId) -> list[Theatre]:
        ...

    @abstractmethod
    def list_active(self) -> list[Theatre]:
        ...

    @abstractmethod
    def list_featured(self) -> list[Theatre]:
        ...

    @abstractmethod
    def search(self, query: str) -> list[Theatre]:
        """Case-insensitive substring match on name and description."""
        ...

    @abstractmethod
    def list_located_in_box(self, box: BoundingBox) -> list[tuple[Theatre, Location]]:
        """Return theatres paired with their live location, for locations inside ``box``."""
        ...


class ShowStore(ABC):
    """Interface for show persistence operations."""

    @abstractmethod
    def add(self, draft: ShowDraft) -> Show:
        ...

    @abstractmethod
    def get(self, show_id: ShowId, include_deleted: bool = False) -> Show | None:
        ...

    @abstractmethod
    def list_page(self, limit: int, offset: int) -> list[Show]:
        ...

    @abstractmethod
    def save(self, show: Show) -> Show:
        ...

    @abstractmethod
    def delete(self, show_id: ShowId) -> bool:
        ...

    @abstractmethod
    def list_by_theatre(self, theatre_id: TheatreId) -> list[Show]:
        ...

    @abstractmethod
    def list_by_show_type(self, show_type_id: ShowTypeId) -> list[Show]:
        ...

    @abstractmethod
    def list_active(self) -> list[Show]:
        ...

    @abstractmethod
    def list_featured(self) -> list[Show]:
        ...

    @abstractmethod
    def list_current(self, today: date) -> list[Show]:
        """Active shows with start_date <= today and no end_date or end_date >= today."""
        ...

    @abstractmethod
    def list_upcoming(self, today: date) -> list[Show]:
        """Active shows with start_date after today."""
        ...

    @abstractmethod
    def search(self, query: str) -> list[Show]:
        """Case-insensitive substring match on title, description, director and cast."""
        ...
