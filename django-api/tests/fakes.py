"""In-memory stores for service tests.

They implement the store interfaces with plain dicts, keep the same
ordering (newest first) and hide soft-deleted rows the way the Django
stores do. ``calls`` records every store method invoked.
"""

from dataclasses import fields, replace
from datetime import UTC, date, datetime
from typing import Any
from uuid import uuid4

from catalog.domain import (
    Location,
    LocationId,
    Show,
    ShowId,
    ShowType,
    ShowTypeId,
    Theatre,
    TheatreId,
    TheatreType,
    TheatreTypeId,
)
from catalog.domain.geo import BoundingBox
from catalog.stores.interfaces import (
    LocationStore,
    ShowStore,
    ShowTypeStore,
    TheatreStore,
    TheatreTypeStore,
)


class _MemoryStore:
    entity_cls: type
    id_cls: type
    search_fields: tuple[str, ...] = ()

    def __init__(self) -> None:
        self.rows: dict[Any, Any] = {}
        self.calls: list[str] = []

    def _live(self) -> list[Any]:
        return [row for row in reversed(self.rows.values()) if row.deleted_at is None]

    def add(self, draft: Any) -> Any:
        self.calls.append("add")
        now = datetime.now(UTC)
        values = {f.name: getattr(draft, f.name) for f in fields(draft)}
        entity = self.entity_cls(id=self.id_cls(uuid4()), created_at=now, updated_at=now, **values)
        self.rows[entity.id] = entity
        return entity

    def get(self, entity_id: Any, include_deleted: bool = False) -> Any | None:
        self.calls.append("get")
        row = self.rows.get(entity_id)
        if row is None or (row.deleted_at is not None and not include_deleted):
            return None
        return row

    def get_many(self, entity_ids: Any) -> dict[Any, Any]:
        self.calls.append("get_many")
        wanted = set(entity_ids)
        return {row.id: row for row in self._live() if row.id in wanted}

    def list_page(self, limit: int, offset: int) -> list[Any]:
        self.calls.append("list_page")
        return self._live()[offset:offset + limit]

    def save(self, entity: Any) -> Any:
        self.calls.append("save")
        stored = self.rows.get(entity.id)
        if stored is None or stored.deleted_at is not None:
            raise LookupError(entity.id)
        saved = replace(entity, updated_at=datetime.now(UTC))
        self.rows[entity.id] = saved
        return saved

    def delete(self, entity_id: Any) -> bool:
        self.calls.append("delete")
        row = self.rows.get(entity_id)
        if row is None or row.deleted_at is not None:
            return False
        self.rows[entity_id] = replace(row, deleted_at=datetime.now(UTC))
        return True

    def list_active(self) -> list[Any]:
        self.calls.append("list_active")
        return [row for row in self._live() if row.is_active]

    def search(self, query: str) -> list[Any]:
        self.calls.append("search")
        needle = query.lower()
        return [
            row for row in self._live()
            if any(needle in getattr(row, name).lower() for name in self.search_fields)
        ]


class FakeLocationStore(_MemoryStore, LocationStore):
    entity_cls = Location
    id_cls = LocationId
    search_fields = ("name", "city", "country")

    def list_in_box(self, box: BoundingBox) -> list[Location]:
        self.calls.append("list_in_box")
        return [
            row for row in self._live()
            if row.latitude is not None
            and row.longitude is not None
            and box.contains(row.latitude, row.longitude)
        ]


class _FakeCategoryStore(_MemoryStore):
    def get_by_name(self, name: str) -> Any | None:
        self.calls.append("get_by_name")
        return next((row for row in self._live() if row.name == name), None)


class FakeTheatreTypeStore(_FakeCategoryStore, TheatreTypeStore):
    entity_cls = TheatreType
    id_cls = TheatreTypeId


class FakeShowTypeStore(_FakeCategoryStore, ShowTypeStore):
    entity_cls = ShowType
    id_cls = ShowTypeId


class FakeTheatreStore(_MemoryStore, TheatreStore):
    entity_cls = Theatre
    id_cls = TheatreId
    search_fields = ("name", "description")

    def __init__(self, locations: FakeLocationStore) -> None:
        super().__init__()
        self._locations = locations

    def list_by_location(self, location_id: LocationId) -> list[Theatre]:
        return [row for row in self._live() if row.location_id == location_id]

    def list_by_theatre_type(self, theatre_type_id: TheatreTypeId) -> list[Theatre]:
        return [row for row in self._live() if row.theatre_type_id == theatre_type_id]

    def list_featured(self) -> list[Theatre]:
        return [row for row in self._live() if row.is_featured]

    def list_located_in_box(self, box: BoundingBox) -> list[tuple[Theatre, Location]]:
        self.calls.append("list_located_in_box")
        located = {location.id: location for location in self._locations.list_in_box(box)}
        return [
            (row, located[row.location_id])
            for row in self._live()
            if row.location_id in located
        ]


class FakeShowStore(_MemoryStore, ShowStore):
    entity_cls = Show
    id_cls = ShowId
    search_fields = ("title", "description", "director", "cast")

    def list_by_theatre(self, theatre_id: TheatreId) -> list[Show]:
        return [row for row in self._live() if row.theatre_id == theatre_id]

    def list_by_show_type(self, show_type_id: ShowTypeId) -> list[Show]:
        return [row for row in self._live() if row.show_type_id == show_type_id]

    def list_featured(self) -> list[Show]:
        return [row for row in self._live() if row.is_featured]

    def list_current(self, today: date) -> list[Show]:
        return [
            row for row in self._live()
            if row.is_active
            and row.start_date is not None
            and row.start_date <= today
            and (row.end_date is None or row.end_date >= today)
        ]

    def list_upcoming(self, today: date) -> list[Show]:
        return [
            row for row in self._live()
            if row.is_active and row.start_date is not None and row.start_date > today
        ]
