"""Django ORM implementation of the catalog stores.

Rows are converted to domain models at the boundary; nothing outside this
module sees a Django model instance. Writes go through ``Model.save`` so
``auto_now`` timestamps and the cache-invalidation signals fire, and the
written row is re-read so callers see the stored values.
"""

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import asdict
from datetime import date
from typing import Any

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Model, Q, QuerySet
from django.utils import timezone

from catalog import models
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
from catalog.domain.errors import (
    DomainError,
    DuplicateEntryError,
    InternalFailureError,
    LocationNotFoundError,
    ShowNotFoundError,
    ShowTypeNotFoundError,
    TheatreNotFoundError,
    TheatreTypeNotFoundError,
)
from catalog.domain.geo import BoundingBox
from catalog.domain.value_objects import EntityId
from catalog.stores.interfaces import (
    LocationStore,
    ShowStore,
    ShowTypeStore,
    TheatreStore,
    TheatreTypeStore,
)

logger = logging.getLogger(__name__)

# Domain field name -> ORM attribute for foreign keys.
_FK_COLUMNS = {
    "location_id": "location_id",
    "theatre_type_id": "theatre_type_id",
    "theatre_id": "theatre_id",
    "show_type_id": "show_type_id",
}


@contextmanager
def _storage_errors() -> Iterator[None]:
    """Surface database faults as InternalFailureError, keeping the cause."""
    try:
        yield
    except DomainError:
        raise
    except DatabaseError as exc:
        logger.error("Catalog storage failure: %s", exc)
        raise InternalFailureError() from exc


def _row_values(entity: Any, exclude: tuple[str, ...] = ()) -> dict[str, Any]:
    """Flatten a draft or domain model into ORM column values."""
    values = {}
    for name, value in asdict(entity).items():
        if name in exclude:
            continue
        if name in _FK_COLUMNS:
            # asdict() turns typed ids into {"value": UUID}
            value = value["value"]
        values[name] = value
    return values


class _DjangoStore:
    """Shared plumbing for one ORM model."""

    model: type[Model]
    not_found: type[DomainError]
    search_fields: tuple[str, ...] = ()

    def _live(self) -> QuerySet:
        return self.model.objects.filter(deleted_at__isnull=True)

    def _to_domain(self, row: Any) -> Any:
        raise NotImplementedError

    def _get_row(self, entity_id: EntityId, include_deleted: bool = False) -> Any | None:
        queryset = self.model.objects.all() if include_deleted else self._live()
        return queryset.filter(pk=entity_id.value).first()

    def _domain_list(self, queryset: QuerySet) -> list[Any]:
        with _storage_errors():
            return [self._to_domain(row) for row in queryset]

    def _integrity_error(self, entity: Any, exc: IntegrityError) -> None:
        """Hook for stores that can name a constraint violation."""

    def _insert(self, draft: Any) -> Any:
        with _storage_errors():
            try:
                with transaction.atomic():
                    row = self.model.objects.create(**_row_values(draft))
                    row.refresh_from_db()
            except IntegrityError as exc:
                self._integrity_error(draft, exc)
                raise
        return self._to_domain(row)

    def _overwrite(self, entity: Any) -> Any:
        values = _row_values(entity, exclude=("id", "created_at", "updated_at", "deleted_at"))
        with _storage_errors():
            try:
                with transaction.atomic():
                    row = self._get_row(entity.id)
                    if row is None:
                        raise self.not_found(str(entity.id))
                    for name, value in values.items():
                        setattr(row, name, value)
                    row.save()
                    row.refresh_from_db()
            except IntegrityError as exc:
                self._integrity_error(entity, exc)
                raise
        return self._to_domain(row)

    def get(self, entity_id: EntityId, include_deleted: bool = False) -> Any | None:
        with _storage_errors():
            row = self._get_row(entity_id, include_deleted)
        return self._to_domain(row) if row is not None else None

    def get_many(self, entity_ids: Iterable[EntityId]) -> dict[Any, Any]:
        """One query for every live row among ``entity_ids``."""
        keys = {entity_id.value for entity_id in entity_ids}
        if not keys:
            return {}
        return {row.id: row for row in self._domain_list(self._live().filter(pk__in=keys))}

    def list_page(self, limit: int, offset: int) -> list[Any]:
        return self._domain_list(self._live()[offset:offset + limit])

    def delete(self, entity_id: EntityId) -> bool:
        with _storage_errors(), transaction.atomic():
            row = self._get_row(entity_id)
            if row is None:
                return False
            row.deleted_at = timezone.now()
            row.save(update_fields=["deleted_at", "updated_at"])
        return True

    def list_active(self) -> list[Any]:
        return self._domain_list(self._live().filter(is_active=True))

    def search(self, query: str) -> list[Any]:
        condition = Q()
        for field in self.search_fields:
            condition |= Q(**{f"{field}__icontains": query})
        return self._domain_list(self._live().filter(condition))


def _location_to_domain(row: models.Location) -> Location:
    return Location(
        id=LocationId(row.id),
        name=row.name,
        city=row.city,
        country=row.country,
        state=row.state,
        latitude=row.latitude,
        longitude=row.longitude,
        postal_code=row.postal_code,
        address=row.address,
        description=row.description,
        is_active=row.is_active,
        created_at=row.created_at,
        updated_at=row.updated_at,
        deleted_at=row.deleted_at,
    )


def _box_filter(box: BoundingBox, prefix: str = "") -> Q:
    condition = Q(
        **{
            f"{prefix}latitude__isnull": False,
            f"{prefix}longitude__isnull": False,
            f"{prefix}latitude__gte": box.min_latitude,
            f"{prefix}latitude__lte": box.max_latitude,
        }
    )
    if box.min_longitude is not None and box.max_longitude is not None:
        condition &= Q(
            **{
                f"{prefix}longitude__gte": box.min_longitude,
                f"{prefix}longitude__lte": box.max_longitude,
            }
        )
    return condition


class DjangoLocationStore(_DjangoStore, LocationStore):
    """Location store backed by the Django ORM."""

    model = models.Location
    not_found = LocationNotFoundError
    search_fields = ("name", "city", "country")

    def _to_domain(self, row: models.Location) -> Location:
        return _location_to_domain(row)

    def add(self, draft: LocationDraft) -> Location:
        return self._insert(draft)

    def save(self, location: Location) -> Location:
        return self._overwrite(location)

    def list_in_box(self, box: BoundingBox) -> list[Location]:
        return self._domain_list(self._live().filter(_box_filter(box)))


class _DjangoCategoryStore(_DjangoStore):
    """Name-unique categories. The partial unique index is the final guard."""

    entity_label: str

    def get_by_name(self, name: str) -> Any | None:
        with _storage_errors():
            row = self._live().filter(name=name).first()
        return self._to_domain(row) if row is not None else None

    def add(self, draft: CategoryDraft) -> Any:
        return self._insert(draft)

    def save(self, category: Any) -> Any:
        return self._overwrite(category)

    def _integrity_error(self, entity: Any, exc: IntegrityError) -> None:
        # Two writers passed the pre-check at the same time.
        logger.warning("Unique index rejected %s name %r", self.entity_label, entity.name)
        raise DuplicateEntryError(self.entity_label, entity.name) from exc


class DjangoTheatreTypeStore(_DjangoCategoryStore, TheatreTypeStore):
    """Theatre type store backed by the Django ORM."""

    model = models.TheatreType
    not_found = TheatreTypeNotFoundError
    entity_label = "theatre type"

    def _to_domain(self, row: models.TheatreType) -> TheatreType:
        return TheatreType(
            id=TheatreTypeId(row.id),
            name=row.name,
            description=row.description,
            is_active=row.is_active,
            created_at=row.created_at,
            updated_at=row.updated_at,
            deleted_at=row.deleted_at,
        )


class DjangoShowTypeStore(_DjangoCategoryStore, ShowTypeStore):
    """Show type store backed by the Django ORM."""

    model = models.ShowType
    not_found = ShowTypeNotFoundError
    entity_label = "show type"

    def _to_domain(self, row: models.ShowType) -> ShowType:
        return ShowType(
            id=ShowTypeId(row.id),
            name=row.name,
            description=row.description,
            is_active=row.is_active,
            created_at=row.created_at,
            updated_at=row.updated_at,
            deleted_at=row.deleted_at,
        )


class DjangoTheatreStore(_DjangoStore, TheatreStore):
    """Theatre store backed by the Django ORM."""

    model = models.Theatre
    not_found = TheatreNotFoundError
    search_fields = ("name", "description")

    def _to_domain(self, row: models.Theatre) -> Theatre:
        return Theatre(
            id=TheatreId(row.id),
            location_id=LocationId(row.location_id),
            theatre_type_id=TheatreTypeId(row.theatre_type_id),
            name=row.name,
            description=row.description,
            capacity=row.capacity,
            address=row.address,
            phone=row.phone,
            email=row.email,
            website=row.website,
            image_url=row.image_url,
            is_featured=row.is_featured,
            is_active=row.is_active,
            created_at=row.created_at,
            updated_at=row.updated_at,
            deleted_at=row.deleted_at,
        )

    def add(self, draft: TheatreDraft) -> Theatre:
        return self._insert(draft)

    def save(self, theatre: Theatre) -> Theatre:
        return self._overwrite(theatre)

    def list_by_location(self, location_id: LocationId) -> list[Theatre]:
        return self._domain_list(self._live().filter(location_id=location_id.value))

    def list_by_theatre_type(self, theatre_type_id: TheatreTypeId) -> list[Theatre]:
        return self._domain_list(self._live().filter(theatre_type_id=theatre_type_id.value))

    def list_featured(self) -> list[Theatre]:
        return self._domain_list(self._live().filter(is_featured=True))

    def list_located_in_box(self, box: BoundingBox) -> list[tuple[Theatre, Location]]:
        queryset = (
            self._live()
            .filter(location__deleted_at__isnull=True)
            .filter(_box_filter(box, prefix="location__"))
            .select_related("location")
        )
        with _storage_errors():
            return [(self._to_domain(row), _location_to_domain(row.location)) for row in queryset]


class DjangoShowStore(_DjangoStore, ShowStore):
    """Show store backed by the Django ORM."""

    model = models.Show
    not_found = ShowNotFoundError
    search_fields = ("title", "description", "director", "cast")

    def _to_domain(self, row: models.Show) -> Show:
        return Show(
            id=ShowId(row.id),
            theatre_id=TheatreId(row.theatre_id),
            show_type_id=ShowTypeId(row.show_type_id),
            title=row.title,
            description=row.description,
            director=row.director,
            cast=row.cast,
            duration=row.duration,
            start_date=row.start_date,
            end_date=row.end_date,
            price=row.price,
            image_url=row.image_url,
            trailer_url=row.trailer_url,
            is_featured=row.is_featured,
            is_active=row.is_active,
            created_at=row.created_at,
            updated_at=row.updated_at,
            deleted_at=row.deleted_at,
        )

    def add(self, draft: ShowDraft) -> Show:
        return self._insert(draft)

    def save(self, show: Show) -> Show:
        return self._overwrite(show)

    def list_by_theatre(self, theatre_id: TheatreId) -> list[Show]:
        return self._domain_list(self._live().filter(theatre_id=theatre_id.value))

    def list_by_show_type(self, show_type_id: ShowTypeId) -> list[Show]:
        return self._domain_list(self._live().filter(show_type_id=show_type_id.value))

    def list_featured(self) -> list[Show]:
        return self._domain_list(self._live().filter(is_featured=True))

    def list_current(self, today: date) -> list[Show]:
        queryset = self._live().filter(
            Q(end_date__isnull=True) | Q(end_date__gte=today),
            is_active=True,
            start_date__lte=today,
        )
        return self._domain_list(queryset)

    def list_upcoming(self, today: date) -> list[Show]:
        return self._domain_list(self._live().filter(is_active=True, start_date__gt=today))
