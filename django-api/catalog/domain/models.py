"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in catalog/models.py (persistence layer).

Numeric fields that are optional stay ``None`` when absent; an absent
capacity is never stored as zero.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from catalog.domain.value_objects import (
    LocationId,
    ShowId,
    ShowTypeId,
    TheatreId,
    TheatreTypeId,
)


@dataclass(frozen=True)
class Location:
    """Domain representation of a Location."""

    id: LocationId
    name: str
    city: str
    country: str
    state: str
    latitude: float | None
    longitude: float | None
    postal_code: str
    address: str
    description: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


@dataclass(frozen=True)
class TheatreType:
    """Domain representation of a TheatreType."""

    id: TheatreTypeId
    name: str
    description: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


@dataclass(frozen=True)
class ShowType:
    """Domain representation of a ShowType."""

    id: ShowTypeId
    name: str
    description: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


@dataclass(frozen=True)
class Theatre:
    """Domain representation of a Theatre.

    A theatre has no coordinates of its own; proximity is derived from
    its location.
    """

    id: TheatreId
    location_id: LocationId
    theatre_type_id: TheatreTypeId
    name: str
    description: str
    capacity: int | None
    address: str
    phone: str
    email: str
    website: str
    image_url: str
    is_featured: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


@dataclass(frozen=True)
class Show:
    """Domain representation of a Show."""

    id: ShowId
    theatre_id: TheatreId
    show_type_id: ShowTypeId
    title: str
    description: str
    director: str
    cast: str
    duration: int | None
    start_date: date | None
    end_date: date | None
    price: Decimal | None
    image_url: str
    trailer_url: str
    is_featured: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


@dataclass(frozen=True)
class LocationDetails:
    """A location with the live theatres it hosts."""

    location: Location
    theatres: list[Theatre]


@dataclass(frozen=True)
class TheatreDetails:
    """A theatre with the records it references.

    A reference resolves to ``None`` when its row has been deleted since
    the theatre was saved.
    """

    theatre: Theatre
    location: Location | None
    theatre_type: TheatreType | None


@dataclass(frozen=True)
class ShowDetails:
    """A show with its theatre and show type, resolved like TheatreDetails."""

    show: Show
    theatre: Theatre | None
    show_type: ShowType | None
