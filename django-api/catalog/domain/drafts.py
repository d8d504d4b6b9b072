"""Creation requests.

A draft holds every writable field of an entity. Fields left out by the
caller take the defaults below, which is where the per-entity flag
defaults live (active on, featured off).
"""

from dataclasses import dataclass, fields
from datetime import date
from decimal import Decimal

from catalog.domain.value_objects import LocationId, ShowTypeId, TheatreId, TheatreTypeId


@dataclass(frozen=True)
class LocationDraft:
    name: str
    city: str
    country: str
    state: str = ""
    latitude: float | None = None
    longitude: float | None = None
    postal_code: str = ""
    address: str = ""
    description: str = ""
    is_active: bool = True


@dataclass(frozen=True)
class CategoryDraft:
    """Draft for either category entity (theatre type or show type)."""

    name: str
    description: str = ""
    is_active: bool = True


@dataclass(frozen=True)
class TheatreDraft:
    name: str
    location_id: LocationId
    theatre_type_id: TheatreTypeId
    description: str = ""
    capacity: int | None = None
    address: str = ""
    phone: str = ""
    email: str = ""
    website: str = ""
    image_url: str = ""
    is_featured: bool = False
    is_active: bool = True


@dataclass(frozen=True)
class ShowDraft:
    title: str
    theatre_id: TheatreId
    show_type_id: ShowTypeId
    description: str = ""
    director: str = ""
    cast: str = ""
    duration: int | None = None
    start_date: date | None = None
    end_date: date | None = None
    price: Decimal | None = None
    image_url: str = ""
    trailer_url: str = ""
    is_featured: bool = False
    is_active: bool = True


def field_names(draft_cls: type) -> frozenset[str]:
    """Names of the writable fields of a draft class."""
    return frozenset(f.name for f in fields(draft_cls))
