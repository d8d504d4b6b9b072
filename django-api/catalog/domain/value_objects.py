"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from typing import Self
from uuid import UUID


@dataclass(frozen=True)
class EntityId:
    """Base for typed entity identifiers."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class LocationId(EntityId):
    """Unique identifier for a Location."""


@dataclass(frozen=True)
class TheatreTypeId(EntityId):
    """Unique identifier for a TheatreType."""


@dataclass(frozen=True)
class ShowTypeId(EntityId):
    """Unique identifier for a ShowType."""


@dataclass(frozen=True)
class TheatreId(EntityId):
    """Unique identifier for a Theatre."""


@dataclass(frozen=True)
class ShowId(EntityId):
    """Unique identifier for a Show."""


@dataclass(frozen=True)
class GeoPoint:
    """A point on the globe in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90 <= self.latitude <= 90:
            raise ValueError(f"latitude must be between -90 and 90, got: {self.latitude}")
        if not -180 <= self.longitude <= 180:
            raise ValueError(f"longitude must be between -180 and 180, got: {self.longitude}")
