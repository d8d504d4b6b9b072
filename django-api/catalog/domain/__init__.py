from catalog.domain.drafts import CategoryDraft, LocationDraft, ShowDraft, TheatreDraft
from catalog.domain.models import (
    Location,
    LocationDetails,
    Show,
    ShowDetails,
    ShowType,
    Theatre,
    TheatreDetails,
    TheatreType,
)
from catalog.domain.value_objects import (
    GeoPoint,
    LocationId,
    ShowId,
    ShowTypeId,
    TheatreId,
    TheatreTypeId,
)

__all__ = [
    "Location",
    "TheatreType",
    "ShowType",
    "Theatre",
    "Show",
    "LocationDetails",
    "TheatreDetails",
    "ShowDetails",
    "LocationDraft",
    "CategoryDraft",
    "TheatreDraft",
    "ShowDraft",
    "LocationId",
    "TheatreTypeId",
    "ShowTypeId",
    "TheatreId",
    "ShowId",
    "GeoPoint",
]
