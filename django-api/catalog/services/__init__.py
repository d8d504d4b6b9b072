from catalog.services.category_service import ShowTypeService, TheatreTypeService
from catalog.services.location_service import LocationService
from catalog.services.queries import Page
from catalog.services.show_service import ShowService
from catalog.services.theatre_service import TheatreService

__all__ = [
    "LocationService",
    "TheatreTypeService",
    "ShowTypeService",
    "TheatreService",
    "ShowService",
    "Page",
]
