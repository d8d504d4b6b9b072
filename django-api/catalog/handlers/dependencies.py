"""Builds request-scoped services over the Django ORM stores."""

from dataclasses import dataclass

from django.utils import timezone

from catalog.conf import CatalogSettings
from catalog.services import (
    LocationService,
    ShowService,
    ShowTypeService,
    TheatreService,
    TheatreTypeService,
)
from catalog.stores.django_store import (
    DjangoLocationStore,
    DjangoShowStore,
    DjangoShowTypeStore,
    DjangoTheatreStore,
    DjangoTheatreTypeStore,
)


@dataclass(frozen=True)
class CatalogServices:
    settings: CatalogSettings
    locations: LocationService
    theatre_types: TheatreTypeService
    show_types: ShowTypeService
    theatres: TheatreService
    shows: ShowService


def build_services(settings: CatalogSettings | None = None) -> CatalogServices:
    settings = settings or CatalogSettings.from_django()
    locations = DjangoLocationStore()
    theatre_types = DjangoTheatreTypeStore()
    show_types = DjangoShowTypeStore()
    theatres = DjangoTheatreStore()
    shows = DjangoShowStore()
    return CatalogServices(
        settings=settings,
        locations=LocationService(locations, theatres, settings),
        theatre_types=TheatreTypeService(theatre_types, settings),
        show_types=ShowTypeService(show_types, settings),
        theatres=TheatreService(theatres, locations, theatre_types, settings),
        shows=ShowService(shows, theatres, show_types, settings, today=timezone.localdate),
    )
