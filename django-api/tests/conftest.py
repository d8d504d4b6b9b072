"""Pytest configuration and shared fixtures."""

from datetime import date

import pytest
from rest_framework.test import APIClient

from catalog.conf import CatalogSettings
from catalog.domain import CategoryDraft, LocationDraft, ShowDraft, TheatreDraft
from catalog.services import (
    LocationService,
    ShowService,
    ShowTypeService,
    TheatreService,
    TheatreTypeService,
)
from tests.fakes import (
    FakeLocationStore,
    FakeShowStore,
    FakeShowTypeStore,
    FakeTheatreStore,
    FakeTheatreTypeStore,
)

TODAY = date(2024, 6, 15)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def catalog_settings() -> CatalogSettings:
    return CatalogSettings()


# In-memory stores


@pytest.fixture
def location_store() -> FakeLocationStore:
    return FakeLocationStore()


@pytest.fixture
def theatre_type_store() -> FakeTheatreTypeStore:
    return FakeTheatreTypeStore()


@pytest.fixture
def show_type_store() -> FakeShowTypeStore:
    return FakeShowTypeStore()


@pytest.fixture
def theatre_store(location_store: FakeLocationStore) -> FakeTheatreStore:
    return FakeTheatreStore(location_store)


@pytest.fixture
def show_store() -> FakeShowStore:
    return FakeShowStore()


# Services over the in-memory stores


@pytest.fixture
def location_service(location_store, theatre_store, catalog_settings) -> LocationService:
    return LocationService(location_store, theatre_store, catalog_settings)


@pytest.fixture
def theatre_type_service(theatre_type_store, catalog_settings) -> TheatreTypeService:
    return TheatreTypeService(theatre_type_store, catalog_settings)


@pytest.fixture
def show_type_service(show_type_store, catalog_settings) -> ShowTypeService:
    return ShowTypeService(show_type_store, catalog_settings)


@pytest.fixture
def theatre_service(
    theatre_store, location_store, theatre_type_store, catalog_settings
) -> TheatreService:
    return TheatreService(theatre_store, location_store, theatre_type_store, catalog_settings)


@pytest.fixture
def show_service(show_store, theatre_store, show_type_store, catalog_settings) -> ShowService:
    return ShowService(
        show_store, theatre_store, show_type_store, catalog_settings, today=lambda: TODAY
    )


# Seed records


@pytest.fixture
def location(location_service):
    return location_service.create_location(
        LocationDraft(name="West End", city="London", country="UK", latitude=51.51, longitude=-0.13)
    )


@pytest.fixture
def theatre_type(theatre_type_service):
    return theatre_type_service.create(CategoryDraft(name="Playhouse"))


@pytest.fixture
def show_type(show_type_service):
    return show_type_service.create(CategoryDraft(name="Musical"))


@pytest.fixture
def theatre(theatre_service, location, theatre_type):
    return theatre_service.create_theatre(
        TheatreDraft(
            name="Lyceum",
            location_id=location.id,
            theatre_type_id=theatre_type.id,
            capacity=2100,
        )
    )


@pytest.fixture
def show(show_service, theatre, show_type):
    return show_service.create_show(
        ShowDraft(
            title="The Lion King",
            theatre_id=theatre.id,
            show_type_id=show_type.id,
            start_date=date(2024, 1, 1),
            end_date=date(2024, 12, 31),
        )
    )
