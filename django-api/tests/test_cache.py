"""Tests for cache behavior.

Run with: pytest tests/test_cache.py -v
"""

import pytest
from django.core.cache import cache
from django.db import transaction

from catalog.domain import CategoryDraft, LocationDraft, TheatreDraft
from catalog.handlers import cache as response_cache
from catalog.handlers.dependencies import build_services


def _generation(namespace: str):
    return cache.get(response_cache.generation_key(namespace))


@pytest.mark.django_db(transaction=True)
class TestCacheInvalidation:
    """Tests for cache invalidation on model changes.

    These run with real commits so the deferred bumps fire.
    """

    def test_location_save_bumps_location_and_theatre_generations(self):
        """Theatre proximity depends on location coordinates."""
        response_cache.response_key(response_cache.LOCATIONS, "/api/locations")
        response_cache.response_key(response_cache.THEATRES, "/api/theatres")
        locations_before = _generation(response_cache.LOCATIONS)
        theatres_before = _generation(response_cache.THEATRES)

        build_services().locations.create_location(
            LocationDraft(name="Broadway", city="New York", country="USA")
        )

        assert _generation(response_cache.LOCATIONS) != locations_before
        assert _generation(response_cache.THEATRES) != theatres_before

    def test_category_save_leaves_other_namespaces_alone(self):
        response_cache.response_key(response_cache.SHOWS, "/api/shows")
        shows_before = _generation(response_cache.SHOWS)
        build_services().theatre_types.create(CategoryDraft(name="Opera house"))
        assert _generation(response_cache.SHOWS) == shows_before

    def test_show_type_save_bumps_shows(self):
        """Shows embed their show type."""
        response_cache.response_key(response_cache.SHOWS, "/api/shows")
        shows_before = _generation(response_cache.SHOWS)
        build_services().show_types.create(CategoryDraft(name="Opera"))
        assert _generation(response_cache.SHOWS) != shows_before

    def test_soft_delete_invalidates(self):
        services = build_services()
        theatre_type = services.theatre_types.create(CategoryDraft(name="Playhouse"))
        key_before = response_cache.response_key(response_cache.THEATRE_TYPES, "/api/theatre-types")
        services.theatre_types.delete(str(theatre_type.id))
        assert response_cache.response_key(
            response_cache.THEATRE_TYPES, "/api/theatre-types"
        ) != key_before

    def test_invalidate_recovers_from_evicted_generation(self):
        cache.delete(response_cache.generation_key(response_cache.SHOWS))
        response_cache.invalidate(response_cache.SHOWS)
        assert isinstance(_generation(response_cache.SHOWS), int)


@pytest.mark.django_db
class TestInvalidationTiming:
    """Tests for when generations are bumped relative to the transaction."""

    def test_bump_waits_for_commit(self, django_capture_on_commit_callbacks):
        response_cache.response_key(response_cache.SHOW_TYPES, "/api/show-types")
        before = _generation(response_cache.SHOW_TYPES)

        with django_capture_on_commit_callbacks() as callbacks:
            build_services().show_types.create(CategoryDraft(name="Opera"))
        assert _generation(response_cache.SHOW_TYPES) == before

        for callback in callbacks:
            callback()
        assert _generation(response_cache.SHOW_TYPES) != before

    def test_rolled_back_write_does_not_bump(self, django_capture_on_commit_callbacks):
        response_cache.response_key(response_cache.THEATRE_TYPES, "/api/theatre-types")
        before = _generation(response_cache.THEATRE_TYPES)

        with django_capture_on_commit_callbacks(execute=True):
            with pytest.raises(RuntimeError):
                with transaction.atomic():
                    build_services().theatre_types.create(CategoryDraft(name="Fringe"))
                    raise RuntimeError("abort")
        assert _generation(response_cache.THEATRE_TYPES) == before


@pytest.mark.django_db(transaction=True)
class TestCachedResponses:
    """Tests for cached GET responses."""

    def test_list_is_served_from_cache(self, api_client, django_assert_num_queries):
        api_client.get("/api/show-types")
        with django_assert_num_queries(0):
            response = api_client.get("/api/show-types")
        assert response.status_code == 200

    def test_write_makes_next_read_fresh(self, api_client):
        assert api_client.get("/api/show-types").json()["data"]["items"] == []
        api_client.post("/api/show-types", {"name": "Ballet"}, format="json")
        items = api_client.get("/api/show-types").json()["data"]["items"]
        assert [item["name"] for item in items] == ["Ballet"]

    def test_theatre_detail_refreshed_after_update(self, api_client):
        services = build_services()
        location = services.locations.create_location(
            LocationDraft(name="West End", city="London", country="UK")
        )
        theatre_type = services.theatre_types.create(CategoryDraft(name="Playhouse"))
        theatre = services.theatres.create_theatre(
            TheatreDraft(name="Lyceum", location_id=location.id, theatre_type_id=theatre_type.id)
        )
        path = f"/api/theatres/{theatre.id}"
        assert api_client.get(path).json()["data"]["capacity"] is None

        api_client.patch(path, {"capacity": 2100}, format="json")
        assert api_client.get(path).json()["data"]["capacity"] == 2100

    def test_location_detail_refreshed_when_theatre_added(self, api_client):
        services = build_services()
        location = services.locations.create_location(
            LocationDraft(name="West End", city="London", country="UK")
        )
        theatre_type = services.theatre_types.create(CategoryDraft(name="Playhouse"))
        path = f"/api/locations/{location.id}"
        assert api_client.get(path).json()["data"]["theatres"] == []

        services.theatres.create_theatre(
            TheatreDraft(name="Lyceum", location_id=location.id, theatre_type_id=theatre_type.id)
        )
        theatres = api_client.get(path).json()["data"]["theatres"]
        assert [theatre["name"] for theatre in theatres] == ["Lyceum"]

    def test_errors_are_not_cached(self, api_client):
        assert api_client.get("/api/show-types/name/Opera").status_code == 404
        build_services().show_types.create(CategoryDraft(name="Opera"))
        assert api_client.get("/api/show-types/name/Opera").status_code == 200
