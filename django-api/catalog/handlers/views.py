"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details

GET responses are cached per entity namespace; see handlers/cache.py.
"""

import logging
from collections.abc import Callable
from typing import Any

from django.core.cache import cache
from django.db import DatabaseError, connection
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.viewsets import ViewSet

from catalog.domain import CategoryDraft, LocationDraft, ShowDraft, TheatreDraft
from catalog.domain.errors import DomainError, InvalidInputError, ValidationFailedError
from catalog.handlers import cache as response_cache
from catalog.handlers.dependencies import CatalogServices, build_services
from catalog.handlers.responses import domain_error_response, success_response
from catalog.handlers.serializers import (
    CategoryInputSerializer,
    CategorySerializer,
    LocationDetailsSerializer,
    LocationInputSerializer,
    LocationSerializer,
    ShowDetailsSerializer,
    ShowInputSerializer,
    TheatreDetailsSerializer,
    TheatreInputSerializer,
)

logger = logging.getLogger(__name__)


def _int_param(request: Request, name: str) -> int | None:
    """Read an integer query parameter. Malformed values count as absent."""
    raw = request.query_params.get(name)
    if raw in (None, ""):
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _float_param(request: Request, name: str) -> float | None:
    raw = request.query_params.get(name)
    if raw in (None, ""):
        return None
    try:
        return float(raw)
    except ValueError:
        raise InvalidInputError(f"invalid {name}") from None


def _search_query(request: Request) -> str:
    query = request.query_params.get("q", "")
    if not query:
        raise InvalidInputError("search query is required")
    return query


def _center(request: Request) -> tuple[float, float, float | None]:
    latitude = _float_param(request, "latitude")
    longitude = _float_param(request, "longitude")
    if latitude is None or longitude is None:
        raise InvalidInputError("latitude and longitude are required")
    return latitude, longitude, _float_param(request, "radius")


class CatalogViewSet(ViewSet):
    """CRUD plumbing shared by every entity endpoint."""

    namespace: str
    label: str
    serializer_class: type
    input_serializer_class: type

    services: CatalogServices

    def initial(self, request: Request, *args: Any, **kwargs: Any) -> None:
        super().initial(request, *args, **kwargs)
        self.services = build_services()

    def handle_exception(self, exc: Exception) -> Response:
        if isinstance(exc, DomainError):
            return domain_error_response(exc)
        return super().handle_exception(exc)

    def parse_input(self, request: Request, partial: bool = False) -> dict[str, Any]:
        serializer = self.input_serializer_class(data=request.data, partial=partial)
        if not serializer.is_valid():
            raise ValidationFailedError({
                field: " ".join(str(message) for message in messages)
                for field, messages in serializer.errors.items()
            })
        return dict(serializer.validated_data)

    def describe(self, records: list[Any]) -> list[Any]:
        """Resolve what each record references. Records render as stored by default."""
        return records

    def render(self, value: Any, many: bool = False) -> Any:
        if many:
            return self.serializer_class(self.describe(list(value)), many=True).data
        return self.serializer_class(self.describe([value])[0]).data

    def cached(self, request: Request, produce: Callable[[], Any]) -> Response:
        key = response_cache.response_key(self.namespace, request.get_full_path())
        data = cache.get(key)
        if data is None:
            data = produce()
            cache.set(key, data, self.services.settings.cache_ttl)
        return success_response(data)

    def render_page(self, page: Any) -> dict[str, Any]:
        return {
            "items": self.render(page.items, many=True),
            "limit": page.limit,
            "offset": page.offset,
        }

    def created(self, entity: Any) -> Response:
        return success_response(
            self.render(entity), f"{self.label} created successfully", status.HTTP_201_CREATED
        )

    def updated(self, entity: Any) -> Response:
        return success_response(self.render(entity), f"{self.label} updated successfully")

    def deleted(self) -> Response:
        return success_response(None, f"{self.label} deleted successfully")


class LocationViewSet(CatalogViewSet):
    """Handler for /api/locations"""

    namespace = response_cache.LOCATIONS
    label = "Location"
    serializer_class = LocationSerializer
    input_serializer_class = LocationInputSerializer

    def list(self, request: Request) -> Response:
        service = self.services.locations
        return self.cached(request, lambda: self.render_page(
            service.list_locations(_int_param(request, "limit"), _int_param(request, "offset"))
        ))

    def create(self, request: Request) -> Response:
        draft = LocationDraft(**self.parse_input(request))
        return self.created(self.services.locations.create_location(draft))

    def retrieve(self, request: Request, pk: str) -> Response:
        return self.cached(request, lambda: LocationDetailsSerializer(
            self.services.locations.get_location_details(pk)
        ).data)

    def partial_update(self, request: Request, pk: str) -> Response:
        changes = self.parse_input(request, partial=True)
        return self.updated(self.services.locations.update_location(pk, changes))

    def destroy(self, request: Request, pk: str) -> Response:
        self.services.locations.delete_location(pk)
        return self.deleted()

    @action(detail=False)
    def active(self, request: Request) -> Response:
        return self.cached(request, lambda: self.render(
            self.services.locations.list_active_locations(), many=True
        ))

    @action(detail=False)
    def nearby(self, request: Request) -> Response:
        latitude, longitude, radius = _center(request)
        return self.cached(request, lambda: self.render(
            self.services.locations.find_nearby_locations(latitude, longitude, radius), many=True
        ))

    @action(detail=False)
    def search(self, request: Request) -> Response:
        query = _search_query(request)
        return self.cached(request, lambda: self.render(
            self.services.locations.search_locations(query), many=True
        ))


class CategoryViewSet(CatalogViewSet):
    """Shared handler for the two category endpoints."""

    serializer_class = CategorySerializer
    input_serializer_class = CategoryInputSerializer
    service_name: str

    @property
    def service(self) -> Any:
        return getattr(self.services, self.service_name)

    def list(self, request: Request) -> Response:
        return self.cached(request, lambda: self.render_page(
            self.service.list_page(_int_param(request, "limit"), _int_param(request, "offset"))
        ))

    def create(self, request: Request) -> Response:
        draft = CategoryDraft(**self.parse_input(request))
        return self.created(self.service.create(draft))

    def retrieve(self, request: Request, pk: str) -> Response:
        return self.cached(request, lambda: self.render(self.service.get(pk)))

    def partial_update(self, request: Request, pk: str) -> Response:
        changes = self.parse_input(request, partial=True)
        return self.updated(self.service.update(pk, changes))

    def destroy(self, request: Request, pk: str) -> Response:
        self.service.delete(pk)
        return self.deleted()

    @action(detail=False)
    def active(self, request: Request) -> Response:
        return self.cached(request, lambda: self.render(self.service.list_active(), many=True))

    @action(detail=False, url_path=r"name/(?P<name>[^/]+)")
    def by_name(self, request: Request, name: str) -> Response:
        return self.cached(request, lambda: self.render(self.service.get_by_name(name)))


class TheatreTypeViewSet(CategoryViewSet):
    """Handler for /api/theatre-types"""

    namespace = response_cache.THEATRE_TYPES
    label = "Theatre type"
    service_name = "theatre_types"


class ShowTypeViewSet(CategoryViewSet):
    """Handler for /api/show-types"""

    namespace = response_cache.SHOW_TYPES
    label = "Show type"
    service_name = "show_types"


class TheatreViewSet(CatalogViewSet):
    """Handler for /api/theatres"""

    namespace = response_cache.THEATRES
    label = "Theatre"
    serializer_class = TheatreDetailsSerializer
    input_serializer_class = TheatreInputSerializer

    def describe(self, records: list[Any]) -> list[Any]:
        return self.services.theatres.describe_theatres(records)

    def list(self, request: Request) -> Response:
        service = self.services.theatres
        return self.cached(request, lambda: self.render_page(
            service.list_theatres(_int_param(request, "limit"), _int_param(request, "offset"))
        ))

    def create(self, request: Request) -> Response:
        draft = TheatreDraft(**self.parse_input(request))
        return self.created(self.services.theatres.create_theatre(draft))

    def retrieve(self, request: Request, pk: str) -> Response:
        return self.cached(request, lambda: self.render(self.services.theatres.get_theatre(pk)))

    def partial_update(self, request: Request, pk: str) -> Response:
        changes = self.parse_input(request, partial=True)
        return self.updated(self.services.theatres.update_theatre(pk, changes))

    def destroy(self, request: Request, pk: str) -> Response:
        self.services.theatres.delete_theatre(pk)
        return self.deleted()

    @action(detail=False)
    def active(self, request: Request) -> Response:
        return self.cached(request, lambda: self.render(
            self.services.theatres.list_active_theatres(), many=True
        ))

    @action(detail=False)
    def featured(self, request: Request) -> Response:
        return self.cached(request, lambda: self.render(
            self.services.theatres.list_featured_theatres(), many=True
        ))

    @action(detail=False)
    def nearby(self, request: Request) -> Response:
        latitude, longitude, radius = _center(request)
        return self.cached(request, lambda: self.render(
            self.services.theatres.find_nearby_theatres(latitude, longitude, radius), many=True
        ))

    @action(detail=False)
    def search(self, request: Request) -> Response:
        query = _search_query(request)
        return self.cached(request, lambda: self.render(
            self.services.theatres.search_theatres(query), many=True
        ))

    @action(detail=False, url_path=r"location/(?P<location_id>[^/.]+)")
    def by_location(self, request: Request, location_id: str) -> Response:
        return self.cached(request, lambda: self.render(
            self.services.theatres.list_theatres_by_location(location_id), many=True
        ))

    @action(detail=False, url_path=r"type/(?P<theatre_type_id>[^/.]+)")
    def by_type(self, request: Request, theatre_type_id: str) -> Response:
        return self.cached(request, lambda: self.render(
            self.services.theatres.list_theatres_by_theatre_type(theatre_type_id), many=True
        ))


class ShowViewSet(CatalogViewSet):
    """Handler for /api/shows"""

    namespace = response_cache.SHOWS
    label = "Show"
    serializer_class = ShowDetailsSerializer
    input_serializer_class = ShowInputSerializer

    def describe(self, records: list[Any]) -> list[Any]:
        return self.services.shows.describe_shows(records)

    def list(self, request: Request) -> Response:
        service = self.services.shows
        return self.cached(request, lambda: self.render_page(
            service.list_shows(_int_param(request, "limit"), _int_param(request, "offset"))
        ))

    def create(self, request: Request) -> Response:
        draft = ShowDraft(**self.parse_input(request))
        return self.created(self.services.shows.create_show(draft))

    def retrieve(self, request: Request, pk: str) -> Response:
        return self.cached(request, lambda: self.render(self.services.shows.get_show(pk)))

    def partial_update(self, request: Request, pk: str) -> Response:
        changes = self.parse_input(request, partial=True)
        return self.updated(self.services.shows.update_show(pk, changes))

    def destroy(self, request: Request, pk: str) -> Response:
        self.services.shows.delete_show(pk)
        return self.deleted()

    @action(detail=False)
    def active(self, request: Request) -> Response:
        return self.cached(request, lambda: self.render(
            self.services.shows.list_active_shows(), many=True
        ))

    @action(detail=False)
    def featured(self, request: Request) -> Response:
        return self.cached(request, lambda: self.render(
            self.services.shows.list_featured_shows(), many=True
        ))

    @action(detail=False)
    def current(self, request: Request) -> Response:
        # Keyed by date so yesterday's answer is never served.
        return self.cached_for_today(request, self.services.shows.list_current_shows)

    @action(detail=False)
    def upcoming(self, request: Request) -> Response:
        return self.cached_for_today(request, self.services.shows.list_upcoming_shows)

    @action(detail=False)
    def search(self, request: Request) -> Response:
        query = _search_query(request)
        return self.cached(request, lambda: self.render(
            self.services.shows.search_shows(query), many=True
        ))

    @action(detail=False, url_path=r"theatre/(?P<theatre_id>[^/.]+)")
    def by_theatre(self, request: Request, theatre_id: str) -> Response:
        return self.cached(request, lambda: self.render(
            self.services.shows.list_shows_by_theatre(theatre_id), many=True
        ))

    @action(detail=False, url_path=r"type/(?P<show_type_id>[^/.]+)")
    def by_type(self, request: Request, show_type_id: str) -> Response:
        return self.cached(request, lambda: self.render(
            self.services.shows.list_shows_by_show_type(show_type_id), many=True
        ))

    def cached_for_today(self, request: Request, produce: Callable[[], list]) -> Response:
        key = response_cache.response_key(
            self.namespace, f"{request.get_full_path()}@{timezone.localdate().isoformat()}"
        )
        data = cache.get(key)
        if data is None:
            data = self.render(produce(), many=True)
            cache.set(key, data, self.services.settings.cache_ttl)
        return success_response(data)


class HealthView(APIView):
    """Handler for GET /api/health"""

    def get(self, request: Request) -> Response:
        services = {}
        healthy = True
        try:
            connection.ensure_connection()
            services["database"] = "healthy"
        except DatabaseError as exc:
            logger.error("Health check: database unavailable: %s", exc)
            services["database"] = "unavailable"
            healthy = False
        cache.set("catalog:health", "ok", 5)
        services["cache"] = "healthy" if cache.get("catalog:health") == "ok" else "unavailable"
        healthy = healthy and services["cache"] == "healthy"

        payload = {
            "status": "healthy" if healthy else "unhealthy",
            "timestamp": timezone.now(),
            "services": services,
        }
        status_code = status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE
        return success_response(payload, "Health check completed", status_code)
