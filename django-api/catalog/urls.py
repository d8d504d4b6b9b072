from django.urls import path
from rest_framework.routers import SimpleRouter

from catalog.handlers import (
    HealthView,
    LocationViewSet,
    ShowTypeViewSet,
    ShowViewSet,
    TheatreTypeViewSet,
    TheatreViewSet,
)

router = SimpleRouter(trailing_slash=False)
router.register("locations", LocationViewSet, basename="location")
router.register("theatre-types", TheatreTypeViewSet, basename="theatre-type")
router.register("show-types", ShowTypeViewSet, basename="show-type")
router.register("theatres", TheatreViewSet, basename="theatre")
router.register("shows", ShowViewSet, basename="show")

urlpatterns = [
    path("health", HealthView.as_view(), name="health"),
    *router.urls,
]
