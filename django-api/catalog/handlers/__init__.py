from catalog.handlers.views import (
    HealthView,
    LocationViewSet,
    ShowTypeViewSet,
    ShowViewSet,
    TheatreTypeViewSet,
    TheatreViewSet,
)

__all__ = [
    "HealthView",
    "LocationViewSet",
    "TheatreTypeViewSet",
    "ShowTypeViewSet",
    "TheatreViewSet",
    "ShowViewSet",
]
