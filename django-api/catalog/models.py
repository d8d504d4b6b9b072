"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
Rows are never physically removed by the application: ``deleted_at`` is the
tombstone, and every default query filters on it.
"""

import uuid

from django.db import models
from django.db.models import F, Q


class CatalogModel(models.Model):
    """Shared identity, timestamps and tombstone."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(blank=True, null=True, db_index=True)

    class Meta:
        abstract = True
        ordering = ["-created_at"]


class Location(CatalogModel):
    """Persistence model for locations."""

    name = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=100, blank=True, default="")
    country = models.CharField(max_length=100)
    latitude = models.FloatField(blank=True, null=True)
    longitude = models.FloatField(blank=True, null=True)
    postal_code = models.CharField(max_length=20, blank=True, default="")
    address = models.TextField(blank=True, default="")
    description = models.TextField(blank=True, default="")
    is_active = models.BooleanField(default=True)

    class Meta(CatalogModel.Meta):
        indexes = [
            models.Index(fields=["latitude", "longitude"], name="catalog_location_lat_lng_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(latitude__isnull=True) | Q(latitude__gte=-90, latitude__lte=90),
                name="catalog_location_latitude_range",
            ),
            models.CheckConstraint(
                condition=Q(longitude__isnull=True) | Q(longitude__gte=-180, longitude__lte=180),
                name="catalog_location_longitude_range",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name}, {self.city}"


class TheatreType(CatalogModel):
    """Persistence model for theatre types (Broadway, Regional, ...)."""

    name = models.CharField(max_length=100)
    description = models.TextField(blank=True, default="")
    is_active = models.BooleanField(default=True)

    class Meta(CatalogModel.Meta):
        constraints = [
            # Unique name among live records
            models.UniqueConstraint(
                fields=["name"],
                condition=Q(deleted_at__isnull=True),
                name="catalog_unique_live_theatre_type_name",
            ),
        ]
        indexes = [
            models.Index(fields=["name"], name="catalog_theatretype_name_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class ShowType(CatalogModel):
    """Persistence model for show types (Musical, Opera, Concert, ...)."""

    name = models.CharField(max_length=100)
    description = models.TextField(blank=True, default="")
    is_active = models.BooleanField(default=True)

    class Meta(CatalogModel.Meta):
        constraints = [
            # Unique name among live records
            models.UniqueConstraint(
                fields=["name"],
                condition=Q(deleted_at__isnull=True),
                name="catalog_unique_live_show_type_name",
            ),
        ]
        indexes = [
            models.Index(fields=["name"], name="catalog_showtype_name_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class Theatre(CatalogModel):
    """Persistence model for theatre venues."""

    location = models.ForeignKey(Location, on_delete=models.PROTECT, related_name="theatres")
    theatre_type = models.ForeignKey(
        TheatreType, on_delete=models.PROTECT, related_name="theatres"
    )
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    capacity = models.PositiveIntegerField(blank=True, null=True)
    address = models.TextField(blank=True, default="")
    phone = models.CharField(max_length=20, blank=True, default="")
    email = models.EmailField(max_length=255, blank=True, default="")
    website = models.URLField(max_length=500, blank=True, default="")
    image_url = models.URLField(max_length=500, blank=True, default="")
    is_featured = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)

    class Meta(CatalogModel.Meta):
        indexes = [
            models.Index(fields=["is_active", "is_featured"], name="catalog_theatre_listing_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(capacity__isnull=True) | Q(capacity__gte=1, capacity__lte=100000),
                name="catalog_theatre_capacity_range",
            ),
        ]

    def __str__(self) -> str:
        return self.name


class Show(CatalogModel):
    """Persistence model for shows."""

    theatre = models.ForeignKey(Theatre, on_delete=models.PROTECT, related_name="shows")
    show_type = models.ForeignKey(ShowType, on_delete=models.PROTECT, related_name="shows")
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    director = models.CharField(max_length=255, blank=True, default="")
    cast = models.TextField(blank=True, default="")
    duration = models.PositiveIntegerField(blank=True, null=True)
    start_date = models.DateField(blank=True, null=True)
    end_date = models.DateField(blank=True, null=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, blank=True, null=True)
    image_url = models.URLField(max_length=500, blank=True, default="")
    trailer_url = models.URLField(max_length=500, blank=True, default="")
    is_featured = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)

    class Meta(CatalogModel.Meta):
        indexes = [
            models.Index(fields=["is_active", "start_date"], name="catalog_show_schedule_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(start_date__isnull=True)
                | Q(end_date__isnull=True)
                | Q(end_date__gte=F("start_date")),
                name="catalog_show_end_after_start",
            ),
            models.CheckConstraint(
                condition=Q(duration__isnull=True) | Q(duration__gte=1, duration__lte=600),
                name="catalog_show_duration_range",
            ),
            models.CheckConstraint(
                condition=Q(price__isnull=True) | Q(price__gte=0),
                name="catalog_show_price_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return self.title
