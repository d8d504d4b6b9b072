"""Serializers for parsing API input and rendering domain models.

Input serializers only check types. Bounds, lengths and formats are the
domain validators' job, so the API and direct service callers reject the
same values with the same messages.
"""

from typing import Any

from rest_framework import serializers

from catalog.domain import LocationId, ShowTypeId, TheatreId, TheatreTypeId
from catalog.services.queries import parse_id


class ReferenceField(serializers.Field):
    """A foreign-key UUID, parsed into its typed id.

    A malformed value is a bad identifier rather than a bad field, so it
    raises InvalidInputError like ids in the URL do.
    """

    def __init__(self, id_type: type, **kwargs: Any) -> None:
        self.id_type = id_type
        super().__init__(**kwargs)

    def to_internal_value(self, data: Any) -> Any:
        return parse_id(data, self.id_type)

    def to_representation(self, value: Any) -> str:
        return str(value)


def _text(**kwargs: Any) -> serializers.CharField:
    kwargs.setdefault("required", False)
    return serializers.CharField(allow_blank=True, **kwargs)


# Input


class LocationInputSerializer(serializers.Serializer):
    name = _text(required=True)
    city = _text(required=True)
    country = _text(required=True)
    state = _text()
    latitude = serializers.FloatField(required=False, allow_null=True)
    longitude = serializers.FloatField(required=False, allow_null=True)
    postal_code = _text()
    address = _text()
    description = _text()
    is_active = serializers.BooleanField(required=False)


class CategoryInputSerializer(serializers.Serializer):
    name = _text(required=True)
    description = _text()
    is_active = serializers.BooleanField(required=False)


class TheatreInputSerializer(serializers.Serializer):
    name = _text(required=True)
    location_id = ReferenceField(LocationId)
    theatre_type_id = ReferenceField(TheatreTypeId)
    description = _text()
    capacity = serializers.IntegerField(required=False, allow_null=True)
    address = _text()
    phone = _text()
    email = _text()
    website = _text()
    image_url = _text()
    is_featured = serializers.BooleanField(required=False)
    is_active = serializers.BooleanField(required=False)


class ShowInputSerializer(serializers.Serializer):
    title = _text(required=True)
    theatre_id = ReferenceField(TheatreId)
    show_type_id = ReferenceField(ShowTypeId)
    description = _text()
    director = _text()
    cast = _text()
    duration = serializers.IntegerField(required=False, allow_null=True)
    start_date = serializers.DateField(required=False, allow_null=True)
    end_date = serializers.DateField(required=False, allow_null=True)
    price = serializers.DecimalField(
        max_digits=10, decimal_places=2, required=False, allow_null=True
    )
    image_url = _text()
    trailer_url = _text()
    is_featured = serializers.BooleanField(required=False)
    is_active = serializers.BooleanField(required=False)


# Output


class _EntitySerializer(serializers.Serializer):
    id = serializers.UUIDField(source="id.value")
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class LocationSerializer(_EntitySerializer):
    """Serializer for Location domain model."""

    name = serializers.CharField()
    city = serializers.CharField()
    state = serializers.CharField()
    country = serializers.CharField()
    latitude = serializers.FloatField(allow_null=True)
    longitude = serializers.FloatField(allow_null=True)
    postal_code = serializers.CharField()
    address = serializers.CharField()
    description = serializers.CharField()
    is_active = serializers.BooleanField()


class CategorySerializer(_EntitySerializer):
    """Serializer for TheatreType and ShowType domain models."""

    name = serializers.CharField()
    description = serializers.CharField()
    is_active = serializers.BooleanField()


class TheatreSerializer(_EntitySerializer):
    """Serializer for Theatre domain model."""

    location_id = serializers.UUIDField(source="location_id.value")
    theatre_type_id = serializers.UUIDField(source="theatre_type_id.value")
    name = serializers.CharField()
    description = serializers.CharField()
    capacity = serializers.IntegerField(allow_null=True)
    address = serializers.CharField()
    phone = serializers.CharField()
    email = serializers.CharField()
    website = serializers.CharField()
    image_url = serializers.CharField()
    is_featured = serializers.BooleanField()
    is_active = serializers.BooleanField()


class ShowSerializer(_EntitySerializer):
    """Serializer for Show domain model."""

    theatre_id = serializers.UUIDField(source="theatre_id.value")
    show_type_id = serializers.UUIDField(source="show_type_id.value")
    title = serializers.CharField()
    description = serializers.CharField()
    director = serializers.CharField()
    cast = serializers.CharField()
    duration = serializers.IntegerField(allow_null=True)
    start_date = serializers.DateField(allow_null=True)
    end_date = serializers.DateField(allow_null=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True)
    image_url = serializers.CharField()
    trailer_url = serializers.CharField()
    is_featured = serializers.BooleanField()
    is_active = serializers.BooleanField()


# Nested summaries of related records


class LocationSummarySerializer(serializers.Serializer):
    id = serializers.UUIDField(source="id.value")
    name = serializers.CharField()
    city = serializers.CharField()
    state = serializers.CharField()
    country = serializers.CharField()
    latitude = serializers.FloatField(allow_null=True)
    longitude = serializers.FloatField(allow_null=True)
    is_active = serializers.BooleanField()


class CategorySummarySerializer(serializers.Serializer):
    id = serializers.UUIDField(source="id.value")
    name = serializers.CharField()
    description = serializers.CharField()
    is_active = serializers.BooleanField()


class TheatreSummarySerializer(serializers.Serializer):
    id = serializers.UUIDField(source="id.value")
    location_id = serializers.UUIDField(source="location_id.value")
    theatre_type_id = serializers.UUIDField(source="theatre_type_id.value")
    name = serializers.CharField()
    description = serializers.CharField()
    capacity = serializers.IntegerField(allow_null=True)
    image_url = serializers.CharField()
    is_featured = serializers.BooleanField()
    is_active = serializers.BooleanField()


class _DetailsSerializer(serializers.Serializer):
    """Renders the wrapped record flat, with the declared fields beside it."""

    record: str
    record_serializer: type[serializers.Serializer]

    def to_representation(self, instance: Any) -> dict[str, Any]:
        data = self.record_serializer().to_representation(getattr(instance, self.record))
        data.update(super().to_representation(instance))
        return data


class LocationDetailsSerializer(_DetailsSerializer):
    """Serializer for LocationDetails."""

    record = "location"
    record_serializer = LocationSerializer

    theatres = TheatreSummarySerializer(many=True)


class TheatreDetailsSerializer(_DetailsSerializer):
    """Serializer for TheatreDetails."""

    record = "theatre"
    record_serializer = TheatreSerializer

    location = LocationSummarySerializer(allow_null=True)
    theatre_type = CategorySummarySerializer(allow_null=True)


class ShowDetailsSerializer(_DetailsSerializer):
    """Serializer for ShowDetails."""

    record = "show"
    record_serializer = ShowSerializer

    theatre = TheatreSummarySerializer(allow_null=True)
    show_type = CategorySummarySerializer(allow_null=True)
