"""Unit tests for domain primitives and field validation.

These test invariants that must hold at construction time.
Run with: pytest tests/test_domain.py -v
"""

import pytest
from datetime import date
from decimal import Decimal
from uuid import UUID

from catalog.domain import (
    CategoryDraft,
    GeoPoint,
    LocationDraft,
    LocationId,
    ShowDraft,
    ShowId,
    ShowTypeId,
    TheatreDraft,
    TheatreId,
    TheatreTypeId,
)
from catalog.domain.errors import ValidationFailedError
from catalog.domain.validation import (
    check_capacity,
    check_date_range,
    check_duration,
    check_email,
    check_latitude,
    check_length,
    check_longitude,
    check_phone,
    check_postal_code,
    check_price,
    check_url,
    validate_category,
    validate_location,
    validate_show,
    validate_theatre,
)

RAW_ID = "8b3f2a6e-5c1d-4e7f-9a0b-1c2d3e4f5a6b"


class TestEntityId:
    """Tests for typed entity ids."""

    def test_from_string_valid_uuid(self):
        """LocationId.from_string parses a valid UUID."""
        location_id = LocationId.from_string(RAW_ID)
        assert location_id.value == UUID(RAW_ID)
        assert str(location_id) == RAW_ID

    def test_from_string_invalid_uuid(self):
        """from_string raises ValueError for a malformed UUID."""
        with pytest.raises(ValueError):
            ShowId.from_string("not-a-uuid")

    def test_ids_of_different_kinds_are_not_equal(self):
        """The same UUID wrapped as two kinds of id does not compare equal."""
        assert TheatreId(UUID(RAW_ID)) != LocationId(UUID(RAW_ID))


class TestGeoPoint:
    """Tests for GeoPoint value object."""

    def test_accepts_boundary_coordinates(self):
        """Poles and the antimeridian are valid coordinates."""
        GeoPoint(90, 180)
        GeoPoint(-90, -180)

    def test_rejects_out_of_range_latitude(self):
        """GeoPoint raises ValueError for latitude beyond 90."""
        with pytest.raises(ValueError):
            GeoPoint(90.0001, 0)

    def test_rejects_out_of_range_longitude(self):
        """GeoPoint raises ValueError for longitude beyond 180."""
        with pytest.raises(ValueError):
            GeoPoint(0, -180.5)


class TestFieldChecks:
    """Tests for the single-field check functions."""

    def test_absent_optional_values_pass(self):
        """None and empty strings are never rejected by optional checks."""
        assert check_latitude(None) is None
        assert check_longitude(None) is None
        assert check_capacity(None) is None
        assert check_duration(None) is None
        assert check_price(None) is None
        assert check_email("") is None
        assert check_url("") is None
        assert check_phone("") is None
        assert check_postal_code("") is None

    def test_latitude_bounds(self):
        """Latitude is accepted up to 90 degrees either side."""
        assert check_latitude(90) is None
        assert check_latitude(-90) is None
        assert "between -90 and 90" in check_latitude(91)

    def test_longitude_bounds(self):
        """Longitude is accepted up to 180 degrees either side."""
        assert check_longitude(180) is None
        assert "between -180 and 180" in check_longitude(-181)

    def test_capacity_bounds(self):
        """Capacity must be between 1 and 100,000."""
        assert check_capacity(1) is None
        assert check_capacity(100_000) is None
        assert check_capacity(0) == "capacity must be at least 1, got: 0"
        assert check_capacity(100_001) is not None

    def test_duration_bounds(self):
        """Duration must be between 1 and 600 minutes."""
        assert check_duration(600) is None
        assert check_duration(0) is not None
        assert check_duration(601) is not None

    def test_price_bounds(self):
        """Price may be free but not negative or above 10,000."""
        assert check_price(Decimal("0")) is None
        assert check_price(Decimal("10000")) is None
        assert check_price(Decimal("-0.01")) == "price cannot be negative, got: -0.01"
        assert check_price(Decimal("10000.01")) is not None

    def test_price_precision(self):
        """Prices are stored with two decimal places and never rounded."""
        assert check_price(Decimal("89.50")) is None
        assert check_price(89.5) is None
        assert check_price(Decimal("12.345")) == (
            "price cannot have more than 2 decimal places, got: 12.345"
        )
        assert check_price(Decimal("NaN")) is not None

    def test_date_range(self):
        """End before start fails; a missing bound or equal dates pass."""
        assert check_date_range(date(2024, 6, 1), date(2024, 6, 1)) is None
        assert check_date_range(None, date(2024, 5, 1)) is None
        assert check_date_range(date(2024, 6, 1), None) is None
        assert check_date_range(date(2024, 6, 1), date(2024, 5, 1)) == (
            "end date (2024-05-01) cannot be before start date (2024-06-01)"
        )

    def test_length_required_message(self):
        """A required field that is empty reports it is required."""
        assert check_length("", "name", 1, 100) == "name is required"
        assert check_length("x" * 101, "name", 1, 100) == "name cannot exceed 100 characters, got 101"

    def test_email_format(self):
        assert check_email("box-office@lyceum.co.uk") is None
        assert check_email("box-office@") is not None

    def test_url_format(self):
        assert check_url("https://lyceum.example/tickets") is None
        assert check_url("ftp://lyceum.example") is not None
        assert check_url("lyceum.example") is not None

    def test_url_rejects_malformed_hosts_and_ports(self):
        assert check_url("http://a..b") is not None
        assert check_url("http://-bad-.com") is not None
        assert check_url("https://x.y:99999999") is not None
        assert check_url("https://lyceum.example:8443/seats") is None

    def test_email_rejects_malformed_domains(self):
        assert check_email("box-office@lyceum..example") is not None
        assert check_email("box office@lyceum.example") is not None

    def test_phone_format(self):
        """Separators are ignored; 7 to 15 digits remain."""
        assert check_phone("+44 (20) 7420-8100") is None
        assert check_phone("12345") is not None
        assert check_phone("call us") is not None

    def test_postal_code_format(self):
        assert check_postal_code("WC2E 7RQ") is None
        assert check_postal_code("10036") is None
        assert check_postal_code("AB") is not None
        assert check_postal_code("#1234") is not None


class TestEntityValidation:
    """Tests for the per-entity validators."""

    def test_valid_location_passes(self):
        validate_location(LocationDraft(name="Broadway", city="New York", country="USA"))

    def test_location_collects_every_failing_field(self):
        """All failing fields are reported together."""
        draft = LocationDraft(name="", city="", country="USA", latitude=95, longitude=200)
        with pytest.raises(ValidationFailedError) as exc_info:
            validate_location(draft)
        assert set(exc_info.value.errors) == {"name", "city", "latitude", "longitude"}

    def test_category_name_required(self):
        with pytest.raises(ValidationFailedError) as exc_info:
            validate_category(CategoryDraft(name=""))
        assert exc_info.value.errors == {"name": "name is required"}

    def test_theatre_capacity_and_contact_checked(self):
        draft = TheatreDraft(
            name="Lyceum",
            location_id=LocationId(UUID(RAW_ID)),
            theatre_type_id=TheatreTypeId(UUID(RAW_ID)),
            capacity=0,
            email="nobody",
        )
        with pytest.raises(ValidationFailedError) as exc_info:
            validate_theatre(draft)
        assert set(exc_info.value.errors) == {"capacity", "email"}

    def test_show_reversed_dates_reported_on_end_date(self):
        """A reversed date range is reported against end_date."""
        draft = ShowDraft(
            title="Hamlet",
            theatre_id=TheatreId(UUID(RAW_ID)),
            show_type_id=ShowTypeId(UUID(RAW_ID)),
            start_date=date(2024, 6, 1),
            end_date=date(2024, 5, 1),
        )
        with pytest.raises(ValidationFailedError) as exc_info:
            validate_show(draft)
        assert list(exc_info.value.errors) == ["end_date"]
