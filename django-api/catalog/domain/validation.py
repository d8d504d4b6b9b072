"""Range and format checks for entity fields.

Each ``check_*`` function is pure: it returns ``None`` when the value is
acceptable and a descriptive message otherwise. Absent optional values
(``None``, or ``""`` for optional strings) always pass.

The ``validate_*`` functions run every check for one entity and raise a
single ``ValidationFailedError`` carrying all field messages. They accept
either a draft or a domain model, since both expose the same field names.
"""

import re
from datetime import date
from decimal import Decimal
from typing import Any

from django.core.exceptions import ValidationError
from django.core.validators import DecimalValidator, URLValidator, validate_email

from catalog.domain.errors import ValidationFailedError

MIN_LATITUDE, MAX_LATITUDE = -90, 90
MIN_LONGITUDE, MAX_LONGITUDE = -180, 180
MIN_CAPACITY, MAX_CAPACITY = 1, 100_000
MIN_DURATION, MAX_DURATION = 1, 600
MIN_PRICE, MAX_PRICE = Decimal("0"), Decimal("10000")

_validate_url = URLValidator(schemes=["http", "https"])
# Matches the storage column: NUMERIC(10, 2)
_validate_price_digits = DecimalValidator(max_digits=10, decimal_places=2)
_PHONE_RE = re.compile(r"^\d{7,15}$")
_PHONE_SEPARATORS = str.maketrans("", "", " -()+")
_POSTAL_CODE_RE = re.compile(r"^[A-Za-z0-9\s\-]{3,10}$")


def check_latitude(value: float | None) -> str | None:
    if value is None:
        return None
    if not MIN_LATITUDE <= value <= MAX_LATITUDE:
        return f"latitude must be between -90 and 90, got: {value}"
    return None


def check_longitude(value: float | None) -> str | None:
    if value is None:
        return None
    if not MIN_LONGITUDE <= value <= MAX_LONGITUDE:
        return f"longitude must be between -180 and 180, got: {value}"
    return None


def check_capacity(value: int | None) -> str | None:
    if value is None:
        return None
    if value < MIN_CAPACITY:
        return f"capacity must be at least 1, got: {value}"
    if value > MAX_CAPACITY:
        return f"capacity cannot exceed 100,000, got: {value}"
    return None


def check_duration(value: int | None) -> str | None:
    """Duration is in minutes, at most ten hours."""
    if value is None:
        return None
    if value < MIN_DURATION:
        return f"duration must be at least 1 minute, got: {value}"
    if value > MAX_DURATION:
        return f"duration cannot exceed 600 minutes (10 hours), got: {value}"
    return None


def check_price(value: Decimal | float | None) -> str | None:
    # The ceiling is a business limit, not a physical one.
    if value is None:
        return None
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    if not value.is_finite():
        return f"price must be a finite amount, got: {value}"
    if value < MIN_PRICE:
        return f"price cannot be negative, got: {value}"
    if value > MAX_PRICE:
        return f"price seems unreasonably high, got: {value}"
    try:
        _validate_price_digits(value)
    except ValidationError:
        return f"price cannot have more than 2 decimal places, got: {value}"
    return None


def check_date_range(start: date | None, end: date | None) -> str | None:
    """Fail only when both bounds are present and end precedes start."""
    if start is None or end is None:
        return None
    if end < start:
        return (
            f"end date ({end.isoformat()}) cannot be before "
            f"start date ({start.isoformat()})"
        )
    return None


def check_length(value: str, field: str, min_length: int, max_length: int) -> str | None:
    if len(value) < min_length:
        if min_length == 1:
            return f"{field} is required"
        return f"{field} must be at least {min_length} characters long, got {len(value)}"
    if len(value) > max_length:
        return f"{field} cannot exceed {max_length} characters, got {len(value)}"
    return None


def check_email(value: str) -> str | None:
    if not value:
        return None
    try:
        validate_email(value)
    except ValidationError:
        return f"invalid email format: {value}"
    return None


def check_url(value: str) -> str | None:
    """Absolute http(s) URL with a resolvable-looking host and a valid port."""
    if not value:
        return None
    try:
        _validate_url(value)
    except ValidationError:
        return f"invalid URL format: {value}"
    return None


def check_phone(value: str) -> str | None:
    if not value:
        return None
    if not _PHONE_RE.match(value.translate(_PHONE_SEPARATORS)):
        return f"invalid phone number format: {value}"
    return None


def check_postal_code(value: str) -> str | None:
    if not value:
        return None
    if not _POSTAL_CODE_RE.match(value):
        return f"invalid postal code format: {value}"
    return None


def _raise_if_any(results: dict[str, str | None]) -> None:
    errors = {field: msg for field, msg in results.items() if msg is not None}
    if errors:
        raise ValidationFailedError(errors)


def validate_location(location: Any) -> None:
    """Raises ValidationFailedError if any location field is out of bounds."""
    _raise_if_any({
        "name": check_length(location.name, "name", 1, 255),
        "city": check_length(location.city, "city", 1, 100),
        "state": check_length(location.state, "state", 0, 100),
        "country": check_length(location.country, "country", 1, 100),
        "latitude": check_latitude(location.latitude),
        "longitude": check_longitude(location.longitude),
        "postal_code": check_length(location.postal_code, "postal_code", 0, 20)
        or check_postal_code(location.postal_code),
        "address": check_length(location.address, "address", 0, 500),
        "description": check_length(location.description, "description", 0, 1000),
    })


def validate_category(category: Any) -> None:
    """Raises ValidationFailedError for an invalid theatre type or show type."""
    _raise_if_any({
        "name": check_length(category.name, "name", 1, 100),
        "description": check_length(category.description, "description", 0, 1000),
    })


def validate_theatre(theatre: Any) -> None:
    """Raises ValidationFailedError if any theatre field is out of bounds."""
    _raise_if_any({
        "name": check_length(theatre.name, "name", 1, 255),
        "description": check_length(theatre.description, "description", 0, 2000),
        "capacity": check_capacity(theatre.capacity),
        "address": check_length(theatre.address, "address", 0, 500),
        "phone": check_length(theatre.phone, "phone", 0, 20) or check_phone(theatre.phone),
        "email": check_length(theatre.email, "email", 0, 255) or check_email(theatre.email),
        "website": check_length(theatre.website, "website", 0, 500) or check_url(theatre.website),
        "image_url": check_length(theatre.image_url, "image_url", 0, 500)
        or check_url(theatre.image_url),
    })


def validate_show(show: Any) -> None:
    """Raises ValidationFailedError if any show field is out of bounds."""
    _raise_if_any({
        "title": check_length(show.title, "title", 1, 255),
        "description": check_length(show.description, "description", 0, 2000),
        "director": check_length(show.director, "director", 0, 255),
        "cast": check_length(show.cast, "cast", 0, 1000),
        "duration": check_duration(show.duration),
        "price": check_price(show.price),
        "end_date": check_date_range(show.start_date, show.end_date),
        "image_url": check_length(show.image_url, "image_url", 0, 500)
        or check_url(show.image_url),
        "trailer_url": check_length(show.trailer_url, "trailer_url", 0, 500)
        or check_url(show.trailer_url),
    })
