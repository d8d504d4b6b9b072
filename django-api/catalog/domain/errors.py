"""Domain error codes for the catalog module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_FAILED = "VALIDATION_FAILED"
    LOCATION_NOT_FOUND = "LOCATION_NOT_FOUND"
    THEATRE_TYPE_NOT_FOUND = "THEATRE_TYPE_NOT_FOUND"
    SHOW_TYPE_NOT_FOUND = "SHOW_TYPE_NOT_FOUND"
    THEATRE_NOT_FOUND = "THEATRE_NOT_FOUND"
    SHOW_NOT_FOUND = "SHOW_NOT_FOUND"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"
    INVALID_INPUT = "INVALID_INPUT"
    INTERNAL_FAILURE = "INTERNAL_FAILURE"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationFailedError(DomainError):
    """Raised when input is malformed or out of bounds.

    ``errors`` maps each offending field to a descriptive message.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_FAILED,
            message="Validation failed",
        )
        self.errors = dict(errors)

    def __str__(self) -> str:
        details = "; ".join(f"{field}: {msg}" for field, msg in self.errors.items())
        return f"{self.code.value}: {self.message} ({details})"


class EntityNotFoundError(DomainError):
    """Base for lookups whose target is missing or deleted."""

    def __init__(self, code: ErrorCode, message: str, entity_id: str | None) -> None:
        super().__init__(code=code, message=message)
        self.entity_id = entity_id


class LocationNotFoundError(EntityNotFoundError):
    """Raised when a location is not found."""

    def __init__(self, location_id: str | None = None) -> None:
        super().__init__(ErrorCode.LOCATION_NOT_FOUND, "Location not found", location_id)


class TheatreTypeNotFoundError(EntityNotFoundError):
    """Raised when a theatre type is not found."""

    def __init__(self, theatre_type_id: str | None = None) -> None:
        super().__init__(ErrorCode.THEATRE_TYPE_NOT_FOUND, "Theatre type not found", theatre_type_id)


class ShowTypeNotFoundError(EntityNotFoundError):
    """Raised when a show type is not found."""

    def __init__(self, show_type_id: str | None = None) -> None:
        super().__init__(ErrorCode.SHOW_TYPE_NOT_FOUND, "Show type not found", show_type_id)


class TheatreNotFoundError(EntityNotFoundError):
    """Raised when a theatre is not found."""

    def __init__(self, theatre_id: str | None = None) -> None:
        super().__init__(ErrorCode.THEATRE_NOT_FOUND, "Theatre not found", theatre_id)


class ShowNotFoundError(EntityNotFoundError):
    """Raised when a show is not found."""

    def __init__(self, show_id: str | None = None) -> None:
        super().__init__(ErrorCode.SHOW_NOT_FOUND, "Show not found", show_id)


class DuplicateEntryError(DomainError):
    """Raised when a category name is already taken."""

    def __init__(self, entity: str, name: str) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_ENTRY,
            message=f"{entity} name already exists",
        )
        self.name = name


class InvalidInputError(DomainError):
    """Raised for a malformed identifier or a missing free parameter."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_INPUT,
            message=detail,
        )


class InternalFailureError(DomainError):
    """Raised when storage fails. The cause is chained, never exposed."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INTERNAL_FAILURE,
            message="Internal server error",
        )
