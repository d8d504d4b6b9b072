"""Response envelope and domain error mapping."""

import logging
from typing import Any

from rest_framework import status
from rest_framework.response import Response

from catalog.domain.errors import (
    DomainError,
    DuplicateEntryError,
    EntityNotFoundError,
    InternalFailureError,
    InvalidInputError,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)

_ERROR_STATUS: tuple[tuple[type[DomainError], int], ...] = (
    (ValidationFailedError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateEntryError, status.HTTP_409_CONFLICT),
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (InternalFailureError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def success_response(data: Any, message: str = "OK", status_code: int = status.HTTP_200_OK) -> Response:
    return Response({"success": True, "message": message, "data": data}, status=status_code)


def error_response(
    message: str,
    status_code: int,
    errors: dict[str, str] | None = None,
) -> Response:
    body: dict[str, Any] = {"success": False, "message": message, "data": None}
    if errors:
        body["errors"] = errors
    return Response(body, status=status_code)


def domain_error_response(exc: DomainError) -> Response:
    """Map a domain error to its HTTP status. Internal details never leave."""
    status_code = next(
        (code for error_cls, code in _ERROR_STATUS if isinstance(exc, error_cls)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    if status_code >= 500:
        logger.error("Request failed: %s", exc, exc_info=exc)
    errors = exc.errors if isinstance(exc, ValidationFailedError) else None
    return error_response(exc.message, status_code, errors)
