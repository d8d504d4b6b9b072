"""Helpers shared by every service: pagination, id parsing, integrity checks."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from typing import Any, Generic, TypeVar

from catalog.conf import CatalogSettings
from catalog.domain.errors import (
    DuplicateEntryError,
    EntityNotFoundError,
    InvalidInputError,
)
from catalog.domain.value_objects import EntityId


T = TypeVar("T")
IdT = TypeVar("IdT", bound=EntityId)


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a listing, with the limit and offset actually applied."""

    items: tuple[T, ...]
    limit: int
    offset: int


def clamp_page(limit: int | None, offset: int | None, settings: CatalogSettings) -> tuple[int, int]:
    """Normalize pagination input. Out-of-range values fall back, never fail."""
    if limit is None or limit <= 0 or limit > settings.max_limit:
        limit = settings.default_limit
    if offset is None or offset < 0:
        offset = 0
    return limit, offset


def parse_id(raw: Any, id_cls: type[IdT]) -> IdT:
    """Parse a raw identifier into a typed id.

    Raises:
        InvalidInputError: If the value is not a valid UUID.
    """
    if isinstance(raw, id_cls):
        return raw
    if raw is None or raw == "":
        raise InvalidInputError("UUID cannot be empty")
    try:
        return id_cls.from_string(raw)
    except (TypeError, ValueError, AttributeError):
        raise InvalidInputError(f"Invalid UUID format: {raw}") from None


def require_reference(
    lookup: Callable[[IdT], object | None],
    entity_id: IdT,
    error_cls: Callable[[str], EntityNotFoundError],
) -> None:
    """Fail with the kind-specific not-found error if a referenced entity is gone.

    ``lookup`` is a store ``get``, which already hides deleted records.
    """
    if lookup(entity_id) is None:
        raise error_cls(str(entity_id))


def check_unique_name(
    lookup: Callable[[str], Any | None],
    name: str,
    entity: str,
    exclude_id: EntityId | None = None,
) -> None:
    """Reject a category name already used by another live record.

    Raises:
        DuplicateEntryError: If a live record other than ``exclude_id`` has the name.
    """
    existing = lookup(name)
    if existing is not None and existing.id != exclude_id:
        raise DuplicateEntryError(entity, name)


def apply_changes(current: T, changes: Mapping[str, Any], allowed: frozenset[str]) -> T:
    """Return ``current`` with the supplied fields overwritten.

    Raises:
        InvalidInputError: If a change names a field that cannot be written.
    """
    unknown = sorted(set(changes) - allowed)
    if unknown:
        raise InvalidInputError(f"Unknown or read-only fields: {', '.join(unknown)}")
    return replace(current, **changes)
