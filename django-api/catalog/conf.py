"""Catalog tuning knobs.

Services receive a ``CatalogSettings`` instance through their constructor;
``from_django`` builds one from the ``CATALOG`` dict in Django settings.
"""

from dataclasses import dataclass
from typing import Self


@dataclass(frozen=True)
class CatalogSettings:
    """Defaults for pagination, proximity search and response caching."""

    default_limit: int = 20
    max_limit: int = 100
    default_radius_km: float = 50.0
    cache_ttl: int = 300

    @classmethod
    def from_django(cls) -> Self:
        from django.conf import settings

        overrides = getattr(settings, "CATALOG", {})
        defaults = cls()
        return cls(
            default_limit=int(overrides.get("DEFAULT_LIMIT", defaults.default_limit)),
            max_limit=int(overrides.get("MAX_LIMIT", defaults.max_limit)),
            default_radius_km=float(
                overrides.get("DEFAULT_RADIUS_KM", defaults.default_radius_km)
            ),
            cache_ttl=int(overrides.get("CACHE_TTL", defaults.cache_ttl)),
        )
