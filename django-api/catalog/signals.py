"""Django signals for cache invalidation.

Every save or delete of a catalog row bumps the cache generation of its
entity, and of every entity whose responses embed it. Soft deletes are
saves, so they are covered by post_save.

Bumps are deferred with ``transaction.on_commit`` so a concurrent read
cannot cache the pre-commit state under the new generation.
"""

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from catalog.handlers import cache
from catalog.models import Location, Show, ShowType, Theatre, TheatreType


def _invalidate_on_commit(*namespaces: str) -> None:
    transaction.on_commit(lambda: cache.invalidate(*namespaces))


@receiver([post_save, post_delete], sender=Location)
def invalidate_location_cache(sender, instance, **kwargs):
    """Theatres embed their location and are found by its coordinates."""
    _invalidate_on_commit(cache.LOCATIONS, cache.THEATRES)


@receiver([post_save, post_delete], sender=TheatreType)
def invalidate_theatre_type_cache(sender, instance, **kwargs):
    _invalidate_on_commit(cache.THEATRE_TYPES, cache.THEATRES)


@receiver([post_save, post_delete], sender=ShowType)
def invalidate_show_type_cache(sender, instance, **kwargs):
    _invalidate_on_commit(cache.SHOW_TYPES, cache.SHOWS)


@receiver([post_save, post_delete], sender=Theatre)
def invalidate_theatre_cache(sender, instance, **kwargs):
    """Location details list their theatres; shows embed theirs."""
    _invalidate_on_commit(cache.THEATRES, cache.LOCATIONS, cache.SHOWS)


@receiver([post_save, post_delete], sender=Show)
def invalidate_show_cache(sender, instance, **kwargs):
    _invalidate_on_commit(cache.SHOWS)
