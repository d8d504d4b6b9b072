"""Response cache keys with per-entity generations.

Cached GET payloads are keyed by ``catalog:<namespace>:<generation>:<path>``.
Invalidating a namespace bumps its generation, which orphans every cached
page, filter and detail of that entity at once; orphans expire on their TTL.
"""

import time

from django.core.cache import cache

LOCATIONS = "locations"
THEATRE_TYPES = "theatre_types"
SHOW_TYPES = "show_types"
THEATRES = "theatres"
SHOWS = "shows"


def generation_key(namespace: str) -> str:
    return f"catalog:{namespace}:generation"


def response_key(namespace: str, path: str) -> str:
    generation = cache.get_or_set(generation_key(namespace), time.time_ns, timeout=None)
    return f"catalog:{namespace}:{generation}:{path}"


def invalidate(*namespaces: str) -> None:
    for namespace in namespaces:
        key = generation_key(namespace)
        try:
            cache.incr(key)
        except ValueError:
            # Missing or evicted. A clock value cannot collide with an old generation.
            cache.set(key, time.time_ns(), timeout=None)
