"""Cache keys and invalidation for event reads.

Keys:
- ``events:{id}`` for a single event
- ``events:creator:{creator_id}`` for a creator's events
- ``events:list:v{n}:...`` for catalog pages; bumping the version
  invalidates every cached page at once.
"""

import time

from django.core.cache import cache

LIST_VERSION_KEY = "events:list:version"


def event_key(event_id: str) -> str:
    return f"events:{event_id}"


def creator_key(creator_id: str) -> str:
    return f"events:creator:{creator_id}"


def list_key(fragment: str) -> str:
    version = cache.get_or_set(LIST_VERSION_KEY, _fresh_version, timeout=None)
    return f"events:list:v{version}:{fragment}"


def invalidate_event(event_id: str, creator_id: str | None = None) -> None:
    keys = [event_key(event_id)]
    if creator_id:
        keys.append(creator_key(creator_id))
    cache.delete_many(keys)
    invalidate_lists()


def invalidate_lists() -> None:
    try:
        cache.incr(LIST_VERSION_KEY)
    except ValueError:
        cache.set(LIST_VERSION_KEY, _fresh_version(), timeout=None)


def _fresh_version() -> int:
    # A missing version key must never resurrect pages cached under an old one.
    return time.time_ns()
