"""In-memory, time-bounded caching of parsed feeds."""

import logging
import threading
import time
from typing import Callable

from pydantic import BaseModel, ConfigDict

from .models import Feed

logger = logging.getLogger(__name__)


class CacheEntry(BaseModel):
    """A stored feed with its creation time and time-to-live."""

    model_config = ConfigDict(frozen=True)

    feed: Feed
    created_at: float
    ttl_ms: int

    def is_expired(self, now: float) -> bool:
        """Check whether the entry can no longer be served.

        A ttl of 0 disables caching: such entries are always expired.
        """
        if self.ttl_ms <= 0:
            return True
        return (now - self.created_at) * 1000 > self.ttl_ms


class FeedCache:
    """Feed cache keyed by source URL, with lazy expiry.

    Expired entries stay stored until the next successful load for their key
    replaces them, or until they are removed or cleared. Nothing is swept in
    the background.

    The store is safe to share between threads. The loader runs outside the
    lock, so two callers missing on the same key at the same time may both
    load; the last one to finish wins.
    """

    def __init__(self, ttl_ms: int, clock: Callable[[], float] = time.monotonic):
        """Initialize the cache.

        Args:
            ttl_ms: Time-to-live of new entries in milliseconds; 0 disables caching
            clock: Monotonic time source in seconds
        """
        self.ttl_ms = max(0, ttl_ms)
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str, loader: Callable[[], Feed | None]) -> Feed | None:
        """
        Return the cached feed for ``key``, loading it on a miss.

        On a hit the loader is not called. On a miss (no entry, or an expired
        one) the loader is called once; a returned Feed is stored and
        returned, while None is returned without storing anything. Exceptions
        from the loader propagate and leave the cache untouched.

        Args:
            key: Cache key, usually the feed URL
            loader: Produces the feed on a miss

        Returns:
            The cached or freshly loaded feed, or None if the loader gave none
        """
        with self._lock:
            entry = self._entries.get(key)

        if entry is not None and not entry.is_expired(self._clock()):
            logger.debug("Cache hit for %s", key)
            return entry.feed

        logger.debug("Cache miss for %s", key)
        feed = loader()
        if feed is None:
            return None

        with self._lock:
            self._entries[key] = CacheEntry(
                feed=feed, created_at=self._clock(), ttl_ms=self.ttl_ms
            )
        return feed

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._entries.clear()

    def remove(self, key: str | None) -> None:
        """Remove one entry. Absent or None keys are ignored."""
        if key is None:
            return
        with self._lock:
            self._entries.pop(key, None)

    def size(self) -> int:
        """Number of stored entries, including expired ones not yet replaced."""
        with self._lock:
            return len(self._entries)
