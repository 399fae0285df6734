"""In-memory cache provider using cachetools.TTLCache.

Fast, process-local cache used for the resolver's lookup, details and
discography caches.  Entries expire ``ttl`` seconds after insertion and
the least-recently-used entry is evicted once ``max_size`` is reached.

``TTLCache`` is not thread-safe on its own, so every operation runs under
a ``threading.Lock``.  The lock only ever guards in-memory work, never I/O.
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable

import structlog
from cachetools import TTLCache

from jukebox.interfaces.cache_provider import ICacheProvider

logger = structlog.get_logger(logger_name=__name__)


class MemoryCacheProvider(ICacheProvider):
    """In-memory TTL cache backed by ``cachetools.TTLCache``.

    Parameters
    ----------
    name:
        Cache name used in log events.
    max_size:
        Maximum number of entries before the least-recently-used entry
        is evicted.
    ttl:
        Time-to-live in seconds for every entry.
    timer:
        Monotonic clock used for expiry; injectable for tests.
    """

    def __init__(
        self,
        name: str = "default",
        max_size: int = 1000,
        ttl: float = 3600,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._name = name
        self._lock = threading.Lock()
        self._cache: TTLCache[str, Any] = TTLCache(maxsize=max_size, ttl=ttl, timer=timer)

    @property
    def name(self) -> str:
        return self._name

    # ------------------------------------------------------------------
    # ICacheProvider implementation
    # ------------------------------------------------------------------

    async def get(self, key: str) -> Any | None:
        """Retrieve the cached value for *key*, or ``None`` if missing/expired.

        Expired entries are purged on read, so a stale value is never
        returned and never lingers behind a miss.
        """
        with self._lock:
            self._cache.expire()
            value = self._cache.get(key)
        if value is not None:
            logger.debug("cache_hit", cache=self._name, key=key)
        else:
            logger.debug("cache_miss", cache=self._name, key=key)
        return value

    async def set(self, key: str, value: Any) -> None:
        """Store *value* under *key*, replacing any existing entry."""
        with self._lock:
            self._cache[key] = value
        logger.debug("cache_set", cache=self._name, key=key)

    async def delete(self, key: str) -> bool:
        """Remove *key* from the cache; returns whether a live entry existed."""
        with self._lock:
            self._cache.expire()
            removed = self._cache.pop(key, None) is not None
        logger.debug("cache_delete", cache=self._name, key=key, removed=removed)
        return removed

    def size(self) -> int:
        with self._lock:
            self._cache.expire()
            return len(self._cache)
