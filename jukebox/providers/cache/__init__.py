"""Cache providers.

In-memory TTL caches that keep repeat artist requests from reaching
MusicBrainz, Wikipedia and the Cover Art Archive again within the hour.

MemoryCacheProvider is process-local and not durable across restarts.
For multi-worker deployments, swap in a shared adapter implementing
ICacheProvider without changing the resolver.
"""

from jukebox.providers.cache.cache_store import CacheName, CacheStore
from jukebox.providers.cache.memory_cache import MemoryCacheProvider

__all__ = ["CacheName", "CacheStore", "MemoryCacheProvider"]
