"""Named cache registry used by the resolver and the eviction endpoints.

Holds one independent :class:`ICacheProvider` per :class:`CacheName`.
Each cache is bounded separately, so a burst of discography requests can
never push identity lookups out of the lookup cache.

Key conventions (applied by callers, not here):
    ARTIST_LOOKUP       -> normalized (lower-cased) artist name
    ARTIST_DETAILS      -> MBID
    ARTIST_DISCOGRAPHY  -> normalized (lower-cased) artist name
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

from jukebox.interfaces.cache_provider import ICacheProvider
from jukebox.providers.cache.memory_cache import MemoryCacheProvider
from jukebox.utils.errors import ConfigurationError


class CacheName(str, Enum):  # noqa: UP042 -- StrEnum requires Python 3.11+
    """The three resolver caches."""

    ARTIST_LOOKUP = "artistLookupCache"
    ARTIST_DETAILS = "artistDetailsCache"
    ARTIST_DISCOGRAPHY = "artistDiscographyCache"


class CacheStore:
    """Routes ``get``/``put``/``evict`` to the cache registered under a name."""

    def __init__(self, caches: Mapping[CacheName, ICacheProvider]) -> None:
        missing = [name.value for name in CacheName if name not in caches]
        if missing:
            raise ConfigurationError(message=f"Missing caches: {', '.join(missing)}")
        self._caches: dict[CacheName, ICacheProvider] = dict(caches)

    @classmethod
    def in_memory(
        cls,
        max_size: int = 1000,
        ttl: float = 3600,
        overrides: Mapping[str, Mapping[str, Any]] | None = None,
    ) -> CacheStore:
        """Build a store of :class:`MemoryCacheProvider` instances.

        Parameters
        ----------
        max_size, ttl:
            Defaults applied to every cache.
        overrides:
            Per-cache ``{"max_size": ..., "ttl": ...}`` dicts keyed by
            :class:`CacheName` value (the ``caches`` section of
            ``config/config.yaml``).
        """
        overrides = overrides or {}
        caches: dict[CacheName, ICacheProvider] = {}
        for name in CacheName:
            override = overrides.get(name.value) or {}
            size = int(override.get("max_size", max_size))
            name_ttl = float(override.get("ttl", ttl))
            if size < 1 or name_ttl <= 0:
                raise ConfigurationError(
                    message=f"Cache '{name.value}' needs max_size >= 1 and ttl > 0"
                )
            caches[name] = MemoryCacheProvider(name=name.value, max_size=size, ttl=name_ttl)
        return cls(caches)

    async def get(self, name: CacheName, key: str) -> Any | None:
        return await self._caches[name].get(key)

    async def put(self, name: CacheName, key: str, value: Any) -> None:
        await self._caches[name].set(key, value)

    async def evict(self, name: CacheName, key: str) -> bool:
        return await self._caches[name].delete(key)

    def stats(self) -> dict[str, int]:
        """Return the live entry count of every cache, keyed by cache name."""
        return {name.value: cache.size() for name, cache in self._caches.items()}
