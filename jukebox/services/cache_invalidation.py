"""Operator-facing cache eviction.

Each method removes a single entry from one of the resolver caches,
normalizing the key the same way the resolver does when it writes.
Evicting a key that is not cached succeeds as a no-op; the return value
reports whether an entry was actually removed.
"""

from __future__ import annotations

import structlog

from jukebox.providers.cache.cache_store import CacheName, CacheStore
from jukebox.utils.errors import InvalidArgumentError
from jukebox.utils.logging import get_logger
from jukebox.utils.text_normalizer import is_blank, normalize_artist_key, normalize_mbid_key


class CacheInvalidationService:
    """Evict entries from the lookup, details and discography caches."""

    def __init__(self, cache_store: CacheStore) -> None:
        self._caches = cache_store
        self._logger: structlog.BoundLogger = get_logger(__name__)

    async def evict_lookup(self, artist_name: str | None) -> tuple[str, bool]:
        """Evict the identity lookup for *artist_name*.

        Returns
        -------
        tuple[str, bool]
            The normalized key and whether an entry was removed.
        """
        if is_blank(artist_name):
            raise InvalidArgumentError(message="Artist name must not be blank")
        return await self._evict(CacheName.ARTIST_LOOKUP, normalize_artist_key(artist_name))

    async def evict_details(self, mbid: str | None) -> tuple[str, bool]:
        """Evict the enriched record cached under *mbid*."""
        if is_blank(mbid):
            raise InvalidArgumentError(message="MBID must not be blank")
        return await self._evict(CacheName.ARTIST_DETAILS, normalize_mbid_key(mbid))

    async def evict_discography(self, artist_name: str | None) -> tuple[str, bool]:
        """Evict the discography record cached under *artist_name*."""
        if is_blank(artist_name):
            raise InvalidArgumentError(message="Artist name must not be blank")
        return await self._evict(CacheName.ARTIST_DISCOGRAPHY, normalize_artist_key(artist_name))

    async def _evict(self, name: CacheName, key: str) -> tuple[str, bool]:
        removed = await self._caches.evict(name, key)
        self._logger.info("cache_evicted", cache=name.value, key=key, removed=removed)
        return key, removed
