"""Artist resolution pipeline.

Turns a free-text artist name (or a MusicBrainz id) into a complete
:class:`ArtistRecord` by sequencing calls to four rate-limited upstreams
and caching the intermediate and final results.

Architecture role: **Orchestrator**
-----------------------------------
Stages run strictly in sequence for a single request:

  1. IDENTITY   -- name -> (display name, MBID).  Cached by normalized name.
  2. DETAILS    -- MBID -> relations + release groups.  Mandatory.
  3. TITLE      -- direct en.wikipedia relation wins; otherwise the Wikidata
                   sitelink is consulted.  Wikidata is never called when a
                   direct title exists.
  4. BIOGRAPHY  -- Wikipedia intro extract.  Best-effort.
  5. ALBUMS     -- primary albums only, one cover-art lookup each, fanned
                   out under a semaphore no wider than the coverart quota
                   (wider fan-outs time out in the limiter queue and lose
                   their images).  Best-effort per album.
  6. ASSEMBLE   -- the record is cached by MBID in the details cache.

``get_artist_discography`` chains stage 1 into stages 2-6 through the same
caches and additionally caches the record by normalized name.

Failure policy: stages 1-2 propagate every :class:`JukeboxError`
unchanged.  Stages 3-5 turn any failure into an absent field and log it
at warning level.  ``asyncio.CancelledError`` always propagates.
"""

from __future__ import annotations

import asyncio
import math
from typing import Awaitable, TypeVar

import structlog

from jukebox.interfaces.artist_metadata_provider import IArtistMetadataProvider
from jukebox.interfaces.enrichment_provider import (
    IBiographyProvider,
    IBiographyTitleProvider,
    ICoverArtProvider,
)
from jukebox.models.artist import Album, ArtistDetails, ArtistIdentity, ArtistRecord
from jukebox.providers.cache.cache_store import CacheName, CacheStore
from jukebox.utils.concurrency import throttled_gather
from jukebox.utils.errors import DeadlineExceededError, InvalidArgumentError
from jukebox.utils.logging import get_logger
from jukebox.utils.text_normalizer import is_blank, normalize_artist_key, normalize_mbid_key

_T = TypeVar("_T")

# One album at a time matches the default coverart quota of one permit per window.
_DEFAULT_COVER_ART_CONCURRENCY = 1


class ArtistResolver:
    """Resolve artists into cached, enriched :class:`ArtistRecord` objects.

    All upstream access goes through the injected providers, each of which
    owns its own rate limiter.  The resolver itself holds no mutable state
    beyond the injected :class:`CacheStore`.
    """

    def __init__(
        self,
        metadata_provider: IArtistMetadataProvider,
        title_provider: IBiographyTitleProvider,
        biography_provider: IBiographyProvider,
        cover_art_provider: ICoverArtProvider,
        cache_store: CacheStore,
        cover_art_concurrency: int = _DEFAULT_COVER_ART_CONCURRENCY,
    ) -> None:
        if cover_art_concurrency < 1:
            raise ValueError("cover_art_concurrency must be >= 1")
        self._metadata = metadata_provider
        self._titles = title_provider
        self._biographies = biography_provider
        self._cover_art = cover_art_provider
        self._caches = cache_store
        self._cover_art_concurrency = cover_art_concurrency
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def cover_art_concurrency(self) -> int:
        return self._cover_art_concurrency

    # -- Public API -----------------------------------------------------------

    async def get_artist_mbid(
        self, artist_name: str | None, timeout: float | None = None
    ) -> ArtistIdentity:
        """Resolve *artist_name* to its display name and MusicBrainz id.

        Parameters
        ----------
        artist_name:
            Free-text artist name.  Case and surrounding whitespace are
            ignored for caching.
        timeout:
            Optional deadline in seconds for the whole operation.

        Raises
        ------
        InvalidArgumentError
            If *artist_name* is blank.
        ArtistNotFoundError
            If MusicBrainz has no matching artist.
        RateLimitExceededError
            If no MusicBrainz permit was granted in time.
        UpstreamError
            On transport or parse failures, and on deadline expiry.
        """
        if is_blank(artist_name):
            raise InvalidArgumentError(message="Artist name must not be blank")
        self._check_timeout(timeout)
        return await self._run_with_deadline(
            self._resolve_identity(artist_name), timeout, operation="get_artist_mbid"
        )

    async def get_artist_details(
        self, mbid: str | None, timeout: float | None = None
    ) -> ArtistRecord:
        """Return the enriched record for the artist with id *mbid*.

        Raises the same errors as :meth:`get_artist_mbid`, with
        :class:`ArtistNotFoundError` meaning no artist has that id.
        """
        if is_blank(mbid):
            raise InvalidArgumentError(message="MBID must not be blank")
        self._check_timeout(timeout)
        return await self._run_with_deadline(
            self._resolve_record(normalize_mbid_key(mbid)), timeout, operation="get_artist_details"
        )

    async def get_artist_discography(
        self, artist_name: str | None, timeout: float | None = None
    ) -> ArtistRecord:
        """Resolve *artist_name* and return its enriched record.

        Shares the lookup and details caches with the two operations above,
        so a later ``get_artist_details`` for the resolved id is a cache hit.
        """
        if is_blank(artist_name):
            raise InvalidArgumentError(message="Artist name must not be blank")
        self._check_timeout(timeout)
        return await self._run_with_deadline(
            self._resolve_discography(artist_name), timeout, operation="get_artist_discography"
        )

    # -- Stages ---------------------------------------------------------------

    async def _resolve_identity(self, artist_name: str) -> ArtistIdentity:
        key = normalize_artist_key(artist_name)
        cached = await self._caches.get(CacheName.ARTIST_LOOKUP, key)
        if cached is not None:
            self._logger.debug("artist_lookup_cache_hit", artist_name=key)
            return cached

        self._logger.info("artist_lookup_start", artist_name=artist_name.strip())
        identity = await self._metadata.lookup_identity(artist_name.strip())
        await self._caches.put(CacheName.ARTIST_LOOKUP, key, identity)
        return identity

    async def _resolve_record(self, mbid: str) -> ArtistRecord:
        cached = await self._caches.get(CacheName.ARTIST_DETAILS, mbid)
        if cached is not None:
            self._logger.debug("artist_details_cache_hit", mbid=mbid)
            return cached

        self._logger.info("artist_details_start", mbid=mbid)
        details = await self._metadata.fetch_details(mbid)

        biography = await self._resolve_biography(details)
        albums = await self._resolve_albums(details)

        record = ArtistRecord(
            display_name=details.display_name,
            canonical_id=details.canonical_id,
            biography=biography,
            albums=albums,
        )
        # Keyed by the requested id so repeat requests for it always hit,
        # even if MusicBrainz answered for a merged (redirected) artist.
        await self._caches.put(CacheName.ARTIST_DETAILS, mbid, record)

        self._logger.info(
            "artist_details_resolved",
            mbid=mbid,
            has_biography=biography is not None,
            albums=len(albums),
            albums_with_art=sum(1 for album in albums if album.cover_image_url),
        )
        return record

    async def _resolve_discography(self, artist_name: str) -> ArtistRecord:
        key = normalize_artist_key(artist_name)
        cached = await self._caches.get(CacheName.ARTIST_DISCOGRAPHY, key)
        if cached is not None:
            self._logger.debug("artist_discography_cache_hit", artist_name=key)
            return cached

        identity = await self._resolve_identity(artist_name)
        record = await self._resolve_record(normalize_mbid_key(identity.canonical_id))
        await self._caches.put(CacheName.ARTIST_DISCOGRAPHY, key, record)
        return record

    async def _resolve_biography(self, details: ArtistDetails) -> str | None:
        """Pick a Wikipedia title (direct relation first) and fetch its intro."""
        title = details.wikipedia_title
        if is_blank(title):
            title = None
            if not is_blank(details.wikidata_id):
                title = await self._enrich(
                    self._titles.resolve_biography_title(details.wikidata_id),
                    stage="biography_title",
                    mbid=details.canonical_id,
                )

        if is_blank(title):
            self._logger.debug("biography_title_unavailable", mbid=details.canonical_id)
            return None

        return await self._enrich(
            self._biographies.fetch_biography(title),
            stage="biography",
            mbid=details.canonical_id,
        )

    async def _resolve_albums(self, details: ArtistDetails) -> tuple[Album, ...]:
        """Attach cover art to every primary album, keeping payload order."""
        groups = [group for group in details.release_groups if group.is_primary_album]
        if not groups:
            return ()

        semaphore = asyncio.Semaphore(self._cover_art_concurrency)
        images = await throttled_gather(
            [
                self._enrich(
                    self._cover_art.fetch_cover_art(group.id),
                    stage="cover_art",
                    mbid=details.canonical_id,
                )
                for group in groups
            ],
            semaphore=semaphore,
        )

        return tuple(
            Album(
                title=group.title,
                release_group_id=group.id,
                cover_image_url=image if isinstance(image, str) else None,
            )
            for group, image in zip(groups, images)
        )

    # -- Helpers --------------------------------------------------------------

    async def _enrich(self, call: Awaitable[_T], stage: str, mbid: str) -> _T | None:
        """Await an optional enrichment call, degrading any failure to ``None``."""
        try:
            return await call
        except Exception as exc:
            self._logger.warning(
                "enrichment_degraded",
                stage=stage,
                mbid=mbid,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return None

    @staticmethod
    def _check_timeout(timeout: float | None) -> None:
        if timeout is not None and (not math.isfinite(timeout) or timeout <= 0):
            raise InvalidArgumentError(message="Timeout must be a positive number of seconds")

    async def _run_with_deadline(
        self, call: Awaitable[_T], timeout: float | None, operation: str
    ) -> _T:
        if timeout is None:
            return await call
        try:
            return await asyncio.wait_for(call, timeout=timeout)
        except asyncio.TimeoutError:
            self._logger.warning("deadline_exceeded", operation=operation, timeout=timeout)
            raise DeadlineExceededError(
                message=f"{operation} did not complete within {timeout}s"
            ) from None
