"""MusicBrainz provider implementing IArtistMetadataProvider.

Queries the MusicBrainz WS2 JSON API for artist search (identity lookup)
and for an artist's URL relations and release groups (detail fetch).  Both
calls take a permit from the ``musicbrainz`` rate limiter first; MusicBrainz
asks clients to stay at or below 1 request/second and to identify
themselves with a descriptive User-Agent (set on the shared httpx client).

Both operations back mandatory pipeline stages, so every failure is raised
as a typed :mod:`jukebox.utils.errors` exception -- never returned as
``None`` and never leaked as a raw ``httpx`` exception.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote, urlparse

import httpx
import structlog

from jukebox.interfaces.artist_metadata_provider import IArtistMetadataProvider
from jukebox.models.artist import ArtistDetails, ArtistIdentity, ReleaseGroup
from jukebox.utils.errors import ArtistNotFoundError, UpstreamError
from jukebox.utils.rate_limiter import RateLimiter
from jukebox.utils.text_normalizer import last_path_segment, wikipedia_title_from_url

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_BASE_URL = "https://musicbrainz.org/ws/2/artist/"
_DETAIL_INCLUDES = "url-rels+release-groups"
# The biography is fetched from the English Wikipedia API, so only
# relations pointing at en.wikipedia.org are usable as a direct reference.
_ENGLISH_WIKIPEDIA_HOST = "en.wikipedia.org"


class MusicBrainzProvider(IArtistMetadataProvider):
    """MusicBrainz metadata provider with per-upstream rate limiting.

    Parameters
    ----------
    http_client:
        Shared ``httpx.AsyncClient`` carrying the User-Agent header and the
        client-side timeout.
    rate_limiter:
        The limiter registered for the ``musicbrainz`` upstream.
    base_url:
        Artist endpoint root, ending in ``/``.
    """

    PROVIDER_NAME = "musicbrainz"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        rate_limiter: RateLimiter,
        base_url: str = _DEFAULT_BASE_URL,
    ) -> None:
        self._client = http_client
        self._rate_limiter = rate_limiter
        self._base_url = base_url if base_url.endswith("/") else f"{base_url}/"

    # ------------------------------------------------------------------
    # IArtistMetadataProvider implementation
    # ------------------------------------------------------------------

    async def lookup_identity(self, name: str) -> ArtistIdentity:
        """Search MusicBrainz for *name* and return the top-ranked artist."""
        await self._rate_limiter.acquire()
        logger.debug("musicbrainz_lookup_request", artist_name=name)

        data = await self._get_json(
            self._base_url,
            params={"query": f"artist:{name}", "fmt": "json"},
            not_found_message=f"No artists found for query: {name}",
        )

        artists = data.get("artists")
        if not isinstance(artists, list) or not artists:
            logger.warning("musicbrainz_no_artists", artist_name=name)
            raise ArtistNotFoundError(
                message=f"No artists found for query: {name}",
                provider_name=self.PROVIDER_NAME,
            )

        top = artists[0] if isinstance(artists[0], dict) else {}
        mbid = str(top.get("id") or "").strip()
        display_name = str(top.get("name") or "").strip()
        if not mbid or not display_name:
            logger.warning(
                "musicbrainz_invalid_artist", artist_name=name, mbid=mbid, name=display_name
            )
            raise ArtistNotFoundError(
                message=f"Invalid artist data for query: {name}",
                provider_name=self.PROVIDER_NAME,
            )

        logger.info("musicbrainz_lookup_success", artist_name=name, mbid=mbid)
        return ArtistIdentity(display_name=display_name, canonical_id=mbid)

    async def fetch_details(self, canonical_id: str) -> ArtistDetails:
        """Fetch URL relations and release groups for *canonical_id*."""
        await self._rate_limiter.acquire()
        logger.debug("musicbrainz_details_request", mbid=canonical_id)

        data = await self._get_json(
            f"{self._base_url}{quote(canonical_id, safe='')}",
            params={"fmt": "json", "inc": _DETAIL_INCLUDES},
            not_found_message=f"No data found for MBID: {canonical_id}",
        )

        mbid = str(data.get("id") or "").strip()
        display_name = str(data.get("name") or "").strip()
        if not mbid or not display_name:
            logger.warning("musicbrainz_invalid_details", mbid=canonical_id)
            raise ArtistNotFoundError(
                message=f"Invalid artist data for MBID: {canonical_id}",
                provider_name=self.PROVIDER_NAME,
            )

        wikipedia_title, wikidata_id = self._extract_biography_hints(data.get("relations"))
        release_groups = self._map_release_groups(data.get("release-groups"))

        logger.info(
            "musicbrainz_details_success",
            mbid=mbid,
            release_groups=len(release_groups),
            has_wikipedia=wikipedia_title is not None,
            has_wikidata=wikidata_id is not None,
        )
        return ArtistDetails(
            display_name=display_name,
            canonical_id=mbid,
            wikipedia_title=wikipedia_title,
            wikidata_id=wikidata_id,
            release_groups=release_groups,
        )

    def get_provider_name(self) -> str:
        return self.PROVIDER_NAME

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _get_json(
        self, url: str, params: dict[str, str], not_found_message: str
    ) -> dict[str, Any]:
        """GET *url* and decode a JSON object, translating every failure."""
        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.error("musicbrainz_timeout", url=url, error=str(exc))
            raise UpstreamError(
                message=f"Timeout calling MusicBrainz: {exc}",
                provider_name=self.PROVIDER_NAME,
            ) from exc
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            if status == 404:
                logger.warning("musicbrainz_not_found", url=url)
                raise ArtistNotFoundError(
                    message=not_found_message, provider_name=self.PROVIDER_NAME
                ) from exc
            logger.error("musicbrainz_http_status_error", url=url, status=status)
            raise UpstreamError(
                message=f"MusicBrainz responded with HTTP {status}",
                provider_name=self.PROVIDER_NAME,
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("musicbrainz_http_error", url=url, error=str(exc))
            raise UpstreamError(
                message=f"HTTP error calling MusicBrainz: {exc}",
                provider_name=self.PROVIDER_NAME,
            ) from exc

        if not response.content:
            raise ArtistNotFoundError(message=not_found_message, provider_name=self.PROVIDER_NAME)

        try:
            data = response.json()
        except ValueError as exc:
            logger.error("musicbrainz_parse_error", url=url, error=str(exc))
            raise UpstreamError(
                message="Failed to parse response from MusicBrainz API",
                provider_name=self.PROVIDER_NAME,
            ) from exc

        if not isinstance(data, dict):
            raise UpstreamError(
                message="Unexpected response shape from MusicBrainz API",
                provider_name=self.PROVIDER_NAME,
            )
        return data

    @staticmethod
    def _extract_biography_hints(relations: Any) -> tuple[str | None, str | None]:
        """Return the first English Wikipedia title and the first Wikidata id."""
        wikipedia_title: str | None = None
        wikidata_id: str | None = None
        if not isinstance(relations, list):
            return None, None

        for relation in relations:
            if not isinstance(relation, dict):
                continue
            rel_type = str(relation.get("type") or "").lower()
            url = relation.get("url") or {}
            resource = str(url.get("resource") or "") if isinstance(url, dict) else ""
            if not resource:
                continue

            if rel_type == "wikipedia" and wikipedia_title is None:
                if urlparse(resource).hostname == _ENGLISH_WIKIPEDIA_HOST:
                    wikipedia_title = wikipedia_title_from_url(resource)
            elif rel_type == "wikidata" and wikidata_id is None:
                wikidata_id = last_path_segment(resource)

        return wikipedia_title, wikidata_id

    @staticmethod
    def _map_release_groups(raw: Any) -> tuple[ReleaseGroup, ...]:
        """Map MusicBrainz ``release-groups`` entries, preserving order."""
        if not isinstance(raw, list):
            return ()
        return tuple(
            ReleaseGroup(
                id=str(group.get("id") or ""),
                title=str(group.get("title") or ""),
                primary_type=str(group.get("primary-type") or ""),
            )
            for group in raw
            if isinstance(group, dict)
        )
