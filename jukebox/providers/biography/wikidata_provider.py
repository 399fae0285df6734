"""Wikidata provider implementing IBiographyTitleProvider.

When MusicBrainz has no direct Wikipedia relation for an artist it usually
has a Wikidata one.  ``wbgetentities`` with ``props=sitelinks`` maps the
Wikidata entity to its English Wikipedia page title, which the Wikipedia
provider then fetches.

This is a best-effort enrichment: a rate-limit, transport or parse failure
is logged and reported as ``None``.
"""

from __future__ import annotations

import httpx
import structlog

from jukebox.interfaces.enrichment_provider import IBiographyTitleProvider
from jukebox.utils.errors import RateLimitExceededError
from jukebox.utils.rate_limiter import RateLimiter

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_API_URL = "https://www.wikidata.org/w/api.php"


class WikidataProvider(IBiographyTitleProvider):
    """Resolve Wikidata entity ids to English Wikipedia page titles."""

    PROVIDER_NAME = "wikidata"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        rate_limiter: RateLimiter,
        api_url: str = _DEFAULT_API_URL,
    ) -> None:
        self._client = http_client
        self._rate_limiter = rate_limiter
        self._api_url = api_url

    async def resolve_biography_title(self, cross_reference_id: str) -> str | None:
        """Return the ``enwiki`` sitelink title for *cross_reference_id*, or ``None``."""
        try:
            await self._rate_limiter.acquire()
        except RateLimitExceededError as exc:
            logger.warning("wikidata_rate_limited", wikidata_id=cross_reference_id, error=str(exc))
            return None

        try:
            response = await self._client.get(
                self._api_url,
                params={
                    "action": "wbgetentities",
                    "ids": cross_reference_id,
                    "format": "json",
                    "props": "sitelinks",
                },
            )
            response.raise_for_status()
            data = response.json()
            title = (
                data.get("entities", {})
                .get(cross_reference_id, {})
                .get("sitelinks", {})
                .get("enwiki", {})
                .get("title")
            )
        except (httpx.HTTPError, ValueError, AttributeError) as exc:
            logger.warning("wikidata_lookup_failed", wikidata_id=cross_reference_id, error=str(exc))
            return None

        if not isinstance(title, str) or not title.strip():
            logger.debug("wikidata_no_enwiki_title", wikidata_id=cross_reference_id)
            return None

        logger.debug("wikidata_title_resolved", wikidata_id=cross_reference_id, title=title)
        return title

    def get_provider_name(self) -> str:
        return self.PROVIDER_NAME
