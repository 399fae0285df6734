"""Wikipedia provider implementing IBiographyProvider.

Fetches the introductory section of an English Wikipedia article through
the MediaWiki ``prop=extracts`` API.  Redirects are followed server-side
(``redirects=1``), so a title taken from an old MusicBrainz relation still
resolves after the article has been renamed.

Best-effort: any failure is logged and reported as ``None``.
"""

from __future__ import annotations

import httpx
import structlog

from jukebox.interfaces.enrichment_provider import IBiographyProvider
from jukebox.utils.errors import RateLimitExceededError
from jukebox.utils.rate_limiter import RateLimiter

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_API_URL = "https://en.wikipedia.org/w/api.php"


class WikipediaProvider(IBiographyProvider):
    """Fetch plain-text article intros from English Wikipedia."""

    PROVIDER_NAME = "wikipedia"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        rate_limiter: RateLimiter,
        api_url: str = _DEFAULT_API_URL,
    ) -> None:
        self._client = http_client
        self._rate_limiter = rate_limiter
        self._api_url = api_url

    async def fetch_biography(self, title: str) -> str | None:
        """Return the intro extract of *title*, or ``None`` if unavailable."""
        if not title or not title.strip():
            return None

        # Wikipedia URL form: "Electric Light Orchestra" -> "Electric_Light_Orchestra"
        page_title = title.strip().replace(" ", "_")

        try:
            await self._rate_limiter.acquire()
        except RateLimitExceededError as exc:
            logger.warning("wikipedia_rate_limited", page_title=page_title, error=str(exc))
            return None

        try:
            response = await self._client.get(
                self._api_url,
                params={
                    "action": "query",
                    "prop": "extracts",
                    "exintro": "1",
                    "explaintext": "1",
                    "redirects": "1",
                    "titles": page_title,
                    "format": "json",
                },
            )
            response.raise_for_status()
            data = response.json()
            pages = data.get("query", {}).get("pages", {})
        except (httpx.HTTPError, ValueError, AttributeError) as exc:
            logger.warning("wikipedia_fetch_failed", page_title=page_title, error=str(exc))
            return None

        if not isinstance(pages, dict):
            return None

        for page in pages.values():
            extract = page.get("extract") if isinstance(page, dict) else None
            if isinstance(extract, str) and extract.strip():
                logger.debug(
                    "wikipedia_extract_found", page_title=page_title, length=len(extract)
                )
                return extract

        logger.debug("wikipedia_no_extract", page_title=page_title)
        return None

    def get_provider_name(self) -> str:
        return self.PROVIDER_NAME
