"""Cover Art Archive provider implementing ICoverArtProvider.

``GET /release-group/{mbid}`` returns the images attached to the release
group's representative release; the first image flagged ``front`` is the
album cover.  Release groups without art answer 404, which is the common
case for obscure releases and is not logged as a failure.

Best-effort: any failure is logged and reported as ``None`` -- the album
is still listed, only without an image.
"""

from __future__ import annotations

from urllib.parse import quote

import httpx
import structlog

from jukebox.interfaces.enrichment_provider import ICoverArtProvider
from jukebox.utils.errors import RateLimitExceededError
from jukebox.utils.rate_limiter import RateLimiter

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_BASE_URL = "https://coverartarchive.org/release-group/"


class CoverArtArchiveProvider(ICoverArtProvider):
    """Look up front-cover images for MusicBrainz release groups."""

    PROVIDER_NAME = "coverart"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        rate_limiter: RateLimiter,
        base_url: str = _DEFAULT_BASE_URL,
    ) -> None:
        self._client = http_client
        self._rate_limiter = rate_limiter
        self._base_url = base_url if base_url.endswith("/") else f"{base_url}/"

    async def fetch_cover_art(self, release_group_id: str) -> str | None:
        """Return the front-cover URL for *release_group_id*, or ``None``."""
        try:
            await self._rate_limiter.acquire()
        except RateLimitExceededError as exc:
            logger.warning("coverart_rate_limited", release_group_id=release_group_id, error=str(exc))
            return None

        url = f"{self._base_url}{quote(release_group_id, safe='')}"
        try:
            # The archive answers with a redirect to the release's image index.
            response = await self._client.get(url, follow_redirects=True)
            if response.status_code == 404:
                logger.debug("coverart_not_available", release_group_id=release_group_id)
                return None
            response.raise_for_status()
            images = response.json().get("images", [])
        except (httpx.HTTPError, ValueError, AttributeError) as exc:
            logger.warning("coverart_fetch_failed", release_group_id=release_group_id, error=str(exc))
            return None

        if not isinstance(images, list):
            return None

        for image in images:
            if isinstance(image, dict) and image.get("front") is True:
                image_url = image.get("image")
                if isinstance(image_url, str) and image_url:
                    logger.debug(
                        "coverart_found", release_group_id=release_group_id, image=image_url
                    )
                    return image_url

        logger.debug("coverart_no_front_image", release_group_id=release_group_id)
        return None

    def get_provider_name(self) -> str:
        return self.PROVIDER_NAME
