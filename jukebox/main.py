"""Jukebox FastAPI application entry point.

Wires together the rate limiters, caches, upstream providers and services
via explicit constructor injection.  Loads configuration from ``.env`` and
``config/config.yaml``, configures structured logging, and exposes the
ASGI ``app`` for uvicorn.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from jukebox.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from jukebox.api.routes import router as api_router
from jukebox.config.loader import load_config
from jukebox.config.settings import Settings
from jukebox.providers.biography.wikidata_provider import WikidataProvider
from jukebox.providers.biography.wikipedia_provider import WikipediaProvider
from jukebox.providers.cache.cache_store import CacheStore
from jukebox.providers.cover_art.cover_art_archive_provider import CoverArtArchiveProvider
from jukebox.providers.music_db.musicbrainz_provider import MusicBrainzProvider
from jukebox.services.artist_resolver import ArtistResolver
from jukebox.services.cache_invalidation import CacheInvalidationService
from jukebox.utils.logging import configure_logging, get_logger
from jukebox.utils.rate_limiter import RateLimiterConfig, RateLimiterRegistry

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

APP_VERSION = "1.0.0"

# One rate limiter per upstream; names match each provider's PROVIDER_NAME.
UPSTREAMS: list[str] = [
    MusicBrainzProvider.PROVIDER_NAME,
    WikidataProvider.PROVIDER_NAME,
    WikipediaProvider.PROVIDER_NAME,
    CoverArtArchiveProvider.PROVIDER_NAME,
]

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()
config = load_config()

configure_logging(
    log_level=settings.log_level,
    app_env=settings.app_env,
)
_logger: structlog.BoundLogger = get_logger(__name__)


def _build_all(app_settings: Settings, app_config: dict[str, Any] | None = None) -> dict[str, Any]:
    """Construct every limiter, cache, provider and service for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    app_config = app_config or {}

    # -- Shared resources --
    http_client = httpx.AsyncClient(
        timeout=app_settings.http_timeout_seconds,
        headers={
            "User-Agent": app_settings.user_agent(),
            "Accept": "application/json",
        },
        follow_redirects=True,
    )

    # -- Rate limiters (one per upstream) --
    rate_limiters = RateLimiterRegistry.from_config(
        UPSTREAMS,
        defaults=RateLimiterConfig(
            limit_for_period=app_settings.rate_limit_for_period,
            limit_refresh_period=app_settings.rate_limit_refresh_period_seconds,
            timeout=app_settings.rate_limit_timeout_seconds,
        ),
        overrides=app_config.get("rate_limiters"),
    )

    # -- Caches --
    cache_store = CacheStore.in_memory(
        max_size=app_settings.cache_max_size,
        ttl=app_settings.cache_ttl_seconds,
        overrides=app_config.get("caches"),
    )

    # -- Upstream providers --
    musicbrainz = MusicBrainzProvider(
        http_client=http_client,
        rate_limiter=rate_limiters.get(MusicBrainzProvider.PROVIDER_NAME),
        base_url=app_settings.musicbrainz_base_url,
    )
    wikidata = WikidataProvider(
        http_client=http_client,
        rate_limiter=rate_limiters.get(WikidataProvider.PROVIDER_NAME),
        api_url=app_settings.wikidata_api_url,
    )
    wikipedia = WikipediaProvider(
        http_client=http_client,
        rate_limiter=rate_limiters.get(WikipediaProvider.PROVIDER_NAME),
        api_url=app_settings.wikipedia_api_url,
    )
    cover_art = CoverArtArchiveProvider(
        http_client=http_client,
        rate_limiter=rate_limiters.get(CoverArtArchiveProvider.PROVIDER_NAME),
        base_url=app_settings.cover_art_base_url,
    )

    # -- Services --
    cover_art_quota = rate_limiters.get(CoverArtArchiveProvider.PROVIDER_NAME).config
    cover_art_concurrency = max(
        1, min(app_settings.cover_art_concurrency, cover_art_quota.limit_for_period)
    )
    artist_resolver = ArtistResolver(
        metadata_provider=musicbrainz,
        title_provider=wikidata,
        biography_provider=wikipedia,
        cover_art_provider=cover_art,
        cache_store=cache_store,
        cover_art_concurrency=cover_art_concurrency,
    )
    cache_invalidation = CacheInvalidationService(cache_store=cache_store)

    return {
        "http_client": http_client,
        "rate_limiters": rate_limiters,
        "cache_store": cache_store,
        "artist_resolver": artist_resolver,
        "cache_invalidation": cache_invalidation,
        "request_timeout": app_settings.request_timeout_seconds,
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Initialise all providers and services on startup, clean up on shutdown."""
    components = _build_all(settings, config)

    for key, value in components.items():
        setattr(application.state, key, value)

    _logger.info(
        "app_startup",
        version=APP_VERSION,
        environment=settings.app_env,
        upstreams=UPSTREAMS,
        user_agent=settings.user_agent(),
    )

    yield

    # -- Shutdown: close shared httpx client --
    http_client: httpx.AsyncClient = components["http_client"]
    await http_client.aclose()
    _logger.info("app_shutdown", message="HTTP client closed")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    application = FastAPI(
        title="Jukebox API",
        version=APP_VERSION,
        description=(
            "Resolve an artist by name or MusicBrainz id and return its "
            "Wikipedia biography and primary albums with cover art, "
            "aggregated from MusicBrainz, Wikidata, Wikipedia and the "
            "Cover Art Archive."
        ),
        lifespan=_lifespan,
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application)

    # -- API routes --
    application.include_router(api_router)

    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "jukebox.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
