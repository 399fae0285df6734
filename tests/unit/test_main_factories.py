"""Unit tests for factory functions in jukebox/main.py."""

from __future__ import annotations

import httpx
import pytest
from fastapi import FastAPI

from jukebox.config.settings import Settings


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestBuildAll:
    @pytest.mark.asyncio
    async def test_returns_expected_components(self) -> None:
        from jukebox.main import _build_all
        from jukebox.providers.cache.cache_store import CacheStore
        from jukebox.services.artist_resolver import ArtistResolver
        from jukebox.services.cache_invalidation import CacheInvalidationService
        from jukebox.utils.rate_limiter import RateLimiterRegistry

        components = _build_all(_settings(musicbrainz_contact="ops@example.com"), {})
        try:
            assert isinstance(components["http_client"], httpx.AsyncClient)
            assert isinstance(components["rate_limiters"], RateLimiterRegistry)
            assert isinstance(components["cache_store"], CacheStore)
            assert isinstance(components["artist_resolver"], ArtistResolver)
            assert isinstance(components["cache_invalidation"], CacheInvalidationService)
            assert components["request_timeout"] == 30.0

            assert components["rate_limiters"].names() == [
                "musicbrainz",
                "wikidata",
                "wikipedia",
                "coverart",
            ]
            headers = components["http_client"].headers
            assert headers["User-Agent"] == "JukeboxApi/1.0 (ops@example.com)"
            assert headers["Accept"] == "application/json"
        finally:
            await components["http_client"].aclose()

    @pytest.mark.asyncio
    async def test_config_overrides_applied(self) -> None:
        from jukebox.main import _build_all

        components = _build_all(
            _settings(),
            {
                "rate_limiters": {"coverart": {"limit_for_period": 5}},
                "caches": {"artistLookupCache": {"max_size": 10}},
            },
        )
        try:
            registry = components["rate_limiters"]
            assert registry.get("coverart").config.limit_for_period == 5
            assert registry.get("musicbrainz").config.limit_for_period == 1
        finally:
            await components["http_client"].aclose()

    @pytest.mark.asyncio
    async def test_cover_art_fan_out_capped_at_coverart_quota(self) -> None:
        from jukebox.main import _build_all

        components = _build_all(_settings(cover_art_concurrency=8), {})
        try:
            assert components["artist_resolver"].cover_art_concurrency == 1
        finally:
            await components["http_client"].aclose()

        components = _build_all(
            _settings(cover_art_concurrency=8),
            {"rate_limiters": {"coverart": {"limit_for_period": 3}}},
        )
        try:
            assert components["artist_resolver"].cover_art_concurrency == 3
        finally:
            await components["http_client"].aclose()


class TestCreateApp:
    def test_returns_fastapi_with_routes(self) -> None:
        from jukebox.main import create_app

        app = create_app()

        assert isinstance(app, FastAPI)
        paths = {route.path for route in app.routes}
        assert "/api/v1/artist/mbid" in paths
        assert "/api/v1/artist/details" in paths
        assert "/api/v1/artist/discography" in paths
        assert "/api/v1/artist/lookup/cache" in paths
        assert "/api/v1/health" in paths
