"""Shared pytest fixtures for the Jukebox test suite."""

from __future__ import annotations

from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from jukebox.providers.cache.cache_store import CacheStore
from jukebox.utils.rate_limiter import RateLimiter

ELO_NAME = "Electric Light Orchestra"
ELO_MBID = "0c0b7ac3-266f-47e4-8e87-02d1d1eb4f0e"
ELDORADO_ID = "c2e4b8f1-2a4e-4d10-a46a-e9e041da8eb3"


# ---------------------------------------------------------------------------
# HTTP helpers
# ---------------------------------------------------------------------------


@pytest.fixture
def json_response() -> Callable[..., httpx.Response]:
    """Return a factory for real ``httpx.Response`` objects bound to a request.

    A bound request makes ``raise_for_status()`` behave exactly as it does
    against a live server.
    """

    def _factory(
        payload: Any = None,
        status_code: int = 200,
        url: str = "https://example.test/",
        content: bytes | None = None,
    ) -> httpx.Response:
        request = httpx.Request("GET", url)
        if content is not None:
            return httpx.Response(status_code, content=content, request=request)
        return httpx.Response(status_code, json=payload, request=request)

    return _factory


@pytest.fixture
def mock_http_client() -> AsyncMock:
    """An ``httpx.AsyncClient`` stand-in whose ``get`` is an AsyncMock."""
    client = AsyncMock(spec=httpx.AsyncClient)
    client.get = AsyncMock()
    return client


@pytest.fixture
def open_limiter() -> MagicMock:
    """A rate limiter that always grants a permit immediately."""
    limiter = MagicMock(spec=RateLimiter)
    limiter.name = "test"
    limiter.acquire = AsyncMock(return_value=None)
    return limiter


@pytest.fixture
def cache_store() -> CacheStore:
    return CacheStore.in_memory(max_size=100, ttl=3600)


# ---------------------------------------------------------------------------
# Upstream payloads
# ---------------------------------------------------------------------------


@pytest.fixture
def musicbrainz_search_payload() -> dict[str, Any]:
    return {
        "created": "2024-05-01T12:00:00.000Z",
        "count": 2,
        "offset": 0,
        "artists": [
            {"id": ELO_MBID, "name": ELO_NAME, "score": 100},
            {"id": "9a1f2c3d-0000-4000-8000-000000000001", "name": "ELO Part II", "score": 71},
        ],
    }


@pytest.fixture
def musicbrainz_details_payload() -> dict[str, Any]:
    return {
        "id": ELO_MBID,
        "name": ELO_NAME,
        "relations": [
            {
                "type": "discogs",
                "url": {"resource": "https://www.discogs.com/artist/25280"},
            },
            {
                "type": "wikipedia",
                "url": {"resource": "https://en.wikipedia.org/wiki/Electric_Light_Orchestra"},
            },
            {
                "type": "wikidata",
                "url": {"resource": "https://www.wikidata.org/wiki/Q207898"},
            },
        ],
        "release-groups": [
            {"id": ELDORADO_ID, "title": "Eldorado", "primary-type": "Album"},
            {"id": "single-1", "title": "Mr. Blue Sky", "primary-type": "Single"},
            {"id": "album-2", "title": "Out of the Blue", "primary-type": "album"},
            {"id": "", "title": "Untitled Bootleg", "primary-type": "Album"},
        ],
    }


@pytest.fixture
def wikidata_payload() -> dict[str, Any]:
    return {
        "entities": {
            "Q207898": {
                "type": "item",
                "id": "Q207898",
                "sitelinks": {
                    "enwiki": {"site": "enwiki", "title": ELO_NAME, "badges": []},
                    "dewiki": {"site": "dewiki", "title": ELO_NAME, "badges": []},
                },
            }
        },
        "success": 1,
    }


@pytest.fixture
def wikipedia_payload() -> dict[str, Any]:
    return {
        "batchcomplete": "",
        "query": {
            "pages": {
                "123": {
                    "pageid": 123,
                    "ns": 0,
                    "title": ELO_NAME,
                    "extract": "ELO is an English rock band formed in Birmingham in 1970.",
                }
            }
        },
    }


@pytest.fixture
def cover_art_payload() -> dict[str, Any]:
    return {
        "release": f"https://musicbrainz.org/release/{ELDORADO_ID}",
        "images": [
            {
                "front": False,
                "back": True,
                "image": f"http://coverartarchive.org/release-group/{ELDORADO_ID}/back.jpg",
            },
            {
                "front": True,
                "back": False,
                "image": f"http://coverartarchive.org/release-group/{ELDORADO_ID}/front.jpg",
            },
        ],
    }
