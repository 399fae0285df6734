"""FastAPI API routes for the Jukebox service.

Provides REST endpoints for artist lookup, enriched details, discography,
operator cache eviction and health.  Service dependencies are resolved
from ``app.state`` via FastAPI's ``Depends`` using the ``Annotated``
pattern.

# --- API ROUTE MAP ----------------------------------------------------
#
# Endpoint                              Method  Description
# ---------------------------------------------------------------------
# /api/v1/artist/mbid                   GET     Artist name -> {name, mbid}
# /api/v1/artist/details                GET     MBID -> enriched record
# /api/v1/artist/discography            GET     Artist name -> enriched record
# /api/v1/artist/lookup/cache           DELETE  Evict a name lookup
# /api/v1/artist/details/cache          DELETE  Evict a record by MBID
# /api/v1/artist/discography/cache      DELETE  Evict a record by name
# /api/v1/health                        GET     Cache sizes + limiter state
#
# Required query parameters default to "" so that a missing or blank
# value reaches the service and fails as InvalidArgumentError (HTTP 400)
# rather than FastAPI's 422.
# ----------------------------------------------------------------------
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request

from jukebox.api.schemas import (
    ArtistLookupResponse,
    ArtistResponse,
    CacheEvictionResponse,
    ErrorResponse,
    HealthResponse,
)
from jukebox.providers.cache.cache_store import CacheName
from jukebox.services.artist_resolver import ArtistResolver
from jukebox.services.cache_invalidation import CacheInvalidationService

router = APIRouter(prefix="/api/v1")

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


# ---------------------------------------------------------------------------
# Dependency helpers
# ---------------------------------------------------------------------------


def _get_resolver(request: Request) -> ArtistResolver:
    return request.app.state.artist_resolver


def _get_cache_invalidation(request: Request) -> CacheInvalidationService:
    return request.app.state.cache_invalidation


def _get_request_timeout(request: Request) -> float | None:
    return request.app.state.request_timeout


ResolverDep = Annotated[ArtistResolver, Depends(_get_resolver)]
InvalidationDep = Annotated[CacheInvalidationService, Depends(_get_cache_invalidation)]
DefaultTimeoutDep = Annotated[float | None, Depends(_get_request_timeout)]

ArtistNameQuery = Annotated[str, Query(alias="artistName", description="Artist name")]
MbidQuery = Annotated[str, Query(description="MusicBrainz artist id")]
TimeoutQuery = Annotated[
    float | None, Query(description="Deadline in seconds for the whole resolution")
]


# ---------------------------------------------------------------------------
# Artist endpoints
# ---------------------------------------------------------------------------


@router.get(
    "/artist/mbid",
    response_model=ArtistLookupResponse,
    responses=_ERROR_RESPONSES,
    summary="Resolve an artist name to its MusicBrainz id",
)
async def get_artist_mbid(
    resolver: ResolverDep,
    default_timeout: DefaultTimeoutDep,
    artist_name: ArtistNameQuery = "",
    timeout: TimeoutQuery = None,
) -> ArtistLookupResponse:
    identity = await resolver.get_artist_mbid(
        artist_name, timeout=timeout if timeout is not None else default_timeout
    )
    return ArtistLookupResponse.from_identity(identity)


@router.get(
    "/artist/details",
    response_model=ArtistResponse,
    responses=_ERROR_RESPONSES,
    summary="Get biography and albums for a MusicBrainz id",
)
async def get_artist_details(
    resolver: ResolverDep,
    default_timeout: DefaultTimeoutDep,
    mbid: MbidQuery = "",
    timeout: TimeoutQuery = None,
) -> ArtistResponse:
    record = await resolver.get_artist_details(
        mbid, timeout=timeout if timeout is not None else default_timeout
    )
    return ArtistResponse.from_record(record)


@router.get(
    "/artist/discography",
    response_model=ArtistResponse,
    responses=_ERROR_RESPONSES,
    summary="Get biography and albums for an artist name",
)
async def get_artist_discography(
    resolver: ResolverDep,
    default_timeout: DefaultTimeoutDep,
    artist_name: ArtistNameQuery = "",
    timeout: TimeoutQuery = None,
) -> ArtistResponse:
    record = await resolver.get_artist_discography(
        artist_name, timeout=timeout if timeout is not None else default_timeout
    )
    return ArtistResponse.from_record(record)


# ---------------------------------------------------------------------------
# Cache eviction endpoints
# ---------------------------------------------------------------------------


@router.delete(
    "/artist/lookup/cache",
    response_model=CacheEvictionResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Evict a cached name-to-MBID lookup",
)
async def evict_artist_lookup(
    invalidation: InvalidationDep,
    artist_name: ArtistNameQuery = "",
) -> CacheEvictionResponse:
    key, removed = await invalidation.evict_lookup(artist_name)
    return CacheEvictionResponse(cache=CacheName.ARTIST_LOOKUP.value, key=key, removed=removed)


@router.delete(
    "/artist/details/cache",
    response_model=CacheEvictionResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Evict a cached artist record by MBID",
)
async def evict_artist_details(
    invalidation: InvalidationDep,
    mbid: MbidQuery = "",
) -> CacheEvictionResponse:
    key, removed = await invalidation.evict_details(mbid)
    return CacheEvictionResponse(cache=CacheName.ARTIST_DETAILS.value, key=key, removed=removed)


@router.delete(
    "/artist/discography/cache",
    response_model=CacheEvictionResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Evict a cached artist record by name",
)
async def evict_artist_discography(
    invalidation: InvalidationDep,
    artist_name: ArtistNameQuery = "",
) -> CacheEvictionResponse:
    key, removed = await invalidation.evict_discography(artist_name)
    return CacheEvictionResponse(
        cache=CacheName.ARTIST_DISCOGRAPHY.value, key=key, removed=removed
    )


# ---------------------------------------------------------------------------
# System endpoints
# ---------------------------------------------------------------------------


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Application health check",
)
async def health_check(request: Request) -> HealthResponse:
    """Return application health, version, cache sizes and limiter state."""
    caches: dict[str, int] = {}
    cache_store = getattr(request.app.state, "cache_store", None)
    if cache_store is not None:
        caches = cache_store.stats()

    rate_limiters: dict[str, Any] = {}
    registry = getattr(request.app.state, "rate_limiters", None)
    if registry is not None:
        rate_limiters = registry.snapshot()

    return HealthResponse(
        status="healthy",
        version=request.app.version,
        caches=caches,
        rate_limiters=rate_limiters,
    )
