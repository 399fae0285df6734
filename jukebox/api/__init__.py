"""Jukebox API layer -- routes, schemas, and middleware."""

from jukebox.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
    status_for_error,
)
from jukebox.api.routes import router
from jukebox.api.schemas import (
    AlbumResponse,
    ArtistLookupResponse,
    ArtistResponse,
    CacheEvictionResponse,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "configure_cors",
    "router",
    "status_for_error",
    "AlbumResponse",
    "ArtistLookupResponse",
    "ArtistResponse",
    "CacheEvictionResponse",
    "ErrorResponse",
    "HealthResponse",
]
