"""Pydantic response schemas for the Jukebox API.

Defines the public contract for every REST endpoint: artist lookup,
details, discography, cache eviction, health and errors.

# --- HOW SCHEMAS WORK -------------------------------------------------
#
# The internal models (jukebox/models/artist.py) use snake_case names
# tuned for the pipeline.  These schemas are the *wire* shape clients
# rely on: ``name``/``mbid``/``description``/``albums`` with albums as
# ``{title, id, image}``.  The ``from_*`` classmethods do the mapping so
# route handlers stay one-liners.
#
# Convention: response schemas end with "Response".
# ----------------------------------------------------------------------
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from jukebox.models.artist import Album, ArtistIdentity, ArtistRecord


class ArtistLookupResponse(BaseModel):
    """Result of resolving an artist name to its MusicBrainz id."""

    name: str
    mbid: str

    @classmethod
    def from_identity(cls, identity: ArtistIdentity) -> ArtistLookupResponse:
        return cls(name=identity.display_name, mbid=identity.canonical_id)


class AlbumResponse(BaseModel):
    """A primary album; ``image`` is null when no front cover is known."""

    title: str
    id: str
    image: str | None = None

    @classmethod
    def from_album(cls, album: Album) -> AlbumResponse:
        return cls(title=album.title, id=album.release_group_id, image=album.cover_image_url)


class ArtistResponse(BaseModel):
    """Enriched artist record returned by the details and discography endpoints."""

    name: str
    mbid: str
    description: str | None = Field(default=None, description="Wikipedia intro, when available")
    albums: list[AlbumResponse] = Field(default_factory=list)

    @classmethod
    def from_record(cls, record: ArtistRecord) -> ArtistResponse:
        return cls(
            name=record.display_name,
            mbid=record.canonical_id,
            description=record.biography,
            albums=[AlbumResponse.from_album(album) for album in record.albums],
        )


class CacheEvictionResponse(BaseModel):
    """Outcome of an operator cache eviction.

    ``evicted`` is always true: evicting an absent key is a successful no-op.
    ``removed`` reports whether an entry was actually present.
    """

    cache: str
    key: str
    evicted: bool = True
    removed: bool = False


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    caches: dict[str, int] = Field(default_factory=dict)
    rate_limiters: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: str | None = None
