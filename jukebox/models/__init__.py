"""Jukebox domain models -- re-exports all public model classes."""

from jukebox.models.artist import (
    PRIMARY_ALBUM_TYPE,
    Album,
    ArtistDetails,
    ArtistIdentity,
    ArtistRecord,
    ReleaseGroup,
)

__all__ = [
    "PRIMARY_ALBUM_TYPE",
    "Album",
    "ArtistDetails",
    "ArtistIdentity",
    "ArtistRecord",
    "ReleaseGroup",
]
