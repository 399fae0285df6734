"""Cover art provider implementations."""

from jukebox.providers.cover_art.cover_art_archive_provider import CoverArtArchiveProvider

__all__ = ["CoverArtArchiveProvider"]
