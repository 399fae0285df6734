"""Abstract base class for the primary artist-metadata source.

The metadata source (MusicBrainz) backs the two mandatory pipeline stages:
resolving a free-text artist name to a canonical id, and fetching the
artist's relations and release groups for that id.  Failures here are
never degraded -- they abort the request.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from jukebox.models.artist import ArtistDetails, ArtistIdentity


class IArtistMetadataProvider(ABC):
    """Contract for the identity + detail lookup service."""

    @abstractmethod
    async def lookup_identity(self, name: str) -> ArtistIdentity:
        """Resolve *name* to the best-matching artist.

        Parameters
        ----------
        name:
            Free-text artist name, already validated as non-blank.

        Returns
        -------
        ArtistIdentity
            Display name and canonical id of the top search hit.

        Raises
        ------
        jukebox.utils.errors.ArtistNotFoundError
            If the search returns no artists.
        jukebox.utils.errors.RateLimitExceededError
            If no rate-limiter permit was granted in time.
        jukebox.utils.errors.UpstreamError
            On transport or parsing failure.
        """

    @abstractmethod
    async def fetch_details(self, canonical_id: str) -> ArtistDetails:
        """Fetch relations and release groups for *canonical_id*.

        Raises
        ------
        jukebox.utils.errors.ArtistNotFoundError
            If the source has no artist under this id.
        jukebox.utils.errors.RateLimitExceededError
            If no rate-limiter permit was granted in time.
        jukebox.utils.errors.UpstreamError
            On transport or parsing failure.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the provider identifier, e.g. ``"musicbrainz"``."""
