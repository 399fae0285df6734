"""Abstract base classes for best-effort enrichment sources.

Biography and cover art are enrichments, not required fields.  Every
method here returns ``None`` instead of raising when the upstream is
rate-limited, unreachable, or returns nothing usable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class IBiographyTitleProvider(ABC):
    """Resolves a cross-reference id (Wikidata ``Q...``) to a Wikipedia title."""

    @abstractmethod
    async def resolve_biography_title(self, cross_reference_id: str) -> str | None:
        """Return the English Wikipedia page title, or ``None``."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the provider identifier, e.g. ``"wikidata"``."""


class IBiographyProvider(ABC):
    """Fetches biography text for a Wikipedia page title."""

    @abstractmethod
    async def fetch_biography(self, title: str) -> str | None:
        """Return the introductory extract for *title*, or ``None``."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the provider identifier, e.g. ``"wikipedia"``."""


class ICoverArtProvider(ABC):
    """Fetches the front cover image for a release group."""

    @abstractmethod
    async def fetch_cover_art(self, release_group_id: str) -> str | None:
        """Return the front-cover image URL, or ``None``."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the provider identifier, e.g. ``"coverart"``."""
