"""Public interface definitions for all external service providers.

Every upstream used by the resolver is accessed through the abstract base
classes in this package.  Concrete adapters live in ``jukebox/providers/``
and are wired together in ``jukebox/main.py``; tests inject mocks built
with ``MagicMock(spec=...)``.

CONCRETE PROVIDER MAP:
    Interface                  ->  Concrete implementation
    -----------------------------------------------------------------
    IArtistMetadataProvider    ->  MusicBrainzProvider
    IBiographyTitleProvider    ->  WikidataProvider
    IBiographyProvider         ->  WikipediaProvider
    ICoverArtProvider          ->  CoverArtArchiveProvider
    ICacheProvider             ->  MemoryCacheProvider
"""

from jukebox.interfaces.artist_metadata_provider import IArtistMetadataProvider
from jukebox.interfaces.cache_provider import ICacheProvider
from jukebox.interfaces.enrichment_provider import (
    IBiographyProvider,
    IBiographyTitleProvider,
    ICoverArtProvider,
)

__all__ = [
    "IArtistMetadataProvider",
    "IBiographyProvider",
    "IBiographyTitleProvider",
    "ICacheProvider",
    "ICoverArtProvider",
]
