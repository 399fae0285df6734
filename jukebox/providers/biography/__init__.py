"""Biography enrichment providers.

    WikidataProvider   -- maps a Wikidata entity id to its English Wikipedia title.
    WikipediaProvider  -- fetches the plain-text intro of an English Wikipedia article.

Both are best-effort: failures are logged and surface as ``None``.
"""

from jukebox.providers.biography.wikidata_provider import WikidataProvider
from jukebox.providers.biography.wikipedia_provider import WikipediaProvider

__all__ = ["WikidataProvider", "WikipediaProvider"]
