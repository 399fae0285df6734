"""Normalization helpers for cache keys and upstream identifiers.

Name-keyed caches (artist lookup, discography) fold keys to lower case so
that "Electric Light Orchestra", "electric light orchestra" and
"  ELECTRIC  LIGHT ORCHESTRA " all land on the same entry.  MBIDs are
opaque and only stripped.
"""

import re
from urllib.parse import unquote, urlparse


def is_blank(value: str | None) -> bool:
    """Return ``True`` for ``None``, empty, or whitespace-only strings."""
    return value is None or not value.strip()


def normalize_artist_key(name: str) -> str:
    """Normalize an artist name into a cache key.

    Strips surrounding whitespace, collapses runs of inner whitespace,
    and lower-cases the result.

    Args:
        name: Raw artist name as received from the caller.

    Returns:
        The case-folded cache key.
    """
    return re.sub(r"\s+", " ", name.strip()).lower()


def normalize_mbid_key(mbid: str) -> str:
    """Normalize an MBID into a details-cache key (whitespace stripped only)."""
    return mbid.strip()


def last_path_segment(resource_url: str) -> str | None:
    """Return the URL-decoded last path segment of *resource_url*.

    Used for MusicBrainz Wikidata relations, where
    ``https://www.wikidata.org/wiki/Q207898`` yields ``Q207898``.
    """
    path = urlparse(resource_url.strip()).path.rstrip("/")
    if not path:
        return None
    segment = unquote(path.rsplit("/", 1)[-1])
    return segment or None


def wikipedia_title_from_url(resource_url: str) -> str | None:
    """Return the URL-decoded article title of a Wikipedia page URL.

    Everything after ``/wiki/`` is the title, slashes included, so
    ``https://en.wikipedia.org/wiki/AC/DC`` yields ``AC/DC``.  Returns
    ``None`` for URLs that are not ``/wiki/`` article links.
    """
    path = urlparse(resource_url.strip()).path
    prefix = "/wiki/"
    if not path.startswith(prefix):
        return None
    title = unquote(path[len(prefix):]).strip()
    return title or None
