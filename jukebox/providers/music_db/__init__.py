"""Artist metadata provider implementations.

MusicBrainzProvider is the authoritative source for artist identity and
details: it resolves a free-text name to an MBID and fetches the artist's
relations (Wikipedia, Wikidata) and release groups.
"""

from jukebox.providers.music_db.musicbrainz_provider import MusicBrainzProvider

__all__ = ["MusicBrainzProvider"]
