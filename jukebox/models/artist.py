"""Artist domain models for the resolution pipeline.

Defines Pydantic v2 models for every value that flows between the
upstream providers, the resolver and the cache.  All models use frozen
config: cache entries hold these objects directly and are replaced
wholesale, never mutated in place.

Flow through the pipeline:
    - MusicBrainz search      -> ArtistIdentity   (lookup cache, by name)
    - MusicBrainz artist+rels -> ArtistDetails    (raw detail payload)
    - ArtistDetails + enrichment -> ArtistRecord  (details cache, by MBID;
                                                   discography cache, by name)
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# MusicBrainz release-group primary type that qualifies as a studio album.
PRIMARY_ALBUM_TYPE = "album"


class ArtistIdentity(BaseModel):
    """Result of an identity lookup: the display name and canonical MBID."""

    model_config = ConfigDict(frozen=True)

    display_name: str
    canonical_id: str = Field(min_length=1)


class ReleaseGroup(BaseModel):
    """A candidate release taken verbatim from the MusicBrainz detail payload.

    ``primary_type`` is MusicBrainz's classification ("Album", "Single",
    "EP", "Broadcast", ...) or empty when MusicBrainz has none.
    """

    model_config = ConfigDict(frozen=True)

    id: str = ""
    title: str = ""
    primary_type: str = ""

    @property
    def is_primary_album(self) -> bool:
        """True for a primary album with a usable id and title."""
        return (
            self.primary_type.strip().lower() == PRIMARY_ALBUM_TYPE
            and bool(self.id.strip())
            and bool(self.title.strip())
        )


class ArtistDetails(BaseModel):
    """Parsed MusicBrainz artist payload (``inc=url-rels+release-groups``).

    Carries the two biography-source hints -- a direct Wikipedia page
    title and an indirect Wikidata entity id -- alongside the raw list of
    release groups.  Either hint may be absent.
    """

    model_config = ConfigDict(frozen=True)

    display_name: str
    canonical_id: str
    wikipedia_title: str | None = None
    wikidata_id: str | None = None
    release_groups: tuple[ReleaseGroup, ...] = ()


class Album(BaseModel):
    """A primary album in the final record; cover art is optional."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1)
    release_group_id: str = Field(min_length=1)
    cover_image_url: str | None = None


class ArtistRecord(BaseModel):
    """The aggregate returned by details and discography resolution."""

    model_config = ConfigDict(frozen=True)

    display_name: str
    canonical_id: str = Field(min_length=1)
    biography: str | None = None
    albums: tuple[Album, ...] = ()
