"""Track-related domain entities.

Canonical track representation plus the partial results providers contribute
while a track is being resolved.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from attrs import define, field

from fanlink.domain.identifiers import normalize_isrc, normalize_upc

# Keys used in CanonicalTrack.source_urls
SPOTIFY_TRACK = "spotify_track"
SPOTIFY_ARTIST = "spotify_artist"
SPOTIFY_ALBUM = "spotify_album"
APPLE_MUSIC = "apple_music"
DEEZER = "deezer"
YOUTUBE = "youtube"

UNKNOWN_ARTIST = "Unknown Artist"


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _read_only_urls(urls: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(urls))


@define(frozen=True, slots=True)
class Artwork:
    """Cover art in three sizes; any slot may be missing."""

    large: str | None = field(default=None, converter=_blank_to_none)
    medium: str | None = field(default=None, converter=_blank_to_none)
    small: str | None = field(default=None, converter=_blank_to_none)

    @property
    def is_empty(self) -> bool:
        return not (self.large or self.medium or self.small)

    @property
    def best(self) -> str | None:
        """Highest resolution image available."""
        return self.large or self.medium or self.small

    def merge(self, other: "Artwork") -> "Artwork":
        """Fill empty slots from `other`, keeping images already present."""
        return Artwork(
            large=self.large or other.large,
            medium=self.medium or other.medium,
            small=self.small or other.small,
        )

    def as_dict(self) -> dict[str, str | None]:
        return {"large": self.large, "medium": self.medium, "small": self.small}


@define(frozen=True, slots=True)
class ProviderResult:
    """Whatever subset of canonical track fields a single provider could supply."""

    provider: str
    title: str | None = field(default=None, converter=_blank_to_none)
    artist: str | None = field(default=None, converter=_blank_to_none)
    album: str | None = field(default=None, converter=_blank_to_none)
    album_id: str | None = field(default=None, converter=_blank_to_none)
    artist_id: str | None = field(default=None, converter=_blank_to_none)
    isrc: str | None = field(default=None, converter=normalize_isrc)
    upc: str | None = field(default=None, converter=normalize_upc)
    release_date: str | None = field(default=None, converter=_blank_to_none)
    release_type: str | None = field(default=None, converter=_blank_to_none)
    artwork: Artwork = field(factory=Artwork)
    source_urls: dict[str, str] = field(factory=dict)

    @property
    def has_identity(self) -> bool:
        """True when the result names both a title and an artist."""
        return bool(self.title and self.artist)


@define(frozen=True, slots=True)
class CanonicalTrack:
    """Immutable, fully merged track metadata returned to callers.

    Title and artist are always present; every other field is best-effort.
    """

    title: str = field()
    artist: str = field()
    album: str | None = None
    album_id: str | None = None
    artist_id: str | None = None
    isrc: str | None = field(default=None, converter=normalize_isrc)
    upc: str | None = field(default=None, converter=normalize_upc)
    release_date: str | None = None
    release_type: str | None = None
    artwork: Artwork = field(factory=Artwork)
    source_urls: Mapping[str, str] = field(factory=dict, converter=_read_only_urls)

    @title.validator
    def _check_title(self, _attribute, value: str) -> None:
        if not value or not value.strip():
            raise ValueError("CanonicalTrack requires a non-empty title")

    @artist.validator
    def _check_artist(self, _attribute, value: str) -> None:
        if not value or not value.strip():
            raise ValueError("CanonicalTrack requires a non-empty artist")

    def source_url(self, key: str) -> str | None:
        return self.source_urls.get(key)

    def verified_platform_urls(self) -> dict[str, str]:
        """Platform deep links confirmed by a provider, keyed by platform."""
        urls: dict[str, str] = {}
        spotify = self.source_urls.get(SPOTIFY_TRACK) or self.source_urls.get(
            SPOTIFY_ALBUM
        )
        if spotify:
            urls["spotify"] = spotify
        for key in (APPLE_MUSIC, DEEZER, YOUTUBE):
            if self.source_urls.get(key):
                urls[key] = self.source_urls[key]
        return urls

    def to_metadata_dict(self) -> dict[str, Any]:
        """Serialize in the shape returned by the link generator."""
        return {
            "title": self.title,
            "artist": self.artist,
            "album": self.album or "",
            "album_id": self.album_id or "",
            "artist_id": self.artist_id or "",
            "isrc": self.isrc,
            "upc": self.upc,
            "release_date": self.release_date,
            "artwork": self.artwork.as_dict(),
            "spotify_track_url": self.source_urls.get(SPOTIFY_TRACK),
            "spotify_artist_url": self.source_urls.get(SPOTIFY_ARTIST),
            "spotify_album_url": self.source_urls.get(SPOTIFY_ALBUM),
        }

    def to_platform_metadata_dict(self, platforms: dict[str, str]) -> dict[str, Any]:
        """Serialize in the shape returned by the metadata lookup."""
        return {
            "title": self.title,
            "artist": self.artist,
            "album": self.album,
            "artwork_url": self.artwork.best,
            "release_date": self.release_date,
            "release_type": self.release_type or "Single",
            "upc": self.upc,
            "isrc": self.isrc,
            "platforms": dict(platforms),
        }


@define(slots=True)
class TrackDraft:
    """Mutable builder that merges provider results into one canonical track.

    First non-null value wins per field. Artwork slots are filled independently,
    so a later provider can still contribute a larger image than the one already
    held. Source URLs are first-wins per key.
    """

    title: str | None = None
    artist: str | None = None
    album: str | None = None
    album_id: str | None = None
    artist_id: str | None = None
    isrc: str | None = None
    upc: str | None = None
    release_date: str | None = None
    release_type: str | None = None
    artwork: Artwork = field(factory=Artwork)
    source_urls: dict[str, str] = field(factory=dict)
    contributors: list[str] = field(factory=list)

    _SCALAR_FIELDS = (
        "title",
        "artist",
        "album",
        "album_id",
        "artist_id",
        "isrc",
        "upc",
        "release_date",
        "release_type",
    )

    @property
    def is_resolved(self) -> bool:
        return bool(self.title and self.artist)

    def absorb(self, result: ProviderResult | None) -> list[str]:
        """Merge a provider result into still-empty fields.

        Returns:
            Names of the fields this result filled.
        """
        if result is None:
            return []

        filled: list[str] = []
        for name in self._SCALAR_FIELDS:
            value = getattr(result, name)
            if value and not getattr(self, name):
                setattr(self, name, value)
                filled.append(name)

        merged_artwork = self.artwork.merge(result.artwork)
        if merged_artwork != self.artwork:
            self.artwork = merged_artwork
            filled.append("artwork")

        for key, url in result.source_urls.items():
            if url and key not in self.source_urls:
                self.source_urls[key] = url
                filled.append(key)

        if filled:
            self.contributors.append(result.provider)
        return filled

    def freeze(self) -> CanonicalTrack:
        """Build the immutable track. Requires title and artist."""
        if not self.is_resolved:
            raise ValueError("Cannot freeze a draft without title and artist")
        return CanonicalTrack(
            title=self.title,  # type: ignore[arg-type]
            artist=self.artist,  # type: ignore[arg-type]
            album=self.album,
            album_id=self.album_id,
            artist_id=self.artist_id,
            isrc=self.isrc,
            upc=self.upc,
            release_date=self.release_date,
            release_type=self.release_type,
            artwork=self.artwork,
            source_urls=dict(self.source_urls),
        )
