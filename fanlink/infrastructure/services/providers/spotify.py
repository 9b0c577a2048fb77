"""Spotify provider for metadata resolution.

This provider handles communication with the Spotify Web API through
`SpotifyConnector` and transforms Spotify track objects into `ProviderResult`s.
It also answers the album-level questions asked by the pre-save flows.
"""

from typing import Any

from fanlink.config import get_logger
from fanlink.domain.entities import (
    SPOTIFY_ALBUM,
    SPOTIFY_ARTIST,
    SPOTIFY_TRACK,
    Artwork,
    ProviderResult,
    SpotifyAlbumMatch,
)
from fanlink.domain.matching import names_overlap
from fanlink.infrastructure.connectors.spotify import SpotifyConnector
from fanlink.infrastructure.services.providers.base import (
    BaseProvider,
    ProviderQuery,
    QueryKind,
)

logger = get_logger(__name__).bind(service="spotify")

# Image widths Spotify serves for album covers
_ARTWORK_WIDTHS = (("large", 640), ("medium", 300), ("small", 64))


def convert_spotify_artwork(images: list[dict[str, Any]] | None) -> Artwork:
    """Pick cover images by their canonical width, falling back to list position."""
    images = images or []
    picked: dict[str, str | None] = {}
    for index, (slot, width) in enumerate(_ARTWORK_WIDTHS):
        match = next((img for img in images if img.get("width") == width), None)
        if match is None and index < len(images):
            match = images[index]
        picked[slot] = match.get("url") if match else None
    return Artwork(**picked)


def convert_spotify_track(track: dict[str, Any]) -> ProviderResult:
    """Convert a Spotify track object to a provider result.

    Args:
        track: Full track object from the Web API

    Returns:
        ProviderResult with the first credited artist
    """
    artists = track.get("artists") or []
    artist = artists[0] if artists else {}
    album = track.get("album") or {}
    external_ids = track.get("external_ids") or {}
    album_type = album.get("album_type")

    source_urls = {
        SPOTIFY_TRACK: (track.get("external_urls") or {}).get("spotify"),
        SPOTIFY_ARTIST: (artist.get("external_urls") or {}).get("spotify"),
        SPOTIFY_ALBUM: (album.get("external_urls") or {}).get("spotify"),
    }

    return ProviderResult(
        provider="spotify",
        title=track.get("name"),
        artist=artist.get("name"),
        album=album.get("name"),
        album_id=album.get("id"),
        artist_id=artist.get("id"),
        isrc=external_ids.get("isrc"),
        upc=external_ids.get("upc"),
        release_date=album.get("release_date"),
        release_type=album_type.capitalize() if album_type else None,
        artwork=convert_spotify_artwork(album.get("images")),
        source_urls={key: url for key, url in source_urls.items() if url},
    )


def convert_spotify_album_match(album: dict[str, Any]) -> SpotifyAlbumMatch:
    return SpotifyAlbumMatch(
        url=(album.get("external_urls") or {}).get("spotify"),
        uri=album.get("uri"),
        album_id=album.get("id"),
    )


class SpotifyProvider(BaseProvider):
    """Spotify metadata provider."""

    SERVICE = "spotify"
    SUPPORTED = frozenset({
        QueryKind.ISRC,
        QueryKind.UPC,
        QueryKind.TRACK_ID,
        QueryKind.ALBUM_ID,
        QueryKind.TEXT,
        QueryKind.ARTIST_TITLE,
    })

    def __init__(self, connector_instance: SpotifyConnector) -> None:
        """Initialize with Spotify connector.

        Args:
            connector_instance: Spotify service connector for API calls.
        """
        self.connector_instance = connector_instance

    @property
    def is_configured(self) -> bool:
        return self.connector_instance.token_cache.is_configured

    async def authenticate(self) -> None:
        """Obtain a token now, raising instead of failing soft.

        Raises:
            ConfigurationError: If credentials are missing.
            ProviderUnavailableError: If the token endpoint fails.
        """
        await self.connector_instance.token_cache.get_token()

    async def _resolve(self, query: ProviderQuery) -> ProviderResult | None:
        match query.kind:
            case QueryKind.ISRC:
                track = await self.connector_instance.search_by_isrc(query.value)
            case QueryKind.UPC:
                track = await self._track_from_upc(query.value)
            case QueryKind.TRACK_ID:
                track = await self.connector_instance.get_track(query.value)
            case QueryKind.ALBUM_ID:
                track = await self._first_track_of_album(query.value)
            case _:
                track = await self.connector_instance.search_track(query.value)

        if not track:
            return None
        return convert_spotify_track(track)

    async def _track_from_upc(self, upc: str) -> dict[str, Any] | None:
        """UPC -> album -> first track id -> full track.

        Spotify has no UPC-to-track search, so this takes three requests.
        """
        album = await self.connector_instance.search_album_by_upc(upc)
        if not album or not album.get("id"):
            return None
        return await self._first_track_of_album(album["id"])

    async def _first_track_of_album(self, album_id: str) -> dict[str, Any] | None:
        track_id = await self.connector_instance.get_album_first_track_id(album_id)
        if not track_id:
            return None
        return await self.connector_instance.get_track(track_id)

    async def find_album_by_upc(self, upc: str) -> SpotifyAlbumMatch | None:
        """Album carrying a UPC, or None (including when Spotify is unavailable)."""
        try:
            album = await self.connector_instance.search_album_by_upc(upc)
        except Exception as e:
            logger.warning(f"Spotify UPC album search failed: {e}")
            return None
        return convert_spotify_album_match(album) if album else None

    async def find_album_by_artist_title(
        self, artist: str, title: str
    ) -> SpotifyAlbumMatch | None:
        """First album search hit whose artist or name cross-checks the input."""
        try:
            albums = await self.connector_instance.search_albums(f"{artist} {title}")
        except Exception as e:
            logger.warning(f"Spotify album search failed: {e}")
            return None

        for album in albums:
            artist_match = any(
                names_overlap(credited.get("name"), artist)
                for credited in album.get("artists") or []
            )
            if artist_match or names_overlap(album.get("name"), title):
                return convert_spotify_album_match(album)
        return None
