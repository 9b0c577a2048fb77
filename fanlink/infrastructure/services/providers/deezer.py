"""Deezer provider for metadata resolution."""

from typing import Any

from fanlink.config import get_logger
from fanlink.domain.entities import DEEZER, Artwork, ProviderResult
from fanlink.infrastructure.connectors.base_connector import first_item
from fanlink.infrastructure.connectors.deezer import DeezerConnector
from fanlink.infrastructure.services.providers.base import (
    BaseProvider,
    ProviderQuery,
    QueryKind,
)

logger = get_logger(__name__).bind(service="deezer")


def convert_deezer_artwork(album: dict[str, Any]) -> Artwork:
    return Artwork(
        large=album.get("cover_xl") or album.get("cover_big"),
        medium=album.get("cover_medium"),
        small=album.get("cover_small"),
    )


def convert_deezer_track(track: dict[str, Any]) -> ProviderResult:
    """Convert a Deezer track (full or search hit) to a provider result."""
    album = track.get("album") or {}
    link = track.get("link")
    return ProviderResult(
        provider="deezer",
        title=track.get("title"),
        artist=(track.get("artist") or {}).get("name"),
        album=album.get("title"),
        isrc=track.get("isrc"),
        release_date=track.get("release_date") or album.get("release_date"),
        artwork=convert_deezer_artwork(album),
        source_urls={DEEZER: link} if link else {},
    )


def convert_deezer_album(album: dict[str, Any]) -> ProviderResult:
    """Convert a Deezer album search hit; the album stands in for its lead track."""
    link = album.get("link")
    return ProviderResult(
        provider="deezer",
        title=album.get("title"),
        artist=(album.get("artist") or {}).get("name"),
        album=album.get("title"),
        release_type=(album.get("record_type") or "").capitalize() or None,
        artwork=convert_deezer_artwork(album),
        source_urls={DEEZER: link} if link else {},
    )


class DeezerProvider(BaseProvider):
    """Deezer track and album provider."""

    SERVICE = "deezer"
    SUPPORTED = frozenset({
        QueryKind.TRACK_ID,
        QueryKind.UPC,
        QueryKind.TEXT,
        QueryKind.ARTIST_TITLE,
    })

    def __init__(self, connector_instance: DeezerConnector) -> None:
        self.connector_instance = connector_instance

    async def _resolve(self, query: ProviderQuery) -> ProviderResult | None:
        match query.kind:
            case QueryKind.TRACK_ID:
                track = await self.connector_instance.get_track(query.value)
                return convert_deezer_track(track) if track else None
            case QueryKind.UPC:
                # No UPC endpoint; the barcode is sent as an album search term
                album = first_item(
                    await self.connector_instance.search_album(query.value)
                )
                return convert_deezer_album(album) if album else None
            case _:
                track = first_item(await self.connector_instance.search(query.value))
                return convert_deezer_track(track) if track else None

    async def find_album_link(self, upc: str, artist: str, title: str) -> str | None:
        """Deezer album URL, trying the UPC as a search term, then artist+title."""
        for term in (upc, f"{artist} {title}"):
            try:
                album = first_item(await self.connector_instance.search_album(term))
            except Exception as e:
                logger.warning(f"Deezer album search failed for {term!r}: {e}")
                continue
            if album and album.get("link"):
                return album["link"]
        return None
