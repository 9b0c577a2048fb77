"""Pre-save link generation service.

Each platform is resolved on its own; nothing is merged into one canonical
track. Spotify, Apple Music and Deezer get verified album lookups keyed by
UPC and fall back to an explicit "unavailable" entry; every other platform
always gets a search URL.
"""

import asyncio
from datetime import date
from typing import TYPE_CHECKING, Any

from attrs import define, field

from fanlink.config import get_logger
from fanlink.domain.entities import PreSaveRequest
from fanlink.domain.links import (
    APPLE_MUSIC_PRESAVE,
    DEEZER_PRESAVE,
    SEARCH_ONLY_PRESAVE_PLATFORMS,
    SPOTIFY_PRESAVE,
    PlatformLink,
    search_link,
    verified_link,
)
from fanlink.domain.release import is_released

if TYPE_CHECKING:
    from fanlink.infrastructure.services.providers import (
        DeezerProvider,
        ITunesProvider,
        SpotifyProvider,
    )

logger = get_logger(__name__)


@define(frozen=True, slots=True)
class PreSaveLinksResult:
    """Per-platform links for one pre-save page."""

    is_released: bool
    release_date: str
    artist: str
    title: str
    upc: str
    platforms: list[PlatformLink] = field(factory=list)

    def as_dict(self) -> dict[str, Any]:
        return {
            "success": True,
            "isReleased": self.is_released,
            "releaseDate": self.release_date,
            "artist": self.artist,
            "title": self.title,
            "upc": self.upc,
            "platforms": [link.as_dict() for link in self.platforms],
        }


class PreSaveLinkService:
    """Builds the platform list shown on a pre-save page."""

    def __init__(
        self,
        spotify: "SpotifyProvider",
        itunes: "ITunesProvider",
        deezer: "DeezerProvider",
    ) -> None:
        self.spotify = spotify
        self.itunes = itunes
        self.deezer = deezer

    async def _spotify_url(self, upc: str) -> str | None:
        if not self.spotify.is_configured:
            logger.warning("Spotify credentials not configured; Spotify marked unavailable")
            return None
        match = await self.spotify.find_album_by_upc(upc)
        return match.url if match else None

    async def generate(
        self, request: PreSaveRequest, today: date | None = None
    ) -> PreSaveLinksResult:
        """Resolve every platform entry for a validated pre-save request.

        Args:
            request: Validated UPC, artist, title and release date
            today: Reference date for the release gate; defaults to today (UTC)
        """
        released = is_released(request.release_date, today)
        logger.info(
            f"Generating pre-save links for {request.artist} - {request.title}",
            upc=request.upc,
            released=released,
        )

        spotify_url, apple_url, deezer_url = await asyncio.gather(
            self._spotify_url(request.upc),
            self.itunes.find_album_by_upc(request.upc, request.artist, request.title),
            self.deezer.find_album_link(request.upc, request.artist, request.title),
        )

        platforms = [
            verified_link(SPOTIFY_PRESAVE, spotify_url, released),
            verified_link(APPLE_MUSIC_PRESAVE, apple_url, released),
            verified_link(DEEZER_PRESAVE, deezer_url, released),
        ]
        platforms.extend(
            search_link(platform, request.artist, request.title, released)
            for platform in SEARCH_ONLY_PRESAVE_PLATFORMS
        )

        return PreSaveLinksResult(
            is_released=released,
            release_date=request.release_date,
            artist=request.artist,
            title=request.title,
            upc=request.upc,
            platforms=platforms,
        )
