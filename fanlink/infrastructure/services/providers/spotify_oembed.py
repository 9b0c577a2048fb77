"""Spotify oEmbed provider.

oEmbed titles look like "Track Name - Artist". The title is split on " - ";
the first part is the track and the second the artist. Without a separator
the artist is the literal "Unknown Artist". This misreads titles that contain
" - " themselves, so it is only used when the Web API cannot be.
"""

from fanlink.config import get_logger
from fanlink.domain.classification import Platform, parse_platform_url
from fanlink.domain.entities import (
    SPOTIFY_ALBUM,
    SPOTIFY_TRACK,
    UNKNOWN_ARTIST,
    Artwork,
    ProviderResult,
)
from fanlink.infrastructure.connectors.spotify_oembed import SpotifyOEmbedConnector
from fanlink.infrastructure.services.providers.base import (
    BaseProvider,
    ProviderQuery,
    QueryKind,
)

logger = get_logger(__name__).bind(service="spotify_oembed")

OEMBED_TITLE_SEPARATOR = " - "

# Only track and album pages name a track; artist pages title themselves
_URL_KEYS = {"track": SPOTIFY_TRACK, "album": SPOTIFY_ALBUM}


def split_oembed_title(title: str) -> tuple[str, str]:
    """Split an oEmbed title into (track, artist)."""
    parts = title.split(OEMBED_TITLE_SEPARATOR)
    track = parts[0].strip() or title
    artist = parts[1].strip() if len(parts) > 1 and parts[1].strip() else UNKNOWN_ARTIST
    return track, artist


class SpotifyOEmbedProvider(BaseProvider):
    """Unauthenticated Spotify URL describer."""

    SERVICE = "spotify_oembed"
    SUPPORTED = frozenset({QueryKind.URL})

    def __init__(self, connector_instance: SpotifyOEmbedConnector) -> None:
        self.connector_instance = connector_instance

    async def _resolve(self, query: ProviderQuery) -> ProviderResult | None:
        resource_type, resource_id = parse_platform_url(query.value, Platform.SPOTIFY)
        url_key = _URL_KEYS.get(resource_type or "")
        if url_key is None or not resource_id:
            logger.debug(f"oEmbed cannot describe a track from {query.value}")
            return None

        payload = await self.connector_instance.describe(query.value)
        if payload is None:
            return None

        title, artist = split_oembed_title(payload["title"])

        return ProviderResult(
            provider=self.SERVICE,
            title=title,
            artist=artist,
            artwork=Artwork(large=payload.get("thumbnail_url")),
            source_urls={url_key: query.value},
        )
