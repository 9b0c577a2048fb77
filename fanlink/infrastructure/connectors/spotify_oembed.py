"""Spotify oEmbed connector.

Unauthenticated endpoint that describes a public Spotify URL. It carries no
identifiers, only a display title and a thumbnail, so it is the fallback when
the Web API cannot be used.
"""

from typing import Any

from attrs import define, field

from fanlink.config import get_logger
from fanlink.infrastructure.connectors.base_connector import JsonHttpConnector

logger = get_logger(__name__).bind(service="spotify_oembed")

SPOTIFY_OEMBED_URL = "https://open.spotify.com/oembed"


@define(slots=True)
class SpotifyOEmbedConnector:
    http: JsonHttpConnector = field(
        factory=lambda: JsonHttpConnector(service="spotify_oembed"), repr=False
    )

    async def describe(self, url: str) -> dict[str, Any] | None:
        """oEmbed payload for a Spotify URL, or None when it has no title."""
        logger.debug(f"Spotify oEmbed lookup: {url}")
        payload = await self.http.get_json(SPOTIFY_OEMBED_URL, params={"url": url})
        if not isinstance(payload, dict) or not payload.get("title"):
            return None
        return payload
