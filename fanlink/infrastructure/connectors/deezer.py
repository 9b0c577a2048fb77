"""Deezer public API connector.

Deezer answers most failures with HTTP 200 and an `{"error": {...}}` body;
those are treated the same as an empty result.
"""

from typing import Any

from attrs import define, field

from fanlink.config import get_logger, settings
from fanlink.infrastructure.connectors.base_connector import JsonHttpConnector

logger = get_logger(__name__).bind(service="deezer")

DEEZER_API_URL = "https://api.deezer.com"


def _is_error_body(payload: Any) -> bool:
    return not isinstance(payload, dict) or "error" in payload


@define(slots=True)
class DeezerConnector:
    """Track lookup and search calls against the Deezer API."""

    http: JsonHttpConnector = field(
        factory=lambda: JsonHttpConnector(service="deezer"), repr=False
    )
    search_limit: int = field(factory=lambda: settings.api.search_limit)

    async def get_track(self, track_id: str) -> dict[str, Any] | None:
        """Fetch a track by its numeric id."""
        logger.debug(f"Deezer track lookup: {track_id}")
        payload = await self.http.get_json(f"{DEEZER_API_URL}/track/{track_id}")
        if _is_error_body(payload) or not payload.get("id"):
            return None
        return payload

    async def search(self, text: str, limit: int | None = None) -> list[dict]:
        """Free-text track search."""
        logger.debug(f"Deezer search: {text}")
        payload = await self.http.get_json(
            f"{DEEZER_API_URL}/search",
            params={"q": text, "limit": limit or self.search_limit},
        )
        if _is_error_body(payload):
            return []
        return payload.get("data") or []

    async def search_album(self, text: str, limit: int = 1) -> list[dict]:
        """Free-text album search."""
        logger.debug(f"Deezer album search: {text}")
        payload = await self.http.get_json(
            f"{DEEZER_API_URL}/search/album", params={"q": text, "limit": limit}
        )
        if _is_error_body(payload):
            return []
        return payload.get("data") or []
