"""TheAudioDB connector, used only as an artwork source."""

from typing import Any

from attrs import define, field

from fanlink.config import get_logger
from fanlink.infrastructure.connectors.base_connector import (
    JsonHttpConnector,
    first_item,
)

logger = get_logger(__name__).bind(service="audiodb")

# "2" is TheAudioDB's public test key
AUDIODB_SEARCH_TRACK_URL = "https://theaudiodb.com/api/v1/json/2/searchtrack.php"


@define(slots=True)
class AudioDBConnector:
    http: JsonHttpConnector = field(
        factory=lambda: JsonHttpConnector(service="audiodb"), repr=False
    )

    async def search_track(self, artist: str, title: str) -> dict[str, Any] | None:
        """First track matching an artist and title, if any."""
        logger.debug(f"AudioDB track search: {artist} - {title}")
        payload = await self.http.get_json(
            AUDIODB_SEARCH_TRACK_URL, params={"s": artist, "t": title}
        )
        if not isinstance(payload, dict):
            return None
        return first_item(payload.get("track"))
