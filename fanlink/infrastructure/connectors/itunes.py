"""iTunes Search / Lookup API connector.

Unauthenticated JSON API covering the Apple Music catalog. Results come back
in a `results` array whose entries are either songs (`wrapperType == "track"`)
or releases (`wrapperType == "collection"`).
"""

from typing import Any

from attrs import define, field

from fanlink.config import get_logger, settings
from fanlink.infrastructure.connectors.base_connector import JsonHttpConnector

logger = get_logger(__name__).bind(service="itunes")

ITUNES_LOOKUP_URL = "https://itunes.apple.com/lookup"
ITUNES_SEARCH_URL = "https://itunes.apple.com/search"


def artwork_sizes(artwork_url_100: str | None) -> dict[str, str | None]:
    """Derive large/medium/small cover URLs from `artworkUrl100`.

    The dimensions are part of the URL path, so larger renditions are obtained
    by rewriting them.
    """
    if not artwork_url_100:
        return {"large": None, "medium": None, "small": None}
    return {
        "large": artwork_url_100.replace("100x100", "600x600"),
        "medium": artwork_url_100.replace("100x100", "300x300"),
        "small": artwork_url_100,
    }


@define(slots=True)
class ITunesConnector:
    """Lookup and search calls against the iTunes API."""

    http: JsonHttpConnector = field(
        factory=lambda: JsonHttpConnector(service="itunes"), repr=False
    )
    country: str = field(factory=lambda: settings.api.itunes_country)
    search_limit: int = field(factory=lambda: settings.api.search_limit)

    async def _results(self, url: str, params: dict[str, Any]) -> list[dict]:
        payload = await self.http.get_json(url, params=params)
        if not isinstance(payload, dict):
            return []
        return payload.get("results") or []

    async def lookup_upc(self, upc: str, entity: str = "song") -> list[dict]:
        """Look up a release by UPC.

        Args:
            upc: Release barcode
            entity: "song" for the release's tracks, "album" for the release

        Returns:
            Raw result entries, possibly empty
        """
        logger.debug(f"iTunes UPC lookup: {upc} ({entity})")
        return await self._results(
            ITUNES_LOOKUP_URL, {"upc": upc, "entity": entity, "country": self.country}
        )

    async def lookup_id(self, itunes_id: str) -> list[dict]:
        """Look up a song or collection by its numeric iTunes id."""
        logger.debug(f"iTunes id lookup: {itunes_id}")
        return await self._results(
            ITUNES_LOOKUP_URL, {"id": itunes_id, "country": self.country}
        )

    async def search(self, term: str, limit: int | None = None) -> list[dict]:
        """Free-text song search."""
        logger.debug(f"iTunes search: {term}")
        return await self._results(
            ITUNES_SEARCH_URL,
            {
                "term": term,
                "entity": "song",
                "limit": limit or self.search_limit,
                "country": self.country,
            },
        )
