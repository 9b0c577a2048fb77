"""iTunes / Apple Music provider for metadata resolution.

No re-ranking: the provider's first usable entry is taken as the match.
"""

from typing import Any

from fanlink.config import get_logger
from fanlink.domain.entities import APPLE_MUSIC, Artwork, ProviderResult
from fanlink.domain.matching import names_overlap
from fanlink.infrastructure.connectors.itunes import ITunesConnector, artwork_sizes
from fanlink.infrastructure.services.providers.base import (
    BaseProvider,
    ProviderQuery,
    QueryKind,
)

logger = get_logger(__name__).bind(service="itunes")


def _first_song(results: list[dict[str, Any]]) -> dict[str, Any] | None:
    """First song entry; lookups list the parent collection before its songs."""
    for result in results:
        if result.get("wrapperType") == "track":
            return result
    return results[0] if results else None


def convert_itunes_result(
    item: dict[str, Any], upc: str | None = None
) -> ProviderResult:
    """Convert an iTunes song (or collection) entry to a provider result."""
    release_date = item.get("releaseDate")
    view_url = item.get("trackViewUrl") or item.get("collectionViewUrl")
    return ProviderResult(
        provider="itunes",
        title=item.get("trackName") or item.get("collectionName"),
        artist=item.get("artistName"),
        album=item.get("collectionName"),
        upc=upc,
        release_date=release_date.split("T")[0] if release_date else None,
        artwork=Artwork(**artwork_sizes(item.get("artworkUrl100"))),
        source_urls={APPLE_MUSIC: view_url} if view_url else {},
    )


class ITunesProvider(BaseProvider):
    """iTunes Search / Lookup provider."""

    SERVICE = "itunes"
    SUPPORTED = frozenset({
        QueryKind.UPC,
        QueryKind.LOOKUP_ID,
        QueryKind.TEXT,
        QueryKind.ARTIST_TITLE,
    })

    def __init__(self, connector_instance: ITunesConnector) -> None:
        self.connector_instance = connector_instance

    async def _resolve(self, query: ProviderQuery) -> ProviderResult | None:
        upc = None
        match query.kind:
            case QueryKind.UPC:
                results = await self.connector_instance.lookup_upc(query.value)
                upc = query.value
            case QueryKind.LOOKUP_ID:
                results = await self.connector_instance.lookup_id(query.value)
            case _:
                results = await self.connector_instance.search(query.value)

        item = _first_song(results)
        if item is None:
            return None
        return convert_itunes_result(item, upc=upc)

    async def find_album_by_upc(
        self, upc: str, artist: str, title: str
    ) -> str | None:
        """Apple Music album URL for a UPC.

        Prefers a collection whose artist or name cross-checks the expected
        artist/title; otherwise the first collection returned.
        """
        try:
            results = await self.connector_instance.lookup_upc(upc, entity="album")
        except Exception as e:
            logger.warning(f"iTunes UPC album lookup failed: {e}")
            return None

        collections = [
            result
            for result in results
            if result.get("wrapperType") == "collection"
            and result.get("collectionViewUrl")
        ]
        for collection in collections:
            if names_overlap(collection.get("artistName"), artist) or names_overlap(
                collection.get("collectionName"), title
            ):
                logger.debug(f"Apple Music match found: {collection['collectionViewUrl']}")
                return collection["collectionViewUrl"]

        if collections:
            return collections[0]["collectionViewUrl"]
        logger.debug(f"No Apple Music match found for UPC: {upc}")
        return None
