"""TheAudioDB provider, consulted only to backfill missing artwork."""

from fanlink.domain.entities import Artwork, ProviderResult
from fanlink.infrastructure.connectors.audiodb import AudioDBConnector
from fanlink.infrastructure.services.providers.base import (
    BaseProvider,
    ProviderQuery,
    QueryKind,
)


class AudioDBProvider(BaseProvider):
    SERVICE = "audiodb"
    SUPPORTED = frozenset({QueryKind.ARTIST_TITLE})

    def __init__(self, connector_instance: AudioDBConnector) -> None:
        self.connector_instance = connector_instance

    async def _resolve(self, query: ProviderQuery) -> ProviderResult | None:
        track = await self.connector_instance.search_track(
            query.artist or "", query.title or ""
        )
        if not track or not track.get("strTrackThumb"):
            return None
        return ProviderResult(
            provider="audiodb", artwork=Artwork(large=track["strTrackThumb"])
        )
