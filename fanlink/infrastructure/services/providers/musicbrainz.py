"""MusicBrainz provider for metadata resolution.

ISRC-only. Used as the title/artist source when Spotify does not know an ISRC.
"""

from typing import Any

from fanlink.domain.entities import ProviderResult
from fanlink.infrastructure.connectors.musicbrainz import MusicBrainzConnector
from fanlink.infrastructure.services.providers.base import (
    BaseProvider,
    ProviderQuery,
    QueryKind,
)


def _first_artist_name(recording: dict[str, Any]) -> str | None:
    for credit in recording.get("artist-credit") or []:
        # Join phrases such as " feat. " are plain strings in the credit list
        if isinstance(credit, dict):
            name = credit.get("name") or (credit.get("artist") or {}).get("name")
            if name:
                return name
    return recording.get("artist-credit-phrase")


def _earliest_release_date(recording: dict[str, Any]) -> str | None:
    if recording.get("first-release-date"):
        return recording["first-release-date"]
    dates = [
        release["date"]
        for release in recording.get("release-list") or []
        if release.get("date")
    ]
    return min(dates) if dates else None


def convert_musicbrainz_recording(
    recording: dict[str, Any], isrc: str
) -> ProviderResult:
    """Convert a MusicBrainz recording to a provider result."""
    return ProviderResult(
        provider="musicbrainz",
        title=recording.get("title"),
        artist=_first_artist_name(recording),
        isrc=isrc,
        release_date=_earliest_release_date(recording),
    )


class MusicBrainzProvider(BaseProvider):
    """MusicBrainz ISRC recording provider."""

    SERVICE = "musicbrainz"
    SUPPORTED = frozenset({QueryKind.ISRC})

    def __init__(self, connector_instance: MusicBrainzConnector) -> None:
        """Initialize with MusicBrainz connector.

        Args:
            connector_instance: MusicBrainz service connector for API calls.
        """
        self.connector_instance = connector_instance

    async def _resolve(self, query: ProviderQuery) -> ProviderResult | None:
        recordings = await self.connector_instance.get_recordings_by_isrc(query.value)
        if not recordings:
            return None
        return convert_musicbrainz_recording(recordings[0], query.value)
