"""Provider implementations for catalog metadata services.

This module provides a registry for all available catalog providers and a
factory that wires them to their connectors.
"""

from typing import Any

from attrs import define

from fanlink.infrastructure.connectors import (
    AudioDBConnector,
    DeezerConnector,
    ITunesConnector,
    MusicBrainzConnector,
    SpotifyConnector,
    SpotifyOEmbedConnector,
    SpotifyTokenCache,
)

from .audiodb import AudioDBProvider
from .base import BaseProvider, MetadataProvider, ProviderQuery, QueryKind
from .deezer import DeezerProvider
from .itunes import ITunesProvider
from .musicbrainz import MusicBrainzProvider
from .spotify import SpotifyProvider
from .spotify_oembed import SpotifyOEmbedProvider

__all__ = [
    "AudioDBProvider",
    "BaseProvider",
    "DeezerProvider",
    "ITunesProvider",
    "MetadataProvider",
    "MusicBrainzProvider",
    "ProviderQuery",
    "ProviderSuite",
    "QueryKind",
    "SpotifyOEmbedProvider",
    "SpotifyProvider",
    "create_provider",
    "create_provider_suite",
    "get_available_providers",
]

_PROVIDER_MAP: dict[str, type[BaseProvider]] = {
    "spotify": SpotifyProvider,
    "itunes": ITunesProvider,
    "deezer": DeezerProvider,
    "musicbrainz": MusicBrainzProvider,
    "audiodb": AudioDBProvider,
    "spotify_oembed": SpotifyOEmbedProvider,
}


@define(frozen=True, slots=True)
class ProviderSuite:
    """One provider per catalog, shared by every use case of a process."""

    spotify: SpotifyProvider
    itunes: ITunesProvider
    deezer: DeezerProvider
    musicbrainz: MusicBrainzProvider
    audiodb: AudioDBProvider
    oembed: SpotifyOEmbedProvider


def create_provider(connector: str, connector_instance: Any) -> BaseProvider:
    """Create provider instance for given connector.

    Args:
        connector: Service name ("spotify", "itunes", "deezer", ...).
        connector_instance: Service connector implementation.

    Returns:
        Provider implementing the MetadataProvider protocol.

    Raises:
        ValueError: Unsupported connector.
    """
    if connector not in _PROVIDER_MAP:
        available = ", ".join(_PROVIDER_MAP.keys())
        raise ValueError(f"Unsupported connector: {connector}. Available: {available}")
    return _PROVIDER_MAP[connector](connector_instance)


def create_provider_suite(token_cache: SpotifyTokenCache | None = None) -> ProviderSuite:
    """Wire every provider to a default connector built from settings."""
    token_cache = token_cache or SpotifyTokenCache.from_settings()
    connectors: dict[str, Any] = {
        "spotify": SpotifyConnector(token_cache=token_cache),
        "itunes": ITunesConnector(),
        "deezer": DeezerConnector(),
        "musicbrainz": MusicBrainzConnector(),
        "audiodb": AudioDBConnector(),
        "spotify_oembed": SpotifyOEmbedConnector(),
    }
    providers = {
        name: create_provider(name, connector) for name, connector in connectors.items()
    }
    return ProviderSuite(
        spotify=providers["spotify"],
        itunes=providers["itunes"],
        deezer=providers["deezer"],
        musicbrainz=providers["musicbrainz"],
        audiodb=providers["audiodb"],
        oembed=providers["spotify_oembed"],
    )


def get_available_providers() -> list[str]:
    """Get available provider names."""
    return list(_PROVIDER_MAP)
