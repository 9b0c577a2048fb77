"""Service connectors for external music catalogs and APIs."""

from fanlink.infrastructure.connectors.audiodb import AudioDBConnector
from fanlink.infrastructure.connectors.base_connector import (
    JsonHttpConnector,
    create_http_session,
    first_item,
)
from fanlink.infrastructure.connectors.deezer import DeezerConnector
from fanlink.infrastructure.connectors.itunes import ITunesConnector
from fanlink.infrastructure.connectors.musicbrainz import MusicBrainzConnector
from fanlink.infrastructure.connectors.spotify import (
    SpotifyConnector,
    create_spotify_client,
)
from fanlink.infrastructure.connectors.spotify_auth import SpotifyTokenCache
from fanlink.infrastructure.connectors.spotify_oembed import SpotifyOEmbedConnector

# Define public API with explicit exports
__all__ = [
    "AudioDBConnector",
    "DeezerConnector",
    "ITunesConnector",
    "JsonHttpConnector",
    "MusicBrainzConnector",
    "SpotifyConnector",
    "SpotifyOEmbedConnector",
    "SpotifyTokenCache",
    "create_http_session",
    "create_spotify_client",
    "first_item",
]
