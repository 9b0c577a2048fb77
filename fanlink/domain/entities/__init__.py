"""Core domain entities for resolved tracks and pre-saves."""

# Pre-save entities
from .presave import (
    AutoResolveReport,
    PreSaveRecord,
    PreSaveRequest,
    PreSaveResolution,
    ResolutionStatus,
    SpotifyAlbumMatch,
)

# Track-related entities
from .track import (
    APPLE_MUSIC,
    DEEZER,
    SPOTIFY_ALBUM,
    SPOTIFY_ARTIST,
    SPOTIFY_TRACK,
    UNKNOWN_ARTIST,
    YOUTUBE,
    Artwork,
    CanonicalTrack,
    ProviderResult,
    TrackDraft,
)

__all__ = [
    # Source URL keys
    "APPLE_MUSIC",
    "DEEZER",
    "SPOTIFY_ALBUM",
    "SPOTIFY_ARTIST",
    "SPOTIFY_TRACK",
    "UNKNOWN_ARTIST",
    "YOUTUBE",
    # Track entities
    "Artwork",
    "CanonicalTrack",
    "ProviderResult",
    "TrackDraft",
    # Pre-save entities
    "AutoResolveReport",
    "PreSaveRecord",
    "PreSaveRequest",
    "PreSaveResolution",
    "ResolutionStatus",
    "SpotifyAlbumMatch",
]
