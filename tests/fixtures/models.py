"""Essential test fixtures for domain models and provider doubles."""

from unittest.mock import AsyncMock

from fanlink.domain.entities import (
    SPOTIFY_ALBUM,
    SPOTIFY_ARTIST,
    SPOTIFY_TRACK,
    Artwork,
    CanonicalTrack,
    ProviderResult,
)


def spotify_track_payload(
    track_id: str = "4uLU6hMCjMI75M1A2tKUQC",
    name: str = "One Dance",
    artist: str = "Drake",
    album: str = "Views",
    isrc: str | None = "USCM51600028",
) -> dict:
    """A Spotify Web API track object trimmed to the fields the resolver reads."""
    return {
        "id": track_id,
        "name": name,
        "external_ids": {"isrc": isrc} if isrc else {},
        "external_urls": {"spotify": f"https://open.spotify.com/track/{track_id}"},
        "artists": [
            {
                "id": "3TVXtAsR1Inumwj472S9r4",
                "name": artist,
                "external_urls": {
                    "spotify": "https://open.spotify.com/artist/3TVXtAsR1Inumwj472S9r4"
                },
            }
        ],
        "album": {
            "id": "40GMAhriYJRO1rsY4YdrZb",
            "name": album,
            "album_type": "album",
            "release_date": "2016-05-06",
            "external_urls": {
                "spotify": "https://open.spotify.com/album/40GMAhriYJRO1rsY4YdrZb"
            },
            "images": [
                {"url": "https://i.scdn.co/image/640", "width": 640, "height": 640},
                {"url": "https://i.scdn.co/image/300", "width": 300, "height": 300},
                {"url": "https://i.scdn.co/image/64", "width": 64, "height": 64},
            ],
        },
    }


def make_result(provider: str = "spotify", **overrides) -> ProviderResult:
    """A complete provider result for Drake - One Dance, overridable per field."""
    values = {
        "title": "One Dance",
        "artist": "Drake",
        "album": "Views",
        "album_id": "40GMAhriYJRO1rsY4YdrZb",
        "artist_id": "3TVXtAsR1Inumwj472S9r4",
        "isrc": "USCM51600028",
        "release_date": "2016-05-06",
        "release_type": "Album",
        "artwork": Artwork(
            large="https://i.scdn.co/image/640",
            medium="https://i.scdn.co/image/300",
            small="https://i.scdn.co/image/64",
        ),
        "source_urls": {
            SPOTIFY_TRACK: "https://open.spotify.com/track/4uLU6hMCjMI75M1A2tKUQC",
            SPOTIFY_ARTIST: "https://open.spotify.com/artist/3TVXtAsR1Inumwj472S9r4",
            SPOTIFY_ALBUM: "https://open.spotify.com/album/40GMAhriYJRO1rsY4YdrZb",
        },
    }
    values.update(overrides)
    return ProviderResult(provider=provider, **values)


def make_track(**overrides) -> CanonicalTrack:
    values = {
        "title": "One Dance",
        "artist": "Drake",
        "album": "Views",
        "isrc": "USCM51600028",
        "release_date": "2016-05-06",
    }
    values.update(overrides)
    return CanonicalTrack(**values)


def fake_provider(name: str, result: ProviderResult | None = None) -> AsyncMock:
    """Provider double whose `resolve` returns `result` for every query."""
    provider = AsyncMock(name=f"{name}_provider")
    provider.service_name = name
    provider.resolve.return_value = result
    provider.is_configured = True
    return provider
