"""Platform link generation.

Pure functions that derive a URL for every supported streaming platform from
resolved metadata. Only Spotify (and, in the metadata flow, any platform a
provider confirmed) gets a verified deep link; everything else is a search URL.
"""

from enum import StrEnum
from typing import Any
from urllib.parse import quote

from attrs import define

from fanlink.domain.entities.track import CanonicalTrack, SPOTIFY_ALBUM, SPOTIFY_TRACK

PlatformLinkSet = dict[str, str]

PLATFORM_KEYS: tuple[str, ...] = (
    "spotify",
    "apple_music",
    "youtube",
    "deezer",
    "audiomack",
    "boomplay",
    "tidal",
    "amazon",
    "soundcloud",
    "shazam",
)

# Streaming-link search templates, formatted with the encoded "artist title"
_STREAMING_SEARCH_TEMPLATES = {
    "spotify": "https://open.spotify.com/search/{query}",
    "apple_music": "https://music.apple.com/search?term={query}",
    "youtube": "https://music.youtube.com/search?q={query}",
    "deezer": "https://www.deezer.com/search/{query}",
    "audiomack": "https://audiomack.com/search?q={query}",
    "boomplay": "https://www.boomplay.com/search/default/{query}",
    "tidal": "https://tidal.com/search?q={query}",
    "amazon": "https://music.amazon.com/search/{query}",
    "soundcloud": "https://soundcloud.com/search?q={query}",
}

# Metadata-lookup search templates; YouTube points at the main site here
_METADATA_SEARCH_TEMPLATES = {
    "spotify": "https://open.spotify.com/search/{query}",
    "youtube": "https://www.youtube.com/results?search_query={query}",
    "audiomack": "https://audiomack.com/search?q={query}",
    "boomplay": "https://www.boomplay.com/search/default/{query}",
    "soundcloud": "https://soundcloud.com/search?q={query}",
    "tidal": "https://tidal.com/search?q={query}",
    "amazon": "https://music.amazon.com/search/{query}",
    "shazam": "https://www.shazam.com/search/{query}",
}


def encode_component(value: str) -> str:
    """Percent-encode a value for use inside a URL path or query."""
    return quote(value, safe="!~*'()")


def search_query(artist: str, title: str) -> str:
    return encode_component(f"{artist} {title}")


def generate_streaming_links(track: CanonicalTrack) -> PlatformLinkSet:
    """Build the generate-link platform map for a resolved track.

    Spotify uses the verified track URL when resolution produced one. Every
    other platform gets a search URL, so every key in PLATFORM_KEYS maps to a
    non-empty URL.
    """
    query = search_query(track.artist, track.title)
    links = {
        platform: template.format(query=query)
        for platform, template in _STREAMING_SEARCH_TEMPLATES.items()
    }

    verified = track.source_url(SPOTIFY_TRACK) or track.source_url(SPOTIFY_ALBUM)
    if verified:
        links["spotify"] = verified

    links["shazam"] = (
        "https://www.shazam.com/search/"
        f"{encode_component(track.artist)}-{encode_component(track.title)}"
    )
    return {platform: links[platform] for platform in PLATFORM_KEYS}


def generate_platform_search_urls(title: str, artist: str) -> PlatformLinkSet:
    """Search URLs used by the metadata lookup for unverified platforms."""
    query = search_query(artist, title)
    return {
        platform: template.format(query=query)
        for platform, template in _METADATA_SEARCH_TEMPLATES.items()
    }


def build_platform_urls(track: CanonicalTrack) -> PlatformLinkSet:
    """Verified platform URLs, with search URLs only where none was confirmed."""
    return {
        **generate_platform_search_urls(track.title, track.artist),
        **track.verified_platform_urls(),
    }


# -----------------------------------------------------------------------------
# Pre-save links
# -----------------------------------------------------------------------------


class LinkType(StrEnum):
    """How a pre-save page should present a platform entry."""

    PRESAVE = "presave"
    STREAMING = "streaming"
    UNAVAILABLE = "unavailable"


@define(frozen=True, slots=True)
class PlatformLink:
    """A single platform entry on a pre-save page."""

    platform: str
    display_name: str
    url: str | None
    type: LinkType
    message: str

    def as_dict(self) -> dict[str, Any]:
        return {
            "platform": self.platform,
            "platformDisplayName": self.display_name,
            "url": self.url,
            "type": self.type.value,
            "message": self.message,
        }


@define(frozen=True, slots=True)
class PreSavePlatform:
    """Display metadata for a platform on a pre-save page.

    `search_template` is set only for platforms that never get a verified
    lookup and always fall back to a search URL.
    """

    key: str
    display_name: str
    presave_message: str
    search_template: str | None = None

    @property
    def streaming_message(self) -> str:
        return f"Listen on {self.display_name}"


SPOTIFY_PRESAVE = PreSavePlatform("spotify", "Spotify", "Pre-save on Spotify")
APPLE_MUSIC_PRESAVE = PreSavePlatform(
    "apple_music", "Apple Music", "Pre-add on Apple Music"
)
DEEZER_PRESAVE = PreSavePlatform("deezer", "Deezer", "Pre-save on Deezer")

SEARCH_ONLY_PRESAVE_PLATFORMS: tuple[PreSavePlatform, ...] = (
    PreSavePlatform(
        "tidal",
        "Tidal",
        "Pre-save on Tidal (search)",
        "https://tidal.com/search?q={query}",
    ),
    PreSavePlatform(
        "youtube_music",
        "YouTube Music",
        "Pre-save on YouTube Music (search)",
        "https://music.youtube.com/search?q={query}",
    ),
    PreSavePlatform(
        "amazon_music",
        "Amazon Music",
        "Pre-order on Amazon Music",
        "https://music.amazon.com/search/{query}",
    ),
    PreSavePlatform(
        "audiomack",
        "Audiomack",
        "Pre-save on Audiomack (search)",
        "https://audiomack.com/search?q={query}",
    ),
    PreSavePlatform(
        "boomplay",
        "Boomplay",
        "Pre-save on Boomplay (search)",
        "https://www.boomplay.com/search/default/{query}",
    ),
)


def verified_link(
    platform: PreSavePlatform, url: str | None, released: bool
) -> PlatformLink:
    """Entry for a platform with a real lookup; `url=None` marks it unavailable."""
    if not url:
        return PlatformLink(
            platform=platform.key,
            display_name=platform.display_name,
            url=None,
            type=LinkType.UNAVAILABLE,
            message=f"{platform.display_name} link not available yet.",
        )
    return PlatformLink(
        platform=platform.key,
        display_name=platform.display_name,
        url=url,
        type=LinkType.STREAMING if released else LinkType.PRESAVE,
        message=platform.streaming_message if released else platform.presave_message,
    )


def search_link(
    platform: PreSavePlatform, artist: str, title: str, released: bool
) -> PlatformLink:
    """Entry for a search-only platform."""
    if platform.search_template is None:
        raise ValueError(f"{platform.key} has no search URL template")
    return PlatformLink(
        platform=platform.key,
        display_name=platform.display_name,
        url=platform.search_template.format(query=search_query(artist, title)),
        type=LinkType.STREAMING if released else LinkType.PRESAVE,
        message=platform.streaming_message if released else platform.presave_message,
    )
