"""Input classification for user-supplied identifiers.

A raw string is classified exactly once per request into one of four kinds:
UPC, ISRC, platform URL or free-text query. Classification is total: anything
unrecognised falls through to a query, so `classify` never raises.
"""

from enum import StrEnum
import re
from urllib.parse import ParseResult, parse_qs, urlparse

from attrs import define

from fanlink.domain.identifiers import (
    GTIN_UPC_BOUNDS,
    UpcBounds,
    is_isrc,
    normalize_isrc,
)


class InputKind(StrEnum):
    """Kinds of input the resolver understands."""

    UPC = "upc"
    ISRC = "isrc"
    PLATFORM_URL = "platform_url"
    QUERY = "query"


class Platform(StrEnum):
    """Streaming platforms whose URLs can be parsed."""

    SPOTIFY = "spotify"
    APPLE_MUSIC = "apple_music"
    DEEZER = "deezer"
    YOUTUBE = "youtube"


@define(frozen=True, slots=True)
class UpcInput:
    value: str
    kind: InputKind = InputKind.UPC


@define(frozen=True, slots=True)
class IsrcInput:
    value: str
    kind: InputKind = InputKind.ISRC


@define(frozen=True, slots=True)
class PlatformUrlInput:
    """A DSP URL. `resource_id` is None when the host is known but no id parses."""

    platform: Platform
    resource_type: str | None
    resource_id: str | None
    url: str
    kind: InputKind = InputKind.PLATFORM_URL


@define(frozen=True, slots=True)
class QueryInput:
    text: str
    kind: InputKind = InputKind.QUERY


InputClassification = UpcInput | IsrcInput | PlatformUrlInput | QueryInput

# Hostname substrings checked in order
_PLATFORM_HOSTS: tuple[tuple[str, Platform], ...] = (
    ("spotify.com", Platform.SPOTIFY),
    ("music.apple.com", Platform.APPLE_MUSIC),
    ("itunes.apple.com", Platform.APPLE_MUSIC),
    ("deezer.com", Platform.DEEZER),
    ("youtube.com", Platform.YOUTUBE),
    ("youtu.be", Platform.YOUTUBE),
)

_SPOTIFY_PATH = re.compile(r"spotify\.com/(?:intl-[a-z]{2}/)?(track|album|artist)/([a-zA-Z0-9]+)")
_APPLE_PATH = re.compile(r"/(album|song)/[^/]+/(\d+)")
_APPLE_PATH_NO_SLUG = re.compile(r"/(album|song)/(?:id)?(\d+)")
_DEEZER_PATH = re.compile(r"deezer\.com/(?:[a-z]{2}/)?([a-z]+)/(\d+)")


def detect_platform(raw: str) -> Platform | None:
    """Return the platform whose hostname appears in `raw`, if any."""
    lowered = raw.lower()
    for host, platform in _PLATFORM_HOSTS:
        if host in lowered:
            return platform
    return None


def parse_platform_url(url: str, platform: Platform) -> tuple[str | None, str | None]:
    """Extract (resource_type, resource_id) from a platform URL."""
    if platform is Platform.SPOTIFY:
        match = _SPOTIFY_PATH.search(url)
        if match:
            return match.group(1), match.group(2)
        return None, None

    if platform is Platform.APPLE_MUSIC:
        # Track links inside an album page carry the song id in ?i=
        track_id = _query_param(url, "i")
        if track_id and track_id.isdigit():
            return "song", track_id
        match = _APPLE_PATH.search(url) or _APPLE_PATH_NO_SLUG.search(url)
        if match:
            return match.group(1), match.group(2)
        return None, None

    if platform is Platform.DEEZER:
        match = _DEEZER_PATH.search(url)
        if match:
            return match.group(1), match.group(2)
        return None, None

    video_id = _query_param(url, "v")
    if not video_id and "youtu.be" in url.lower():
        parsed = _safe_urlparse(url)
        path = parsed.path.strip("/") if parsed else ""
        video_id = path.split("/")[0] if path else None
    return ("video", video_id) if video_id else (None, None)


def classify(
    raw: str,
    *,
    upc_bounds: UpcBounds = GTIN_UPC_BOUNDS,
) -> InputClassification:
    """Classify a raw user input.

    Args:
        raw: Untrimmed user input.
        upc_bounds: Accepted UPC digit-length range for the calling flow.

    Returns:
        Exactly one classification variant.
    """
    text = (raw or "").strip()

    if upc_bounds.matches(text):
        return UpcInput(value=text)

    if is_isrc(text):
        return IsrcInput(value=text.upper())

    platform = detect_platform(text)
    if platform is not None:
        resource_type, resource_id = parse_platform_url(text, platform)
        return PlatformUrlInput(
            platform=platform,
            resource_type=resource_type,
            resource_id=resource_id,
            url=text,
        )

    return QueryInput(text=text)


def _safe_urlparse(url: str) -> ParseResult | None:
    if "://" not in url:
        url = f"https://{url}"
    try:
        return urlparse(url)
    except ValueError:
        return None


def _query_param(url: str, name: str) -> str | None:
    parsed = _safe_urlparse(url)
    if parsed is None:
        return None
    values = parse_qs(parsed.query).get(name)
    return values[0] if values else None


# Hints accepted from callers that already know what they are sending
TYPE_HINTS = frozenset({"upc", "isrc", "url", "query"})


def classify_with_hint(
    raw: str,
    hint: str | None,
    *,
    upc_bounds: UpcBounds = GTIN_UPC_BOUNDS,
) -> InputClassification:
    """Classify `raw`, letting a caller-supplied kind win when the input fits it.

    A hint the input cannot satisfy (an "isrc" hint on a URL, say) is ignored
    and plain detection applies. A "query" hint is always honoured, and an
    "isrc" hint also admits the hyphenated display form (US-RC1-76-07839).
    """
    detected = classify(raw, upc_bounds=upc_bounds)
    hint = (hint or "").strip().lower()
    if hint not in TYPE_HINTS:
        return detected

    text = (raw or "").strip()
    match hint:
        case "query":
            return QueryInput(text=text)
        case "isrc":
            isrc = normalize_isrc(text)
            return IsrcInput(value=isrc) if isrc else detected
        case "upc":
            return UpcInput(value=text) if upc_bounds.matches(text) else detected
        case _:
            return detected
