"""Tests for input classification."""

import pytest

from fanlink.domain.classification import (
    InputKind,
    IsrcInput,
    Platform,
    PlatformUrlInput,
    QueryInput,
    UpcInput,
    classify,
    classify_with_hint,
    detect_platform,
    parse_platform_url,
)
from fanlink.domain.identifiers import EAN13_UPC_BOUNDS, UpcBounds


class TestClassifyIdentifiers:
    """UPC and ISRC detection."""

    @pytest.mark.parametrize("raw", ["602567890123", "0602567890123"])
    def test_twelve_and_thirteen_digits_are_upc(self, raw):
        result = classify(raw)
        assert result == UpcInput(value=raw)
        assert result.kind is InputKind.UPC

    def test_fourteen_digit_gtin_is_upc_by_default(self):
        assert classify("00602567890123") == UpcInput(value="00602567890123")

    def test_fourteen_digits_fall_through_with_strict_bounds(self):
        result = classify("00602567890123", upc_bounds=EAN13_UPC_BOUNDS)
        assert result == QueryInput(text="00602567890123")

    def test_custom_bounds(self):
        assert classify("12345678", upc_bounds=UpcBounds(8, 8)).kind is InputKind.UPC

    def test_surrounding_whitespace_is_trimmed(self):
        assert classify("  602567890123\n") == UpcInput(value="602567890123")

    @pytest.mark.parametrize("raw", ["USRC17607839", "usrc17607839", "GBAYE0601498"])
    def test_isrc_is_upper_cased(self, raw):
        result = classify(raw)
        assert isinstance(result, IsrcInput)
        assert result.value == raw.upper()

    def test_short_digit_strings_are_queries(self):
        assert classify("12345").kind is InputKind.QUERY

    def test_upc_is_checked_before_isrc(self):
        # Twelve digits can never be an ISRC (needs a letter prefix)
        assert classify("123456789012").kind is InputKind.UPC


class TestClassifyPlatformUrls:
    """Platform URL parsing."""

    def test_spotify_track(self):
        url = "https://open.spotify.com/track/4uLU6hMCjMI75M1A2tKUQC"
        assert classify(url) == PlatformUrlInput(
            platform=Platform.SPOTIFY,
            resource_type="track",
            resource_id="4uLU6hMCjMI75M1A2tKUQC",
            url=url,
        )

    def test_spotify_localised_album_with_query_string(self):
        url = "https://open.spotify.com/intl-de/album/40GMAhriYJRO1rsY4YdrZb?si=abc"
        result = classify(url)
        assert result.resource_type == "album"
        assert result.resource_id == "40GMAhriYJRO1rsY4YdrZb"

    def test_apple_music_song_in_album_page(self):
        url = "https://music.apple.com/us/album/views/1440843496?i=1440843503"
        result = classify(url)
        assert result.platform is Platform.APPLE_MUSIC
        assert (result.resource_type, result.resource_id) == ("song", "1440843503")

    def test_apple_music_album(self):
        url = "https://music.apple.com/us/album/views/1440843496"
        assert parse_platform_url(url, Platform.APPLE_MUSIC) == ("album", "1440843496")

    def test_deezer_track_with_locale(self):
        url = "https://www.deezer.com/en/track/3135556"
        result = classify(url)
        assert result.platform is Platform.DEEZER
        assert (result.resource_type, result.resource_id) == ("track", "3135556")

    @pytest.mark.parametrize(
        "url",
        [
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            "https://youtu.be/dQw4w9WgXcQ",
        ],
    )
    def test_youtube_video(self, url):
        result = classify(url)
        assert result.platform is Platform.YOUTUBE
        assert (result.resource_type, result.resource_id) == ("video", "dQw4w9WgXcQ")

    def test_known_host_without_id_keeps_platform(self):
        result = classify("https://open.spotify.com/")
        assert result.platform is Platform.SPOTIFY
        assert result.resource_id is None

    def test_detect_platform_unknown_host(self):
        assert detect_platform("https://soundcloud.com/drake/one-dance") is None


class TestClassifyIsTotal:
    """Every input produces exactly one variant."""

    @pytest.mark.parametrize(
        "raw",
        ["", "   ", "Drake - One Dance", "Drake One Dance", "😀", "US-RC1-76-07839", None],
    )
    def test_anything_else_is_a_query(self, raw):
        result = classify(raw)
        assert isinstance(result, UpcInput | IsrcInput | PlatformUrlInput | QueryInput)
        assert result.kind is InputKind.QUERY


class TestClassifyWithHint:
    """Caller-supplied type hints."""

    def test_no_hint_uses_detection(self):
        assert classify_with_hint("USRC17607839", None).kind is InputKind.ISRC

    def test_query_hint_overrides_identifier_detection(self):
        assert classify_with_hint("602567890123", "query") == QueryInput(
            text="602567890123"
        )

    def test_isrc_hint_accepts_hyphenated_form(self):
        assert classify_with_hint("US-RC1-76-07839", "isrc") == IsrcInput(
            value="USRC17607839"
        )

    def test_inconsistent_hint_is_ignored(self):
        url = "https://open.spotify.com/track/4uLU6hMCjMI75M1A2tKUQC"
        assert classify_with_hint(url, "isrc").kind is InputKind.PLATFORM_URL

    def test_unknown_hint_is_ignored(self):
        assert classify_with_hint("USRC17607839", "barcode").kind is InputKind.ISRC
