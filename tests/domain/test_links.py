"""Tests for streaming, metadata and pre-save link generation."""

import pytest

from fanlink.domain.entities import APPLE_MUSIC, DEEZER, SPOTIFY_ALBUM, SPOTIFY_TRACK
from fanlink.domain.links import (
    PLATFORM_KEYS,
    SEARCH_ONLY_PRESAVE_PLATFORMS,
    SPOTIFY_PRESAVE,
    LinkType,
    build_platform_urls,
    encode_component,
    generate_streaming_links,
    search_link,
    verified_link,
)
from tests.fixtures.models import make_track


class TestGenerateStreamingLinks:
    @pytest.mark.parametrize(
        ("title", "artist"),
        [
            ("One Dance", "Drake"),
            ("Ça va?", "Stromae & Friends"),
            ("100% / Real", "A$AP Rocky"),
            ("x", "y"),
        ],
    )
    def test_every_platform_gets_a_url(self, title, artist):
        links = generate_streaming_links(make_track(title=title, artist=artist))
        assert tuple(links) == PLATFORM_KEYS
        assert all(isinstance(url, str) and url for url in links.values())

    def test_spotify_search_without_verified_url(self):
        links = generate_streaming_links(make_track())
        assert links["spotify"] == "https://open.spotify.com/search/Drake%20One%20Dance"

    def test_verified_spotify_track_url_wins(self):
        url = "https://open.spotify.com/track/4uLU6hMCjMI75M1A2tKUQC"
        links = generate_streaming_links(make_track(source_urls={SPOTIFY_TRACK: url}))
        assert links["spotify"] == url

    def test_album_url_is_used_when_no_track_url(self):
        url = "https://open.spotify.com/album/40GMAhriYJRO1rsY4YdrZb"
        links = generate_streaming_links(make_track(source_urls={SPOTIFY_ALBUM: url}))
        assert links["spotify"] == url

    def test_search_templates(self):
        links = generate_streaming_links(make_track())
        assert links["apple_music"] == "https://music.apple.com/search?term=Drake%20One%20Dance"
        assert links["youtube"] == "https://music.youtube.com/search?q=Drake%20One%20Dance"
        assert links["shazam"] == "https://www.shazam.com/search/Drake-One%20Dance"

    def test_encoding_keeps_unreserved_marks(self):
        assert encode_component("Don't (Stop)!") == "Don't%20(Stop)!"
        assert encode_component("AC/DC & Co") == "AC%2FDC%20%26%20Co"


class TestBuildPlatformUrls:
    def test_verified_urls_override_search(self):
        track = make_track(
            source_urls={
                SPOTIFY_TRACK: "https://open.spotify.com/track/abc",
                APPLE_MUSIC: "https://music.apple.com/us/album/views/1?i=2",
                DEEZER: "https://www.deezer.com/track/3135556",
            }
        )
        urls = build_platform_urls(track)
        assert urls["spotify"] == "https://open.spotify.com/track/abc"
        assert urls["apple_music"] == "https://music.apple.com/us/album/views/1?i=2"
        assert urls["deezer"] == "https://www.deezer.com/track/3135556"
        assert urls["youtube"].startswith("https://www.youtube.com/results?search_query=")

    def test_unverified_platforms_are_not_invented(self):
        urls = build_platform_urls(make_track())
        assert "apple_music" not in urls
        assert "deezer" not in urls
        assert urls["spotify"].startswith("https://open.spotify.com/search/")


class TestPreSaveLinks:
    def test_verified_link_before_release(self):
        link = verified_link(SPOTIFY_PRESAVE, "https://open.spotify.com/album/x", False)
        assert link.type is LinkType.PRESAVE
        assert link.message == "Pre-save on Spotify"

    def test_verified_link_after_release(self):
        link = verified_link(SPOTIFY_PRESAVE, "https://open.spotify.com/album/x", True)
        assert link.type is LinkType.STREAMING
        assert link.message == "Listen on Spotify"

    def test_missing_url_is_unavailable(self):
        link = verified_link(SPOTIFY_PRESAVE, None, False)
        assert link.as_dict() == {
            "platform": "spotify",
            "platformDisplayName": "Spotify",
            "url": None,
            "type": "unavailable",
            "message": "Spotify link not available yet.",
        }

    def test_search_only_platforms_always_have_urls(self):
        links = [
            search_link(platform, "Drake", "Views", False)
            for platform in SEARCH_ONLY_PRESAVE_PLATFORMS
        ]
        assert [link.platform for link in links] == [
            "tidal",
            "youtube_music",
            "amazon_music",
            "audiomack",
            "boomplay",
        ]
        assert all(link.url and "Drake%20Views" in link.url for link in links)
        assert links[2].message == "Pre-order on Amazon Music"
