"""Tests for catalog providers: payload conversion and fail-soft lookups."""

from unittest.mock import AsyncMock, Mock

import pytest

from fanlink.domain.entities import (
    APPLE_MUSIC,
    DEEZER,
    SPOTIFY_ALBUM,
    SPOTIFY_TRACK,
    UNKNOWN_ARTIST,
)
from fanlink.domain.errors import ProviderUnavailableError
from fanlink.infrastructure.connectors import SpotifyTokenCache
from fanlink.infrastructure.services.providers import (
    AudioDBProvider,
    DeezerProvider,
    ITunesProvider,
    MusicBrainzProvider,
    ProviderQuery,
    SpotifyOEmbedProvider,
    SpotifyProvider,
    create_provider,
    create_provider_suite,
    get_available_providers,
)
from fanlink.infrastructure.services.providers.deezer import convert_deezer_album
from fanlink.infrastructure.services.providers.itunes import _first_song
from fanlink.infrastructure.services.providers.spotify import (
    convert_spotify_artwork,
    convert_spotify_track,
)
from fanlink.infrastructure.services.providers.spotify_oembed import (
    split_oembed_title,
)
from tests.fixtures.models import spotify_track_payload


def _connector(**methods) -> Mock:
    connector = Mock()
    for name, value in methods.items():
        setattr(connector, name, AsyncMock(**value))
    return connector


class TestSpotifyProvider:
    def test_convert_track(self):
        result = convert_spotify_track(spotify_track_payload())

        assert result.provider == "spotify"
        assert (result.title, result.artist, result.album) == ("One Dance", "Drake", "Views")
        assert result.isrc == "USCM51600028"
        assert result.release_type == "Album"
        assert result.artwork.large == "https://i.scdn.co/image/640"
        assert result.source_urls[SPOTIFY_TRACK].endswith("4uLU6hMCjMI75M1A2tKUQC")

    def test_artwork_falls_back_to_position(self):
        artwork = convert_spotify_artwork([
            {"url": "a", "width": 1000},
            {"url": "b", "width": 500},
        ])

        assert (artwork.large, artwork.medium, artwork.small) == ("a", "b", None)

    async def test_upc_resolves_through_album_first_track(self):
        connector = _connector(
            search_album_by_upc={"return_value": {"id": "album"}},
            get_album_first_track_id={"return_value": "track"},
            get_track={"return_value": spotify_track_payload()},
        )

        result = await SpotifyProvider(connector).resolve(
            ProviderQuery.upc("602567890123")
        )

        assert result.title == "One Dance"
        connector.get_album_first_track_id.assert_awaited_once_with("album")
        connector.get_track.assert_awaited_once_with("track")

    async def test_unavailable_connector_is_no_result(self):
        connector = _connector(
            search_by_isrc={"side_effect": ProviderUnavailableError("spotify", "503")}
        )

        assert await SpotifyProvider(connector).resolve(
            ProviderQuery.isrc("USCM51600028")
        ) is None

    async def test_unsupported_query_is_not_sent(self):
        connector = _connector(search_track={"return_value": None})

        assert await SpotifyProvider(connector).resolve(
            ProviderQuery.url("https://example.com")
        ) is None
        connector.search_track.assert_not_awaited()

    async def test_album_by_artist_title_cross_checks_artist(self):
        connector = _connector(
            search_albums={
                "return_value": [
                    {"name": "Other", "artists": [{"name": "Someone"}]},
                    {
                        "name": "Midnights",
                        "id": "mid",
                        "uri": "spotify:album:mid",
                        "artists": [{"name": "Taylor Swift"}],
                        "external_urls": {"spotify": "https://open.spotify.com/album/mid"},
                    },
                ]
            }
        )

        match = await SpotifyProvider(connector).find_album_by_artist_title(
            "Taylor Swift", "Anti-Hero"
        )

        assert match.album_id == "mid"
        assert match.uri == "spotify:album:mid"

    async def test_album_by_upc_fails_soft(self):
        connector = _connector(search_album_by_upc={"side_effect": RuntimeError("boom")})

        assert await SpotifyProvider(connector).find_album_by_upc("602567890123") is None


class TestITunesProvider:
    def test_first_song_skips_collection_entry(self):
        collection = {"wrapperType": "collection", "collectionName": "Views"}
        song = {"wrapperType": "track", "trackName": "One Dance"}

        assert _first_song([collection, song]) is song
        assert _first_song([collection]) is collection
        assert _first_song([]) is None

    async def test_upc_lookup_keeps_upc_and_trims_date(self):
        connector = _connector(
            lookup_upc={
                "return_value": [
                    {
                        "wrapperType": "track",
                        "trackName": "One Dance",
                        "artistName": "Drake",
                        "collectionName": "Views",
                        "releaseDate": "2016-04-05T07:00:00Z",
                        "artworkUrl100": "https://is1.mzstatic.com/x/100x100bb.jpg",
                        "trackViewUrl": "https://music.apple.com/us/album/views/1?i=2",
                    }
                ]
            }
        )

        result = await ITunesProvider(connector).resolve(
            ProviderQuery.upc("602557012345")
        )

        assert result.upc == "602557012345"
        assert result.release_date == "2016-04-05"
        assert result.artwork.large == "https://is1.mzstatic.com/x/600x600bb.jpg"
        assert result.source_urls[APPLE_MUSIC].startswith("https://music.apple.com")

    async def test_album_by_upc_prefers_cross_checked_collection(self):
        connector = _connector(
            lookup_upc={
                "return_value": [
                    {
                        "wrapperType": "collection",
                        "artistName": "Various Artists",
                        "collectionName": "Hits",
                        "collectionViewUrl": "https://music.apple.com/hits",
                    },
                    {
                        "wrapperType": "collection",
                        "artistName": "Drake",
                        "collectionName": "Views",
                        "collectionViewUrl": "https://music.apple.com/views",
                    },
                ]
            }
        )

        url = await ITunesProvider(connector).find_album_by_upc(
            "602557012345", "Drake", "One Dance"
        )

        assert url == "https://music.apple.com/views"
        connector.lookup_upc.assert_awaited_once_with("602557012345", entity="album")

    async def test_album_by_upc_without_collections(self):
        connector = _connector(lookup_upc={"return_value": []})

        assert await ITunesProvider(connector).find_album_by_upc(
            "602557012345", "Drake", "One Dance"
        ) is None


class TestDeezerProvider:
    def test_convert_album_uses_title_for_track_and_album(self):
        result = convert_deezer_album({
            "title": "Views",
            "artist": {"name": "Drake"},
            "record_type": "album",
            "cover_xl": "https://cdn/xl.jpg",
            "link": "https://www.deezer.com/album/1",
        })

        assert result.title == result.album == "Views"
        assert result.release_type == "Album"
        assert result.artwork.large == "https://cdn/xl.jpg"
        assert result.source_urls == {DEEZER: "https://www.deezer.com/album/1"}

    async def test_track_id_lookup(self):
        connector = _connector(
            get_track={
                "return_value": {
                    "title": "One Dance",
                    "artist": {"name": "Drake"},
                    "album": {"title": "Views"},
                    "isrc": "USCM51600028",
                    "link": "https://www.deezer.com/track/3135556",
                }
            }
        )

        result = await DeezerProvider(connector).resolve(ProviderQuery.track_id("3135556"))

        assert result.has_identity
        assert result.source_urls[DEEZER] == "https://www.deezer.com/track/3135556"

    async def test_album_link_falls_back_to_artist_title(self):
        connector = _connector(
            search_album={
                "side_effect": [[], [{"link": "https://www.deezer.com/album/9"}]]
            }
        )

        link = await DeezerProvider(connector).find_album_link(
            "602557012345", "Drake", "Views"
        )

        assert link == "https://www.deezer.com/album/9"
        assert connector.search_album.await_args_list[1].args == ("Drake Views",)

    async def test_album_link_survives_search_failures(self):
        connector = _connector(search_album={"side_effect": RuntimeError("boom")})

        assert await DeezerProvider(connector).find_album_link(
            "602557012345", "Drake", "Views"
        ) is None


class TestMusicBrainzProvider:
    async def test_recording_conversion(self):
        connector = _connector(
            get_recordings_by_isrc={
                "return_value": [
                    {
                        "title": "Hello",
                        "artist-credit": [{"artist": {"name": "Adele"}}, " feat. "],
                        "release-list": [{"date": "2015-11-20"}, {"date": "2015-10-23"}],
                    }
                ]
            }
        )

        result = await MusicBrainzProvider(connector).resolve(
            ProviderQuery.isrc("GBBKS1500214")
        )

        assert (result.title, result.artist) == ("Hello", "Adele")
        assert result.release_date == "2015-10-23"
        assert result.artwork.is_empty

    async def test_text_queries_are_unsupported(self):
        connector = _connector(get_recordings_by_isrc={"return_value": []})

        assert await MusicBrainzProvider(connector).resolve(
            ProviderQuery.text("Adele Hello")
        ) is None


class TestAudioDBProvider:
    async def test_only_artwork_is_contributed(self):
        connector = _connector(
            search_track={
                "return_value": {
                    "strTrack": "Hello",
                    "strTrackThumb": "https://www.theaudiodb.com/thumb.jpg",
                }
            }
        )

        result = await AudioDBProvider(connector).resolve(
            ProviderQuery.artist_title("Adele", "Hello")
        )

        assert result.artwork.large == "https://www.theaudiodb.com/thumb.jpg"
        assert result.title is None
        connector.search_track.assert_awaited_once_with("Adele", "Hello")

    async def test_track_without_thumb_is_no_result(self):
        connector = _connector(search_track={"return_value": {"strTrack": "Hello"}})

        assert await AudioDBProvider(connector).resolve(
            ProviderQuery.artist_title("Adele", "Hello")
        ) is None


class TestSpotifyOEmbedProvider:
    @pytest.mark.parametrize(
        ("title", "expected"),
        [
            ("One Dance - Drake", ("One Dance", "Drake")),
            ("Views", ("Views", UNKNOWN_ARTIST)),
            ("Song - Remix - Artist", ("Song", "Remix")),
        ],
    )
    def test_split_title(self, title, expected):
        assert split_oembed_title(title) == expected

    async def test_album_url_is_kept_under_album_key(self):
        url = "https://open.spotify.com/album/40GMAhriYJRO1rsY4YdrZb"
        connector = _connector(
            describe={
                "return_value": {
                    "title": "Views - Drake",
                    "thumbnail_url": "https://i.scdn.co/image/oembed",
                }
            }
        )

        result = await SpotifyOEmbedProvider(connector).resolve(ProviderQuery.url(url))

        assert result.source_urls == {SPOTIFY_ALBUM: url}
        assert result.artwork.large == "https://i.scdn.co/image/oembed"

    async def test_artist_url_is_not_described(self):
        connector = _connector(describe={"return_value": {"title": "Drake"}})

        result = await SpotifyOEmbedProvider(connector).resolve(
            ProviderQuery.url("https://open.spotify.com/artist/3TVXtAsR1Inumwj472S9r4")
        )

        assert result is None
        connector.describe.assert_not_awaited()


class TestProviderRegistry:
    def test_available_providers(self):
        assert set(get_available_providers()) == {
            "spotify",
            "itunes",
            "deezer",
            "musicbrainz",
            "audiodb",
            "spotify_oembed",
        }

    def test_create_provider(self):
        provider = create_provider("deezer", Mock())

        assert isinstance(provider, DeezerProvider)
        assert provider.service_name == "deezer"

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unsupported connector"):
            create_provider("tidal", Mock())

    def test_suite_is_built_from_the_registry(self):
        tokens = SpotifyTokenCache()

        suite = create_provider_suite(tokens)

        assert isinstance(suite.spotify, SpotifyProvider)
        assert isinstance(suite.oembed, SpotifyOEmbedProvider)
        assert suite.spotify.connector_instance.token_cache is tokens
        assert suite.spotify.is_configured is False
