"""Tests for the spotipy-backed Spotify connector."""

from unittest.mock import AsyncMock, Mock

import pytest
import spotipy
from spotipy.oauth2 import SpotifyOauthError

from fanlink.domain.errors import ProviderUnavailableError
from fanlink.infrastructure.connectors import SpotifyConnector
from tests.fixtures.models import spotify_track_payload


@pytest.fixture
def client() -> Mock:
    return Mock(spec=spotipy.Spotify)


@pytest.fixture
def token_cache() -> Mock:
    tokens = Mock()
    tokens.get_token = AsyncMock(return_value="bearer")
    return tokens


@pytest.fixture
def connector(client, token_cache) -> SpotifyConnector:
    return SpotifyConnector(
        token_cache=token_cache,
        client_factory=lambda auth_manager: client,
        market="US",
        search_limit=5,
    )


async def test_search_by_isrc(connector, client):
    track = spotify_track_payload()
    client.search.return_value = {"tracks": {"items": [track]}}

    assert await connector.search_by_isrc("USCM51600028") == track
    client.search.assert_called_once_with(
        "isrc:USCM51600028", limit=1, type="track", market="US"
    )


async def test_free_text_search_takes_top_result(connector, client):
    first, second = spotify_track_payload("a"), spotify_track_payload("b")
    client.search.return_value = {"tracks": {"items": [first, second]}}

    assert await connector.search_track("Drake One Dance") == first
    assert client.search.call_args.kwargs["limit"] == 5


async def test_album_upc_search_with_no_hits(connector, client):
    client.search.return_value = {"albums": {"items": []}}

    assert await connector.search_album_by_upc("602567890123") is None


async def test_album_first_track_id(connector, client):
    client.album_tracks.return_value = {"items": [{"id": "first"}, {"id": "second"}]}

    assert await connector.get_album_first_track_id("album") == "first"
    client.album_tracks.assert_called_once_with("album", limit=1)


async def test_not_found_is_none(connector, client):
    client.track.side_effect = spotipy.SpotifyException(404, -1, "non existing id")

    assert await connector.get_track("missing") is None


async def test_unauthorized_drops_cached_token(connector, client, token_cache):
    client.track.side_effect = spotipy.SpotifyException(401, -1, "expired token")

    with pytest.raises(ProviderUnavailableError):
        await connector.get_track("4uLU6hMCjMI75M1A2tKUQC")

    token_cache.invalidate.assert_called_once()


async def test_server_error_is_unavailable(connector, client, token_cache):
    client.search.side_effect = spotipy.SpotifyException(502, -1, "bad gateway")

    with pytest.raises(ProviderUnavailableError):
        await connector.search_track("Drake")

    token_cache.invalidate.assert_not_called()


async def test_client_is_created_once_on_the_shared_auth_manager(client, token_cache):
    factory = Mock(return_value=client)
    connector = SpotifyConnector(token_cache=token_cache, client_factory=factory)
    client.track.return_value = spotify_track_payload()

    await connector.get_track("a")
    await connector.get_track("b")

    factory.assert_called_once_with(token_cache.auth_manager)
    assert token_cache.get_token.await_count == 2


async def test_token_failure_inside_a_call_is_unavailable(connector, client):
    client.search.side_effect = SpotifyOauthError("invalid_client")

    with pytest.raises(ProviderUnavailableError):
        await connector.search_by_isrc("USCM51600028")
