"""Tests for the HTTP surface using Flask's test client."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, Mock

import pytest

from fanlink import __version__
from fanlink.domain.entities import (
    AutoResolveReport,
    PreSaveResolution,
    ResolutionStatus,
)
from fanlink.domain.errors import ProviderUnavailableError
from fanlink.infrastructure.api import create_app
from fanlink.infrastructure.container import ServiceContainer
from tests.fixtures.models import make_result


@pytest.fixture
def container(providers) -> ServiceContainer:
    return ServiceContainer(providers=providers)


@pytest.fixture
def client(container):
    app = create_app(container)
    app.config["TESTING"] = True
    return app.test_client()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.get_json() == {"status": "ok", "version": __version__}


class TestGenerateLink:
    def test_isrc_resolves_to_smart_link(self, client, providers):
        providers.spotify.resolve.return_value = make_result()

        response = client.post("/generate-link", json={"input": "USCM51600028"})

        body = response.get_json()
        assert response.status_code == 200
        assert body["success"] is True
        assert body["metadata"]["title"] == "One Dance"
        assert body["accuracy_score"] == 100
        assert "spotify" in body["streaming_links"]

    def test_missing_input(self, client):
        response = client.post("/generate-link", json={})

        assert response.status_code == 400
        assert "No input provided" in response.get_json()["error"]

    def test_not_found_lists_suggestions(self, client):
        response = client.post("/generate-link", json={"input": "zzzz qqqq"})

        body = response.get_json()
        assert response.status_code == 404
        assert body["suggestions"]

    def test_missing_credentials_reported_as_server_error(self, client, providers):
        providers.spotify.is_configured = False
        providers.itunes.resolve.return_value = make_result(provider="itunes")

        response = client.post("/generate-link", json={"input": "Drake One Dance"})

        assert response.status_code == 500
        assert "authenticate with Spotify" in response.get_json()["error"]


class TestFetchMusicMetadata:
    def test_query_fills_form_metadata(self, client, providers):
        providers.itunes.resolve.return_value = make_result(provider="itunes")

        response = client.post(
            "/fetch-music-metadata", json={"input": "Drake One Dance", "type": "query"}
        )

        body = response.get_json()
        assert response.status_code == 200
        assert body["success"] is True
        assert body["metadata"]["artist"] == "Drake"

    def test_not_found_has_null_metadata(self, client):
        response = client.post("/fetch-music-metadata", json={"input": "zzzz qqqq"})

        assert response.status_code == 404
        assert response.get_json()["metadata"] is None

    def test_non_json_body(self, client):
        response = client.post("/fetch-music-metadata", data="input=Drake")

        assert response.status_code == 400


class TestGeneratePreSaveLinks:
    def test_invalid_upc(self, client):
        response = client.post(
            "/generate-presave-links",
            json={
                "upc": "123",
                "artist": "Drake",
                "title": "Views",
                "releaseDate": "2099-01-01",
            },
        )

        assert response.status_code == 400
        assert "Invalid UPC format" in response.get_json()["error"]

    def test_upcoming_release(self, client, providers):
        providers.spotify.find_album_by_upc.return_value = None
        providers.itunes.find_album_by_upc.return_value = None
        providers.deezer.find_album_link.return_value = None

        response = client.post(
            "/generate-presave-links",
            json={
                "upc": "602567890123",
                "artist": "Drake",
                "title": "Views",
                "releaseDate": "2099-01-01",
            },
        )

        body = response.get_json()
        assert response.status_code == 200
        assert body["isReleased"] is False
        assert body["releaseDate"] == "2099-01-01"
        assert len(body["platforms"]) > 3


class TestAutoResolvePreSaves:
    @staticmethod
    def _install(client, use_case) -> None:
        @asynccontextmanager
        async def auto_resolve():
            yield use_case

        fake = Mock()
        fake.auto_resolve = auto_resolve
        client.application.extensions["fanlink"] = fake

    def test_report(self, client):
        use_case = Mock()
        use_case.execute = AsyncMock(
            return_value=AutoResolveReport(
                checked=1,
                resolved=1,
                results=[
                    PreSaveResolution(
                        id=7,
                        status=ResolutionStatus.RESOLVED,
                        details="https://open.spotify.com/album/x",
                    )
                ],
            )
        )
        self._install(client, use_case)

        response = client.post("/auto-resolve-presaves")

        assert response.status_code == 200
        assert response.get_json()["results"] == [
            {
                "id": 7,
                "status": "resolved",
                "details": "https://open.spotify.com/album/x",
            }
        ]

    def test_run_failure(self, client):
        use_case = Mock()
        use_case.execute = AsyncMock(
            side_effect=ProviderUnavailableError("spotify", "token endpoint down")
        )
        self._install(client, use_case)

        response = client.post("/auto-resolve-presaves")

        assert response.status_code == 500
        assert response.get_json()["success"] is False
