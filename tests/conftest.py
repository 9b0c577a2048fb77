"""Shared fixtures for the fanlink test suite."""

import os
from pathlib import Path
import tempfile

# Settings are read at import time, so the environment is pinned first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SPOTIFY_CLIENT_ID"] = ""
os.environ["SPOTIFY_CLIENT_SECRET"] = ""
os.environ["CONSOLE_LOG_LEVEL"] = "ERROR"
os.environ["LOG_FILE"] = str(Path(tempfile.gettempdir()) / "fanlink-tests.log")

import pytest  # noqa: E402

from fanlink.infrastructure.services.providers import ProviderSuite  # noqa: E402
from tests.fixtures.models import fake_provider  # noqa: E402


@pytest.fixture
def providers() -> ProviderSuite:
    """A suite of provider doubles that find nothing until told otherwise."""
    return ProviderSuite(
        spotify=fake_provider("spotify"),
        itunes=fake_provider("itunes"),
        deezer=fake_provider("deezer"),
        musicbrainz=fake_provider("musicbrainz"),
        audiodb=fake_provider("audiodb"),
        oembed=fake_provider("spotify_oembed"),
    )
