"""Spotify client-credentials token cache.

The app-level bearer token is the only process-wide mutable state in the
resolver. spotipy's `SpotifyClientCredentials` performs the exchange and keeps
the token in an in-memory cache handler; it is reused until shortly before the
lifetime the token endpoint declared and refreshed on the next call after that.
"""

import asyncio
from collections.abc import Callable

from attrs import define, field
import requests
import spotipy
from spotipy.oauth2 import SpotifyClientCredentials, SpotifyOauthError

from fanlink.config import get_logger, settings
from fanlink.domain.errors import ConfigurationError, ProviderUnavailableError

logger = get_logger(__name__).bind(service="spotify")


@define(slots=True)
class SpotifyTokenCache:
    """Caches a client-credentials token for the whole process.

    Attributes:
        client_id: Spotify application client id
        client_secret: Spotify application client secret
        cache_handler: Where spotipy keeps the token between calls
        auth_manager_factory: Builds the spotipy auth manager, replaced by tests
    """

    client_id: str = ""
    client_secret: str = field(default="", repr=False)
    cache_handler: spotipy.CacheHandler = field(
        factory=spotipy.MemoryCacheHandler, repr=False
    )
    auth_manager_factory: Callable[..., SpotifyClientCredentials] = field(
        default=SpotifyClientCredentials, repr=False
    )

    _auth_manager: SpotifyClientCredentials | None = field(
        default=None, init=False, repr=False
    )

    @classmethod
    def from_settings(cls) -> "SpotifyTokenCache":
        return cls(
            client_id=settings.credentials.spotify_client_id,
            client_secret=settings.credentials.spotify_client_secret,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.client_id and self.client_secret)

    @property
    def auth_manager(self) -> SpotifyClientCredentials:
        """The shared spotipy auth manager, created on first use.

        Raises:
            ConfigurationError: If client id or secret is missing.
        """
        if not self.is_configured:
            raise ConfigurationError("Spotify credentials not configured")
        if self._auth_manager is None:
            self._auth_manager = self.auth_manager_factory(
                client_id=self.client_id,
                client_secret=self.client_secret,
                cache_handler=self.cache_handler,
                requests_timeout=settings.api.request_timeout,
            )
        return self._auth_manager

    async def get_token(self) -> str:
        """Return a valid bearer token, exchanging credentials when needed.

        Raises:
            ConfigurationError: If client id or secret is missing.
            ProviderUnavailableError: If the token endpoint fails.
        """
        manager = self.auth_manager
        try:
            token = await asyncio.to_thread(manager.get_access_token, as_dict=False)
        except (SpotifyOauthError, requests.exceptions.RequestException) as e:
            raise ProviderUnavailableError("spotify", f"token request failed: {e}") from e

        if not token:
            raise ProviderUnavailableError("spotify", "token response had no access_token")
        return token

    def invalidate(self) -> None:
        """Drop the cached token so the next call exchanges credentials again."""
        logger.debug("Dropping cached Spotify token")
        self.cache_handler.save_token_to_cache(None)
