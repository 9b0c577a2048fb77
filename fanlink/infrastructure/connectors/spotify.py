"""Spotify Web API connector.

Thin wrapper over spotipy (https://spotipy.readthedocs.io/) holding one client
per connector, authorised through the shared auth manager of `SpotifyTokenCache`. Methods return raw
Spotify JSON; conversion into domain results happens in the provider layer.

spotipy is synchronous, so every call runs in a worker thread. spotipy's own
retry loop is disabled: fallback is decided by the resolution pipeline, not by
re-sending the same request.
"""

import asyncio
from collections.abc import Callable
from typing import Any

from attrs import define, field
import requests
import spotipy
from spotipy.oauth2 import SpotifyClientCredentials, SpotifyOauthError

from fanlink.config import get_logger, settings
from fanlink.domain.errors import ProviderUnavailableError
from fanlink.infrastructure.connectors.base_connector import first_item
from fanlink.infrastructure.connectors.spotify_auth import SpotifyTokenCache

# Get contextual logger with service binding
logger = get_logger(__name__).bind(service="spotify")


def create_spotify_client(auth_manager: SpotifyClientCredentials) -> spotipy.Spotify:
    """Build a spotipy client on the shared auth manager with retries disabled."""
    return spotipy.Spotify(
        auth_manager=auth_manager,
        requests_timeout=settings.api.request_timeout,
        retries=0,
        status_retries=0,
    )


@define(slots=True)
class SpotifyConnector:
    """Search and lookup operations used by the resolver.

    Attributes:
        token_cache: Shared client-credentials token cache
        client_factory: Builds the spotipy client from an auth manager, replaced by tests
        market: Market passed to search and lookup calls
        search_limit: Number of candidates requested by free-text search
    """

    token_cache: SpotifyTokenCache
    client_factory: Callable[[SpotifyClientCredentials], Any] = field(
        default=create_spotify_client, repr=False
    )
    market: str = field(factory=lambda: settings.api.spotify_market)
    search_limit: int = field(factory=lambda: settings.api.search_limit)

    _client: Any = field(default=None, init=False, repr=False)

    @property
    def client(self) -> Any:
        """The connector's spotipy client, created on first use."""
        if self._client is None:
            self._client = self.client_factory(self.token_cache.auth_manager)
        return self._client

    async def _call(self, method: str, *args: Any, **kwargs: Any) -> Any:
        """Invoke a spotipy method with a fresh-or-cached token.

        A 404 is reported as None. Any other API or transport failure becomes
        ProviderUnavailableError; a 401 also drops the cached token.
        """
        # Token exchange happens here so spotipy finds it cached inside the thread
        await self.token_cache.get_token()
        client = self.client
        try:
            return await asyncio.to_thread(getattr(client, method), *args, **kwargs)
        except SpotifyOauthError as e:
            raise ProviderUnavailableError("spotify", f"{method} failed: {e}") from e
        except spotipy.SpotifyException as e:
            if e.http_status == 404:
                return None
            if e.http_status == 401:
                self.token_cache.invalidate()
            raise ProviderUnavailableError(
                "spotify", f"{method} failed with HTTP {e.http_status}: {e.msg}"
            ) from e
        except requests.exceptions.RequestException as e:
            raise ProviderUnavailableError("spotify", f"{method} failed: {e}") from e

    async def _search(self, query: str, search_type: str, limit: int) -> list[dict]:
        logger.debug(f"Searching Spotify {search_type}s: {query}")
        results = await self._call(
            "search", query, limit=limit, type=search_type, market=self.market
        )
        if not results:
            return []
        return results.get(f"{search_type}s", {}).get("items") or []

    async def search_by_isrc(self, isrc: str) -> dict[str, Any] | None:
        """Search for a track using its ISRC.

        Args:
            isrc: The ISRC code to search for

        Returns:
            Track data if found, None otherwise
        """
        return first_item(await self._search(f"isrc:{isrc}", "track", 1))

    async def search_album_by_upc(self, upc: str) -> dict[str, Any] | None:
        """Search for an album using its UPC barcode."""
        return first_item(await self._search(f"upc:{upc}", "album", 1))

    async def get_album_first_track_id(self, album_id: str) -> str | None:
        """Return the id of the first track on an album."""
        page = await self._call("album_tracks", album_id, limit=1)
        track = first_item(page.get("items")) if page else None
        return track.get("id") if track else None

    async def get_track(self, track_id: str) -> dict[str, Any] | None:
        """Fetch a full track object by id."""
        return await self._call("track", track_id)

    async def search_track(self, text: str) -> dict[str, Any] | None:
        """Free-text track search; the provider's top result is taken as-is."""
        return first_item(await self._search(text, "track", self.search_limit))

    async def search_albums(self, text: str, limit: int | None = None) -> list[dict]:
        """Free-text album search returning every candidate."""
        return await self._search(text, "album", limit or self.search_limit)
