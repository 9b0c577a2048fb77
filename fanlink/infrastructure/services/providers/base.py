"""Base provider contract for catalog metadata lookups.

This module defines the contract every catalog provider implements so the
resolution pipeline can be written against one `resolve` capability and
tested with fakes.
"""

from enum import StrEnum
from typing import Protocol

from attrs import define

from fanlink.config import get_logger
from fanlink.domain.entities import ProviderResult
from fanlink.domain.errors import FanlinkError, ProviderUnavailableError

logger = get_logger(__name__)


class QueryKind(StrEnum):
    """What a provider is being asked to look up."""

    ISRC = "isrc"
    UPC = "upc"
    TRACK_ID = "track_id"
    ALBUM_ID = "album_id"
    LOOKUP_ID = "lookup_id"
    URL = "url"
    TEXT = "text"
    ARTIST_TITLE = "artist_title"


@define(frozen=True, slots=True)
class ProviderQuery:
    """A single lookup request. `artist`/`title` are set for ARTIST_TITLE only."""

    kind: QueryKind
    value: str
    artist: str | None = None
    title: str | None = None

    @classmethod
    def isrc(cls, value: str) -> "ProviderQuery":
        return cls(QueryKind.ISRC, value)

    @classmethod
    def upc(cls, value: str) -> "ProviderQuery":
        return cls(QueryKind.UPC, value)

    @classmethod
    def track_id(cls, value: str) -> "ProviderQuery":
        return cls(QueryKind.TRACK_ID, value)

    @classmethod
    def album_id(cls, value: str) -> "ProviderQuery":
        return cls(QueryKind.ALBUM_ID, value)

    @classmethod
    def lookup_id(cls, value: str) -> "ProviderQuery":
        return cls(QueryKind.LOOKUP_ID, value)

    @classmethod
    def url(cls, value: str) -> "ProviderQuery":
        return cls(QueryKind.URL, value)

    @classmethod
    def text(cls, value: str) -> "ProviderQuery":
        return cls(QueryKind.TEXT, value)

    @classmethod
    def artist_title(cls, artist: str, title: str) -> "ProviderQuery":
        return cls(QueryKind.ARTIST_TITLE, f"{artist} {title}", artist, title)


class MetadataProvider(Protocol):
    """Contract for catalog providers that contribute track metadata.

    Providers communicate with one external API and transform its responses
    into domain `ProviderResult` objects.
    """

    async def resolve(self, query: ProviderQuery) -> ProviderResult | None:
        """Look up a track.

        Args:
            query: What to look up

        Returns:
            Whatever fields the provider could supply, or None.

        Note:
            Never raises. Network errors, non-2xx responses, malformed payloads
            and empty result arrays all produce None plus a warning log.
        """
        ...

    @property
    def service_name(self) -> str:
        """Service identifier (e.g., 'spotify', 'itunes')."""
        ...


class BaseProvider:
    """Shared fail-soft wrapper around a provider's lookup dispatch."""

    SERVICE: str = ""
    SUPPORTED: frozenset[QueryKind] = frozenset()

    @property
    def service_name(self) -> str:
        """Service identifier."""
        return self.SERVICE

    async def resolve(self, query: ProviderQuery) -> ProviderResult | None:
        if query.kind not in self.SUPPORTED or not query.value:
            logger.debug(f"{self.SERVICE} cannot resolve {query.kind} queries")
            return None

        with logger.contextualize(provider=self.SERVICE, query_kind=query.kind.value):
            try:
                result = await self._resolve(query)
            except ProviderUnavailableError as e:
                logger.warning(f"{self.SERVICE} unavailable: {e.reason}")
                return None
            except FanlinkError as e:
                logger.warning(f"{self.SERVICE} skipped: {e}")
                return None
            except Exception as e:
                logger.warning(f"{self.SERVICE} returned an unusable response: {e!r}")
                return None

        if result is None:
            logger.debug(f"{self.SERVICE} found nothing for {query.kind}: {query.value}")
        return result

    async def _resolve(self, query: ProviderQuery) -> ProviderResult | None:
        raise NotImplementedError
