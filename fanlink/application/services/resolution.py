"""Resolution orchestration service.

Turns a raw user input into one canonical track by classifying it, running the
provider fallback chain for its kind, merging partial results and backfilling
missing artwork and platform URLs.

Two flows share the pipeline and differ only in provider preference:
- GENERATE_LINK: Spotify first (smart-link creation)
- METADATA: iTunes / oEmbed / MusicBrainz first (form auto-fill)
"""

import asyncio
from enum import StrEnum
from typing import TYPE_CHECKING

from attrs import define

from fanlink.application.utilities.fallback import Attempt, first_successful
from fanlink.config import get_logger
from fanlink.domain.classification import (
    InputClassification,
    InputKind,
    IsrcInput,
    Platform,
    PlatformUrlInput,
    QueryInput,
    UpcInput,
    classify,
)
from fanlink.domain.entities import (
    APPLE_MUSIC,
    DEEZER,
    SPOTIFY_ALBUM,
    SPOTIFY_TRACK,
    YOUTUBE,
    CanonicalTrack,
    ProviderResult,
    TrackDraft,
)
from fanlink.domain.errors import TrackNotFoundError
from fanlink.domain.identifiers import GTIN_UPC_BOUNDS, UpcBounds
from fanlink.infrastructure.services.providers.base import (
    MetadataProvider,
    ProviderQuery,
)

if TYPE_CHECKING:
    from fanlink.infrastructure.services.providers import ProviderSuite

logger = get_logger(__name__)


class ResolutionFlow(StrEnum):
    GENERATE_LINK = "generate_link"
    METADATA = "metadata"


@define(frozen=True, slots=True)
class ResolutionOutcome:
    """A resolved track together with how it was found."""

    track: CanonicalTrack
    source_type: InputKind
    classification: InputClassification
    contributors: tuple[str, ...] = ()


def _backfill_view(result: ProviderResult | None) -> ProviderResult | None:
    """Keep only artwork and platform URLs from a gap-filling lookup."""
    if result is None:
        return None
    return ProviderResult(
        provider=result.provider,
        artwork=result.artwork,
        source_urls=dict(result.source_urls),
    )


async def _no_result() -> None:
    return None


class ResolutionService:
    """Resolves raw inputs to canonical tracks across every catalog provider."""

    def __init__(
        self,
        spotify: MetadataProvider,
        itunes: MetadataProvider,
        deezer: MetadataProvider,
        musicbrainz: MetadataProvider,
        audiodb: MetadataProvider,
        oembed: MetadataProvider,
        flow: ResolutionFlow = ResolutionFlow.GENERATE_LINK,
        upc_bounds: UpcBounds = GTIN_UPC_BOUNDS,
    ) -> None:
        self.spotify = spotify
        self.itunes = itunes
        self.deezer = deezer
        self.musicbrainz = musicbrainz
        self.audiodb = audiodb
        self.oembed = oembed
        self.flow = flow
        self.upc_bounds = upc_bounds

    @classmethod
    def from_suite(
        cls,
        suite: "ProviderSuite",
        flow: ResolutionFlow = ResolutionFlow.GENERATE_LINK,
        upc_bounds: UpcBounds = GTIN_UPC_BOUNDS,
    ) -> "ResolutionService":
        return cls(
            spotify=suite.spotify,
            itunes=suite.itunes,
            deezer=suite.deezer,
            musicbrainz=suite.musicbrainz,
            audiodb=suite.audiodb,
            oembed=suite.oembed,
            flow=flow,
            upc_bounds=upc_bounds,
        )

    async def resolve(
        self,
        raw: str,
        classification: InputClassification | None = None,
    ) -> ResolutionOutcome:
        """Resolve a raw input to a canonical track.

        Args:
            raw: User input as typed
            classification: Pre-computed classification; derived from `raw`
                when omitted

        Returns:
            The merged track and the classified source type.

        Raises:
            TrackNotFoundError: If no provider yields a title and artist.
        """
        classification = classification or classify(raw, upc_bounds=self.upc_bounds)

        with logger.contextualize(
            operation="resolve",
            flow=self.flow.value,
            input_kind=classification.kind.value,
        ):
            logger.info(f"Resolving {classification.kind} input")
            draft = TrackDraft()

            match classification:
                case UpcInput(value=upc):
                    await self._resolve_upc(draft, upc)
                case IsrcInput(value=isrc):
                    await self._resolve_isrc(draft, isrc)
                case PlatformUrlInput():
                    await self._resolve_platform_url(draft, classification)
                case QueryInput(text=text):
                    await self._resolve_query(draft, text)

            if not draft.is_resolved:
                logger.info("No provider produced a title and artist")
                raise TrackNotFoundError()

            await self._fill_gaps(draft)

            track = draft.freeze()
            logger.info(
                f"Resolved to {track.artist} - {track.title}",
                contributors=draft.contributors,
            )
            return ResolutionOutcome(
                track=track,
                source_type=classification.kind,
                classification=classification,
                contributors=tuple(draft.contributors),
            )

    # -------------------------------------------------------------------------
    # Dispatch per input kind
    # -------------------------------------------------------------------------

    def _attempt(self, provider: MetadataProvider, query: ProviderQuery) -> Attempt:
        return lambda: provider.resolve(query)

    async def _first(
        self, operation: str, candidates: list[tuple[MetadataProvider, ProviderQuery]]
    ) -> ProviderResult | None:
        return await first_successful(
            [self._attempt(provider, query) for provider, query in candidates],
            operation=operation,
            accept=lambda result: result.has_identity,
        )

    def _prefer(
        self, generate_link: list, metadata: list
    ) -> list[tuple[MetadataProvider, ProviderQuery]]:
        return generate_link if self.flow is ResolutionFlow.GENERATE_LINK else metadata

    async def _resolve_upc(self, draft: TrackDraft, upc: str) -> None:
        query = ProviderQuery.upc(upc)
        spotify = (self.spotify, query)
        itunes = (self.itunes, query)
        deezer = (self.deezer, query)
        draft.absorb(
            await self._first(
                "resolve_upc",
                self._prefer([spotify, itunes, deezer], [itunes, spotify, deezer]),
            )
        )
        draft.upc = draft.upc or upc

    async def _resolve_isrc(self, draft: TrackDraft, isrc: str) -> None:
        query = ProviderQuery.isrc(isrc)
        spotify = (self.spotify, query)
        musicbrainz = (self.musicbrainz, query)
        result = await self._first(
            "resolve_isrc",
            self._prefer([spotify, musicbrainz], [musicbrainz, spotify]),
        )
        draft.absorb(result)
        # Artwork and the Apple Music link for MusicBrainz hits come from gap filling
        draft.isrc = draft.isrc or isrc

    async def _resolve_platform_url(
        self, draft: TrackDraft, target: PlatformUrlInput
    ) -> None:
        candidates: list[tuple[MetadataProvider, ProviderQuery]] = []
        input_url_key: str | None = None
        resource_id = target.resource_id

        match target.platform:
            case Platform.SPOTIFY if resource_id and target.resource_type in (
                "track",
                "album",
            ):
                # Artist and playlist pages describe no single track
                if target.resource_type == "album":
                    input_url_key = SPOTIFY_ALBUM
                    api = [(self.spotify, ProviderQuery.album_id(resource_id))]
                else:
                    input_url_key = SPOTIFY_TRACK
                    api = [(self.spotify, ProviderQuery.track_id(resource_id))]
                oembed = [(self.oembed, ProviderQuery.url(target.url))]
                candidates = self._prefer(api + oembed, oembed + api)
            case Platform.DEEZER:
                input_url_key = DEEZER
                if resource_id and target.resource_type == "track":
                    candidates = [(self.deezer, ProviderQuery.track_id(resource_id))]
            case Platform.APPLE_MUSIC:
                input_url_key = APPLE_MUSIC
                if resource_id:
                    candidates = [(self.itunes, ProviderQuery.lookup_id(resource_id))]
            case Platform.YOUTUBE:
                # No metadata source for videos; only the link is kept
                input_url_key = YOUTUBE

        if candidates:
            draft.absorb(await self._first("resolve_platform_url", candidates))

        if input_url_key and resource_id:
            draft.absorb(
                ProviderResult(provider="input", source_urls={input_url_key: target.url})
            )

    async def _resolve_query(self, draft: TrackDraft, text: str) -> None:
        if not text:
            return
        query = ProviderQuery.text(text)
        spotify = (self.spotify, query)
        itunes = (self.itunes, query)
        draft.absorb(
            await self._first(
                "resolve_query", self._prefer([spotify, itunes], [itunes, spotify])
            )
        )

    # -------------------------------------------------------------------------
    # Gap filling
    # -------------------------------------------------------------------------

    async def _fill_gaps(self, draft: TrackDraft) -> None:
        """Backfill platform URLs and artwork from secondary catalogs.

        The three lookups are independent, so they run concurrently; results
        are applied in the fixed order Deezer, iTunes, AudioDB and only fill
        fields that are still empty.
        """
        query = ProviderQuery.artist_title(draft.artist, draft.title)  # type: ignore[arg-type]

        urls = draft.source_urls
        deezer = self.deezer.resolve(query) if DEEZER not in urls else _no_result()
        itunes = self.itunes.resolve(query) if APPLE_MUSIC not in urls else _no_result()
        audiodb = self.audiodb.resolve(query) if draft.artwork.is_empty else _no_result()

        results = await asyncio.gather(deezer, itunes, audiodb, return_exceptions=True)
        for name, result in zip(("deezer", "itunes", "audiodb"), results, strict=True):
            if isinstance(result, BaseException):
                logger.warning(f"Gap-filling lookup on {name} failed: {result!r}")
                continue
            filled = draft.absorb(_backfill_view(result))
            if filled:
                logger.debug(f"{name} backfilled {', '.join(filled)}")
