"""Composition root shared by the HTTP and CLI surfaces.

One provider suite (and therefore one Spotify token cache) lives per process;
use cases are cheap and built per call.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from attrs import define, field
from sqlalchemy.ext.asyncio import async_sessionmaker

from fanlink.application.services import (
    PreSaveLinkService,
    ResolutionFlow,
    ResolutionService,
)
from fanlink.application.use_cases import (
    AutoResolvePreSavesUseCase,
    FetchMetadataUseCase,
    GenerateLinkUseCase,
    GeneratePreSaveLinksUseCase,
)
from fanlink.config import settings
from fanlink.domain.identifiers import UpcBounds
from fanlink.infrastructure.persistence.database import get_session
from fanlink.infrastructure.persistence.repositories import PreSaveRepository
from fanlink.infrastructure.services.providers import (
    ProviderSuite,
    create_provider_suite,
)


def _link_upc_bounds() -> UpcBounds:
    return UpcBounds(
        settings.classifier.upc_min_digits, settings.classifier.upc_max_digits
    )


def _presave_upc_bounds() -> UpcBounds:
    return UpcBounds(
        settings.classifier.presave_upc_min_digits,
        settings.classifier.presave_upc_max_digits,
    )


@define(slots=True)
class ServiceContainer:
    """Builds use cases over a shared provider suite."""

    providers: ProviderSuite
    session_factory: async_sessionmaker | None = None
    upc_bounds: UpcBounds = field(factory=_link_upc_bounds)
    presave_upc_bounds: UpcBounds = field(factory=_presave_upc_bounds)
    auto_resolve_delay: float = field(
        factory=lambda: settings.batch.auto_resolve_delay
    )

    @classmethod
    def from_settings(cls) -> "ServiceContainer":
        return cls(providers=create_provider_suite())

    def resolver(self, flow: ResolutionFlow) -> ResolutionService:
        return ResolutionService.from_suite(
            self.providers, flow=flow, upc_bounds=self.upc_bounds
        )

    def generate_link(self) -> GenerateLinkUseCase:
        return GenerateLinkUseCase(
            resolver=self.resolver(ResolutionFlow.GENERATE_LINK),
            spotify_configured=self.providers.spotify.is_configured,
        )

    def fetch_metadata(self) -> FetchMetadataUseCase:
        return FetchMetadataUseCase(resolver=self.resolver(ResolutionFlow.METADATA))

    def presave_links(self) -> GeneratePreSaveLinksUseCase:
        return GeneratePreSaveLinksUseCase(
            service=PreSaveLinkService(
                spotify=self.providers.spotify,
                itunes=self.providers.itunes,
                deezer=self.providers.deezer,
            )
        )

    @asynccontextmanager
    async def auto_resolve(self) -> AsyncGenerator[AutoResolvePreSavesUseCase]:
        """Yield the batch use case bound to a fresh session; commits on exit."""
        async with get_session(self.session_factory) as session:
            yield AutoResolvePreSavesUseCase(
                repository=PreSaveRepository(session),
                spotify=self.providers.spotify,
                delay=self.auto_resolve_delay,
            )
