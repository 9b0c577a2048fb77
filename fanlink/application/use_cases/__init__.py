"""Application use cases - orchestrate business operations."""

from .auto_resolve_presaves import AutoResolvePreSavesUseCase
from .fetch_metadata import (
    FetchMetadataCommand,
    FetchMetadataResult,
    FetchMetadataUseCase,
)
from .generate_link import GenerateLinkCommand, GenerateLinkResult, GenerateLinkUseCase
from .generate_presave_links import (
    GeneratePreSaveLinksCommand,
    GeneratePreSaveLinksUseCase,
)

__all__ = [
    "AutoResolvePreSavesUseCase",
    "FetchMetadataCommand",
    "FetchMetadataResult",
    "FetchMetadataUseCase",
    "GenerateLinkCommand",
    "GenerateLinkResult",
    "GenerateLinkUseCase",
    "GeneratePreSaveLinksCommand",
    "GeneratePreSaveLinksUseCase",
]
