"""Application services orchestrating providers and domain logic."""

from .presave_links import PreSaveLinkService, PreSaveLinksResult
from .resolution import ResolutionFlow, ResolutionOutcome, ResolutionService

__all__ = [
    "PreSaveLinkService",
    "PreSaveLinksResult",
    "ResolutionFlow",
    "ResolutionOutcome",
    "ResolutionService",
]
