"""Metadata lookup use case for form auto-fill.

Same resolution pipeline as smart-link generation, but providers are tried in
metadata order (iTunes, oEmbed and MusicBrainz ahead of the Spotify API) and
the response carries a per-platform URL map instead of an accuracy score.
"""

from typing import Any

from attrs import define, field

from fanlink.application.services.resolution import ResolutionOutcome, ResolutionService
from fanlink.config import get_logger
from fanlink.domain.classification import classify_with_hint
from fanlink.domain.errors import TrackNotFoundError, ValidationError
from fanlink.domain.links import PlatformLinkSet, build_platform_urls

logger = get_logger(__name__)

METADATA_NOT_FOUND_MESSAGE = (
    "Could not find track information. "
    "Please try a different link or enter the details manually."
)


@define(frozen=True, slots=True)
class FetchMetadataCommand:
    """A metadata lookup, optionally with the caller's idea of the input kind."""

    input: str
    type_hint: str | None = None

    def __attrs_post_init__(self) -> None:
        """Validate command parameters."""
        if not isinstance(self.input, str) or not self.input.strip():
            raise ValidationError("No input provided")


@define(frozen=True, slots=True)
class FetchMetadataResult:
    outcome: ResolutionOutcome
    platforms: PlatformLinkSet = field(factory=dict)

    def as_dict(self) -> dict[str, Any]:
        return {
            "success": True,
            "metadata": self.outcome.track.to_platform_metadata_dict(self.platforms),
        }


@define(slots=True)
class FetchMetadataUseCase:
    """Resolve an input to pre-fill a release form."""

    resolver: ResolutionService

    async def execute(self, command: FetchMetadataCommand) -> FetchMetadataResult:
        with logger.contextualize(operation="fetch_metadata"):
            raw = command.input.strip()
            classification = classify_with_hint(
                raw, command.type_hint, upc_bounds=self.resolver.upc_bounds
            )
            try:
                outcome = await self.resolver.resolve(raw, classification)
            except TrackNotFoundError as e:
                raise TrackNotFoundError(
                    message=METADATA_NOT_FOUND_MESSAGE, suggestions=()
                ) from e

            platforms = build_platform_urls(outcome.track)
            logger.info(
                f"Fetched metadata for {outcome.track.artist} - {outcome.track.title}",
                platforms=len(platforms),
            )
            return FetchMetadataResult(outcome=outcome, platforms=platforms)
