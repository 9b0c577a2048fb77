"""Smart-link generation use case.

Resolves one raw input (UPC, ISRC, platform URL or "Artist - Title" query) to a
canonical track, scores how trustworthy the match is and attaches a streaming
link for every supported platform.
"""

from typing import Any

from attrs import define, field

from fanlink.application.services.resolution import ResolutionOutcome, ResolutionService
from fanlink.config import get_logger
from fanlink.domain.errors import ConfigurationError, ValidationError
from fanlink.domain.links import PlatformLinkSet, generate_streaming_links
from fanlink.domain.matching import AccuracyScore, calculate_accuracy

logger = get_logger(__name__)


@define(frozen=True, slots=True)
class GenerateLinkCommand:
    """A single smart-link request."""

    input: str

    def __attrs_post_init__(self) -> None:
        """Validate command parameters."""
        if not isinstance(self.input, str) or not self.input.strip():
            raise ValidationError(
                "No input provided. Please enter a UPC, ISRC, or Spotify link."
            )


@define(frozen=True, slots=True)
class GenerateLinkResult:
    """Resolved track, its accuracy score and streaming links."""

    outcome: ResolutionOutcome
    accuracy: AccuracyScore
    streaming_links: PlatformLinkSet = field(factory=dict)

    def as_dict(self) -> dict[str, Any]:
        return {
            "success": True,
            "metadata": self.outcome.track.to_metadata_dict(),
            "streaming_links": dict(self.streaming_links),
            "accuracy_score": self.accuracy.score,
            "accuracy_breakdown": self.accuracy.breakdown.as_dict(),
        }


@define(slots=True)
class GenerateLinkUseCase:
    """Resolve, score and link one input.

    Spotify is the primary source for smart links, so missing Spotify
    credentials fail the request before any lookup is made.
    """

    resolver: ResolutionService
    spotify_configured: bool = True

    async def execute(self, command: GenerateLinkCommand) -> GenerateLinkResult:
        with logger.contextualize(operation="generate_link"):
            if not self.spotify_configured:
                raise ConfigurationError(
                    "Failed to authenticate with Spotify. Please check API credentials."
                )

            raw = command.input.strip()
            outcome = await self.resolver.resolve(raw)

            accuracy = calculate_accuracy(outcome.track, raw, outcome.source_type)
            links = generate_streaming_links(outcome.track)

            logger.info(
                f"Generated smart link for {outcome.track.artist} - {outcome.track.title}",
                accuracy=accuracy.score,
                source_type=outcome.source_type.value,
            )
            return GenerateLinkResult(
                outcome=outcome, accuracy=accuracy, streaming_links=links
            )
