"""Pre-save link generation use case."""

from datetime import date

from attrs import define

from fanlink.application.services.presave_links import (
    PreSaveLinkService,
    PreSaveLinksResult,
)
from fanlink.config import get_logger
from fanlink.domain.entities import PreSaveRequest
from fanlink.domain.errors import ValidationError
from fanlink.domain.identifiers import GTIN_UPC_BOUNDS, UpcBounds
from fanlink.domain.release import parse_release_date

logger = get_logger(__name__)


@define(frozen=True, slots=True)
class GeneratePreSaveLinksCommand:
    """Inputs for one pre-save page. All four fields are required."""

    upc: str | None
    artist: str | None
    title: str | None
    release_date: str | None
    upc_bounds: UpcBounds = GTIN_UPC_BOUNDS

    def __attrs_post_init__(self) -> None:
        """Validate command parameters."""
        fields = (self.upc, self.artist, self.title, self.release_date)
        if any(not isinstance(value, str) or not value.strip() for value in fields):
            raise ValidationError(
                "Missing required fields. Please provide upc, artist, title, and releaseDate."
            )
        if not self.upc_bounds.matches(self.upc.strip()):  # type: ignore[union-attr]
            bounds = self.upc_bounds
            raise ValidationError(
                f"Invalid UPC format. UPC must be "
                f"{bounds.min_digits}-{bounds.max_digits} digits."
            )
        parse_release_date(self.release_date)  # type: ignore[arg-type]

    def to_request(self) -> PreSaveRequest:
        return PreSaveRequest(
            upc=self.upc.strip(),  # type: ignore[union-attr]
            artist=self.artist.strip(),  # type: ignore[union-attr]
            title=self.title.strip(),  # type: ignore[union-attr]
            release_date=self.release_date.strip(),  # type: ignore[union-attr]
        )


@define(slots=True)
class GeneratePreSaveLinksUseCase:
    service: PreSaveLinkService

    async def execute(
        self, command: GeneratePreSaveLinksCommand, today: date | None = None
    ) -> PreSaveLinksResult:
        with logger.contextualize(operation="generate_presave_links"):
            return await self.service.generate(command.to_request(), today)
