"""Auto-resolve batch job for pre-saves whose release date has passed.

Every due record is looked up on Spotify, by UPC first and then by artist and
title. Records are processed sequentially with a pause between them to stay
well inside Spotify's rate limits. A failure on one record is recorded in the
report and never aborts the batch.
"""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import date
from typing import TYPE_CHECKING

from attrs import define, field

from fanlink.config import get_logger, resilient_operation, settings
from fanlink.domain.entities import (
    AutoResolveReport,
    PreSaveRecord,
    PreSaveResolution,
    ResolutionStatus,
    SpotifyAlbumMatch,
)
from fanlink.domain.release import today_utc
from fanlink.domain.repositories import PreSaveRepositoryProtocol

if TYPE_CHECKING:
    from fanlink.infrastructure.services.providers import SpotifyProvider

logger = get_logger(__name__)


@define(slots=True)
class AutoResolvePreSavesUseCase:
    """Flip due pre-saves to released once Spotify has the album."""

    repository: PreSaveRepositoryProtocol
    spotify: "SpotifyProvider"
    delay: float = field(factory=lambda: settings.batch.auto_resolve_delay)
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep

    @resilient_operation("auto_resolve_presaves")
    async def execute(self, today: date | None = None) -> AutoResolveReport:
        """Run one batch.

        Args:
            today: Cut-off date, inclusive; defaults to today (UTC)

        Raises:
            ConfigurationError: If due records exist but Spotify is not configured.
            ProviderUnavailableError: If the Spotify token cannot be obtained.
        """
        with logger.contextualize(operation="auto_resolve_presaves"):
            records = await self.repository.list_due_unreleased(today or today_utc())
            if not records:
                logger.info("No pre-saves to resolve")
                return AutoResolveReport()

            # Fail the whole run up front rather than erroring every record
            await self.spotify.authenticate()

            logger.info(f"Checking {len(records)} due pre-saves")
            results: list[PreSaveResolution] = []
            for index, record in enumerate(records):
                if index:
                    await self.sleep(self.delay)
                results.append(await self._resolve_record(record))

            resolved = sum(r.status is ResolutionStatus.RESOLVED for r in results)
            logger.info(f"Resolved {resolved} of {len(records)} pre-saves")
            return AutoResolveReport(
                checked=len(records), resolved=resolved, results=results
            )

    async def _find_album(self, record: PreSaveRecord) -> SpotifyAlbumMatch | None:
        match = None
        if record.upc:
            match = await self.spotify.find_album_by_upc(record.upc)
        if match is None:
            match = await self.spotify.find_album_by_artist_title(
                record.artist, record.title
            )
        return match

    async def _resolve_record(self, record: PreSaveRecord) -> PreSaveResolution:
        try:
            match = await self._find_album(record)
            if match is None:
                logger.info(f"{record.label} not on Spotify yet", presave_id=record.id)
                return PreSaveResolution(id=record.id, status=ResolutionStatus.NOT_FOUND)

            await self.repository.mark_released(record.id, match)  # type: ignore[arg-type]
            logger.info(f"Resolved {record.label}", presave_id=record.id, url=match.url)
            return PreSaveResolution(
                id=record.id, status=ResolutionStatus.RESOLVED, details=match.url
            )
        except Exception as e:
            logger.exception(f"Failed to resolve {record.label}", presave_id=record.id)
            return PreSaveResolution(
                id=record.id, status=ResolutionStatus.ERROR, details=str(e)
            )
