"""Domain repository interfaces.

These interfaces define the contracts for data access without depending on
infrastructure implementations, following the dependency inversion principle.
"""

from collections.abc import Awaitable
from datetime import date
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from fanlink.domain.entities import PreSaveRecord, SpotifyAlbumMatch


class PreSaveRepositoryProtocol(Protocol):
    """Repository interface for pre-save persistence operations."""

    def save(self, record: "PreSaveRecord") -> Awaitable["PreSaveRecord"]:
        """Insert or update a pre-save and return it with its id."""
        ...

    def get_by_id(self, record_id: int) -> Awaitable["PreSaveRecord | None"]:
        """Get pre-save by ID."""
        ...

    def list_due_unreleased(self, today: date) -> Awaitable[list["PreSaveRecord"]]:
        """Active, unreleased pre-saves whose release date is on or before today.

        Args:
            today: Cut-off date, inclusive

        Returns:
            Records ordered by release date, then id
        """
        ...

    def mark_released(
        self, record_id: int, match: "SpotifyAlbumMatch"
    ) -> Awaitable[None]:
        """Flag a pre-save as released and store its Spotify album."""
        ...
