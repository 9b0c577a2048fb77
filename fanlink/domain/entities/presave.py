"""Pre-save domain entities.

A pre-save is a link page for an upcoming release. Once the release date has
passed the batch job looks the release up on Spotify and flips it to released.
"""

from datetime import date
from enum import StrEnum
from typing import Any

from attrs import define, field


@define(frozen=True, slots=True)
class SpotifyAlbumMatch:
    """A Spotify album located for a pre-save."""

    url: str | None
    uri: str | None
    album_id: str | None


@define(frozen=True, slots=True)
class PreSaveRecord:
    """Stored pre-save as seen by the resolution batch job."""

    artist: str
    title: str
    release_date: date | None = None
    upc: str | None = None
    isrc: str | None = None
    is_released: bool = False
    is_active: bool = True
    spotify_uri: str | None = None
    spotify_album_id: str | None = None
    spotify_url: str | None = None
    id: int | None = None

    @property
    def label(self) -> str:
        return f"{self.artist} - {self.title}"


@define(frozen=True, slots=True)
class PreSaveRequest:
    """Validated input to the pre-save link generator."""

    upc: str
    artist: str
    title: str
    release_date: str


class ResolutionStatus(StrEnum):
    RESOLVED = "resolved"
    NOT_FOUND = "not_found"
    ERROR = "error"


@define(frozen=True, slots=True)
class PreSaveResolution:
    """Outcome of re-resolving one pre-save record."""

    id: int | None
    status: ResolutionStatus
    details: str | None = None

    def as_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"id": self.id, "status": self.status.value}
        if self.details is not None:
            result["details"] = self.details
        return result


@define(frozen=True, slots=True)
class AutoResolveReport:
    """Summary of one auto-resolve batch run."""

    checked: int = 0
    resolved: int = 0
    results: list[PreSaveResolution] = field(factory=list)

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "success": True,
            "checked": self.checked,
            "resolved": self.resolved,
            "results": [result.as_dict() for result in self.results],
        }
        if self.checked == 0:
            payload["message"] = "No pre-saves to resolve"
        return payload
