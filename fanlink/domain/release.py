"""Release-date gate.

Decides whether a release is live (streaming links) or upcoming (pre-save
semantics). Comparison is by calendar date only; time of day is ignored and
the release day itself counts as released.
"""

from datetime import UTC, date, datetime

from fanlink.domain.errors import ValidationError


def today_utc() -> date:
    return datetime.now(UTC).date()


def parse_release_date(value: date | datetime | str) -> date:
    """Coerce a release date to a calendar date.

    Accepts a `date`, a `datetime` (time dropped) or an ISO string; anything
    after a "T" or a space in the string is ignored.

    Raises:
        ValidationError: If the value cannot be read as a date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Invalid release date: {value!r}")

    text = value.strip().split("T", 1)[0].split(" ", 1)[0]
    try:
        return date.fromisoformat(text)
    except ValueError as e:
        raise ValidationError(f"Invalid release date: {value!r}") from e


def is_released(
    release_date: date | datetime | str, today: date | None = None
) -> bool:
    """True iff the release date is on or before today."""
    return parse_release_date(release_date) <= (today or today_utc())
