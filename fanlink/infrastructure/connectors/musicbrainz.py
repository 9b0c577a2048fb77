"""MusicBrainz service connector for ISRC resolution.

Wraps musicbrainzngs, which requires a descriptive user agent per MusicBrainz
API policy and allows roughly one request per second. Requests are serialised
through a process-wide lock so concurrent resolutions (each Flask async view
runs on its own event loop) still respect the limit.
"""

import asyncio
import re
import threading
import time
from typing import Any

from attrs import define, field
import musicbrainzngs

from fanlink.config import get_logger, settings
from fanlink.domain.errors import ProviderUnavailableError

# Get contextual logger with service binding
logger = get_logger(__name__).bind(service="musicbrainz")

_USER_AGENT_PATTERN = re.compile(r"^(?P<app>[^/\s]+)/(?P<version>\S+)(?:\s+\((?P<contact>[^)]*)\))?")


def configure_user_agent(user_agent: str) -> None:
    """Register an "App/1.0 (contact)" style user agent with musicbrainzngs."""
    match = _USER_AGENT_PATTERN.match(user_agent.strip())
    if match:
        musicbrainzngs.set_useragent(
            match.group("app"), match.group("version"), match.group("contact")
        )
    else:
        musicbrainzngs.set_useragent(user_agent.strip() or "fanlink", "1.0")


configure_user_agent(settings.api.user_agent)

_request_lock = threading.Lock()
_last_request_time = 0.0


@define(slots=True)
class MusicBrainzConnector:
    """Rate-limited MusicBrainz lookups.

    Attributes:
        min_interval: Minimum seconds between two requests
    """

    min_interval: float = field(
        factory=lambda: settings.api.musicbrainz_min_interval
    )

    def __attrs_post_init__(self) -> None:
        musicbrainzngs.set_rate_limit(False)

    async def get_recordings_by_isrc(self, isrc: str) -> list[dict[str, Any]]:
        """Recordings carrying an ISRC, with artist credits and releases.

        Returns:
            Recording dicts; empty when MusicBrainz does not know the ISRC.

        Raises:
            ProviderUnavailableError: On any error other than not-found.
        """
        if not isrc:
            return []

        result = await asyncio.to_thread(
            self._rate_limited_request,
            musicbrainzngs.get_recordings_by_isrc,
            isrc,
            includes=["artists", "releases"],
        )
        if result is None:
            return []
        return result.get("isrc", {}).get("recording-list", [])

    def _rate_limited_request(self, func, *args, **kwargs) -> Any:
        """Execute a MusicBrainz request no sooner than `min_interval` after the last."""
        global _last_request_time

        with _request_lock:
            wait = self.min_interval - (time.monotonic() - _last_request_time)
            if wait > 0:
                time.sleep(wait)
            try:
                return func(*args, **kwargs)
            except musicbrainzngs.ResponseError as e:
                # Unknown ISRCs come back as 404
                if getattr(e.cause, "code", None) == 404 or "404" in str(e):
                    return None
                raise ProviderUnavailableError("musicbrainz", str(e)) from e
            except musicbrainzngs.WebServiceError as e:
                raise ProviderUnavailableError("musicbrainz", str(e)) from e
            finally:
                _last_request_time = time.monotonic()
