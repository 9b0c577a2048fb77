"""Base connector module providing shared HTTP functionality for catalog APIs.

Every catalog connector is a thin wrapper that shapes requests and hands back
raw JSON. Blocking `requests` calls run in a worker thread so the resolution
pipeline stays async, and every transport, status or decoding failure surfaces
as a single `ProviderUnavailableError` that the provider layer absorbs.

Key Components:
- create_http_session: requests.Session preloaded with the service user agent
- JsonHttpConnector: GET/POST helpers returning decoded JSON
- first_item: pick the first element of a result array, if any
"""

import asyncio
from collections.abc import Sequence
from typing import Any

from attrs import define, field
import requests

from fanlink.config import get_logger, settings
from fanlink.domain.errors import ProviderUnavailableError

# Get contextual logger
logger = get_logger(__name__).bind(service="connectors")


def create_http_session(user_agent: str | None = None) -> requests.Session:
    """Create a session that identifies the resolver to upstream APIs."""
    session = requests.Session()
    session.headers.update({
        "User-Agent": user_agent or settings.api.user_agent,
        "Accept": "application/json",
    })
    return session


def first_item(items: Sequence[Any] | None) -> Any | None:
    """First element of a provider result array, or None when empty."""
    if not items:
        return None
    return items[0]


@define(slots=True)
class JsonHttpConnector:
    """Shared JSON-over-HTTP plumbing for catalog connectors.

    Attributes:
        service: Service name used in logs and errors
        session: HTTP session, injectable for tests
        timeout: Per-request timeout in seconds
    """

    service: str
    session: requests.Session = field(factory=create_http_session, repr=False)
    timeout: float = field(factory=lambda: settings.api.request_timeout)

    async def get_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """GET a URL and decode its JSON body.

        Raises:
            ProviderUnavailableError: On network failure, non-2xx status or a
                body that is not JSON.
        """
        return await asyncio.to_thread(
            self._request_json, "GET", url, params=params, headers=headers
        )

    def _request_json(self, method: str, url: str, **kwargs: Any) -> Any:
        kwargs = {key: value for key, value in kwargs.items() if value is not None}
        try:
            response = self.session.request(
                method, url, timeout=self.timeout, **kwargs
            )
        except requests.exceptions.RequestException as e:
            raise ProviderUnavailableError(self.service, f"request failed: {e}") from e

        if not response.ok:
            raise ProviderUnavailableError(
                self.service, f"HTTP {response.status_code} from {url}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise ProviderUnavailableError(
                self.service, f"invalid JSON from {url}"
            ) from e
