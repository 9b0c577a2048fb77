"""Tests for the shared JSON HTTP connector."""

from unittest.mock import Mock

import pytest
import requests

from fanlink.domain.errors import ProviderUnavailableError
from fanlink.infrastructure.connectors import JsonHttpConnector, first_item


def connector_with(response=None, error=None) -> tuple[JsonHttpConnector, Mock]:
    session = Mock(spec=requests.Session)
    if error is not None:
        session.request.side_effect = error
    else:
        session.request.return_value = response
    return JsonHttpConnector(service="itunes", session=session, timeout=3.0), session


def response(status: int = 200, payload=None, invalid_json: bool = False) -> Mock:
    resp = Mock()
    resp.status_code = status
    resp.ok = status < 400
    if invalid_json:
        resp.json.side_effect = ValueError("Expecting value")
    else:
        resp.json.return_value = payload
    return resp


async def test_get_json_decodes_body_and_drops_empty_kwargs():
    connector, session = connector_with(response(payload={"results": []}))

    assert await connector.get_json("https://itunes.apple.com/search", {"term": "x"}) == {
        "results": []
    }
    session.request.assert_called_once_with(
        "GET", "https://itunes.apple.com/search", timeout=3.0, params={"term": "x"}
    )


@pytest.mark.parametrize(
    ("resp", "error", "reason"),
    [
        (response(status=503), None, "HTTP 503"),
        (response(invalid_json=True), None, "invalid JSON"),
        (None, requests.exceptions.ConnectTimeout("timed out"), "request failed"),
    ],
)
async def test_failures_become_provider_unavailable(resp, error, reason):
    connector, _ = connector_with(resp, error)

    with pytest.raises(ProviderUnavailableError) as exc_info:
        await connector.get_json("https://itunes.apple.com/lookup")

    assert exc_info.value.provider == "itunes"
    assert reason in exc_info.value.reason


def test_first_item():
    assert first_item([1, 2]) == 1
    assert first_item([]) is None
    assert first_item(None) is None
