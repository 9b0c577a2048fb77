"""Tests for the smart-link use case."""

import pytest

from fanlink.application.services import ResolutionService
from fanlink.application.use_cases import GenerateLinkCommand, GenerateLinkUseCase
from fanlink.domain.errors import ConfigurationError, TrackNotFoundError, ValidationError
from fanlink.domain.links import PLATFORM_KEYS
from tests.fixtures.models import make_result


class TestGenerateLinkCommand:
    @pytest.mark.parametrize("raw", ["", "   ", None, 12345])
    def test_rejects_missing_input(self, raw):
        with pytest.raises(ValidationError, match="No input provided"):
            GenerateLinkCommand(input=raw)


class TestGenerateLinkUseCase:
    async def test_builds_full_response(self, providers):
        providers.spotify.resolve.return_value = make_result()
        use_case = GenerateLinkUseCase(resolver=ResolutionService.from_suite(providers))

        result = await use_case.execute(GenerateLinkCommand(input=" USCM51600028 "))
        payload = result.as_dict()

        assert payload["success"] is True
        assert payload["metadata"]["title"] == "One Dance"
        assert payload["metadata"]["spotify_track_url"].endswith("4uLU6hMCjMI75M1A2tKUQC")
        assert tuple(payload["streaming_links"]) == PLATFORM_KEYS
        assert payload["streaming_links"]["spotify"] == payload["metadata"]["spotify_track_url"]
        assert payload["accuracy_score"] == 100
        assert payload["accuracy_breakdown"]["isrc_match"] is True

    async def test_not_found_propagates_with_suggestions(self, providers):
        use_case = GenerateLinkUseCase(resolver=ResolutionService.from_suite(providers))

        with pytest.raises(TrackNotFoundError) as exc_info:
            await use_case.execute(GenerateLinkCommand(input="nothing matches this"))

        assert exc_info.value.suggestions

    async def test_missing_credentials_fail_before_any_lookup(self, providers):
        providers.itunes.resolve.return_value = make_result(provider="itunes")
        use_case = GenerateLinkUseCase(
            resolver=ResolutionService.from_suite(providers), spotify_configured=False
        )

        with pytest.raises(ConfigurationError, match="Failed to authenticate with Spotify"):
            await use_case.execute(GenerateLinkCommand(input="Drake One Dance"))

        providers.spotify.resolve.assert_not_called()
        providers.itunes.resolve.assert_not_called()
