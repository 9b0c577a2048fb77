"""Domain error taxonomy.

Provider failures are absorbed by the adapters; only the absence of any usable
result, malformed requests and missing configuration reach the caller.
"""

DEFAULT_NOT_FOUND_SUGGESTIONS = (
    "Try using the exact track title and artist name",
    "Use an ISRC code for the most accurate results",
    "Paste a direct Spotify track URL",
)


class FanlinkError(Exception):
    """Base class for all errors raised by the resolver."""


class ProviderUnavailableError(FanlinkError):
    """A single provider could not answer (network, auth, non-2xx, bad payload)."""

    def __init__(self, provider: str, reason: str) -> None:
        self.provider = provider
        self.reason = reason
        super().__init__(f"{provider} unavailable: {reason}")


class TrackNotFoundError(FanlinkError):
    """No provider produced a usable title and artist."""

    def __init__(
        self,
        message: str = "No track found. Please try a different search term, UPC, ISRC, or Spotify link.",
        suggestions: tuple[str, ...] | list[str] = DEFAULT_NOT_FOUND_SUGGESTIONS,
    ) -> None:
        self.message = message
        self.suggestions = list(suggestions)
        super().__init__(message)


class ValidationError(FanlinkError):
    """Malformed request; raised before any provider is called."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(FanlinkError):
    """Required provider credentials are missing."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)
