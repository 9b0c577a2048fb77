"""Fanlink domain layer - pure resolution and scoring logic with no I/O."""

from . import entities, matching

from .classification import InputKind, Platform, classify
from .entities import CanonicalTrack, ProviderResult, TrackDraft
from .errors import (
    ConfigurationError,
    FanlinkError,
    ProviderUnavailableError,
    TrackNotFoundError,
    ValidationError,
)
from .links import PLATFORM_KEYS, generate_streaming_links
from .matching import calculate_accuracy, calculate_similarity
from .release import is_released

__all__ = [
    "PLATFORM_KEYS",
    "CanonicalTrack",
    "ConfigurationError",
    "FanlinkError",
    "InputKind",
    "Platform",
    "ProviderResult",
    "ProviderUnavailableError",
    "TrackDraft",
    "TrackNotFoundError",
    "ValidationError",
    "calculate_accuracy",
    "calculate_similarity",
    "classify",
    "entities",
    "generate_streaming_links",
    "is_released",
    "matching",
]
