"""Application utilities - shared helpers for application services."""

from .fallback import Attempt, first_successful

__all__ = ["Attempt", "first_successful"]
