"""Similarity and accuracy scoring for resolved tracks."""

from .algorithms import (
    SCORING_CONFIG,
    calculate_accuracy,
    calculate_similarity,
    names_overlap,
    split_query,
)
from .types import AccuracyBreakdown, AccuracyScore

__all__ = [
    "SCORING_CONFIG",
    "AccuracyBreakdown",
    "AccuracyScore",
    "calculate_accuracy",
    "calculate_similarity",
    "names_overlap",
    "split_query",
]
