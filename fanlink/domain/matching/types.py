"""Pure domain types for accuracy scoring.

These types represent how trustworthy a resolved track is with respect to the
input that produced it. They have no external dependencies beyond attrs.
"""

from typing import Any

from attrs import define


@define(frozen=True, slots=True)
class AccuracyBreakdown:
    """Evidence used to calculate the accuracy score.

    Similarities are integers in [0, 100]; the booleans record which
    identifier and album signals contributed points.
    """

    isrc_match: bool = False
    upc_match: bool = False
    artist_similarity: int = 0
    title_similarity: int = 0
    album_match: bool = False

    def as_dict(self) -> dict[str, Any]:
        return {
            "isrc_match": self.isrc_match,
            "upc_match": self.upc_match,
            "artist_similarity": self.artist_similarity,
            "title_similarity": self.title_similarity,
            "album_match": self.album_match,
        }


@define(frozen=True, slots=True)
class AccuracyScore:
    """Aggregate 0-100 score together with its breakdown."""

    score: int
    breakdown: AccuracyBreakdown
