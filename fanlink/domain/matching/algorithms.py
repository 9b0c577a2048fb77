"""Pure algorithms for similarity and accuracy scoring.

These functions contain no I/O and implement the deterministic rubric that
explains how trustworthy a resolved track is for a given input.
"""

import math
import re

from fanlink.domain.classification import InputKind
from fanlink.domain.entities.track import CanonicalTrack

from .types import AccuracyBreakdown, AccuracyScore

# Accuracy scoring configuration
SCORING_CONFIG = {
    # Identifier contributions
    "isrc_exact_points": 40,
    "isrc_present_points": 20,
    "upc_points": 40,
    # Any identifier match lifts the running score to at least this value
    "identifier_floor": 90,
    # Free-text contributions
    "artist_points": 20,
    "title_points": 20,
    "combined_points": 40,
    "album_points": 20,
    # Bounds
    "min_score": 0,
    "max_score": 100,
}

# Hyphen or en dash between "Artist - Title"
QUERY_SEPARATOR = re.compile(r"[-–]")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_similarity(first: str, second: str) -> int:
    """Score how alike two strings are, from 0 to 100.

    Case-insensitive and whitespace-trimmed. Exact match scores 100; an empty
    side scores 0; containment scores the length ratio; anything else scores
    the share of words in `first` that overlap (by substring, either way) a
    word in `second`, relative to the longer word list.

    The word-overlap branch counts words of `first` only, so the function is
    not symmetric: similarity("a a b", "a c") != similarity("a c", "a a b").
    """
    s1 = (first or "").strip().lower()
    s2 = (second or "").strip().lower()

    if s1 == s2:
        return 100
    if not s1 or not s2:
        return 0

    longer, shorter = (s1, s2) if len(s1) > len(s2) else (s2, s1)
    if shorter in longer:
        return _round_half_up(len(shorter) / len(longer) * 100)

    words1 = s1.split()
    words2 = s2.split()
    common = [w for w in words1 if any(w2 in w or w in w2 for w2 in words2)]
    return _round_half_up(len(common) / max(len(words1), len(words2)) * 100)


def names_overlap(first: str | None, second: str | None) -> bool:
    """Case-insensitive containment in either direction; blanks never overlap."""
    a = (first or "").strip().lower()
    b = (second or "").strip().lower()
    if not a or not b:
        return False
    return a in b or b in a


def split_query(text: str) -> tuple[str, str] | None:
    """Split "Artist - Title" free text into its halves.

    Splits on every hyphen or en dash; the first part is the artist and the
    remainder, re-joined with hyphens, is the title.
    """
    parts = QUERY_SEPARATOR.split(text)
    if len(parts) < 2:
        return None
    return parts[0].strip(), "-".join(parts[1:]).strip()


def calculate_accuracy(
    track: CanonicalTrack,
    raw_input: str,
    source_type: InputKind,
) -> AccuracyScore:
    """Score a resolved track against the input that produced it.

    Args:
        track: The resolved canonical track.
        raw_input: Original user input (trimmed by the caller or not).
        source_type: Classified kind of the input.

    Returns:
        Score clamped to [0, 100] with the breakdown that produced it.
    """
    original = (raw_input or "").strip()

    if source_type is InputKind.PLATFORM_URL:
        # A direct platform URL is ground truth
        return AccuracyScore(
            score=SCORING_CONFIG["max_score"],
            breakdown=AccuracyBreakdown(
                isrc_match=bool(track.isrc),
                upc_match=False,
                artist_similarity=100,
                title_similarity=100,
                album_match=True,
            ),
        )

    score = 0
    isrc_match = False
    upc_match = False
    artist_similarity = 0
    title_similarity = 0
    album_match = False

    if (
        source_type is InputKind.ISRC
        and track.isrc
        and track.isrc.lower() == original.lower()
    ):
        isrc_match = True
        score += SCORING_CONFIG["isrc_exact_points"]
    elif track.isrc:
        isrc_match = True
        score += SCORING_CONFIG["isrc_present_points"]

    if source_type is InputKind.UPC:
        # The UPC-keyed lookup itself is taken as evidence of the match
        upc_match = True
        score += SCORING_CONFIG["upc_points"]

    if (isrc_match or upc_match) and score < SCORING_CONFIG["identifier_floor"]:
        score = SCORING_CONFIG["identifier_floor"]

    if source_type is InputKind.QUERY:
        halves = split_query(original)
        if halves is not None:
            input_artist, input_title = halves
            artist_similarity = calculate_similarity(input_artist, track.artist)
            title_similarity = calculate_similarity(input_title, track.title)
            score += _round_half_up(
                artist_similarity / 100 * SCORING_CONFIG["artist_points"]
            )
            score += _round_half_up(
                title_similarity / 100 * SCORING_CONFIG["title_points"]
            )
        else:
            combined = calculate_similarity(original, f"{track.artist} {track.title}")
            artist_similarity = combined
            title_similarity = combined
            score += _round_half_up(combined / 100 * SCORING_CONFIG["combined_points"])

    if track.album:
        album_match = True
        score += SCORING_CONFIG["album_points"]

    score = max(
        SCORING_CONFIG["min_score"], min(score, SCORING_CONFIG["max_score"])
    )

    return AccuracyScore(
        score=score,
        breakdown=AccuracyBreakdown(
            isrc_match=isrc_match,
            upc_match=upc_match,
            artist_similarity=artist_similarity,
            title_similarity=title_similarity,
            album_match=album_match,
        ),
    )
