"""
Deterministic string-similarity matching over artwork candidates.

Both matchers compare names with their (...) and [...] annotations removed,
and always return the original, unstripped candidates.
"""

import logging
from typing import Sequence

from rapidfuzz.distance import JaroWinkler, Levenshtein

from constants import FUZZY_MAX_DISTINCT_MATCHES, FUZZY_SIMILARITY_THRESHOLD
from utils.names import strip_annotations

logger = logging.getLogger(__name__)


def jaro_winkler_similarity(a: str, b: str) -> float:
    """Jaro-Winkler similarity between two strings (0.0 - 1.0)."""
    return JaroWinkler.similarity(a, b)


def closest_by_edit_distance(search: str, candidates: Sequence[str]) -> str:
    """
    Pick the candidate closest to the search term by Levenshtein distance.

    Ties resolve to the first candidate with the minimal distance.

    Args:
        search: Search term
        candidates: Remote filenames to choose from

    Returns:
        The original candidate whose stripped name is closest

    Raises:
        ValueError: If candidates is empty
    """
    if not candidates:
        raise ValueError("Cannot pick the closest match among zero candidates")

    stripped_search = strip_annotations(search)
    best_index = 0
    best_distance = None
    for index, candidate in enumerate(candidates):
        distance = Levenshtein.distance(stripped_search, strip_annotations(candidate))
        if best_distance is None or distance < best_distance:
            best_index = index
            best_distance = distance
            if distance == 0:
                break

    return candidates[best_index]


def fuzzy_matches(
    search: str,
    candidates: Sequence[str],
    threshold: float = FUZZY_SIMILARITY_THRESHOLD,
    limit: int = FUZZY_MAX_DISTINCT_MATCHES,
) -> list[str]:
    """
    Filter candidates whose stripped names are similar to the search term.

    Keeps the `limit` most similar distinct stripped names at or above
    `threshold`, then returns every original candidate carrying one of those
    names, in candidate order. Several originals can share a stripped name,
    so the result may hold more than `limit` entries.

    Args:
        search: Search term
        candidates: Remote filenames to filter
        threshold: Minimum Jaro-Winkler similarity (inclusive)
        limit: Maximum number of distinct stripped names kept

    Returns:
        Matching candidates (empty list if none clears the threshold)
    """
    stripped_candidates = [strip_annotations(candidate) for candidate in candidates]

    scores: dict[str, float] = {}
    for stripped in stripped_candidates:
        if stripped not in scores:
            scores[stripped] = jaro_winkler_similarity(search, stripped)

    ranked = sorted(
        (stripped for stripped, similarity in scores.items() if similarity >= threshold),
        key=lambda stripped: scores[stripped],
        reverse=True,
    )
    kept = set(ranked[:limit])

    matches = [
        candidate
        for candidate, stripped in zip(candidates, stripped_candidates)
        if stripped in kept
    ]

    logger.debug(f"Fuzzy matches for '{search}': {matches}")
    return matches
