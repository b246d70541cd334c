"""Utility modules for name normalization and candidate matching."""

from utils.similarity import closest_by_edit_distance, fuzzy_matches

__all__ = [
    "closest_by_edit_distance",
    "fuzzy_matches",
]
