"""
romart - ROM artwork resolver

Resolves ROM files to their best-matching libretro thumbnail artwork,
tolerating region tags, annotations and other naming noise.
"""

__version__ = "1.0.0"

from core.models import (
    ArtType,
    MatchKind,
    MatchOutcome,
    RunStatistics,
)

__all__ = [
    "ArtType",
    "MatchKind",
    "MatchOutcome",
    "RunStatistics",
]
