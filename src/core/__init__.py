"""Core artwork resolution: platforms, listings, matching cascade."""

from core.models import (
    ArtType,
    ArtTypeOption,
    MatchKind,
    MatchOutcome,
    PlatformRecord,
    RunStatistics,
)
from core.platforms import PlatformCatalog

__all__ = [
    "ArtType",
    "ArtTypeOption",
    "MatchKind",
    "MatchOutcome",
    "PlatformRecord",
    "RunStatistics",
    "PlatformCatalog",
]
