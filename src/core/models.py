"""
Domain models for artwork resolution.

This module defines the core data structures used throughout the application.
Value objects are frozen dataclasses; RunStatistics is the one mutable model
and guards its counters with a lock.
"""

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from core.exceptions import ValidationException


class ArtType(str, Enum):
    """Artwork categories, valued by their folder name on the thumbnail server."""

    BOXART = "Named_Boxarts"
    SNAP = "Named_Snaps"
    TITLE = "Named_Titles"


class ArtTypeOption(str, Enum):
    """User-facing art type selector."""

    BOXART = "boxart"
    SNAP = "snap"
    TITLE = "title"
    BOX_AND_SNAP = "box+snap"
    BOX_AND_TITLE = "box+title"

    @classmethod
    def parse(cls, value: str) -> "ArtTypeOption":
        """
        Parse a selector string.

        Args:
            value: Selector such as "boxart" or "box+snap"

        Returns:
            Matching ArtTypeOption

        Raises:
            ValidationException: If the selector is unknown
        """
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(option.value for option in cls)
            raise ValidationException(f"Invalid art type: {value!r} (valid: {valid})", "art_type")

    def art_types(self) -> tuple[ArtType, Optional[ArtType]]:
        """Return the (primary, secondary) art types for this selector."""
        return _ART_TYPE_SELECTIONS[self]


_ART_TYPE_SELECTIONS = {
    ArtTypeOption.BOXART: (ArtType.BOXART, None),
    ArtTypeOption.SNAP: (ArtType.SNAP, None),
    ArtTypeOption.TITLE: (ArtType.TITLE, None),
    ArtTypeOption.BOX_AND_SNAP: (ArtType.BOXART, ArtType.SNAP),
    ArtTypeOption.BOX_AND_TITLE: (ArtType.BOXART, ArtType.TITLE),
}


@dataclass(frozen=True)
class PlatformRecord:
    """
    Static description of an emulated platform.

    Attributes:
        name: Platform id, as used by the thumbnail server
        extensions: Accepted ROM file extensions (without dot)
        aliases: Folder name fragments identifying the platform
        fallbacks: Platforms whose artwork is consulted when this one has no match
    """

    name: str
    extensions: frozenset[str]
    aliases: tuple[str, ...]
    fallbacks: tuple[str, ...] = ()

    def accepts(self, extension: str) -> bool:
        """Check whether a file extension belongs to this platform."""
        return extension in self.extensions

    def matches_folder(self, folder_name: str) -> bool:
        """Check whether any alias is contained in a folder name."""
        return any(alias in folder_name for alias in self.aliases)


class MatchKind(str, Enum):
    """How an artwork match was obtained."""

    EXACT = "exact"
    PARTIAL = "partial"
    AI = "ai"
    NONE = "none"


@dataclass(frozen=True)
class MatchOutcome:
    """Result of resolving one ROM file against one art type."""

    kind: MatchKind
    """Tier that produced the result"""

    url: Optional[str] = None
    """Resolved artwork URL (None when nothing matched)"""

    candidate: Optional[str] = None
    """Remote filename that won"""

    platform: Optional[str] = None
    """Platform whose listing supplied the match (may be a fallback)"""

    art_type: Optional[ArtType] = None
    """Art type that was resolved"""

    @property
    def matched(self) -> bool:
        """Whether an artwork URL was found."""
        return self.kind is not MatchKind.NONE

    @classmethod
    def miss(cls, platform: Optional[str] = None, art_type: Optional[ArtType] = None) -> "MatchOutcome":
        """Create a NONE outcome."""
        return cls(kind=MatchKind.NONE, platform=platform, art_type=art_type)


@dataclass
class RunStatistics:
    """
    Process-wide match counters for one resolution run.

    Counters only ever grow during a run and are safe to increment from
    worker threads.
    """

    exact: int = 0
    partial: int = 0
    ai: int = 0
    none: int = 0
    skipped: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False, compare=False)

    _COUNTERS = ("exact", "partial", "ai", "none", "skipped")

    def increment(self, counter: str, amount: int = 1) -> None:
        """
        Increment a counter.

        Args:
            counter: One of exact, partial, ai, none, skipped
            amount: Non-negative increment

        Raises:
            ValueError: If the counter is unknown or the amount negative
        """
        if counter not in self._COUNTERS:
            raise ValueError(f"Unknown counter: {counter}")
        if amount < 0:
            raise ValueError("Counters cannot decrease")
        with self._lock:
            setattr(self, counter, getattr(self, counter) + amount)

    def record(self, kind: MatchKind) -> None:
        """Increment the counter matching a match kind."""
        self.increment(kind.value)

    @property
    def matched(self) -> int:
        """Total number of successful matches."""
        return self.exact + self.partial + self.ai

    @property
    def resolved(self) -> int:
        """Total number of resolutions that reached a terminal state."""
        return self.matched + self.none

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary for serialization."""
        return {name: getattr(self, name) for name in self._COUNTERS}

    def summary(self) -> str:
        """Get a one-line summary of the counters."""
        return (
            f"{self.exact} exact, {self.partial} partial, {self.ai} AI, "
            f"{self.none} unmatched, {self.skipped} skipped"
        )
