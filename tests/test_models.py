"""Tests for domain models."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from core.exceptions import ValidationException
from core.models import ArtType, ArtTypeOption, MatchKind, MatchOutcome, RunStatistics


class TestArtTypeOption:
    """Tests for art type selectors."""

    @pytest.mark.parametrize("value,expected", [
        ("boxart", (ArtType.BOXART, None)),
        ("snap", (ArtType.SNAP, None)),
        ("title", (ArtType.TITLE, None)),
        ("box+snap", (ArtType.BOXART, ArtType.SNAP)),
        ("box+title", (ArtType.BOXART, ArtType.TITLE)),
    ])
    def test_art_types(self, value, expected):
        assert ArtTypeOption.parse(value).art_types() == expected

    def test_parse_normalizes_case_and_whitespace(self):
        assert ArtTypeOption.parse("  BoxArt ") is ArtTypeOption.BOXART

    def test_parse_invalid_raises(self):
        """Test that unknown selectors raise a validation error naming the field."""
        with pytest.raises(ValidationException) as exc_info:
            ArtTypeOption.parse("boxarts")

        assert exc_info.value.field == "art_type"
        assert "box+snap" in str(exc_info.value)

    def test_art_type_values_are_server_folders(self):
        assert ArtType.BOXART.value == "Named_Boxarts"
        assert ArtType.SNAP.value == "Named_Snaps"
        assert ArtType.TITLE.value == "Named_Titles"


class TestMatchOutcome:
    """Tests for MatchOutcome."""

    def test_miss(self):
        outcome = MatchOutcome.miss("Nintendo - Game Boy", ArtType.SNAP)

        assert outcome.kind is MatchKind.NONE
        assert outcome.url is None
        assert not outcome.matched
        assert outcome.art_type is ArtType.SNAP

    @pytest.mark.parametrize("kind", [MatchKind.EXACT, MatchKind.PARTIAL, MatchKind.AI])
    def test_matched_kinds(self, kind):
        assert MatchOutcome(kind=kind, url="https://thumbnails.test/a.png").matched


class TestRunStatistics:
    """Tests for RunStatistics counters."""

    def test_starts_at_zero(self):
        stats = RunStatistics()
        assert stats.to_dict() == {"exact": 0, "partial": 0, "ai": 0, "none": 0, "skipped": 0}

    def test_record_kinds(self):
        stats = RunStatistics()
        stats.record(MatchKind.EXACT)
        stats.record(MatchKind.PARTIAL)
        stats.record(MatchKind.PARTIAL)
        stats.record(MatchKind.AI)
        stats.record(MatchKind.NONE)

        assert stats.exact == 1
        assert stats.partial == 2
        assert stats.ai == 1
        assert stats.none == 1
        assert stats.matched == 4
        assert stats.resolved == 5

    def test_increment_by_amount(self):
        stats = RunStatistics()
        stats.increment("skipped", 3)
        assert stats.skipped == 3

    def test_unknown_counter_rejected(self):
        with pytest.raises(ValueError, match="Unknown counter"):
            RunStatistics().increment("misses")

    def test_negative_amount_rejected(self):
        """Test that counters never decrease."""
        stats = RunStatistics(exact=2)
        with pytest.raises(ValueError):
            stats.increment("exact", -1)
        assert stats.exact == 2

    def test_summary(self):
        stats = RunStatistics(exact=3, partial=2, ai=1, none=4, skipped=5)
        assert stats.summary() == "3 exact, 2 partial, 1 AI, 4 unmatched, 5 skipped"

    def test_concurrent_increments(self):
        """Test that increments from worker threads are not lost."""
        stats = RunStatistics()

        with ThreadPoolExecutor(max_workers=8) as executor:
            for _ in range(1000):
                executor.submit(stats.record, MatchKind.EXACT)

        assert stats.exact == 1000
