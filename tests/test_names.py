"""Tests for ROM name normalization."""

import pytest

from utils.names import (
    remove_extension,
    sanitize_for_remote_path,
    sanitize_local_name,
    search_terms,
    strip_annotations,
    strip_dx,
    strip_subtitle,
)


class TestSanitization:
    """Tests for remote and local name sanitization."""

    @pytest.mark.parametrize("char", list('&*/:`<>?|"'))
    def test_illegal_characters_replaced(self, char):
        """Test that each character the server cannot store becomes an underscore."""
        assert sanitize_for_remote_path(f"A{char}B") == "A_B"

    def test_legal_characters_kept(self):
        """Test that punctuation the server accepts is untouched."""
        name = "Kirby's Dream Land 2 (USA, Europe) [!] - Rev. 1"
        assert sanitize_for_remote_path(name) == name

    def test_every_occurrence_replaced(self):
        """Test that all illegal characters are replaced, not just the first."""
        assert sanitize_for_remote_path("Ys I & II: Eternal") == "Ys I _ II_ Eternal"

    def test_local_name_drops_ordinal_prefix(self):
        """Test that a leading "N) " prefix is removed."""
        assert sanitize_local_name("12) Kirby's Dream Land") == "Kirby's Dream Land"

    def test_local_name_prefix_then_sanitize(self):
        """Test that the prefix is removed before characters are replaced."""
        assert sanitize_local_name("3) Ys: Book I") == "Ys_ Book I"

    def test_local_name_prefix_only_at_start(self):
        """Test that an ordinal in the middle of a name is kept."""
        assert sanitize_local_name("Area 51) Remix") == "Area 51) Remix"


class TestStripping:
    """Tests for annotation, DX and subtitle stripping."""

    def test_strip_annotations(self):
        """Test that parenthesized and bracketed groups are removed."""
        assert strip_annotations("Tetris (World) (Rev 1) [!]") == "Tetris"

    def test_strip_annotations_is_lazy(self):
        """Test that text between two groups survives."""
        assert strip_annotations("Game (USA) Deluxe (Rev 1)") == "Game  Deluxe"

    def test_strip_annotations_without_groups(self):
        """Test that names without annotations are only trimmed."""
        assert strip_annotations("  Tetris  ") == "Tetris"

    def test_strip_dx(self):
        """Test that the DX token is removed."""
        assert strip_dx("Tetris DX") == "Tetris"

    def test_strip_dx_without_token(self):
        """Test that names without DX are unchanged."""
        assert strip_dx("Tetris") == "Tetris"

    def test_strip_subtitle(self):
        """Test that only the text before the first separator is kept."""
        assert strip_subtitle("Zelda - Link's Awakening - DX") == "Zelda"

    def test_strip_subtitle_needs_spaces(self):
        """Test that a hyphen without surrounding spaces is not a separator."""
        assert strip_subtitle("Spider-Man") == "Spider-Man"


class TestSearchTerms:
    """Tests for the progressive search term sequence."""

    def test_terms_in_order(self):
        """Test stripped, then DX-less, then subtitle-less terms."""
        terms = search_terms("Legend of Zelda, The - Link's Awakening DX (USA, Europe) (Rev 2)")

        assert terms == [
            "Legend of Zelda, The - Link's Awakening DX",
            "Legend of Zelda, The - Link's Awakening",
            "Legend of Zelda, The",
        ]

    def test_terms_repeat_when_nothing_to_strip(self):
        """Test that plain names yield the same term three times."""
        assert search_terms("Super Mario World") == ["Super Mario World"] * 3


class TestRemoveExtension:
    """Tests for remove_extension."""

    def test_removes_last_extension(self):
        assert remove_extension("Game.v1.1.gba") == "Game.v1.1"

    def test_no_extension(self):
        assert remove_extension("Game") == "Game"

    def test_hidden_file(self):
        assert remove_extension(".hidden") == ".hidden"
