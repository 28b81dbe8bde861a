"""Tests for station name normalization."""

from cercanias_timetable.matching.normalizers import (
    get_meaningful_tokens,
    normalize_text,
    remove_accents,
)


class TestRemoveAccents:
    """Tests for accent removal."""

    def test_remove_accents_basic(self) -> None:
        """Test basic accent removal."""
        assert remove_accents("Bríncola") == "Brincola"
        assert remove_accents("Zumárraga") == "Zumarraga"
        assert remove_accents("Lezo-Rentería") == "Lezo-Renteria"

    def test_remove_accents_no_change(self) -> None:
        """Test that text without accents is unchanged."""
        assert remove_accents("Tolosa") == "Tolosa"

    def test_remove_accents_empty(self) -> None:
        """Test empty string."""
        assert remove_accents("") == ""


class TestNormalizeText:
    """Tests for full text normalization."""

    def test_normalize_lowercase_and_accents(self) -> None:
        """Test case folding and accent removal."""
        assert normalize_text("IRÚN") == "irun"

    def test_normalize_hyphens_and_whitespace(self) -> None:
        """Hyphens become spaces and runs of whitespace collapse."""
        assert normalize_text("  Lezo-Rentería ") == "lezo renteria"
        assert normalize_text("Hernani   Centro") == "hernani centro"

    def test_normalize_basque_aliases(self) -> None:
        """Basque spellings map to the table spelling."""
        assert normalize_text("Donostia") == "san sebastian"
        assert normalize_text("Brinkola") == "brincola"
        assert normalize_text("Lezo-Errenteria") == "lezo renteria"

    def test_alias_only_replaces_whole_words(self) -> None:
        """Aliases don't rewrite parts of longer words."""
        assert normalize_text("Donostiarra") == "donostiarra"


class TestMeaningfulTokens:
    """Tests for token extraction."""

    def test_generic_words_removed(self) -> None:
        """Generic station words are dropped."""
        assert get_meaningful_tokens("Estación de Hernani-Centro") == {"hernani", "centro"}

    def test_single_letters_removed(self) -> None:
        """Single-character tokens carry no signal."""
        assert get_meaningful_tokens("Gros a") == {"gros"}
