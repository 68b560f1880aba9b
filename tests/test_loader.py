"""Tests for loading deck directories."""

from pathlib import Path

import pytest
from hashdeck.core.exceptions import ConfigError, DeckIOError, ParserError
from hashdeck.core.models import CardType
from hashdeck.loader import (
    FALLBACK_DECK_NAME,
    find_deck_files,
    load_deck_file,
    parse_deck,
    resolve_deck_name,
    summarize,
)
from hashdeck.parsers import DeckMetadata


@pytest.fixture
def deck_dir(tmp_path):
    """A small deck directory with a nested file and a non-deck file."""
    (tmp_path / "biology.md").write_text(
        '---\nname = "Cell Biology"\n---\n\nQ: What is a cell?\nA: The basic unit of life.\n',
        encoding="utf-8",
    )
    nested = tmp_path / "chem"
    nested.mkdir()
    (nested / "acids.md").write_text(
        "C: ||HCl|| is a strong ||acid||.\n---\nQ: pH of water?\nA: 7\n",
        encoding="utf-8",
    )
    (tmp_path / "notes.txt").write_text("Q: ignored\nA: ignored\n", encoding="utf-8")
    return tmp_path


class TestParseDeck:
    """Tests for parse_deck."""

    def test_loads_all_files(self, deck_dir):
        cards = parse_deck(deck_dir)
        assert len(cards) == 4
        decks = {c.deck_name for c in cards}
        assert decks == {"Cell Biology", "acids"}

    def test_sorted_by_hash(self, deck_dir):
        cards = parse_deck(deck_dir)
        hashes = [c.hash for c in cards]
        assert hashes == sorted(hashes)

    def test_identical_cards_across_files(self, tmp_path):
        (tmp_path / "file1.md").write_text("Q: foo\nA: bar", encoding="utf-8")
        (tmp_path / "file2.md").write_text("Q: foo\nA: bar", encoding="utf-8")
        cards = parse_deck(tmp_path)
        assert len(cards) == 1

    def test_shared_frontmatter_name(self, tmp_path):
        (tmp_path / "ch1.md").write_text(
            '---\nname = "Cell Biology"\n---\n\nQ: What is a cell?\nA: The basic unit of life.',
            encoding="utf-8",
        )
        (tmp_path / "ch2.md").write_text(
            '---\nname = "Cell Biology"\n---\n\nQ: What is DNA?\nA: Genetic material.',
            encoding="utf-8",
        )
        cards = parse_deck(tmp_path)
        assert len(cards) == 2
        assert all(c.deck_name == "Cell Biology" for c in cards)

    def test_ranges_refer_to_original_file(self, deck_dir):
        """Test that line numbers count the frontmatter lines."""
        card = next(c for c in parse_deck(deck_dir) if c.deck_name == "Cell Biology")
        assert card.range == (4, 5)

    def test_custom_extension(self, tmp_path):
        (tmp_path / "a.cards").write_text("Q: a\nA: b", encoding="utf-8")
        (tmp_path / "b.md").write_text("Q: c\nA: d", encoding="utf-8")
        cards = parse_deck(tmp_path, extension="cards")
        assert len(cards) == 1
        assert cards[0].deck_name == "a"

    def test_empty_directory(self, tmp_path):
        assert parse_deck(tmp_path) == []

    def test_missing_directory(self, tmp_path):
        with pytest.raises(DeckIOError):
            parse_deck(tmp_path / "missing")

    def test_fails_fast_on_parse_error(self, deck_dir):
        (deck_dir / "zz_broken.md").write_text("Q: a\nA: b\nA: c", encoding="utf-8")
        with pytest.raises(ParserError) as exc_info:
            parse_deck(deck_dir)
        assert exc_info.value.file_path == deck_dir / "zz_broken.md"
        assert exc_info.value.line_number == 3

    def test_error_line_counts_frontmatter(self, tmp_path):
        (tmp_path / "deck.md").write_text('---\nname = "X"\n---\nA: orphan', encoding="utf-8")
        with pytest.raises(ParserError) as exc_info:
            parse_deck(tmp_path)
        assert exc_info.value.line_number == 4

    def test_bad_frontmatter(self, tmp_path):
        (tmp_path / "deck.md").write_text("---\nname = \"X\"\nQ: a\nA: b", encoding="utf-8")
        with pytest.raises(ConfigError):
            parse_deck(tmp_path)

    def test_invalid_utf8(self, tmp_path):
        (tmp_path / "deck.md").write_bytes(b"Q: \xff\xfe\nA: b")
        with pytest.raises(DeckIOError) as exc_info:
            parse_deck(tmp_path)
        assert exc_info.value.file_path == tmp_path / "deck.md"


class TestHelpers:
    """Tests for loader helpers."""

    def test_find_deck_files(self, deck_dir):
        files = find_deck_files(deck_dir)
        assert files == [deck_dir / "biology.md", deck_dir / "chem" / "acids.md"]

    def test_find_deck_files_dotted_extension(self, deck_dir):
        assert find_deck_files(deck_dir, ".txt") == [deck_dir / "notes.txt"]

    def test_load_deck_file(self, deck_dir):
        cards = load_deck_file(deck_dir / "chem" / "acids.md")
        assert [c.card_type for c in cards] == [CardType.CLOZE, CardType.CLOZE, CardType.BASIC]

    def test_resolve_name_from_frontmatter(self):
        assert resolve_deck_name(DeckMetadata(name="Named"), Path("x/file.md")) == "Named"

    def test_resolve_name_empty_falls_back(self):
        assert resolve_deck_name(DeckMetadata(name=""), Path("x/file.md")) == "file"

    def test_resolve_name_from_stem(self):
        assert resolve_deck_name(DeckMetadata(), Path("x/my deck.md")) == "my deck"

    def test_resolve_name_undecodable_stem(self):
        assert resolve_deck_name(DeckMetadata(), Path("x/bad\udcff.md")) == FALLBACK_DECK_NAME

    def test_summarize(self, deck_dir):
        stats = summarize(parse_deck(deck_dir))
        assert stats == {
            "Cell Biology": {"basic": 1, "cloze": 0, "total": 1},
            "acids": {"basic": 1, "cloze": 2, "total": 3},
        }
