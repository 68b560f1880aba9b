"""Tests for JSON export."""

import json
from pathlib import Path

from hashdeck.core.models import BasicContent, Card, ClozeContent
from hashdeck.output import JsonExporter, card_to_dict, load_cards_json


BASIC = Card("Biology", Path("bio.md"), (0, 1), BasicContent("What is DNA?", "Genetic material"))
CLOZE = Card("Biology", Path("bio.md"), (3, 3), ClozeContent("DNA is a helix", 9, 13))


class TestCardToDict:
    """Tests for card_to_dict."""

    def test_basic(self):
        data = card_to_dict(BASIC)
        assert data["hash"] == BASIC.hash.hex()
        assert data["family_hash"] is None
        assert data["deck"] == "Biology"
        assert data["file"] == "bio.md"
        assert data["range"] == [0, 1]
        assert data["type"] == "basic"
        assert data["question"] == "What is DNA?"
        assert data["answer"] == "Genetic material"

    def test_cloze(self):
        data = card_to_dict(CLOZE)
        assert data["type"] == "cloze"
        assert data["family_hash"] == CLOZE.family_hash.hex()
        assert data["text"] == "DNA is a helix"
        assert (data["start"], data["end"]) == (9, 13)
        assert data["deletion"] == "helix"
        assert "question" not in data


class TestJsonExporter:
    """Tests for JsonExporter."""

    def test_export_and_load(self, tmp_path):
        output = tmp_path / "out" / "cards.json"
        JsonExporter().export_cards([BASIC, CLOZE], str(output))
        records = load_cards_json(str(output))
        assert records == [card_to_dict(BASIC), card_to_dict(CLOZE)]
        assert [r["hash"] for r in records] == [BASIC.hash_hex, CLOZE.hash_hex]

    def test_compact(self, tmp_path):
        output = tmp_path / "cards.json"
        JsonExporter(pretty=False).export_cards([BASIC], str(output))
        text = output.read_text(encoding="utf-8")
        assert "\n" not in text
        assert json.loads(text)[0]["answer"] == "Genetic material"

    def test_non_ascii_kept(self, tmp_path):
        card = Card("d", Path("d.md"), (0, 1), BasicContent("Café?", "Oui"))
        output = tmp_path / "cards.json"
        JsonExporter().export_cards([card], str(output))
        assert "Café?" in output.read_text(encoding="utf-8")
