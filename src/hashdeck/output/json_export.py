"""JSON export for inspecting parsed decks."""

import json
import logging
from pathlib import Path

from ..core.models import BasicContent, Card

logger = logging.getLogger(__name__)


def card_to_dict(card: Card) -> dict:
    """Flatten a card into JSON-friendly values."""
    family = card.family_hash
    data = {
        "hash": card.hash_hex,
        "family_hash": family.hex() if family is not None else None,
        "deck": card.deck_name,
        "file": str(card.file_path),
        "range": list(card.range),
        "type": card.card_type.value,
    }
    content = card.content
    if isinstance(content, BasicContent):
        data["question"] = content.question
        data["answer"] = content.answer
    else:
        data["text"] = content.text
        data["start"] = content.start
        data["end"] = content.end
        data["deletion"] = content.deleted_text
    return data


class JsonExporter:
    """Export cards to JSON format.

    Useful for:
    - Checking how a deck file was parsed
    - Feeding cards to tools that key on the content hash
    """

    def __init__(self, pretty: bool = True):
        self.pretty = pretty

    def export_cards(self, cards: list[Card], output_path: str) -> None:
        """Export cards to JSON file."""
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)

        data = [card_to_dict(card) for card in cards]

        self._write_json(data, output_path)
        logger.info(f"Exported {len(cards)} cards to {output_path}")

    def _write_json(self, data: list, output_path: str) -> None:
        """Write JSON data to file."""
        with open(output_path, 'w', encoding='utf-8') as f:
            if self.pretty:
                json.dump(data, f, indent=2, ensure_ascii=False)
            else:
                json.dump(data, f, ensure_ascii=False)


def load_cards_json(json_path: str) -> list[dict]:
    """Load exported card records from a JSON file."""
    with open(json_path, encoding='utf-8') as f:
        return json.load(f)
