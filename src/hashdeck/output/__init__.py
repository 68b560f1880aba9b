"""Output formats for parsed cards."""

from .json_export import JsonExporter, card_to_dict, load_cards_json

__all__ = ["JsonExporter", "card_to_dict", "load_cards_json"]
