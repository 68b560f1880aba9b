"""
hashdeck - Content-addressed flashcards from plain-text deck files.

Parses Q:/A: and C: (cloze) cards out of markdown files and identifies
every card by the hash of its content.
"""

__version__ = "0.1.0"

from .core.models import Card, BasicContent, ClozeContent, CardType
from .loader import parse_deck
from .parsers import DeckParser
from .session import SessionCache

__all__ = [
    "Card",
    "BasicContent",
    "ClozeContent",
    "CardType",
    "DeckParser",
    "parse_deck",
    "SessionCache",
]
