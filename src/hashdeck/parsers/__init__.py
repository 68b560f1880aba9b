"""Deck file parsing: frontmatter, line classification, blocks and clozes."""

from .frontmatter import DeckMetadata, extract_frontmatter, split_lines
from .lines import Line, LineKind, classify
from .blocks import transition, finalize
from .cloze import ClozeParse, tokenize_cloze
from .deck import DeckParser

__all__ = [
    "DeckMetadata",
    "extract_frontmatter",
    "split_lines",
    "Line",
    "LineKind",
    "classify",
    "transition",
    "finalize",
    "ClozeParse",
    "tokenize_cloze",
    "DeckParser",
]
