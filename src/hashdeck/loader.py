"""Loading a whole deck directory.

Every deck file under the root is parsed independently; the results are
merged, sorted by content hash and deduplicated. Any error aborts the
whole load, so callers either get every card or none.
"""

import logging
from collections import defaultdict
from pathlib import Path
from typing import Union

from .core.exceptions import DeckIOError
from .core.models import Card, CardType
from .parsers import DeckMetadata, DeckParser, extract_frontmatter

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = "md"

# Deck name used when a file's stem cannot be represented as text
FALLBACK_DECK_NAME = "None"


def resolve_deck_name(metadata: DeckMetadata, path: Path) -> str:
    """Pick the deck name for a file: frontmatter name, else file stem."""
    if metadata.name:
        return metadata.name
    stem = path.stem
    try:
        stem.encode("utf-8")
    except UnicodeEncodeError:
        return FALLBACK_DECK_NAME
    return stem


def find_deck_files(root: Path, extension: str = DEFAULT_EXTENSION) -> list[Path]:
    """Recursively list deck files under ``root`` in sorted order."""
    suffix = f".{extension.lstrip('.')}"
    try:
        return sorted(p for p in root.rglob("*") if p.suffix == suffix and p.is_file())
    except OSError as e:
        raise DeckIOError(f"Failed to walk directory {root}: {e}", file_path=root) from e


def load_deck_file(path: Union[str, Path]) -> list[Card]:
    """Read and parse a single deck file.

    Raises:
        DeckIOError: If the file cannot be read as UTF-8
        ConfigError: If its frontmatter is invalid
        ParserError: If its body is invalid
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DeckIOError(f"Failed to read deck file {path}: {e}", file_path=path) from e

    metadata, content = extract_frontmatter(text)
    deck_name = resolve_deck_name(metadata, path)
    parser = DeckParser(deck_name, path, line_offset=metadata.line_offset)
    cards = parser.parse(content)

    logger.debug(f"Parsed {len(cards)} cards from {path} (deck '{deck_name}')")
    return cards


def parse_deck(root: Union[str, Path], extension: str = DEFAULT_EXTENSION) -> list[Card]:
    """Parse every deck file under a directory.

    Args:
        root: Directory to walk recursively
        extension: File extension of deck files, without the dot

    Returns:
        All cards, sorted by hash, one card per distinct hash. When the
        same card appears in several files, which copy survives is
        determined by the sort, not by file order.

    Raises:
        DeckIOError, ConfigError, ParserError: On the first failure
    """
    root = Path(root)
    if not root.is_dir():
        raise DeckIOError(f"Deck directory not found: {root}", file_path=root)

    all_cards = []
    files = find_deck_files(root, extension)
    for path in files:
        all_cards.extend(load_deck_file(path))

    # Stable sort, so equal hashes keep file order and the result is
    # deterministic for a given set of files.
    all_cards.sort(key=lambda c: c.hash)

    unique = []
    for card in all_cards:
        if not unique or unique[-1].hash != card.hash:
            unique.append(card)

    logger.info(f"Loaded {len(unique)} cards from {len(files)} files in {root}")
    return unique


def summarize(cards: list[Card]) -> dict[str, dict[str, int]]:
    """Count basic and cloze cards per deck."""
    stats = defaultdict(lambda: {"basic": 0, "cloze": 0, "total": 0})
    for card in cards:
        entry = stats[card.deck_name]
        entry["basic" if card.card_type == CardType.BASIC else "cloze"] += 1
        entry["total"] += 1
    return dict(sorted(stats.items()))
