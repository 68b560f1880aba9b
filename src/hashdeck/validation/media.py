"""Validation of media files referenced from cards.

Card text is markdown. Images (and audio, which uses the same ``![](...)``
syntax) are found by rendering the markdown and collecting ``<img>``
sources. Every local reference must resolve to a file inside the deck
directory.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

import markdown
from bs4 import BeautifulSoup

from ..core.exceptions import MediaError
from ..core.models import Card

logger = logging.getLogger(__name__)


@dataclass(frozen=True, order=True)
class MissingMedia:
    """A media reference that does not resolve to a file."""
    file_path: str
    card_file: Path
    card_lines: tuple[int, int]


def extract_media_paths(text: str) -> list[str]:
    """Extract all media paths from markdown text, in document order."""
    html = markdown.markdown(text)
    soup = BeautifulSoup(html, "html.parser")
    return [img["src"] for img in soup.find_all("img") if img.get("src")]


def is_external(path: str) -> bool:
    """True for references with a URL scheme, e.g. ``https://...``."""
    # A single-letter scheme is a Windows drive, not a URL.
    return len(urlparse(path).scheme) > 1


def resolve_media(path: str, base_dir: Path) -> Path:
    """Resolve a local media reference against the deck directory.

    Raises:
        FileNotFoundError: If the path is absolute, escapes ``base_dir``
            or does not name an existing file
    """
    if Path(path).is_absolute():
        raise FileNotFoundError(f"Absolute media paths are not allowed: {path}")

    root = base_dir.resolve()
    resolved = (root / path).resolve()
    try:
        resolved.relative_to(root)
    except ValueError:
        raise FileNotFoundError(f"Media path escapes deck directory: {path}") from None

    if not resolved.is_file():
        raise FileNotFoundError(f"Media file not found: {path}")
    return resolved


def validate_media_files(cards: list[Card], base_dir: Path) -> None:
    """Check that every local media reference in the cards exists.

    Args:
        cards: Cards to check
        base_dir: Deck directory that media paths are relative to

    Raises:
        MediaError: Listing every missing reference, sorted
    """
    base_dir = Path(base_dir)
    missing = set()

    for card in cards:
        for text in card.content.markdown_texts():
            for path in extract_media_paths(text):
                if is_external(path):
                    logger.debug(f"Skipping external media reference: {path}")
                    continue
                try:
                    resolve_media(path, base_dir)
                except FileNotFoundError as e:
                    logger.debug(str(e))
                    missing.add(MissingMedia(path, card.file_path, card.range))

    if not missing:
        return

    missing = sorted(missing)
    msg = "Missing media files referenced in cards:\n"
    for m in missing:
        msg += f"  - {m.file_path} (referenced in {m.card_file}:{m.card_lines[0]})\n"
    raise MediaError(msg, missing=missing)
