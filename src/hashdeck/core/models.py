"""Core card models and content hashing.

Cards are immutable and content-addressed: the SHA-256 digest of a card's
content is its identity everywhere downstream (deduplication, caching,
scheduling). There are no separately allocated IDs.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Union
import hashlib

# A card hash is the raw 32-byte digest. Raw bytes sort and compare the
# same way everywhere, so they double as dict keys.
CardHash = bytes

BASIC_TAG = b"Basic"
CLOZE_TAG = b"Cloze"


def _usize(value: int) -> bytes:
    """Encode an offset as a fixed-width little-endian integer."""
    return value.to_bytes(8, "little")


class CardType(Enum):
    """Kinds of flashcard."""
    BASIC = "basic"
    CLOZE = "cloze"


@dataclass(frozen=True)
class BasicContent:
    """A question/answer card. Both sides are stripped on construction."""
    question: str
    answer: str

    def __post_init__(self):
        object.__setattr__(self, "question", self.question.strip())
        object.__setattr__(self, "answer", self.answer.strip())

    @property
    def card_type(self) -> CardType:
        return CardType.BASIC

    def digest(self) -> CardHash:
        hasher = hashlib.sha256()
        hasher.update(BASIC_TAG)
        hasher.update(self.question.encode("utf-8"))
        hasher.update(self.answer.encode("utf-8"))
        return hasher.digest()

    def family_digest(self) -> Optional[CardHash]:
        return None

    def markdown_texts(self) -> list[str]:
        return [self.question, self.answer]


@dataclass(frozen=True)
class ClozeContent:
    """One deletion carved out of a cloze passage.

    ``start`` and ``end`` are inclusive byte offsets into the UTF-8
    encoding of ``text``.
    """
    text: str
    start: int
    end: int

    def __post_init__(self):
        size = len(self.text.encode("utf-8"))
        if not 0 <= self.start <= self.end < size:
            raise ValueError(
                f"Invalid cloze span ({self.start}, {self.end}) for text of {size} bytes"
            )

    @property
    def card_type(self) -> CardType:
        return CardType.CLOZE

    @property
    def deleted_text(self) -> str:
        """The text hidden by this deletion."""
        return self.text.encode("utf-8")[self.start:self.end + 1].decode("utf-8")

    def digest(self) -> CardHash:
        hasher = hashlib.sha256()
        hasher.update(CLOZE_TAG)
        hasher.update(self.text.encode("utf-8"))
        hasher.update(_usize(self.start))
        hasher.update(_usize(self.end))
        return hasher.digest()

    def family_digest(self) -> Optional[CardHash]:
        """Shared by every deletion taken from the same passage."""
        hasher = hashlib.sha256()
        hasher.update(CLOZE_TAG)
        hasher.update(self.text.encode("utf-8"))
        return hasher.digest()

    def markdown_texts(self) -> list[str]:
        return [self.text]


CardContent = Union[BasicContent, ClozeContent]


@dataclass(frozen=True, eq=False)
class Card:
    """A single flashcard parsed from a deck file.

    Two cards are equal when their content hashes are equal, regardless of
    which file or lines they came from.
    """
    deck_name: str
    file_path: Path
    range: tuple[int, int]      # 0-indexed (start_line, end_line)
    content: CardContent

    hash: CardHash = field(init=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "file_path", Path(self.file_path))
        object.__setattr__(self, "range", tuple(self.range))
        object.__setattr__(self, "hash", self.content.digest())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.hash == other.hash

    def __hash__(self) -> int:
        return hash(self.hash)

    @property
    def hash_hex(self) -> str:
        return self.hash.hex()

    @property
    def family_hash(self) -> Optional[CardHash]:
        return self.content.family_digest()

    @property
    def card_type(self) -> CardType:
        return self.content.card_type
