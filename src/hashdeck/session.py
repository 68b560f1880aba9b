"""In-memory cache of per-card session state, keyed by card hash.

Changes made during a review session are kept here and only written out
when the session ends, which keeps undo simple and lets a user abandon a
session without persisting anything.
"""

from typing import Any, Iterator

from .core.exceptions import CacheError
from .core.models import CardHash


class SessionCache:
    """Map from card hash to whatever the session tracks for that card."""

    def __init__(self):
        self._changes: dict[CardHash, Any] = {}

    def insert(self, card_hash: CardHash, value: Any) -> None:
        """Add a card. Fails if the card is already cached."""
        if card_hash in self._changes:
            raise CacheError(f"Card with hash {card_hash.hex()} already in cache")
        self._changes[card_hash] = value

    def get(self, card_hash: CardHash) -> Any:
        """Look up a card. Fails if the card is not cached."""
        try:
            return self._changes[card_hash]
        except KeyError:
            raise CacheError(f"Card with hash {card_hash.hex()} not found in cache") from None

    def update(self, card_hash: CardHash, value: Any) -> None:
        """Replace a card's value. Fails if the card is not cached."""
        if card_hash not in self._changes:
            raise CacheError(f"Card with hash {card_hash.hex()} not found in cache")
        self._changes[card_hash] = value

    def items(self) -> Iterator[tuple[CardHash, Any]]:
        return iter(self._changes.items())

    def __contains__(self, card_hash: CardHash) -> bool:
        return card_hash in self._changes

    def __len__(self) -> int:
        return len(self._changes)
