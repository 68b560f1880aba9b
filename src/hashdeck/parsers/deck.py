"""Parser for the text of a single deck file."""

import logging
from pathlib import Path
from typing import Union

from .blocks import BasicBlock, Block, ClozeBlock, Initial, finalize, transition
from .cloze import tokenize_cloze
from .frontmatter import split_lines
from .lines import classify
from ..core.exceptions import ParserError
from ..core.models import BasicContent, Card, ClozeContent

logger = logging.getLogger(__name__)


class DeckParser:
    """Parse the cards out of one deck file's body.

    Args:
        deck_name: Deck the cards belong to
        file_path: File the text came from, used in cards and errors
        line_offset: Number of lines that precede ``text`` in the file
            (e.g. a frontmatter header). Card ranges and error locations
            are shifted by it so they point into the original file.
    """

    def __init__(self, deck_name: str, file_path: Union[str, Path], line_offset: int = 0):
        self.deck_name = deck_name
        self.file_path = Path(file_path)
        self.line_offset = line_offset

    def parse(self, text: str) -> list[Card]:
        """Parse all the cards in the given text.

        Cards are returned in the order they appear. A card whose content
        hash was already seen earlier in the text is dropped.

        Raises:
            ParserError: On any structural error, located by file and line
        """
        lines = split_lines(text)
        last_line = self.line_offset + max(len(lines) - 1, 0)

        cards = []
        state = Initial()
        try:
            for idx, raw in enumerate(lines):
                state, block = transition(state, classify(raw), self.line_offset + idx)
                if block is not None:
                    cards.extend(self._cards_from_block(block))
            block = finalize(state, last_line)
            if block is not None:
                cards.extend(self._cards_from_block(block))
        except ParserError as e:
            if e.file_path is None:
                e.file_path = self.file_path
            raise

        seen = set()
        unique = []
        for card in cards:
            if card.hash not in seen:
                seen.add(card.hash)
                unique.append(card)

        if len(unique) < len(cards):
            logger.debug(f"Dropped {len(cards) - len(unique)} duplicate cards in {self.file_path}")
        return unique

    def _cards_from_block(self, block: Block) -> list[Card]:
        card_range = (block.start_line, block.end_line)

        if isinstance(block, BasicBlock):
            content = BasicContent(block.question, block.answer)
            return [Card(self.deck_name, self.file_path, card_range, content)]

        if isinstance(block, ClozeBlock):
            try:
                parsed = tokenize_cloze(block.text)
            except ParserError as e:
                raise ParserError(
                    e.message, file_path=self.file_path, line_number=block.start_line + 1
                ) from e
            return [
                Card(
                    self.deck_name,
                    self.file_path,
                    card_range,
                    ClozeContent(parsed.text, start, end),
                )
                for start, end in parsed.deletions
            ]

        raise TypeError(f"Unknown block type: {type(block).__name__}")
