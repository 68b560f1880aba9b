"""Cloze deletion tokenizer.

Turns the raw text of a ``C:`` block into clean text plus a list of
deletion spans. Deletions are marked with ``||...||``. Delimiters that
appear inside code or math are left alone, so ``||$a || b$||`` is a single
deletion containing a piece of math.

At every position the alternatives below are tried in this order, and the
first one that matches wins:

1. deletion      ``||...||`` (contents may hold any of 2-6, never another deletion)
2. fenced code   a run of N backticks, a line break, ... a line break, N backticks
3. block math    ``$$...$$``
4. inline math   ``$...$``
5. inline code   a backtick-delimited span on a single line
6. plain text    anything without ``$``, a backtick or ``|``

A backslash in front of ``$$``, ``$``, a backtick or ``||`` makes plain
text of it. When nothing matches (an unbalanced delimiter), that single
character is dropped from the clean text and scanning resumes after it.

Spans are inclusive offsets into the UTF-8 encoding of the clean text.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..core.exceptions import ParserError

logger = logging.getLogger(__name__)

DELETION_MARK = "||"
PLAIN_STOP = "$`|"
PLAIN_ESCAPES = ("$$", "$", "`", "||")

NO_DELETIONS = "Cloze card must contain at least one cloze deletion."
EMPTY_DELETION = "Cloze deletion must not be empty."


@dataclass(frozen=True)
class Token:
    """A slice of the cloze source, with markers already removed."""
    text: str
    is_deletion: bool = False


@dataclass
class ClozeParse:
    """Result of tokenizing one cloze passage."""
    text: str
    deletions: list[tuple[int, int]] = field(default_factory=list)


class ClozeScanner:
    """Recursive-descent scanner over a single cloze passage."""

    def __init__(self, source: str):
        self.source = source

    def tokens(self) -> list[Token]:
        """Split the whole source into tokens."""
        src = self.source
        tokens = []
        pos = 0
        while pos < len(src):
            deletion = self._deletion(pos)
            if deletion is not None:
                end, inner = deletion
                tokens.append(Token(inner, is_deletion=True))
                pos = end
                continue

            end = self._markup(pos)
            if end is None:
                logger.debug(f"Skipping unmatched delimiter {src[pos]!r} at offset {pos}")
                pos += 1
                continue
            tokens.append(Token(src[pos:end]))
            pos = end
        return tokens

    def _deletion(self, pos: int) -> Optional[tuple[int, str]]:
        """Match ``||...||``. Returns (end, inner text)."""
        if not self.source.startswith(DELETION_MARK, pos):
            return None
        inner_start = pos + len(DELETION_MARK)
        i = inner_start
        while True:
            end = self._markup(i)
            if end is None:
                break
            i = end
        if not self.source.startswith(DELETION_MARK, i):
            return None
        return i + len(DELETION_MARK), self.source[inner_start:i]

    def _markup(self, pos: int) -> Optional[int]:
        """Match any non-deletion construct, in priority order."""
        for rule in (
            self._fenced_code,
            self._block_math,
            self._inline_math,
            self._inline_code,
            self._plain,
        ):
            end = rule(pos)
            if end is not None:
                return end
        return None

    def _line_ending(self, pos: int) -> Optional[int]:
        if self.source.startswith("\r\n", pos):
            return pos + 2
        if self.source.startswith("\n", pos):
            return pos + 1
        return None

    def _fenced_code(self, pos: int) -> Optional[int]:
        src = self.source
        width = 0
        while pos + width < len(src) and src[pos + width] == "`":
            width += 1
        if width == 0:
            return None
        fence = "`" * width

        body_start = self._line_ending(pos + width)
        if body_start is None:
            return None

        # The closing fence follows a line break inside the body and is
        # exactly as long as the opening one.
        candidate = src.find(fence, body_start)
        while candidate != -1:
            at_line_start = candidate > body_start and src[candidate - 1] == "\n"
            after = candidate + width
            too_long = after < len(src) and src[after] == "`"
            if at_line_start and not too_long:
                end = self._line_ending(after)
                return end if end is not None else after
            candidate = src.find(fence, candidate + 1)
        return None

    def _math(self, pos: int, delimiter: str) -> Optional[int]:
        """Match math fenced by ``delimiter``; backslash escapes the delimiter."""
        src = self.source
        if not src.startswith(delimiter, pos):
            return None
        body_start = pos + len(delimiter)
        i = body_start
        while i < len(src):
            if src[i] == "\\" and src.startswith(delimiter, i + 1):
                i += 1 + len(delimiter)
            elif src[i] == "$":
                break
            else:
                i += 1
        if i == body_start or not src.startswith(delimiter, i):
            return None
        return i + len(delimiter)

    def _block_math(self, pos: int) -> Optional[int]:
        return self._math(pos, "$$")

    def _inline_math(self, pos: int) -> Optional[int]:
        return self._math(pos, "$")

    def _inline_code(self, pos: int) -> Optional[int]:
        src = self.source
        if not src.startswith("`", pos):
            return None
        i = pos + 1
        while i < len(src) and src[i] not in "`\n\r":
            i += 1
        if i < len(src) and src[i] == "`":
            return i + 1
        return None

    def _plain(self, pos: int) -> Optional[int]:
        src = self.source
        i = pos
        while i < len(src):
            char = src[i]
            if char == "\\":
                escaped = next(
                    (esc for esc in PLAIN_ESCAPES if src.startswith(esc, i + 1)), None
                )
                i += 1 + len(escaped) if escaped else 1
            elif char in PLAIN_STOP:
                break
            else:
                i += 1
        return i if i > pos else None


def tokenize_cloze(body: str) -> ClozeParse:
    """Extract clean text and deletion spans from a cloze passage.

    Args:
        body: Raw passage text, lines already joined with ``\\n``

    Returns:
        ClozeParse with the marker-free text and the byte span of every
        deletion, in order of appearance

    Raises:
        ParserError: If the passage has no deletions or an empty one. The
            error carries no location; the caller adds it.
    """
    tokens = ClozeScanner(body.strip()).tokens()

    parts = []
    size = 0
    deletions = []
    for token in tokens:
        length = len(token.text.encode("utf-8"))
        if token.is_deletion:
            if length == 0:
                raise ParserError(EMPTY_DELETION)
            deletions.append((size, size + length - 1))
        parts.append(token.text)
        size += length

    if not deletions:
        raise ParserError(NO_DELETIONS)

    return ClozeParse(text="".join(parts), deletions=deletions)
