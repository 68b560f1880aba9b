"""Classification of individual deck file lines."""

from dataclasses import dataclass
from enum import Enum


class LineKind(Enum):
    """What a single line of a deck file means."""
    QUESTION = "question"     # Q: ...
    ANSWER = "answer"         # A: ...
    CLOZE = "cloze"           # C: ...
    SEPARATOR = "separator"   # ---
    TEXT = "text"             # anything else


PREFIXES = {
    "Q:": LineKind.QUESTION,
    "A:": LineKind.ANSWER,
    "C:": LineKind.CLOZE,
}


@dataclass(frozen=True)
class Line:
    """A classified line.

    For tagged lines ``body`` is the text after the tag, stripped. For
    ``TEXT`` lines it is the line exactly as written.
    """
    kind: LineKind
    body: str = ""


def classify(line: str) -> Line:
    """Classify a raw line. Pure and stateless."""
    kind = PREFIXES.get(line[:2])
    if kind is not None:
        return Line(kind, line[2:].strip())
    if line.strip() == "---":
        return Line(LineKind.SEPARATOR)
    return Line(LineKind.TEXT, line)
