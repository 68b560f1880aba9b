"""Block assembly state machine.

Classified lines are fed one at a time through an explicit transition
table. Each step yields the next state and, when a card block has just
been completed, the raw block itself. Raw blocks are turned into cards
by :class:`~hashdeck.parsers.deck.DeckParser`.

Every (state, line kind) pair appears in ``TRANSITIONS``: the value is
either a handler or the error message for that combination.
"""

from dataclasses import dataclass, replace
from typing import Callable, Optional, Union

from .lines import Line, LineKind
from ..core.exceptions import ParserError


# States


@dataclass(frozen=True)
class Initial:
    """Between cards."""
    pass


@dataclass(frozen=True)
class ReadingQuestion:
    question: str
    start_line: int


@dataclass(frozen=True)
class ReadingAnswer:
    question: str
    answer: str
    start_line: int


@dataclass(frozen=True)
class ReadingCloze:
    text: str
    start_line: int


State = Union[Initial, ReadingQuestion, ReadingAnswer, ReadingCloze]


# Completed blocks


@dataclass(frozen=True)
class BasicBlock:
    """Raw question and answer text of a finished basic card."""
    question: str
    answer: str
    start_line: int
    end_line: int


@dataclass(frozen=True)
class ClozeBlock:
    """Raw text of a finished cloze passage, markers still in place."""
    text: str
    start_line: int
    end_line: int


Block = Union[BasicBlock, ClozeBlock]
Step = tuple[State, Optional[Block]]


def _close(state: State, end_line: int) -> Optional[Block]:
    """Turn the block being read into a finished block."""
    if isinstance(state, ReadingAnswer):
        return BasicBlock(state.question, state.answer, state.start_line, end_line)
    if isinstance(state, ReadingCloze):
        return ClozeBlock(state.text, state.start_line, end_line)
    return None


def _start_question(state: State, line: Line, line_num: int) -> Step:
    return ReadingQuestion(line.body, line_num), _close(state, line_num)


def _start_cloze(state: State, line: Line, line_num: int) -> Step:
    return ReadingCloze(line.body, line_num), _close(state, line_num)


def _start_answer(state: ReadingQuestion, line: Line, line_num: int) -> Step:
    return ReadingAnswer(state.question, line.body, state.start_line), None


def _separate(state: State, line: Line, line_num: int) -> Step:
    return Initial(), _close(state, line_num)


def _ignore(state: State, line: Line, line_num: int) -> Step:
    return state, None


def _continue_question(state: ReadingQuestion, line: Line, line_num: int) -> Step:
    return replace(state, question=f"{state.question}\n{line.body}"), None


def _continue_answer(state: ReadingAnswer, line: Line, line_num: int) -> Step:
    return replace(state, answer=f"{state.answer}\n{line.body}"), None


def _continue_cloze(state: ReadingCloze, line: Line, line_num: int) -> Step:
    return replace(state, text=f"{state.text}\n{line.body}"), None


Handler = Callable[[State, Line, int], Step]

TRANSITIONS: dict[tuple[type, LineKind], Union[Handler, str]] = {
    (Initial, LineKind.QUESTION): _start_question,
    (Initial, LineKind.ANSWER): "Found answer tag without a question.",
    (Initial, LineKind.CLOZE): _start_cloze,
    (Initial, LineKind.SEPARATOR): _ignore,
    (Initial, LineKind.TEXT): _ignore,

    (ReadingQuestion, LineKind.QUESTION): "New question without answer.",
    (ReadingQuestion, LineKind.ANSWER): _start_answer,
    (ReadingQuestion, LineKind.CLOZE): "Found cloze tag while reading a question.",
    (ReadingQuestion, LineKind.SEPARATOR): "Found flashcard separator while reading a question.",
    (ReadingQuestion, LineKind.TEXT): _continue_question,

    (ReadingAnswer, LineKind.QUESTION): _start_question,
    (ReadingAnswer, LineKind.ANSWER): "Found answer tag while reading an answer.",
    (ReadingAnswer, LineKind.CLOZE): _start_cloze,
    (ReadingAnswer, LineKind.SEPARATOR): _separate,
    (ReadingAnswer, LineKind.TEXT): _continue_answer,

    (ReadingCloze, LineKind.QUESTION): _start_question,
    (ReadingCloze, LineKind.ANSWER): "Found answer tag while reading a cloze card.",
    (ReadingCloze, LineKind.CLOZE): _start_cloze,
    (ReadingCloze, LineKind.SEPARATOR): _separate,
    (ReadingCloze, LineKind.TEXT): _continue_cloze,
}

UNANSWERED_AT_EOF = "File ended while reading a question without answer."


def transition(state: State, line: Line, line_num: int) -> Step:
    """Advance the state machine by one line.

    Args:
        state: Current state
        line: The classified line
        line_num: 0-indexed number of the line

    Returns:
        Tuple of (next state, finished block or None)

    Raises:
        ParserError: If the line is not allowed in the current state. The
            error carries the line number but no file path.
    """
    action = TRANSITIONS[(type(state), line.kind)]
    if isinstance(action, str):
        raise ParserError(action, line_number=line_num + 1)
    return action(state, line, line_num)


def finalize(state: State, last_line: int) -> Optional[Block]:
    """Close whatever block is open when the input runs out."""
    if isinstance(state, ReadingQuestion):
        raise ParserError(UNANSWERED_AT_EOF, line_number=last_line + 1)
    return _close(state, last_line)
