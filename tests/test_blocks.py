"""Tests for the block state machine transition table."""

import pytest
from hashdeck.core.exceptions import ParserError
from hashdeck.parsers.blocks import (
    TRANSITIONS,
    BasicBlock,
    ClozeBlock,
    Initial,
    ReadingAnswer,
    ReadingCloze,
    ReadingQuestion,
    finalize,
    transition,
)
from hashdeck.parsers.lines import Line, LineKind


Q = Line(LineKind.QUESTION, "new q")
A = Line(LineKind.ANSWER, "new a")
C = Line(LineKind.CLOZE, "new c")
SEP = Line(LineKind.SEPARATOR)
TEXT = Line(LineKind.TEXT, " more ")

INITIAL = Initial()
QUESTION = ReadingQuestion("q", 1)
ANSWER = ReadingAnswer("q", "a", 1)
CLOZE = ReadingCloze("c", 1)


class TestTransitionTable:
    """Every (state, line kind) pair of the table."""

    def test_table_is_complete(self):
        """Test that every combination has an entry."""
        for state in (Initial, ReadingQuestion, ReadingAnswer, ReadingCloze):
            for kind in LineKind:
                assert (state, kind) in TRANSITIONS

    @pytest.mark.parametrize("state,line,expected_state,expected_block", [
        (INITIAL, Q, ReadingQuestion("new q", 5), None),
        (INITIAL, C, ReadingCloze("new c", 5), None),
        (INITIAL, SEP, INITIAL, None),
        (INITIAL, TEXT, INITIAL, None),
        (QUESTION, A, ReadingAnswer("q", "new a", 1), None),
        (QUESTION, TEXT, ReadingQuestion("q\n more ", 1), None),
        (ANSWER, Q, ReadingQuestion("new q", 5), BasicBlock("q", "a", 1, 5)),
        (ANSWER, C, ReadingCloze("new c", 5), BasicBlock("q", "a", 1, 5)),
        (ANSWER, SEP, INITIAL, BasicBlock("q", "a", 1, 5)),
        (ANSWER, TEXT, ReadingAnswer("q", "a\n more ", 1), None),
        (CLOZE, Q, ReadingQuestion("new q", 5), ClozeBlock("c", 1, 5)),
        (CLOZE, C, ReadingCloze("new c", 5), ClozeBlock("c", 1, 5)),
        (CLOZE, SEP, INITIAL, ClozeBlock("c", 1, 5)),
        (CLOZE, TEXT, ReadingCloze("c\n more ", 1), None),
    ])
    def test_valid_transitions(self, state, line, expected_state, expected_block):
        """Test the transitions that succeed."""
        new_state, block = transition(state, line, 5)
        assert new_state == expected_state
        assert block == expected_block

    @pytest.mark.parametrize("state,line,message", [
        (INITIAL, A, "Found answer tag without a question."),
        (QUESTION, Q, "New question without answer."),
        (QUESTION, C, "Found cloze tag while reading a question."),
        (QUESTION, SEP, "Found flashcard separator while reading a question."),
        (ANSWER, A, "Found answer tag while reading an answer."),
        (CLOZE, A, "Found answer tag while reading a cloze card."),
    ])
    def test_invalid_transitions(self, state, line, message):
        """Test the transitions that are errors, located 1-indexed."""
        with pytest.raises(ParserError) as exc_info:
            transition(state, line, 5)
        assert exc_info.value.message == message
        assert exc_info.value.line_number == 6


class TestFinalize:
    """Tests for end-of-input handling."""

    def test_initial(self):
        assert finalize(INITIAL, 3) is None

    def test_question_is_error(self):
        """Test that an unanswered question at EOF is an error."""
        with pytest.raises(ParserError) as exc_info:
            finalize(QUESTION, 3)
        assert exc_info.value.message == "File ended while reading a question without answer."
        assert exc_info.value.line_number == 4

    def test_answer(self):
        assert finalize(ANSWER, 3) == BasicBlock("q", "a", 1, 3)

    def test_cloze(self):
        assert finalize(CLOZE, 3) == ClozeBlock("c", 1, 3)
