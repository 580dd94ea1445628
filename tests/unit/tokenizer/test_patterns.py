"""Tests for the ordered Fountain pattern table."""

import pytest

from screenlex.tokenizer.patterns import (
    BLOCK_RULES,
    INLINE_RULES,
    match_block,
    match_inline,
)
from screenlex.tokenizer.tokens import TokenType


class TestRuleOrder:
    """The order of the rule tuples is part of the grammar."""

    def test_inline_order(self):
        assert [rule.token_type for rule in INLINE_RULES] == [
            TokenType.NOTE,
            TokenType.BOLD_ITALIC,
            TokenType.BOLD,
            TokenType.ITALIC,
            TokenType.UNDERLINE,
        ]

    def test_block_order(self):
        assert [rule.token_type for rule in BLOCK_RULES] == [
            TokenType.SCENE_HEADING,
            TokenType.CHARACTER,
            TokenType.TRANSITION,
            TokenType.CENTERED,
            TokenType.SECTION,
            TokenType.SYNOPSIS,
            TokenType.PAGE_BREAK,
            TokenType.PARENTHETICAL,
        ]


class TestMatchBlock:
    """Whole-line block rules."""

    @pytest.mark.parametrize(
        "line",
        [
            "INT. HOUSE - DAY",
            "EXT. STREET - NIGHT",
            "EST. CITY SKYLINE",
            "I/E CAR - MOVING",
            "int. kitchen",
            "INT HOUSE",
            ".FLASHBACK",
            "**INT. HOUSE",
            "_EXT. PARK",
        ],
    )
    def test_scene_heading(self, line):
        assert match_block(line) is TokenType.SCENE_HEADING

    @pytest.mark.parametrize(
        "line",
        ["interior design", "...and then", "INTERIOR", "EXTRA", ".", "INT.", "INT "],
    )
    def test_not_scene_heading(self, line):
        assert match_block(line) is not TokenType.SCENE_HEADING

    @pytest.mark.parametrize("line", ["JOHN", "  MARY", "R2D2", "BRICK^", "@McCLANE"])
    def test_character(self, line):
        assert match_block(line) is TokenType.CHARACTER

    @pytest.mark.parametrize("line", ["John", "A", "JOHN (V.O.)", "JOHN:"])
    def test_not_character(self, line):
        assert match_block(line) is not TokenType.CHARACTER

    @pytest.mark.parametrize("line", ["> TRANSITION TO:", "CUT TO:", ">FADE OUT."])
    def test_transition(self, line):
        assert match_block(line) is TokenType.TRANSITION

    @pytest.mark.parametrize("line", [">THE END<", "> THE END <"])
    def test_centered(self, line):
        assert match_block(line) is TokenType.CENTERED

    def test_centered_rejects_inner_brackets(self):
        assert match_block(">a > b<") is None

    @pytest.mark.parametrize("line", ["# Act One", "### Sequence", "#"])
    def test_section(self, line):
        assert match_block(line) is TokenType.SECTION

    @pytest.mark.parametrize("line", ["= A short summary", "="])
    def test_synopsis(self, line):
        assert match_block(line) is TokenType.SYNOPSIS

    @pytest.mark.parametrize("line", ["===", "======"])
    def test_page_break(self, line):
        assert match_block(line) is TokenType.PAGE_BREAK

    def test_two_equals_is_nothing(self):
        assert match_block("==") is None

    @pytest.mark.parametrize("line", ["(beat)", "  (whispering)  ", "()"])
    def test_parenthetical(self, line):
        assert match_block(line) is TokenType.PARENTHETICAL

    def test_plain_text_matches_nothing(self):
        assert match_block("She walks in.") is None


class TestMatchInline:
    """Inline rules anchored at a position."""

    def test_note(self):
        assert match_inline("x [[a note]] y", 2) == (TokenType.NOTE, 12)

    def test_note_is_lazy(self):
        assert match_inline("[[one]] and [[two]]", 0) == (TokenType.NOTE, 7)

    def test_bold_italic_before_bold(self):
        assert match_inline("***loud***", 0) == (TokenType.BOLD_ITALIC, 10)

    def test_bold_before_italic(self):
        assert match_inline("**loud**", 0) == (TokenType.BOLD, 8)

    def test_italic(self):
        assert match_inline("*soft* rest", 0) == (TokenType.ITALIC, 6)

    def test_underline(self):
        assert match_inline("_under_ rest", 0) == (TokenType.UNDERLINE, 7)

    @pytest.mark.parametrize("text", ["**", "*", "__", "_open", "*open", "[[open"])
    def test_unterminated_spans_do_not_match(self, text):
        assert match_inline(text, 0) is None

    def test_match_is_anchored(self):
        assert match_inline("a *b*", 0) is None

    @pytest.mark.parametrize("text", ["*a /* b*", "**a /** b**", "_a /* b_"])
    def test_emphasis_stops_at_boneyard_opener(self, text):
        assert match_inline(text, 0) is None

    def test_emphasis_allows_slash(self):
        assert match_inline("*and/or*", 0) == (TokenType.ITALIC, 8)
