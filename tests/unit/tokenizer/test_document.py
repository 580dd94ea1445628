"""Tests for document snapshots and line-by-line tokenization."""

import pytest

from screenlex.exceptions import ValidationError
from screenlex.tokenizer.document import (
    Document,
    split_lines,
    tokenize_document,
    tokenize_line,
)
from screenlex.tokenizer.tokens import INITIAL_STATE, Token, TokenizerState, TokenType


def typed_text(text: str) -> list[tuple[str, str]]:
    """Tokens of ``text`` as (type, text) pairs."""
    return [(token.type.value, token.text(text)) for token in tokenize_document(text)]


def assert_tiles(text: str, tokens: list[Token]) -> None:
    position = 0
    for token in tokens:
        assert token.start == position
        assert token.end > token.start
        position = token.end
    assert position == len(text)


class TestSplitLines:
    """Splitting text into lines with offsets."""

    def test_empty_text_has_one_line(self):
        lines = split_lines("")
        assert len(lines) == 1
        assert lines[0].text == ""
        assert lines[0].line_break == ""

    def test_trailing_newline_adds_empty_line(self):
        lines = split_lines("a\n")
        assert [(line.text, line.line_break) for line in lines] == [
            ("a", "\n"),
            ("", ""),
        ]

    def test_mixed_line_breaks(self):
        lines = split_lines("a\r\nb\rc\nd")
        assert [line.text for line in lines] == ["a", "b", "c", "d"]
        assert [line.line_break for line in lines] == ["\r\n", "\r", "\n", ""]
        assert [line.start for line in lines] == [0, 3, 5, 7]
        assert [line.number for line in lines] == [1, 2, 3, 4]

    def test_line_offsets(self):
        line = split_lines("abc\r\ndef")[0]
        assert line.end == 3
        assert line.next_start == 5
        assert line.is_blank is False


class TestDocument:
    """The immutable document snapshot."""

    def test_length_and_lines(self):
        document = Document("INT. A\n\nJOHN")
        assert len(document) == 12
        assert document.line_count == 3
        assert [line.text for line in document] == ["INT. A", "", "JOHN"]

    def test_line_lookup(self):
        document = Document("one\ntwo")
        assert document.line(2).text == "two"
        with pytest.raises(ValidationError):
            document.line(3)
        with pytest.raises(ValidationError):
            document.line(0)

    def test_line_at(self):
        document = Document("one\ntwo\n")
        assert document.line_at(0).number == 1
        assert document.line_at(3).number == 1
        assert document.line_at(4).number == 2
        assert document.line_at(8).number == 3

    def test_line_at_out_of_range(self):
        with pytest.raises(ValidationError) as exc_info:
            Document("abc").line_at(4)
        assert exc_info.value.details == {"offset": 4, "length": 3}

    def test_replace_returns_new_document(self):
        document = Document("INT. A\nx")
        changed = document.replace(0, 0, "EXT. B\n")
        assert changed.text == "EXT. B\nINT. A\nx"
        assert document.text == "INT. A\nx"

    def test_replace_rejects_reversed_range(self):
        with pytest.raises(ValidationError):
            Document("abc").replace(2, 1, "x")

    def test_slice(self):
        assert Document("INT. A").slice(0, 3) == "INT"


class TestTokenizeLine:
    """Tokenizing a single line."""

    def test_tokens_are_offset(self):
        result = tokenize_line("JOHN", offset=10)
        assert result.tokens == (Token(TokenType.CHARACTER, 10, 14),)
        assert result.state == TokenizerState(in_dialogue=True)

    def test_line_break_uses_state_after_line(self):
        result = tokenize_line("JOHN", line_break="\n")
        assert result.tokens == (
            Token(TokenType.CHARACTER, 0, 4),
            Token(TokenType.DIALOGUE, 4, 5),
        )

    def test_line_break_merges_with_same_type(self):
        result = tokenize_line("She runs.", line_break="\r\n")
        assert result.tokens == (Token(TokenType.ACTION, 0, 11),)

    def test_adjacent_fallback_pieces_merge(self):
        result = tokenize_line("and/or")
        assert result.tokens == (Token(TokenType.ACTION, 0, 6),)

    def test_blank_line_resets_dialogue(self):
        result = tokenize_line("", TokenizerState(in_dialogue=True), "\n")
        assert result.tokens == (Token(TokenType.ACTION, 0, 1),)
        assert result.state == INITIAL_STATE

    def test_blank_line_inside_boneyard(self):
        state = TokenizerState(in_boneyard=True)
        result = tokenize_line("", state, "\n")
        assert result.tokens == (Token(TokenType.BONEYARD, 0, 1),)
        assert result.state == state

    def test_last_empty_line_has_no_tokens(self):
        assert tokenize_line("").tokens == ()


class TestTokenizeDocument:
    """Whole-document tokenization."""

    def test_empty_document(self):
        assert tokenize_document("") == []

    def test_scene_example_tiles_document(self):
        text = "INT. HOUSE - DAY\nJohn enters.\n\nEXT. STREET - NIGHT\n"
        tokens = tokenize_document(text)
        assert_tiles(text, tokens)
        assert tokens == [
            Token(TokenType.SCENE_HEADING, 0, 16),
            Token(TokenType.ACTION, 16, 17),
            Token(TokenType.ACTION, 17, 30),
            Token(TokenType.ACTION, 30, 31),
            Token(TokenType.SCENE_HEADING, 31, 50),
            Token(TokenType.ACTION, 50, 51),
        ]

    def test_dialogue_inference(self):
        assert typed_text("JOHN\nHello there.\n\nShe leaves.") == [
            ("character", "JOHN"),
            ("dialogue", "\n"),
            ("dialogue", "Hello there.\n"),
            ("action", "\n"),
            ("action", "She leaves."),
        ]

    def test_whitespace_only_line_keeps_dialogue(self):
        assert typed_text("MARY\n  \nStill talking.") == [
            ("character", "MARY"),
            ("dialogue", "\n"),
            ("dialogue", "  \n"),
            ("dialogue", "Still talking."),
        ]

    def test_parenthetical_inside_dialogue(self):
        assert typed_text("SARAH\n(to herself)\nAnother Monday.") == [
            ("character", "SARAH"),
            ("dialogue", "\n"),
            ("parenthetical", "(to herself)"),
            ("dialogue", "\n"),
            ("dialogue", "Another Monday."),
        ]

    def test_boneyard_survives_blank_lines(self):
        text = "/*\n\nstill boneyard\n*/"
        tokens = tokenize_document(text)
        assert_tiles(text, tokens)
        assert {token.type for token in tokens} == {TokenType.BONEYARD}
        assert tokens[-1] == Token(TokenType.BONEYARD, 19, 21)

    def test_text_after_boneyard_closes(self):
        assert typed_text("/*\nhidden */\nJOHN") == [
            ("boneyard", "/*\n"),
            ("boneyard", "hidden */"),
            ("action", "\n"),
            ("character", "JOHN"),
        ]

    def test_accepts_document(self):
        document = Document("INT. A")
        assert tokenize_document(document) == [Token(TokenType.SCENE_HEADING, 0, 6)]

    def test_sample_script_tiles(self, sample_script):
        assert_tiles(sample_script, tokenize_document(sample_script))
