"""Token vocabulary and tokenizer state for Fountain classification."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class TokenType(str, Enum):
    """Closed set of structural token types a Fountain document splits into."""

    SCENE_HEADING = "scene_heading"
    CHARACTER = "character"
    DIALOGUE = "dialogue"
    PARENTHETICAL = "parenthetical"
    BOLD_ITALIC = "bold_italic"
    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"
    CENTERED = "centered"
    TRANSITION = "transition"
    SECTION = "section"
    SYNOPSIS = "synopsis"
    NOTE = "note"
    BONEYARD = "boneyard"
    PAGE_BREAK = "page_break"
    ACTION = "action"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class TokenizerState:
    """State carried from one line to the next.

    ``in_dialogue`` is set by a character cue and cleared by a blank line.
    ``in_boneyard`` is set by ``/*`` and cleared by ``*/``; it survives blank
    lines because a boneyard region may contain them.
    """

    in_dialogue: bool = False
    in_boneyard: bool = False

    def with_dialogue(self, in_dialogue: bool) -> TokenizerState:
        if self.in_dialogue == in_dialogue:
            return self
        return replace(self, in_dialogue=in_dialogue)

    def with_boneyard(self, in_boneyard: bool) -> TokenizerState:
        if self.in_boneyard == in_boneyard:
            return self
        return replace(self, in_boneyard=in_boneyard)


INITIAL_STATE = TokenizerState()


@dataclass(frozen=True, slots=True)
class Token:
    """A classified half-open span ``[start, end)`` of document text."""

    type: TokenType
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    def shifted(self, delta: int) -> Token:
        """Return the same token moved by ``delta`` characters."""
        if delta == 0:
            return self
        return Token(self.type, self.start + delta, self.end + delta)

    def text(self, source: str) -> str:
        return source[self.start : self.end]

    def to_dict(self) -> dict[str, object]:
        return {"type": self.type.value, "start": self.start, "end": self.end}
