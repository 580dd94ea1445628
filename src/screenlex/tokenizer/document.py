"""Document snapshots and line-by-line tokenization."""

from __future__ import annotations

import re
from bisect import bisect_right
from collections.abc import Iterator
from dataclasses import dataclass

from screenlex.exceptions import ValidationError
from screenlex.tokenizer.machine import fallback_type, handle_blank_line, tokenize
from screenlex.tokenizer.stream import LineCursor
from screenlex.tokenizer.tokens import INITIAL_STATE, Token, TokenizerState, TokenType

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True, slots=True)
class Line:
    """One line of a document.

    ``text`` never includes the line break, which is kept separately in
    ``line_break`` (empty for the last line).
    """

    number: int
    start: int
    text: str
    line_break: str = ""

    @property
    def end(self) -> int:
        return self.start + len(self.text)

    @property
    def next_start(self) -> int:
        return self.end + len(self.line_break)

    @property
    def is_blank(self) -> bool:
        return not self.text

    def same_content(self, other: Line) -> bool:
        return self.text == other.text and self.line_break == other.line_break


def split_lines(text: str) -> list[Line]:
    """Split ``text`` into lines with absolute offsets.

    A document always has at least one line; text ending in a line break has
    an empty last line.
    """
    lines: list[Line] = []
    start = 0
    for m in _LINE_BREAK.finditer(text):
        lines.append(Line(len(lines) + 1, start, text[start : m.start()], m.group()))
        start = m.end()
    lines.append(Line(len(lines) + 1, start, text[start:]))
    return lines


class Document:
    """Immutable snapshot of a Fountain document.

    The host editor owns the text and replaces the snapshot on every edit;
    tokenization never mutates it.
    """

    __slots__ = ("_line_starts", "lines", "text")

    def __init__(self, text: str = "") -> None:
        self.text = text
        self.lines: tuple[Line, ...] = tuple(split_lines(text))
        self._line_starts = [line.start for line in self.lines]

    def __len__(self) -> int:
        return len(self.text)

    def __iter__(self) -> Iterator[Line]:
        return iter(self.lines)

    def __repr__(self) -> str:
        return f"Document(length={len(self.text)}, lines={len(self.lines)})"

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def line(self, number: int) -> Line:
        """Return the line with 1-based ``number``."""
        if not 1 <= number <= len(self.lines):
            raise ValidationError(
                message=f"Line {number} out of range",
                hint=f"Document lines are numbered 1 to {len(self.lines)}",
                details={"line": number, "line_count": len(self.lines)},
            )
        return self.lines[number - 1]

    def line_at(self, offset: int) -> Line:
        """Return the line containing ``offset``."""
        self._check_offset(offset)
        return self.lines[bisect_right(self._line_starts, offset) - 1]

    def slice(self, start: int, end: int | None = None) -> str:
        return self.text[start:end]

    def replace(self, start: int, end: int, insert: str = "") -> Document:
        """Return a new document with ``[start, end)`` replaced by ``insert``."""
        self._check_offset(start)
        self._check_offset(end)
        if end < start:
            raise ValidationError(
                message=f"Invalid change range {start}..{end}",
                hint="The end of a change must not precede its start",
                details={"start": start, "end": end},
            )
        return Document(self.text[:start] + insert + self.text[end:])

    def _check_offset(self, offset: int) -> None:
        if not 0 <= offset <= len(self.text):
            raise ValidationError(
                message=f"Offset {offset} out of range",
                hint=f"Offsets must lie between 0 and {len(self.text)}",
                details={"offset": offset, "length": len(self.text)},
            )


@dataclass(frozen=True, slots=True)
class LineResult:
    """Tokens of one line, relative to the line start, and the exit state."""

    tokens: tuple[Token, ...]
    state: TokenizerState


def _append(tokens: list[Token], token_type: TokenType, start: int, end: int) -> None:
    if tokens and tokens[-1].type is token_type and tokens[-1].end == start:
        tokens[-1] = Token(token_type, tokens[-1].start, end)
    else:
        tokens.append(Token(token_type, start, end))


def tokenize_line(
    text: str,
    state: TokenizerState = INITIAL_STATE,
    line_break: str = "",
    offset: int = 0,
) -> LineResult:
    """Tokenize one line given the state entering it.

    The line break is classified like unmatched text under the state after
    the line, so a blank line inside a boneyard region stays ``boneyard``.

    Args:
        text: Line content without its line break
        state: State entering the line
        line_break: The line's terminator, if any
        offset: Offset added to every token position

    Returns:
        Merged tokens covering the line and its break, and the exit state
    """
    tokens: list[Token] = []
    if not text:
        state = handle_blank_line(state)
    else:
        cursor = LineCursor(text)
        while not cursor.eol():
            token_type, state = tokenize(cursor, state)
            _append(tokens, token_type, offset + cursor.start, offset + cursor.pos)
    if line_break:
        end = offset + len(text)
        _append(tokens, fallback_type(state), end, end + len(line_break))
    return LineResult(tuple(tokens), state)


def iter_line_results(
    document: Document, state: TokenizerState = INITIAL_STATE
) -> Iterator[tuple[Line, TokenizerState, LineResult]]:
    """Yield each line with its entry state and tokens, in document order."""
    for line in document.lines:
        result = tokenize_line(line.text, state, line.line_break, line.start)
        yield line, state, result
        state = result.state


def tokenize_document(text: str | Document) -> list[Token]:
    """Tokenize a whole document from the initial state.

    The returned tokens are contiguous and cover every offset exactly once.
    """
    document = text if isinstance(text, Document) else Document(text)
    tokens: list[Token] = []
    for _line, _entry, result in iter_line_results(document):
        tokens.extend(result.tokens)
    return tokens
