"""Scan cursor over a single line of text."""

from __future__ import annotations

import re


class LineCursor:
    """Cursor over one line, advanced by the tokenizer one token at a time.

    ``start`` marks where the token being scanned began and ``pos`` is the
    scan position. The line text never contains a line break.
    """

    __slots__ = ("pos", "start", "string")

    def __init__(self, string: str, pos: int = 0) -> None:
        self.string = string
        self.pos = pos
        self.start = pos

    def __repr__(self) -> str:
        return f"LineCursor({self.string!r}, pos={self.pos})"

    def sol(self) -> bool:
        """True when the cursor is at the start of the line."""
        return self.pos == 0

    def eol(self) -> bool:
        """True when the whole line has been consumed."""
        return self.pos >= len(self.string)

    def peek(self) -> str:
        return self.string[self.pos : self.pos + 1]

    def next(self) -> str:
        """Consume and return one character (empty at end of line)."""
        ch = self.peek()
        if ch:
            self.pos += 1
        return ch

    def remaining(self) -> str:
        return self.string[self.pos :]

    def current(self) -> str:
        """Text of the token scanned so far."""
        return self.string[self.start : self.pos]

    def begin_token(self) -> None:
        self.start = self.pos

    def match(self, pattern: str | re.Pattern[str], consume: bool = True) -> bool:
        """Match a literal or compiled pattern anchored at the cursor."""
        if isinstance(pattern, str):
            if not self.string.startswith(pattern, self.pos):
                return False
            end = self.pos + len(pattern)
        else:
            m = pattern.match(self.string, self.pos)
            if m is None:
                return False
            end = m.end()
        if consume:
            self.pos = end
        return True

    def skip_to(self, needle: str) -> bool:
        """Advance to the next occurrence of ``needle`` if there is one."""
        found = self.string.find(needle, self.pos)
        if found < 0:
            return False
        self.pos = found
        return True

    def skip_to_end(self) -> None:
        self.pos = len(self.string)
