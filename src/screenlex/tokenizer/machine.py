"""Tokenizer state machine for Fountain lines.

``tokenize`` is called repeatedly on a ``LineCursor`` until the line is
consumed. Each call emits exactly one token type, advances the cursor by at
least one character and returns the state to carry into the next call. It
never raises: text that matches no rule is ``dialogue`` inside a dialogue
block and ``action`` otherwise.
"""

from __future__ import annotations

from screenlex.tokenizer.patterns import (
    BONEYARD_CLOSE,
    BONEYARD_OPEN,
    INLINE_TRIGGERS,
    match_block,
    match_inline,
)
from screenlex.tokenizer.stream import LineCursor
from screenlex.tokenizer.tokens import TokenizerState, TokenType


def fallback_type(state: TokenizerState) -> TokenType:
    """Type of text no rule claims under ``state``."""
    if state.in_boneyard:
        return TokenType.BONEYARD
    if state.in_dialogue:
        return TokenType.DIALOGUE
    return TokenType.ACTION


def _scan_boneyard(
    cursor: LineCursor, state: TokenizerState
) -> tuple[TokenType, TokenizerState]:
    if cursor.match(BONEYARD_CLOSE):
        return TokenType.BONEYARD, state.with_boneyard(False)
    # Stop in front of the closing marker so the next call closes the region
    if not cursor.skip_to(BONEYARD_CLOSE):
        cursor.skip_to_end()
    return TokenType.BONEYARD, state


def _scan_fallback(cursor: LineCursor) -> None:
    cursor.next()
    while not cursor.eol() and cursor.peek() not in INLINE_TRIGGERS:
        cursor.pos += 1


def tokenize(
    cursor: LineCursor, state: TokenizerState
) -> tuple[TokenType, TokenizerState]:
    """Classify the next token at the cursor.

    Rules are tried in a fixed order: the boneyard region, then inline spans,
    then (at start of line only) the block rules, then the fallback.

    Args:
        cursor: Cursor over the current line, not at end of line
        state: State entering this token

    Returns:
        The token type and the state after the token
    """
    cursor.begin_token()

    if state.in_boneyard:
        return _scan_boneyard(cursor, state)
    if cursor.match(BONEYARD_OPEN):
        return TokenType.BONEYARD, state.with_boneyard(True)

    inline = match_inline(cursor.string, cursor.pos)
    if inline is not None:
        token_type, end = inline
        cursor.pos = end
        return token_type, state

    if cursor.sol():
        block = match_block(cursor.string)
        if block is not None:
            cursor.skip_to_end()
            if block is TokenType.CHARACTER:
                state = state.with_dialogue(True)
            return block, state

    _scan_fallback(cursor)
    return fallback_type(state), state


def handle_blank_line(state: TokenizerState) -> TokenizerState:
    """Reset per-paragraph state on a blank line.

    Dialogue ends at a blank line; a boneyard region does not.
    """
    return state.with_dialogue(False)
