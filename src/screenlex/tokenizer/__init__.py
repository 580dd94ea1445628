"""Fountain line tokenizer."""

from __future__ import annotations

from .document import (
    Document,
    Line,
    LineResult,
    iter_line_results,
    split_lines,
    tokenize_document,
    tokenize_line,
)
from .incremental import IncrementalTokenizer
from .machine import fallback_type, handle_blank_line, tokenize
from .patterns import BLOCK_RULES, INLINE_RULES, PatternRule
from .stream import LineCursor
from .tokens import INITIAL_STATE, Token, TokenizerState, TokenType

__all__ = [
    "BLOCK_RULES",
    "INITIAL_STATE",
    "INLINE_RULES",
    "Document",
    "IncrementalTokenizer",
    "Line",
    "LineCursor",
    "LineResult",
    "PatternRule",
    "Token",
    "TokenType",
    "TokenizerState",
    "fallback_type",
    "handle_blank_line",
    "iter_line_results",
    "split_lines",
    "tokenize",
    "tokenize_document",
    "tokenize_line",
]
