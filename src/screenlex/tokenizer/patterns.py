"""Ordered pattern table for Fountain classification.

Rules are evaluated top to bottom and the first match wins, so the order of
``INLINE_RULES`` and ``BLOCK_RULES`` is part of the grammar.

Inline rules are anchored at the scan cursor and may fire anywhere in a line.
Block rules only fire at the start of a line and are matched against the whole
remaining line, which they consume.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from screenlex.tokenizer.tokens import TokenType

BONEYARD_OPEN = "/*"
BONEYARD_CLOSE = "*/"

# Characters that can start an inline or region token. Fallback text stops in
# front of them so that later spans on the line are still recognised.
INLINE_TRIGGERS = frozenset("[*_/")


@dataclass(frozen=True, slots=True)
class PatternRule:
    """A token type paired with the regex that recognises it."""

    token_type: TokenType
    pattern: re.Pattern[str]

    def match(self, text: str, pos: int = 0) -> re.Match[str] | None:
        return self.pattern.match(text, pos)


# Emphasis bodies never contain a boneyard opener, which takes precedence
_STAR_BODY = r"(?:[^*/]|/(?!\*))+"
_UNDERSCORE_BODY = r"(?:[^_/]|/(?!\*))+"

INLINE_RULES: tuple[PatternRule, ...] = (
    PatternRule(TokenType.NOTE, re.compile(r"\[\[.*?\]\]")),
    PatternRule(TokenType.BOLD_ITALIC, re.compile(rf"\*{{3}}{_STAR_BODY}\*{{3}}")),
    PatternRule(TokenType.BOLD, re.compile(rf"\*{{2}}{_STAR_BODY}\*{{2}}")),
    PatternRule(TokenType.ITALIC, re.compile(rf"\*{_STAR_BODY}\*")),
    PatternRule(TokenType.UNDERLINE, re.compile(rf"_{_UNDERSCORE_BODY}_")),
)

BLOCK_RULES: tuple[PatternRule, ...] = (
    PatternRule(
        TokenType.SCENE_HEADING,
        re.compile(
            r"(?:\*{0,3}_?)(?:int|ext|est|i/e)[. ].+|\.(?!\.).+",
            re.IGNORECASE,
        ),
    ),
    PatternRule(
        TokenType.CHARACTER,
        re.compile(r"[ \t]*[A-Z][A-Z0-9 \t]+\^?|@.*"),
    ),
    PatternRule(
        TokenType.TRANSITION,
        re.compile(r">(?!.*<$).*|[A-Z ]+ TO:"),
    ),
    PatternRule(TokenType.CENTERED, re.compile(r">[^<>]+<")),
    PatternRule(TokenType.SECTION, re.compile(r"#+.*")),
    PatternRule(TokenType.SYNOPSIS, re.compile(r"=(?!=).*")),
    PatternRule(TokenType.PAGE_BREAK, re.compile(r"={3,}")),
    PatternRule(TokenType.PARENTHETICAL, re.compile(r"[ \t]*\(.*\)[ \t]*")),
)


def match_inline(text: str, pos: int) -> tuple[TokenType, int] | None:
    """Return the first inline rule matching at ``pos`` and the match end."""
    for rule in INLINE_RULES:
        m = rule.match(text, pos)
        if m is not None:
            return rule.token_type, m.end()
    return None


def match_block(line: str) -> TokenType | None:
    """Return the first block rule matching the whole ``line``."""
    for rule in BLOCK_RULES:
        if rule.pattern.fullmatch(line) is not None:
            return rule.token_type
    return None
