"""Classified syntax tree built from the token stream.

Outline and styling consumers walk this tree instead of the raw token list.
The root node is named ``document`` and its children are the tokens in
document order, each named after its token type.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

from screenlex.tokenizer.incremental import IncrementalTokenizer
from screenlex.tokenizer.tokens import Token

DOCUMENT_NODE = "document"

EnterCallback = Callable[["SyntaxNode"], bool | None]
LeaveCallback = Callable[["SyntaxNode"], None]


@dataclass(frozen=True, slots=True)
class SyntaxNode:
    """A node covering ``[from_, to)`` of the document."""

    name: str
    from_: int
    to: int
    children: tuple[SyntaxNode, ...] = field(default=(), repr=False)

    @classmethod
    def from_token(cls, token: Token) -> SyntaxNode:
        return cls(token.type.value, token.start, token.end)


class SyntaxTree:
    """Tree over a document prefix of ``length`` characters."""

    def __init__(
        self, text: str, tokens: list[Token], length: int | None = None
    ) -> None:
        self._text = text
        self.length = len(text) if length is None else length
        self.root = SyntaxNode(
            DOCUMENT_NODE,
            0,
            self.length,
            tuple(SyntaxNode.from_token(token) for token in tokens),
        )

    def __repr__(self) -> str:
        return f"SyntaxTree(length={self.length}, nodes={len(self.root.children)})"

    def covers(self, upto: int) -> bool:
        return self.length >= upto

    def slice(self, node: SyntaxNode) -> str:
        return self._text[node.from_ : node.to]

    def iterate(
        self,
        enter: EnterCallback,
        leave: LeaveCallback | None = None,
        from_: int = 0,
        to: int | None = None,
    ) -> None:
        """Walk the tree depth first in document order.

        ``enter`` is called for every node overlapping ``[from_, to]``;
        returning ``False`` from it skips the node's children. ``leave`` is
        called after a node's children have been visited.
        """
        end = self.length if to is None else to
        self._walk(self.root, enter, leave, from_, end)

    def _walk(
        self,
        node: SyntaxNode,
        enter: EnterCallback,
        leave: LeaveCallback | None,
        from_: int,
        to: int,
    ) -> None:
        if node.to < from_ or node.from_ > to:
            return
        if enter(node) is not False:
            for child in node.children:
                self._walk(child, enter, leave, from_, to)
        if leave is not None:
            leave(node)

    def nodes(self) -> Iterator[SyntaxNode]:
        """Token nodes in document order."""
        return iter(self.root.children)


def syntax_tree(tokenizer: IncrementalTokenizer) -> SyntaxTree:
    """Full parse: a tree covering the whole current document."""
    return SyntaxTree(tokenizer.text, tokenizer.tokens())


def ensure_syntax_tree(
    tokenizer: IncrementalTokenizer, upto: int, budget: int
) -> SyntaxTree | None:
    """Bounded parse: a tree covering at least ``upto`` characters, or None.

    At most ``budget`` lines are tokenized afresh. When that is not enough to
    reach ``upto`` the work done so far is kept for the next attempt and None
    is returned.
    """
    if not tokenizer.advance_to_offset(upto, budget=budget):
        return None
    return SyntaxTree(
        tokenizer.text, tokenizer.parsed_tokens(), tokenizer.parsed_length
    )
