"""Scene outline extraction from the classified tree."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from screenlex.config import get_logger
from screenlex.tokenizer.document import Document
from screenlex.tokenizer.incremental import IncrementalTokenizer
from screenlex.tokenizer.tokens import TokenType
from screenlex.tree import SyntaxNode, SyntaxTree, ensure_syntax_tree, syntax_tree

logger = get_logger(__name__)

DEFAULT_SCAN_BUDGET = 2000


@dataclass(frozen=True, slots=True)
class Scene:
    """A scene heading and the offset where it starts."""

    name: str
    pos: int

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "pos": self.pos}


def extract_scenes(tree: SyntaxTree) -> list[Scene]:
    """Collect every scene heading node of ``tree`` in document order."""
    found: list[Scene] = []

    def enter(node: SyntaxNode) -> None:
        if node.name == TokenType.SCENE_HEADING.value:
            found.append(Scene(name=tree.slice(node), pos=node.from_))

    tree.iterate(enter)
    return found


def scan_scenes(
    tokenizer: IncrementalTokenizer, budget: int = DEFAULT_SCAN_BUDGET
) -> list[Scene]:
    """Extract scenes of the complete current document.

    A bounded parse is tried first; when it cannot cover the whole document
    within ``budget`` lines the outline is built from a full parse instead,
    never from a partial tree.
    """
    document_length = len(tokenizer.document)
    tree = ensure_syntax_tree(tokenizer, document_length, budget)
    if tree is None:
        logger.debug(
            "Bounded parse incomplete, falling back to full parse",
            budget=budget,
            parsed_length=tokenizer.parsed_length,
            document_length=document_length,
        )
        tree = syntax_tree(tokenizer)
    return extract_scenes(tree)


class SceneScanner:
    """Keeps a scene outline in step with a changing document.

    The host calls ``update`` (or ``apply_change``) on every document change;
    the scanner re-tokenizes incrementally and rebuilds the outline. The only
    state it exposes is the last computed scene list.
    """

    def __init__(
        self,
        text: str | Document = "",
        budget: int = DEFAULT_SCAN_BUDGET,
        on_change: Callable[[list[Scene]], None] | None = None,
    ) -> None:
        self.tokenizer = IncrementalTokenizer(text)
        self.budget = budget
        self.on_change = on_change
        self.scenes: list[Scene] = []
        self._rescan()

    def update(self, text: str | Document) -> list[Scene]:
        """Replace the document text and refresh the outline."""
        self.tokenizer.update(text)
        return self._rescan()

    def apply_change(self, start: int, end: int, insert: str = "") -> list[Scene]:
        """Apply a single replacement and refresh the outline."""
        self.tokenizer.apply_change(start, end, insert)
        return self._rescan()

    def _rescan(self) -> list[Scene]:
        scenes = scan_scenes(self.tokenizer, self.budget)
        changed = scenes != self.scenes
        self.scenes = scenes
        if changed and self.on_change is not None:
            self.on_change(scenes)
        return scenes
