"""Edit-by-edit tokenization with per-line state checkpoints.

State flows strictly forward through a document, so a reparse that starts in
the middle must begin from a known entry state. The tokenizer keeps, for every
line, the state entering it and the tokens it produced. After an edit:

- lines before the first changed line keep their results (their entry states
  are the checkpoints a reparse starts from),
- changed lines are tokenized again,
- unchanged lines after the edit are reused as soon as the state arriving at
  them equals the entry state they were tokenized with.

Work is lazy: ``advance`` tokenizes at most ``budget`` lines, which gives the
bounded parse used by the scene outline.
"""

from __future__ import annotations

from dataclasses import dataclass

from screenlex.config import get_logger
from screenlex.tokenizer.document import Document, Line, LineResult, tokenize_line
from screenlex.tokenizer.tokens import INITIAL_STATE, Token, TokenizerState

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class _Checkpoint:
    entry: TokenizerState
    result: LineResult


def _changed_range(old: tuple[Line, ...], new: tuple[Line, ...]) -> tuple[int, int]:
    """Return the number of unchanged leading and trailing lines."""
    limit = min(len(old), len(new))
    prefix = 0
    while prefix < limit and old[prefix].same_content(new[prefix]):
        prefix += 1
    suffix = 0
    while suffix < limit - prefix and old[-1 - suffix].same_content(new[-1 - suffix]):
        suffix += 1
    return prefix, suffix


class IncrementalTokenizer:
    """Tokenizer for one document that survives edits.

    Not shared between documents or threads; the owning view drives it
    synchronously on every change.
    """

    def __init__(self, text: str | Document = "") -> None:
        self._document = text if isinstance(text, Document) else Document(text)
        self._checkpoints: list[_Checkpoint | None] = [None] * self._document.line_count
        # Lines [0, _frontier) are tokenized with the correct entry state
        self._frontier = 0

    @property
    def document(self) -> Document:
        return self._document

    @property
    def text(self) -> str:
        return self._document.text

    @property
    def frontier(self) -> int:
        """Number of leading lines whose tokens are up to date."""
        return self._frontier

    @property
    def parsed_length(self) -> int:
        """Number of leading characters covered by up-to-date tokens."""
        if self._frontier == 0:
            return 0
        if self._frontier >= self._document.line_count:
            return len(self._document)
        return self._document.lines[self._frontier].start

    def is_complete(self) -> bool:
        return self._frontier >= self._document.line_count

    def update(self, text: str | Document) -> None:
        """Replace the document, keeping results for unchanged lines."""
        new_doc = text if isinstance(text, Document) else Document(text)
        old_lines, new_lines = self._document.lines, new_doc.lines
        prefix, suffix = _changed_range(old_lines, new_lines)

        head = self._checkpoints[:prefix]
        changed = [None] * (len(new_lines) - prefix - suffix)
        tail = self._checkpoints[len(old_lines) - suffix :] if suffix else []

        self._checkpoints = [*head, *changed, *tail]
        self._frontier = min(self._frontier, prefix)
        self._document = new_doc
        logger.debug(
            "Document updated",
            line_count=len(new_lines),
            first_changed_line=prefix + 1,
            reusable_tail=suffix,
        )

    def apply_change(self, start: int, end: int, insert: str = "") -> None:
        """Replace ``[start, end)`` of the current text with ``insert``."""
        self.update(self._document.replace(start, end, insert))

    def entry_state(self, line_number: int) -> TokenizerState:
        """State entering the 1-based ``line_number``, replaying if needed."""
        index = line_number - 1
        self._document.line(line_number)
        if index == 0:
            return INITIAL_STATE
        self.advance(upto_line=index)
        checkpoint = self._checkpoints[index - 1]
        assert checkpoint is not None
        return checkpoint.result.state

    def advance(self, upto_line: int | None = None, budget: int | None = None) -> bool:
        """Tokenize forward from the frontier.

        Args:
            upto_line: Stop once this many leading lines are up to date
                (default: the whole document)
            budget: Maximum number of lines to tokenize afresh; reused lines
                do not count (default: unlimited)

        Returns:
            True if the requested lines are up to date
        """
        lines = self._document.lines
        target = len(lines) if upto_line is None else min(upto_line, len(lines))
        if self._frontier >= target:
            return True

        start = self._frontier
        state = self._exit_state(self._frontier)
        reused = tokenized = 0
        while self._frontier < target:
            checkpoint = self._checkpoints[self._frontier]
            if checkpoint is not None and checkpoint.entry == state:
                reused += 1
            else:
                if budget is not None and tokenized >= budget:
                    break
                line = lines[self._frontier]
                checkpoint = _Checkpoint(
                    state, tokenize_line(line.text, state, line.line_break)
                )
                self._checkpoints[self._frontier] = checkpoint
                tokenized += 1
            state = checkpoint.result.state
            self._frontier += 1

        logger.debug(
            "Tokenized lines",
            from_line=start + 1,
            to_line=self._frontier,
            tokenized=tokenized,
            reused=reused,
            complete=self._frontier >= target,
        )
        return self._frontier >= target

    def advance_to_offset(self, offset: int, budget: int | None = None) -> bool:
        """Tokenize until every line starting before ``offset`` is up to date."""
        if offset <= 0:
            return True
        if offset >= len(self._document):
            return self.advance(budget=budget)
        line = self._document.line_at(offset - 1)
        return self.advance(upto_line=line.number, budget=budget)

    def tokens(self) -> list[Token]:
        """All tokens of the current document, tokenizing what is missing."""
        self.advance()
        return self.parsed_tokens()

    def parsed_tokens(self) -> list[Token]:
        """Tokens of the up-to-date leading lines only."""
        tokens: list[Token] = []
        for index in range(self._frontier):
            checkpoint = self._checkpoints[index]
            assert checkpoint is not None
            start = self._document.lines[index].start
            tokens.extend(token.shifted(start) for token in checkpoint.result.tokens)
        return tokens

    def line_tokens(self, line_number: int) -> list[Token]:
        """Tokens of one line with absolute offsets."""
        line = self._document.line(line_number)
        self.advance(upto_line=line_number)
        checkpoint = self._checkpoints[line_number - 1]
        assert checkpoint is not None
        return [token.shifted(line.start) for token in checkpoint.result.tokens]

    def _exit_state(self, line_count: int) -> TokenizerState:
        if line_count == 0:
            return INITIAL_STATE
        checkpoint = self._checkpoints[line_count - 1]
        assert checkpoint is not None
        return checkpoint.result.state
