"""Fountain document analysis: tokens and scene outline for a file or text."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from screenlex.config import ScreenlexSettings, get_logger, get_settings
from screenlex.exceptions import ScreenlexFileNotFoundError, ValidationError
from screenlex.outline import Scene, SceneScanner
from screenlex.tokenizer import Document, Token, TokenType

logger = get_logger(__name__)


@dataclass
class AnalysisResult:
    """Tokens and scenes of one document."""

    text: str
    tokens: list[Token]
    scenes: list[Scene]
    path: Path | None = None
    highlighted: bool = True
    line_count: int = 0

    def token_rows(self) -> list[dict[str, object]]:
        """Tokens as rows with their text, for tables and JSON output."""
        return [
            {**token.to_dict(), "text": token.text(self.text)} for token in self.tokens
        ]

    def scene_rows(self) -> list[dict[str, object]]:
        """Scenes as rows with their 1-based line number."""
        document = Document(self.text)
        return [
            {**scene.to_dict(), "line": document.line_at(scene.pos).number}
            for scene in self.scenes
        ]


class FountainAnalyzer:
    """Classify Fountain documents according to the active settings."""

    def __init__(self, settings: ScreenlexSettings | None = None) -> None:
        """Initialize the analyzer.

        Args:
            settings: Settings to use; the global settings when omitted
        """
        self.settings = settings or get_settings()

    def load(self, path: Path) -> str:
        """Read a Fountain file as UTF-8 text.

        Raises:
            ScreenlexFileNotFoundError: If the file does not exist
            ValidationError: If the path is not a readable Fountain text file
        """
        if not path.exists():
            raise ScreenlexFileNotFoundError(
                message=f"File not found: {path}",
                hint="Check that the file path is correct",
                details={"path": str(path)},
            )
        if not path.is_file():
            raise ValidationError(
                message=f"Not a file: {path}",
                hint="Pass the path of a Fountain document, not a directory",
                details={"path": str(path)},
            )
        if path.suffix.lower() not in self.settings.fountain_extensions:
            raise ValidationError(
                message=f"Unsupported file type: {path.suffix or '(none)'}",
                hint=(
                    "Use one of "
                    f"{', '.join(self.settings.fountain_extensions)} "
                    "or add the extension to fountain_extensions"
                ),
                details={"path": str(path)},
            )
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ValidationError(
                message=f"File is not valid UTF-8: {path}",
                hint="Fountain documents must be saved as UTF-8 text",
                details={"path": str(path), "error": str(e)},
            ) from e

    def analyze_text(self, text: str, path: Path | None = None) -> AnalysisResult:
        """Tokenize ``text`` and extract its scenes.

        With highlighting disabled the document is a single ``action`` token
        and has no scenes.
        """
        document = Document(text)
        if not self.settings.highlight_enabled:
            tokens = [Token(TokenType.ACTION, 0, len(text))] if text else []
            return AnalysisResult(
                text=text,
                tokens=tokens,
                scenes=[],
                path=path,
                highlighted=False,
                line_count=document.line_count,
            )

        scanner = SceneScanner(document, budget=self.settings.scene_scan_budget)
        result = AnalysisResult(
            text=text,
            tokens=scanner.tokenizer.tokens(),
            scenes=list(scanner.scenes),
            path=path,
            line_count=document.line_count,
        )
        logger.debug(
            "Analyzed document",
            path=str(path) if path else None,
            tokens=len(result.tokens),
            scenes=len(result.scenes),
        )
        return result

    def analyze_file(self, path: Path) -> AnalysisResult:
        """Load and analyze a Fountain file."""
        return self.analyze_text(self.load(path), path=path)
