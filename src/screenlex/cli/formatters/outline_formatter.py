"""Token and scene table formatters for CLI."""

from __future__ import annotations

import io
from abc import abstractmethod
from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

from screenlex.api import AnalysisResult
from screenlex.cli.formatters.base import OutputFormat, OutputFormatter
from screenlex.cli.formatters.json_formatter import JsonFormatter


def _visible(text: str) -> Text:
    # Plain Text so "[[notes]]" are not read as console markup
    return Text(text.replace("\r", "\\r").replace("\n", "\\n"))


class _ResultFormatter(OutputFormatter[AnalysisResult]):
    title = ""

    @abstractmethod
    def rows(self, result: AnalysisResult) -> list[dict[str, Any]]:
        """JSON-ready rows for ``result``."""

    @abstractmethod
    def build_table(self, result: AnalysisResult) -> Table:
        """Rich table for ``result``."""

    def format(
        self, data: AnalysisResult, format_type: OutputFormat = OutputFormat.TABLE
    ) -> str:
        if format_type == OutputFormat.JSON:
            return JsonFormatter().format(self.rows(data))
        string_io = io.StringIO()
        Console(file=string_io, width=self.console.width).print(
            self.build_table(data)
        )
        return string_io.getvalue()

    def print(self, data: AnalysisResult) -> None:
        self.console.print(self.build_table(data))


class TokenFormatter(_ResultFormatter):
    """Formatter for the token stream of a document."""

    def rows(self, result: AnalysisResult) -> list[dict[str, Any]]:
        return result.token_rows()

    def build_table(self, result: AnalysisResult) -> Table:
        title = str(result.path) if result.path else "Tokens"
        table = Table(title=title, show_header=True, header_style="bold magenta")
        table.add_column("Type", style="cyan")
        table.add_column("Start", justify="right")
        table.add_column("End", justify="right")
        table.add_column("Text", no_wrap=False)
        for row in result.token_rows():
            table.add_row(
                str(row["type"]),
                str(row["start"]),
                str(row["end"]),
                _visible(str(row["text"])),
            )
        return table


class SceneFormatter(_ResultFormatter):
    """Formatter for the scene outline of a document."""

    def rows(self, result: AnalysisResult) -> list[dict[str, Any]]:
        return result.scene_rows()

    def build_table(self, result: AnalysisResult) -> Table:
        title = f"Scenes in {result.path}" if result.path else "Scenes"
        table = Table(title=title, show_header=True, header_style="bold magenta")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Line", justify="right")
        table.add_column("Offset", justify="right")
        table.add_column("Heading", style="cyan", no_wrap=False)
        for index, row in enumerate(result.scene_rows(), start=1):
            table.add_row(
                str(index),
                str(row["line"]),
                str(row["pos"]),
                _visible(str(row["name"])),
            )
        return table
