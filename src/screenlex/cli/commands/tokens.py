"""CLI command for screenlex tokens - show the classified token stream."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from screenlex.api import FountainAnalyzer
from screenlex.cli.formatters import OutputFormat, TokenFormatter
from screenlex.cli.utils.cli_handler import CLIHandler
from screenlex.config import get_settings

console = Console()


def tokens_command(
    path: Annotated[
        Path,
        typer.Argument(help="Fountain file to tokenize"),
    ],
    json_output: Annotated[
        bool, typer.Option("--json", help="Output tokens as JSON")
    ] = False,
) -> None:
    """Show every token of a Fountain document with its type and offsets."""
    handler = CLIHandler(console)
    try:
        result = FountainAnalyzer(get_settings()).analyze_file(path)
    except Exception as e:
        handler.handle_error(e, json_output)
        return

    formatter = TokenFormatter(console)
    if json_output:
        # Plain print keeps ANSI codes out of JSON
        print(formatter.format(result, OutputFormat.JSON))
        return

    if not result.highlighted:
        console.print("[yellow]Highlighting is disabled; showing raw text.[/yellow]")
    formatter.print(result)
