"""CLI command for screenlex scenes - show the scene outline."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from screenlex.api import FountainAnalyzer
from screenlex.cli.formatters import OutputFormat, SceneFormatter
from screenlex.cli.utils.cli_handler import CLIHandler
from screenlex.config import get_settings

console = Console()


def scenes_command(
    path: Annotated[
        Path,
        typer.Argument(help="Fountain file to outline"),
    ],
    json_output: Annotated[
        bool, typer.Option("--json", help="Output scenes as JSON")
    ] = False,
) -> None:
    """List the scene headings of a Fountain document in order."""
    handler = CLIHandler(console)
    try:
        result = FountainAnalyzer(get_settings()).analyze_file(path)
    except Exception as e:
        handler.handle_error(e, json_output)
        return

    formatter = SceneFormatter(console)
    if json_output:
        print(formatter.format(result, OutputFormat.JSON))
        return

    if not result.scenes:
        console.print("[yellow]No scenes found.[/yellow]")
        return
    formatter.print(result)
