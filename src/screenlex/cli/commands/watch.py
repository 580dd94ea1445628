"""CLI command for screenlex watch - keep a scene outline in step with a file."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from watchdog.observers import Observer

from screenlex.api import AnalysisResult, FountainAnalyzer
from screenlex.cli.formatters import SceneFormatter
from screenlex.cli.utils.cli_handler import CLIHandler
from screenlex.cli.utils.file_watcher import FountainFileHandler
from screenlex.config import get_logger, get_settings
from screenlex.outline import Scene

logger = get_logger(__name__)
console = Console()


def _print_outline(path: Path, text: str, scenes: list[Scene]) -> None:
    result = AnalysisResult(text=text, tokens=[], scenes=scenes, path=path)
    if scenes:
        SceneFormatter(console).print(result)
    else:
        console.print("[yellow]No scenes found.[/yellow]")


def watch_command(
    path: Annotated[
        Path,
        typer.Argument(help="Fountain file to watch"),
    ],
    timeout: Annotated[
        float,
        typer.Option(
            "--timeout",
            help="Stop watching after this many seconds (0 = until interrupted)",
            min=0,
        ),
    ] = 0,
) -> None:
    """Print the scene outline and refresh it every time the file changes."""
    handler = CLIHandler(console)
    settings = get_settings()
    if not settings.highlight_enabled:
        console.print("[yellow]Highlighting is disabled; no outline to watch.[/yellow]")
        return

    analyzer = FountainAnalyzer(settings)
    try:
        event_handler = FountainFileHandler(path, analyzer)
    except Exception as e:
        handler.handle_error(e)
        return

    def on_update(
        status: str, watched: Path, scenes: list[Scene], error: str | None = None
    ) -> None:
        if status == "error":
            console.print(f"[red]✗ {escape(error or '')}[/red]", highlight=False)
        elif status == "updated":
            console.rule(f"{watched.name} changed")
            _print_outline(watched, event_handler.scanner.tokenizer.text, scenes)

    event_handler.callback = on_update
    _print_outline(
        event_handler.path, event_handler.scanner.tokenizer.text, event_handler.scenes
    )

    observer = Observer()
    observer.schedule(event_handler, str(event_handler.path.parent), recursive=False)
    observer.start()
    logger.info("Watching file", path=str(event_handler.path))
    watched = escape(str(event_handler.path))
    console.print(f"[dim]Watching {watched} (Ctrl+C to stop)[/dim]")

    started = time.monotonic()
    try:
        while observer.is_alive():
            if timeout and time.monotonic() - started >= timeout:
                break
            time.sleep(0.2)
    except KeyboardInterrupt:
        console.print("\n[yellow]Stopped watching.[/yellow]")
    finally:
        event_handler.stop()
        observer.stop()
        observer.join(timeout=5.0)
