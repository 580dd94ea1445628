"""Unified CLI handler for standardized error handling and output."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape

from screenlex.cli.formatters.json_formatter import JsonFormatter
from screenlex.config import get_logger
from screenlex.exceptions import ScreenlexError

logger = get_logger(__name__)


class CLIHandler:
    """Unified handler for CLI commands."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize CLI handler.

        Args:
            console: Rich console for output
        """
        self.console = console or Console()
        self.json_formatter = JsonFormatter()

    def handle_error(
        self, error: Exception, json_output: bool = False, exit_code: int = 1
    ) -> None:
        """Handle and display errors consistently.

        Args:
            error: Exception to handle
            json_output: Whether to output JSON
            exit_code: Exit code to use

        Raises:
            typer.Exit: Always, with ``exit_code``
        """
        if isinstance(error, ScreenlexError):
            logger.error(
                "Command failed",
                error_type=type(error).__name__,
                message=error.message,
                hint=error.hint,
                details=error.details,
            )
        else:
            logger.error(
                "Unexpected error",
                error=str(error),
                error_type=type(error).__name__,
                exc_info=error,
            )

        if json_output:
            print(self.json_formatter.format_error_response(error, exit_code))
        elif isinstance(error, ScreenlexError):
            self.console.print(
                f"[red]✗ {escape(error.message)}[/red]", highlight=False
            )
            if error.hint:
                self.console.print(
                    f"[yellow]→ {escape(error.hint)}[/yellow]", highlight=False
                )
        else:
            self.console.print(
                f"[red]Error: {escape(str(error))}[/red]", highlight=False
            )

        raise typer.Exit(exit_code)
