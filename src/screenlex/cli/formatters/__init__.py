"""Output formatters for CLI commands."""

from screenlex.cli.formatters.base import OutputFormat, OutputFormatter
from screenlex.cli.formatters.json_formatter import JsonFormatter
from screenlex.cli.formatters.outline_formatter import SceneFormatter, TokenFormatter

__all__ = [
    "JsonFormatter",
    "OutputFormat",
    "OutputFormatter",
    "SceneFormatter",
    "TokenFormatter",
]
