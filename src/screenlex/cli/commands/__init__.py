"""CLI commands for screenlex."""

from .scenes import scenes_command
from .tokens import tokens_command
from .watch import watch_command

__all__ = ["scenes_command", "tokens_command", "watch_command"]
