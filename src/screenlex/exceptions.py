"""Custom exception hierarchy for screenlex with helpful error messages.

The tokenizer and scene extractor never raise: every line is classified.
These exceptions belong to the configuration, file access and CLI layers.
"""

from __future__ import annotations

from typing import Any


class ScreenlexError(Exception):
    """Base exception with helpful formatting for all screenlex errors.

    Provides structured error messages with hints and details to help users
    understand and fix problems.
    """

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize exception with structured error information.

        Args:
            message: Primary error message describing what went wrong
            hint: Optional hint suggesting how to fix the problem
            details: Optional dictionary with additional debugging information
        """
        self.message = message
        self.hint = hint
        self.details = details
        super().__init__(self.format_error())

    def format_error(self) -> str:
        """Format the error message with hint and details.

        Returns:
            Formatted error string with all available information
        """
        output = f"Error: {self.message}"
        if self.hint:
            output += f"\nHint: {self.hint}"
        if self.details:
            details_str = "\n".join(
                f"  {key}: {value}" for key, value in self.details.items()
            )
            output += f"\nDetails:\n{details_str}"
        return output


class ConfigurationError(ScreenlexError):
    """Configuration errors including invalid settings and missing config files."""

    pass


class ScreenlexFileNotFoundError(ScreenlexError):
    """File not found errors with helpful path information."""

    pass


class ValidationError(ScreenlexError):
    """Input validation errors with details about what was expected."""

    pass


def check_config_keys(config: dict[str, Any]) -> None:
    """Check for common configuration mistakes.

    Args:
        config: Configuration dictionary to validate

    Raises:
        ConfigurationError: With hints about correct configuration keys
    """
    # Common mistakes in config keys
    wrong_keys = {
        "level": "log_level",
        "format": "log_format",
        "highlight": "highlight_enabled",
        "highlighting": "highlight_enabled",
        "scan_budget": "scene_scan_budget",
        "extensions": "fountain_extensions",
    }

    for wrong, correct in wrong_keys.items():
        if wrong in config:
            raise ConfigurationError(
                message=f"Invalid configuration key '{wrong}'",
                hint=f"Use '{correct}' instead of '{wrong}'",
                details={
                    "found_keys": list(config.keys()),
                    "invalid_key": wrong,
                    "correct_key": correct,
                },
            )
