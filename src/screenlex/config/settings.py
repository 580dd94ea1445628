"""screenlex configuration settings."""

from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any, cast

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from screenlex.exceptions import ConfigurationError, check_config_keys


def _load_yaml(path: Path) -> Any:
    with path.open(encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _load_toml(path: Path) -> Any:
    with path.open("rb") as f:
        return tomllib.load(f)


def _load_json(path: Path) -> Any:
    with path.open(encoding="utf-8") as f:
        return json.load(f)


_CONFIG_LOADERS: dict[str, Callable[[Path], Any]] = {
    ".yml": _load_yaml,
    ".yaml": _load_yaml,
    ".toml": _load_toml,
    ".json": _load_json,
}


class ScreenlexSettings(BaseSettings):
    """screenlex configuration settings.

    Settings are loaded with the following precedence (highest to lowest):
    1. CLI arguments (when provided via command flags)
    2. Config file values (YAML, TOML, or JSON); later files override earlier
    3. Environment variables (prefixed with SCREENLEX_)
       Example: export SCREENLEX_LOG_LEVEL=DEBUG
    4. .env file (in current directory or specified path)
    5. Default values (defined in field declarations below)
    """

    model_config = SettingsConfigDict(
        env_prefix="SCREENLEX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Debug settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # Logging settings
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        pattern="^(?i)(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    log_format: str = Field(
        default="console",
        description="Log output format (console, json, structured)",
        pattern="^(?i)(console|json|structured)$",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional log file path",
    )

    # Tokenizer settings
    highlight_enabled: bool = Field(
        default=True,
        description=(
            "Classify Fountain syntax. When disabled the whole document is "
            "reported as a single action token (raw-text editing)"
        ),
    )
    scene_scan_budget: int = Field(
        default=2000,
        description=(
            "Maximum number of lines tokenized by a bounded parse before the "
            "scene outline falls back to a full parse"
        ),
        ge=1,
    )
    fountain_extensions: list[str] = Field(
        default_factory=lambda: [".fountain", ".spmd", ".txt"],
        description="File extensions accepted as Fountain documents",
    )

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Path | None:
        """Expand environment variables and ``~`` and resolve the path."""
        if v is None:
            return None
        if isinstance(v, str):
            expanded = os.path.expandvars(v)
            return Path(expanded).expanduser().resolve()
        if isinstance(v, Path):
            return v.resolve()
        raise ValueError(
            f"Path fields must be str or Path, got {type(v).__name__}: {v!r}"
        )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        """Normalize log level to uppercase for case-insensitive handling."""
        if isinstance(v, str):
            return v.upper()
        raise ValueError(f"log_level must be a string, got {type(v).__name__}")

    @field_validator("log_format", mode="before")
    @classmethod
    def normalize_log_format(cls, v: Any) -> str:
        """Normalize log format to lowercase for case-insensitive handling."""
        if isinstance(v, str):
            return v.lower()
        raise ValueError(f"log_format must be a string, got {type(v).__name__}")

    @field_validator("fountain_extensions", mode="before")
    @classmethod
    def normalize_extensions(cls, v: Any) -> Any:
        """Accept a comma separated string and ensure a leading dot."""
        if isinstance(v, str):
            v = [part for part in v.split(",") if part.strip()]
        if isinstance(v, list | tuple):
            normalized = []
            for ext in v:
                ext = str(ext).strip().lower()
                normalized.append(ext if ext.startswith(".") else f".{ext}")
            return normalized
        return v

    @classmethod
    def from_env(cls) -> ScreenlexSettings:
        """Create settings from environment variables."""
        return cls()

    @classmethod
    def from_file(cls, config_path: Path | str) -> ScreenlexSettings:
        """Load settings from a YAML, TOML or JSON file.

        Raises ``FileNotFoundError`` for a missing file and
        :class:`ConfigurationError` for an unknown suffix or a file whose top
        level is not a mapping.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        suffix = config_path.suffix.lower()
        loader = _CONFIG_LOADERS.get(suffix)
        if loader is None:
            supported = sorted(_CONFIG_LOADERS)
            raise ConfigurationError(
                message=f"Unsupported configuration file format: {suffix}",
                hint=f"Rename the file to use one of: {', '.join(supported)}",
                details={
                    "file": str(config_path),
                    "detected_format": suffix,
                    "supported_formats": supported,
                },
            )

        data = loader(config_path)
        if not isinstance(data, dict):
            raise ConfigurationError(
                message=f"Configuration file must contain a mapping: {config_path}",
                hint="Write settings as top-level key/value pairs",
                details={"file": str(config_path), "type": type(data).__name__},
            )

        check_config_keys(data)
        return cls(**data)

    @classmethod
    def from_multiple_sources(
        cls,
        config_files: list[Path | str] | None = None,
        env_file: Path | str | None = None,
        cli_args: dict[str, Any] | None = None,
    ) -> ScreenlexSettings:
        """Load settings with proper precedence from multiple sources.

        Args:
            config_files: List of config files to load (later files override earlier).
            env_file: Path to .env file (default: .env in current directory).
            cli_args: Dictionary of CLI arguments.

        Returns:
            Merged settings from all sources.
        """
        data: dict[str, Any] = {}

        if config_files:
            for config_file in config_files:
                try:
                    file_settings = cls.from_file(config_file)
                    # Only keys set explicitly in the file override lower layers
                    data.update(file_settings.model_dump(exclude_unset=True))
                except FileNotFoundError:
                    from screenlex.config.logging import get_logger as _get_logger

                    _get_logger("screenlex.config.settings").warning(
                        "Configuration file not found, using defaults",
                        config_file=str(config_file),
                    )

        if env_file:
            # pydantic-settings v2 supports the _env_file parameter
            settings = cast(
                "ScreenlexSettings", cast(Any, cls)(_env_file=env_file, **data)
            )
        else:
            settings = cls(**data)

        if cli_args:
            cli_data = {k: v for k, v in cli_args.items() if v is not None}
            if cli_data:
                updated_data = settings.model_dump()
                updated_data.update(cli_data)
                settings = cls(**updated_data)

        return settings


# Global settings instance
_settings: ScreenlexSettings | None = None
# Cache for config file paths that exist
_config_paths_cache: list[Path | str] | None = None


def _get_config_paths() -> list[Path | str]:
    """Get list of config file paths to check.

    Returns paths in priority order (later files override earlier).
    """
    global _config_paths_cache

    if _config_paths_cache is not None:
        return _config_paths_cache

    potential_paths = [
        Path.home() / ".config" / "screenlex" / "config.yaml",
        Path.home() / ".config" / "screenlex" / "config.json",
        Path.home() / ".config" / "screenlex" / "config.toml",
        Path.cwd() / "screenlex.yaml",
        Path.cwd() / "screenlex.json",
        Path.cwd() / "screenlex.toml",
    ]

    existing_paths: list[Path | str] = []
    for path in potential_paths:
        try:
            if path.is_file():
                existing_paths.append(path)
        except OSError:
            continue

    _config_paths_cache = existing_paths
    return existing_paths


def get_settings() -> ScreenlexSettings:
    """Get the global settings instance.

    Returns:
        Global ScreenlexSettings instance.
    """
    global _settings
    if _settings is None:
        config_paths = _get_config_paths()
        if config_paths:
            _settings = ScreenlexSettings.from_multiple_sources(
                config_files=config_paths
            )
        else:
            _settings = ScreenlexSettings.from_env()
    return _settings


def set_settings(settings: ScreenlexSettings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def clear_settings_cache() -> None:
    """Clear the global settings cache.

    Forces get_settings() to re-read environment variables and configuration
    files on the next call.
    """
    global _settings, _config_paths_cache
    _settings = None
    _config_paths_cache = None


def reset_settings() -> None:
    """Reset the global settings instance."""
    clear_settings_cache()


def get_settings_for_cli(
    config_file: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> ScreenlexSettings:
    """Get settings for CLI commands with consistent precedence.

    Args:
        config_file: Optional specific config file to load. If not provided,
                    uses standard config locations.
        cli_overrides: Dictionary of CLI argument overrides.
                      Only non-None values are applied.

    Returns:
        ScreenlexSettings instance with all sources merged.

    Raises:
        FileNotFoundError: If config_file is specified but doesn't exist.
    """
    if config_file:
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")
        return ScreenlexSettings.from_multiple_sources(
            config_files=[config_file],
            cli_args=cli_overrides,
        )

    settings = get_settings()
    if cli_overrides:
        filtered_overrides = {k: v for k, v in cli_overrides.items() if v is not None}
        if filtered_overrides:
            data = settings.model_dump()
            data.update(filtered_overrides)
            settings = ScreenlexSettings(**data)

    return settings
