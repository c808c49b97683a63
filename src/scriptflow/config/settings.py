"""scriptflow configuration settings."""

from __future__ import annotations

import json
import os
import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from scriptflow.exceptions import ConfigurationError, check_config_keys


class ScriptFlowSettings(BaseSettings):
    """scriptflow configuration settings.

    Settings are loaded with the following precedence (highest to lowest):
    1. CLI arguments (when provided via command flags)
       Example: scriptflow paginate script.txt --lines-per-page 50

    2. Config file values (YAML, TOML, or JSON)
       Example: scriptflow --config myconfig.yaml
       Multiple files: Later files override earlier ones

    3. Environment variables (prefixed with SCRIPTFLOW_)
       Example: export SCRIPTFLOW_LINES_PER_PAGE=50

    4. .env file (in current directory or specified path)
       Example: SCRIPTFLOW_LOG_LEVEL=DEBUG in .env file

    5. Default values (defined in field declarations below)

    Use 'scriptflow status' to see the effective configuration after all
    sources are merged.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCRIPTFLOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Parsing settings
    default_strategy: str = Field(
        default="strict",
        description="Parsing strategy used when none is given (strict, lenient, "
        "continuation)",
        pattern="^(strict|lenient|continuation)$",
    )
    markup_tolerance: str = Field(
        default="drop",
        description="What to do with unknown tags when reading markup (drop, "
        "passthrough)",
        pattern="^(drop|passthrough)$",
    )

    # Pagination settings
    lines_per_page: int = Field(
        default=55,
        description="Row budget of one page",
        ge=1,
    )
    page_width: int = Field(
        default=60,
        description="Characters per row for full-width elements",
        ge=10,
    )
    sweep_debounce_seconds: float = Field(
        default=0.3,
        description="Delay after the last edit before the full overflow sweep runs",
        ge=0.0,
    )

    # Autocomplete settings
    match_cache_size: int = Field(
        default=1000,
        description="Maximum number of memoized autocomplete matches per session",
        ge=1,
    )
    match_cache_ttl: float = Field(
        default=60.0,
        description="Seconds before a memoized autocomplete match expires",
        gt=0.0,
    )

    # History settings
    history_size: int = Field(
        default=100,
        description="Maximum number of undo states kept per editing session",
        ge=2,
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
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    log_format: str = Field(
        default="console",
        description="Log output format (console, json, structured)",
        pattern="^(console|json|structured)$",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional log file path",
    )

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Path | None:
        """Expand environment variables and resolve path."""
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

    @field_validator(
        "log_format", "default_strategy", "markup_tolerance", mode="before"
    )
    @classmethod
    def normalize_lowercase(cls, v: Any) -> str:
        """Normalize enumerated string settings to lowercase."""
        if isinstance(v, str):
            return v.strip().lower()
        raise ValueError(f"Expected a string, got {type(v).__name__}")

    @classmethod
    def from_env(cls) -> ScriptFlowSettings:
        """Create settings from environment variables."""
        return cls()

    @classmethod
    def from_file(cls, config_path: Path | str) -> ScriptFlowSettings:
        """Load settings from a configuration file.

        Args:
            config_path: Path to configuration file (YAML, TOML, or JSON).

        Returns:
            Settings loaded from the file.

        Raises:
            ConfigurationError: If file format is not supported.
            FileNotFoundError: If config file doesn't exist.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        suffix = config_path.suffix.lower()

        if suffix in {".yml", ".yaml"}:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        elif suffix == ".toml":
            with config_path.open("rb") as f:
                data = tomllib.load(f)
        elif suffix == ".json":
            with config_path.open(encoding="utf-8") as f:
                data = json.load(f)
        else:
            raise ConfigurationError(
                message=f"Unsupported configuration file format: {suffix}",
                hint="Use one of the supported formats: .yml, .yaml, .toml, or .json",
                details={
                    "file": str(config_path),
                    "detected_format": suffix,
                    "supported_formats": [".yml", ".yaml", ".toml", ".json"],
                },
            )

        check_config_keys(data)

        return cls(**data)

    @classmethod
    def from_multiple_sources(
        cls,
        config_files: list[Path | str] | None = None,
        cli_args: dict[str, Any] | None = None,
    ) -> ScriptFlowSettings:
        """Load settings with proper precedence from multiple sources.

        Precedence (highest to lowest):
        1. CLI arguments
        2. Config files (last file wins)
        3. Environment variables
        4. .env file
        5. Default values

        Args:
            config_files: List of config files to load (later files override earlier).
            cli_args: Dictionary of CLI arguments.

        Returns:
            Merged settings from all sources.
        """
        data: dict[str, Any] = {}

        if config_files:
            for config_file in config_files:
                try:
                    file_settings = cls.from_file(config_file)
                    data.update(file_settings.model_dump(exclude_unset=True))
                except FileNotFoundError:
                    from scriptflow.config.logging import get_logger as _get_logger

                    logger = _get_logger("scriptflow.config.settings")
                    logger.warning(
                        "Configuration file not found, using defaults",
                        config_file=str(config_file),
                    )

        settings = cls(**data)

        if cli_args:
            cli_data = {k: v for k, v in cli_args.items() if v is not None}
            if cli_data:
                updated_data = settings.model_dump()
                updated_data.update(cli_data)
                settings = cls(**updated_data)

        return settings


# Global settings instance
_settings: ScriptFlowSettings | None = None
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
        # User config in .config directory (XDG standard)
        Path.home() / ".config" / "scriptflow" / "config.yaml",
        Path.home() / ".config" / "scriptflow" / "config.toml",
        Path.home() / ".config" / "scriptflow" / "config.json",
        # Project config in current directory
        Path.cwd() / "scriptflow.yaml",
        Path.cwd() / "scriptflow.toml",
        Path.cwd() / "scriptflow.json",
    ]

    existing_paths: list[Path | str] = []
    for path in potential_paths:
        try:
            if path.exists() and path.is_file():
                existing_paths.append(path)
        except OSError:
            continue

    _config_paths_cache = existing_paths
    return existing_paths


def get_settings() -> ScriptFlowSettings:
    """Get the global settings instance.

    Returns:
        Global ScriptFlowSettings instance.
    """
    global _settings
    if _settings is None:
        config_paths = _get_config_paths()
        if config_paths:
            _settings = ScriptFlowSettings.from_multiple_sources(
                config_files=config_paths
            )
        else:
            _settings = ScriptFlowSettings.from_env()
    return _settings


def set_settings(settings: ScriptFlowSettings) -> None:
    """Set the global settings instance.

    Args:
        settings: Settings instance to use globally.
    """
    global _settings
    _settings = settings


def clear_settings_cache() -> None:
    """Clear the global settings cache.

    This forces get_settings() to re-read from environment variables
    and configuration files on the next call.
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
) -> ScriptFlowSettings:
    """Get settings for CLI commands with consistent precedence.

    Args:
        config_file: Optional specific config file to load. If not provided,
                    uses standard config locations.
        cli_overrides: Dictionary of CLI argument overrides (e.g.,
                      lines_per_page). Only non-None values are applied.

    Returns:
        ScriptFlowSettings instance with all sources merged.

    Raises:
        FileNotFoundError: If config_file is specified but doesn't exist.
    """
    if config_file:
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")
        return ScriptFlowSettings.from_multiple_sources(
            config_files=[config_file],
            cli_args=cli_overrides,
        )

    settings = get_settings()
    if cli_overrides:
        filtered_overrides = {k: v for k, v in cli_overrides.items() if v is not None}
        if filtered_overrides:
            data = settings.model_dump()
            data.update(filtered_overrides)
            settings = ScriptFlowSettings(**data)

    return settings
