"""Custom exception hierarchy for scriptflow with helpful error messages."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class ScriptFlowError(Exception):
    """Base exception with helpful formatting for all scriptflow errors.

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


class ConfigurationError(ScriptFlowError):
    """Configuration errors including invalid settings and missing config files."""

    pass


class MarkupError(ScriptFlowError):
    """Tagged markup errors raised by the explicit formatting entry points."""

    pass


class ValidationError(ScriptFlowError):
    """Input validation errors with details about what was expected."""

    pass


class ScriptFlowFileNotFoundError(ScriptFlowError):
    """File not found errors with helpful path information."""

    pass


def check_input_file(path: Path | str) -> Path:
    """Check that a screenplay input file exists and is readable.

    Args:
        path: File to check

    Returns:
        The path as a Path object

    Raises:
        ScriptFlowFileNotFoundError: If the file is missing or is a directory
    """
    file_path = Path(path)
    if not file_path.exists():
        raise ScriptFlowFileNotFoundError(
            message=f"Input file not found: {file_path}",
            hint="Check the path, or pipe the text on stdin instead",
            details={"path": str(file_path), "current_dir": str(Path.cwd())},
        )
    if file_path.is_dir():
        raise ScriptFlowFileNotFoundError(
            message=f"Expected a file but got a directory: {file_path}",
            hint="Pass a plain text or markup file",
            details={"path": str(file_path)},
        )
    return file_path


def check_config_keys(config: dict[str, Any]) -> None:
    """Check for common configuration mistakes.

    Args:
        config: Configuration dictionary to validate

    Raises:
        ConfigurationError: With hints about correct configuration keys
    """
    wrong_keys = {
        "strategy": "default_strategy",
        "lines": "lines_per_page",
        "page_lines": "lines_per_page",
        "debounce": "sweep_debounce_seconds",
        "cache_size": "match_cache_size",
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
