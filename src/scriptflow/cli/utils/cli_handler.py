"""Unified CLI handler for standardized error handling and output."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import typer
from rich.console import Console

from scriptflow.cli.formatters.json_formatter import JsonFormatter
from scriptflow.config import get_logger
from scriptflow.exceptions import ScriptFlowError, ValidationError, check_input_file

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
        logger.error("Command failed", error=str(error), error_type=type(error).__name__)

        if json_output:
            self.console.print(
                self.json_formatter.format_error_response(error, exit_code),
                markup=False,
                highlight=False,
                soft_wrap=True,
            )
        elif isinstance(error, ValidationError):
            self.console.print(f"[red]Validation Error: {error.message}[/red]")
        elif isinstance(error, ScriptFlowError):
            self.console.print(f"[red]Error: {error.message}[/red]")
            if error.hint:
                self.console.print(f"[yellow]Hint: {error.hint}[/yellow]")
        else:
            self.console.print(f"[red]Error: {error}[/red]")

        raise typer.Exit(exit_code)

    def handle_success(
        self, message: str, data: Any = None, json_output: bool = False
    ) -> None:
        if json_output:
            self.console.print(
                self.json_formatter.format_success(message, data),
                markup=False,
                highlight=False,
                soft_wrap=True,
            )
        else:
            self.console.print(f"[green]{message}[/green]")

    def read_stdin(self, required: bool = True) -> str | None:
        """Read content from stdin.

        Args:
            required: Whether stdin content is required

        Returns:
            Content from stdin or None

        Raises:
            typer.Exit: If required and no content available
        """
        if sys.stdin.isatty():
            if required:
                self.console.print(
                    "[red]Error: No input provided. "
                    "Pass a file or pipe text on stdin[/red]"
                )
                raise typer.Exit(1)
            return None
        return sys.stdin.read()

    def read_input(self, path: Path | None) -> str:
        """Read a file argument, falling back to stdin when it is omitted."""
        if path is None:
            return self.read_stdin() or ""
        return check_input_file(path).read_text(encoding="utf-8")
