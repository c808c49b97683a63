"""Markup commands: format prefixed text and validate tagged markup."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from scriptflow.cli.utils.cli_handler import CLIHandler
from scriptflow.config import get_logger
from scriptflow.parser.markup import MarkupFormatter, validate_markup

logger = get_logger(__name__)
console = Console()


def format_command(
    path: Annotated[
        Path | None,
        typer.Argument(help="Prefixed text or markup file (reads stdin when omitted)"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write markup to this file"),
    ] = None,
) -> None:
    """Convert HEADER:/SPEAKER:/DIALOG:/ACTION: prefixed text to markup.

    Lines without a prefix become action and ``---`` becomes a chapter
    break. Existing markup is normalized to one element per line.
    """
    handler = CLIHandler(console)

    try:
        content = handler.read_input(path)
        formatted = MarkupFormatter().format(content)
        if output is not None:
            output.write_text(formatted + "\n", encoding="utf-8")
            handler.handle_success(f"Wrote markup to {output}")
        else:
            console.print(formatted, markup=False, highlight=False, soft_wrap=True)
    except typer.Exit:
        raise
    except Exception as e:
        handler.handle_error(e)


def validate_command(
    path: Annotated[
        Path | None,
        typer.Argument(help="Markup file (reads stdin when omitted)"),
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Check that every line of a file is a recognised markup element."""
    handler = CLIHandler(console)

    try:
        content = handler.read_input(path)
        valid = validate_markup(content)
    except typer.Exit:
        raise
    except Exception as e:
        handler.handle_error(e, json_output)
        return

    if valid:
        handler.handle_success("Markup is valid", json_output=json_output)
        return

    logger.info("Markup failed validation", path=str(path) if path else "<stdin>")
    if json_output:
        console.print(
            handler.json_formatter.format_error_response("Markup is not valid"),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
    else:
        console.print("[red]Markup is not valid[/red]")
    raise typer.Exit(1)
