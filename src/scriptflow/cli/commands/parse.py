"""Parse command: classify screenplay text into typed lines."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from scriptflow.cli.formatters.base import OutputFormat
from scriptflow.cli.formatters.script_formatter import ScriptLinesFormatter
from scriptflow.cli.utils.cli_handler import CLIHandler
from scriptflow.config import get_logger, get_settings_for_cli
from scriptflow.parser.screenplay_parser import ScreenplayParser

logger = get_logger(__name__)
console = Console()


def parse_command(
    path: Annotated[
        Path | None,
        typer.Argument(help="Screenplay text file (reads stdin when omitted)"),
    ] = None,
    strategy: Annotated[
        str | None,
        typer.Option(
            "--strategy",
            "-s",
            help="Parsing strategy: strict, lenient or continuation",
        ),
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    markup: Annotated[
        bool, typer.Option("--markup", help="Output tagged markup")
    ] = False,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file (YAML, TOML, or JSON)",
        ),
    ] = None,
) -> None:
    """Classify each line of a screenplay.

    Choose the strategy by where the text came from: strict for clean
    drafts, lenient for loosely formatted notes, continuation for text
    recovered from converted documents with hard-wrapped lines.
    """
    handler = CLIHandler(console)
    formatter = ScriptLinesFormatter(console)

    try:
        settings = get_settings_for_cli(config_file=config)
        parser = ScreenplayParser(strategy, settings=settings)
        if path is not None:
            result = parser.parse_file(path)
        else:
            result = parser.parse(handler.read_input(None))

        if json_output:
            formatter.print(result, OutputFormat.JSON)
        elif markup:
            formatter.print(result, OutputFormat.MARKUP)
        else:
            formatter.print(result, OutputFormat.TEXT)
    except typer.Exit:
        raise
    except Exception as e:
        handler.handle_error(e, json_output)
