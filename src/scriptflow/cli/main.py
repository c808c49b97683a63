"""Main CLI entry point."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from scriptflow import __version__
from scriptflow.cli.commands import (
    format_command,
    paginate_command,
    parse_command,
    validate_command,
)
from scriptflow.cli.formatters.json_formatter import JsonFormatter
from scriptflow.cli.formatters.table_formatter import TableFormatter
from scriptflow.cli.utils.cli_handler import CLIHandler
from scriptflow.config import (
    ScriptFlowSettings,
    configure_logging,
    get_logger,
    get_settings,
    set_settings,
)

logger = get_logger(__name__)
console = Console()

app = typer.Typer(
    name="scriptflow",
    help="Screenplay line classification and pagination",
    pretty_exceptions_enable=False,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="parse")(parse_command)
app.command(name="paginate")(paginate_command)
app.command(name="format")(format_command)
app.command(name="validate")(validate_command)


@app.command()
def status(
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show the effective scriptflow configuration."""
    handler = CLIHandler(console)

    try:
        settings = get_settings()
        status_info = {
            "version": __version__,
            "default_strategy": settings.default_strategy,
            "markup_tolerance": settings.markup_tolerance,
            "lines_per_page": settings.lines_per_page,
            "page_width": settings.page_width,
            "sweep_debounce_seconds": settings.sweep_debounce_seconds,
            "match_cache_size": settings.match_cache_size,
            "match_cache_ttl": settings.match_cache_ttl,
            "history_size": settings.history_size,
            "log_level": settings.log_level,
        }

        if json_output:
            console.print(
                JsonFormatter().format(status_info),
                markup=False,
                highlight=False,
                soft_wrap=True,
            )
        else:
            console.print(
                TableFormatter(console).create_summary_table(
                    "scriptflow Status", status_info
                ),
                markup=False,
                soft_wrap=True,
            )
    except Exception as e:
        handler.handle_error(e, json_output)


@app.callback()
def main_callback(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            envvar="SCRIPTFLOW_CONFIG",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging (INFO level)"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging", envvar="SCRIPTFLOW_DEBUG"),
    ] = False,
) -> None:
    """Configure global options."""
    overrides: dict[str, object] = {}
    if debug:
        overrides = {"log_level": "DEBUG", "debug": True}
    elif verbose:
        overrides = {"log_level": "INFO"}

    if not config and not overrides:
        return

    handler = CLIHandler(console)
    try:
        settings = ScriptFlowSettings.from_multiple_sources(
            config_files=[config] if config else None,
            cli_args=overrides,
        )
    except Exception as e:
        handler.handle_error(e)
        return

    set_settings(settings)
    configure_logging(settings)
    if config:
        logger.debug(f"Loaded configuration from {config}")
    if debug:
        logger.debug("Debug mode enabled")
    elif verbose:
        logger.info("Verbose mode enabled")


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
