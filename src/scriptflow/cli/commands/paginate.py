"""Paginate command: lay screenplay lines out on pages."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from scriptflow.cli.formatters.base import OutputFormat
from scriptflow.cli.formatters.json_formatter import JsonFormatter
from scriptflow.cli.formatters.table_formatter import TableFormatter
from scriptflow.cli.utils.cli_handler import CLIHandler
from scriptflow.config import get_logger, get_settings_for_cli
from scriptflow.editing.capacity import RowBudgetCapacity
from scriptflow.editing.session import EditingSession
from scriptflow.parser.markup import MarkupFormatter

logger = get_logger(__name__)
console = Console()


class PageListFormat(str, Enum):
    """Layouts for the page listing."""

    TABLE = "table"
    CSV = "csv"
    MARKDOWN = "markdown"


def paginate_command(
    path: Annotated[
        Path | None,
        typer.Argument(help="Screenplay text or markup file (reads stdin when omitted)"),
    ] = None,
    strategy: Annotated[
        str | None,
        typer.Option("--strategy", "-s", help="Parsing strategy for plain text"),
    ] = None,
    lines_per_page: Annotated[
        int | None,
        typer.Option("--lines-per-page", "-l", help="Row budget of one page", min=1),
    ] = None,
    page_width: Annotated[
        int | None,
        typer.Option("--page-width", help="Characters per full-width row", min=10),
    ] = None,
    output_format: Annotated[
        PageListFormat,
        typer.Option("--format", "-f", help="Layout of the page listing"),
    ] = PageListFormat.TABLE,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file (YAML, TOML, or JSON)",
        ),
    ] = None,
) -> None:
    """Show where each page of a screenplay starts.

    Tagged markup input is loaded as is; plain text is classified first.
    """
    handler = CLIHandler(console)

    try:
        settings = get_settings_for_cli(
            config_file=config,
            cli_overrides={"lines_per_page": lines_per_page, "page_width": page_width},
        )
        capacity = RowBudgetCapacity(
            max_rows=settings.lines_per_page, page_width=settings.page_width
        )
        session = EditingSession(oracle=capacity, settings=settings)

        content = handler.read_input(path)
        if MarkupFormatter.has_markup(content):
            session.load_markup(content)
        else:
            session.import_text(content, strategy)

        document = session.document
        pages = [
            {
                "page": number,
                "first_line": first,
                "lines": len(page),
                "rows": capacity.rows(page.lines),
                "starts_with": page.lines[0].text[:40] if page.lines else "",
            }
            for number, (first, page) in enumerate(
                zip(document.page_boundaries(), document.pages, strict=True), start=1
            )
        ]

        if json_output:
            data = {
                "lines_per_page": settings.lines_per_page,
                "page_count": len(pages),
                "line_count": document.line_count,
                "pages": pages,
            }
            console.print(
                JsonFormatter().format(data),
                markup=False,
                highlight=False,
                soft_wrap=True,
            )
        elif output_format is PageListFormat.TABLE:
            console.print(
                TableFormatter(console).format(pages, OutputFormat.TABLE),
                markup=False,
                soft_wrap=True,
            )
            console.print(
                f"[bold]{len(pages)} page(s)[/bold], {document.line_count} lines, "
                f"{settings.lines_per_page} rows per page"
            )
        else:
            TableFormatter(console).print(pages, OutputFormat(output_format.value))
    except typer.Exit:
        raise
    except Exception as e:
        handler.handle_error(e, json_output)
