"""Formatter for classified screenplay lines."""

from __future__ import annotations

import io
import json

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from scriptflow.cli.formatters.base import OutputFormat, OutputFormatter
from scriptflow.models import FormatTag
from scriptflow.parser.markup import serialize
from scriptflow.parser.screenplay_parser import ParseResult

FORMAT_STYLES = {
    FormatTag.HEADER: "bold cyan",
    FormatTag.ACTION: "white",
    FormatTag.SPEAKER: "bold yellow",
    FormatTag.DIALOG: "green",
    FormatTag.DIRECTIONS: "italic magenta",
    FormatTag.CHAPTER_BREAK: "dim",
}


class ScriptLinesFormatter(OutputFormatter[ParseResult]):
    """Render a parse result as a table, JSON or tagged markup."""

    def format(
        self, data: ParseResult, format_type: OutputFormat = OutputFormat.TEXT
    ) -> str:
        if format_type == OutputFormat.JSON:
            return json.dumps(data.to_dict(), indent=2)
        if format_type == OutputFormat.MARKUP:
            return serialize(data.lines)
        return self._format_table(data)

    def _format_table(self, data: ParseResult) -> str:
        title = f"{len(data.lines)} lines ({data.strategy.value})"
        if data.source:
            title = f"{data.source}: {title}"
        table = Table(title=title, show_header=True, header_style="bold magenta")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Format")
        table.add_column("Text", overflow="fold")

        for index, line in enumerate(data.lines):
            style = FORMAT_STYLES[line.format]
            table.add_row(
                str(index),
                f"[{style}]{line.format.display_name}[/{style}]",
                escape(line.text),
            )

        string_io = io.StringIO()
        temp_console = Console(file=string_io, force_terminal=True, width=120)
        temp_console.print(table)
        temp_console.print(self._format_counts(data))
        return string_io.getvalue()

    @staticmethod
    def _format_counts(data: ParseResult) -> str:
        parts = [
            f"{fmt.display_name}: {data.count(fmt)}"
            for fmt in FormatTag
            if data.count(fmt)
        ]
        return ", ".join(parts)
