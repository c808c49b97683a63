"""Table output formatter for CLI."""

from __future__ import annotations

import csv
import io
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from scriptflow.cli.formatters.base import OutputFormat, OutputFormatter


def _markdown_cell(value: Any) -> str:
    return str(value).replace("|", r"\|")


class TableFormatter(OutputFormatter[list[dict[str, Any]]]):
    """Formatter for tabular data output."""

    def format(
        self, data: list[dict[str, Any]], format_type: OutputFormat = OutputFormat.TABLE
    ) -> str:
        if not data:
            return "No data to display"

        if format_type == OutputFormat.CSV:
            return self._format_csv(data)
        if format_type == OutputFormat.MARKDOWN:
            return self._format_markdown(data)
        return self._format_table(data)

    def _render(self, table: Table) -> str:
        string_io = io.StringIO()
        temp_console = Console(file=string_io, force_terminal=True, width=120)
        temp_console.print(table)
        return string_io.getvalue()

    def _format_table(self, data: list[dict[str, Any]]) -> str:
        columns = list(data[0].keys())
        table = Table(show_header=True, header_style="bold magenta")
        for col in columns:
            table.add_column(col.replace("_", " ").title())
        for row in data:
            table.add_row(*[escape(str(row.get(col, ""))) for col in columns])
        return self._render(table)

    def _format_csv(self, data: list[dict[str, Any]]) -> str:
        output = io.StringIO()
        writer = csv.DictWriter(
            output, fieldnames=list(data[0].keys()), lineterminator="\n"
        )
        writer.writeheader()
        writer.writerows(data)
        return output.getvalue()

    def _format_markdown(self, data: list[dict[str, Any]]) -> str:
        columns = list(data[0].keys())
        lines = [
            "| " + " | ".join(columns) + " |",
            "| " + " | ".join(["---"] * len(columns)) + " |",
        ]
        for row in data:
            lines.append(
                "| "
                + " | ".join(_markdown_cell(row.get(col, "")) for col in columns)
                + " |"
            )
        return "\n".join(lines)

    def create_summary_table(
        self,
        title: str,
        data: dict[str, Any],
        format_type: OutputFormat = OutputFormat.TABLE,
    ) -> str:
        """Create a summary table from key-value pairs.

        Args:
            title: Table title
            data: Dictionary of key-value pairs
            format_type: Output format type

        Returns:
            Formatted string
        """
        if format_type == OutputFormat.TABLE:
            table = Table(title=title, show_header=False)
            table.add_column("Property", style="cyan")
            table.add_column("Value", style="white")
            for key, value in data.items():
                table.add_row(key.replace("_", " ").title(), escape(str(value)))
            return self._render(table)
        lines = [f"{title}:", ""]
        for key, value in data.items():
            lines.append(f"  {key.replace('_', ' ').title()}: {value}")
        return "\n".join(lines)
