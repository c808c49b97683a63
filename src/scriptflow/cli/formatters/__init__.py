"""Output formatters for the scriptflow CLI."""

from __future__ import annotations

from scriptflow.cli.formatters.base import OutputFormat, OutputFormatter
from scriptflow.cli.formatters.json_formatter import JsonFormatter
from scriptflow.cli.formatters.script_formatter import ScriptLinesFormatter
from scriptflow.cli.formatters.table_formatter import TableFormatter

__all__ = [
    "JsonFormatter",
    "OutputFormat",
    "OutputFormatter",
    "ScriptLinesFormatter",
    "TableFormatter",
]
