"""Tests for CLI formatters."""

import io
import json

from rich.console import Console

from scriptflow.cli.formatters.base import OutputFormat
from scriptflow.cli.formatters.json_formatter import JsonFormatter
from scriptflow.cli.formatters.script_formatter import ScriptLinesFormatter
from scriptflow.cli.formatters.table_formatter import TableFormatter
from scriptflow.exceptions import ScriptFlowError
from scriptflow.models import FormatTag, ScriptLine
from scriptflow.parser.profiles import ParseStrategy
from scriptflow.parser.screenplay_parser import ParseResult
from tests.cli_fixtures import strip_ansi_codes


def make_result():
    return ParseResult(
        lines=[
            ScriptLine(text="INT. OFFICE - DAY", format=FormatTag.HEADER),
            ScriptLine(text="JOHN", format=FormatTag.SPEAKER),
            ScriptLine(text="[whispers] Hi & bye.", format=FormatTag.DIALOG),
        ],
        strategy=ParseStrategy.STRICT,
    )


class TestScriptLinesFormatter:
    """Test classified line output."""

    def test_format_table(self):
        """Table output lists each line with its format."""
        output = strip_ansi_codes(ScriptLinesFormatter().format(make_result()))

        assert "3 lines (strict)" in output
        assert "Scene Header" in output
        assert "[whispers] Hi & bye." in output
        assert "Speaker: 1" in output

    def test_format_table_with_source(self):
        """The source file is named in the table title."""
        result = make_result()
        result.source = "draft.txt"

        output = strip_ansi_codes(ScriptLinesFormatter().format(result))
        assert "draft.txt: 3 lines (strict)" in output

    def test_format_json(self):
        """JSON output carries strategy, counts and lines."""
        data = json.loads(
            ScriptLinesFormatter().format(make_result(), OutputFormat.JSON)
        )
        assert data["counts"] == {"header": 1, "speaker": 1, "dialog": 1}
        assert data["lines"][1] == {"text": "JOHN", "format": "speaker"}

    def test_format_markup(self):
        """Markup output is the serialized lines."""
        output = ScriptLinesFormatter().format(make_result(), OutputFormat.MARKUP)
        assert output.splitlines()[-1] == (
            "<dialog>[whispers] Hi &amp; bye.</dialog>"
        )

    def test_print_does_not_wrap(self):
        """Printed output is written verbatim, even past the console width."""
        buffer = io.StringIO()
        console = Console(file=buffer, width=20)
        result = make_result()

        ScriptLinesFormatter(console).print(result, OutputFormat.MARKUP)

        assert buffer.getvalue().splitlines()[0] == (
            "<header>INT. OFFICE - DAY</header>"
        )


class TestJsonFormatter:
    """Test JSON formatting."""

    def test_format_dict(self):
        """Test formatting a plain dictionary."""
        assert json.loads(JsonFormatter().format({"pages": 2})) == {"pages": 2}

    def test_format_model(self):
        """Test formatting pydantic models."""
        line = ScriptLine(text="Hi.", format=FormatTag.DIALOG)
        assert json.loads(JsonFormatter().format(line)) == {
            "text": "Hi.",
            "format": "dialog",
        }

    def test_format_scalar(self):
        """Test formatting a bare value."""
        assert json.loads(JsonFormatter().format(3)) == {"value": 3}

    def test_format_success(self):
        """Test success responses with and without data."""
        formatter = JsonFormatter()
        assert json.loads(formatter.format_success("Done")) == {
            "success": True,
            "message": "Done",
        }
        assert json.loads(formatter.format_success("Done", {"n": 1}))["data"] == {
            "n": 1
        }

    def test_format_error_response(self):
        """Structured errors report their message and hint."""
        error = ScriptFlowError("Bad strategy", hint="Use strict")
        data = json.loads(JsonFormatter().format_error_response(error, 2))
        assert data == {
            "success": False,
            "error": "Bad strategy",
            "code": 2,
            "hint": "Use strict",
        }

    def test_format_error_response_plain_exception(self):
        """Plain exceptions fall back to their string form."""
        data = json.loads(JsonFormatter().format_error_response(ValueError("boom")))
        assert data == {"success": False, "error": "boom", "code": 1}


class TestTableFormatter:
    """Test table formatting."""

    DATA = [
        {"page": 1, "first_line": 0, "starts_with": "INT. OFFICE"},
        {"page": 2, "first_line": 40, "starts_with": "[beat]"},
    ]

    def test_format_table(self):
        """Test rich table output."""
        output = strip_ansi_codes(TableFormatter().format(self.DATA))
        assert "First Line" in output
        assert "INT. OFFICE" in output
        assert "[beat]" in output

    def test_format_csv(self):
        """Test CSV output."""
        output = TableFormatter().format(self.DATA, OutputFormat.CSV)
        assert output.splitlines() == [
            "page,first_line,starts_with",
            "1,0,INT. OFFICE",
            "2,40,[beat]",
        ]

    def test_format_markdown(self):
        """Test markdown output."""
        output = TableFormatter().format(self.DATA, OutputFormat.MARKDOWN)
        assert output.splitlines()[:2] == [
            "| page | first_line | starts_with |",
            "| --- | --- | --- |",
        ]

    def test_markdown_escapes_pipes(self):
        """Test that cell text cannot break the markdown table."""
        output = TableFormatter().format(
            [{"starts_with": "A | B"}], OutputFormat.MARKDOWN
        )
        assert output.splitlines()[2] == r"| A \| B |"

    def test_empty_data(self):
        """Test formatting with no rows."""
        assert TableFormatter().format([]) == "No data to display"

    def test_summary_table(self):
        """Test key-value summary output."""
        formatter = TableFormatter()
        table = strip_ansi_codes(
            formatter.create_summary_table("Status", {"lines_per_page": 55})
        )
        text = formatter.create_summary_table(
            "Status", {"lines_per_page": 55}, OutputFormat.TEXT
        )

        assert "Lines Per Page" in table
        assert text == "Status:\n\n  Lines Per Page: 55"
