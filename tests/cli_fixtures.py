"""CLI test fixtures and utilities for automatic ANSI stripping.

Rich output carries color codes and box drawing characters that vary
between terminals; these helpers strip them so tests can assert on text.
"""

import json
import re
from typing import Any

import pytest
from typer.testing import CliRunner, Result

from scriptflow.cli.main import app


def strip_ansi_codes(text: str) -> str:
    """Strip ANSI escape sequences and box drawing characters from text.

    Args:
        text: Text potentially containing ANSI escape codes

    Returns:
        Text with all ANSI escape sequences removed
    """
    ansi_escape = re.compile(r"\x1b\[[0-9;]*m")
    text = ansi_escape.sub("", text)

    # Cursor movement, clearing, etc.
    ansi_extended = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")
    text = ansi_extended.sub("", text)

    ansi_windows = re.compile(r"\x1b\].*?\x07")
    text = ansi_windows.sub("", text)

    unicode_special = re.compile(r"[━─┏┓┗┛┃╭╮╰╯│├┤┬┴┼┡┩╇]")  # noqa: RUF001
    return unicode_special.sub("", text)


class CleanResult:
    """A wrapper around CliRunner Result that automatically strips ANSI codes."""

    def __init__(self, result: Result):
        self._result = result
        self._clean_output = None

    @property
    def exit_code(self) -> int:
        return self._result.exit_code

    @property
    def exception(self) -> BaseException | None:
        return self._result.exception

    @property
    def output(self) -> str:
        """Return the cleaned output."""
        if self._clean_output is None:
            self._clean_output = strip_ansi_codes(self._result.output)
        return self._clean_output

    def __contains__(self, text: str) -> bool:
        return text in self.output

    def assert_success(self, message: str = "") -> "CleanResult":
        """Assert that the command succeeded (exit code 0)."""
        assert self.exit_code == 0, (
            f"Command failed with exit code {self.exit_code}. "
            f"{message}\nOutput: {self.output}"
        )
        return self

    def assert_failure(
        self, exit_code: int | None = None, message: str = ""
    ) -> "CleanResult":
        """Assert that the command failed."""
        assert self.exit_code != 0, (
            f"Command succeeded unexpectedly. {message}\nOutput: {self.output}"
        )
        if exit_code is not None:
            assert self.exit_code == exit_code, (
                f"Expected exit code {exit_code}, got {self.exit_code}. "
                f"{message}\nOutput: {self.output}"
            )
        return self

    def assert_contains(self, *texts: str) -> "CleanResult":
        """Assert that all texts are in the output."""
        for text in texts:
            assert text in self.output, (
                f"Expected '{text}' in output, but not found.\nOutput: {self.output}"
            )
        return self

    def parse_json(self) -> dict[str, Any] | list[Any]:
        """Parse the output as JSON."""
        try:
            return json.loads(self.output)
        except json.JSONDecodeError as e:
            raise AssertionError(
                f"Failed to parse output as JSON: {e}\nOutput: {self.output}"
            ) from e


class CleanCliRunner(CliRunner):
    """A CliRunner that automatically returns CleanResult objects."""

    def invoke(self, *args, **kwargs) -> CleanResult:
        result = super().invoke(*args, **kwargs)
        return CleanResult(result)


@pytest.fixture
def clean_runner():
    """Create a CLI runner that automatically strips ANSI codes from output."""
    return CleanCliRunner()


@pytest.fixture
def cli_invoke(clean_runner):
    """Fixture that provides a function to invoke CLI commands with clean output."""

    def invoke(*args, **kwargs) -> CleanResult:
        return clean_runner.invoke(app, list(args), **kwargs)

    return invoke
