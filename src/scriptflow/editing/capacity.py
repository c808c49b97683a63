"""Capacity oracles that decide whether a page's content overflows.

The rendering surface normally supplies the oracle (it knows the real
measured heights). The oracles here estimate height from text so the
engine can run headless, e.g. from the command line or in tests.
"""

from __future__ import annotations

import textwrap
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from scriptflow.models import FormatTag, ScriptLine
from scriptflow.parser.patterns import is_transition

CapacityOracle = Callable[[Sequence[ScriptLine]], bool]


@dataclass(frozen=True)
class ElementLayout:
    """Column width and blank rows above one element type."""

    width: int
    rows_before: int = 0


# Standard screenplay page at 10 characters per inch
DEFAULT_LAYOUTS = {
    FormatTag.HEADER: ElementLayout(width=60, rows_before=1),
    FormatTag.ACTION: ElementLayout(width=60, rows_before=1),
    FormatTag.SPEAKER: ElementLayout(width=38, rows_before=1),
    FormatTag.DIALOG: ElementLayout(width=35),
    FormatTag.DIRECTIONS: ElementLayout(width=25),
    FormatTag.CHAPTER_BREAK: ElementLayout(width=60, rows_before=1),
}
TRANSITION_LAYOUT = ElementLayout(width=20, rows_before=1)
FULL_WIDTH = 60


class LineCountCapacity:
    """Overflow once a page holds more than ``max_lines`` lines."""

    def __init__(self, max_lines: int) -> None:
        if max_lines < 1:
            raise ValueError("max_lines must be at least 1")
        self.max_lines = max_lines

    def __call__(self, lines: Sequence[ScriptLine]) -> bool:
        return len(lines) > self.max_lines


class RowBudgetCapacity:
    """Overflow once the estimated printed rows exceed the page budget.

    Each line takes its word-wrapped row count plus the blank rows its
    element type puts above it. The first line of a page gets no leading
    blank rows.
    """

    def __init__(self, max_rows: int = 55, page_width: int = FULL_WIDTH) -> None:
        if max_rows < 1:
            raise ValueError("max_rows must be at least 1")
        self.max_rows = max_rows
        self.page_width = page_width
        # Narrow pages shrink every column in proportion
        scale = min(1.0, page_width / FULL_WIDTH)
        self.layouts = {
            fmt: ElementLayout(max(1, int(layout.width * scale)), layout.rows_before)
            for fmt, layout in DEFAULT_LAYOUTS.items()
        }
        self.transition_layout = ElementLayout(
            max(1, int(TRANSITION_LAYOUT.width * scale)), TRANSITION_LAYOUT.rows_before
        )

    def layout_for(self, line: ScriptLine) -> ElementLayout:
        if line.format is FormatTag.ACTION and is_transition(line.text):
            return self.transition_layout
        return self.layouts[line.format]

    def line_rows(self, line: ScriptLine, first_on_page: bool = False) -> int:
        layout = self.layout_for(line)
        wrapped = textwrap.wrap(line.text, width=layout.width) if line.text else []
        rows = max(1, len(wrapped))
        if not first_on_page:
            rows += layout.rows_before
        return rows

    def rows(self, lines: Sequence[ScriptLine]) -> int:
        """Estimated printed rows for a run of lines starting a page."""
        return sum(
            self.line_rows(line, first_on_page=index == 0)
            for index, line in enumerate(lines)
        )

    def __call__(self, lines: Sequence[ScriptLine]) -> bool:
        return self.rows(lines) > self.max_rows
