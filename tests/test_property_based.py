"""Property-based tests using Hypothesis.

Random screenplay fragments, markup documents and page layouts check the
properties every input must satisfy: classification is total and
deterministic, markup survives a round trip, and pagination is stable.
"""

import string

from hypothesis import given, settings
from hypothesis import strategies as st

from scriptflow.editing.cache import MatchCache
from scriptflow.editing.capacity import LineCountCapacity, RowBudgetCapacity
from scriptflow.editing.flow import FORMAT_CYCLE, CycleDirection, cycle_format
from scriptflow.editing.pagination import PaginationEngine
from scriptflow.models import Document, FormatTag, ScriptLine
from scriptflow.parser import ParseStrategy, parse_markup, parse_text, serialize

SCRIPT_FRAGMENTS = st.sampled_from(
    [
        "INT. KITCHEN - DAY",
        "EXT. ROOF - NIGHT",
        "SCENE 4:",
        "JOHN",
        "MARY (V.O.)",
        "@JANE",
        "(beat)",
        "Hello there.",
        "she said quietly",
        "He walks to the door and",
        "opens it.",
        "CUT TO:",
        "FADE IN:",
        "12.",
        "(CONTINUED)",
        "---",
        "",
        "   ",
    ]
)
SCRIPTS = st.lists(SCRIPT_FRAGMENTS, max_size=30).flatmap(
    lambda lines: st.sampled_from(["\n", "\r\n", "\r"]).map(lambda nl: nl.join(lines))
)
SAFE_TEXT = st.text(
    alphabet=string.ascii_letters + string.digits + " .,:;!?'\"&<>()-/#",
    max_size=60,
).map(str.strip)


def script_lines():
    return st.builds(
        lambda fmt, text: ScriptLine(
            text="" if fmt is FormatTag.CHAPTER_BREAK else text, format=fmt
        ),
        st.sampled_from(list(FormatTag)),
        SAFE_TEXT,
    )


class TestClassificationProperties:
    """Properties of the line scanner."""

    @given(text=SCRIPTS, strategy=st.sampled_from(list(ParseStrategy)))
    @settings(max_examples=200)
    def test_classification_is_total(self, text, strategy):
        """Every input produces at least one clean, classified line."""
        lines = parse_text(text, strategy)

        assert lines
        for line in lines:
            assert isinstance(line.format, FormatTag)
            assert "\n" not in line.text
            assert "\r" not in line.text
            assert line.text == line.text.strip()
        if len(lines) > 1:
            assert all(line.text for line in lines)

    @given(text=SCRIPTS, strategy=st.sampled_from(list(ParseStrategy)))
    def test_classification_is_deterministic(self, text, strategy):
        """The same text always yields the same lines."""
        assert parse_text(text, strategy) == parse_text(text, strategy)

    @given(text=SCRIPTS)
    def test_line_endings_do_not_matter(self, text):
        """CRLF and CR input classify exactly like LF input."""
        unix = text.replace("\r\n", "\n").replace("\r", "\n")
        for strategy in ParseStrategy:
            assert parse_text(text, strategy) == parse_text(unix, strategy)


class TestMarkupProperties:
    """Properties of the markup codec."""

    @given(lines=st.lists(script_lines(), min_size=1, max_size=20))
    def test_round_trip(self, lines):
        """Serialized lines parse back to the same lines."""
        assert parse_markup(serialize(lines)) == lines

    @given(text=st.text(max_size=200))
    def test_parse_never_raises(self, text):
        """Arbitrary text parses to at least one line."""
        assert parse_markup(text)
        assert parse_markup(text, "passthrough")


class TestPaginationProperties:
    """Properties of overflow correction."""

    @given(
        count=st.integers(min_value=0, max_value=60),
        capacity=st.integers(min_value=1, max_value=10),
    )
    def test_pages_respect_line_capacity(self, count, capacity):
        """After a sweep every page fits and no line is lost or reordered."""
        lines = [
            ScriptLine(text=f"Line {i}.", format=FormatTag.ACTION) for i in range(count)
        ]
        document = Document.from_lines(lines)
        engine = PaginationEngine(LineCountCapacity(capacity))

        engine.sweep(document)

        assert document.lines() == lines
        assert all(len(page) <= capacity for page in document.pages)
        assert engine.sweep(document) == 0

    @given(
        lines=st.lists(script_lines(), max_size=40),
        max_rows=st.integers(min_value=1, max_value=20),
    )
    def test_pages_respect_row_budget(self, lines, max_rows):
        """Every page fits its row budget unless it holds a single line."""
        oracle = RowBudgetCapacity(max_rows=max_rows)
        document = Document.from_lines(lines)
        engine = PaginationEngine(oracle)

        engine.sweep(document)

        assert document.lines() == lines
        for page in document.pages:
            assert len(page) <= 1 or not oracle(page.lines)
        assert engine.sweep(document) == 0


class TestEditingProperties:
    """Properties of the format cycle and match cache."""

    @given(
        fmt=st.sampled_from(FORMAT_CYCLE),
        steps=st.lists(st.sampled_from(list(CycleDirection)), max_size=20),
    )
    def test_cycle_steps_are_reversible(self, fmt, steps):
        """Undoing each step in reverse order returns to the start."""
        current = fmt
        for step in steps:
            current = cycle_format(current, step)
        for step in reversed(steps):
            current = cycle_format(current, -step.value)
        assert current is fmt

    @given(
        keys=st.lists(st.text(min_size=1, max_size=5), max_size=50),
        max_size=st.integers(min_value=1, max_value=10),
    )
    def test_cache_never_exceeds_max_size(self, keys, max_size):
        """The cache holds at most max_size entries, newest always present."""
        cache = MatchCache(max_size=max_size, clock=lambda: 0.0)
        for key in keys:
            cache.set(key, key.upper())
            assert len(cache) <= max_size
            assert cache.get(key) == key.upper()
