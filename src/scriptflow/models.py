"""Data models for classified screenplay lines, pages and documents."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict


class FormatTag(str, Enum):
    """Screenplay line formats.

    The value is also the tag name used by the tagged markup serialization.
    """

    HEADER = "header"
    ACTION = "action"
    SPEAKER = "speaker"
    DIALOG = "dialog"
    DIRECTIONS = "directions"
    CHAPTER_BREAK = "chapter-break"

    @property
    def display_name(self) -> str:
        """Human readable name for UI output."""
        return _DISPLAY_NAMES[self]

    @classmethod
    def from_tag(cls, tag: str) -> FormatTag | None:
        """Look up a format by markup tag name, ignoring case."""
        try:
            return cls(tag.strip().lower())
        except ValueError:
            return None


_DISPLAY_NAMES = {
    FormatTag.HEADER: "Scene Header",
    FormatTag.ACTION: "Action",
    FormatTag.SPEAKER: "Speaker",
    FormatTag.DIALOG: "Dialog",
    FormatTag.DIRECTIONS: "Directions",
    FormatTag.CHAPTER_BREAK: "Chapter Break",
}


class ScriptLine(BaseModel):
    """A committed, classified screenplay line.

    Lines are immutable: editing produces a new ScriptLine.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    text: str
    format: FormatTag

    def with_text(self, text: str) -> ScriptLine:
        """Return a copy of this line carrying different text."""
        return ScriptLine(text=text, format=self.format)

    def with_format(self, fmt: FormatTag) -> ScriptLine:
        """Return a copy of this line with a different format."""
        return ScriptLine(text=self.text, format=fmt)

    def as_pair(self) -> tuple[str, FormatTag]:
        return (self.text, self.format)


@dataclass
class Block:
    """Accumulator that merges physical lines into one logical line.

    A block is either empty (no text, no format) or holds both.
    """

    text: str = ""
    format: FormatTag | None = None

    @property
    def is_empty(self) -> bool:
        return not self.text

    def start(self, text: str, fmt: FormatTag) -> None:
        """Begin a new logical line; the block must be empty."""
        self.text = text
        self.format = fmt

    def append(self, text: str) -> None:
        """Space-join more text onto the block."""
        cleaned = " ".join(text.split())
        if not cleaned:
            return
        self.text = f"{self.text} {cleaned}" if self.text else cleaned

    def commit(self) -> ScriptLine | None:
        """Convert the block to a ScriptLine and reset it.

        Returns:
            The committed line, or None when the block held nothing usable
        """
        line = None
        if self.text and self.format is not None:
            line = ScriptLine(text=self.text, format=self.format)
        self.text = ""
        self.format = None
        return line


@dataclass
class Page:
    """An ordered run of lines bounded by the rendering surface's capacity."""

    lines: list[ScriptLine] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[ScriptLine]:
        return iter(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines


@dataclass
class Document:
    """Ordered pages that together own every line of a screenplay."""

    pages: list[Page] = field(default_factory=lambda: [Page()])

    @classmethod
    def from_lines(cls, lines: Iterable[ScriptLine]) -> Document:
        """Build a document with every line on a single page.

        Pagination is applied separately by the pagination engine.
        """
        return cls(pages=[Page(lines=list(lines))])

    def lines(self) -> list[ScriptLine]:
        """Flat line sequence across all pages."""
        return [line for page in self.pages for line in page.lines]

    @property
    def line_count(self) -> int:
        return sum(len(page) for page in self.pages)

    @property
    def is_empty(self) -> bool:
        return all(page.is_empty for page in self.pages)

    def page_boundaries(self) -> list[int]:
        """Flat index of the first line of every page.

        Empty pages report the index where their first line would go.
        """
        boundaries = []
        offset = 0
        for page in self.pages:
            boundaries.append(offset)
            offset += len(page)
        return boundaries

    def locate(self, flat_index: int) -> tuple[int, int]:
        """Map a flat line index to (page index, index within page).

        Raises:
            IndexError: If the index is outside the document
        """
        if flat_index < 0:
            raise IndexError(f"line index out of range: {flat_index}")
        remaining = flat_index
        for page_index, page in enumerate(self.pages):
            if remaining < len(page):
                return page_index, remaining
            remaining -= len(page)
        raise IndexError(f"line index out of range: {flat_index}")

    def flat_index(self, page_index: int, line_index: int) -> int:
        """Inverse of locate()."""
        return sum(len(page) for page in self.pages[:page_index]) + line_index

    def line_at(self, flat_index: int) -> ScriptLine:
        page_index, line_index = self.locate(flat_index)
        return self.pages[page_index].lines[line_index]
