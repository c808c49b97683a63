"""Tagged markup serialization for classified screenplay lines.

Each logical line is stored as ``<tag>escaped text</tag>`` on its own line,
with the tag drawn from the :class:`FormatTag` vocabulary. Chapter breaks
are the void element ``<chapter-break />``.
"""

from __future__ import annotations

import html
import re
from collections.abc import Iterable
from enum import Enum
from xml.sax.saxutils import escape as _xml_escape

from scriptflow.config import get_logger
from scriptflow.exceptions import MarkupError
from scriptflow.models import Document, FormatTag, ScriptLine
from scriptflow.parser.normalizer import normalize_line_endings

logger = get_logger(__name__)

CHAPTER_BREAK_MARKUP = f"<{FormatTag.CHAPTER_BREAK.value} />"
EMPTY_DOCUMENT_MARKUP = f"<{FormatTag.HEADER.value}></{FormatTag.HEADER.value}>"

_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}

_DECLARATIONS = re.compile(r"<\?xml[^>]*\?>|<!DOCTYPE[^>]*>", re.IGNORECASE)
_ELEMENT = re.compile(
    r"<(?P<void>[A-Za-z][A-Za-z-]*)\s*/>"
    r"|<(?P<open>[A-Za-z][A-Za-z-]*)>(?P<text>.*?)</(?P=open)\s*>",
    re.DOTALL,
)
_TAG_LINE = re.compile(r"^<([A-Za-z][A-Za-z-]*)>.*</\1>$", re.DOTALL)
_VOID_TAG_LINE = re.compile(r"^<([A-Za-z][A-Za-z-]*)\s*/>$")
_BETWEEN_TAGS = re.compile(r">\s+<")

# Line prefixes understood by MarkupFormatter, longest first
_PREFIX_RULES = (
    ("DIRECTIONS:", FormatTag.DIRECTIONS),
    ("SPEAKER:", FormatTag.SPEAKER),
    ("HEADER:", FormatTag.HEADER),
    ("DIALOG:", FormatTag.DIALOG),
    ("ACTION:", FormatTag.ACTION),
)
_CHAPTER_BREAK_TEXT = "---"


class MarkupTolerance(str, Enum):
    """What to do with unknown tags and text outside any tag."""

    DROP = "drop"
    PASSTHROUGH = "passthrough"


def escape(text: str) -> str:
    """Escape ``& < > " '`` for use inside a markup element."""
    return _xml_escape(text, _XML_ENTITIES)


def unescape(text: str) -> str:
    """Reverse :func:`escape`, also resolving numeric character references."""
    return html.unescape(text)


def serialize_line(line: ScriptLine) -> str:
    tag = line.format.value
    if line.format is FormatTag.CHAPTER_BREAK:
        return CHAPTER_BREAK_MARKUP
    return f"<{tag}>{escape(line.text)}</{tag}>"


def serialize(content: Document | Iterable[ScriptLine]) -> str:
    """Serialize lines (or a whole document) to tagged markup.

    Args:
        content: A Document or any iterable of ScriptLine

    Returns:
        One element per line, newline separated. An empty input serializes
        as a single empty header element.
    """
    lines = content.lines() if isinstance(content, Document) else list(content)
    if not lines:
        return EMPTY_DOCUMENT_MARKUP
    return "\n".join(serialize_line(line) for line in lines)


def _stray_lines(segment: str) -> list[str]:
    return [part.strip() for part in segment.splitlines() if part.strip()]


def parse_markup(
    markup: str | None,
    tolerance: MarkupTolerance | str = MarkupTolerance.DROP,
) -> list[ScriptLine]:
    """Parse tagged markup back into classified lines.

    Malformed input never raises: unknown elements and text outside any
    element are either dropped or kept as ACTION lines depending on
    ``tolerance``.

    Args:
        markup: Markup produced by :func:`serialize` or a compatible writer
        tolerance: Handling of unrecognised content

    Returns:
        Lines in document order; a single empty HEADER line when nothing
        usable was found
    """
    tolerance = MarkupTolerance(tolerance)
    passthrough = tolerance is MarkupTolerance.PASSTHROUGH
    content = _DECLARATIONS.sub("", normalize_line_endings(markup or ""))

    lines: list[ScriptLine] = []
    dropped = 0
    position = 0
    for match in _ELEMENT.finditer(content):
        stray = _stray_lines(content[position : match.start()])
        position = match.end()
        if stray:
            if passthrough:
                lines.extend(
                    ScriptLine(text=unescape(text), format=FormatTag.ACTION)
                    for text in stray
                )
            else:
                dropped += len(stray)

        tag_name = match.group("void") or match.group("open")
        fmt = FormatTag.from_tag(tag_name)
        text = unescape((match.group("text") or "").strip())
        if fmt is FormatTag.CHAPTER_BREAK:
            lines.append(ScriptLine(text="", format=FormatTag.CHAPTER_BREAK))
        elif fmt is not None and match.group("open"):
            lines.append(ScriptLine(text=text, format=fmt))
        elif passthrough and text:
            lines.append(ScriptLine(text=text, format=FormatTag.ACTION))
        else:
            dropped += 1

    trailing = _stray_lines(content[position:])
    if passthrough:
        lines.extend(
            ScriptLine(text=unescape(text), format=FormatTag.ACTION) for text in trailing
        )
    else:
        dropped += len(trailing)

    if dropped:
        logger.debug("Dropped unrecognized markup", count=dropped)

    if not lines:
        return [ScriptLine(text="", format=FormatTag.HEADER)]
    return lines


def _require_content(content: object) -> str:
    if not isinstance(content, str):
        raise MarkupError(
            message="Markup content must be a string",
            hint="Pass the script text, not a parsed object",
            details={"type": type(content).__name__},
        )
    if not content.strip():
        raise MarkupError(
            message="Markup content is empty",
            hint="Provide at least one line of script text",
        )
    return content


def _standardize_lines(content: str) -> list[str]:
    return [
        line.strip()
        for line in normalize_line_endings(content).split("\n")
        if line.strip()
    ]


def _is_tag_line(line: str) -> bool:
    match = _TAG_LINE.match(line) or _VOID_TAG_LINE.match(line)
    return match is not None and FormatTag.from_tag(match.group(1)) is not None


def validate_markup(content: str) -> bool:
    """Check that every non-blank line is a single recognised element.

    Raises:
        MarkupError: If content is not a string or is empty
    """
    content = _require_content(content)
    return all(_is_tag_line(line) for line in _standardize_lines(content))


class MarkupFormatter:
    """Turn prefixed plain text or loose markup into canonical markup.

    Plain text lines may carry a ``HEADER:``, ``SPEAKER:``, ``DIALOG:``,
    ``ACTION:`` or ``DIRECTIONS:`` prefix; ``---`` marks a chapter break and
    anything else becomes action.
    """

    def format(self, content: str) -> str:
        """Format content into canonical markup.

        Args:
            content: Prefixed plain text or existing markup

        Returns:
            Canonical markup, one element per line

        Raises:
            MarkupError: If content is not a string or is empty
        """
        content = _require_content(content).strip()
        if self.has_markup(content):
            candidate = self.clean_markup(content)
            if validate_markup(candidate):
                return serialize(parse_markup(candidate))
            logger.debug("Markup failed validation, formatting as plain text")
        return serialize(self.format_plain_text(content))

    @staticmethod
    def has_markup(content: str) -> bool:
        return any(_is_tag_line(line) for line in _standardize_lines(content))

    @staticmethod
    def clean_markup(content: str) -> str:
        """Strip declarations and put one element on each line."""
        content = _DECLARATIONS.sub("", content)
        content = _BETWEEN_TAGS.sub(">\n<", content)
        return "\n".join(_standardize_lines(content))

    @staticmethod
    def format_plain_text(content: str) -> list[ScriptLine]:
        lines = []
        for line in _standardize_lines(content):
            if line == _CHAPTER_BREAK_TEXT:
                lines.append(ScriptLine(text="", format=FormatTag.CHAPTER_BREAK))
                continue
            upper = line.upper()
            for prefix, fmt in _PREFIX_RULES:
                if upper.startswith(prefix):
                    lines.append(ScriptLine(text=line[len(prefix) :].strip(), format=fmt))
                    break
            else:
                lines.append(ScriptLine(text=line, format=FormatTag.ACTION))
        return lines
