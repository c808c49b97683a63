"""Format flow and manual format cycling for interactive editing."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType

from scriptflow.models import Document, FormatTag

# Format of the line created when a line of the key format is committed
FORMAT_FLOW = MappingProxyType(
    {
        FormatTag.HEADER: FormatTag.ACTION,
        FormatTag.ACTION: FormatTag.SPEAKER,
        FormatTag.SPEAKER: FormatTag.DIALOG,
        FormatTag.DIALOG: FormatTag.SPEAKER,
        FormatTag.DIRECTIONS: FormatTag.ACTION,
    }
)

FORMAT_CYCLE: tuple[FormatTag, ...] = (
    FormatTag.ACTION,
    FormatTag.SPEAKER,
    FormatTag.DIALOG,
    FormatTag.HEADER,
    FormatTag.DIRECTIONS,
)

DEFAULT_FORMAT = FormatTag.ACTION
FIRST_LINE_FORMAT = FormatTag.HEADER


class CycleDirection(int, Enum):
    """Step through FORMAT_CYCLE forwards or backwards."""

    FORWARD = 1
    BACKWARD = -1


def next_flow_format(fmt: FormatTag | None) -> FormatTag:
    """Successor format for a line committed with ``fmt``."""
    if fmt is None:
        return DEFAULT_FORMAT
    return FORMAT_FLOW.get(fmt, DEFAULT_FORMAT)


def cycle_format(
    fmt: FormatTag | None, direction: CycleDirection | int = CycleDirection.FORWARD
) -> FormatTag:
    """Next format in the manual cycle.

    Formats outside the cycle (chapter breaks) map to ACTION rather than
    stepping.
    """
    if fmt not in FORMAT_CYCLE:
        return DEFAULT_FORMAT
    step = CycleDirection(direction).value
    return FORMAT_CYCLE[(FORMAT_CYCLE.index(fmt) + step) % len(FORMAT_CYCLE)]


def initial_format(document: Document) -> FormatTag:
    """Format for a line about to be created in ``document``.

    Only meaningful for an empty document, whose first line is a header.
    """
    return FIRST_LINE_FORMAT if document.is_empty else DEFAULT_FORMAT
