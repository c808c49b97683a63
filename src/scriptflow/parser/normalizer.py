"""Raw text normalization ahead of classification."""

from __future__ import annotations

import re

_LINE_ENDINGS = re.compile(r"\r\n?")
_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_line_endings(text: str) -> str:
    """Convert Windows (``\\r\\n``) and old Mac (``\\r``) endings to ``\\n``."""
    return _LINE_ENDINGS.sub("\n", text)


def split_lines(text: str | None) -> list[str]:
    """Split raw text into physical lines.

    Args:
        text: Raw text in any line-ending convention

    Returns:
        Physical lines without their terminators; empty input gives no lines
    """
    if not text:
        return []
    return normalize_line_endings(text).split("\n")


def clean_text(line: str | None) -> str:
    """Strip a line and collapse internal whitespace runs to one space."""
    if not line:
        return ""
    return _WHITESPACE_RUN.sub(" ", line.strip())


def is_blank(line: str | None) -> bool:
    """True for missing or whitespace-only lines."""
    return line is None or not line.strip()
