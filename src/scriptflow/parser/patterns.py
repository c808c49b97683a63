"""Classification predicates shared by every parsing strategy.

All predicates are pure. They take the line under test and, where context
matters, the raw previous and next physical lines (``None`` at the edges of
the document). Strategies combine them with their own bookkeeping.
"""

from __future__ import annotations

import re

from scriptflow.models import FormatTag
from scriptflow.parser.normalizer import clean_text, is_blank

SLUGLINE_TOKENS = ("INT./EXT.", "EXT./INT.", "INT/EXT.", "I/E.", "INT.", "EXT.")

_SCENE_HEADING = re.compile(
    r"^(?:" + "|".join(re.escape(token) for token in SLUGLINE_TOKENS) + r")"
    # Forced heading: a single leading dot, as in ".SNIPER SCOPE POV"
    r"|^\.[^.\s]",
    re.IGNORECASE,
)
_LENIENT_HEADING_PREFIX = re.compile(r"^(?:SCENE|ACT|CHAPTER|LOCATION)[\s\d]*[:.\-]")
_LENIENT_SLUGLINE = re.compile(r"^(?:INT|EXT|[IE]/[IE]|EST)[\s.]+")

_SPEAKER_EXTENSION = (
    r"(?:\s*\((?:V\.?\s?O\.?|O\.?\s?S\.?|O\.?\s?C\.?|CONT['’]?D|CONTINUED)\))?"
)
_SPEAKER = re.compile(rf"^[A-Z][A-Z0-9 '’.\-]*{_SPEAKER_EXTENSION}$")
# Plain text exports often prefix names with markers such as "@" or "*"
_LENIENT_SPEAKER = re.compile(
    rf"^[^A-Za-z0-9\s]*\s*[A-Z][A-Z0-9 '’.@\-]*{_SPEAKER_EXTENSION}$"
)
_SPEAKER_MAX_LENGTH = 40

_NOISE = re.compile(r"^[-—–_*=~\s]+$")
_PAGE_NUMBER = re.compile(r"^\d+\.?$")
_CONTINUED_MARKER = re.compile(r"^\(?\s*CONT(?:INUED|['’]D)\s*\)?:?$", re.IGNORECASE)
_TERMINAL_PUNCTUATION = re.compile(r"[.!?]$")
_TRANSITION_SUFFIX = re.compile(r"\bTO:$")
_PUNCTUATION = re.compile(r"[^\w\s/]")

DIRECTION_MARKERS = frozenset(
    {
        "ANGLE ON",
        "BACK TO",
        "BACK TO PRESENT",
        "CLOSE ON",
        "CUT TO",
        "DISSOLVE TO",
        "FADE IN",
        "FADE OUT",
        "FADE TO",
        "FLASH CUT",
        "FLASHBACK",
        "INTERCUT",
        "MATCH CUT",
        "PAN TO",
        "POINT OF VIEW",
        "POV",
        "SCENE",
        "SMASH CUT",
        "TIME CUT",
        "TITLE",
        "TITLES",
        "TRANSITION",
        "WIPE TO",
    }
)

CAMERA_TERMS = frozenset(
    {
        "CAMERA",
        "ANGLE",
        "TRACKING",
        "MOVING",
        "CRANE",
        "DOLLY",
        "STEADICAM",
        "HANDHELD",
        "AERIAL",
        "UNDERWATER",
    }
)

TIME_INDICATORS = frozenset(
    {
        "LATER",
        "CONTINUOUS",
        "MOMENTS LATER",
        "SAME TIME",
        "MEANWHILE",
        "NIGHT",
        "DAY",
        "MORNING",
        "EVENING",
    }
)

_DIALOG_CONTEXT = frozenset({FormatTag.SPEAKER, FormatTag.DIRECTIONS, FormatTag.DIALOG})


def _words(line: str) -> list[str]:
    return _PUNCTUATION.sub("", clean_text(line).upper()).split()


def _starts_with_marker(words: list[str]) -> bool:
    for size in (3, 2, 1):
        if len(words) >= size and " ".join(words[:size]) in DIRECTION_MARKERS:
            return True
    return False


def _has_lowercase(text: str) -> bool:
    return any(ch.islower() for ch in text)


def is_scene_heading(line: str) -> bool:
    """Slugline such as ``INT. PARK - DAY`` or a forced ``.HEADING``."""
    return bool(_SCENE_HEADING.match(clean_text(line)))


def is_lenient_heading(line: str) -> bool:
    """Scene heading, or a loose ``SCENE 3:`` / ``ACT II.`` style marker."""
    cleaned = clean_text(line)
    if is_scene_heading(cleaned):
        return True
    upper = cleaned.upper()
    return bool(_LENIENT_HEADING_PREFIX.match(upper) or _LENIENT_SLUGLINE.match(upper))


def is_transition(line: str) -> bool:
    """All-caps transition or camera instruction such as ``CUT TO:``."""
    cleaned = clean_text(line)
    if not cleaned or _has_lowercase(cleaned):
        return False
    return _starts_with_marker(_words(cleaned)) or bool(
        _TRANSITION_SUFFIX.search(cleaned)
    )


def has_direction_vocabulary(line: str) -> bool:
    """Positive signal for action text: transition, camera or time vocabulary."""
    words = _words(line)
    if not words:
        return False
    return (
        _starts_with_marker(words)
        or words[-1] in CAMERA_TERMS
        or " ".join(words) in TIME_INDICATORS
    )


def _speaker_shape(line: str, pattern: re.Pattern[str]) -> bool:
    cleaned = clean_text(line)
    return (
        1 < len(cleaned) < _SPEAKER_MAX_LENGTH
        and not _has_lowercase(cleaned)
        and bool(pattern.match(cleaned))
        and not is_scene_heading(cleaned)
        and not is_transition(cleaned)
    )


def _fits_speaker_context(prev: str | None, nxt: str | None) -> bool:
    if not is_blank(prev):
        return False
    if is_blank(nxt):
        return True
    following = clean_text(nxt)
    return following.startswith("(") or following[0].isalpha()


def is_speaker(line: str, prev: str | None = None, nxt: str | None = None) -> bool:
    """Short, all-caps name preceded by a blank line and followed by dialog."""
    return _speaker_shape(line, _SPEAKER) and _fits_speaker_context(prev, nxt)


def is_lenient_speaker(
    line: str, prev: str | None = None, nxt: str | None = None
) -> bool:
    """Speaker test that tolerates leading markers such as ``@NAME``."""
    return _speaker_shape(line, _LENIENT_SPEAKER) and _fits_speaker_context(prev, nxt)


def looks_like_speaker(line: str | None) -> bool:
    """Context-free speaker shape, used when judging neighbouring lines."""
    return bool(line) and _speaker_shape(line, _SPEAKER)


def is_parenthetical(line: str | None) -> bool:
    """Line fully wrapped in balanced parentheses, e.g. ``(beat)``."""
    cleaned = clean_text(line)
    return (
        len(cleaned) >= 2
        and cleaned.startswith("(")
        and cleaned.endswith(")")
        and cleaned.count("(") == cleaned.count(")")
    )


def is_dialog(line: str, prev: str | None) -> bool:
    """Letter-initial line directly under a speaker or parenthetical."""
    cleaned = clean_text(line)
    if not cleaned or not cleaned[0].isalpha() or is_blank(prev):
        return False
    return looks_like_speaker(prev) or is_parenthetical(prev)


def is_dialog_continuation(line: str, last_format: FormatTag | None) -> bool:
    """Lower-case line continuing a speech after speaker, paren or dialog."""
    cleaned = clean_text(line)
    return bool(cleaned) and cleaned[0].islower() and last_format in _DIALOG_CONTEXT


def is_direction(line: str, prev: str | None = None, nxt: str | None = None) -> bool:
    """Descriptive action text: capitalized prose or known direction vocabulary."""
    cleaned = clean_text(line)
    if len(cleaned) < 2:
        return False
    if (
        is_scene_heading(cleaned)
        or is_speaker(cleaned, prev, nxt)
        or is_parenthetical(cleaned)
        or is_dialog(cleaned, prev)
    ):
        return False
    if has_direction_vocabulary(cleaned):
        return True
    return cleaned[0].isupper() and _has_lowercase(cleaned)


def is_noise(line: str) -> bool:
    """Separator rules like ``---`` or ``***``."""
    cleaned = clean_text(line)
    return bool(cleaned) and bool(_NOISE.match(cleaned))


def is_page_artifact(line: str) -> bool:
    """Page numbers and ``(CONTINUED)`` markers left behind by converters."""
    cleaned = clean_text(line)
    return bool(_PAGE_NUMBER.match(cleaned) or _CONTINUED_MARKER.match(cleaned))


def ends_sentence(text: str) -> bool:
    return bool(_TERMINAL_PUNCTUATION.search(text.rstrip()))


def starts_new_block(line: str) -> bool:
    """Whether a physical line opens a heading, speaker or parenthetical."""
    return is_scene_heading(line) or looks_like_speaker(line) or is_parenthetical(line)
