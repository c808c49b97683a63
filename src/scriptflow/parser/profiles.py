"""Strategy profiles that parameterize the line scanner.

Each profile captures the differences between clean manuscripts, loosely
formatted plain text and text recovered from converted documents. The
scanning algorithm itself lives in :mod:`scriptflow.parser.scanner`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from scriptflow.models import FormatTag
from scriptflow.parser import patterns

SpeakerPredicate = Callable[[str, str | None, str | None], bool]


class ParseStrategy(str, Enum):
    """Available parsing strategies, chosen by the caller per input source."""

    STRICT = "strict"
    LENIENT = "lenient"
    CONTINUATION = "continuation"


@dataclass(frozen=True)
class StrategyProfile:
    """Predicate overrides and accumulation policy for one strategy."""

    strategy: ParseStrategy
    is_heading: Callable[[str], bool]
    is_speaker: SpeakerPredicate
    skip_line: Callable[[str], bool]
    # Parentheticals outside a speech are DIRECTIONS rather than plain text
    parentheticals_outside_dialog: bool = True
    # Letter-initial lines inside a dialog block are dialog
    dialog_fallback: bool = True
    # Consecutive lines of these formats accumulate into one block
    merge_formats: frozenset[FormatTag] = frozenset()
    # Blank lines in a row that commit the block and end the dialog block
    blank_commit_threshold: int | None = None
    join_wrapped_lines: bool = False
    # Direction lines in a row after which the next ambiguous line is dialog
    direction_run_limit: int | None = None
    # Direction lines in a row after which the scanner state resets
    direction_reset_limit: int | None = None


def _skip_noise_or_artifact(line: str) -> bool:
    return patterns.is_noise(line) or patterns.is_page_artifact(line)


STRICT_PROFILE = StrategyProfile(
    strategy=ParseStrategy.STRICT,
    is_heading=patterns.is_scene_heading,
    is_speaker=patterns.is_speaker,
    skip_line=patterns.is_noise,
    parentheticals_outside_dialog=False,
    dialog_fallback=False,
    direction_run_limit=3,
    direction_reset_limit=5,
)

LENIENT_PROFILE = StrategyProfile(
    strategy=ParseStrategy.LENIENT,
    is_heading=patterns.is_lenient_heading,
    is_speaker=patterns.is_lenient_speaker,
    skip_line=patterns.is_noise,
    merge_formats=frozenset({FormatTag.DIALOG, FormatTag.ACTION}),
    blank_commit_threshold=2,
)

CONTINUATION_PROFILE = StrategyProfile(
    strategy=ParseStrategy.CONTINUATION,
    is_heading=patterns.is_scene_heading,
    is_speaker=patterns.is_speaker,
    skip_line=_skip_noise_or_artifact,
    merge_formats=frozenset({FormatTag.DIALOG, FormatTag.ACTION}),
    blank_commit_threshold=1,
    join_wrapped_lines=True,
)

_PROFILES = {
    ParseStrategy.STRICT: STRICT_PROFILE,
    ParseStrategy.LENIENT: LENIENT_PROFILE,
    ParseStrategy.CONTINUATION: CONTINUATION_PROFILE,
}


def get_profile(strategy: ParseStrategy | str) -> StrategyProfile:
    """Return the profile for a strategy name or enum member.

    Raises:
        ValueError: If the name is not a known strategy
    """
    return _PROFILES[ParseStrategy(strategy)]
