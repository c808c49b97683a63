"""Line scanner that turns raw screenplay text into classified lines.

One scanning engine serves every strategy; a :class:`StrategyProfile`
supplies the heading and speaker predicates, which lines to skip, and how
physical lines accumulate into logical lines.
"""

from __future__ import annotations

from dataclasses import dataclass

from scriptflow.config import get_logger
from scriptflow.models import Block, FormatTag, ScriptLine
from scriptflow.parser import patterns
from scriptflow.parser.normalizer import clean_text, is_blank, split_lines
from scriptflow.parser.profiles import StrategyProfile

logger = get_logger(__name__)

# Blocks that may absorb hard-wrapped continuation lines
JOINABLE_FORMATS = frozenset({FormatTag.DIALOG, FormatTag.ACTION})


@dataclass
class ScanState:
    """Per-scan bookkeeping threaded through classification."""

    in_dialog_block: bool = False
    last_format: FormatTag | None = None
    consecutive_directions: int = 0
    consecutive_blank_lines: int = 0

    def reset(self) -> None:
        self.in_dialog_block = False
        self.last_format = None
        self.consecutive_directions = 0
        self.consecutive_blank_lines = 0


class LineScanner:
    """Classify physical lines under one strategy profile."""

    def __init__(self, profile: StrategyProfile) -> None:
        self.profile = profile

    def scan(self, text: str | None) -> list[ScriptLine]:
        """Scan raw text into committed lines in source order.

        Args:
            text: Raw screenplay text; None and empty text are accepted

        Returns:
            Classified lines. When nothing classifiable is found the result
            is a single empty HEADER line, the seed of a new document.
        """
        raw = split_lines(text)
        state = ScanState()
        block = Block()
        output: list[ScriptLine] = []

        index = 0
        while index < len(raw):
            line = raw[index]
            if is_blank(line):
                self._handle_blank(state, block, output)
                index += 1
                continue

            state.consecutive_blank_lines = 0
            if self.profile.skip_line(line):
                index += 1
                continue

            prev = raw[index - 1] if index > 0 else None
            nxt = raw[index + 1] if index + 1 < len(raw) else None
            cleaned = clean_text(line)
            fmt = self.classify(cleaned, prev, nxt, state)
            self._accumulate(cleaned, fmt, block, output)
            self._update_state(fmt, state)
            index += 1

            if self.profile.join_wrapped_lines and block.format in JOINABLE_FORMATS:
                index = self._join_wrapped(raw, index, block)

        self._commit(block, output)

        if not output:
            return [ScriptLine(text="", format=FormatTag.HEADER)]

        logger.debug(
            "Scanned screenplay text",
            strategy=self.profile.strategy.value,
            physical_lines=len(raw),
            lines=len(output),
        )
        return output

    def classify(
        self,
        line: str,
        prev: str | None,
        nxt: str | None,
        state: ScanState,
    ) -> FormatTag:
        """Decide the format of one non-blank line.

        Tests run in order: heading, speaker, parenthetical, dialog, then
        the action fallback. The first match wins.
        """
        profile = self.profile
        if profile.is_heading(line):
            return FormatTag.HEADER
        if profile.is_speaker(line, prev, nxt):
            return FormatTag.SPEAKER
        if patterns.is_parenthetical(line) and (
            state.in_dialog_block or profile.parentheticals_outside_dialog
        ):
            return FormatTag.DIRECTIONS

        if state.in_dialog_block:
            if patterns.is_dialog(line, prev) or patterns.is_dialog_continuation(
                line, state.last_format
            ):
                return FormatTag.DIALOG
            if profile.dialog_fallback and line[0].isalpha():
                return FormatTag.DIALOG
            if (
                profile.direction_run_limit is not None
                and state.consecutive_directions > profile.direction_run_limit
                and not patterns.has_direction_vocabulary(line)
            ):
                return FormatTag.DIALOG

        # Generic directions and unrecognized lines are both ACTION; the
        # direction check only decides whether the fallback is logged.
        if not patterns.is_direction(line, prev, nxt):
            logger.debug(
                "Unrecognized line, using action",
                strategy=profile.strategy.value,
                line=line[:40],
            )
        return FormatTag.ACTION

    def _handle_blank(
        self, state: ScanState, block: Block, output: list[ScriptLine]
    ) -> None:
        state.consecutive_blank_lines += 1
        threshold = self.profile.blank_commit_threshold
        if threshold is not None and state.consecutive_blank_lines >= threshold:
            self._commit(block, output)
            state.in_dialog_block = False

    def _accumulate(
        self,
        text: str,
        fmt: FormatTag,
        block: Block,
        output: list[ScriptLine],
    ) -> None:
        if self._can_merge(text, fmt, block):
            block.append(text)
            return
        self._commit(block, output)
        block.start(text, fmt)

    def _can_merge(self, text: str, fmt: FormatTag, block: Block) -> bool:
        if fmt not in self.profile.merge_formats or block.format is not fmt:
            return False
        if fmt is FormatTag.ACTION:
            # Transitions stay on their own line
            return not (
                patterns.is_transition(text) or patterns.is_transition(block.text)
            )
        return True

    def _update_state(self, fmt: FormatTag, state: ScanState) -> None:
        profile = self.profile
        if fmt is FormatTag.HEADER:
            state.reset()
        elif fmt is FormatTag.SPEAKER:
            state.in_dialog_block = True
            state.consecutive_directions = 0
        elif fmt is FormatTag.DIALOG:
            state.consecutive_directions = 0
        else:
            state.consecutive_directions += 1
            if (
                profile.direction_reset_limit is not None
                and state.consecutive_directions > profile.direction_reset_limit
            ):
                state.reset()
        state.last_format = fmt

    def _join_wrapped(self, raw: list[str], index: int, block: Block) -> int:
        """Absorb hard-wrapped continuation lines into the open block.

        Returns:
            Index of the first physical line that was not absorbed
        """
        while index < len(raw):
            candidate = raw[index]
            if (
                is_blank(candidate)
                or self.profile.skip_line(candidate)
                or patterns.starts_new_block(candidate)
                or patterns.ends_sentence(block.text)
            ):
                break
            block.append(candidate)
            index += 1
        return index

    @staticmethod
    def _commit(block: Block, output: list[ScriptLine]) -> None:
        line = block.commit()
        if line is not None:
            output.append(line)

