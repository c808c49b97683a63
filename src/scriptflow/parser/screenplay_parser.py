"""Screenplay text parser front end."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

from scriptflow.config import ScriptFlowSettings, get_logger, get_settings
from scriptflow.exceptions import ScriptFlowError, check_input_file
from scriptflow.models import Document, FormatTag, ScriptLine
from scriptflow.parser.profiles import ParseStrategy, get_profile
from scriptflow.parser.scanner import LineScanner

logger = get_logger(__name__)


@dataclass
class ParseResult:
    """Classified lines plus a summary of how the input was read."""

    lines: list[ScriptLine]
    strategy: ParseStrategy
    source: str | None = None
    format_counts: Counter[FormatTag] = field(default_factory=Counter)

    def __post_init__(self) -> None:
        if not self.format_counts:
            self.format_counts = Counter(line.format for line in self.lines)

    def count(self, fmt: FormatTag) -> int:
        return self.format_counts.get(fmt, 0)

    def to_document(self) -> Document:
        return Document.from_lines(self.lines)

    def to_dict(self) -> dict[str, object]:
        return {
            "strategy": self.strategy.value,
            "source": self.source,
            "counts": {fmt.value: n for fmt, n in self.format_counts.items()},
            "lines": [
                {"text": line.text, "format": line.format.value} for line in self.lines
            ],
        }


class ScreenplayParser:
    """Parse raw screenplay text with a chosen strategy."""

    def __init__(
        self,
        strategy: ParseStrategy | str | None = None,
        settings: ScriptFlowSettings | None = None,
    ) -> None:
        """Initialize the parser.

        Args:
            strategy: Parsing strategy; defaults to the configured one
            settings: Settings to read the default strategy from
        """
        if strategy is None:
            strategy = (settings or get_settings()).default_strategy
        try:
            self.strategy = ParseStrategy(strategy)
        except ValueError as e:
            raise ScriptFlowError(
                message=f"Unknown parsing strategy: {strategy}",
                hint="Use one of: "
                + ", ".join(member.value for member in ParseStrategy),
                details={"strategy": str(strategy)},
            ) from e
        self.scanner = LineScanner(get_profile(self.strategy))

    def parse(self, content: str | None) -> ParseResult:
        """Parse raw text into classified lines.

        Args:
            content: Raw screenplay text

        Returns:
            ParseResult holding the lines and per-format counts
        """
        lines = self.scanner.scan(content)
        return ParseResult(lines=lines, strategy=self.strategy)

    def parse_file(self, file_path: Path | str) -> ParseResult:
        """Parse a plain text screenplay file.

        Args:
            file_path: Path to the text file

        Returns:
            ParseResult with ``source`` set to the file path
        """
        path = check_input_file(file_path)
        logger.debug(f"Parsing screenplay file: {path}")
        content = path.read_text(encoding="utf-8")
        result = self.parse(content)
        result.source = str(path)
        logger.info(
            "Parsed screenplay file",
            path=str(path),
            strategy=self.strategy.value,
            lines=len(result.lines),
        )
        return result

    def parse_to_document(self, content: str | None) -> Document:
        """Parse text into an unpaginated single-page Document."""
        return self.parse(content).to_document()


def parse_text(
    text: str | None, strategy: ParseStrategy | str = ParseStrategy.STRICT
) -> list[ScriptLine]:
    """Classify raw screenplay text.

    Args:
        text: Raw text in any line-ending convention
        strategy: Strategy chosen by the caller for this input's provenance

    Returns:
        Committed lines in source order
    """
    return ScreenplayParser(strategy).parse(text).lines
