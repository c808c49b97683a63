"""Interactive editing session over one paginated document."""

from __future__ import annotations

from scriptflow.config import ScriptFlowSettings, get_logger, get_settings
from scriptflow.editing.autocomplete import Autocomplete
from scriptflow.editing.cache import MatchCache
from scriptflow.editing.capacity import CapacityOracle, RowBudgetCapacity
from scriptflow.editing.debounce import Debouncer
from scriptflow.editing.flow import (
    CycleDirection,
    cycle_format,
    initial_format,
    next_flow_format,
)
from scriptflow.editing.history import EditHistory, Snapshot
from scriptflow.editing.pagination import PaginationEngine
from scriptflow.exceptions import ValidationError
from scriptflow.models import Document, FormatTag, Page, ScriptLine
from scriptflow.parser.markup import MarkupTolerance, parse_markup, serialize
from scriptflow.parser.profiles import ParseStrategy
from scriptflow.parser.screenplay_parser import ParseResult, ScreenplayParser

logger = get_logger(__name__)


class EditingSession:
    """Line-by-line editing of a screenplay with live pagination.

    The session owns one Document and a cursor, the flat index of the line
    being edited. Every mutation re-checks the page it touched right away
    and re-arms a debounced sweep over the whole document. Sessions are not
    thread-safe; drive each one from a single thread or event loop.
    """

    def __init__(
        self,
        document: Document | None = None,
        oracle: CapacityOracle | None = None,
        settings: ScriptFlowSettings | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            document: Document to edit; a new empty one when omitted
            oracle: Page capacity check supplied by the rendering surface.
                Defaults to a row estimate sized from settings.
            settings: Settings to use instead of the global ones
        """
        self.settings = settings or get_settings()
        self.document = document if document is not None else Document()
        if oracle is None:
            oracle = RowBudgetCapacity(
                max_rows=self.settings.lines_per_page,
                page_width=self.settings.page_width,
            )
        self.pagination = PaginationEngine(oracle)
        self.debouncer = Debouncer(self.settings.sweep_debounce_seconds, self.sweep)
        self.autocomplete = Autocomplete(
            MatchCache(
                max_size=self.settings.match_cache_size,
                ttl=self.settings.match_cache_ttl,
            )
        )
        self.cursor: int | None = None if self.document.is_empty else 0
        self.history = EditHistory(self.settings.history_size)
        self.history.record(self._snapshot())

    # Queries

    @property
    def current_line(self) -> ScriptLine | None:
        if self.cursor is None:
            return None
        return self.document.line_at(self.cursor)

    def lines(self) -> list[ScriptLine]:
        return self.document.lines()

    def page_boundaries(self) -> list[int]:
        return self.document.page_boundaries()

    def to_markup(self) -> str:
        return serialize(self.document)

    # Line editing

    def commit_line(self, cursor: int | None = None) -> ScriptLine:
        """Commit the current line and open its successor.

        Text before ``cursor`` stays on the current line; text after it
        moves to the new line. The new line's format follows the format
        flow from the current line's format. On an empty document this
        creates the first line, a scene header.

        Args:
            cursor: Character offset of the split; end of line when omitted

        Returns:
            The newly created line, which becomes the current line
        """
        if self.cursor is None:
            return self._seed_first_line()

        page_index, line_index = self.document.locate(self.cursor)
        page = self.document.pages[page_index]
        current = page.lines[line_index]
        offset = self._clamp_offset(current.text, cursor)

        successor = ScriptLine(
            text=current.text[offset:], format=next_flow_format(current.format)
        )
        page.lines[line_index] = current.with_text(current.text[:offset])
        page.lines.insert(line_index + 1, successor)
        self.cursor += 1

        logger.debug(
            "Committed line",
            format=current.format.value,
            next_format=successor.format.value,
            cursor=self.cursor,
        )
        self._after_mutation(page_index, structural=True)
        return successor

    def cycle_format(
        self, direction: CycleDirection | int = CycleDirection.FORWARD
    ) -> FormatTag:
        """Step the current line's format through the manual cycle."""
        current = self._require_current()
        fmt = cycle_format(current.format, direction)
        self._replace_current(current.with_format(fmt), structural=True)
        return fmt

    def set_format(self, fmt: FormatTag | str) -> FormatTag:
        fmt = FormatTag(fmt)
        current = self._require_current()
        self._replace_current(current.with_format(fmt), structural=True)
        return fmt

    def insert_text(self, text: str, offset: int | None = None) -> ScriptLine:
        """Insert typed text into the current line at ``offset``."""
        current = self._require_current()
        position = self._clamp_offset(current.text, offset)
        updated = current.with_text(
            current.text[:position] + text + current.text[position:]
        )
        self._replace_current(updated)
        return updated

    def replace_text(self, text: str) -> ScriptLine:
        current = self._require_current()
        updated = current.with_text(text)
        self._replace_current(updated)
        return updated

    def delete_line(self) -> ScriptLine | None:
        """Remove the current line.

        The cursor stays at the same index, or moves to the new last line.

        Returns:
            The removed line, or None on an empty document
        """
        if self.cursor is None:
            return None
        page_index, line_index = self.document.locate(self.cursor)
        removed = self.document.pages[page_index].lines.pop(line_index)

        remaining = self.document.line_count
        self.cursor = min(self.cursor, remaining - 1) if remaining else None
        self._after_mutation(page_index, structural=True)
        return removed

    def merge_with_previous(self) -> bool:
        """Join the current line onto the end of the previous one.

        The merged line keeps the previous line's format, as backspace at
        the start of a line does.

        Returns:
            False when there is no previous line
        """
        if not self.cursor:
            return False
        previous_index = self.cursor - 1
        prev_page, prev_line = self.document.locate(previous_index)
        page_index, line_index = self.document.locate(self.cursor)

        previous = self.document.pages[prev_page].lines[prev_line]
        current = self.document.pages[page_index].lines.pop(line_index)
        self.document.pages[prev_page].lines[prev_line] = previous.with_text(
            previous.text + current.text
        )
        self.cursor = previous_index
        self._after_mutation(prev_page, structural=True)
        return True

    def move_cursor(self, flat_index: int) -> ScriptLine:
        try:
            line = self.document.line_at(flat_index)
        except IndexError as e:
            raise ValidationError(
                message=f"No line at index {flat_index}",
                hint=f"Use an index between 0 and {self.document.line_count - 1}",
                details={"index": flat_index, "line_count": self.document.line_count},
            ) from e
        self.cursor = flat_index
        self.autocomplete.invalidate()
        return line

    # Bulk loading

    def import_text(
        self, text: str, strategy: ParseStrategy | str | None = None
    ) -> ParseResult:
        """Replace the document with classified plain text."""
        parser = ScreenplayParser(strategy, settings=self.settings)
        result = parser.parse(text)
        self._reset(result.lines)
        self.history.record(self._snapshot())
        logger.info(
            "Imported screenplay text",
            strategy=result.strategy.value,
            lines=len(result.lines),
            pages=len(self.document.pages),
        )
        return result

    def load_markup(
        self, markup: str, tolerance: MarkupTolerance | str | None = None
    ) -> list[ScriptLine]:
        """Replace the document with lines read from tagged markup."""
        lines = parse_markup(markup, tolerance or self.settings.markup_tolerance)
        self._reset(lines)
        self.history.record(self._snapshot())
        return lines

    # History

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    def undo(self) -> bool:
        """Restore the state before the last edit.

        Returns:
            False when there is nothing to undo
        """
        snapshot = self.history.undo()
        if snapshot is None:
            return False
        self._restore(snapshot)
        logger.debug("Undo", cursor=self.cursor, lines=len(snapshot.lines))
        return True

    def redo(self) -> bool:
        """Re-apply the last undone edit.

        Returns:
            False when there is nothing to redo
        """
        snapshot = self.history.redo()
        if snapshot is None:
            return False
        self._restore(snapshot)
        logger.debug("Redo", cursor=self.cursor, lines=len(snapshot.lines))
        return True

    # Pagination

    def sweep(self) -> int:
        """Full overflow pass over every page."""
        return self.pagination.sweep(self.document)

    def flush(self) -> bool:
        """Run the debounced sweep now if one is pending."""
        return self.debouncer.flush()

    # Autocomplete

    def suggest(self) -> str | None:
        current = self.current_line
        if current is None:
            return None
        return self.autocomplete.suggest(
            current.text, current.format, self.document.lines(), self.cursor
        )

    def accept_suggestion(self) -> bool:
        """Replace the current line's text with its suggestion, if any."""
        suggestion = self.suggest()
        if suggestion is None:
            return False
        self.replace_text(suggestion)
        self.autocomplete.learn(suggestion, self.current_line.format)
        return True

    # Internals

    def _seed_first_line(self) -> ScriptLine:
        line = ScriptLine(text="", format=initial_format(self.document))
        self.document.pages[0].lines.append(line)
        self.cursor = 0
        self._after_mutation(0, structural=True)
        return line

    def _require_current(self) -> ScriptLine:
        if self.cursor is None:
            self._seed_first_line()
        return self.document.line_at(self.cursor)

    def _replace_current(self, line: ScriptLine, structural: bool = False) -> None:
        page_index, line_index = self.document.locate(self.cursor)
        self.document.pages[page_index].lines[line_index] = line
        self._after_mutation(page_index, structural=structural)

    def _reset(self, lines: list[ScriptLine]) -> None:
        self.debouncer.cancel()
        self.document.pages = [Page(lines=list(lines))]
        self.cursor = 0 if lines else None
        self.autocomplete.invalidate()
        self.sweep()

    def _snapshot(self) -> Snapshot:
        return Snapshot(lines=tuple(self.document.lines()), cursor=self.cursor)

    def _restore(self, snapshot: Snapshot) -> None:
        self._reset(list(snapshot.lines))
        self.cursor = snapshot.cursor

    def _after_mutation(self, page_index: int, structural: bool = False) -> None:
        if structural:
            self.autocomplete.invalidate()
        self.pagination.repair(self.document, page_index)
        self.debouncer.schedule()
        self.history.record(self._snapshot())

    @staticmethod
    def _clamp_offset(text: str, offset: int | None) -> int:
        if offset is None:
            return len(text)
        return max(0, min(offset, len(text)))
