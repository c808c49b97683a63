"""Forward-only overflow correction across document pages."""

from __future__ import annotations

from collections.abc import Sequence

from scriptflow.config import get_logger
from scriptflow.editing.capacity import CapacityOracle
from scriptflow.models import Document, Page, ScriptLine

logger = get_logger(__name__)


class PaginationEngine:
    """Keep every page within its capacity by pushing tails forward.

    Content only ever moves to later pages. Pages left under-full after
    deletions are not refilled; a page's first line never moves, so a
    single over-tall line stays where it is.
    """

    def __init__(self, oracle: CapacityOracle | None = None) -> None:
        """Initialize the engine.

        Args:
            oracle: Returns True when a run of lines exceeds one page. With
                no oracle nothing is ever considered overflowing.
        """
        self.oracle = oracle

    def overflows(self, lines: Sequence[ScriptLine]) -> bool:
        """Ask the oracle, treating a missing or failing oracle as "fits"."""
        if self.oracle is None:
            return False
        try:
            return bool(self.oracle(lines))
        except Exception as e:
            logger.warning(
                "Capacity check failed, assuming content fits",
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

    def first_overflow_index(self, page: Page) -> int | None:
        """Index of the first line that no longer fits on ``page``.

        Returns:
            The smallest k >= 1 whose prefix through line k overflows, or
            None when the page fits
        """
        lines = page.lines
        if len(lines) < 2 or not self.overflows(lines):
            return None
        for k in range(1, len(lines)):
            if self.overflows(lines[: k + 1]):
                return k
        return None

    def repair(self, document: Document, page_index: int) -> int:
        """Fix overflow starting at one page, cascading into later pages.

        The overflowing tail is prepended to the next page, which is created
        when missing, and the check continues there.

        Returns:
            Number of lines moved
        """
        moved = 0
        index = page_index
        while index < len(document.pages):
            page = document.pages[index]
            k = self.first_overflow_index(page)
            if k is None:
                break
            tail = page.lines[k:]
            del page.lines[k:]
            if index + 1 == len(document.pages):
                document.pages.append(Page())
            document.pages[index + 1].lines[0:0] = tail
            moved += len(tail)
            index += 1

        if moved:
            logger.debug(
                "Moved overflowing lines forward",
                start_page=page_index,
                moved=moved,
                pages=len(document.pages),
            )
        return moved

    def sweep(self, document: Document) -> int:
        """Repair every page in order.

        Returns:
            Number of lines moved; zero when the document was already
            consistent
        """
        moved = 0
        index = 0
        while index < len(document.pages):
            moved += self.repair(document, index)
            index += 1
        return moved
