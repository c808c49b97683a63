"""Completion of scene headings and speaker names while typing."""

from __future__ import annotations

from collections.abc import Sequence

from scriptflow.editing.cache import MatchCache
from scriptflow.models import FormatTag, ScriptLine

STATIC_TERMS: dict[FormatTag, tuple[str, ...]] = {
    FormatTag.HEADER: ("INTERIOR", "EXTERIOR"),
    FormatTag.SPEAKER: ("TOM", "SARAH", "JOHN", "JANE"),
}

_NO_MATCH = ""


class Autocomplete:
    """Suggest completions for HEADER and SPEAKER lines.

    Candidates come from lines of the same format already in the document,
    nearest to the cursor first, then terms accepted earlier in the session,
    then a small static vocabulary. Matches are memoized per typed prefix
    and format; call :meth:`invalidate` when the document's lines change.
    """

    def __init__(self, cache: MatchCache | None = None) -> None:
        self.cache = cache if cache is not None else MatchCache()
        self.learned: dict[FormatTag, list[str]] = {fmt: [] for fmt in STATIC_TERMS}

    def supports(self, fmt: FormatTag) -> bool:
        return fmt in STATIC_TERMS

    def candidates(
        self, fmt: FormatTag, lines: Sequence[ScriptLine], index: int | None = None
    ) -> list[str]:
        """Distinct completion terms for ``fmt`` in priority order."""
        seen: set[str] = set()
        terms: list[str] = []

        def add(term: str) -> None:
            term = term.strip().upper()
            if term and term not in seen:
                seen.add(term)
                terms.append(term)

        positions = [i for i, line in enumerate(lines) if line.format is fmt]
        if index is not None:
            positions = [i for i in positions if i != index]
            positions.sort(key=lambda i: (abs(i - index), i))
        for i in positions:
            add(lines[i].text)
        for term in self.learned.get(fmt, []):
            add(term)
        for term in STATIC_TERMS.get(fmt, ()):
            add(term)
        return terms

    def suggest(
        self,
        text: str,
        fmt: FormatTag,
        lines: Sequence[ScriptLine] = (),
        index: int | None = None,
    ) -> str | None:
        """Full completion for the typed ``text``, or None.

        Only strictly longer terms that start with the typed prefix
        (ignoring case) are suggested.
        """
        prefix = text.strip().upper()
        if not prefix or not self.supports(fmt):
            return None

        key = f"{prefix}:{fmt.value}"
        cached = self.cache.get(key)
        if cached is not None:
            return cached or None

        match = next(
            (
                term
                for term in self.candidates(fmt, lines, index)
                if term.startswith(prefix) and term != prefix
            ),
            None,
        )
        self.cache.set(key, match if match is not None else _NO_MATCH)
        return match

    def learn(self, term: str, fmt: FormatTag) -> None:
        """Remember an accepted term for later suggestions."""
        term = term.strip().upper()
        if not term or not self.supports(fmt):
            return
        learned = self.learned[fmt]
        if term not in learned and term not in STATIC_TERMS[fmt]:
            learned.append(term)
            self.invalidate()

    def invalidate(self) -> None:
        self.cache.clear()
