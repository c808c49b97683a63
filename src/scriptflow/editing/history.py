"""Bounded undo/redo history of document snapshots."""

from __future__ import annotations

from dataclasses import dataclass

from scriptflow.models import ScriptLine


@dataclass(frozen=True)
class Snapshot:
    """Lines and cursor of a document at one point in an editing session."""

    lines: tuple[ScriptLine, ...]
    cursor: int | None


class EditHistory:
    """Linear undo/redo stack.

    The entry at ``index`` is the current state. Recording a new state
    discards everything after it, so redo is only possible until the next
    edit. Once more than ``max_entries`` states are held the oldest one is
    dropped.
    """

    def __init__(self, max_entries: int = 100) -> None:
        if max_entries < 2:
            raise ValueError("max_entries must be at least 2")
        self.max_entries = max_entries
        self._entries: list[Snapshot] = []
        self._index = -1

    @property
    def can_undo(self) -> bool:
        return self._index > 0

    @property
    def can_redo(self) -> bool:
        return self._index < len(self._entries) - 1

    @property
    def current(self) -> Snapshot | None:
        if self._index < 0:
            return None
        return self._entries[self._index]

    def record(self, snapshot: Snapshot) -> bool:
        """Push a new current state.

        Returns:
            False when the snapshot equals the current state and was skipped
        """
        if snapshot == self.current:
            return False
        del self._entries[self._index + 1 :]
        self._entries.append(snapshot)
        if len(self._entries) > self.max_entries:
            del self._entries[0]
        self._index = len(self._entries) - 1
        return True

    def undo(self) -> Snapshot | None:
        if not self.can_undo:
            return None
        self._index -= 1
        return self._entries[self._index]

    def redo(self) -> Snapshot | None:
        if not self.can_redo:
            return None
        self._index += 1
        return self._entries[self._index]

    def __len__(self) -> int:
        return len(self._entries)
