"""Linear undo/redo history for dispatched commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, List, Optional


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    input_id: Hashable
    command: object


class CommandHistory:
    """Ordered entries plus a position pointer.

    ``position`` counts the entries currently applied: entries before it can
    be undone, entries at or after it can be redone.
    """

    def __init__(self, *, limit: Optional[int] = None) -> None:
        if limit is not None and limit <= 0:
            raise ValueError("history limit must be positive")
        self._entries: List[HistoryEntry] = []
        self._position = 0
        self._limit = limit

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def position(self) -> int:
        return self._position

    @property
    def limit(self) -> Optional[int]:
        return self._limit

    def entries(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    def push(self, entry: HistoryEntry) -> int:
        """Append ``entry``, discarding the redo tail.

        Returns the number of entries discarded (redo tail plus any entries
        trimmed to honour ``limit``).
        """

        dropped = len(self._entries) - self._position
        del self._entries[self._position :]
        self._entries.append(entry)
        if self._limit is not None and len(self._entries) > self._limit:
            overflow = len(self._entries) - self._limit
            del self._entries[:overflow]
            dropped += overflow
        self._position = len(self._entries)
        return dropped

    def can_undo(self) -> bool:
        return self._position > 0

    def can_redo(self) -> bool:
        return self._position < len(self._entries)

    def peek_undo(self) -> Optional[HistoryEntry]:
        if not self.can_undo():
            return None
        return self._entries[self._position - 1]

    def peek_redo(self) -> Optional[HistoryEntry]:
        if not self.can_redo():
            return None
        return self._entries[self._position]

    def step_back(self) -> None:
        if not self.can_undo():
            raise IndexError("history pointer already at start")
        self._position -= 1

    def step_forward(self) -> None:
        if not self.can_redo():
            raise IndexError("history pointer already at end")
        self._position += 1

    def clear(self) -> None:
        self._entries.clear()
        self._position = 0


__all__ = ["CommandHistory", "HistoryEntry"]
