"""Bounded undo history of equation snapshots."""

from __future__ import annotations

from typing import Optional

from .config import UNDO_LOG_LIMIT, UNDO_LOG_TRIM
from .tokens import Token

Snapshot = tuple[Token, ...]


class UndoLog:
    """Stack of equation snapshots.

    Snapshots are tuples of frozen tokens, so storing one never aliases the
    live buffer. A record identical to the current top is skipped. Once the
    stack holds more than ``limit`` entries the oldest ``trim`` are dropped.
    """

    def __init__(self, limit: int = UNDO_LOG_LIMIT, trim: int = UNDO_LOG_TRIM):
        self.limit = limit
        self.trim = trim
        self._entries: list[Snapshot] = []

    def __len__(self) -> int:
        return len(self._entries)

    def top(self) -> Optional[Snapshot]:
        return self._entries[-1] if self._entries else None

    def record(self, snapshot: Snapshot) -> bool:
        """Push ``snapshot`` unless it equals the top. Returns True if pushed."""
        snapshot = tuple(snapshot)
        pushed = False
        if self.top() != snapshot:
            self._entries.append(snapshot)
            pushed = True
        if len(self._entries) > self.limit:
            del self._entries[: self.trim]
        return pushed

    def undo(self, current: Snapshot) -> Optional[Snapshot]:
        """Pop the snapshot to restore, or None when the log is empty.

        Every mutation records its own post-state, so the top usually mirrors
        ``current``; in that case one more entry is popped.
        """
        if not self._entries:
            return None
        restored = self._entries.pop()
        if restored == tuple(current) and self._entries:
            restored = self._entries.pop()
        return restored

    def clear(self) -> None:
        self._entries.clear()
