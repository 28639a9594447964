"""Linear undo/redo history of registry snapshots.

The history is a list of snapshots plus a cursor pointing at the current
one. Pushing after an undo discards the undone future (branch-discard), so
once new work happens the old redo path is gone for good.

An optional ``limit`` caps the number of stored checkpoints; the oldest ones
are dropped first and the cursor is shifted to keep pointing at the same
snapshot. ``record_tip`` may hold one snapshot past the limit: the live
state saved by an undo so that redo can return to it.
"""

from __future__ import annotations

from .registry import Snapshot


class PositionHistory:
    def __init__(self, limit: int | None = None) -> None:
        self._entries: list[Snapshot] = []
        self._cursor = -1
        self.limit: int | None = None
        self.set_limit(limit)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def cursor(self) -> int:
        """Index of the current snapshot, -1 while empty."""
        return self._cursor

    @property
    def current(self) -> Snapshot | None:
        if not self._entries:
            return None
        return self._entries[self._cursor]

    @property
    def at_end(self) -> bool:
        return self._cursor == len(self._entries) - 1

    def set_limit(self, limit: int | None) -> None:
        """Change the cap, trimming stored snapshots right away.

        Undo steps behind the cursor go first; if the cursor itself is past
        the new cap, redo steps are dropped from the far end as well.
        """
        if limit is not None and limit < 1:
            raise ValueError(f"History limit must be positive, got {limit}")
        self.limit = limit
        if limit is None or len(self._entries) <= limit:
            return
        excess = len(self._entries) - limit
        front = min(excess, self._cursor)
        del self._entries[:front]
        self._cursor -= front
        if excess > front:
            del self._entries[limit:]

    def push(self, snapshot: Snapshot) -> None:
        self.discard_future()
        self._entries.append(tuple(snapshot))
        if self.limit is not None and len(self._entries) > self.limit:
            del self._entries[: len(self._entries) - self.limit]
        self._cursor = len(self._entries) - 1

    def record_tip(self, snapshot: Snapshot) -> None:
        """Append the live state at the end without evicting a checkpoint.

        The next ``push`` trims back down to the limit.
        """
        self.discard_future()
        self._entries.append(tuple(snapshot))
        self._cursor = len(self._entries) - 1

    def discard_future(self) -> None:
        """Drop every snapshot after the cursor."""
        del self._entries[self._cursor + 1 :]

    def undo(self) -> Snapshot | None:
        if self._cursor <= 0:
            return None
        self._cursor -= 1
        return self._entries[self._cursor]

    def redo(self) -> Snapshot | None:
        if self._cursor >= len(self._entries) - 1:
            return None
        self._cursor += 1
        return self._entries[self._cursor]

    def can_undo(self) -> bool:
        return self._cursor > 0

    def can_redo(self) -> bool:
        return self._cursor < len(self._entries) - 1

    def clear(self) -> None:
        self._entries.clear()
        self._cursor = -1

    def get_stats(self) -> dict:
        return {
            "undo_count": max(self._cursor, 0),
            "redo_count": len(self._entries) - 1 - self._cursor,
            "limit": self.limit,
            "full": self.limit is not None
            and len(self._entries) >= self.limit,
        }
