"""Editor session: registry, history, selection and clipboard for one map.

A session is created by whichever view opens the marker editor and is
passed to the controls that need it; nothing here is global. It owns:

  * the ``PositionRegistry`` seeded from the external property list,
  * the ``PositionHistory`` of undo snapshots,
  * the current selection (zero or one marker) and the copy/paste slot,
  * the typed ``EditorSettings`` and ``MapSettings`` records.

**History policy.** Every mutation checkpoints the registry as it was
*before* the change, then writes. Undo therefore restores the state in
front of the most recent change. Because the newest state is only in the
registry, ``undo()`` first records it (when it differs from the last
snapshot) so that ``redo()`` can come back to it. A checkpoint equal to the
snapshot under the cursor is not stored twice; the redo future is still
dropped, since new work has started.

Pointer-driven changes (click-to-place, drag, numeric entry) go through
``controller.py``; this module has the bulk operators and the plumbing.
"""

from __future__ import annotations

from typing import Iterable

from .history import PositionHistory
from .prng import PCG32
from .registry import PositionRegistry, Snapshot
from .types import ClipboardPosition, EditorSettings, MapSettings, MarkerPosition


class EditorSession:
    def __init__(
        self,
        source: Iterable[MarkerPosition | dict] = (),
        settings: EditorSettings | None = None,
        map_settings: MapSettings | None = None,
    ) -> None:
        self.settings = settings or EditorSettings()
        self.map_settings = map_settings or MapSettings()
        self.registry = PositionRegistry()
        self.history = PositionHistory(limit=self.settings.history_limit)
        self.selected_id: int | None = None
        self.clipboard: ClipboardPosition | None = None
        self._source: Snapshot = ()
        self.set_source(source)

    # -- seeding --

    def set_source(self, source: Iterable[MarkerPosition | dict]) -> None:
        """Re-seed from the external property list, dropping all history."""
        self.registry.reset_from_source(source)
        self._source = self.registry.snapshot()
        self.history.clear()
        self.clipboard = None
        if self.selected_id not in self.registry:
            self.selected_id = None

    @property
    def source(self) -> Snapshot:
        return self._source

    # -- selection --

    def select(self, marker_id: int) -> bool:
        if marker_id not in self.registry:
            return False
        self.selected_id = marker_id
        return True

    def deselect(self) -> None:
        self.selected_id = None

    def selected(self) -> MarkerPosition | None:
        if self.selected_id is None:
            return None
        return self.registry.get(self.selected_id)

    # -- history --

    def checkpoint(self, before: Snapshot | None = None) -> None:
        """Record the pre-mutation registry state as an undo step."""
        if before is None:
            before = self.registry.snapshot()
        if self.history.current == before:
            self.history.discard_future()
        else:
            self.history.push(before)

    def undo(self) -> bool:
        live = self.registry.snapshot()
        if len(self.history) and self.history.at_end:
            if self.history.current != live:
                self.history.record_tip(live)
        snapshot = self.history.undo()
        if snapshot is None:
            return False
        self.registry.replace_all(snapshot)
        return True

    def redo(self) -> bool:
        snapshot = self.history.redo()
        if snapshot is None:
            return False
        self.registry.replace_all(snapshot)
        return True

    def can_undo(self) -> bool:
        if self.history.can_undo():
            return True
        # A lone checkpoint can still be undone to, once the live
        # state is recorded behind it.
        return (
            len(self.history) > 0
            and self.history.at_end
            and self.history.current != self.registry.snapshot()
        )

    def can_redo(self) -> bool:
        return self.history.can_redo()

    # -- single-marker edits --

    def set_position(self, marker_id: int, x: float, y: float) -> bool:
        if marker_id not in self.registry:
            return False
        self.checkpoint()
        return self.registry.set_position(marker_id, x, y)

    def apply_position(self, x: float, y: float) -> bool:
        """Move the selected marker to a given position (e.g. a preset)."""
        if self.selected_id is None:
            return False
        return self.set_position(self.selected_id, x, y)

    def copy(self) -> bool:
        marker = self.selected()
        if marker is None:
            return False
        self.clipboard = ClipboardPosition(marker.x, marker.y)
        return True

    def paste(self) -> bool:
        if self.clipboard is None or self.selected_id is None:
            return False
        return self.set_position(
            self.selected_id, self.clipboard.x, self.clipboard.y
        )

    # -- bulk operators --

    def reset_all(self) -> None:
        """Discard edits: back to the positions the editor was opened with."""
        self.checkpoint()
        self.registry.reset_from_source(self._source)

    def randomize(self, rng: PCG32 | None = None) -> None:
        self.checkpoint()
        self.registry.randomize(rng or PCG32())

    def restore_positions(
        self, positions: Iterable[MarkerPosition | dict]
    ) -> int:
        """Apply positions from a backup, matching markers by id.

        Ids the registry does not know are skipped. Returns how many
        markers were updated; nothing is recorded if none matched.
        """
        matched = []
        for p in positions:
            if isinstance(p, dict):
                p = MarkerPosition.from_dict(p)
            if p.id in self.registry:
                matched.append(p)
        if not matched:
            return 0
        self.checkpoint()
        for p in matched:
            self.registry.set_position(p.id, p.x, p.y)
        return len(matched)

    # -- settings --

    def update_settings(self, **changes) -> None:
        settings = self.settings.updated(**changes)
        if "history_limit" in changes:
            self.history.set_limit(settings.history_limit)
        self.settings = settings

    def update_map_settings(self, **changes) -> None:
        self.map_settings = self.map_settings.updated(**changes)

    # -- output --

    def save_payload(self) -> list[dict]:
        return self.registry.save_payload()
