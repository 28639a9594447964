"""Pointer interaction for the marker editor.

Turns host pointer events into registry writes with the right undo timing.
The host binds its own events and calls in explicitly:

  * click on the map surface       -> ``click(client_x, client_y)``
  * pointer-down on a marker       -> ``begin_drag(marker_id, x, y)``
  * pointer-move while dragging    -> ``move_to(x, y)`` or ``update_drag(dx, dy)``
  * pointer-up                     -> ``end_drag()``
  * window leave / focus loss      -> ``pointer_left()``
  * Escape during a drag           -> ``cancel_drag()``
  * x/y number fields committed    -> ``commit_numeric(x, y)``

A drag is a small state machine, ``idle -> dragging -> idle``. Moves write
straight through the registry on every event but never touch history; the
whole gesture becomes a single undo step when it ends. The gesture keeps its
own unsnapped position so that small pointer deltas still accumulate while
snapping is on.
"""

from __future__ import annotations

from dataclasses import dataclass

from .registry import Snapshot
from .session import EditorSession
from .snap import ContainerBounds, clamp_percent, snap


@dataclass
class _DragGesture:
    marker_id: int
    before: Snapshot
    raw_x: float
    raw_y: float
    pointer_x: float
    pointer_y: float


class InteractionController:
    def __init__(
        self, session: EditorSession, bounds: ContainerBounds | None = None
    ) -> None:
        self.session = session
        self.bounds = bounds or ContainerBounds()
        self._drag: _DragGesture | None = None

    @property
    def is_dragging(self) -> bool:
        return self._drag is not None

    @property
    def active_id(self) -> int | None:
        return self._drag.marker_id if self._drag else None

    def set_bounds(
        self, left: float, top: float, width: float, height: float
    ) -> None:
        self.bounds = ContainerBounds(left, top, width, height)

    def _snap(self, value: float) -> float:
        s = self.session.settings
        return snap(value, s.grid_size, s.snap_to_grid)

    # -- click-to-place --

    def click(self, client_x: float, client_y: float) -> bool:
        """Place the selected marker at the clicked point."""
        session = self.session
        if not session.settings.edit_mode or self._drag is not None:
            return False
        if session.selected_id is None:
            return False
        pct = self.bounds.to_percent(client_x, client_y)
        if pct is None:
            return False
        return session.set_position(
            session.selected_id, self._snap(pct[0]), self._snap(pct[1])
        )

    # -- drag gesture --

    def begin_drag(
        self, marker_id: int, client_x: float = 0.0, client_y: float = 0.0
    ) -> bool:
        session = self.session
        if not session.settings.edit_mode:
            return False
        marker = session.registry.get(marker_id)
        if marker is None:
            return False
        if self._drag is not None:
            self.end_drag()
        session.select(marker_id)
        self._drag = _DragGesture(
            marker_id=marker_id,
            before=session.registry.snapshot(),
            raw_x=marker.x,
            raw_y=marker.y,
            pointer_x=client_x,
            pointer_y=client_y,
        )
        return True

    def update_drag(self, dx: float, dy: float) -> bool:
        """Apply a pixel delta (since the previous move) to the dragged marker."""
        drag = self._drag
        if drag is None:
            return False
        delta = self.bounds.delta_to_percent(dx, dy)
        if delta is None:
            return False
        drag.raw_x = clamp_percent(drag.raw_x + delta[0])
        drag.raw_y = clamp_percent(drag.raw_y + delta[1])
        return self.session.registry.set_position(
            drag.marker_id, self._snap(drag.raw_x), self._snap(drag.raw_y)
        )

    def move_to(self, client_x: float, client_y: float) -> bool:
        drag = self._drag
        if drag is None:
            return False
        dx = client_x - drag.pointer_x
        dy = client_y - drag.pointer_y
        drag.pointer_x = client_x
        drag.pointer_y = client_y
        return self.update_drag(dx, dy)

    def end_drag(self) -> bool:
        """Finish the gesture, recording it as one undo step if anything moved."""
        drag = self._drag
        if drag is None:
            return False
        self._drag = None
        if self.session.registry.snapshot() == drag.before:
            return False
        self.session.checkpoint(drag.before)
        return True

    def cancel_drag(self) -> bool:
        """Abandon the gesture and put the marker back where it started."""
        drag = self._drag
        if drag is None:
            return False
        self._drag = None
        self.session.registry.replace_all(drag.before)
        return True

    def pointer_left(self) -> None:
        self.end_drag()

    # -- numeric entry --

    def commit_numeric(
        self, x: float | None = None, y: float | None = None
    ) -> bool:
        """Write typed-in coordinates for the selected marker.

        A missing axis keeps the marker's current value. Input is not
        snapped; typed numbers are taken as given (then clamped).
        """
        marker = self.session.selected()
        if marker is None:
            return False
        new_x = marker.x if x is None else x
        new_y = marker.y if y is None else y
        return self.session.set_position(marker.id, new_x, new_y)

    # -- history shortcuts --

    def undo(self) -> bool:
        self.end_drag()
        return self.session.undo()

    def redo(self) -> bool:
        self.end_drag()
        return self.session.redo()
