"""The authoritative list of marker positions for the map being edited.

The registry is seeded from the external property list, mutated only by the
editor session and interaction controller, and handed back for saving as
``{id, x, y}`` records. It never records history itself; deciding when a
change becomes an undo step is the session's job.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Iterator

from .prng import PCG32
from .snap import clamp_percent
from .types import MarkerPosition

Snapshot = tuple[MarkerPosition, ...]


def _coerce(record: MarkerPosition | dict) -> MarkerPosition:
    if isinstance(record, MarkerPosition):
        return replace(record)
    return MarkerPosition.from_dict(record)


def _check_unique(positions: list[MarkerPosition]) -> None:
    seen: set[int] = set()
    for p in positions:
        if p.id in seen:
            raise ValueError(f"Duplicate marker id {p.id} in registry")
        seen.add(p.id)


class PositionRegistry:
    def __init__(
        self, source: Iterable[MarkerPosition | dict] = ()
    ) -> None:
        self._positions: list[MarkerPosition] = []
        self.reset_from_source(source)

    def __len__(self) -> int:
        return len(self._positions)

    def __iter__(self) -> Iterator[MarkerPosition]:
        return iter(self._positions)

    def __contains__(self, marker_id: object) -> bool:
        return self.get(marker_id) is not None  # type: ignore[arg-type]

    def ids(self) -> list[int]:
        return [p.id for p in self._positions]

    def get(self, marker_id: int) -> MarkerPosition | None:
        for p in self._positions:
            if p.id == marker_id:
                return p
        return None

    def set_position(self, marker_id: int, x: float, y: float) -> bool:
        """Move a marker, clamping both axes to [0, 100].

        Returns False (and changes nothing) if the id is not registered.
        """
        marker = self.get(marker_id)
        if marker is None:
            return False
        marker.x = clamp_percent(x)
        marker.y = clamp_percent(y)
        return True

    def replace_all(self, positions: Iterable[MarkerPosition | dict]) -> None:
        """Swap in a whole new set of positions (undo/redo, imports).

        Raises ValueError if the new set repeats an id; the registry is left
        untouched in that case.
        """
        new_positions = [_coerce(p) for p in positions]
        _check_unique(new_positions)
        self._positions = new_positions

    def reset_from_source(
        self, source: Iterable[MarkerPosition | dict]
    ) -> None:
        """Rebuild the registry 1:1 from the external property list."""
        self.replace_all(source)

    def randomize(self, rng: PCG32) -> None:
        """Scatter every marker to whole-number positions in [0, 99].

        Draws x then y per marker, in registry order.
        """
        for p in self._positions:
            p.x = float(rng.next_percent())
            p.y = float(rng.next_percent())

    def snapshot(self) -> Snapshot:
        return tuple(replace(p) for p in self._positions)

    def save_payload(self) -> list[dict]:
        return [{"id": p.id, "x": p.x, "y": p.y} for p in self._positions]
