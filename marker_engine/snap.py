"""Percentage-space coordinates and grid snapping.

Marker positions are stored as percentages of the map container (0-100 on
each axis), so they survive any resize of the viewport. The host reports the
container's pixel bounding box via ``ContainerBounds`` and everything below
works on plain floats.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

PERCENT_MIN = 0.0
PERCENT_MAX = 100.0

# Grid spacings offered in the editor toolbar.
GRID_SIZES = (5, 10, 20, 25)


def snap(coordinate: float, grid_size: float, enabled: bool) -> float:
    """Snap a percentage coordinate to the nearest multiple of grid_size.

    Halfway values round up (25 on a 10 grid gives 30). Disabled snapping,
    or a grid size that is not positive, returns the coordinate unchanged.
    """
    if not enabled or grid_size <= 0:
        return coordinate
    return math.floor(coordinate / grid_size + 0.5) * grid_size


def clamp_percent(value: float) -> float:
    return max(PERCENT_MIN, min(PERCENT_MAX, value))


@dataclass
class ContainerBounds:
    """Pixel bounding box of the map container, in client coordinates."""

    left: float = 0.0
    top: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def is_degenerate(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def to_percent(
        self, client_x: float, client_y: float
    ) -> tuple[float, float] | None:
        """Convert a client pixel position to container percentages.

        Returns None if the box has no area. Positions outside the box map
        to values outside [0, 100]; callers clamp on write.
        """
        if self.is_degenerate:
            return None
        x = (client_x - self.left) / self.width * 100.0
        y = (client_y - self.top) / self.height * 100.0
        return (x, y)

    def delta_to_percent(
        self, dx: float, dy: float
    ) -> tuple[float, float] | None:
        """Convert a pixel delta to a percentage delta, or None if degenerate."""
        if self.is_degenerate:
            return None
        return (dx / self.width * 100.0, dy / self.height * 100.0)
