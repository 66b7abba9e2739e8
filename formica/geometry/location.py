"""Location -- an immutable point in the simulation plane.

All positions (nodes, depot, ants) are real ``(x, y)`` coordinates in
world units.  Distances are Euclidean.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Location:
    """A fixed point in world coordinates.

    Attributes:
        x: Horizontal coordinate.
        y: Vertical coordinate.
    """

    x: float
    y: float

    def distance_to(self, other: Location) -> float:
        """Return the Euclidean distance to another location."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def angle_to(self, other: Location) -> float:
        """Return the heading (radians) pointing from here to ``other``."""
        return math.atan2(other.y - self.y, other.x - self.x)

    def lerp(self, other: Location, t: float) -> Location:
        """Linear interpolation toward ``other`` (``t`` in [0, 1])."""
        return Location(
            self.x + (other.x - self.x) * t,
            self.y + (other.y - self.y) * t,
        )
