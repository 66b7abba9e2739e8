"""SpatialModel -- immutable node positions and their distance metric.

Built once per node-set and shared read-only by every agent in a colony.
The pairwise distance table is precomputed into a NumPy array so the
selection rule never recomputes square roots in its inner loop.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from formica.geometry.location import Location


@dataclass(frozen=True)
class SpatialModel:
    """Fixed node positions with a Euclidean metric.

    Attributes:
        locations: Node positions, indexed by node position in the set.
        distances: ``(n, n)`` table of pairwise distances.
    """

    locations: tuple[Location, ...]
    distances: NDArray[np.float64] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Precompute the pairwise distance table."""
        n = len(self.locations)
        coords = np.array(
            [(loc.x, loc.y) for loc in self.locations],
            dtype=np.float64,
        ).reshape(n, 2)
        delta = coords[:, None, :] - coords[None, :, :]
        table = np.sqrt((delta**2).sum(axis=-1))
        table.setflags(write=False)
        object.__setattr__(self, "distances", table)

    @classmethod
    def from_points(cls, points: Sequence[tuple[float, float]]) -> SpatialModel:
        """Build a model from raw ``(x, y)`` pairs."""
        return cls(tuple(Location(float(x), float(y)) for x, y in points))

    @property
    def size(self) -> int:
        """Number of nodes."""
        return len(self.locations)

    def distance(self, i: int, j: int) -> float:
        """Distance between nodes ``i`` and ``j``.

        Out-of-range indices yield ``inf`` rather than raising.
        """
        if not (0 <= i < self.size and 0 <= j < self.size):
            return math.inf
        return float(self.distances[i, j])

    def route_length(self, route: Sequence[int]) -> float:
        """Sum of edge lengths along ``route`` (no implicit closing edge)."""
        return sum(self.distance(a, b) for a, b in zip(route, route[1:]))
