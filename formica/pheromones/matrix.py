"""PheromoneMatrix -- dense symmetric pheromone levels over a node set.

Entry ``[i, j]`` is the trail strength on the edge between nodes ``i``
and ``j``.  Every off-diagonal entry stays within ``[floor, ceiling]``:
the floor keeps every edge selectable, the ceiling keeps exponentiation
in the selection rule finite.

The matrix is sized once and never resized.  When the node set changes
the owning colony builds a new one.  Indices outside the current size are
ignored (reads return the initial level, writes do nothing) so that a
stale index held across a rebuild cannot corrupt the new matrix.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

DEFAULT_FLOOR = 0.01
DEFAULT_CEILING = 1000.0


@dataclass
class PheromoneMatrix:
    """Symmetric ``(size, size)`` pheromone array.

    Attributes:
        size: Number of nodes covered.
        initial: Starting level for every entry.
        floor: Lower bound enforced by evaporation.
        ceiling: Upper bound enforced by deposits.
        grid: Raw concentration values.
    """

    size: int
    initial: float = 1.0
    floor: float = DEFAULT_FLOOR
    ceiling: float = DEFAULT_CEILING
    grid: NDArray[np.float64] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Fill every entry with the initial level."""
        self.size = max(0, self.size)
        self.grid = np.full((self.size, self.size), self.initial, dtype=np.float64)

    def _in_range(self, i: int, j: int) -> bool:
        return 0 <= i < self.size and 0 <= j < self.size

    def get(self, i: int, j: int) -> float:
        """Pheromone on edge ``(i, j)``; the initial level if out of range."""
        if not self._in_range(i, j):
            return self.initial
        return float(self.grid[i, j])

    def deposit(self, i: int, j: int, amount: float) -> None:
        """Add ``amount`` to edge ``(i, j)`` and its mirror, capped at the ceiling.

        Non-finite or negative amounts and out-of-range indices are ignored.
        """
        if not self._in_range(i, j):
            return
        if not math.isfinite(amount) or amount < 0.0:
            return
        value = min(float(self.grid[i, j]) + amount, self.ceiling)
        self.grid[i, j] = value
        self.grid[j, i] = value

    def evaporate(self, rate: float) -> None:
        """Decay every off-diagonal entry by ``rate``, never below the floor.

        ``rate`` is clamped into ``[0, 1]``; a NaN rate is a no-op.  The
        diagonal is untouched.
        """
        if self.size == 0 or math.isnan(rate):
            return
        rate = min(max(rate, 0.0), 1.0)
        diagonal = self.grid.diagonal().copy()
        np.maximum(self.grid * (1.0 - rate), self.floor, out=self.grid)
        np.fill_diagonal(self.grid, diagonal)

    def deposit_tour(self, route: Sequence[int], length: float, q: float) -> None:
        """Reinforce every edge of a tour by ``q / length``.

        The closing edge back to the first node is included; if ``route``
        is already closed (first == last) it is not deposited twice.

        Args:
            route: Ordered node indices.
            length: Total tour length.
            q: Deposit factor.
        """
        if len(route) < 2 or not math.isfinite(length) or length <= 0.0:
            return
        delta = q / length
        for a, b in zip(route, route[1:]):
            self.deposit(a, b, delta)
        if route[0] != route[-1]:
            self.deposit(route[-1], route[0], delta)

    def reset(self) -> None:
        """Set every entry back to the initial level."""
        self.grid.fill(self.initial)

    def max_value(self) -> float:
        """Largest off-diagonal entry (0.0 for fewer than two nodes)."""
        if self.size < 2:
            return 0.0
        mask = ~np.eye(self.size, dtype=bool)
        return float(self.grid[mask].max())

    def values(self) -> NDArray[np.float64]:
        """Read-only copy of the matrix."""
        out = self.grid.copy()
        out.setflags(write=False)
        return out
