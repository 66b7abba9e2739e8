"""PheromoneGrid -- trail strength over continuous space.

The world rectangle is partitioned into square cells of ``cell_size``
world units; each cell holds an independent concentration in
``[0, ceiling]``.  Unlike the node matrix there is no symmetry: a cell is
a place, not a pairwise relation.  Reads and writes take world
coordinates, and points outside the world are ignored.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from formica.pheromones.diffusion import evaporate, spread


@dataclass
class PheromoneGrid:
    """Fixed-resolution pheromone grid over the world bounds.

    Attributes:
        width: World width covered.
        height: World height covered.
        cell_size: Side length of one cell in world units.
        ceiling: Per-cell upper bound.
        spread_fraction: Share of each deposit given to every orthogonal
            neighbour.
        threshold: Values below this snap to zero on evaporation.
        grid: Raw concentration values indexed ``[row, col]``.
    """

    width: float
    height: float
    cell_size: float = 10.0
    ceiling: float = 5.0
    spread_fraction: float = 0.5
    threshold: float = 0.01
    grid: NDArray[np.float64] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Allocate a zeroed grid covering the world."""
        self.cell_size = max(self.cell_size, 1e-6)
        rows = max(1, math.ceil(self.height / self.cell_size))
        cols = max(1, math.ceil(self.width / self.cell_size))
        self.grid = np.zeros((rows, cols), dtype=np.float64)

    @property
    def shape(self) -> tuple[int, int]:
        """``(rows, cols)`` of the underlying array."""
        return self.grid.shape  # type: ignore[return-value]

    def cell_of(self, x: float, y: float) -> tuple[int, int] | None:
        """Return the ``(row, col)`` containing world point ``(x, y)``.

        Points on the far edge belong to the last row/column.  Points
        outside the world (or non-finite) return None.
        """
        if not (math.isfinite(x) and math.isfinite(y)):
            return None
        if not (0.0 <= x <= self.width and 0.0 <= y <= self.height):
            return None
        rows, cols = self.shape
        row = min(int(y // self.cell_size), rows - 1)
        col = min(int(x // self.cell_size), cols - 1)
        return row, col

    def read(self, x: float, y: float) -> float:
        """Concentration at ``(x, y)``; 0.0 outside the world."""
        cell = self.cell_of(x, y)
        if cell is None:
            return 0.0
        return float(self.grid[cell])

    def deposit(self, x: float, y: float, amount: float) -> None:
        """Deposit at ``(x, y)`` with orthogonal spreading.

        Non-finite or negative amounts and out-of-world points are ignored.
        """
        if not math.isfinite(amount) or amount < 0.0:
            return
        cell = self.cell_of(x, y)
        if cell is None:
            return
        spread(self.grid, *cell, amount, self.spread_fraction, self.ceiling)

    def evaporate(self, rate: float) -> None:
        """Decay the whole grid (at half of ``rate``)."""
        evaporate(self.grid, rate, self.threshold)

    def max_value(self) -> float:
        """Largest cell value."""
        return float(self.grid.max())

    def values(self) -> NDArray[np.float64]:
        """Read-only copy of the grid."""
        out = self.grid.copy()
        out.setflags(write=False)
        return out
