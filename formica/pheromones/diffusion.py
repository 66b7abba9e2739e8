"""Decay and spreading logic for the continuous pheromone grid.

Operates on raw NumPy arrays; ``PheromoneGrid`` wraps them with world
coordinates.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

# Orthogonal neighbour offsets as (row, col)
_ORTHOGONAL = ((-1, 0), (1, 0), (0, -1), (0, 1))


def evaporate(
    grid: NDArray[np.float64],
    rate: float,
    threshold: float,
) -> None:
    """Decay ``grid`` in place at half of ``rate`` and zero out faint cells.

    Values below ``threshold`` snap to exactly 0.0.  A NaN rate leaves the
    grid unchanged.

    Args:
        grid: 2D concentration array.
        rate: Configured evaporation rate, clamped into ``[0, 1]``.
        threshold: Values below this become exactly zero.
    """
    if math.isnan(rate):
        return
    rate = min(max(rate, 0.0), 1.0) * 0.5
    grid *= 1.0 - rate
    grid[grid < threshold] = 0.0


def spread(
    grid: NDArray[np.float64],
    row: int,
    col: int,
    amount: float,
    fraction: float,
    ceiling: float,
) -> None:
    """Deposit ``amount`` at ``(row, col)`` and a share into its neighbours.

    The target cell gains ``amount``; each in-bounds orthogonal neighbour
    gains ``amount * fraction``.  Every touched cell is capped at
    ``ceiling`` independently.

    Args:
        grid: 2D concentration array, modified in place.
        row: Target row.
        col: Target column.
        amount: Quantity deposited at the target (>= 0).
        fraction: Share of ``amount`` each neighbour receives.
        ceiling: Per-cell upper bound.
    """
    rows, cols = grid.shape
    grid[row, col] = min(grid[row, col] + amount, ceiling)

    share = amount * fraction
    if share <= 0.0:
        return
    for dr, dc in _ORTHOGONAL:
        nr, nc = row + dr, col + dc
        if 0 <= nr < rows and 0 <= nc < cols:
            grid[nr, nc] = min(grid[nr, nc] + share, ceiling)
