"""Snapshot -- read-only views of the simulation for renderers and tests.

Everything here is a frozen dataclass; array fields are copies with the
write flag cleared, so a consumer can hold on to a snapshot while the
engine keeps running.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from formica.colony.ant import Task
from formica.geometry.location import Location


@dataclass(frozen=True)
class NodeView:
    """A node as seen from outside."""

    node_id: int
    x: float
    y: float
    amount: float
    capacity: float


@dataclass(frozen=True)
class AntView:
    """An ant as seen from outside."""

    ant_id: int
    x: float
    y: float
    task: Task
    carried: float = 0.0
    collected: float = 0.0


@dataclass(frozen=True)
class Stats:
    """Aggregate counters.

    Attributes:
        node_count: Nodes currently registered.
        ant_count: Ants currently alive.
        generation: Generations completed (tour) or ticks run (foraging).
        best_distance: Best tour length, ``inf`` until one exists.
        delivered: Resource delivered to the depot (foraging).
        state: ``"running"`` or ``"idle"``.
    """

    node_count: int
    ant_count: int
    generation: int
    best_distance: float
    delivered: float
    state: str

    @property
    def running(self) -> bool:
        return self.state == "running"

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Snapshot:
    """Everything a renderer needs for one frame.

    Attributes:
        tick: Engine tick count.
        variant: ``"tour"`` or ``"foraging"``.
        width: World width.
        height: World height.
        depot: Depot position, or None for the tour variant.
        nodes: Node views in index order.
        ants: Ant views in index order.
        matrix: Read-only copy of the pheromone matrix.
        grid: Read-only copy of the pheromone grid (foraging only).
        grid_cell_size: Cell size of ``grid``.
        best_route: Best closed tour found (tour only).
        stats: Aggregate counters.
    """

    tick: int
    variant: str
    width: float
    height: float
    depot: Location | None
    nodes: tuple[NodeView, ...]
    ants: tuple[AntView, ...]
    matrix: NDArray[np.float64]
    grid: NDArray[np.float64] | None
    grid_cell_size: float
    best_route: tuple[int, ...] | None
    stats: Stats
