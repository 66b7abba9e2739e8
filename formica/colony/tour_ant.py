"""TourAnt -- an agent that builds one closed tour over a fixed node set.

The ant starts at a node, repeatedly roulette-selects an unvisited node
weighted by pheromone and inverse distance, and finally returns to its
start.  It only ever *reads* the pheromone matrix; the colony deposits
once every ant in the generation has finished.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from formica.colony.selection import desirability, select

if TYPE_CHECKING:
    from numpy.random import Generator

    from formica.geometry.spatial import SpatialModel
    from formica.pheromones.matrix import PheromoneMatrix


@dataclass
class TourAnt:
    """A tour-constructing ant.

    Attributes:
        ant_id: Index within the generation.
        start: Node the tour starts (and ends) at.
        node_count: Size of the node set.
        current: Node the ant is standing on.
        visited: Boolean mask of visited nodes.
        route: Ordered nodes visited so far (closed once complete).
        distance: Length travelled so far.
    """

    ant_id: int
    start: int
    node_count: int
    current: int = field(init=False)
    visited: NDArray[np.bool_] = field(init=False, repr=False)
    route: list[int] = field(init=False)
    distance: float = 0.0

    def __post_init__(self) -> None:
        """Place the ant on its start node."""
        self.current = self.start
        self.visited = np.zeros(self.node_count, dtype=bool)
        if 0 <= self.start < self.node_count:
            self.visited[self.start] = True
        self.route = [self.start]

    @property
    def is_closed(self) -> bool:
        """Return True once the route has returned to its first node."""
        return len(self.route) > 1 and self.route[0] == self.route[-1]

    @property
    def is_complete(self) -> bool:
        """Return True for a closed route through every node."""
        return self.is_closed and len(self.route) == self.node_count + 1

    def unvisited(self) -> list[int]:
        """Nodes not yet on the route, in index order."""
        return [int(i) for i in np.flatnonzero(~self.visited)]

    def choose_next(
        self,
        spatial: SpatialModel,
        pheromones: PheromoneMatrix,
        alpha: float,
        beta: float,
        rng: Generator,
    ) -> int | None:
        """Roulette-select the next node among the unvisited ones.

        Returns:
            The chosen node, or None if none is viable.
        """
        candidates = self.unvisited()
        weights = [
            desirability(
                pheromones.get(self.current, c),
                spatial.distance(self.current, c),
                alpha,
                beta,
            )
            for c in candidates
        ]
        return select(candidates, weights, rng)

    def move_to(self, node: int, spatial: SpatialModel) -> None:
        """Walk to ``node``; visited or unknown nodes are ignored."""
        if not 0 <= node < self.node_count or self.visited[node]:
            return
        self.distance += spatial.distance(self.current, node)
        self.visited[node] = True
        self.route.append(node)
        self.current = node

    def close_tour(self, spatial: SpatialModel) -> None:
        """Return to the start node, completing the tour."""
        if self.is_closed:
            return
        self.distance += spatial.distance(self.current, self.start)
        self.route.append(self.start)
        self.current = self.start

    def construct(
        self,
        spatial: SpatialModel,
        pheromones: PheromoneMatrix,
        alpha: float,
        beta: float,
        rng: Generator,
    ) -> None:
        """Build the whole tour.

        When no candidate is viable the tour is closed immediately, so
        construction always terminates.
        """
        while not self.is_closed:
            nxt = self.choose_next(spatial, pheromones, alpha, beta, rng)
            if nxt is None:
                self.close_tour(spatial)
            else:
                self.move_to(nxt, spatial)
