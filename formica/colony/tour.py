"""TourColony -- generation scheduler for the tour variant.

One generation: every ant builds a complete tour against the same
(read-only) pheromone matrix, then the matrix evaporates once and each
tour deposits ``deposit_factor / length`` on all of its edges.  The best
tour is replaced only by a strictly shorter one, so the recorded best
length never increases.

A colony whose generation counter has reached ``max_generations`` is
complete and refuses to run; build a new colony to start over.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from numpy.random import Generator

from formica.colony.parameters import Parameters
from formica.colony.tour_ant import TourAnt
from formica.geometry.spatial import SpatialModel
from formica.pheromones.matrix import PheromoneMatrix

logger = logging.getLogger(__name__)


@dataclass
class TourColony:
    """Ant population and best-tour record over a fixed node set.

    Attributes:
        spatial: Node positions and distances.
        params: ACO parameters (shared with the host, updated live).
        pheromones: Node-pair pheromone matrix.
        best_route: Shortest closed route found so far.
        best_distance: Its length (``inf`` until the first generation).
        generation: Generations completed.
        history: Best length after each generation.
        last_tours: Ants of the most recent generation.
    """

    spatial: SpatialModel
    params: Parameters = field(default_factory=Parameters)
    pheromones: PheromoneMatrix = field(init=False, repr=False)
    best_route: list[int] | None = None
    best_distance: float = math.inf
    generation: int = 0
    history: list[float] = field(default_factory=list)
    last_tours: list[TourAnt] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Build a uniform matrix sized to the node set."""
        self.pheromones = PheromoneMatrix(
            size=self.spatial.size,
            initial=self.params.initial_pheromone,
        )
        assert self.pheromones.size == self.spatial.size, (
            "pheromone matrix out of sync with nodes"
        )

    @property
    def is_complete(self) -> bool:
        """Return True once the generation budget is used up."""
        return self.generation >= self.params.max_generations

    def run_generation(self, rng: Generator) -> bool:
        """Run one generation.

        Args:
            rng: Seeded random generator.

        Returns:
            True if a generation ran; False if the colony is complete or
            has no nodes.
        """
        n = self.spatial.size
        if self.is_complete or n == 0:
            return False

        ants: list[TourAnt] = []
        for i in range(self.params.num_ants):
            ant = TourAnt(ant_id=i, start=i % n, node_count=n)
            ant.construct(
                self.spatial,
                self.pheromones,
                self.params.alpha,
                self.params.beta,
                rng,
            )
            ants.append(ant)

        self.pheromones.evaporate(self.params.evaporation)
        for ant in ants:
            self.pheromones.deposit_tour(
                ant.route,
                ant.distance,
                self.params.deposit_factor,
            )
            if ant.distance < self.best_distance:
                self.best_distance = ant.distance
                self.best_route = list(ant.route)
                logger.debug(
                    "Generation %d: new best %.2f",
                    self.generation,
                    ant.distance,
                )

        self.last_tours = ants
        self.history.append(self.best_distance)
        self.generation += 1
        return True

    def run(self, rng: Generator) -> int:
        """Run generations until complete.

        Returns:
            Number of generations run.
        """
        ran = 0
        while self.run_generation(rng):
            ran += 1
        if ran:
            logger.info(
                "Finished %d generation(s), best length %.2f",
                self.generation,
                self.best_distance,
            )
        return ran
