"""ForagingColony -- tick scheduler for the foraging variant.

The colony owns its ants, both pheromone fields and the running total of
delivered resource.  One tick is:

1. Decide: every ant, in order, proposes an ``Intent`` from a consistent
   read-only view of the environment and fields.
2. Apply: intents are committed in the same order: extraction (clipped
   to what is actually left), delivery, movement and trail deposits.
3. Field update: with probability ``update_chance`` the node matrix
   evaporates and is reinforced from every carrying ant's load, and the
   grid evaporates.

Any change to the node set goes through ``rebuild``: fresh fields sized
for the new node count and a fresh population at the depot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from numpy.random import Generator

from formica.colony.ant import Carrying, ForagingAnt, Intent, Searching
from formica.colony.parameters import Parameters
from formica.colony.policies import ForagingPolicy
from formica.geometry.location import Location
from formica.pheromones.grid import PheromoneGrid
from formica.pheromones.matrix import PheromoneMatrix
from formica.world.environment import Environment

logger = logging.getLogger(__name__)


@dataclass
class ForagingColony:
    """Ants, fields and counters for one foraging run.

    Attributes:
        environment: Node registry with depot and bounds.
        params: ACO parameters (shared with the host, updated live).
        policy: Movement and sensing constants.
        update_chance: Per-tick probability of a field update pass.
        grid_cell_size: Cell size of the spatial pheromone grid.
        ants: Current population.
        matrix: Depot/node pheromone matrix (index 0 is the depot).
        grid: Spatial pheromone grid.
        delivered: Resource delivered to the depot so far.
        tick: Ticks run since the colony was created.
    """

    environment: Environment
    params: Parameters = field(default_factory=Parameters)
    policy: ForagingPolicy = field(default_factory=ForagingPolicy)
    update_chance: float = 0.1
    grid_cell_size: float = 10.0
    ants: list[ForagingAnt] = field(default_factory=list)
    matrix: PheromoneMatrix = field(init=False, repr=False)
    grid: PheromoneGrid = field(init=False, repr=False)
    delivered: float = 0.0
    tick: int = 0

    def __post_init__(self) -> None:
        """Default the depot to the world centre and build empty fields."""
        if self.environment.depot is None:
            self.environment.depot = Location(
                self.environment.width / 2.0,
                self.environment.height / 2.0,
            )
        self._build_fields()

    @property
    def depot(self) -> Location:
        """The colony's home point."""
        assert self.environment.depot is not None
        return self.environment.depot

    @property
    def in_transit(self) -> float:
        """Resource currently being carried by ants."""
        return sum(ant.carried for ant in self.ants)

    def rebuild(self, rng: Generator) -> None:
        """Recreate fields and ants after a node-set or population change.

        Old ants are discarded.  ``delivered`` is kept; use ``clear`` to
        zero it.
        """
        self._build_fields()
        self.ants = []
        if self.environment.nodes:
            self.spawn_ants(rng)
        logger.info(
            "Initialised colony with %d node(s) and %d ant(s)",
            len(self.environment.nodes),
            len(self.ants),
        )

    def clear(self) -> None:
        """Drop all ants, fields and the delivered total."""
        self._build_fields()
        self.ants = []
        self.delivered = 0.0

    def spawn_ants(self, rng: Generator) -> None:
        """Create ``params.num_ants`` ants at the depot."""
        for i in range(self.params.num_ants):
            self.ants.append(ForagingAnt.at_depot(i, self.depot, rng))

    def step(self, rng: Generator) -> None:
        """Advance the colony by one tick (decide, apply, maybe update fields).

        Does nothing when there are no nodes.
        """
        if not self.environment.nodes:
            return
        intents = self.decide(rng)
        self.apply(intents)
        if rng.random() < self.update_chance:
            self.update_pheromones()
        self.tick += 1

    def decide(self, rng: Generator) -> list[Intent]:
        """Collect one intent per ant without mutating shared state."""
        return [
            ant.decide(
                self.environment,
                self.matrix,
                self.grid,
                self.params,
                self.policy,
                rng,
            )
            for ant in self.ants
        ]

    def apply(self, intents: list[Intent]) -> None:
        """Commit buffered intents in ant order.

        An extraction is confirmed with whatever the node still holds at
        commit time.  If an earlier ant emptied it this tick, the ant
        stays searching instead of carrying nothing.
        """
        updated: list[ForagingAnt] = []
        for intent in intents:
            ant = intent.ant
            if intent.extract is not None:
                taken = self.environment.extract(intent.extract, intent.request)
                if taken > 0.0:
                    mode = Carrying(amount=taken, source=intent.extract)
                    ant = replace(ant, mode=mode, collected=ant.collected + taken)
                else:
                    ant = replace(ant, mode=Searching(), leg=None)
            if intent.deliver > 0.0:
                self.delivered += intent.deliver
                logger.debug(
                    "Ant %d delivered %.1f (total %.1f)",
                    ant.ant_id,
                    intent.deliver,
                    self.delivered,
                )
            if intent.trail > 0.0:
                self.grid.deposit(ant.x, ant.y, intent.trail)
            updated.append(ant)
        self.ants = updated

    def update_pheromones(self) -> None:
        """Evaporate the matrix, reinforce from carrying ants, evaporate the grid.

        Each carrying ant adds ``deposit_factor * load`` to the depot edge
        of the node its load came from.  All deposits are computed before
        any is applied.
        """
        self.matrix.evaporate(self.params.evaporation)

        node_count = len(self.environment.nodes)
        deposits: list[tuple[int, int, float]] = []
        for ant in self.ants:
            if not isinstance(ant.mode, Carrying) or ant.mode.amount <= 0.0:
                continue
            if 0 <= ant.mode.source < node_count:
                amount = self.params.deposit_factor * ant.mode.amount
                deposits.append((0, ant.mode.source + 1, amount))
        for i, j, amount in deposits:
            self.matrix.deposit(i, j, amount)

        self.grid.evaporate(self.params.evaporation)

    def _build_fields(self) -> None:
        """Fresh matrix (depot + nodes) and grid."""
        expected = 1 + len(self.environment.nodes)
        self.matrix = PheromoneMatrix(
            size=expected,
            initial=self.params.initial_pheromone,
        )
        assert self.matrix.size == expected, "pheromone matrix out of sync with nodes"
        self.grid = PheromoneGrid(
            width=self.environment.width,
            height=self.environment.height,
            cell_size=self.grid_cell_size,
        )
