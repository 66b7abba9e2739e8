"""SimulationEngine -- the single owned simulation object.

The engine holds the configuration, the seeded random source, the
environment and whichever colony the configured variant calls for.  A
host (CLI loop, viewer, test) drives it explicitly:

1. Edit the node set (``add_node``, ``remove_node``, ``clear_nodes``,
   ``scatter``); every change rebuilds the colony.
2. ``start`` / ``pause`` / ``reset`` toggle and restart the run.
3. ``step`` advances one tick (one generation for the tour variant);
   it is a no-op while idle.
4. ``snapshot`` / ``stats`` expose read-only state.

Nothing self-schedules; the running flag is only looked at in ``step``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace

import numpy as np
from numpy.random import Generator

from formica.colony.ant import Task
from formica.colony.colony import ForagingColony
from formica.colony.parameters import Parameters
from formica.colony.tour import TourColony
from formica.geometry.location import Location
from formica.simulation.config import SimulationConfig, Variant
from formica.simulation.snapshot import AntView, NodeView, Snapshot, Stats
from formica.world.environment import Environment

logger = logging.getLogger(__name__)


@dataclass
class SimulationEngine:
    """Drives one simulation forward tick by tick.

    Attributes:
        config: Loaded simulation configuration.
        environment: Node registry, depot and bounds.
        params: Live ACO parameters (a copy of the variant's config).
        colony: Active tour or foraging colony.
        rng: Master seeded random generator.
        running: True between ``start`` and ``pause``/completion.
        tick: Ticks stepped since the last reset.
    """

    config: SimulationConfig
    environment: Environment = field(init=False)
    params: Parameters = field(init=False)
    colony: TourColony | ForagingColony = field(init=False)
    rng: Generator = field(init=False)
    running: bool = False
    tick: int = 0

    def __post_init__(self) -> None:
        """Build RNG, environment and an empty colony from config."""
        self.rng = np.random.default_rng(self.config.seed)
        self.params = replace(self.config.params)
        depot = None
        if self.variant is Variant.FORAGING:
            depot = Location(self.config.depot_x, self.config.depot_y)
        self.environment = Environment(
            width=self.config.world_width,
            height=self.config.world_height,
            depot=depot,
            min_depot_distance=self.config.min_depot_distance,
            max_nodes=self.config.max_nodes,
            remove_radius=self.config.remove_radius,
        )
        if self.variant is Variant.TOUR:
            self.colony = self._new_tour()
        else:
            self.colony = ForagingColony(
                environment=self.environment,
                params=self.params,
                policy=self.config.policy,
                update_chance=self.config.update_chance,
                grid_cell_size=self.config.grid_cell_size,
            )

    @property
    def variant(self) -> Variant:
        return self.config.variant

    @property
    def node_count(self) -> int:
        return len(self.environment.nodes)

    # -- Node set --

    def add_node(self, x: float, y: float) -> bool:
        """Add a node and rebuild the colony.

        Foraging nodes get a random resource amount; tour nodes are empty.

        Returns:
            True if the node was added.
        """
        rng = self.rng if self.variant is Variant.FORAGING else None
        if self.environment.add_node(x, y, rng) is None:
            return False
        self._rebuild()
        return True

    def remove_node(self, x: float, y: float) -> int:
        """Remove nodes within ``remove_radius`` of ``(x, y)``.

        Returns:
            Number of nodes removed.
        """
        removed = self.environment.remove_near(x, y)
        if removed:
            self._rebuild()
        return removed

    def clear_nodes(self) -> None:
        """Remove every node and stop the run."""
        self.environment.clear()
        self.running = False
        if isinstance(self.colony, ForagingColony):
            self.colony.clear()
        else:
            self.colony = self._new_tour()

    def scatter(self, count: int) -> int:
        """Place ``count`` random nodes (the preset layout).

        Returns:
            Number of nodes actually added.
        """
        added = self.environment.scatter(
            self.rng,
            count,
            stock=self.variant is Variant.FORAGING,
        )
        if added:
            self._rebuild()
        logger.info("Scattered %d node(s)", added)
        return added

    # -- Run control --

    def start(self) -> bool:
        """Start (or resume) the run.

        Returns:
            False if there are no nodes to run on.
        """
        if not self.environment.nodes:
            logger.warning("Cannot start without nodes")
            return False
        if isinstance(self.colony, TourColony) and self.colony.is_complete:
            logger.info("Tour search already complete; reset to run again")
            return False
        self.running = True
        logger.info("Started %s run", self.variant.value)
        return True

    def pause(self) -> None:
        """Stop stepping until the next ``start``."""
        if self.running:
            logger.info("Paused at tick %d", self.tick)
        self.running = False

    def reset(self) -> None:
        """Stop, refill every node and rebuild the colony from scratch."""
        self.running = False
        self.tick = 0
        self.environment.replenish()
        if isinstance(self.colony, ForagingColony):
            self.colony.clear()
            self.colony.tick = 0
        self._rebuild()
        logger.info("Reset simulation")

    def set_param(self, name: str, value: float) -> bool:
        """Update a parameter by name (clamped into range).

        A population change rebuilds the colony when nodes exist.

        Returns:
            False if ``name`` is not recognised.
        """
        attr = self.params.update(name, value)
        if attr is None:
            logger.debug("Ignoring unknown parameter %r", name)
            return False
        logger.debug("Set %s = %s", attr, getattr(self.params, attr))
        if attr == "num_ants" and self.environment.nodes:
            self._rebuild()
        return True

    def step(self) -> bool:
        """Advance one tick.

        Returns:
            True if anything ran.
        """
        if not self.running or not self.environment.nodes:
            return False
        if isinstance(self.colony, TourColony):
            ran = self.colony.run_generation(self.rng)
            if self.colony.is_complete:
                self.running = False
                logger.info(
                    "Tour search complete after %d generation(s), best %.2f",
                    self.colony.generation,
                    self.colony.best_distance,
                )
            if not ran:
                return False
        else:
            self.colony.step(self.rng)
        self.tick += 1
        return True

    def run(self, ticks: int) -> int:
        """Step up to ``ticks`` times, stopping early once idle.

        Returns:
            Number of ticks that ran.
        """
        ran = 0
        for _ in range(ticks):
            if not self.step():
                break
            ran += 1
        return ran

    # -- Read-only views --

    def stats(self) -> Stats:
        """Aggregate counters for display."""
        state = "running" if self.running else "idle"
        if isinstance(self.colony, TourColony):
            ant_count = self.params.num_ants if self.environment.nodes else 0
            return Stats(
                node_count=self.node_count,
                ant_count=ant_count,
                generation=self.colony.generation,
                best_distance=self.colony.best_distance,
                delivered=0.0,
                state=state,
            )
        return Stats(
            node_count=self.node_count,
            ant_count=len(self.colony.ants),
            generation=self.colony.tick,
            best_distance=math.inf,
            delivered=self.colony.delivered,
            state=state,
        )

    def snapshot(self) -> Snapshot:
        """Read-only copy of everything a renderer draws."""
        nodes = tuple(
            NodeView(
                node_id=n.node_id,
                x=n.location.x,
                y=n.location.y,
                amount=n.amount,
                capacity=n.capacity,
            )
            for n in self.environment.nodes
        )
        if isinstance(self.colony, TourColony):
            spatial = self.colony.spatial
            ants = tuple(
                AntView(
                    ant_id=a.ant_id,
                    x=spatial.locations[a.current].x,
                    y=spatial.locations[a.current].y,
                    task=Task.EXPLORING,
                )
                for a in self.colony.last_tours
                if 0 <= a.current < spatial.size
            )
            best = self.colony.best_route
            return Snapshot(
                tick=self.tick,
                variant=self.variant.value,
                width=self.environment.width,
                height=self.environment.height,
                depot=None,
                nodes=nodes,
                ants=ants,
                matrix=self.colony.pheromones.values(),
                grid=None,
                grid_cell_size=0.0,
                best_route=tuple(best) if best is not None else None,
                stats=self.stats(),
            )

        ants = tuple(
            AntView(
                ant_id=a.ant_id,
                x=a.x,
                y=a.y,
                task=a.task,
                carried=a.carried,
                collected=a.collected,
            )
            for a in self.colony.ants
        )
        return Snapshot(
            tick=self.tick,
            variant=self.variant.value,
            width=self.environment.width,
            height=self.environment.height,
            depot=self.environment.depot,
            nodes=nodes,
            ants=ants,
            matrix=self.colony.matrix.values(),
            grid=self.colony.grid.values(),
            grid_cell_size=self.colony.grid.cell_size,
            best_route=None,
            stats=self.stats(),
        )

    # -- Internals --

    def _new_tour(self) -> TourColony:
        return TourColony(spatial=self.environment.spatial_model(), params=self.params)

    def _rebuild(self) -> None:
        """Fresh colony state for the current node set."""
        if isinstance(self.colony, ForagingColony):
            self.colony.rebuild(self.rng)
        else:
            self.colony = self._new_tour()
            logger.info(
                "Initialised tour colony with %d node(s)",
                self.node_count,
            )
