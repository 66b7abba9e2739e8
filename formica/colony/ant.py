"""ForagingAnt -- a two-mode agent shuttling resource to the depot.

An ant is either *searching* for food or *carrying* a load home.  The
mode is a tagged value (``Searching`` / ``Carrying``) so the load and the
node it came from can only exist while the ant is actually carrying.

Ants never mutate shared state directly.  Each tick ``decide`` reads the
environment and both pheromone fields and returns an ``Intent``: the
proposed next ant plus the side effects it wants (extract from a node,
deliver to the depot, lay trail).  The colony commits all intents only
after every ant has decided, so no ant sees a resource level already
changed by another ant in the same tick.

Movement models while searching:

- **Matrix steering**: roulette-select a node using the node-pair
  pheromone matrix, then walk a straight interpolated *leg* to it.
- **Field steering**: sample the pheromone grid ahead-left, ahead and
  ahead-right, turn toward visible food or the strongest probe, add
  bounded jitter, step forward and bounce off the world edges.

Carrying ants head straight for the depot (leg or homing turn) and lay a
heavier trail than searching ants.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import TYPE_CHECKING

from formica.colony.policies import Steering
from formica.colony.selection import desirability, select
from formica.geometry.location import Location

if TYPE_CHECKING:
    from numpy.random import Generator

    from formica.colony.parameters import Parameters
    from formica.colony.policies import ForagingPolicy
    from formica.pheromones.grid import PheromoneGrid
    from formica.pheromones.matrix import PheromoneMatrix
    from formica.world.environment import Environment

_TWO_PI = 2.0 * math.pi


class Task(Enum):
    """Mode tag exposed to snapshots and renderers."""

    EXPLORING = auto()  # tour construction
    SEARCHING = auto()
    CARRYING = auto()


@dataclass(frozen=True)
class Searching:
    """Looking for food, optionally committed to a target node."""

    target: int | None = None


@dataclass(frozen=True)
class Carrying:
    """Taking ``amount`` extracted from node ``source`` home."""

    amount: float
    source: int


Mode = Searching | Carrying


@dataclass(frozen=True)
class Leg:
    """A straight, interpolated move between two points.

    Attributes:
        origin: Where the leg started.
        destination: Where the leg ends.
        progress: Fraction completed, in ``[0, 1]``.
    """

    origin: Location
    destination: Location
    progress: float = 0.0

    @property
    def arrived(self) -> bool:
        """Return True once the destination is reached."""
        return self.progress >= 1.0

    @property
    def position(self) -> Location:
        """Current point along the leg."""
        return self.origin.lerp(self.destination, self.progress)

    def advanced(self, step: float) -> Leg:
        """Return this leg moved forward by ``step`` (capped at 1.0)."""
        return replace(self, progress=min(1.0, self.progress + max(0.0, step)))


@dataclass(frozen=True)
class Intent:
    """What one ant wants to happen this tick.

    Attributes:
        ant: Proposed next state of the ant.
        extract: Node index to extract from, if any.
        request: Amount requested from ``extract``.
        deliver: Amount handed to the depot.
        trail: Grid deposit at the ant's new position.
    """

    ant: ForagingAnt
    extract: int | None = None
    request: float = 0.0
    deliver: float = 0.0
    trail: float = 0.0


@dataclass
class ForagingAnt:
    """A single foraging ant.

    Attributes:
        ant_id: Index within the colony.
        x: Horizontal position in world units.
        y: Vertical position in world units.
        heading: Movement direction in radians (0 = east, pi/2 = south).
        mode: ``Searching`` or ``Carrying`` payload.
        leg: Active straight-line move (matrix steering), if any.
        collected: Lifetime total this ant has picked up.
    """

    ant_id: int
    x: float
    y: float
    heading: float = 0.0
    mode: Mode = field(default_factory=Searching)
    leg: Leg | None = None
    collected: float = 0.0

    @classmethod
    def at_depot(cls, ant_id: int, depot: Location, rng: Generator) -> ForagingAnt:
        """Create a searching ant on the depot with a random heading."""
        heading = float(rng.uniform(0.0, _TWO_PI))
        return cls(ant_id=ant_id, x=depot.x, y=depot.y, heading=heading)

    @property
    def location(self) -> Location:
        """Current position."""
        return Location(self.x, self.y)

    @property
    def task(self) -> Task:
        """Mode tag for display."""
        if isinstance(self.mode, Carrying):
            return Task.CARRYING
        return Task.SEARCHING

    @property
    def carried(self) -> float:
        """Load currently carried (0.0 while searching)."""
        if isinstance(self.mode, Carrying):
            return self.mode.amount
        return 0.0

    def decide(
        self,
        environment: Environment,
        matrix: PheromoneMatrix,
        grid: PheromoneGrid,
        params: Parameters,
        policy: ForagingPolicy,
        rng: Generator,
    ) -> Intent:
        """Work out this tick's action without touching shared state.

        Args:
            environment: Node registry and bounds (read only).
            matrix: Depot/node pheromone matrix (read only).
            grid: Spatial pheromone grid (read only).
            params: Current ACO parameters.
            policy: Movement and sensing constants.
            rng: Shared random generator.

        Returns:
            The proposed next state and its side effects.
        """
        match self.mode:
            case Carrying(amount=amount):
                return self._carry(environment, params, policy, rng, amount)
            case _:
                return self._search(environment, matrix, grid, params, policy, rng)

    # -- Private behaviour methods --

    def _search(
        self,
        environment: Environment,
        matrix: PheromoneMatrix,
        grid: PheromoneGrid,
        params: Parameters,
        policy: ForagingPolicy,
        rng: Generator,
    ) -> Intent:
        """SEARCHING ants pick up food if they stand on it, else move.

        Under matrix steering an ant only looks for food between legs, so
        it does not grab from nodes it merely passes.  Pickup takes
        ``unit_load`` (clipped to what is left) and proposes a switch to
        ``Carrying``.  The colony confirms the amount when it applies the
        intent.
        """
        depot = _depot_of(environment)
        found = None
        if self.leg is None or self.leg.arrived:
            found = environment.resource_near(
                self.x,
                self.y,
                policy.proximity_radius,
            )
        if found is not None:
            request = min(policy.unit_load, environment.nodes[found].amount)
            here = self.location
            leg = Leg(here, depot) if policy.steering is Steering.MATRIX else None
            ant = replace(
                self,
                mode=Carrying(amount=request, source=found),
                heading=here.angle_to(depot),
                leg=leg,
            )
            return Intent(ant=ant, extract=found, request=request)

        if policy.steering is Steering.MATRIX:
            moved = self._follow_matrix(environment, matrix, params, policy, rng)
        else:
            moved = self._follow_field(environment, grid, params, policy, rng)
        return Intent(ant=moved, trail=policy.search_trail)

    def _carry(
        self,
        environment: Environment,
        params: Parameters,
        policy: ForagingPolicy,
        rng: Generator,
        amount: float,
    ) -> Intent:
        """CARRYING ants walk home and deliver on arrival.

        After delivering, the ant goes back to searching with a freshly
        randomised heading.
        """
        depot = _depot_of(environment)
        here = self.location
        if here.distance_to(depot) < policy.proximity_radius:
            ant = replace(
                self,
                mode=Searching(),
                heading=float(rng.uniform(0.0, _TWO_PI)),
                leg=None,
            )
            return Intent(ant=ant, deliver=amount)

        if policy.steering is Steering.MATRIX:
            leg = self.leg
            if leg is None or leg.destination != depot:
                leg = Leg(here, depot)
            moved = self._walk_leg(leg, policy.leg_rate * params.tick_speed)
        else:
            heading = self.heading + policy.home_turn * _turn_toward(
                self.heading,
                here.angle_to(depot),
            )
            heading += float(rng.uniform(-policy.carry_jitter, policy.carry_jitter))
            step = policy.speed * params.tick_speed
            moved = self._advance(environment, heading, step)
        return Intent(ant=moved, trail=policy.carry_trail)

    def _follow_matrix(
        self,
        environment: Environment,
        matrix: PheromoneMatrix,
        params: Parameters,
        policy: ForagingPolicy,
        rng: Generator,
    ) -> ForagingAnt:
        """Continue the current leg, or roulette-select a new target node.

        Node ``i`` sits at matrix index ``i + 1`` (index 0 is the depot).
        Each non-depleted node is weighted by pheromone on the depot edge,
        inverse distance and how full it still is.  If nothing is viable
        the ant falls back to a random walk.
        """
        if self.leg is not None and not self.leg.arrived:
            return self._walk_leg(self.leg, policy.leg_rate * params.tick_speed)

        here = self.location
        candidates: list[int] = []
        weights: list[float] = []
        for i, node in enumerate(environment.nodes):
            if node.is_depleted:
                continue
            candidates.append(i)
            weights.append(
                desirability(
                    matrix.get(0, i + 1),
                    here.distance_to(node.location),
                    params.alpha,
                    params.beta,
                    node.richness,
                ),
            )

        choice = select(candidates, weights, rng)
        if choice is None:
            return self._wander(environment, params, policy, rng)

        target = environment.nodes[choice].location
        return replace(
            self,
            mode=Searching(target=choice),
            heading=here.angle_to(target),
            leg=Leg(here, target),
        )

    def _follow_field(
        self,
        environment: Environment,
        grid: PheromoneGrid,
        params: Parameters,
        policy: ForagingPolicy,
        rng: Generator,
    ) -> ForagingAnt:
        """Steer by what the ant can sense.

        Food within ``sensing_radius`` wins outright: the ant turns
        ``food_turn`` of the way toward it.  Otherwise the three grid
        probes are compared and the ant turns ``pheromone_turn`` toward
        a side probe that beats the centre one.  Jitter is always added.
        """
        heading = self.heading
        here = self.location
        food = environment.nearest_resource(self.x, self.y, policy.sensing_radius)
        if food is not None:
            target = environment.nodes[food].location
            heading += policy.food_turn * _turn_toward(heading, here.angle_to(target))
        else:
            left = self._probe(grid, heading - policy.sensor_angle, policy)
            ahead = self._probe(grid, heading, policy)
            right = self._probe(grid, heading + policy.sensor_angle, policy)
            if left > ahead and left >= right:
                heading -= policy.pheromone_turn
            elif right > ahead and right > left:
                heading += policy.pheromone_turn

        heading += float(rng.uniform(-policy.jitter, policy.jitter))
        ant = self._advance(environment, heading, policy.speed * params.tick_speed)
        return replace(ant, mode=Searching(target=food))

    def _wander(
        self,
        environment: Environment,
        params: Parameters,
        policy: ForagingPolicy,
        rng: Generator,
    ) -> ForagingAnt:
        """Pure random steering (no usable signal)."""
        heading = self.heading + float(rng.uniform(-policy.jitter, policy.jitter))
        ant = self._advance(environment, heading, policy.speed * params.tick_speed)
        return replace(ant, mode=Searching(), leg=None)

    def _probe(
        self,
        grid: PheromoneGrid,
        angle: float,
        policy: ForagingPolicy,
    ) -> float:
        """Grid value ``sensor_distance`` ahead along ``angle``."""
        return grid.read(
            self.x + math.cos(angle) * policy.sensor_distance,
            self.y + math.sin(angle) * policy.sensor_distance,
        )

    def _walk_leg(self, leg: Leg, step: float) -> ForagingAnt:
        """Advance along ``leg`` and move to the new point."""
        leg = leg.advanced(step)
        pos = leg.position
        return replace(self, x=pos.x, y=pos.y, leg=leg)

    def _advance(
        self,
        environment: Environment,
        heading: float,
        distance: float,
    ) -> ForagingAnt:
        """Step ``distance`` along ``heading``, reflecting at the edges."""
        nx = self.x + math.cos(heading) * distance
        ny = self.y + math.sin(heading) * distance

        if not environment.contains(nx, ny):
            if nx < 0.0 or nx > environment.width:
                heading = math.pi - heading
                nx = min(max(nx, 0.0), environment.width)
            if ny < 0.0 or ny > environment.height:
                heading = -heading
                ny = min(max(ny, 0.0), environment.height)

        return replace(self, x=nx, y=ny, heading=heading % _TWO_PI, leg=None)


def _turn_toward(heading: float, target: float) -> float:
    """Signed smallest rotation (radians) from ``heading`` to ``target``."""
    return (target - heading + math.pi) % _TWO_PI - math.pi


def _depot_of(environment: Environment) -> Location:
    """The depot, or the world centre if none is set."""
    if environment.depot is not None:
        return environment.depot
    return Location(environment.width / 2.0, environment.height / 2.0)
