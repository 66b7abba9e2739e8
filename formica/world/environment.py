"""Environment -- the node registry and world bounds.

Holds the depot (the agents' home point), the node list and the rules
governing how nodes are added and removed:

- additions closer than ``min_depot_distance`` to the depot are ignored;
- once ``max_nodes`` is exceeded the excess is truncated;
- removal deletes every node within ``remove_radius`` of a point.

Nothing here raises for bad input: rejected requests simply return a
falsy value, and the caller inspects ``len(nodes)`` if it cares.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from numpy.random import Generator

from formica.geometry.location import Location
from formica.geometry.spatial import SpatialModel
from formica.world.node import Node

logger = logging.getLogger(__name__)


@dataclass
class Environment:
    """World bounds, depot and node set.

    Attributes:
        width: World width in world units.
        height: World height in world units.
        depot: Home point of the colony, or None for the tour variant.
        min_depot_distance: Additions closer than this to the depot are
            rejected.
        max_nodes: Upper bound on the node count; excess is truncated.
        remove_radius: Radius used by ``remove_near``.
        resource_range: ``(lo, hi)`` for the random amount given to a
            node added without an explicit amount.
        nodes: Current nodes, in insertion order.
    """

    width: float = 800.0
    height: float = 600.0
    depot: Location | None = None
    min_depot_distance: float = 30.0
    max_nodes: int = 20
    remove_radius: float = 15.0
    resource_range: tuple[float, float] = (50.0, 100.0)
    nodes: list[Node] = field(default_factory=list)
    _next_id: int = field(default=0, repr=False)

    def add_node(
        self,
        x: float,
        y: float,
        rng: Generator | None = None,
        *,
        amount: float | None = None,
    ) -> Node | None:
        """Add a node at ``(x, y)``.

        Args:
            x: Horizontal position.
            y: Vertical position.
            rng: Random source used to draw the resource amount when
                ``amount`` is not given.  Without either, the node is
                created empty (tour nodes).
            amount: Explicit starting amount (also used as capacity).

        Returns:
            The new node, or None if the request was rejected or truncated.
        """
        if not (math.isfinite(x) and math.isfinite(y)):
            logger.debug("Non-finite node position (%s, %s), ignoring", x, y)
            return None
        location = Location(float(x), float(y))
        if (
            self.depot is not None
            and location.distance_to(self.depot) < self.min_depot_distance
        ):
            logger.debug("Node at (%.1f, %.1f) too close to depot, ignoring", x, y)
            return None

        if amount is None and rng is not None:
            lo, hi = self.resource_range
            amount = lo + float(rng.random()) * (hi - lo)
        amount = amount or 0.0

        node = Node(
            node_id=self._next_id,
            location=location,
            amount=amount,
            capacity=amount,
        )
        self._next_id += 1
        self.nodes.append(node)

        if len(self.nodes) > self.max_nodes:
            del self.nodes[self.max_nodes :]
            logger.debug("Node limit %d reached, truncating", self.max_nodes)
            return None

        logger.info("Added node %d at (%.1f, %.1f)", node.node_id, x, y)
        return node

    def remove_near(self, x: float, y: float) -> int:
        """Remove every node within ``remove_radius`` of ``(x, y)``.

        Returns:
            Number of nodes removed.
        """
        point = Location(float(x), float(y))
        before = len(self.nodes)
        self.nodes = [
            n for n in self.nodes if n.location.distance_to(point) > self.remove_radius
        ]
        removed = before - len(self.nodes)
        if removed:
            logger.info("Removed %d node(s) near (%.1f, %.1f)", removed, x, y)
        return removed

    def clear(self) -> None:
        """Remove all nodes."""
        self.nodes.clear()
        logger.info("Cleared all nodes")

    def replenish(self) -> None:
        """Refill every node to its capacity."""
        for node in self.nodes:
            node.refill()

    def extract(self, index: int, request: float) -> float:
        """Take up to ``request`` units from the node at ``index``.

        Out-of-range indices extract nothing.
        """
        if not 0 <= index < len(self.nodes):
            return 0.0
        return self.nodes[index].take(request)

    def resource_near(self, x: float, y: float, radius: float) -> int | None:
        """Index of the first non-depleted node strictly within ``radius``."""
        point = Location(x, y)
        for i, node in enumerate(self.nodes):
            if not node.is_depleted and node.location.distance_to(point) < radius:
                return i
        return None

    def nearest_resource(self, x: float, y: float, radius: float) -> int | None:
        """Index of the closest non-depleted node within ``radius``."""
        point = Location(x, y)
        best: int | None = None
        best_dist = math.inf
        for i, node in enumerate(self.nodes):
            if node.is_depleted:
                continue
            dist = node.location.distance_to(point)
            if dist <= radius and dist < best_dist:
                best, best_dist = i, dist
        return best

    def contains(self, x: float, y: float) -> bool:
        """Return True if ``(x, y)`` lies inside the world bounds."""
        return 0.0 <= x <= self.width and 0.0 <= y <= self.height

    def spatial_model(self) -> SpatialModel:
        """Snapshot of the node positions as a SpatialModel."""
        return SpatialModel(tuple(n.location for n in self.nodes))

    def scatter(
        self,
        rng: Generator,
        count: int,
        *,
        min_distance: float = 100.0,
        margin: float = 50.0,
        max_attempts: int = 1000,
        stock: bool = True,
    ) -> int:
        """Place ``count`` random nodes away from the depot and the edges.

        Positions are redrawn until they lie at least ``min_distance``
        from the depot (when there is one).

        Args:
            rng: Seeded random generator.
            count: Number of nodes to place.
            min_distance: Minimum distance from the depot.
            margin: Distance kept from every world edge.
            max_attempts: Redraw budget per node before giving up.
            stock: Give each node a random resource amount; tour nodes
                are placed empty.

        Returns:
            Number of nodes actually added.
        """
        added = 0
        for _ in range(count):
            for _ in range(max_attempts):
                x = margin + float(rng.random()) * (self.width - 2 * margin)
                y = margin + float(rng.random()) * (self.height - 2 * margin)
                if (
                    self.depot is None
                    or Location(x, y).distance_to(self.depot) >= min_distance
                ):
                    break
            else:
                continue
            if self.add_node(x, y, rng if stock else None) is not None:
                added += 1
        return added
