"""Node -- a fixed point of interest in the environment.

For the tour variant a node is purely topological (a city).  For the
foraging variant it is a food source that carries an extractable
``amount`` bounded by its ``capacity``.
"""

from __future__ import annotations

from dataclasses import dataclass

from formica.geometry.location import Location


@dataclass
class Node:
    """A node with optional extractable resource.

    Attributes:
        node_id: Stable identity, unique within one environment.
        location: Immutable position.
        amount: Resource currently available (``0 <= amount <= capacity``).
        capacity: Amount held at full replenishment.
    """

    node_id: int
    location: Location
    amount: float = 0.0
    capacity: float = 0.0

    def __post_init__(self) -> None:
        """Clamp ``amount`` into ``[0, capacity]``."""
        self.capacity = max(0.0, self.capacity)
        self.amount = min(max(0.0, self.amount), self.capacity)

    @property
    def is_depleted(self) -> bool:
        """Return True when nothing is left to extract."""
        return self.amount <= 0.0

    @property
    def richness(self) -> float:
        """Fraction of capacity still available (0.0 when capacity is 0)."""
        if self.capacity > 0.0:
            return self.amount / self.capacity
        return 0.0

    def take(self, request: float) -> float:
        """Extract up to ``request`` units and return what was taken.

        Negative or non-positive requests take nothing; the amount never
        drops below zero.
        """
        taken = min(max(0.0, request), self.amount)
        self.amount -= taken
        return taken

    def refill(self) -> None:
        """Restore the node to full capacity."""
        self.amount = self.capacity
