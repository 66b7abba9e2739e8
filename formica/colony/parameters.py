"""Parameters -- the ACO knobs shared by both colony variants.

Every value is clamped into its valid range on construction and on
update; out-of-range requests are silently pulled back in.  Updates
arrive by name from the host (sliders, CLI, YAML) and unknown names are
ignored.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

ALPHA_RANGE = (0.1, 5.0)
BETA_RANGE = (0.1, 5.0)
EVAPORATION_RANGE = (0.01, 0.5)
POPULATION_RANGE = (5, 50)
TICK_SPEED_RANGE = (0.1, 5.0)

# Host-facing names (and their aliases) mapped to attribute names
_ALIASES: dict[str, str] = {
    "alpha": "alpha",
    "beta": "beta",
    "evaporation": "evaporation",
    "evaporation_rate": "evaporation",
    "num_ants": "num_ants",
    "population": "num_ants",
    "tick_speed": "tick_speed",
    "animation_speed": "tick_speed",
}


def _clamp(value: float, lo: float, hi: float) -> float:
    """Clamp ``value`` into ``[lo, hi]``; NaN maps to ``lo``."""
    if math.isnan(value):
        return lo
    return min(max(value, lo), hi)


@dataclass
class Parameters:
    """ACO parameter set.

    Attributes:
        alpha: Pheromone exponent in the selection rule.
        beta: Inverse-distance exponent in the selection rule.
        evaporation: Fraction of pheromone lost per evaporation pass.
        deposit_factor: Deposit constant Q.
        num_ants: Population size.
        tick_speed: Movement speed multiplier for the foraging variant.
        max_generations: Generation budget for the tour variant.
        initial_pheromone: Level every field entry starts at.
    """

    alpha: float = 1.0
    beta: float = 2.0
    evaporation: float = 0.1
    deposit_factor: float = 1.0
    num_ants: int = 20
    tick_speed: float = 1.0
    max_generations: int = 100
    initial_pheromone: float = 1.0

    def __post_init__(self) -> None:
        """Clamp every field into its valid range."""
        self.alpha = _clamp(float(self.alpha), *ALPHA_RANGE)
        self.beta = _clamp(float(self.beta), *BETA_RANGE)
        self.evaporation = _clamp(float(self.evaporation), *EVAPORATION_RANGE)
        self.num_ants = _clamp_population(self.num_ants)
        self.tick_speed = _clamp(float(self.tick_speed), *TICK_SPEED_RANGE)
        self.deposit_factor = _clamp(float(self.deposit_factor), 0.0, math.inf)
        self.max_generations = int(_clamp(float(self.max_generations), 0, 1e9))
        self.initial_pheromone = _clamp(float(self.initial_pheromone), 0.0, 1e6)

    def update(self, name: str, value: float) -> str | None:
        """Set a parameter by its host-facing name.

        Args:
            name: One of ``alpha``, ``beta``, ``evaporation``, ``num_ants``
                (alias ``population``), ``tick_speed`` (alias
                ``animation_speed``).
            value: Requested value; clamped into range.

        Returns:
            The attribute that was changed, or None if ``name`` is not
            recognised.
        """
        attr = _ALIASES.get(name)
        if attr is None:
            return None
        match attr:
            case "alpha":
                self.alpha = _clamp(float(value), *ALPHA_RANGE)
            case "beta":
                self.beta = _clamp(float(value), *BETA_RANGE)
            case "evaporation":
                self.evaporation = _clamp(float(value), *EVAPORATION_RANGE)
            case "num_ants":
                self.num_ants = _clamp_population(value)
            case "tick_speed":
                self.tick_speed = _clamp(float(value), *TICK_SPEED_RANGE)
        return attr


def _clamp_population(value: float) -> int:
    """Truncate to an integer head-count within ``POPULATION_RANGE``."""
    lo, hi = POPULATION_RANGE
    value = float(value)
    if math.isnan(value):
        return lo
    if math.isinf(value):
        return hi if value > 0 else lo
    return int(_clamp(float(int(value)), lo, hi))
