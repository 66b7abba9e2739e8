"""ForagingPolicy -- movement and sensing settings for foraging ants.

Where ``Parameters`` holds the ACO knobs the host may move at runtime,
the policy holds the behavioural constants of one foraging run: how far
an ant senses, how fast it walks, how hard it turns and how much trail it
lays.  Angles are in radians, distances in world units.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class Steering(Enum):
    """How a searching ant chooses where to go."""

    MATRIX = "matrix"  # roulette-select a node, then walk a straight leg
    FIELD = "field"  # continuous steering over the pheromone grid


@dataclass
class ForagingPolicy:
    """Behavioural constants for foraging ants.

    Attributes:
        steering: Movement model used while searching.
        proximity_radius: Distance at which an ant counts as *at* a node
            or the depot.
        sensing_radius: Distance within which food is detected directly.
        sensor_angle: Angular offset of the left/right grid probes.
        sensor_distance: How far ahead the grid probes reach.
        speed: Distance walked per step under field steering.
        jitter: Max random heading change per step while searching.
        carry_jitter: Max random heading change per step while carrying.
        food_turn: Fraction of the angle to visible food turned per step.
        home_turn: Fraction of the angle to the depot turned per step.
        pheromone_turn: Fixed turn toward the stronger grid probe.
        search_trail: Grid deposit per step while searching.
        carry_trail: Grid deposit per step while carrying.
        unit_load: Resource extracted per pickup.
        leg_rate: Leg progress per step under matrix steering.
    """

    steering: Steering = Steering.MATRIX
    proximity_radius: float = 10.0
    sensing_radius: float = 60.0
    sensor_angle: float = math.pi / 4
    sensor_distance: float = 15.0
    speed: float = 2.0
    jitter: float = 0.3
    carry_jitter: float = 0.1
    food_turn: float = 0.5
    home_turn: float = 0.5
    pheromone_turn: float = 0.25
    search_trail: float = 0.05
    carry_trail: float = 0.5
    unit_load: float = 1.0
    leg_rate: float = 0.02
