"""Config -- load simulation settings from YAML files.

World bounds, node-set rules, per-variant ACO parameters and the foraging
policy all live in YAML and are parsed into typed dataclasses here.
Missing keys fall back to the dataclass defaults; unknown keys inside a
nested section are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from formica.colony.parameters import Parameters
from formica.colony.policies import ForagingPolicy, Steering


class Variant(Enum):
    """Which colony the engine runs."""

    TOUR = "tour"
    FORAGING = "foraging"


def _tour_parameters() -> Parameters:
    return Parameters(num_ants=50, deposit_factor=1.0)


def _foraging_parameters() -> Parameters:
    return Parameters(num_ants=15, deposit_factor=100.0)


@dataclass
class SimulationConfig:
    """Top-level simulation configuration.

    Attributes:
        seed: RNG seed for deterministic replay.
        variant: Colony variant to run.
        world_width: Width of the world in world units.
        world_height: Height of the world in world units.
        depot_x: Depot position (foraging only).
        depot_y: Depot position (foraging only).
        min_depot_distance: Node additions closer than this to the depot
            are rejected.
        max_nodes: Node count limit; excess additions are truncated.
        remove_radius: Radius of ``remove_node``.
        grid_cell_size: Cell size of the foraging pheromone grid.
        update_chance: Per-tick probability of a foraging field update.
        tour: ACO parameters for the tour variant.
        foraging: ACO parameters for the foraging variant.
        policy: Movement and sensing constants for foraging ants.
    """

    seed: int = 42
    variant: Variant = Variant.FORAGING

    # World
    world_width: float = 800.0
    world_height: float = 600.0
    depot_x: float = 400.0
    depot_y: float = 300.0

    # Node set
    min_depot_distance: float = 30.0
    max_nodes: int = 20
    remove_radius: float = 15.0

    # Foraging fields
    grid_cell_size: float = 10.0
    update_chance: float = 0.1

    tour: Parameters = field(default_factory=_tour_parameters)
    foraging: Parameters = field(default_factory=_foraging_parameters)
    policy: ForagingPolicy = field(default_factory=ForagingPolicy)

    @property
    def params(self) -> Parameters:
        """Parameters of the selected variant."""
        if self.variant is Variant.TOUR:
            return self.tour
        return self.foraging

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ValueError: If ``variant`` or ``policy.steering`` is not
                recognised.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        return cls(
            seed=data.get("seed", cls.seed),
            variant=parse_variant(data.get("variant", cls.variant.value)),
            world_width=data.get("world_width", cls.world_width),
            world_height=data.get("world_height", cls.world_height),
            depot_x=data.get("depot_x", cls.depot_x),
            depot_y=data.get("depot_y", cls.depot_y),
            min_depot_distance=data.get(
                "min_depot_distance",
                cls.min_depot_distance,
            ),
            max_nodes=data.get("max_nodes", cls.max_nodes),
            remove_radius=data.get("remove_radius", cls.remove_radius),
            grid_cell_size=data.get("grid_cell_size", cls.grid_cell_size),
            update_chance=data.get("update_chance", cls.update_chance),
            tour=_parameters(data.get("tour"), _tour_parameters()),
            foraging=_parameters(data.get("foraging"), _foraging_parameters()),
            policy=_policy(data.get("policy")),
        )


def parse_variant(value: str | Variant) -> Variant:
    """Turn a variant name into a ``Variant``.

    Raises:
        ValueError: If the name is not a known variant.
    """
    if isinstance(value, Variant):
        return value
    try:
        return Variant(str(value).lower())
    except ValueError:
        known = ", ".join(v.value for v in Variant)
        msg = f"Unknown variant {value!r} (expected one of: {known})"
        raise ValueError(msg) from None


def _known(data: dict[str, Any] | None, cls: type) -> dict[str, Any]:
    """Keep only the keys that are fields of dataclass ``cls``."""
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in (data or {}).items() if k in names}


def _parameters(data: dict[str, Any] | None, defaults: Parameters) -> Parameters:
    values = {f.name: getattr(defaults, f.name) for f in fields(Parameters)}
    values.update(_known(data, Parameters))
    return Parameters(**values)


def _policy(data: dict[str, Any] | None) -> ForagingPolicy:
    values = _known(data, ForagingPolicy)
    if "steering" in values:
        try:
            values["steering"] = Steering(str(values["steering"]).lower())
        except ValueError:
            msg = f"Unknown steering {values['steering']!r}"
            raise ValueError(msg) from None
    return ForagingPolicy(**values)
