"""Shared fixtures for the formica test suite."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.random import Generator

from formica.colony.colony import ForagingColony
from formica.colony.parameters import Parameters
from formica.geometry.location import Location
from formica.geometry.spatial import SpatialModel
from formica.simulation.config import SimulationConfig
from formica.world.environment import Environment


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def triangle() -> SpatialModel:
    """The 3-4-5 right triangle: (0, 0), (3, 4), (3, 0)."""
    return SpatialModel.from_points([(0.0, 0.0), (3.0, 4.0), (3.0, 0.0)])


@pytest.fixture
def small_environment() -> Environment:
    """A 200x200 world with the depot in the middle and no nodes."""
    return Environment(width=200.0, height=200.0, depot=Location(100.0, 100.0))


@pytest.fixture
def stocked_environment(small_environment: Environment) -> Environment:
    """The small world with two food nodes holding 10 units each."""
    small_environment.add_node(100.0, 160.0, amount=10.0)
    small_environment.add_node(40.0, 100.0, amount=10.0)
    return small_environment


@pytest.fixture
def default_config() -> SimulationConfig:
    """Default simulation config (no YAML file needed)."""
    return SimulationConfig()


@pytest.fixture
def foraging_colony(
    stocked_environment: Environment,
    rng: Generator,
) -> ForagingColony:
    """A five-ant foraging colony over the stocked environment."""
    colony = ForagingColony(
        environment=stocked_environment,
        params=Parameters(num_ants=5, deposit_factor=100.0),
    )
    colony.rebuild(rng)
    return colony
