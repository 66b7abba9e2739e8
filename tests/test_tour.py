"""Tests for the tour variant -- TourAnt and TourColony."""

import math

import numpy as np
import pytest
from numpy.random import Generator

from formica.colony.parameters import Parameters
from formica.colony.tour import TourColony
from formica.colony.tour_ant import TourAnt
from formica.geometry.spatial import SpatialModel
from formica.pheromones.matrix import PheromoneMatrix


@pytest.fixture
def square() -> SpatialModel:
    """Six points: a 10x10 square plus two midpoints."""
    return SpatialModel.from_points(
        [(0, 0), (10, 0), (10, 10), (0, 10), (5, 0), (5, 10)],
    )


class TestTourAnt:
    """Tests for building a single tour."""

    def test_construct_closes_full_tour(
        self,
        triangle: SpatialModel,
        rng: Generator,
    ) -> None:
        ant = TourAnt(ant_id=0, start=1, node_count=3)
        ant.construct(triangle, PheromoneMatrix(size=3), 1.0, 2.0, rng)
        assert ant.is_complete
        assert ant.route[0] == ant.route[-1] == 1
        assert sorted(ant.route[:-1]) == [0, 1, 2]
        assert ant.distance == pytest.approx(12.0)

    def test_distance_matches_route(self, square: SpatialModel, rng: Generator) -> None:
        ant = TourAnt(ant_id=0, start=0, node_count=square.size)
        ant.construct(square, PheromoneMatrix(size=square.size), 1.0, 2.0, rng)
        assert ant.distance == pytest.approx(square.route_length(ant.route))

    def test_move_records_edge_length(self, triangle: SpatialModel) -> None:
        """Moving from 0 to 1 on the 3-4-5 triangle adds 5.0."""
        ant = TourAnt(ant_id=0, start=0, node_count=3)
        ant.move_to(1, triangle)
        assert ant.route == [0, 1]
        assert ant.distance == 5.0

    def test_move_to_visited_ignored(self, triangle: SpatialModel) -> None:
        ant = TourAnt(ant_id=0, start=0, node_count=3)
        ant.move_to(2, triangle)
        ant.move_to(2, triangle)
        ant.move_to(0, triangle)
        ant.move_to(9, triangle)
        assert ant.route == [0, 2]
        assert ant.distance == 3.0

    def test_choose_next_none_when_all_visited(
        self,
        triangle: SpatialModel,
        rng: Generator,
    ) -> None:
        ant = TourAnt(ant_id=0, start=0, node_count=3)
        ant.move_to(1, triangle)
        ant.move_to(2, triangle)
        assert ant.choose_next(triangle, PheromoneMatrix(size=3), 1.0, 2.0, rng) is None

    def test_single_node_tour(self, rng: Generator) -> None:
        spatial = SpatialModel.from_points([(4.0, 4.0)])
        ant = TourAnt(ant_id=0, start=0, node_count=1)
        ant.construct(spatial, PheromoneMatrix(size=1), 1.0, 2.0, rng)
        assert ant.route == [0, 0]
        assert ant.distance == 0.0


class TestTourColony:
    """Tests for generation scheduling and the best-tour record."""

    def test_zero_generations_is_complete(self, triangle: SpatialModel) -> None:
        colony = TourColony(spatial=triangle, params=Parameters(max_generations=0))
        assert colony.is_complete
        assert math.isinf(colony.best_distance)
        assert colony.best_route is None

    def test_complete_colony_refuses(
        self,
        triangle: SpatialModel,
        rng: Generator,
    ) -> None:
        colony = TourColony(spatial=triangle, params=Parameters(max_generations=0))
        assert colony.run_generation(rng) is False
        assert colony.generation == 0

    def test_no_nodes_refused(self, rng: Generator) -> None:
        colony = TourColony(spatial=SpatialModel(()))
        assert colony.run_generation(rng) is False

    def test_triangle_best(self, triangle: SpatialModel, rng: Generator) -> None:
        colony = TourColony(spatial=triangle, params=Parameters(max_generations=3))
        assert colony.run(rng) == 3
        assert colony.is_complete
        assert colony.best_distance == pytest.approx(12.0)
        assert colony.best_route is not None
        assert colony.best_route[0] == colony.best_route[-1]

    def test_best_never_increases(self, square: SpatialModel, rng: Generator) -> None:
        params = Parameters(num_ants=5, max_generations=30)
        colony = TourColony(spatial=square, params=params)
        colony.run(rng)
        assert len(colony.history) == 30
        assert all(b <= a for a, b in zip(colony.history, colony.history[1:]))
        assert colony.best_distance <= min(t.distance for t in colony.last_tours)

    def test_ants_start_round_robin(
        self,
        triangle: SpatialModel,
        rng: Generator,
    ) -> None:
        colony = TourColony(spatial=triangle, params=Parameters(num_ants=7))
        colony.run_generation(rng)
        assert [a.start for a in colony.last_tours] == [0, 1, 2, 0, 1, 2, 0]

    def test_generation_reinforces_edges(
        self,
        triangle: SpatialModel,
        rng: Generator,
    ) -> None:
        params = Parameters(num_ants=5, evaporation=0.1, deposit_factor=1.0)
        colony = TourColony(spatial=triangle, params=params)
        colony.run_generation(rng)
        # every tour uses all three edges: 1.0 * 0.9 + 5 * (1 / 12)
        assert colony.pheromones.get(0, 1) == pytest.approx(0.9 + 5.0 / 12.0)
        assert np.allclose(colony.pheromones.grid, colony.pheromones.grid.T)
