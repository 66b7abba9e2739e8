"""Tests for formica.pheromones -- node matrix, spatial grid, decay."""

import math

import numpy as np
import pytest

from formica.pheromones.diffusion import evaporate, spread
from formica.pheromones.grid import PheromoneGrid
from formica.pheromones.matrix import PheromoneMatrix


class TestPheromoneMatrix:
    """Tests for PheromoneMatrix reads and deposits."""

    def test_initial_level(self) -> None:
        matrix = PheromoneMatrix(size=4, initial=2.0)
        assert np.all(matrix.grid == 2.0)

    def test_deposit_is_symmetric(self) -> None:
        matrix = PheromoneMatrix(size=3)
        matrix.deposit(0, 2, 0.5)
        assert matrix.get(0, 2) == 1.5
        assert matrix.get(2, 0) == 1.5

    def test_deposit_capped_at_ceiling(self) -> None:
        matrix = PheromoneMatrix(size=2, ceiling=10.0)
        matrix.deposit(0, 1, 1e6)
        assert matrix.get(0, 1) == 10.0
        assert matrix.get(1, 0) == 10.0

    @pytest.mark.parametrize("amount", [-1.0, math.nan, math.inf])
    def test_bad_amount_ignored(self, amount: float) -> None:
        matrix = PheromoneMatrix(size=2)
        matrix.deposit(0, 1, amount)
        assert matrix.get(0, 1) == 1.0

    def test_out_of_range_is_noop(self) -> None:
        matrix = PheromoneMatrix(size=2, initial=3.0)
        matrix.deposit(0, 5, 1.0)
        assert np.all(matrix.grid == 3.0)
        assert matrix.get(0, 5) == 3.0
        assert matrix.get(-1, 0) == 3.0

    def test_max_value_ignores_diagonal(self) -> None:
        matrix = PheromoneMatrix(size=3)
        matrix.grid[1, 1] = 50.0
        matrix.deposit(0, 2, 4.0)
        assert matrix.max_value() == 5.0

    def test_values_read_only_copy(self) -> None:
        matrix = PheromoneMatrix(size=2)
        values = matrix.values()
        with pytest.raises(ValueError):
            values[0, 1] = 9.0
        matrix.deposit(0, 1, 1.0)
        assert values[0, 1] == 1.0

    def test_reset(self) -> None:
        matrix = PheromoneMatrix(size=3)
        matrix.deposit(0, 1, 5.0)
        matrix.evaporate(0.5)
        matrix.reset()
        assert np.all(matrix.grid == 1.0)


class TestMatrixEvaporation:
    """Tests for matrix evaporation."""

    def test_off_diagonal_decays(self) -> None:
        matrix = PheromoneMatrix(size=3)
        matrix.deposit(0, 1, 3.0)
        before = matrix.grid.copy()
        matrix.evaporate(0.25)
        off = ~np.eye(3, dtype=bool)
        expected = np.maximum(before * 0.75, matrix.floor)
        assert np.allclose(matrix.grid[off], expected[off])

    def test_diagonal_untouched(self) -> None:
        matrix = PheromoneMatrix(size=3, initial=2.0)
        matrix.evaporate(0.5)
        assert np.all(matrix.grid.diagonal() == 2.0)

    def test_floor_respected(self) -> None:
        matrix = PheromoneMatrix(size=2, initial=0.015)
        matrix.evaporate(0.9)
        assert matrix.get(0, 1) == matrix.floor

    def test_rate_clamped(self) -> None:
        matrix = PheromoneMatrix(size=2)
        matrix.evaporate(5.0)
        assert matrix.get(0, 1) == matrix.floor
        matrix.evaporate(-1.0)
        assert matrix.get(0, 1) == matrix.floor

    def test_nan_rate_keeps_bounds(self) -> None:
        matrix = PheromoneMatrix(size=3, initial=0.015)
        matrix.deposit(0, 1, 2.0)
        before = matrix.grid.copy()
        matrix.evaporate(math.nan)
        assert np.array_equal(matrix.grid, before)
        off = ~np.eye(3, dtype=bool)
        assert np.all(matrix.grid[off] >= matrix.floor)
        assert np.all(matrix.grid[off] <= matrix.ceiling)

    def test_stays_symmetric(self) -> None:
        matrix = PheromoneMatrix(size=4)
        matrix.deposit(0, 3, 2.0)
        matrix.deposit(1, 2, 0.5)
        matrix.evaporate(0.3)
        assert np.allclose(matrix.grid, matrix.grid.T)


class TestDepositTour:
    """Tests for reinforcing whole tours."""

    def test_closed_tour_on_uniform_field(self) -> None:
        """Route [0, 1, 2, 0] of length 10 with Q=1 lifts each edge to 1.1."""
        matrix = PheromoneMatrix(size=3)
        matrix.deposit_tour([0, 1, 2, 0], length=10.0, q=1.0)
        for i, j in [(0, 1), (1, 2), (2, 0)]:
            assert matrix.get(i, j) == pytest.approx(1.1)
            assert matrix.get(j, i) == pytest.approx(1.1)
        assert np.all(matrix.grid.diagonal() == 1.0)

    def test_open_route_gets_closing_edge(self) -> None:
        matrix = PheromoneMatrix(size=3)
        matrix.deposit_tour([0, 1, 2], length=10.0, q=1.0)
        assert matrix.get(2, 0) == pytest.approx(1.1)

    @pytest.mark.parametrize("length", [0.0, -3.0, math.inf])
    def test_bad_length_ignored(self, length: float) -> None:
        matrix = PheromoneMatrix(size=3)
        matrix.deposit_tour([0, 1, 2, 0], length=length, q=1.0)
        assert np.all(matrix.grid == 1.0)


class TestPheromoneGrid:
    """Tests for the spatial grid."""

    def test_shape_covers_world(self) -> None:
        grid = PheromoneGrid(width=105.0, height=50.0, cell_size=10.0)
        assert grid.shape == (5, 11)

    def test_deposit_spreads_to_neighbours(self) -> None:
        grid = PheromoneGrid(width=100.0, height=100.0, cell_size=10.0)
        grid.deposit(55.0, 55.0, 1.0)
        assert grid.grid[5, 5] == 1.0
        for r, c in [(4, 5), (6, 5), (5, 4), (5, 6)]:
            assert grid.grid[r, c] == 0.5
        assert grid.grid[4, 4] == 0.0
        assert grid.read(55.0, 55.0) == 1.0

    def test_deposit_capped(self) -> None:
        grid = PheromoneGrid(width=100.0, height=100.0, ceiling=5.0)
        for _ in range(20):
            grid.deposit(55.0, 55.0, 1.0)
        assert grid.max_value() == 5.0
        assert grid.grid[4, 5] == 5.0

    def test_corner_deposit_stays_in_bounds(self) -> None:
        grid = PheromoneGrid(width=100.0, height=100.0)
        grid.deposit(0.0, 0.0, 1.0)
        grid.deposit(100.0, 100.0, 1.0)
        assert grid.grid[0, 0] == 1.0
        assert grid.grid[9, 9] == 1.0

    def test_outside_world_ignored(self) -> None:
        grid = PheromoneGrid(width=100.0, height=100.0)
        grid.deposit(-1.0, 50.0, 1.0)
        grid.deposit(50.0, math.nan, 1.0)
        assert grid.max_value() == 0.0
        assert grid.read(500.0, 500.0) == 0.0

    def test_values_read_only(self) -> None:
        grid = PheromoneGrid(width=100.0, height=100.0)
        with pytest.raises(ValueError):
            grid.values()[0, 0] = 1.0


class TestGridDecay:
    """Tests for the raw grid helpers."""

    def test_half_rate(self) -> None:
        values = np.ones((3, 3), dtype=np.float64)
        evaporate(values, rate=0.2, threshold=0.01)
        assert np.allclose(values, 0.9)

    def test_faint_values_snap_to_zero(self) -> None:
        values = np.full((2, 2), 0.0105, dtype=np.float64)
        evaporate(values, rate=0.1, threshold=0.01)
        assert np.all(values == 0.0)

    def test_nan_rate_keeps_bounds(self) -> None:
        grid = PheromoneGrid(width=30.0, height=30.0)
        grid.deposit(15.0, 15.0, 1.0)
        before = grid.values()
        grid.evaporate(math.nan)
        assert np.array_equal(grid.grid, before)
        assert np.all(grid.grid >= 0.0)
        assert np.all(grid.grid <= grid.ceiling)

    def test_spread_fraction(self) -> None:
        values = np.zeros((3, 3), dtype=np.float64)
        spread(values, 1, 1, amount=2.0, fraction=0.25, ceiling=10.0)
        assert values[1, 1] == 2.0
        assert values[0, 1] == 0.5
        assert values[0, 0] == 0.0
