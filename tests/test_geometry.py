"""Tests for formica.geometry -- locations and the spatial model."""

import math

import pytest

from formica.geometry.location import Location
from formica.geometry.spatial import SpatialModel


class TestLocation:
    """Tests for Location."""

    def test_distance(self) -> None:
        assert Location(0.0, 0.0).distance_to(Location(3.0, 4.0)) == 5.0

    def test_angle_to(self) -> None:
        assert Location(0.0, 0.0).angle_to(Location(0.0, 1.0)) == pytest.approx(
            math.pi / 2,
        )

    def test_lerp_midpoint(self) -> None:
        mid = Location(0.0, 0.0).lerp(Location(10.0, 20.0), 0.5)
        assert mid == Location(5.0, 10.0)

    def test_frozen(self) -> None:
        loc = Location(1.0, 2.0)
        with pytest.raises(AttributeError):
            loc.x = 3.0  # type: ignore[misc]


class TestSpatialModel:
    """Tests for SpatialModel distances."""

    def test_triangle_hypotenuse(self, triangle: SpatialModel) -> None:
        """Node 0 to node 1 of the 3-4-5 triangle is 5.0."""
        assert triangle.distance(0, 1) == 5.0

    def test_symmetric(self, triangle: SpatialModel) -> None:
        for i in range(3):
            for j in range(3):
                assert triangle.distance(i, j) == triangle.distance(j, i)

    def test_zero_diagonal(self, triangle: SpatialModel) -> None:
        assert all(triangle.distance(i, i) == 0.0 for i in range(3))

    def test_out_of_range_is_infinite(self, triangle: SpatialModel) -> None:
        assert math.isinf(triangle.distance(0, 7))
        assert math.isinf(triangle.distance(-1, 0))

    def test_route_length(self, triangle: SpatialModel) -> None:
        assert triangle.route_length([0, 1, 2, 0]) == pytest.approx(12.0)

    def test_distance_table_read_only(self, triangle: SpatialModel) -> None:
        with pytest.raises(ValueError):
            triangle.distances[0, 1] = 1.0

    def test_empty_model(self) -> None:
        model = SpatialModel(())
        assert model.size == 0
        assert model.distances.shape == (0, 0)
