#!/usr/bin/env python3
"""
Lagrange Point Tests

Tests for the L1/L2 Hill approximation and the equilateral L4/L5 points.
"""

import math

import numpy as np
import pytest

from orrery import lagrange_points, hill_offset
from orrery.lagrange import POINT_NAMES


@pytest.fixture
def earth_mars_points():
    """Primary at (50, 0) mass 1, secondary at (76, 0) mass 0.107."""
    return lagrange_points([50.0, 0.0], [76.0, 0.0], 1.0, 0.107)


class TestHillOffset:

    def test_value(self):
        assert hill_offset(1.0, 0.107) == pytest.approx((0.107 / 3) ** (1 / 3))

    def test_equal_masses(self):
        assert hill_offset(3.0, 9.0) == pytest.approx(1.0)


class TestCollinearPoints:
    """Tests for L1 and L2."""

    def test_l1_between_bodies(self, earth_mars_points):
        L1 = earth_mars_points.L1
        assert 50.0 < L1[0] < 76.0
        assert L1[1] == pytest.approx(0.0)

    def test_l2_beyond_secondary(self, earth_mars_points):
        L2 = earth_mars_points.L2
        assert L2[0] > 76.0
        assert L2[1] == pytest.approx(0.0)

    def test_values(self, earth_mars_points):
        delta = (0.107 / 3) ** (1 / 3)
        assert earth_mars_points.L1[0] == pytest.approx(50.0 + 26.0 * (1 - delta))
        assert earth_mars_points.L2[0] == pytest.approx(50.0 + 26.0 * (1 + delta))

    def test_symmetric_about_secondary(self, earth_mars_points):
        midpoint = (earth_mars_points.L1 + earth_mars_points.L2) / 2
        np.testing.assert_allclose(midpoint, [76.0, 0.0])


class TestTriangularPoints:
    """Tests for L4 and L5."""

    def test_equilateral(self, earth_mars_points):
        p = np.array([50.0, 0.0])
        s = np.array([76.0, 0.0])
        for point in (earth_mars_points.L4, earth_mars_points.L5):
            assert np.linalg.norm(point - p) == pytest.approx(26.0)
            assert np.linalg.norm(point - s) == pytest.approx(26.0)

    def test_l4_leads(self, earth_mars_points):
        np.testing.assert_allclose(earth_mars_points.L4, [63.0, 26.0 * math.sqrt(3) / 2])
        np.testing.assert_allclose(earth_mars_points.L5, [63.0, -26.0 * math.sqrt(3) / 2])

    def test_rotated_pair(self):
        points = lagrange_points([0.0, 0.0], [0.0, 10.0], 300.0, 1.0)
        # u = (0, 1), v = (-1, 0)
        np.testing.assert_allclose(points.L4, [-10.0 * math.sqrt(3) / 2, 5.0])
        np.testing.assert_allclose(points.L5, [10.0 * math.sqrt(3) / 2, 5.0])

    def test_coincident_bodies_give_nan(self):
        points = lagrange_points([1.0, 1.0], [1.0, 1.0], 1.0, 1.0)
        assert np.all(np.isnan(points.L4))
        assert np.all(np.isnan(points.L5))


class TestLagrangePointSet:

    def test_iteration_order(self, earth_mars_points):
        assert [name for name, _ in earth_mars_points] == list(POINT_NAMES)

    def test_as_dict(self, earth_mars_points):
        d = earth_mars_points.as_dict()
        np.testing.assert_allclose(d["L2"], earth_mars_points.L2)

    def test_arrow(self, earth_mars_points):
        origin, direction, length = earth_mars_points.arrow("L4")
        np.testing.assert_allclose(origin, [50.0, 0.0])
        assert np.linalg.norm(direction) == pytest.approx(1.0)
        np.testing.assert_allclose(origin + direction * length, earth_mars_points.L4)

    def test_arrows_cover_all_points(self, earth_mars_points):
        assert set(earth_mars_points.arrows()) == set(POINT_NAMES)
