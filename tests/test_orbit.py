#!/usr/bin/env python3
"""
Orbital State Tests

Tests for positions and velocities on circular orbits.
"""

import math

import numpy as np
import pytest

from orrery import angle_at, position, positions, velocity
from orrery.orbit import position_xz


class TestPosition:
    """Tests for position(body, t)."""

    def test_start_on_positive_x_axis(self, planet):
        np.testing.assert_allclose(position(planet, 0.0), [50.0, 0.0])

    def test_quarter_period(self, planet):
        np.testing.assert_allclose(position(planet, 0.25), [0.0, 50.0], atol=1e-9)

    def test_half_period(self, planet):
        np.testing.assert_allclose(position(planet, 0.5), [-50.0, 0.0], atol=1e-9)

    def test_periodic(self, planet):
        np.testing.assert_allclose(position(planet, 0.3), position(planet, 3.3), atol=1e-9)

    def test_radius_constant(self, planet):
        for t in np.linspace(0.0, 2.0, 17):
            assert np.linalg.norm(position(planet, t)) == pytest.approx(50.0)

    def test_central_body_stays_at_origin(self, sun):
        for t in (0.0, 1.7, -4.0):
            np.testing.assert_allclose(position(sun, t), [0.0, 0.0])

    def test_negative_time(self, planet):
        np.testing.assert_allclose(position(planet, -0.25), [0.0, -50.0], atol=1e-9)

    def test_tuple_form_matches(self, planet):
        x, z = position_xz(planet, 0.4)
        np.testing.assert_allclose([x, z], position(planet, 0.4))

    def test_angle(self, planet):
        assert angle_at(planet, 0.25) == pytest.approx(math.pi / 2)


class TestPositions:
    """Tests for the vectorised positions()."""

    def test_matches_scalar(self, solar_catalog):
        coords = positions(solar_catalog, 2.7)
        assert coords.shape == (len(solar_catalog), 2)
        for i, body in enumerate(solar_catalog):
            np.testing.assert_allclose(coords[i], position(body, 2.7), atol=1e-9)


class TestVelocity:
    """Tests for tangential velocity."""

    def test_tangential(self, planet):
        t = 0.13
        v = velocity(planet, t)
        assert float(np.dot(v, position(planet, t))) == pytest.approx(0.0, abs=1e-6)

    def test_speed(self, planet):
        assert np.linalg.norm(velocity(planet, 0.0)) == pytest.approx(50.0 * 2 * math.pi)

    def test_counter_clockwise(self, planet):
        np.testing.assert_allclose(velocity(planet, 0.0), [0.0, 100 * math.pi], atol=1e-9)

    def test_central_body_at_rest(self, sun):
        np.testing.assert_allclose(velocity(sun, 3.0), [0.0, 0.0])


class TestNonFiniteTime:
    """Infinite or NaN time gives NaN output instead of raising."""

    @pytest.mark.parametrize("t", [math.inf, -math.inf, math.nan])
    def test_position(self, planet, t):
        assert np.all(np.isnan(position(planet, t)))

    @pytest.mark.parametrize("t", [math.inf, math.nan])
    def test_velocity(self, planet, t):
        assert np.all(np.isnan(velocity(planet, t)))

    def test_central_body_still_at_origin(self, sun):
        np.testing.assert_allclose(position(sun, math.inf), [0.0, 0.0])

    def test_positions(self, two_body_catalog):
        coords = positions(two_body_catalog, math.inf)
        np.testing.assert_allclose(coords[0], [0.0, 0.0])
        assert np.all(np.isnan(coords[1]))
