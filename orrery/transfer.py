#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Transfer Trajectory Planner

Plans and animates a Hohmann-style transfer between two circular orbits.

The planner is a two-state machine. While IDLE nothing is frozen and every
query returns None. start() moves it to DEPARTED exactly once: it snapshots
the departure geometry, samples half of the transfer ellipse from the
departure angle to the departure angle + π, and fits an interpolating curve
through the samples. From then on the probe position is a pure function of
time since departure, clamped to the end of the curve.

The transfer duration is a tunable constant. It is not derived from the
ellipse with Kepler's third law.
"""

import logging
import math
import numpy as np
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from scipy.interpolate import CubicSpline

from .bodies import Body
from .orbit import angle_at, position


logger = logging.getLogger(__name__)

DEFAULT_TRANSFER_DURATION = 1.0
DEFAULT_NUM_SAMPLES = 101
DEFAULT_ERROR_SCALE = 50.0
DEFAULT_PATH_SEGMENTS = 100


class TransferState(Enum):
    """Planner lifecycle states."""

    IDLE = "idle"
    DEPARTED = "departed"


class TransferStateError(RuntimeError):
    """Raised when departure data is requested before departure."""


def transfer_ellipse(departure_radius: float, arrival_radius: float) -> Tuple[float, float]:
    """
    Semi-major axis and eccentricity of the transfer ellipse.

    Parameters
    ----------
    departure_radius : float
        R1, radius at departure (periapsis for outward transfers)
    arrival_radius : float
        R2, radius of the arrival orbit

    Returns
    -------
    tuple
        (a, e) with a = (R1 + R2) / 2 and e = (R2 - R1) / (R2 + R1).
        e is negative for inward transfers, which puts the apsis
        at the departure point instead of periapsis.
    """
    a = (departure_radius + arrival_radius) / 2
    e = (arrival_radius - departure_radius) / (arrival_radius + departure_radius)
    return a, e


def sample_transfer_arc(
    semi_major_axis: float,
    eccentricity: float,
    departure_angle: float,
    num_points: int = DEFAULT_NUM_SAMPLES,
) -> np.ndarray:
    """
    Sample the polar conic r(θ) = a(1 - e²) / (1 + e cos(θ - φ)).

    θ runs from φ to φ + π inclusive.

    Returns
    -------
    np.ndarray
        Array of shape (num_points, 2), rows [x, z] in sweep order
    """
    theta = departure_angle + np.linspace(0.0, math.pi, num_points)
    semi_latus = semi_major_axis * (1 - eccentricity**2)
    r = semi_latus / (1 + eccentricity * np.cos(theta - departure_angle))
    return np.column_stack((r * np.cos(theta), r * np.sin(theta)))


class TransferCurve:
    """
    Smooth curve through an ordered sequence of planar points.

    A cubic spline over a uniform parameter in [0, 1]: sample i sits at
    fraction i / (N - 1), so the curve passes through every sample in order.

    Parameters
    ----------
    points : np.ndarray
        Control points, shape (N, 2) with N >= 2
    """

    def __init__(self, points: np.ndarray):
        points = np.array(points, dtype=float)
        if points.ndim != 2 or points.shape[1] != 2:
            raise ValueError("Curve points must have shape (N, 2)")
        if len(points) < 2:
            raise ValueError("Curve needs at least two points")

        points.setflags(write=False)
        self._points = points
        self._knots = np.linspace(0.0, 1.0, len(points))
        self._spline = CubicSpline(self._knots, points, axis=0)

    @property
    def control_points(self) -> np.ndarray:
        """Read-only view of the samples the curve passes through."""
        return self._points

    def point_at(self, fraction: float) -> np.ndarray:
        """Position at a fraction of the curve, clamped to [0, 1]."""
        fraction = min(max(fraction, 0.0), 1.0)
        return np.asarray(self._spline(fraction), dtype=float)

    def points(self, num_segments: int = DEFAULT_PATH_SEGMENTS) -> np.ndarray:
        """num_segments + 1 points evenly spaced in fraction, end points included."""
        return np.asarray(self._spline(np.linspace(0.0, 1.0, num_segments + 1)))

    def __len__(self) -> int:
        return len(self._points)


@dataclass(frozen=True)
class DepartureSnapshot:
    """
    Geometry frozen at the departure instant.

    Attributes
    ----------
    departure_time : float
        t0
    departure_position : np.ndarray
        Departure body position at t0
    arrival_position : np.ndarray
        Arrival body position at t0. This seeds nothing but diagnostics:
        it is not a predicted rendezvous point.
    departure_angle : float
        φ, departure body angle at t0
    semi_major_axis : float
        Transfer ellipse a
    eccentricity : float
        Transfer ellipse e
    transfer_duration : float
        Time from departure to arrival at the end of the curve
    curve : TransferCurve
        Interpolating curve through the sampled arc
    """

    departure_time: float
    departure_position: np.ndarray
    arrival_position: np.ndarray
    departure_angle: float
    semi_major_axis: float
    eccentricity: float
    transfer_duration: float
    curve: TransferCurve

    @property
    def samples(self) -> np.ndarray:
        return self.curve.control_points

    @property
    def arrival_time(self) -> float:
        return self.departure_time + self.transfer_duration


class TransferPlanner:
    """
    One transfer between two orbiting bodies.

    Parameters
    ----------
    departure : Body
        Body the probe leaves from
    arrival : Body
        Body whose orbit the probe transfers to
    transfer_duration : float
        Simulation time taken to traverse the curve (default 1.0)
    num_samples : int
        Points sampled on the arc (default 101)
    error_scale : float
        Rendezvous error mapped to zero optimality (default 50)

    Notes
    -----
    Calling start() while DEPARTED is ignored and leaves the frozen curve
    untouched. reset() returns the planner to IDLE so a new departure can
    be started.
    """

    def __init__(
        self,
        departure: Body,
        arrival: Body,
        transfer_duration: float = DEFAULT_TRANSFER_DURATION,
        num_samples: int = DEFAULT_NUM_SAMPLES,
        error_scale: float = DEFAULT_ERROR_SCALE,
    ):
        if departure.is_central or arrival.is_central:
            raise ValueError("Transfer bodies must both be orbiting bodies")
        if departure.name == arrival.name:
            raise ValueError("Departure and arrival bodies must differ")
        if transfer_duration <= 0:
            raise ValueError("Transfer duration must be positive")
        if num_samples < 2:
            raise ValueError("Transfer needs at least two samples")
        if error_scale <= 0:
            raise ValueError("Error scale must be positive")

        self.departure = departure
        self.arrival = arrival
        self.transfer_duration = transfer_duration
        self.num_samples = num_samples
        self.error_scale = error_scale

        self._snapshot: Optional[DepartureSnapshot] = None

    @property
    def state(self) -> TransferState:
        if self._snapshot is None:
            return TransferState.IDLE
        return TransferState.DEPARTED

    @property
    def is_departed(self) -> bool:
        return self._snapshot is not None

    @property
    def snapshot(self) -> DepartureSnapshot:
        """
        The frozen departure data.

        Raises
        ------
        TransferStateError
            If the planner is still IDLE
        """
        if self._snapshot is None:
            raise TransferStateError("Transfer has not departed yet")
        return self._snapshot

    def start(self, t0: float) -> bool:
        """
        Trigger departure at time t0.

        Parameters
        ----------
        t0 : float
            Departure time

        Returns
        -------
        bool
            True if this call departed, False if already DEPARTED
        """
        if self._snapshot is not None:
            logger.warning(
                f"Transfer {self.departure.name} -> {self.arrival.name} already "
                f"departed at t={self._snapshot.departure_time:.3f}; ignoring start at t={t0:.3f}"
            )
            return False

        departure_position = position(self.departure, t0)
        arrival_position = position(self.arrival, t0)

        departure_radius = float(np.linalg.norm(departure_position))
        a, e = transfer_ellipse(departure_radius, self.arrival.orbit_radius)
        phi = angle_at(self.departure, t0)

        samples = sample_transfer_arc(a, e, phi, self.num_samples)

        self._snapshot = DepartureSnapshot(
            departure_time=t0,
            departure_position=departure_position,
            arrival_position=arrival_position,
            departure_angle=phi,
            semi_major_axis=a,
            eccentricity=e,
            transfer_duration=self.transfer_duration,
            curve=TransferCurve(samples),
        )

        logger.info(
            f"Transfer {self.departure.name} -> {self.arrival.name} departed at "
            f"t={t0:.3f} (a={a:.2f}, e={e:.4f})"
        )
        logger.debug(f"Departure {departure_position}, arrival body at {arrival_position}")
        return True

    def reset(self) -> None:
        """Discard the snapshot and return to IDLE."""
        if self._snapshot is not None:
            logger.info(f"Transfer {self.departure.name} -> {self.arrival.name} reset")
        self._snapshot = None

    def progress(self, t: float) -> Optional[float]:
        """Fraction of the transfer completed at time t, in [0, 1]; None while IDLE."""
        if self._snapshot is None:
            return None
        elapsed = (t - self._snapshot.departure_time) / self._snapshot.transfer_duration
        return min(max(elapsed, 0.0), 1.0)

    def is_complete(self, t: float) -> bool:
        fraction = self.progress(t)
        return fraction is not None and fraction >= 1.0

    def probe_position(self, t: float) -> Optional[np.ndarray]:
        """
        Probe position at time t.

        Returns
        -------
        np.ndarray or None
            [x, z] on the frozen curve; None while IDLE
        """
        fraction = self.progress(t)
        if fraction is None:
            return None
        return self._snapshot.curve.point_at(fraction)

    def rendezvous_error(self, t: float) -> Optional[float]:
        """Distance between the probe and the arrival body at time t; None while IDLE."""
        probe = self.probe_position(t)
        if probe is None:
            return None
        target = position(self.arrival, t)
        return math.hypot(probe[0] - target[0], probe[1] - target[1])

    def optimality(self, t: float) -> Optional[float]:
        """Visual quality signal clamp(1 - error / error_scale, 0, 1); None while IDLE."""
        error = self.rendezvous_error(t)
        if error is None:
            return None
        return min(max(1.0 - error / self.error_scale, 0.0), 1.0)

    def path_points(self, num_segments: int = DEFAULT_PATH_SEGMENTS) -> Optional[np.ndarray]:
        """Points along the frozen curve for drawing; None while IDLE."""
        if self._snapshot is None:
            return None
        return self._snapshot.curve.points(num_segments)

    def path_color(self, t: float) -> Optional[Tuple[float, float, float]]:
        """RGB in [0, 1]: red for a poor rendezvous, green for a good one."""
        quality = self.optimality(t)
        if quality is None:
            return None
        return (1.0 - quality, quality, 0.0)

    def __repr__(self) -> str:
        return (
            f"TransferPlanner({self.departure.name} -> {self.arrival.name}, "
            f"state={self.state.value}, duration={self.transfer_duration})"
        )
