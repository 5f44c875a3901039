#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Circular Orbit Positions

Maps (body, simulation time) to a planar position. Positions live in the
orbital (x, z) plane; the out-of-plane coordinate is always 0 and is not
carried. Nothing here keeps state: every call recomputes from time.
"""

import math
import numpy as np
from typing import Iterable, Tuple

from .bodies import Body


def angle_at(body: Body, t: float) -> float:
    """
    Angular position of a body at time t.

    The angle is not reduced modulo 2π.

    Parameters
    ----------
    body : Body
        Catalog entry
    t : float
        Simulation time (any real value)

    Returns
    -------
    float
        Angle in radians, measured from +x toward +z
    """
    return t * body.angular_speed


def position_xz(body: Body, t: float) -> Tuple[float, float]:
    """Position as a plain (x, z) tuple, for hot per-frame loops."""
    if body.orbit_radius == 0:
        return 0.0, 0.0
    angle = t * body.angular_speed
    if not math.isfinite(angle):
        return math.nan, math.nan
    return body.orbit_radius * math.cos(angle), body.orbit_radius * math.sin(angle)


def position(body: Body, t: float) -> np.ndarray:
    """
    Planar position of a body at time t.

    Parameters
    ----------
    body : Body
        Catalog entry
    t : float
        Simulation time

    Returns
    -------
    np.ndarray
        Position [x, z] in scene units; [0, 0] for the central body
    """
    return np.array(position_xz(body, t))


def positions(bodies: Iterable[Body], t: float) -> np.ndarray:
    """
    Positions of several bodies at once.

    Returns
    -------
    np.ndarray
        Array of shape (N, 2), one [x, z] row per body in input order
    """
    bodies = list(bodies)
    radii = np.array([b.orbit_radius for b in bodies], dtype=float)
    speeds = np.array([b.angular_speed for b in bodies], dtype=float)
    with np.errstate(invalid="ignore"):
        # central bodies stay at the origin even for non-finite t
        angles = np.where(radii == 0, 0.0, t * speeds)
        return np.column_stack((radii * np.cos(angles), radii * np.sin(angles)))


def velocity(body: Body, t: float) -> np.ndarray:
    """
    Planar velocity of a body at time t (scene units per time unit).

    Tangential, magnitude radius * angular_speed.
    """
    if body.orbit_radius == 0:
        return np.zeros(2)
    angle = t * body.angular_speed
    if not math.isfinite(angle):
        return np.array([math.nan, math.nan])
    speed = body.orbit_radius * body.angular_speed
    return np.array([-speed * math.sin(angle), speed * math.cos(angle)])
