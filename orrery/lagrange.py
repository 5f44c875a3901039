#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Lagrange Point Solver

Equilibrium points of a restricted two-body system, evaluated from the
instantaneous positions of a primary and a secondary body. The collinear
points use the small-mass-ratio Hill approximation; the triangular points
form equilateral triangles with the two bodies. L3 is not computed.
"""

import math
import numpy as np
from dataclasses import dataclass
from typing import Dict, Iterator, Tuple

SIN_60 = math.sqrt(3) / 2

POINT_NAMES = ("L1", "L2", "L4", "L5")


def hill_offset(primary_mass: float, secondary_mass: float) -> float:
    """
    Fractional offset of L1/L2 from the secondary.

    delta = (m2 / (3 * m1)) ** (1/3); requires primary_mass > 0.
    """
    return (secondary_mass / (3 * primary_mass)) ** (1 / 3)


@dataclass(frozen=True)
class LagrangePointSet:
    """
    The four computed Lagrange points of one primary/secondary pair.

    Attributes
    ----------
    L1, L2 : np.ndarray
        Collinear points, [x, z]
    L4, L5 : np.ndarray
        Triangular points, [x, z]; L4 leads the secondary, L5 trails it
    origin : np.ndarray
        Primary position the set was computed from
    """

    L1: np.ndarray
    L2: np.ndarray
    L4: np.ndarray
    L5: np.ndarray
    origin: np.ndarray

    def as_dict(self) -> Dict[str, np.ndarray]:
        return {name: getattr(self, name) for name in POINT_NAMES}

    def __iter__(self) -> Iterator[Tuple[str, np.ndarray]]:
        return iter(self.as_dict().items())

    def arrow(self, name: str) -> Tuple[np.ndarray, np.ndarray, float]:
        """
        Arrow from the primary to one point.

        Returns
        -------
        tuple
            (origin, unit direction, length)
        """
        offset = getattr(self, name) - self.origin
        length = float(np.linalg.norm(offset))
        direction = offset / length if length > 0 else np.zeros(2)
        return self.origin, direction, length

    def arrows(self) -> Dict[str, Tuple[np.ndarray, np.ndarray, float]]:
        return {name: self.arrow(name) for name in POINT_NAMES}


def lagrange_points(
    primary_pos,
    secondary_pos,
    primary_mass: float,
    secondary_mass: float,
) -> LagrangePointSet:
    """
    Compute L1, L2, L4 and L5 for one instant.

    Parameters
    ----------
    primary_pos : array_like
        Primary position [x, z]
    secondary_pos : array_like
        Secondary position [x, z]; must differ from primary_pos
    primary_mass : float
        Primary mass; must be positive
    secondary_mass : float
        Secondary mass

    Returns
    -------
    LagrangePointSet
        The four points

    Notes
    -----
    Coincident positions are a precondition violation. The unit vector is
    then 0/0 and the triangular points come back as NaN rather than as a
    finite but meaningless vector.
    """
    p = np.asarray(primary_pos, dtype=float)
    s = np.asarray(secondary_pos, dtype=float)

    R = s - p
    r = math.hypot(R[0], R[1])
    with np.errstate(invalid="ignore", divide="ignore"):
        u = R / r
    v = np.array([-u[1], u[0]])

    delta = hill_offset(primary_mass, secondary_mass)

    L1 = p + R * (1 - delta)
    L2 = p + R * (1 + delta)
    along = u * (r * 0.5)
    across = v * (r * SIN_60)
    L4 = p + along + across
    L5 = p + along - across

    return LagrangePointSet(L1=L1, L2=L2, L4=L4, L5=L5, origin=p)
