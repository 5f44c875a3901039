#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Gravitational Field Sampler

A scalar proxy for potential-well depth used to warp a reference surface.
Each body contributes sqrt(mass * k) / (distance + epsilon); the summed
displacement goes through a saturating curve so the result stays in [0, 1).

The scalar sampler is called once per grid vertex per frame and only uses
floats. GravityGrid evaluates a whole grid at once with numpy.
"""

import math
import numpy as np
from dataclasses import dataclass
from typing import Sequence, Tuple


@dataclass(frozen=True)
class FieldParameters:
    """
    Tuning constants for the depression field.

    Attributes
    ----------
    mass_factor : float
        k, scales each mass before the square root
    epsilon : float
        Distance floor that keeps contributions finite at a body's center
    sensitivity : float
        Rate of the saturating curve
    depth : float
        Vertical displacement of the warped surface at warp == 1
    """

    mass_factor: float = 1.11
    epsilon: float = 5.0
    sensitivity: float = 0.08
    depth: float = 150.0

    def __post_init__(self):
        if self.mass_factor <= 0:
            raise ValueError("Mass factor must be positive")
        if self.epsilon <= 0:
            raise ValueError("Epsilon must be positive")
        if self.sensitivity <= 0:
            raise ValueError("Sensitivity must be positive")


DEFAULT_FIELD = FieldParameters()


def field_displacement(
    point: Sequence[float],
    body_positions: Sequence[Sequence[float]],
    body_masses: Sequence[float],
    params: FieldParameters = DEFAULT_FIELD,
) -> float:
    """Raw summed contribution at one point, before saturation."""
    px, pz = point[0], point[1]
    k = params.mass_factor
    eps = params.epsilon
    displacement = 0.0
    for (bx, bz), mass in zip(body_positions, body_masses):
        distance = math.hypot(px - bx, pz - bz)
        displacement += math.sqrt(mass * k) / (distance + eps)
    return displacement


def saturate(displacement: float, sensitivity: float = DEFAULT_FIELD.sensitivity) -> float:
    """warp = sqrt(1 - exp(-displacement * sensitivity))"""
    return math.sqrt(1.0 - math.exp(-displacement * sensitivity))


def field_depression(
    point: Sequence[float],
    body_positions: Sequence[Sequence[float]],
    body_masses: Sequence[float],
    params: FieldParameters = DEFAULT_FIELD,
) -> float:
    """
    Depression value at one query point.

    Parameters
    ----------
    point : sequence of float
        Query point [x, z]
    body_positions : sequence of [x, z]
        Current body positions
    body_masses : sequence of float
        Non-negative masses, same order as body_positions
    params : FieldParameters
        Tuning constants

    Returns
    -------
    float
        Value in [0, 1); 0 only when every mass is 0
    """
    displacement = field_displacement(point, body_positions, body_masses, params)
    return saturate(displacement, params.sensitivity)


def field_depression_grid(
    xs: np.ndarray,
    zs: np.ndarray,
    body_positions: np.ndarray,
    body_masses: np.ndarray,
    params: FieldParameters = DEFAULT_FIELD,
) -> np.ndarray:
    """
    Depression values for arrays of query coordinates.

    Parameters
    ----------
    xs, zs : np.ndarray
        Query coordinates of identical shape
    body_positions : np.ndarray
        Array of shape (N, 2)
    body_masses : np.ndarray
        Array of shape (N,)

    Returns
    -------
    np.ndarray
        Warp values with the shape of xs
    """
    xs = np.asarray(xs, dtype=float)
    zs = np.asarray(zs, dtype=float)
    body_positions = np.asarray(body_positions, dtype=float).reshape(-1, 2)
    strengths = np.sqrt(np.asarray(body_masses, dtype=float) * params.mass_factor)

    displacement = np.zeros_like(xs)
    for (bx, bz), strength in zip(body_positions, strengths):
        distance = np.hypot(xs - bx, zs - bz)
        displacement += strength / (distance + params.epsilon)

    return np.sqrt(1.0 - np.exp(-displacement * params.sensitivity))


def shade_for_warp(warp):
    """
    Grey level for a warp value: mix(0.6, 0.01, warp * 1.2), clamped to [0, 1].

    The mix weight is not limited to 1, so strongly warped cells run past
    0.01 and clamp to black. Accepts floats or arrays.
    """
    weight = np.asarray(warp, dtype=float) * 1.2
    return np.clip(0.6 + (0.01 - 0.6) * weight, 0.0, 1.0)


class GravityGrid:
    """
    Square deformation grid centered on the origin.

    Parameters
    ----------
    size : float
        Side length of the grid in scene units (default 3200)
    resolution : int
        Vertices per side (default 201)
    params : FieldParameters
        Field tuning constants

    Attributes
    ----------
    xs, zs : np.ndarray
        Vertex coordinates, shape (resolution, resolution)
    """

    def __init__(
        self,
        size: float = 3200.0,
        resolution: int = 201,
        params: FieldParameters = DEFAULT_FIELD,
    ):
        if size <= 0:
            raise ValueError("Grid size must be positive")
        if resolution < 2:
            raise ValueError("Grid resolution must be at least 2")

        self.size = size
        self.resolution = resolution
        self.params = params

        half = size / 2
        axis = np.linspace(-half, half, resolution)
        self.xs, self.zs = np.meshgrid(axis, axis)

    def sample(self, body_positions: np.ndarray, body_masses: np.ndarray) -> np.ndarray:
        """Warp value at every vertex."""
        return field_depression_grid(
            self.xs, self.zs, body_positions, body_masses, self.params
        )

    def heights(self, warp: np.ndarray) -> np.ndarray:
        """Vertical displacement of each vertex (negative is down)."""
        return -warp * self.params.depth

    def sample_surface(
        self, body_positions: np.ndarray, body_masses: np.ndarray
    ) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Sample the grid for drawing.

        Returns
        -------
        tuple
            (warp, heights, shades), each of shape (resolution, resolution)
        """
        warp = self.sample(body_positions, body_masses)
        return warp, self.heights(warp), shade_for_warp(warp)

    def __repr__(self) -> str:
        return f"GravityGrid(size={self.size}, resolution={self.resolution})"
