#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Camera Module for the Orrery Viewer

Provides a top-down camera over the orbital plane. Scene x maps to screen
right and scene z maps to screen up.
"""

import numpy as np
from typing import Tuple


class Camera:
    """
    Top-down camera with pan and zoom controls.

    Parameters
    ----------
    center : tuple
        Scene point shown at the middle of the screen (default origin)
    zoom : float
        Pixels per scene unit (default 0.35)
    min_zoom : float
        Minimum zoom (default 0.05)
    max_zoom : float
        Maximum zoom (default 20.0)
    pan_speed : float
        Pan distance per input, in pixels (default 12)
    zoom_factor : float
        Multiplicative zoom step per input (default 1.05)

    Attributes
    ----------
    center : np.ndarray
        Current view center [x, z]
    zoom : float
        Current zoom
    """

    def __init__(
        self,
        center: Tuple[float, float] = (0.0, 0.0),
        zoom: float = 0.35,
        min_zoom: float = 0.05,
        max_zoom: float = 20.0,
        pan_speed: float = 12.0,
        zoom_factor: float = 1.05,
    ):
        self.center = np.array(center, dtype=float)
        self.min_zoom = min_zoom
        self.max_zoom = max_zoom
        self.zoom = self._clamp_zoom(zoom)
        self.pan_speed = pan_speed
        self.zoom_factor = zoom_factor

    def world_to_screen(
        self, point, screen_size: Tuple[int, int]
    ) -> Tuple[float, float]:
        """
        Project a scene point to screen coordinates.

        Parameters
        ----------
        point : array_like
            Scene point [x, z]
        screen_size : tuple
            (width, height) in pixels

        Returns
        -------
        tuple
            (screen_x, screen_y)
        """
        width, height = screen_size
        sx = width / 2 + (point[0] - self.center[0]) * self.zoom
        sy = height / 2 - (point[1] - self.center[1]) * self.zoom
        return sx, sy

    def screen_to_world(
        self, screen_point: Tuple[float, float], screen_size: Tuple[int, int]
    ) -> np.ndarray:
        """Inverse of world_to_screen."""
        width, height = screen_size
        x = self.center[0] + (screen_point[0] - width / 2) / self.zoom
        z = self.center[1] - (screen_point[1] - height / 2) / self.zoom
        return np.array([x, z])

    def scale_length(self, length: float) -> float:
        """Scene length in pixels."""
        return length * self.zoom

    def pan(self, dx_pixels: float, dz_pixels: float) -> None:
        """Move the view center by a screen-space offset."""
        self.center = self.center + np.array([dx_pixels, dz_pixels]) / self.zoom

    def pan_left(self) -> None:
        self.pan(-self.pan_speed, 0.0)

    def pan_right(self) -> None:
        self.pan(self.pan_speed, 0.0)

    def pan_up(self) -> None:
        self.pan(0.0, self.pan_speed)

    def pan_down(self) -> None:
        self.pan(0.0, -self.pan_speed)

    def zoom_in(self) -> None:
        """Zoom camera in (more pixels per unit)."""
        self.zoom = self._clamp_zoom(self.zoom * self.zoom_factor)

    def zoom_out(self) -> None:
        """Zoom camera out (fewer pixels per unit)."""
        self.zoom = self._clamp_zoom(self.zoom / self.zoom_factor)

    def zoom_at(
        self,
        screen_point: Tuple[float, float],
        screen_size: Tuple[int, int],
        zoom_in: bool = True,
    ) -> None:
        """
        Zoom one step while keeping the scene point under screen_point fixed.

        Parameters
        ----------
        screen_point : tuple
            Anchor in screen coordinates, typically the mouse position
        screen_size : tuple
            (width, height) in pixels
        zoom_in : bool
            Zoom in if True, out otherwise
        """
        anchor = self.screen_to_world(screen_point, screen_size)
        if zoom_in:
            self.zoom_in()
        else:
            self.zoom_out()
        self.center = self.center + anchor - self.screen_to_world(screen_point, screen_size)

    def follow(self, target, smoothing: float = 0.1) -> None:
        """
        Move the view center toward a target.

        Parameters
        ----------
        target : array_like
            Scene point [x, z]
        smoothing : float
            Fraction of the remaining distance covered (0 to 1)
        """
        smoothing = max(0.0, min(1.0, smoothing))
        self.center = self.center + (np.asarray(target, dtype=float) - self.center) * smoothing

    def reset(self) -> None:
        self.center = np.zeros(2)

    def _clamp_zoom(self, zoom: float) -> float:
        return max(self.min_zoom, min(self.max_zoom, zoom))

    def __repr__(self) -> str:
        return (
            f"Camera(center=({self.center[0]:.1f}, {self.center[1]:.1f}), "
            f"zoom={self.zoom:.3f})"
        )
