#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Orrery Viewer Package

This package provides the Pygame-based interactive view of the orrery.

The viewer depends on the orrery package but can be omitted entirely when
only running headless queries.

Usage:
    from orrery_view import Visualizer

    visualizer = Visualizer()
    visualizer.run()
"""

from .camera import Camera
from .renderer import Renderer, Colors, interpolate_color, marker_color, unit_rgb_to_color
from .visualizer import Visualizer, run_visualizer


__all__ = [
    "Camera",
    "Renderer",
    "Colors",
    "interpolate_color",
    "marker_color",
    "unit_rgb_to_color",
    "Visualizer",
    "run_visualizer",
]

__version__ = "1.0.0"
