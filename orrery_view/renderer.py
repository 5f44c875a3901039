#!/usr/bin/env python3
"""
Renderer Module

Pygame-based rendering for the orrery. Draws the shaded gravity grid,
orbits, bodies, Lagrange points with their arrows, and the transfer path.
"""

import math
import numpy as np
from typing import Dict, Optional, Sequence, Tuple
import pygame

from orrery import Body, GravityGrid, LagrangePointSet

from .camera import Camera


class Colors:
    """Default color palette."""

    BACKGROUND = (5, 5, 15)
    TEXT = (220, 220, 220)

    ORBIT = (70, 70, 90)

    # Lagrange points
    L1 = (255, 0, 0)
    L2 = (0, 160, 0)
    L4 = (160, 32, 240)
    L5 = (160, 32, 240)

    # Transfer marker, shifting from departure to arrival
    DEPARTING = (0, 255, 255)
    ARRIVING = (255, 255, 255)


LAGRANGE_COLORS = {
    "L1": Colors.L1,
    "L2": Colors.L2,
    "L4": Colors.L4,
    "L5": Colors.L5,
}


def interpolate_color(
    color1: Tuple[int, int, int], color2: Tuple[int, int, int], t: float
) -> Tuple[int, int, int]:
    """Linearly interpolate between two colors."""
    t = max(0.0, min(1.0, t))
    return (
        int(color1[0] + (color2[0] - color1[0]) * t),
        int(color1[1] + (color2[1] - color1[1]) * t),
        int(color1[2] + (color2[2] - color1[2]) * t),
    )


def marker_color(progress: float) -> Tuple[int, int, int]:
    """Transfer marker color for a progress fraction in [0, 1]."""
    return interpolate_color(Colors.DEPARTING, Colors.ARRIVING, progress)


def unit_rgb_to_color(rgb: Sequence[float]) -> Tuple[int, int, int]:
    """Convert an RGB triple in [0, 1] to 8-bit channels."""
    return tuple(int(round(255 * max(0.0, min(1.0, c)))) for c in rgb)


def grey(shade: float) -> Tuple[int, int, int]:
    level = int(round(255 * max(0.0, min(1.0, shade))))
    return (level, level, level)


class Renderer:
    """
    Handles all rendering operations.

    Parameters
    ----------
    screen : pygame.Surface
        Target surface.
    min_body_radius : int
        Smallest body marker radius (pixels).
    size_scale : float
        Scene units of display radius per unit of body size.
    """

    def __init__(
        self,
        screen: pygame.Surface,
        min_body_radius: int = 2,
        size_scale: float = 1.0,
    ):
        self.screen = screen
        self.screen_width = screen.get_width()
        self.screen_height = screen.get_height()
        self.min_body_radius = min_body_radius
        self.size_scale = size_scale

    @property
    def screen_size(self) -> Tuple[int, int]:
        return self.screen_width, self.screen_height

    def clear(self, color: Tuple[int, int, int] = Colors.BACKGROUND) -> None:
        """Clear screen with background color."""
        self.screen.fill(color)

    def to_screen(self, point, camera: Camera) -> Tuple[int, int]:
        sx, sy = camera.world_to_screen(point, self.screen_size)
        return int(sx), int(sy)

    def draw_gravity_grid(
        self, camera: Camera, grid: GravityGrid, shades: np.ndarray
    ) -> None:
        """Draw one shaded dot per grid vertex."""
        radius = max(1, int(camera.scale_length(grid.size / (grid.resolution - 1)) / 3))
        for row in range(grid.resolution):
            for col in range(grid.resolution):
                point = (grid.xs[row, col], grid.zs[row, col])
                sx, sy = self.to_screen(point, camera)
                if not (0 <= sx < self.screen_width and 0 <= sy < self.screen_height):
                    continue
                pygame.draw.circle(self.screen, grey(shades[row, col]), (sx, sy), radius)

    def draw_orbits(self, camera: Camera, bodies: Sequence[Body]) -> None:
        """Draw every circular orbit."""
        center = self.to_screen((0.0, 0.0), camera)
        for body in bodies:
            if body.is_central:
                continue
            radius = int(camera.scale_length(body.orbit_radius))
            if radius < 1:
                continue
            pygame.draw.circle(self.screen, Colors.ORBIT, center, radius, 1)

    def draw_bodies(
        self,
        camera: Camera,
        bodies: Sequence[Body],
        body_positions: Dict[str, np.ndarray],
        font: Optional[pygame.font.Font] = None,
    ) -> None:
        """Draw each body as a filled circle, labelled when a font is given."""
        for body in bodies:
            pos = body_positions[body.name]
            sx, sy = self.to_screen(pos, camera)
            radius = max(
                self.min_body_radius,
                int(camera.scale_length(body.size * self.size_scale)),
            )
            pygame.draw.circle(self.screen, body.color, (sx, sy), radius)

            if font is not None:
                label = font.render(body.name, True, body.color)
                self.screen.blit(label, (sx - label.get_width() // 2, sy - radius - 18))

    def draw_lagrange_points(
        self,
        camera: Camera,
        points: LagrangePointSet,
        font: Optional[pygame.font.Font] = None,
    ) -> None:
        """Draw L1, L2, L4, L5 and an arrow from the primary to each."""
        for name, (origin, direction, length) in points.arrows().items():
            color = LAGRANGE_COLORS[name]
            tip = origin + direction * length
            self._draw_arrow(camera, origin, tip, color)

            sx, sy = self.to_screen(tip, camera)
            pygame.draw.circle(self.screen, color, (sx, sy), 4)
            if font is not None:
                label = font.render(name, True, color)
                self.screen.blit(label, (sx - label.get_width() // 2, sy - 20))

    def _draw_arrow(self, camera: Camera, start, end, color) -> None:
        start_px = self.to_screen(start, camera)
        end_px = self.to_screen(end, camera)
        pygame.draw.line(self.screen, color, start_px, end_px, 1)

        dx = end_px[0] - start_px[0]
        dy = end_px[1] - start_px[1]
        length = math.hypot(dx, dy)
        if length < 1:
            return

        ux, uy = dx / length, dy / length
        head = min(10.0, length * 0.2)
        left = (end_px[0] - ux * head - uy * head * 0.5, end_px[1] - uy * head + ux * head * 0.5)
        right = (end_px[0] - ux * head + uy * head * 0.5, end_px[1] - uy * head - ux * head * 0.5)
        pygame.draw.polygon(self.screen, color, [end_px, left, right])

    def draw_transfer(
        self,
        camera: Camera,
        path_points: np.ndarray,
        probe_position: np.ndarray,
        path_color: Sequence[float],
        progress: float = 0.0,
    ) -> None:
        """
        Draw the transfer path colored by rendezvous quality, and the marker
        at the current position colored by progress.
        """
        screen_points = [self.to_screen(p, camera) for p in path_points]
        if len(screen_points) >= 2:
            pygame.draw.lines(
                self.screen, unit_rgb_to_color(path_color), False, screen_points, 2
            )
        pygame.draw.circle(
            self.screen, marker_color(progress), self.to_screen(probe_position, camera), 5
        )

    def draw_text(
        self,
        text: str,
        position: Tuple[int, int],
        font: pygame.font.Font,
        color: Tuple[int, int, int] = Colors.TEXT,
    ) -> int:
        """Draw text and return height."""
        surface = font.render(text, True, color)
        self.screen.blit(surface, position)
        return surface.get_height()

    def draw_info_panel(
        self,
        camera: Camera,
        state,
        font: pygame.font.Font,
        time_scale: float,
        paused: bool,
        toggles: Dict[str, bool],
    ) -> None:
        """Draw information panel."""
        info_lines = [
            f"Sim Time: {state.time:.3f} yr",
            f"Time Scale: {time_scale:g}/s" + (" [PAUSED]" if paused else ""),
            f"Zoom: {camera.zoom:.3f} px/unit",
            "",
        ]

        if state.transfer is not None:
            transfer = state.transfer
            info_lines += [
                f"Transfer: {transfer.departure} -> {transfer.arrival}",
                f"  Progress: {transfer.progress * 100:.0f}%",
                f"  Error: {transfer.rendezvous_error:.1f}",
                f"  Optimality: {transfer.optimality:.2f}",
                "",
            ]

        on_off = {True: "on", False: "off"}
        info_lines += [
            f"Lagrange points: {on_off[toggles.get('lagrange', False)]}",
            f"Gravity grid: {on_off[toggles.get('grid', False)]}",
            f"Slow time: {on_off[toggles.get('slow', False)]}",
            f"Follow transfer: {on_off[toggles.get('follow', False)]}",
            "",
            "Controls:",
            "Arrows : Pan",
            "+/- : Zoom in/out",
            "Wheel : Zoom at cursor",
            "F : Follow transfer",
            "L : Lagrange points",
            "T : Start transfer",
            "R : Reset transfer",
            "G : Gravity grid",
            "S : Slow time",
            "SPACE : Pause/Resume",
            "ESC : Quit",
        ]

        y = 10
        for line in info_lines:
            y += self.draw_text(line, (10, y), font) + 2
