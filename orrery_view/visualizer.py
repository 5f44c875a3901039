#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Visualizer Module for the Orrery

Provides a Pygame-based interactive top-down view of the solar system. The
visualizer advances a SimulationClock from the real frame delta and draws
whatever the SolarSystem reports for the current simulation time.
"""

import logging
from typing import Optional

import pygame

from orrery import (
    GravityGrid,
    SimulationClock,
    SolarSystem,
    SystemConfig,
    UnknownBodyError,
)
from .camera import Camera
from .renderer import Renderer


logger = logging.getLogger(__name__)


class Visualizer:
    """
    Interactive visualization of the orrery.

    Parameters
    ----------
    system : SolarSystem, optional
        System to display. A default one is created when omitted.
    width : int
        Window width in pixels (default 1200)
    height : int
        Window height in pixels (default 900)
    title : str
        Window title
    paused : bool
        Start paused (default False)
    grid_resolution : int
        Vertices per side of the displayed gravity grid (default 81)

    Attributes
    ----------
    system : SolarSystem
        The simulated system
    clock : SimulationClock
        Simulation time source
    camera : Camera
        The top-down camera
    renderer : Renderer
        The rendering engine
    show_lagrange : bool
        Draw the configured Lagrange pair
    show_grid : bool
        Draw the shaded gravity grid
    follow_transfer : bool
        Keep the camera centered on the departed transfer
    running : bool
        Whether the visualizer is running
    """

    def __init__(
        self,
        system: Optional[SolarSystem] = None,
        width: int = 1200,
        height: int = 900,
        title: str = "Orrery",
        paused: bool = False,
        grid_resolution: int = 81,
    ):
        pygame.init()

        self.width = width
        self.height = height
        self.screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption(title)

        self.system = system or SolarSystem(SystemConfig())
        config = self.system.config
        self.clock = SimulationClock(
            time_scale=config.time_scale,
            slow_time_scale=config.slow_time_scale,
            paused=paused,
        )

        self.camera = Camera()
        self.renderer = Renderer(self.screen)
        self.grid = GravityGrid(resolution=grid_resolution, params=config.field_params)

        self.show_lagrange = False
        self.show_grid = False
        self.follow_transfer = False
        self.follow_smoothing = 0.1
        self.running = True

        # Pygame resources
        self.frame_clock = pygame.time.Clock()
        self.font = pygame.font.SysFont('Arial', 16)
        self.label_font = pygame.font.SysFont('Arial', 12)

    def _handle_events(self) -> None:
        """Handle Pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            if event.type == pygame.KEYDOWN:
                self._handle_keydown(event.key)

            if event.type == pygame.MOUSEWHEEL and event.y != 0:
                self.camera.zoom_at(
                    pygame.mouse.get_pos(), (self.width, self.height), zoom_in=event.y > 0
                )

    def _handle_keydown(self, key: int) -> None:
        """Handle key press events."""
        if key == pygame.K_ESCAPE:
            self.running = False

        elif key == pygame.K_SPACE:
            self.clock.toggle_pause()

        elif key == pygame.K_l:
            self.show_lagrange = not self.show_lagrange

        elif key == pygame.K_g:
            self.show_grid = not self.show_grid

        elif key == pygame.K_s:
            self.clock.toggle_slow()
            logger.info(f"Time scale: {self.clock.time_scale}")

        elif key == pygame.K_t:
            self._start_transfer()

        elif key == pygame.K_r:
            self.system.reset_transfer()
            logger.info("Transfer reset")

        elif key == pygame.K_f:
            self.follow_transfer = not self.follow_transfer

    def _start_transfer(self) -> None:
        config = self.system.config
        try:
            self.system.start_transfer(
                config.transfer_departure, config.transfer_arrival, self.clock.time
            )
        except (UnknownBodyError, ValueError) as e:
            logger.error(f"Cannot start transfer: {e}")

    def _handle_continuous_keys(self) -> None:
        """Handle continuous key presses for camera control."""
        keys = pygame.key.get_pressed()

        if keys[pygame.K_LEFT]:
            self.camera.pan_left()
        if keys[pygame.K_RIGHT]:
            self.camera.pan_right()
        if keys[pygame.K_UP]:
            self.camera.pan_up()
        if keys[pygame.K_DOWN]:
            self.camera.pan_down()

        if keys[pygame.K_PLUS] or keys[pygame.K_EQUALS] or keys[pygame.K_KP_PLUS]:
            self.camera.zoom_in()
        if keys[pygame.K_MINUS] or keys[pygame.K_KP_MINUS]:
            self.camera.zoom_out()

    def _update_camera(self, state) -> None:
        """Move the camera toward the transfer when following it."""
        if self.follow_transfer and state.transfer is not None:
            self.camera.follow(state.transfer.probe_position, self.follow_smoothing)

    def _render(self) -> None:
        """Render the current frame."""
        t = self.clock.time
        state = self.system.snapshot(t, include_lagrange=self.show_lagrange)
        bodies = self.system.get_body_catalog()

        self._update_camera(state)

        self.renderer.clear()

        if self.show_grid:
            _, _, shades = self.system.sample_grid(self.grid, t)
            self.renderer.draw_gravity_grid(self.camera, self.grid, shades)

        self.renderer.draw_orbits(self.camera, bodies)

        transfer = self.system.transfer
        if state.transfer is not None:
            self.renderer.draw_transfer(
                self.camera,
                transfer.path_points(),
                state.transfer.probe_position,
                transfer.path_color(t),
                state.transfer.progress,
            )

        self.renderer.draw_bodies(
            self.camera, bodies, state.body_positions, self.label_font
        )

        if state.lagrange is not None:
            self.renderer.draw_lagrange_points(self.camera, state.lagrange, self.label_font)

        self.renderer.draw_info_panel(
            self.camera,
            state,
            self.font,
            self.clock.time_scale,
            self.clock.paused,
            {
                "lagrange": self.show_lagrange,
                "grid": self.show_grid,
                "slow": self.clock.slow,
                "follow": self.follow_transfer,
            },
        )

        pygame.display.flip()

    def run(self) -> None:
        """
        Run the visualization main loop.

        This blocks until the user closes the window or presses ESC.
        """
        self.running = True

        while self.step():
            pass

        pygame.quit()

    def step(self) -> bool:
        """
        Perform a single visualization step.

        Returns
        -------
        bool
            False if the visualizer should stop, True otherwise
        """
        dt = self.frame_clock.tick(60) / 1000.0

        self._handle_events()

        if not self.running:
            return False

        self._handle_continuous_keys()
        self.clock.advance(dt)
        self._render()

        return True

    def close(self) -> None:
        """Close the visualizer and clean up resources."""
        pygame.quit()


def run_visualizer(
    config: Optional[SystemConfig] = None,
    width: int = 1200,
    height: int = 900,
    paused: bool = False,
    slow: bool = False,
) -> None:
    """
    Convenience function to launch the viewer.

    Parameters
    ----------
    config : SystemConfig, optional
        System configuration
    width : int
        Window width
    height : int
        Window height
    paused : bool
        Start paused
    slow : bool
        Start in slow time mode
    """
    visualizer = Visualizer(
        SolarSystem(config),
        width=width,
        height=height,
        paused=paused,
    )
    if slow:
        visualizer.clock.toggle_slow()

    logger.info(f"Viewer started with {len(visualizer.system.catalog)} bodies")

    visualizer.run()
