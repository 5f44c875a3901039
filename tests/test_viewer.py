#!/usr/bin/env python3
"""
Viewer Tests

Tests for the top-down camera and smoke tests for the renderer on an
off-screen surface.
"""

import numpy as np
import pytest

pygame = pytest.importorskip("pygame")

from orrery import GravityGrid, SolarSystem
from orrery_view import (
    Camera,
    Colors,
    Renderer,
    Visualizer,
    interpolate_color,
    marker_color,
    unit_rgb_to_color,
)


SCREEN = (800, 600)


class TestCamera:

    def test_center_maps_to_screen_middle(self):
        camera = Camera(center=(10.0, 20.0), zoom=2.0)
        assert camera.world_to_screen((10.0, 20.0), SCREEN) == (400.0, 300.0)

    def test_z_up(self):
        camera = Camera(zoom=1.0)
        sx, sy = camera.world_to_screen((10.0, 10.0), SCREEN)
        assert sx == 410.0
        assert sy == 290.0

    def test_screen_to_world_inverse(self):
        camera = Camera(center=(-5.0, 3.0), zoom=0.7)
        screen = camera.world_to_screen((123.0, -45.0), SCREEN)
        np.testing.assert_allclose(camera.screen_to_world(screen, SCREEN), [123.0, -45.0])

    def test_zoom_clamped(self):
        camera = Camera(zoom=1.0, min_zoom=0.5, max_zoom=2.0, zoom_factor=10.0)
        camera.zoom_in()
        assert camera.zoom == 2.0
        camera.zoom_out()
        camera.zoom_out()
        assert camera.zoom == 0.5

    def test_pan_in_screen_units(self):
        camera = Camera(zoom=2.0, pan_speed=10.0)
        camera.pan_right()
        camera.pan_up()
        np.testing.assert_allclose(camera.center, [5.0, 5.0])
        camera.reset()
        np.testing.assert_allclose(camera.center, [0.0, 0.0])

    def test_follow(self):
        camera = Camera()
        camera.follow((100.0, 0.0), smoothing=0.5)
        np.testing.assert_allclose(camera.center, [50.0, 0.0])

    def test_zoom_at_keeps_anchor_fixed(self):
        camera = Camera(center=(30.0, -10.0), zoom=0.5)
        anchor = (650.0, 120.0)
        before = camera.screen_to_world(anchor, SCREEN)
        camera.zoom_at(anchor, SCREEN, zoom_in=True)
        assert camera.zoom == pytest.approx(0.5 * 1.05)
        np.testing.assert_allclose(camera.screen_to_world(anchor, SCREEN), before)
        camera.zoom_at(anchor, SCREEN, zoom_in=False)
        np.testing.assert_allclose(camera.screen_to_world(anchor, SCREEN), before)

    def test_zoom_at_screen_middle_keeps_center(self):
        camera = Camera(center=(5.0, 5.0), zoom=1.0)
        camera.zoom_at((400.0, 300.0), SCREEN, zoom_in=False)
        np.testing.assert_allclose(camera.center, [5.0, 5.0])

    def test_scale_length(self):
        assert Camera(zoom=0.5).scale_length(10.0) == 5.0


class TestColors:

    def test_interpolate(self):
        assert interpolate_color((0, 0, 0), (200, 100, 50), 0.5) == (100, 50, 25)
        assert interpolate_color((0, 0, 0), (200, 100, 50), 2.0) == (200, 100, 50)

    def test_unit_rgb(self):
        assert unit_rgb_to_color((1.0, 0.0, 0.5)) == (255, 0, 128)
        assert unit_rgb_to_color((2.0, -1.0, 0.0)) == (255, 0, 0)

    def test_marker_color_follows_progress(self):
        assert marker_color(0.0) == Colors.DEPARTING
        assert marker_color(1.0) == Colors.ARRIVING
        assert marker_color(0.5) == interpolate_color(Colors.DEPARTING, Colors.ARRIVING, 0.5)


@pytest.mark.viewer
class TestRendererSmoke:
    """Draw every layer onto an off-screen surface."""

    @pytest.fixture
    def renderer(self):
        surface = pygame.Surface(SCREEN)
        return Renderer(surface)

    def test_draw_scene(self, renderer):
        system = SolarSystem()
        system.start_transfer("Earth", "Mars", 0.0)
        camera = Camera(zoom=3.0)
        grid = GravityGrid(size=400.0, resolution=9)
        t = 0.4

        state = system.snapshot(t)
        _, _, shades = system.sample_grid(grid, t)

        renderer.clear()
        renderer.draw_gravity_grid(camera, grid, shades)
        renderer.draw_orbits(camera, system.get_body_catalog())
        renderer.draw_transfer(
            camera,
            system.transfer.path_points(),
            state.transfer.probe_position,
            system.transfer.path_color(t),
            state.transfer.progress,
        )
        renderer.draw_bodies(camera, system.get_body_catalog(), state.body_positions)
        renderer.draw_lagrange_points(camera, state.lagrange)

        center = renderer.screen.get_at((400, 300))
        assert tuple(center)[:3] != (0, 0, 0)


@pytest.mark.viewer
class TestVisualizerCamera:
    """Key handling and camera follow on the dummy video driver."""

    @pytest.fixture
    def visualizer(self):
        visualizer = Visualizer(SolarSystem(), width=800, height=600, paused=True)
        yield visualizer
        visualizer.close()

    def test_follow_toggle(self, visualizer):
        assert visualizer.follow_transfer is False
        visualizer._handle_keydown(pygame.K_f)
        assert visualizer.follow_transfer is True
        visualizer._handle_keydown(pygame.K_f)
        assert visualizer.follow_transfer is False

    def test_camera_moves_toward_transfer(self, visualizer):
        visualizer._handle_keydown(pygame.K_t)
        visualizer._handle_keydown(pygame.K_f)
        state = visualizer.system.snapshot(visualizer.clock.time)
        target = state.transfer.probe_position

        visualizer._update_camera(state)
        np.testing.assert_allclose(visualizer.camera.center, 0.1 * target)

    def test_camera_still_without_transfer(self, visualizer):
        visualizer._handle_keydown(pygame.K_f)
        visualizer._update_camera(visualizer.system.snapshot(0.0))
        np.testing.assert_allclose(visualizer.camera.center, [0.0, 0.0])

    def test_render_frame(self, visualizer):
        visualizer._handle_keydown(pygame.K_t)
        visualizer._handle_keydown(pygame.K_f)
        visualizer._handle_keydown(pygame.K_l)
        visualizer._render()
        assert visualizer.system.transfer.is_departed
