#!/usr/bin/env python3
"""
Simulation Clock Tests
"""

import pytest

from orrery import SimulationClock


class TestSimulationClock:

    def test_advance(self):
        clock = SimulationClock(time_scale=0.2)
        assert clock.advance(1.0) == pytest.approx(0.2)
        assert clock.advance(0.5) == pytest.approx(0.3)

    def test_slow_mode(self):
        clock = SimulationClock(time_scale=0.2, slow_time_scale=0.02)
        clock.toggle_slow()
        assert clock.time_scale == 0.02
        clock.advance(1.0)
        assert clock.time == pytest.approx(0.02)

    def test_toggle_slow_keeps_time(self):
        clock = SimulationClock()
        clock.advance(2.0)
        before = clock.time
        clock.toggle_slow()
        assert clock.time == before
        clock.toggle_slow()
        assert clock.time_scale == clock.normal_time_scale

    def test_paused(self):
        clock = SimulationClock(paused=True)
        clock.advance(5.0)
        assert clock.time == 0.0
        clock.toggle_pause()
        clock.advance(1.0)
        assert clock.time > 0.0

    def test_negative_delta_ignored(self):
        clock = SimulationClock(start_time=1.0)
        clock.advance(-3.0)
        assert clock.time == 1.0

    def test_monotonic(self):
        clock = SimulationClock()
        times = []
        for dt in [0.016, 0.0, 0.033, -0.01, 0.016]:
            times.append(clock.advance(dt))
        assert times == sorted(times)

    def test_negative_scale_rejected(self):
        with pytest.raises(ValueError):
            SimulationClock(time_scale=-1.0)

    def test_repr(self):
        assert "SimulationClock" in repr(SimulationClock())
