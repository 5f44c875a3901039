#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Simulation Clock

Converts real elapsed time from the host frame loop into simulation time.
Simulation time only moves forward: changing the scale or pausing never
makes it jump or run backwards.
"""

DEFAULT_TIME_SCALE = 0.2
SLOW_TIME_SCALE = 0.02


class SimulationClock:
    """
    Monotonic simulation clock driven by real frame deltas.

    Parameters
    ----------
    time_scale : float
        Simulation units per real second in normal mode (default 0.2)
    slow_time_scale : float
        Simulation units per real second in slow mode (default 0.02)
    start_time : float
        Initial simulation time (default 0)
    paused : bool
        Start paused (default False)

    Attributes
    ----------
    time : float
        Current simulation time
    slow : bool
        Whether slow mode is active
    paused : bool
        Whether the clock is paused
    """

    def __init__(
        self,
        time_scale: float = DEFAULT_TIME_SCALE,
        slow_time_scale: float = SLOW_TIME_SCALE,
        start_time: float = 0.0,
        paused: bool = False,
    ):
        if time_scale < 0 or slow_time_scale < 0:
            raise ValueError("Time scales cannot be negative")

        self.normal_time_scale = time_scale
        self.slow_time_scale = slow_time_scale
        self.time = start_time
        self.slow = False
        self.paused = paused

    @property
    def time_scale(self) -> float:
        """Scale currently in effect."""
        return self.slow_time_scale if self.slow else self.normal_time_scale

    def advance(self, real_dt: float) -> float:
        """
        Advance by a real-time delta.

        Parameters
        ----------
        real_dt : float
            Real seconds since the previous frame; negative values are ignored

        Returns
        -------
        float
            Updated simulation time
        """
        if not self.paused and real_dt > 0:
            self.time += real_dt * self.time_scale
        return self.time

    def toggle_slow(self) -> None:
        self.slow = not self.slow

    def toggle_pause(self) -> None:
        self.paused = not self.paused

    def __repr__(self) -> str:
        return (
            f"SimulationClock(time={self.time:.4f}, scale={self.time_scale}, "
            f"paused={self.paused})"
        )
