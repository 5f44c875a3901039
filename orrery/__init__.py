#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Orrery Simulation Package

This package provides the celestial-mechanics query layer of the orrery:
circular orbit positions, Lagrange points, the gravitational depression
field and the transfer trajectory planner.

Every query is a function of simulation time, so the package can be used
without any visualization.
"""

from .bodies import (
    AU_SCALE,
    Body,
    BodyCatalog,
    UnknownBodyError,
    create_solar_system_catalog,
)

from .orbit import (
    angle_at,
    position,
    positions,
    velocity,
)

from .lagrange import (
    LagrangePointSet,
    lagrange_points,
    hill_offset,
)

from .gravity import (
    FieldParameters,
    GravityGrid,
    field_depression,
    field_depression_grid,
    shade_for_warp,
)

from .transfer import (
    DepartureSnapshot,
    TransferCurve,
    TransferPlanner,
    TransferState,
    TransferStateError,
    sample_transfer_arc,
    transfer_ellipse,
)

from .clock import SimulationClock

from .system import (
    SolarSystem,
    SystemConfig,
    SystemState,
    TransferStatus,
    create_system,
)


__all__ = [
    # Bodies
    "AU_SCALE",
    "Body",
    "BodyCatalog",
    "UnknownBodyError",
    "create_solar_system_catalog",

    # Orbit
    "angle_at",
    "position",
    "positions",
    "velocity",

    # Lagrange
    "LagrangePointSet",
    "lagrange_points",
    "hill_offset",

    # Gravity
    "FieldParameters",
    "GravityGrid",
    "field_depression",
    "field_depression_grid",
    "shade_for_warp",

    # Transfer
    "DepartureSnapshot",
    "TransferCurve",
    "TransferPlanner",
    "TransferState",
    "TransferStateError",
    "sample_transfer_arc",
    "transfer_ellipse",

    # Clock
    "SimulationClock",

    # System
    "SolarSystem",
    "SystemConfig",
    "SystemState",
    "TransferStatus",
    "create_system",
]

__version__ = "1.0.0"
