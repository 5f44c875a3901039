#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Body Catalog for the Orrery Simulator

Defines the immutable catalog of simulated bodies. Every body moves on a
fixed circular orbit around the central attractor at the origin.
Distances are in scene units, angles in radians, time in simulation units
(one unit is one Earth year for the compiled-in solar system).
"""

import math
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

# Scene units per astronomical unit
AU_SCALE = 50.0


class UnknownBodyError(KeyError):
    """Raised when a body name is not present in the catalog."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown body: {self.name!r}"


@dataclass(frozen=True)
class Body:
    """
    A catalog entry with fixed circular-orbit parameters.

    Parameters
    ----------
    name : str
        Unique identifier
    orbit_radius : float
        Orbit radius in scene units (0 only for the central body)
    mass : float
        Mass in arbitrary units (positive)
    angular_speed : float
        Orbital rate in radians per simulation-time unit (0 iff radius is 0)
    size : float
        Display radius, relative to Earth (rendering only)
    color : tuple
        RGB display color
    """

    name: str
    orbit_radius: float
    mass: float
    angular_speed: float
    size: float
    color: Tuple[int, int, int] = (200, 200, 200)

    def __post_init__(self):
        if not self.name:
            raise ValueError("Body name must be non-empty")
        if self.mass <= 0:
            raise ValueError(f"{self.name}: mass must be positive")
        if self.size <= 0:
            raise ValueError(f"{self.name}: size must be positive")
        if self.orbit_radius < 0:
            raise ValueError(f"{self.name}: orbit radius cannot be negative")
        if self.orbit_radius == 0 and self.angular_speed != 0:
            raise ValueError(f"{self.name}: central body cannot have angular speed")
        if self.orbit_radius > 0 and self.angular_speed <= 0:
            raise ValueError(f"{self.name}: orbiting body needs positive angular speed")

    @classmethod
    def from_period(
        cls,
        name: str,
        orbit_radius: float,
        mass: float,
        period: float,
        size: float,
        color: Tuple[int, int, int] = (200, 200, 200),
    ) -> "Body":
        """
        Create a body from its orbital period.

        A period of 0 marks the central body; its angular speed is 0.
        """
        angular_speed = 2 * math.pi / period if period > 0 else 0.0
        return cls(
            name=name,
            orbit_radius=orbit_radius,
            mass=mass,
            angular_speed=angular_speed,
            size=size,
            color=color,
        )

    @property
    def is_central(self) -> bool:
        """True for the stationary attractor at the origin."""
        return self.orbit_radius == 0

    @property
    def period(self) -> float:
        """Orbital period in simulation-time units (inf for the central body)."""
        if self.angular_speed == 0:
            return math.inf
        return 2 * math.pi / self.angular_speed


class BodyCatalog:
    """
    Ordered, read-only collection of bodies.

    Built once at startup and passed to everything that needs it.

    Parameters
    ----------
    bodies : sequence of Body
        Catalog entries, in display order

    Raises
    ------
    ValueError
        On duplicate names or more than one central body
    """

    def __init__(self, bodies: Sequence[Body]):
        self._bodies: Tuple[Body, ...] = tuple(bodies)
        self._by_name: Dict[str, Body] = {}

        for body in self._bodies:
            if body.name in self._by_name:
                raise ValueError(f"Duplicate body name: {body.name}")
            self._by_name[body.name] = body

        central = [body.name for body in self._bodies if body.is_central]
        if len(central) > 1:
            raise ValueError(f"At most one central body allowed, got {central}")

    def get(self, name: str) -> Body:
        """
        Look up a body by name.

        Raises
        ------
        UnknownBodyError
            If the name is not in the catalog
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownBodyError(name) from None

    @property
    def bodies(self) -> Tuple[Body, ...]:
        """All bodies in catalog order."""
        return self._bodies

    @property
    def names(self) -> List[str]:
        return [body.name for body in self._bodies]

    @property
    def central_body(self) -> Optional[Body]:
        """The body at the origin, if the catalog has one."""
        for body in self._bodies:
            if body.is_central:
                return body
        return None

    @property
    def orbiting_bodies(self) -> List[Body]:
        return [body for body in self._bodies if not body.is_central]

    def __getitem__(self, name: str) -> Body:
        return self.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Body]:
        return iter(self._bodies)

    def __len__(self) -> int:
        return len(self._bodies)

    def __repr__(self) -> str:
        return f"BodyCatalog({', '.join(self.names)})"


# name, color, orbit radius (AU), size (Earth = 1), period (Earth years), mass
SOLAR_SYSTEM_DATA = [
    ("Sun", (255, 165, 0), 0.0, 10.0, 0.0, 300.0),
    ("Mercury", (128, 128, 128), 0.39, 0.38, 0.24, 0.055),
    ("Venus", (255, 255, 0), 0.72, 0.95, 0.62, 0.815),
    ("Earth", (0, 0, 255), 1.0, 1.0, 1.0, 1.0),
    ("Mars", (255, 0, 0), 1.52, 0.53, 1.88, 0.107),
    ("Jupiter", (255, 165, 0), 5.2, 11.21, 11.86, 317.8),
    ("Saturn", (218, 165, 32), 9.58, 9.45, 29.46, 95.2),
    ("Uranus", (173, 216, 230), 19.2, 4.01, 84.01, 14.5),
    ("Neptune", (0, 0, 255), 30.05, 3.88, 164.8, 17.1),
]


def create_solar_system_catalog(au_scale: float = AU_SCALE) -> BodyCatalog:
    """
    Build the compiled-in solar-system catalog.

    Parameters
    ----------
    au_scale : float
        Scene units per AU

    Returns
    -------
    BodyCatalog
        Sun followed by the eight planets
    """
    if au_scale <= 0:
        raise ValueError("AU scale must be positive")

    return BodyCatalog([
        Body.from_period(
            name=name,
            orbit_radius=radius_au * au_scale,
            mass=mass,
            period=period,
            size=size,
            color=color,
        )
        for name, color, radius_au, size, period, mass in SOLAR_SYSTEM_DATA
    ])
