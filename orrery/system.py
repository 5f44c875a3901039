#!/usr/bin/env python3
"""
Solar System Module

Query facade over the body catalog, orbit positions, Lagrange solver,
field sampler and transfer planner. This is the surface the viewer and
the command line consume every frame.

Apart from the transfer planner, every query is a pure function of the
simulation time passed in.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Sequence, Tuple, Any

import numpy as np

from .bodies import AU_SCALE, Body, BodyCatalog, create_solar_system_catalog
from .orbit import position, position_xz, positions
from .lagrange import LagrangePointSet, lagrange_points
from .gravity import (
    FieldParameters,
    GravityGrid,
    field_depression,
)
from .transfer import (
    DEFAULT_ERROR_SCALE,
    DEFAULT_NUM_SAMPLES,
    DEFAULT_TRANSFER_DURATION,
    TransferPlanner,
    TransferState,
)
from .clock import DEFAULT_TIME_SCALE, SLOW_TIME_SCALE


logger = logging.getLogger(__name__)


@dataclass
class SystemConfig:
    """
    Configuration for a solar system.

    Attributes
    ----------
    au_scale : float
        Scene units per AU for the compiled-in catalog.
    transfer_duration : float
        Simulation time a transfer takes.
    transfer_samples : int
        Points sampled on the transfer arc.
    rendezvous_error_scale : float
        Rendezvous error that maps to zero optimality.
    field_params : FieldParameters
        Depression field tuning constants.
    lagrange_primary : str
        Primary of the Lagrange pair shown by default.
    lagrange_secondary : str
        Secondary of the Lagrange pair shown by default.
    transfer_departure : str
        Default transfer departure body.
    transfer_arrival : str
        Default transfer arrival body.
    time_scale : float
        Simulation units per real second.
    slow_time_scale : float
        Simulation units per real second in slow mode.
    """

    au_scale: float = AU_SCALE
    transfer_duration: float = DEFAULT_TRANSFER_DURATION
    transfer_samples: int = DEFAULT_NUM_SAMPLES
    rendezvous_error_scale: float = DEFAULT_ERROR_SCALE
    field_params: FieldParameters = field(default_factory=FieldParameters)
    lagrange_primary: str = "Earth"
    lagrange_secondary: str = "Mars"
    transfer_departure: str = "Earth"
    transfer_arrival: str = "Mars"
    time_scale: float = DEFAULT_TIME_SCALE
    slow_time_scale: float = SLOW_TIME_SCALE

    def __post_init__(self):
        if self.au_scale <= 0:
            raise ValueError("AU scale must be positive")
        if self.transfer_duration <= 0:
            raise ValueError("Transfer duration must be positive")
        if self.transfer_samples < 2:
            raise ValueError("Transfer needs at least two samples")
        if self.rendezvous_error_scale <= 0:
            raise ValueError("Rendezvous error scale must be positive")


@dataclass
class TransferStatus:
    """
    Transfer values for one frame.

    Attributes
    ----------
    departure : str
        Departure body name.
    arrival : str
        Arrival body name.
    progress : float
        Fraction of the transfer completed.
    probe_position : np.ndarray
        Probe [x, z].
    rendezvous_error : float
        Probe distance to the arrival body.
    optimality : float
        Normalised quality signal in [0, 1].
    """

    departure: str
    arrival: str
    progress: float
    probe_position: np.ndarray
    rendezvous_error: float
    optimality: float


@dataclass
class SystemState:
    """
    Everything the host draws for one frame.

    Attributes
    ----------
    time : float
        Simulation time of the frame.
    body_positions : dict
        Body name -> [x, z].
    lagrange : LagrangePointSet, optional
        Points for the configured pair.
    transfer : TransferStatus, optional
        Present only while a transfer is departed.
    """

    time: float = 0.0
    body_positions: Dict[str, np.ndarray] = field(default_factory=dict)
    lagrange: Optional[LagrangePointSet] = None
    transfer: Optional[TransferStatus] = None


class SolarSystem:
    """
    Simulation queries over an immutable body catalog.

    Parameters
    ----------
    config : SystemConfig, optional
        System configuration.
    catalog : BodyCatalog, optional
        Bodies to simulate. Built from config.au_scale when omitted.

    Attributes
    ----------
    config : SystemConfig
        Current configuration.
    catalog : BodyCatalog
        The bodies.
    transfer : TransferPlanner, optional
        Planner of the current activation, if any.
    """

    def __init__(
        self,
        config: Optional[SystemConfig] = None,
        catalog: Optional[BodyCatalog] = None,
    ):
        self.config = config or SystemConfig()
        self.catalog = catalog if catalog is not None else create_solar_system_catalog(
            self.config.au_scale
        )
        self.transfer: Optional[TransferPlanner] = None

        self._masses = np.array([b.mass for b in self.catalog], dtype=float)

        pair = (self.config.lagrange_primary, self.config.lagrange_secondary)
        self.has_lagrange_pair = all(name in self.catalog for name in pair)
        if not self.has_lagrange_pair:
            logger.warning(
                f"Lagrange pair {pair[0]}/{pair[1]} not in catalog; "
                f"snapshots will omit Lagrange points"
            )

        logger.debug(f"Solar system created with {len(self.catalog)} bodies")

    # ------------------------------------------------------------------
    # Catalog and positions
    # ------------------------------------------------------------------

    def get_body_catalog(self) -> Tuple[Body, ...]:
        """Ordered, read-only sequence of bodies."""
        return self.catalog.bodies

    def body(self, name: str) -> Body:
        return self.catalog.get(name)

    def position(self, body_name: str, t: float) -> np.ndarray:
        """
        Position of a body at time t.

        Raises
        ------
        UnknownBodyError
            If the name is not in the catalog.
        """
        return position(self.catalog.get(body_name), t)

    def positions(self, t: float) -> Dict[str, np.ndarray]:
        """Positions of every body, keyed by name, in catalog order."""
        coords = positions(self.catalog, t)
        return {body.name: coords[i] for i, body in enumerate(self.catalog)}

    def position_array(self, t: float) -> np.ndarray:
        """Positions of every body as an (N, 2) array in catalog order."""
        return positions(self.catalog, t)

    # ------------------------------------------------------------------
    # Lagrange points
    # ------------------------------------------------------------------

    def lagrange_points(
        self, primary_name: str, secondary_name: str, t: float
    ) -> LagrangePointSet:
        """
        L1, L2, L4 and L5 of a body pair at time t.

        The two bodies must not coincide at t (see lagrange_points()).
        """
        primary = self.catalog.get(primary_name)
        secondary = self.catalog.get(secondary_name)
        return lagrange_points(
            position(primary, t),
            position(secondary, t),
            primary.mass,
            secondary.mass,
        )

    def planet_lagrange_points(self, body_name: str, t: float) -> LagrangePointSet:
        """Lagrange points of a body with the central body as primary."""
        central = self.catalog.central_body
        if central is None:
            raise ValueError("Catalog has no central body")
        if body_name == central.name:
            raise ValueError(f"{body_name} is the central body")
        return self.lagrange_points(central.name, body_name, t)

    # ------------------------------------------------------------------
    # Gravitational field
    # ------------------------------------------------------------------

    def field_depression(self, point: Sequence[float], t: float) -> float:
        """Depression value at one point at time t, in [0, 1)."""
        return self.field_sampler(t)(point)

    def field_sampler(self, t: float) -> Callable[[Sequence[float]], float]:
        """
        Depression function for one frame.

        Body positions are computed once; the returned callable only does
        float arithmetic per point.
        """
        coords = [position_xz(body, t) for body in self.catalog]
        masses = [body.mass for body in self.catalog]
        params = self.config.field_params

        def sample(point: Sequence[float]) -> float:
            return field_depression(point, coords, masses, params)

        return sample

    def sample_grid(self, grid: GravityGrid, t: float):
        """
        Sample a deformation grid at time t.

        Returns
        -------
        tuple
            (warp, heights, shades) arrays from GravityGrid.sample_surface
        """
        return grid.sample_surface(self.position_array(t), self._masses)

    # ------------------------------------------------------------------
    # Transfer
    # ------------------------------------------------------------------

    def start_transfer(self, departure_name: str, arrival_name: str, t: float) -> bool:
        """
        Start a transfer at time t.

        Ignored while a transfer is already departed; call reset_transfer()
        first to plan a new one.

        Returns
        -------
        bool
            True if a new departure was recorded.
        """
        planner = self.plan_transfer(departure_name, arrival_name)

        if self.transfer is not None and self.transfer.is_departed:
            return self.transfer.start(t)

        self.transfer = planner
        return self.transfer.start(t)

    def plan_transfer(self, departure_name: str, arrival_name: str) -> TransferPlanner:
        """
        Build an IDLE planner for a body pair using this configuration.

        Raises
        ------
        UnknownBodyError
            If either name is not in the catalog.
        ValueError
            If either body is the central body or both names are the same.
        """
        return TransferPlanner(
            self.catalog.get(departure_name),
            self.catalog.get(arrival_name),
            transfer_duration=self.config.transfer_duration,
            num_samples=self.config.transfer_samples,
            error_scale=self.config.rendezvous_error_scale,
        )

    def reset_transfer(self) -> None:
        """Return the transfer to IDLE, allowing a new departure."""
        if self.transfer is not None:
            self.transfer.reset()

    @property
    def transfer_state(self) -> TransferState:
        if self.transfer is None:
            return TransferState.IDLE
        return self.transfer.state

    def probe_position(self, t: float) -> Optional[np.ndarray]:
        """Probe position at t, or None when no transfer has departed."""
        if self.transfer is None:
            return None
        return self.transfer.probe_position(t)

    def rendezvous_error(self, t: float) -> Optional[float]:
        """Probe distance to the arrival body at t, or None."""
        if self.transfer is None:
            return None
        return self.transfer.rendezvous_error(t)

    def optimality(self, t: float) -> Optional[float]:
        if self.transfer is None:
            return None
        return self.transfer.optimality(t)

    # ------------------------------------------------------------------
    # Frame snapshot
    # ------------------------------------------------------------------

    def snapshot(self, t: float, include_lagrange: bool = True) -> SystemState:
        """
        Collect the per-frame values at time t.

        Parameters
        ----------
        t : float
            Simulation time.
        include_lagrange : bool
            Compute the configured Lagrange pair. Skipped when the pair
            is not in the catalog.

        Returns
        -------
        SystemState
            Frame values.
        """
        state = SystemState(time=t, body_positions=self.positions(t))

        if include_lagrange and self.has_lagrange_pair:
            state.lagrange = self.lagrange_points(
                self.config.lagrange_primary, self.config.lagrange_secondary, t
            )

        if self.transfer is not None and self.transfer.is_departed:
            state.transfer = TransferStatus(
                departure=self.transfer.departure.name,
                arrival=self.transfer.arrival.name,
                progress=self.transfer.progress(t),
                probe_position=self.transfer.probe_position(t),
                rendezvous_error=self.transfer.rendezvous_error(t),
                optimality=self.transfer.optimality(t),
            )

        return state

    def get_summary(self) -> Dict[str, Any]:
        """Get system summary."""
        return {
            "num_bodies": len(self.catalog),
            "bodies": self.catalog.names,
            "central_body": self.catalog.central_body.name if self.catalog.central_body else None,
            "au_scale": self.config.au_scale,
            "lagrange_pair": (self.config.lagrange_primary, self.config.lagrange_secondary),
            "transfer_state": self.transfer_state.value,
            "transfer_duration": self.config.transfer_duration,
        }

    def __repr__(self) -> str:
        return (
            f"SolarSystem(\n"
            f"  bodies={len(self.catalog)},\n"
            f"  au_scale={self.config.au_scale},\n"
            f"  transfer={self.transfer_state.value}\n"
            f")"
        )


def create_system(**kwargs) -> SolarSystem:
    """
    Create a solar system with configuration overrides.

    Parameters
    ----------
    **kwargs
        SystemConfig fields to override; unknown keys are ignored.

    Returns
    -------
    SolarSystem
        System over the compiled-in catalog.
    """
    config = SystemConfig()

    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)

    config.__post_init__()
    return SolarSystem(config)
