#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
State Export Utility

Samples the orrery over a time window and writes the result as JSON so other
tools can replay or plot it without importing the simulation. The output
directory holds:

1. One ``{track}_states.json`` file per body (and per probe) with the
   time-ordered position and velocity records.
2. ``metadata.json`` describing the export.

Usage
-----
Command-line:
    python -m tools.export_states --output ./states --duration 2 --step 0.01

Programmatic:
    from tools.export_states import StateExporter

    exporter = StateExporter(output_dir)
    exporter.add_from_system(system, start_time=0.0, duration=2.0)
    exporter.export()
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Dict, Optional, Union, Any
import json
import logging
import sys

import numpy as np


logger = logging.getLogger(__name__)


# Half-width of the central difference used for probe velocities
PROBE_VELOCITY_STEP = 1e-4

BODY_TRACK = "body"
PROBE_TRACK = "probe"


@dataclass
class StateRecord:
    """
    State of one track at a simulation time.

    Attributes
    ----------
    time : float
        Simulation time
    position : np.ndarray
        Position [x, z] in scene units
    velocity : np.ndarray
        Velocity [vx, vz] in scene units per time unit
    """
    time: float
    position: np.ndarray
    velocity: np.ndarray

    def __post_init__(self):
        if not isinstance(self.position, np.ndarray):
            self.position = np.array(self.position, dtype=float)
        if not isinstance(self.velocity, np.ndarray):
            self.velocity = np.array(self.velocity, dtype=float)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "time": self.time,
            "position": self.position.tolist(),
            "velocity": self.velocity.tolist()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StateRecord":
        return cls(
            time=float(data["time"]),
            position=np.array(data["position"], dtype=float),
            velocity=np.array(data["velocity"], dtype=float)
        )


@dataclass
class StateTrack:
    """
    Time-ordered records for one body or probe.

    Attributes
    ----------
    name : str
        Body name, or ``"probe"``
    kind : str
        ``"body"`` or ``"probe"``
    states : List[StateRecord]
        Records in increasing time order
    """
    name: str
    kind: str = BODY_TRACK
    states: List[StateRecord] = field(default_factory=list)

    @property
    def start_time(self) -> Optional[float]:
        if not self.states:
            return None
        return self.states[0].time

    @property
    def end_time(self) -> Optional[float]:
        if not self.states:
            return None
        return self.states[-1].time

    def validate(self) -> List[str]:
        """
        Validate track data.

        Returns
        -------
        List[str]
            List of validation errors, empty if valid
        """
        errors = []

        if not self.name:
            errors.append("name is required")

        if self.kind not in (BODY_TRACK, PROBE_TRACK):
            errors.append(f"Unknown track kind: {self.kind}")

        if not self.states:
            errors.append("At least 1 state required")

        for i in range(1, len(self.states)):
            if self.states[i].time <= self.states[i - 1].time:
                errors.append(
                    f"States must be time-ordered: state {i} ({self.states[i].time}) "
                    f"is not after state {i - 1} ({self.states[i - 1].time})"
                )
                break

        return errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind,
            "states": [s.to_dict() for s in self.states]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StateTrack":
        return cls(
            name=data["name"],
            kind=data.get("kind", BODY_TRACK),
            states=[StateRecord.from_dict(s) for s in data.get("states", [])]
        )


def sample_times(start_time: float, duration: float, step: float) -> np.ndarray:
    """
    Sample times covering [start_time, start_time + duration].

    Raises
    ------
    ValueError
        If step is not positive or duration is negative
    """
    if step <= 0:
        raise ValueError(f"Step must be positive, got {step}")
    if duration < 0:
        raise ValueError(f"Duration cannot be negative, got {duration}")

    num_steps = int(round(duration / step))
    return start_time + step * np.arange(num_steps + 1)


class StateExporter:
    """
    Collects orrery state tracks and writes them as JSON.

    Parameters
    ----------
    output_dir : Path or str
        Directory for output files
    producer_id : str, optional
        Producer identification string (default "orrery")

    Examples
    --------
    >>> exporter = StateExporter("./states")
    >>> exporter.add_from_system(system, duration=1.0, step=0.05)
    >>> exporter.export()
    """

    def __init__(
        self,
        output_dir: Union[Path, str],
        producer_id: str = "orrery"
    ):
        self.output_dir = Path(output_dir)
        self.producer_id = producer_id
        self.tracks: List[StateTrack] = []

        self._metadata: Dict[str, Any] = {
            "created": datetime.now(timezone.utc).isoformat(),
            "producer": producer_id,
            "version": "1.0"
        }

    def add_track(
        self,
        name: str,
        states: Optional[List[Union[StateRecord, Dict]]] = None,
        kind: str = BODY_TRACK
    ) -> StateTrack:
        """
        Add a track to the exporter.

        Parameters
        ----------
        name : str
            Track name
        states : List[StateRecord or Dict], optional
            Records. Dicts are converted with StateRecord.from_dict.
        kind : str, optional
            ``"body"`` or ``"probe"``

        Returns
        -------
        StateTrack
            The created track
        """
        converted = [
            StateRecord.from_dict(s) if isinstance(s, dict) else s
            for s in (states or [])
        ]
        track = StateTrack(name=name, kind=kind, states=converted)
        self.tracks.append(track)
        logger.debug(f"Added {kind} track {name} ({len(converted)} states)")
        return track

    def add_from_system(
        self,
        system,
        start_time: float = 0.0,
        duration: float = 1.0,
        step: float = 0.01,
        include_probe: bool = False
    ) -> List[StateTrack]:
        """
        Add tracks sampled from a solar system.

        Parameters
        ----------
        system : SolarSystem
            System to sample
        start_time : float, optional
            First sample time (default 0)
        duration : float, optional
            Window length in simulation time (default 1)
        step : float, optional
            Sample spacing (default 0.01)
        include_probe : bool, optional
            Also sample the probe. A transfer between the configured bodies
            is started at start_time if none has departed.

        Returns
        -------
        List[StateTrack]
            Created tracks, bodies first in catalog order
        """
        from orrery import TransferState, velocity

        times = sample_times(start_time, duration, step)
        bodies = system.get_body_catalog()

        body_states: Dict[str, List[StateRecord]] = {b.name: [] for b in bodies}
        for t in times:
            coords = system.position_array(t)
            for i, body in enumerate(bodies):
                body_states[body.name].append(StateRecord(
                    time=float(t),
                    position=coords[i].copy(),
                    velocity=velocity(body, t)
                ))

        tracks = [
            self.add_track(body.name, body_states[body.name], kind=BODY_TRACK)
            for body in bodies
        ]

        if include_probe:
            if system.transfer_state is TransferState.IDLE:
                config = system.config
                system.start_transfer(
                    config.transfer_departure, config.transfer_arrival, start_time
                )
            tracks.append(self._sample_probe(system, times))

        logger.info(
            f"Added {len(tracks)} tracks "
            f"({len(times)} states each, duration {duration})"
        )

        return tracks

    def _sample_probe(self, system, times: np.ndarray) -> StateTrack:
        h = PROBE_VELOCITY_STEP
        states = []
        for t in times:
            before = system.probe_position(t - h)
            after = system.probe_position(t + h)
            states.append(StateRecord(
                time=float(t),
                position=system.probe_position(t),
                velocity=(after - before) / (2 * h)
            ))
        return self.add_track(PROBE_TRACK, states, kind=PROBE_TRACK)

    def export(self) -> Path:
        """
        Write every valid track and the metadata file.

        Returns
        -------
        Path
            Output directory containing all files
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)

        written = []
        for track in self.tracks:
            errors = track.validate()
            if errors:
                logger.warning(
                    f"Skipping invalid track {track.name}: {'; '.join(errors)}"
                )
                continue

            written.append(self._write_track_file(track))

        self._write_metadata()

        logger.info(f"Exported {len(written)} tracks to {self.output_dir}")

        return self.output_dir

    def _write_track_file(self, track: StateTrack) -> Path:
        filepath = self.output_dir / f"{track.name}_states.json"

        with open(filepath, "w") as f:
            json.dump(track.to_dict(), f, indent=2)

        logger.debug(f"Wrote states file: {filepath}")
        return filepath

    def _write_metadata(self) -> Path:
        filepath = self.output_dir / "metadata.json"

        metadata = {
            **self._metadata,
            "num_tracks": len(self.tracks),
            "tracks": [t.name for t in self.tracks],
            "total_states": sum(len(t.states) for t in self.tracks)
        }

        start_times = [t.start_time for t in self.tracks if t.start_time is not None]
        end_times = [t.end_time for t in self.tracks if t.end_time is not None]

        if start_times:
            metadata["start_time"] = min(start_times)
        if end_times:
            metadata["end_time"] = max(end_times)

        with open(filepath, "w") as f:
            json.dump(metadata, f, indent=2)

        logger.debug(f"Wrote metadata: {filepath}")
        return filepath

    def get_summary(self) -> Dict[str, Any]:
        """Get summary of exporter contents."""
        return {
            "output_dir": str(self.output_dir),
            "producer_id": self.producer_id,
            "num_tracks": len(self.tracks),
            "tracks": [
                {
                    "name": t.name,
                    "kind": t.kind,
                    "num_states": len(t.states),
                    "start_time": t.start_time,
                    "end_time": t.end_time,
                }
                for t in self.tracks
            ]
        }


def load_track(filepath: Union[Path, str]) -> StateTrack:
    """Read a track written by StateExporter.export()."""
    with open(filepath) as f:
        return StateTrack.from_dict(json.load(f))


def export_states(
    system,
    output_dir: Union[Path, str],
    start_time: float = 0.0,
    duration: float = 1.0,
    step: float = 0.01,
    include_probe: bool = False
) -> Path:
    """
    Convenience function to sample a system and write the export.

    Parameters
    ----------
    system : SolarSystem
        System to sample
    output_dir : Path or str
        Output directory
    start_time : float, optional
        First sample time (default 0)
    duration : float, optional
        Window length (default 1)
    step : float, optional
        Sample spacing (default 0.01)
    include_probe : bool, optional
        Also export the transfer probe

    Returns
    -------
    Path
        Output directory containing all files
    """
    exporter = StateExporter(output_dir)
    exporter.add_from_system(
        system,
        start_time=start_time,
        duration=duration,
        step=step,
        include_probe=include_probe
    )
    return exporter.export()


# Command-line interface
def main():
    """Command-line entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Export orrery body states to JSON"
    )

    parser.add_argument(
        "--output", "-o",
        type=Path,
        required=True,
        help="Output directory for state files"
    )

    parser.add_argument(
        "--start",
        type=float,
        default=0.0,
        help="Start time in simulation units (default: 0)"
    )

    parser.add_argument(
        "--duration",
        type=float,
        default=1.0,
        help="Duration in simulation units (default: 1)"
    )

    parser.add_argument(
        "--step",
        type=float,
        default=0.01,
        help="Time step in simulation units (default: 0.01)"
    )

    parser.add_argument(
        "--probe",
        action="store_true",
        help="Start a transfer at the start time and export the probe"
    )

    parser.add_argument(
        "--departure",
        default="Earth",
        help="Transfer departure body (default: Earth)"
    )

    parser.add_argument(
        "--arrival",
        default="Mars",
        help="Transfer arrival body (default: Mars)"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s"
    )

    try:
        sys.path.insert(0, str(Path(__file__).parent.parent))
        from orrery import create_system
    except ImportError as e:
        logger.error(f"Could not import orrery package: {e}")
        sys.exit(1)

    try:
        system = create_system(
            transfer_departure=args.departure,
            transfer_arrival=args.arrival,
        )
        output_dir = export_states(
            system,
            args.output,
            start_time=args.start,
            duration=args.duration,
            step=args.step,
            include_probe=args.probe
        )
    except (KeyError, ValueError) as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(f"State files exported to: {output_dir}")


if __name__ == "__main__":
    main()
