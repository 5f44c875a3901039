#!/usr/bin/env python3
"""
State Export Tests

Tests for state records, tracks, sampling from a system and the JSON files
written by the exporter.
"""

import json

import numpy as np
import pytest

from tools.export_states import (
    StateExporter,
    StateRecord,
    StateTrack,
    export_states,
    load_track,
    sample_times,
)


class TestSampleTimes:

    def test_inclusive_window(self):
        times = sample_times(1.0, 1.0, 0.25)
        np.testing.assert_allclose(times, [1.0, 1.25, 1.5, 1.75, 2.0])

    def test_zero_duration(self):
        np.testing.assert_allclose(sample_times(3.0, 0.0, 0.1), [3.0])

    @pytest.mark.parametrize("duration, step", [(1.0, 0.0), (1.0, -0.1), (-1.0, 0.1)])
    def test_invalid(self, duration, step):
        with pytest.raises(ValueError):
            sample_times(0.0, duration, step)


class TestStateRecord:

    def test_converts_lists(self):
        record = StateRecord(time=0.5, position=[1.0, 2.0], velocity=[3.0, 4.0])
        assert isinstance(record.position, np.ndarray)
        assert isinstance(record.velocity, np.ndarray)

    def test_dict_form(self):
        record = StateRecord(time=0.5, position=[1.0, 2.0], velocity=[3.0, 4.0])
        data = record.to_dict()
        assert data == {"time": 0.5, "position": [1.0, 2.0], "velocity": [3.0, 4.0]}
        restored = StateRecord.from_dict(data)
        np.testing.assert_allclose(restored.position, record.position)


class TestStateTrack:

    def test_valid(self):
        track = StateTrack("Earth", states=[
            StateRecord(0.0, [50.0, 0.0], [0.0, 1.0]),
            StateRecord(0.1, [49.0, 5.0], [-1.0, 1.0]),
        ])
        assert track.validate() == []
        assert track.start_time == 0.0
        assert track.end_time == 0.1

    def test_empty_invalid(self):
        track = StateTrack("Earth")
        assert track.validate()
        assert track.start_time is None

    def test_unordered_invalid(self):
        track = StateTrack("Earth", states=[
            StateRecord(0.2, [0.0, 0.0], [0.0, 0.0]),
            StateRecord(0.1, [0.0, 0.0], [0.0, 0.0]),
        ])
        assert any("time-ordered" in e for e in track.validate())

    def test_unknown_kind_invalid(self):
        track = StateTrack("x", kind="comet", states=[StateRecord(0.0, [0, 0], [0, 0])])
        assert track.validate()


class TestExporterFromSystem:

    def test_body_tracks(self, system, tmp_path):
        exporter = StateExporter(tmp_path)
        tracks = exporter.add_from_system(system, start_time=0.0, duration=0.5, step=0.25)
        assert [t.name for t in tracks] == system.catalog.names
        earth = tracks[system.catalog.names.index("Earth")]
        assert len(earth.states) == 3
        np.testing.assert_allclose(earth.states[1].position, [0.0, 50.0], atol=1e-9)
        assert float(np.dot(earth.states[1].position, earth.states[1].velocity)) == pytest.approx(0.0, abs=1e-6)

    def test_probe_track(self, system, tmp_path):
        exporter = StateExporter(tmp_path)
        tracks = exporter.add_from_system(
            system, start_time=2.0, duration=1.0, step=0.1, include_probe=True
        )
        probe = tracks[-1]
        assert probe.kind == "probe"
        assert len(probe.states) == 11
        np.testing.assert_allclose(
            probe.states[0].position, system.position("Earth", 2.0), atol=1e-6
        )
        assert system.transfer.snapshot.departure_time == 2.0

    def test_probe_uses_existing_transfer(self, departed_system, tmp_path):
        exporter = StateExporter(tmp_path)
        exporter.add_from_system(
            departed_system, start_time=10.0, duration=0.5, step=0.1, include_probe=True
        )
        assert departed_system.transfer.snapshot.departure_time == 10.0


class TestExportFiles:

    def test_writes_files(self, system, tmp_path):
        output = export_states(system, tmp_path / "out", duration=0.2, step=0.1)
        assert output == tmp_path / "out"
        for name in system.catalog.names:
            assert (output / f"{name}_states.json").exists()

        metadata = json.loads((output / "metadata.json").read_text())
        assert metadata["producer"] == "orrery"
        assert metadata["num_tracks"] == 9
        assert metadata["total_states"] == 27
        assert metadata["start_time"] == 0.0
        assert metadata["end_time"] == pytest.approx(0.2)

    def test_track_file_contents(self, system, tmp_path):
        output = export_states(system, tmp_path, duration=0.1, step=0.1)
        track = load_track(output / "Mars_states.json")
        assert track.name == "Mars"
        assert track.kind == "body"
        assert len(track.states) == 2
        np.testing.assert_allclose(track.states[0].position, [76.0, 0.0])

    def test_probe_file(self, system, tmp_path):
        output = export_states(system, tmp_path, duration=0.5, step=0.1, include_probe=True)
        track = load_track(output / "probe_states.json")
        assert track.kind == "probe"

    def test_invalid_track_skipped(self, tmp_path):
        exporter = StateExporter(tmp_path)
        exporter.add_track("Empty")
        exporter.add_track("Earth", [{"time": 0.0, "position": [1, 0], "velocity": [0, 1]}])
        exporter.export()
        assert not (tmp_path / "Empty_states.json").exists()
        assert (tmp_path / "Earth_states.json").exists()

    def test_summary(self, system, tmp_path):
        exporter = StateExporter(tmp_path, producer_id="test")
        exporter.add_from_system(system, duration=0.1, step=0.1)
        summary = exporter.get_summary()
        assert summary["producer_id"] == "test"
        assert summary["num_tracks"] == 9
        assert summary["tracks"][0]["num_states"] == 2
