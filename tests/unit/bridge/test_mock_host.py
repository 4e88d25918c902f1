"""Unit tests for the in-memory host backend."""

from __future__ import annotations

import json

import pytest

from vscsdeck.core.interfaces.host import HostLineKind, HostLineState
from vscsdeck.core.models.snapshot import LineAction, ToggleName
from vscsdeck.host.mock_host import InMemoryHost


class TestFromSeed:
    def test_builds_objects(self):
        host = InMemoryHost.from_seed(
            {
                "network_valid": True,
                "frequencies": [{"name": "SY_TWR", "frequency": 120500, "receive": True}],
                "lines": [{"name": "GND", "kind": "Coldline", "state": "Inbound"}],
                "toggles": {"mute": True},
            }
        )
        (freq,) = host.read_frequencies()
        assert freq.frequency == 120500 and freq.receive is True
        (line,) = host.read_lines()
        assert line.kind is HostLineKind.COLDLINE
        assert line.state is HostLineState.INBOUND
        assert host.read_toggles().mute is True
        assert host.network_valid() is True

    def test_empty_seed(self):
        host = InMemoryHost.from_seed({})
        assert host.read_frequencies() == []
        assert host.network_valid() is False

    def test_from_seed_file(self, tmp_path):
        p = tmp_path / "seed.json"
        p.write_text(json.dumps({"lines": [{"name": "ML_TWR"}]}))
        (line,) = InMemoryHost.from_seed_file(p).read_lines()
        assert line.kind is HostLineKind.HOTLINE

    def test_missing_seed_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            InMemoryHost.from_seed_file(tmp_path / "nope.json")


class TestMutations:
    def test_line_transition_records_and_applies(self, host):
        gnd = next(ln for ln in host.read_lines() if ln.name == "GND")
        host.apply_line_transition(gnd, LineAction.OPEN)
        assert gnd.state is HostLineState.OPEN
        assert host.transitions == [("GND", LineAction.OPEN)]

    def test_frequency_mutation_ignores_unknown_fields(self, host):
        freq = host.read_frequencies()[0]
        host.apply_frequency_mutation(freq, {"receive": False, "volume": 3})
        assert freq.receive is False

    def test_remove_frequency(self, host):
        freq = host.read_frequencies()[0]
        host.remove_frequency(freq)
        assert freq not in host.read_frequencies()
        assert host.removed == [freq]

    def test_set_toggle(self, host):
        host.set_toggle(ToggleName.ALL_SPEAKER, True)
        assert host.read_toggles().all_speaker is True


class TestSimulation:
    def test_identity(self, host):
        host.simulate_identity(network_valid=False, real_atc=True)
        assert host.network_valid() is False
        assert host.is_real_atc() is True

    def test_line_state_by_kind(self, host):
        host.simulate_line_state("SY_APP", HostLineState.OPEN, kind=HostLineKind.COLDLINE)
        app = next(ln for ln in host.read_lines() if ln.name == "SY_APP")
        assert app.state is HostLineState.OPEN

    def test_unknown_line_is_ignored(self, host):
        host.simulate_line_state("NOPE", HostLineState.OPEN)

    def test_read_failure_and_clear(self, host):
        host.simulate_read_failure("frequencies", OSError("boom"))
        with pytest.raises(OSError):
            host.read_frequencies()
        host.clear_read_failures()
        assert len(host.read_frequencies()) == 2

    def test_atis_monitor(self, host):
        host.simulate_atis_monitor(False)
        assert host.has_atis_monitor() is False
