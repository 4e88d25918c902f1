"""In-memory host backend for development and testing.

Implements :class:`HostAdapter` with plain Python objects and
``simulate_*()`` helpers so tests (and the bridge in dev mode) can drive
line calls, identity changes, and read failures without the real host.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from vscsdeck.core.interfaces.host import (
    HostAdapter,
    HostFrequency,
    HostLine,
    HostLineKind,
    HostLineState,
    HostToggles,
)
from vscsdeck.core.models.snapshot import LineAction, ToggleName

_log = logging.getLogger(__name__)

_ACTION_RESULT: dict[LineAction, HostLineState] = {
    LineAction.CLOSE: HostLineState.CLOSED,
    LineAction.OPEN: HostLineState.OPEN,
    LineAction.OUTBOUND: HostLineState.OUTBOUND,
}

_TOGGLE_FIELDS: dict[ToggleName, str] = {
    ToggleName.GROUP: "group",
    ToggleName.ALL_SPEAKER: "all_speaker",
    ToggleName.TONES_SPEAKER: "tones_speaker",
    ToggleName.MUTE: "mute",
    ToggleName.ATIS: "atis_receive",
}


class InMemoryHost(HostAdapter):
    """Dict/list-backed host state.

    Attributes:
        transitions: Every ``(line name, action)`` the bridge requested, in order.
        removed: Frequencies removed through :meth:`remove_frequency`.
    """

    def __init__(
        self,
        frequencies: list[HostFrequency] | None = None,
        lines: list[HostLine] | None = None,
        toggles: HostToggles | None = None,
        network_valid: bool = False,
        real_atc: bool = False,
        atis_monitor: bool = True,
    ) -> None:
        self._frequencies = list(frequencies or [])
        self._lines = list(lines or [])
        self._toggles = toggles or HostToggles()
        self._network_valid = network_valid
        self._real_atc = real_atc
        self._atis_monitor = atis_monitor
        self._failing: dict[str, Exception] = {}
        self.transitions: list[tuple[str, LineAction]] = []
        self.removed: list[HostFrequency] = []

    # -- Construction helpers --

    @classmethod
    def from_seed(cls, seed: dict[str, Any]) -> InMemoryHost:
        """Build a host from a seed dict (the shape of ``bridge.seed_file``)."""
        freqs = [
            HostFrequency(
                name=f["name"],
                frequency=int(f["frequency"]),
                receive=bool(f.get("receive", False)),
                transmit=bool(f.get("transmit", False)),
                friendly_name=f.get("friendly_name"),
            )
            for f in seed.get("frequencies", [])
        ]
        lines = [
            HostLine(
                name=item["name"],
                kind=HostLineKind(item.get("kind", HostLineKind.HOTLINE.value)),
                state=HostLineState(item.get("state", HostLineState.CLOSED.value)),
                external=bool(item.get("external", False)),
            )
            for item in seed.get("lines", [])
        ]
        toggles = HostToggles(**seed.get("toggles", {}))
        return cls(
            frequencies=freqs,
            lines=lines,
            toggles=toggles,
            network_valid=bool(seed.get("network_valid", False)),
            real_atc=bool(seed.get("real_atc", False)),
            atis_monitor=bool(seed.get("atis_monitor", True)),
        )

    @classmethod
    def from_seed_file(cls, path: Path | str) -> InMemoryHost:
        """Load a seed JSON file.  Raises ``FileNotFoundError`` if it is missing."""
        p = Path(path)
        _log.info("Seeding in-memory host from %s", p)
        return cls.from_seed(json.loads(p.read_text(encoding="utf-8")))

    # -- HostAdapter: reads --

    def read_frequencies(self) -> list[HostFrequency]:
        self._raise_if_failing("frequencies")
        return list(self._frequencies)

    def read_lines(self) -> list[HostLine]:
        self._raise_if_failing("lines")
        return list(self._lines)

    def read_toggles(self) -> HostToggles:
        self._raise_if_failing("toggles")
        return self._toggles

    def network_valid(self) -> bool:
        self._raise_if_failing("network")
        return self._network_valid

    def is_real_atc(self) -> bool:
        return self._real_atc

    def has_atis_monitor(self) -> bool:
        return self._atis_monitor

    # -- HostAdapter: mutations --

    def apply_frequency_mutation(self, freq: HostFrequency, fields: dict[str, Any]) -> None:
        for key in ("receive", "transmit"):
            if key in fields:
                setattr(freq, key, bool(fields[key]))

    def apply_line_transition(self, line: HostLine, action: LineAction) -> None:
        self.transitions.append((line.name, action))
        line.state = _ACTION_RESULT[action]

    def remove_frequency(self, freq: HostFrequency) -> None:
        self._frequencies = [f for f in self._frequencies if f is not freq]
        self.removed.append(freq)

    def set_toggle(self, name: ToggleName, value: bool) -> None:
        setattr(self._toggles, _TOGGLE_FIELDS[name], value)

    # -- Simulation helpers --

    def simulate_identity(self, network_valid: bool, real_atc: bool | None = None) -> None:
        """Change the operator's identity flags."""
        self._network_valid = network_valid
        if real_atc is not None:
            self._real_atc = real_atc

    def simulate_atis_monitor(self, present: bool) -> None:
        """Add or remove the ATIS monitor the atis toggle depends on."""
        self._atis_monitor = present

    def simulate_line_state(self, name: str, state: HostLineState, kind: HostLineKind | None = None) -> None:
        """Set the state of the first line named *name* (optionally of *kind*)."""
        for line in self._lines:
            if line.name == name and (kind is None or line.kind == kind):
                line.state = state
                return
        _log.debug("No line %s to update", name)

    def simulate_read_failure(self, section: str, exc: Exception | None = None) -> None:
        """Make reads of *section* raise (frequencies / lines / toggles / network)."""
        self._failing[section] = exc or RuntimeError(f"{section} unavailable")

    def clear_read_failures(self) -> None:
        self._failing.clear()

    def _raise_if_failing(self, section: str) -> None:
        exc = self._failing.get(section)
        if exc is not None:
            raise exc
