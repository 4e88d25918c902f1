"""Host capability interface (ABC) and host-side object types.

The bridge never touches the host application directly.  It reads and
mutates host state through :class:`HostAdapter`, so the binding mechanism
(reflection into a closed object model, a published API, or the in-memory
backend used for development and tests) stays behind this seam.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any

from vscsdeck.core.models.snapshot import LineAction, ToggleName


class HostLineKind(str, Enum):
    """Line kinds as the host names them."""

    HOTLINE = "Hotline"
    COLDLINE = "Coldline"
    MONITOR_IN = "MonitorIn"
    MONITOR_OUT = "MonitorOut"
    INTERCOM = "Intercom"


class HostLineState(str, Enum):
    """Line states as the host names them."""

    CLOSED = "Closed"
    INBOUND = "Inbound"
    OUTBOUND = "Outbound"
    OPEN = "Open"


@dataclass
class HostFrequency:
    """A host-owned frequency object."""

    name: str
    frequency: int
    receive: bool = False
    transmit: bool = False
    friendly_name: str | None = None


@dataclass
class HostLine:
    """A host-owned intercom line object."""

    name: str
    kind: HostLineKind | str
    state: HostLineState | str = HostLineState.CLOSED
    external: bool = False


@dataclass
class HostToggles:
    """Console-wide switches as the host exposes them."""

    group: bool = False
    all_speaker: bool = False
    tones_speaker: bool = False
    mute: bool = False
    atis_receive: bool = False


class HostAdapter(ABC):
    """Narrow read/mutate surface over the host's live VSCS objects."""

    # -- reads --------------------------------------------------------------

    @abstractmethod
    def read_frequencies(self) -> list[HostFrequency]:
        """Return the host's frequency list in native order."""

    @abstractmethod
    def read_lines(self) -> list[HostLine]:
        """Return the host's line list in native order."""

    @abstractmethod
    def read_toggles(self) -> HostToggles:
        """Return the current toggle flags."""

    @abstractmethod
    def network_valid(self) -> bool:
        """Return ``True`` while the operator holds a validated ATC identity."""

    @abstractmethod
    def is_real_atc(self) -> bool:
        """Return ``True`` if the operator is a real (non-observer) controller."""

    @abstractmethod
    def has_atis_monitor(self) -> bool:
        """Return ``True`` if the host has an ATIS monitor to toggle."""

    # -- mutations ----------------------------------------------------------

    @abstractmethod
    def apply_frequency_mutation(self, freq: HostFrequency, fields: dict[str, Any]) -> None:
        """Set *fields* (``receive`` / ``transmit``) on *freq*."""

    @abstractmethod
    def apply_line_transition(self, line: HostLine, action: LineAction) -> None:
        """Ask the host to close, answer, or originate *line*."""

    @abstractmethod
    def remove_frequency(self, freq: HostFrequency) -> None:
        """Remove *freq* from the console."""

    @abstractmethod
    def set_toggle(self, name: ToggleName, value: bool) -> None:
        """Set the toggle *name* to *value*."""
