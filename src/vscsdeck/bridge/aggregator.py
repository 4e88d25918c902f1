"""Bridge aggregator: host state → StateSnapshot, and command validation.

All host access goes through a :class:`HostAdapter`.  Validation failures
raise :mod:`vscsdeck.core.errors` classes, which the transport maps to HTTP
statuses.  A failed command never mutates host state.
"""

from __future__ import annotations

import logging
from typing import Callable, TypeVar

from vscsdeck.core.errors import BadRequest, Forbidden, NotFound, PartialState
from vscsdeck.core.interfaces.host import HostAdapter, HostFrequency, HostLine
from vscsdeck.core.models.snapshot import (
    CATEGORY_COLORS,
    Frequency,
    FrequencyMode,
    Line,
    LineAction,
    LineState,
    StateSnapshot,
    ToggleName,
    ToggleSet,
    frequency_id,
    ids_match,
    line_id,
    normalize_category,
    normalize_state,
    to_safe_id,
)

_log = logging.getLogger(__name__)

_T = TypeVar("_T")

# mode → (receive, transmit)
MODE_TRANSITIONS: dict[FrequencyMode, tuple[bool, bool]] = {
    FrequencyMode.OFF: (False, False),
    FrequencyMode.RX: (True, False),
    FrequencyMode.TX: (True, True),
}


def parse_mode(raw: str | None) -> FrequencyMode:
    """Parse a mode string case-insensitively.  Raises :class:`BadRequest`."""
    text = (raw or "").strip().lower()
    if not text:
        raise BadRequest("Missing mode (off|rx|tx).")
    try:
        return FrequencyMode(text)
    except ValueError:
        raise BadRequest("Unknown mode.") from None


def parse_toggle(raw: str) -> ToggleName:
    """Parse a toggle command name case-insensitively.  Raises :class:`BadRequest`."""
    try:
        return ToggleName(raw.strip().lower())
    except ValueError:
        raise BadRequest("Unknown toggle.") from None


def line_action_for(state: LineState) -> LineAction:
    """Action a toggle press requests for a line in *state*."""
    if state in (LineState.OPEN, LineState.OUTBOUND):
        return LineAction.CLOSE
    if state is LineState.INBOUND:
        return LineAction.OPEN
    return LineAction.OUTBOUND


class BridgeAggregator:
    """Reads and mutates host VSCS state on behalf of the transport.

    Args:
        host: Capability adapter over the host's live objects.
    """

    def __init__(self, host: HostAdapter) -> None:
        self._host = host

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def build_snapshot(self) -> StateSnapshot:
        """Return the current host state.

        Each section is read independently; a section that fails is left
        empty and its message is collected into ``error`` so the client
        still receives everything else.
        """
        errors: list[str] = []

        frequencies = self._read_section("frequencies", self._read_frequencies, [], errors)
        lines = self._read_section("lines", self._read_lines, [], errors)
        toggles = self._read_section("toggles", self._read_toggles, ToggleSet(), errors)
        network_valid = self._read_section("network", self._host.network_valid, False, errors)

        return StateSnapshot(
            frequencies=frequencies,
            lines=lines,
            toggles=toggles,
            network_valid=network_valid,
            error="; ".join(errors) or None,
        )

    def _read_section(
        self,
        section: str,
        reader: Callable[[], _T],
        default: _T,
        errors: list[str],
    ) -> _T:
        try:
            return reader()
        except Exception as exc:  # noqa: BLE001
            failure = PartialState(f"{section}: {exc}")
            _log.warning("Partial state — could not read %s: %s", section, exc)
            errors.append(str(failure))
            return default

    def _read_frequencies(self) -> list[Frequency]:
        out: list[Frequency] = []
        for f in self._host.read_frequencies():
            friendly = f.friendly_name if f.friendly_name and f.friendly_name.strip() else None
            out.append(
                Frequency(
                    id=frequency_id(f.name, f.frequency),
                    name=friendly or f.name,
                    frequency_hz=f.frequency,
                    receive=f.receive,
                    transmit=f.transmit,
                    friendly_name=f.friendly_name,
                )
            )
        return out

    def _read_lines(self) -> list[Line]:
        out: list[Line] = []
        for item in self._host.read_lines():
            category = normalize_category(_enum_text(item.kind))
            out.append(
                Line(
                    id=line_id(item.name, category),
                    name=item.name,
                    category=category,
                    state=normalize_state(_enum_text(item.state)),
                    external=item.external,
                    color=CATEGORY_COLORS[category],
                )
            )
        return out

    def _read_toggles(self) -> ToggleSet:
        t = self._host.read_toggles()
        return ToggleSet(
            group=t.group,
            all_speaker=t.all_speaker,
            tones_speaker=t.tones_speaker,
            mute=t.mute,
            atis_receive=self._host.has_atis_monitor() and t.atis_receive,
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def set_frequency_mode(self, target_id: str, mode: str | None) -> FrequencyMode:
        """Apply *mode* to the frequency *target_id* and return the parsed mode.

        Raises:
            NotFound: No frequency matches *target_id*.
            Forbidden: ``tx`` requested without a valid ATC identity.
            BadRequest: *mode* is blank or not one of off/rx/tx.
        """
        freq = self.find_frequency(target_id)
        if freq is None:
            raise NotFound("Frequency not found.")

        if (mode or "").strip().lower() == FrequencyMode.TX.value and not self._host.network_valid():
            raise Forbidden("Cannot transmit when not a valid ATC.")

        parsed = parse_mode(mode)
        receive, transmit = MODE_TRANSITIONS[parsed]
        self._host.apply_frequency_mutation(freq, {"receive": receive, "transmit": transmit})
        _log.info("Frequency %s → %s", frequency_id(freq.name, freq.frequency), parsed.value)
        return parsed

    def remove_frequency(self, target_id: str) -> None:
        """Remove the frequency *target_id* from the console.  Raises :class:`NotFound`."""
        freq = self.find_frequency(target_id)
        if freq is None:
            raise NotFound("Frequency not found.")
        self._host.remove_frequency(freq)
        _log.info("Frequency %s removed", frequency_id(freq.name, freq.frequency))

    def toggle_line(self, target_id: str) -> LineAction:
        """Request the next transition for line *target_id* and return it.

        No permission gating happens here; host-side constraints apply
        downstream.  Raises :class:`NotFound`.
        """
        line = self.find_line(target_id)
        if line is None:
            raise NotFound("Line not found.")

        action = line_action_for(normalize_state(_enum_text(line.state)))
        self._host.apply_line_transition(line, action)
        _log.info("Line %s (%s) → %s", line.name, _enum_text(line.kind), action.value)
        return action

    def toggle_switch(self, name: str) -> bool:
        """Flip the toggle *name*.

        Returns ``True`` if a flag changed.  ``group`` without a real-ATC
        identity and ``atis`` without an ATIS monitor are silent no-ops.
        Raises :class:`BadRequest` for unknown names.
        """
        toggle = parse_toggle(name)
        if toggle is ToggleName.GROUP and not self._host.is_real_atc():
            _log.debug("Group toggle ignored — not a real ATC")
            return False
        if toggle is ToggleName.ATIS and not self._host.has_atis_monitor():
            _log.debug("ATIS toggle ignored — no ATIS monitor")
            return False

        current = self._read_toggles().is_active(toggle)
        self._host.set_toggle(toggle, not current)
        _log.info("Toggle %s → %s", toggle.value, not current)
        return True

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def find_frequency(self, target_id: str) -> HostFrequency | None:
        """Match by bare frequency value, or by the safe id of the name or friendly name."""
        for f in self._host.read_frequencies():
            if ids_match(
                target_id,
                str(f.frequency),
                frequency_id(f.name, f.frequency),
                frequency_id(f.friendly_name, f.frequency) if f.friendly_name else None,
            ):
                return f
        return None

    def find_line(self, target_id: str) -> HostLine | None:
        """Match by name, ``name_category`` or ``name-category`` (wire or host spelling)."""
        for item in self._host.read_lines():
            kind = _enum_text(item.kind)
            category = normalize_category(kind).value
            forms = [item.name]
            for suffix in {category, kind}:
                forms.append(to_safe_id(f"{item.name}_{suffix}"))
                forms.append(to_safe_id(f"{item.name}-{suffix}"))
            if ids_match(target_id, *forms):
                return item
        return None


def _enum_text(value: object) -> str:
    """Host enums and plain strings both become their text value."""
    return str(getattr(value, "value", value))
