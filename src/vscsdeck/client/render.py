"""Render state machine: line / frequency / toggle state → ButtonVisual.

Everything here is a pure function of its inputs and ``now_ms``.  Flashing
is derived from wall-clock time modulo a period, so independent buttons
flash in step without sharing a timer.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from vscsdeck.client.labels import InitialsLabelFormatter, LabelFormatter, StationLabelFormatter
from vscsdeck.core.models.snapshot import (
    CATEGORY_COLORS,
    Frequency,
    FrequencyMode,
    Line,
    LineCategory,
    LineState,
    ToggleName,
    ToggleSet,
)
from vscsdeck.core.models.visual import ButtonVisual

PICK_TARGET = ButtonVisual(title="Pick\nVSCS")
MISSING = ButtonVisual(title="Missing")

_PENDING = (LineState.INBOUND, LineState.OUTBOUND)
_ACTIVE = (LineState.OPEN, LineState.INBOUND, LineState.OUTBOUND)

_TOGGLE_CAPTIONS: dict[ToggleName, tuple[str, str]] = {
    # name → (caption, active marker)
    ToggleName.GROUP: ("Group", "ON"),
    ToggleName.ALL_SPEAKER: ("All", "SPKR"),
    ToggleName.TONES_SPEAKER: ("Tones", "SPKR"),
    ToggleName.MUTE: ("Coord", "MUTE"),
    ToggleName.ATIS: ("ATIS", "RX"),
}


# ---------------------------------------------------------------------------
# Colour helpers
# ---------------------------------------------------------------------------

def _parse_hex(color: str) -> tuple[int, int, int]:
    value = int(color.lstrip("#"), 16)
    return (value >> 16) & 255, (value >> 8) & 255, value & 255


def _to_hex(r: float, g: float, b: float) -> str:
    def clamp(v: float) -> int:
        return max(0, min(255, round(v)))

    return f"#{clamp(r):02x}{clamp(g):02x}{clamp(b):02x}"


def darken(color: str, amount: float) -> str:
    """Subtract ``255 * amount`` from each channel."""
    r, g, b = _parse_hex(color)
    step = 255 * amount
    return _to_hex(r - step, g - step, b - step)


def lighten(color: str, amount: float) -> str:
    """Add ``255 * amount`` to each channel."""
    return darken(color, -amount)


def flash_on(now_ms: int, period_ms: int) -> bool:
    """True during the first half of each *period_ms* window of wall-clock time."""
    return (now_ms % period_ms) < period_ms // 2


# ---------------------------------------------------------------------------
# Presentation profiles
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RenderProfile:
    """Colours, flash periods, poll intervals, and label heuristics for one look."""

    name: str
    hot_idle: str
    cold_idle: str
    cold_accent: str
    monitor_idle: str
    active_green: str
    text: str
    text_highlight: str
    cold_flash_period_ms: int = 800
    monitor_flash_period_ms: int = 1000
    line_poll_ms: int = 500
    toggle_poll_ms: int = 1000
    frequency_poll_ms: int = 1000
    freq_off: str = "#3a3a3a"
    freq_rx: str = "#00c8d8"
    freq_tx: str = "#00c900"
    toggle_background: str = "#7e8686"
    toggle_text: str = "#00196a"
    toggle_border_active: str = "#EBEB00"
    formatter: LabelFormatter = field(default_factory=StationLabelFormatter)

    def poll_interval(self, kind: str) -> float:
        """Seconds between refreshes for a context of *kind*."""
        ms = {"line": self.line_poll_ms, "frequency": self.frequency_poll_ms}.get(kind, self.toggle_poll_ms)
        return ms / 1000


def vatsys_profile(aliases: dict[str, dict[str, str]] | None = None) -> RenderProfile:
    """Console-matched colours with station-code heuristics."""
    return RenderProfile(
        name="vatsys",
        hot_idle="#EBEB00",
        cold_idle="#00c8d8",
        cold_accent="#5B447A",
        monitor_idle="#4ca66a",
        active_green="#00c900",
        text="#000060",
        text_highlight="#FFFFFF",
        formatter=StationLabelFormatter(aliases),
    )


def classic_profile(aliases: dict[str, dict[str, str]] | None = None) -> RenderProfile:
    """Bridge hint colours with initials-only station codes."""
    cold = CATEGORY_COLORS[LineCategory.COLDLINE]
    return RenderProfile(
        name="classic",
        hot_idle=CATEGORY_COLORS[LineCategory.HOTLINE],
        cold_idle=cold,
        cold_accent=lighten(cold, 0.3),
        monitor_idle=CATEGORY_COLORS[LineCategory.MONITOR_IN],
        active_green="#00c900",
        text="#FFFFFF",
        text_highlight="#000000",
        formatter=InitialsLabelFormatter(),
    )


PROFILES = {"vatsys": vatsys_profile, "classic": classic_profile}


def get_profile(name: str, aliases: dict[str, dict[str, str]] | None = None) -> RenderProfile:
    """Return the named profile.  Raises ``ValueError`` for unknown names."""
    try:
        return PROFILES[name.lower()](aliases)
    except KeyError:
        raise ValueError(f"Unknown render profile {name!r} (expected one of {sorted(PROFILES)})") from None


# ---------------------------------------------------------------------------
# Lines
# ---------------------------------------------------------------------------

def line_color(line: Line, profile: RenderProfile, now_ms: int) -> str:
    """Background colour for *line* at wall-clock time *now_ms*."""
    state = line.state
    if line.category is LineCategory.COLDLINE:
        if state in _PENDING:
            return profile.cold_accent if flash_on(now_ms, profile.cold_flash_period_ms) else profile.cold_idle
        if state is LineState.OPEN:
            return profile.cold_accent
        return profile.cold_idle

    if line.category is LineCategory.HOTLINE:
        return profile.active_green if state in _ACTIVE else profile.hot_idle

    if state is LineState.INBOUND:
        if flash_on(now_ms, profile.monitor_flash_period_ms):
            return profile.cold_idle
        return darken(profile.cold_idle, 0.2)
    return profile.monitor_idle


def line_text_color(line: Line, profile: RenderProfile) -> str:
    if line.category is LineCategory.COLDLINE and line.state in (*_PENDING, LineState.OPEN):
        return profile.text_highlight
    return profile.text


def render_line(line: Line, profile: RenderProfile, now_ms: int) -> ButtonVisual:
    code, friendly = profile.formatter.label_for(line.name)
    return ButtonVisual(
        label=(code, friendly, "EXT" if line.external else ""),
        background=line_color(line, profile, now_ms),
        text_color=line_text_color(line, profile),
    )


# ---------------------------------------------------------------------------
# Frequencies
# ---------------------------------------------------------------------------

def next_frequency_mode(freq: Frequency) -> FrequencyMode:
    """Key-press cycle: off → rx → tx → off."""
    if freq.transmit and freq.receive:
        return FrequencyMode.OFF
    if freq.receive:
        return FrequencyMode.TX
    return FrequencyMode.RX


def render_frequency(freq: Frequency, profile: RenderProfile) -> ButtonVisual:
    mode = freq.mode
    background = {
        FrequencyMode.OFF: profile.freq_off,
        FrequencyMode.RX: profile.freq_rx,
        FrequencyMode.TX: profile.freq_tx,
    }[mode]
    return ButtonVisual(
        label=(freq.name or freq.mhz, freq.mhz, mode.value.upper()),
        background=background,
        text_color=profile.text if mode is not FrequencyMode.OFF else profile.text_highlight,
    )


# ---------------------------------------------------------------------------
# Toggles
# ---------------------------------------------------------------------------

def render_toggle(name: ToggleName, toggles: ToggleSet, profile: RenderProfile) -> ButtonVisual:
    active = toggles.is_active(name)
    caption, marker = _TOGGLE_CAPTIONS[name]
    return ButtonVisual(
        label=(caption, marker if active else ""),
        background=profile.toggle_background,
        text_color=profile.toggle_text,
        border=profile.toggle_border_active if active else None,
    )
