"""Wire-level state snapshot models and enumerations.

These are shared by the bridge (which serialises them) and the deck client
(which parses them).  Wire names are camelCase; Python attributes are
snake_case.  Parsing is lenient: unknown keys are ignored and host-style
spellings (``Coldline``, ``MonitorIn``, ``Inbound``) are normalised.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class LineCategory(str, Enum):
    """Wire category of an intercom line."""

    HOTLINE = "hotline"
    COLDLINE = "coldline"
    MONITOR_IN = "monitor-in"
    MONITOR_OUT = "monitor-out"
    OTHER = "other"


class LineState(str, Enum):
    """Observed state of an intercom line."""

    CLOSED = "closed"
    INBOUND = "inbound"
    OUTBOUND = "outbound"
    OPEN = "open"
    UNKNOWN = "unknown"


class LineAction(str, Enum):
    """Transition the bridge asks the host to perform on a line."""

    CLOSE = "close"
    OPEN = "open"
    OUTBOUND = "outbound"


class FrequencyMode(str, Enum):
    """Receive/transmit mode of a frequency."""

    OFF = "off"
    RX = "rx"
    TX = "tx"


class ToggleName(str, Enum):
    """Command names accepted by ``POST /toggle/{name}``."""

    GROUP = "group"
    ALL_SPEAKER = "allspeaker"
    TONES_SPEAKER = "tonesspeaker"
    MUTE = "mute"
    ATIS = "atis"


# Hint colours per category, sent alongside each line.
CATEGORY_COLORS: dict[LineCategory, str] = {
    LineCategory.HOTLINE: "#b83c3c",
    LineCategory.COLDLINE: "#4a8ad8",
    LineCategory.MONITOR_IN: "#4ca66a",
    LineCategory.MONITOR_OUT: "#4ca66a",
    LineCategory.OTHER: "#777777",
}

_SQUASH = re.compile(r"[\s_\-]+")

_CATEGORY_KEYS: dict[str, LineCategory] = {
    "hotline": LineCategory.HOTLINE,
    "coldline": LineCategory.COLDLINE,
    "monitorin": LineCategory.MONITOR_IN,
    "monitorout": LineCategory.MONITOR_OUT,
}


# ---------------------------------------------------------------------------
# Normalisation & identity
# ---------------------------------------------------------------------------

def normalize_category(raw: Any) -> LineCategory:
    """Map any host or wire spelling of a line category onto :class:`LineCategory`."""
    if isinstance(raw, LineCategory):
        return raw
    key = _SQUASH.sub("", str(raw or "")).lower()
    return _CATEGORY_KEYS.get(key, LineCategory.OTHER)


def normalize_state(raw: Any) -> LineState:
    """Map any spelling of a line state onto :class:`LineState` (``unknown`` fallback)."""
    if isinstance(raw, LineState):
        return raw
    try:
        return LineState(str(raw or "").strip().lower())
    except ValueError:
        return LineState.UNKNOWN


def to_safe_id(value: str) -> str:
    """Replace spaces with underscores so a name can travel in a URL path."""
    return value.replace(" ", "_")


def normalize_id(value: str) -> str:
    """Comparison form of an id: trimmed, space-safe, case-folded."""
    return to_safe_id(value.strip()).casefold()


def ids_match(candidate: str, *forms: str | None) -> bool:
    """Return ``True`` if *candidate* equals any non-empty form after normalisation."""
    wanted = normalize_id(candidate)
    return any(form and normalize_id(form) == wanted for form in forms)


def frequency_id(name: str, frequency: int) -> str:
    """Stable id for a frequency, derived from its value and host name."""
    return to_safe_id(f"{frequency}:{name}")


def line_id(name: str, category: LineCategory | str) -> str:
    """Stable id for a line; the category keeps hot/cold pairs apart."""
    return to_safe_id(f"{name}_{normalize_category(category).value}")


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class Frequency(BaseModel):
    """A radio channel with independent receive/transmit flags."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    frequency_hz: int = Field(
        validation_alias=AliasChoices("frequencyHz", "frequency", "frequency_hz"),
        serialization_alias="frequencyHz",
        description="Host frequency value, e.g. 121500 for 121.500 MHz",
    )
    receive: bool = False
    transmit: bool = False
    friendly_name: str | None = Field(default=None, alias="friendlyName")

    @property
    def mode(self) -> FrequencyMode:
        if self.transmit:
            return FrequencyMode.TX
        if self.receive:
            return FrequencyMode.RX
        return FrequencyMode.OFF

    @property
    def mhz(self) -> str:
        return f"{self.frequency_hz / 1000:.3f}"


class Line(BaseModel):
    """A hotline/coldline/monitor intercom channel."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    category: LineCategory = Field(
        default=LineCategory.OTHER,
        validation_alias=AliasChoices("category", "type"),
        serialization_alias="category",
    )
    state: LineState = LineState.UNKNOWN
    external: bool = False
    color: str | None = None

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, value: Any) -> LineCategory:
        return normalize_category(value)

    @field_validator("state", mode="before")
    @classmethod
    def _coerce_state(cls, value: Any) -> LineState:
        return normalize_state(value)


class ToggleSet(BaseModel):
    """Console-wide switches."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    group: bool = False
    all_speaker: bool = Field(default=False, alias="allSpeaker")
    tones_speaker: bool = Field(default=False, alias="tonesSpeaker")
    mute: bool = False
    atis_receive: bool = Field(default=False, alias="atisReceive")

    def is_active(self, name: ToggleName) -> bool:
        """Return the boolean backing the command *name*."""
        return {
            ToggleName.GROUP: self.group,
            ToggleName.ALL_SPEAKER: self.all_speaker,
            ToggleName.TONES_SPEAKER: self.tones_speaker,
            ToggleName.MUTE: self.mute,
            ToggleName.ATIS: self.atis_receive,
        }[name]


class StateSnapshot(BaseModel):
    """Everything ``GET /state`` returns.

    ``error`` is set when the bridge could read only part of the host state;
    the remaining fields still carry whatever was readable.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    frequencies: list[Frequency] = Field(default_factory=list)
    lines: list[Line] = Field(default_factory=list)
    toggles: ToggleSet = Field(default_factory=ToggleSet)
    network_valid: bool = Field(default=False, alias="networkValid")
    error: str | None = None

    def lines_by_id(self) -> dict[str, Line]:
        return {line.id: line for line in self.lines}

    def find_frequency(self, target_id: str) -> Frequency | None:
        """Locate a frequency by exact id or by its bare frequency value."""
        for freq in self.frequencies:
            if freq.id == target_id or str(freq.frequency_hz) == target_id:
                return freq
        return None

    def to_wire(self) -> dict[str, Any]:
        """Serialise with camelCase keys, omitting unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
