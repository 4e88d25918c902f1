"""Pydantic models for configuration, wire state, and display contexts."""
from vscsdeck.core.models.config import (
    BridgeConfig,
    ButtonConfig,
    ClientConfig,
    DeckConfig,
    SystemConfig,
)
from vscsdeck.core.models.context import ContextKind, ContextMode, DisplayContext
from vscsdeck.core.models.snapshot import (
    Frequency,
    FrequencyMode,
    Line,
    LineAction,
    LineCategory,
    LineState,
    StateSnapshot,
    ToggleName,
    ToggleSet,
)
from vscsdeck.core.models.visual import BLANK, ERROR, ButtonVisual

__all__ = [
    "BridgeConfig",
    "ButtonConfig",
    "ClientConfig",
    "DeckConfig",
    "SystemConfig",
    "ContextKind",
    "ContextMode",
    "DisplayContext",
    "Frequency",
    "FrequencyMode",
    "Line",
    "LineAction",
    "LineCategory",
    "LineState",
    "StateSnapshot",
    "ToggleName",
    "ToggleSet",
    "ButtonVisual",
    "BLANK",
    "ERROR",
]
