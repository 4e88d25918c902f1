"""Abstract interfaces for the host application and the button deck."""

from vscsdeck.core.interfaces.deck import DeckInterface
from vscsdeck.core.interfaces.host import (
    HostAdapter,
    HostFrequency,
    HostLine,
    HostLineKind,
    HostLineState,
    HostToggles,
)

__all__ = [
    "DeckInterface",
    "HostAdapter",
    "HostFrequency",
    "HostLine",
    "HostLineKind",
    "HostLineState",
    "HostToggles",
]
