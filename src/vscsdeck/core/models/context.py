"""Per-button display context models."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ContextKind(str, Enum):
    """What a deck button controls."""

    LINE = "line"
    FREQUENCY = "frequency"
    TOGGLE = "toggle"


class ContextMode(str, Enum):
    """How a line button picks its target."""

    AUTO = "auto"
    MANUAL = "manual"


# SDK settings key → model field.  Only these keys are merged from updates.
_SETTINGS_KEYS: dict[str, str] = {
    "mode": "mode",
    "targetId": "manual_target_id",
    "autoAssignId": "auto_slot_id",
    "toggleName": "toggle_name",
}


class DisplayContext(BaseModel):
    """One physical button's configuration.

    ``manual_target_id`` and ``auto_slot_id`` travel as ``targetId`` and
    ``autoAssignId`` in the deck's persisted settings.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    context_id: str = Field(alias="contextId")
    kind: ContextKind = ContextKind.LINE
    mode: ContextMode | None = None
    manual_target_id: str | None = Field(default=None, alias="targetId")
    auto_slot_id: str | None = Field(default=None, alias="autoAssignId")
    toggle_name: str | None = Field(default=None, alias="toggleName")

    @property
    def effective_mode(self) -> ContextMode:
        """``manual`` only when explicitly selected; ``auto`` otherwise."""
        return self.mode or ContextMode.AUTO

    @property
    def slot(self) -> str:
        """Trimmed auto slot id (empty string when unset)."""
        return str(self.auto_slot_id or "").strip()

    @classmethod
    def from_settings(
        cls,
        context_id: str,
        kind: ContextKind,
        settings: dict[str, Any] | None,
    ) -> DisplayContext:
        """Build a context from the deck's raw settings dict."""
        return cls(context_id=context_id, kind=kind).merge_settings(settings or {})

    def merge_settings(self, incoming: dict[str, Any]) -> DisplayContext:
        """Return a copy with known keys from *incoming* applied.

        An explicit ``None`` clears a key; an unrecognised mode is ignored.
        """
        changes: dict[str, Any] = {}
        for key, field in _SETTINGS_KEYS.items():
            if key not in incoming:
                continue
            value = incoming[key]
            if field == "mode":
                try:
                    changes[field] = ContextMode(value) if value is not None else None
                except ValueError:
                    continue
            else:
                changes[field] = None if value is None else str(value)
        return self.model_copy(update=changes)

    def to_settings(self) -> dict[str, Any]:
        """Inverse of :meth:`merge_settings`, for persisting back to the deck."""
        out: dict[str, Any] = {}
        for key, field in _SETTINGS_KEYS.items():
            value = getattr(self, field)
            if value is not None:
                out[key] = value.value if isinstance(value, Enum) else value
        return out
