"""Mock button deck for development and testing.

Implements :class:`~vscsdeck.core.interfaces.deck.DeckInterface` with
in-memory state and ``simulate_*()`` helpers for the deck panel and tests.
"""

from __future__ import annotations

import logging
from typing import Any

from vscsdeck.core.interfaces.deck import (
    AppearCallback,
    ContextCallback,
    DeckInterface,
    SettingsCallback,
)
from vscsdeck.core.models.context import ContextKind
from vscsdeck.core.models.visual import ButtonVisual

_log = logging.getLogger(__name__)


class MockDeck(DeckInterface):
    """In-memory deck.

    Attributes:
        visuals: Last visual shown per context.
        shown: Every ``(context_id, visual)`` pair in the order shown.
        settings: Settings persisted per context.
        inspector_messages: ``(context_id, payload)`` pairs sent to settings panels.
    """

    def __init__(self) -> None:
        self._appear: AppearCallback | None = None
        self._disappear: ContextCallback | None = None
        self._settings_changed: SettingsCallback | None = None
        self._key_down: ContextCallback | None = None
        self._options_request: ContextCallback | None = None

        self.visuals: dict[str, ButtonVisual] = {}
        self.shown: list[tuple[str, ButtonVisual]] = []
        self.settings: dict[str, dict[str, Any]] = {}
        self.kinds: dict[str, ContextKind] = {}
        self.inspector_messages: list[tuple[str, dict[str, Any]]] = []

    # -- DeckInterface --

    def register_appear_callback(self, callback: AppearCallback) -> None:
        self._appear = callback

    def register_disappear_callback(self, callback: ContextCallback) -> None:
        self._disappear = callback

    def register_settings_callback(self, callback: SettingsCallback) -> None:
        self._settings_changed = callback

    def register_key_down_callback(self, callback: ContextCallback) -> None:
        self._key_down = callback

    def register_options_request_callback(self, callback: ContextCallback) -> None:
        self._options_request = callback

    def show(self, context_id: str, visual: ButtonVisual) -> None:
        self.visuals[context_id] = visual
        self.shown.append((context_id, visual))

    def persist_settings(self, context_id: str, settings: dict[str, Any]) -> None:
        self.settings[context_id] = dict(settings)

    def send_to_inspector(self, context_id: str, payload: dict[str, Any]) -> None:
        self.inspector_messages.append((context_id, payload))

    # -- Simulation helpers --

    def simulate_appear(
        self,
        context_id: str,
        kind: ContextKind | str,
        settings: dict[str, Any] | None = None,
    ) -> Any:
        """Place a button on screen.  Previously persisted settings are reused."""
        kind = ContextKind(kind)
        self.kinds[context_id] = kind
        if settings is not None:
            self.settings[context_id] = dict(settings)
        if self._appear is None:
            _log.debug("No appear callback registered")
            return None
        return self._appear(context_id, kind, dict(self.settings.get(context_id, {})))

    def simulate_disappear(self, context_id: str) -> Any:
        """Take a button off screen (page switch, removal)."""
        self.visuals.pop(context_id, None)
        if self._disappear is None:
            _log.debug("No disappear callback registered")
            return None
        return self._disappear(context_id)

    def simulate_settings(self, context_id: str, partial: dict[str, Any]) -> Any:
        """Send a partial settings edit from the settings panel."""
        if self._settings_changed is None:
            _log.debug("No settings callback registered")
            return None
        return self._settings_changed(context_id, dict(partial))

    def simulate_key_down(self, context_id: str) -> Any:
        """Press the button *context_id*."""
        if self._key_down is None:
            _log.debug("No key-down callback registered")
            return None
        return self._key_down(context_id)

    def simulate_options_request(self, context_id: str) -> Any:
        """Open the settings panel of *context_id* and ask for target options."""
        if self._options_request is None:
            _log.debug("No options-request callback registered")
            return None
        return self._options_request(context_id)

    def last_options(self, context_id: str) -> list[dict[str, Any]] | None:
        """The most recent options list sent to *context_id*'s panel."""
        for cid, payload in reversed(self.inspector_messages):
            if cid == context_id and payload.get("type") == "options":
                return payload.get("options", [])
        return None
