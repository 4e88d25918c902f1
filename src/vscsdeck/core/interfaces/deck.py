"""Deck surface interface (ABC).

The button-grid SDK owns appear/disappear/settings/key events and the
drawing of images.  The deck client only consumes those events and hands
back :class:`ButtonVisual` values through this interface.  Callbacks may be
invoked from any thread.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable

from vscsdeck.core.models.context import ContextKind
from vscsdeck.core.models.visual import ButtonVisual

AppearCallback = Callable[[str, ContextKind, dict[str, Any]], None]
SettingsCallback = Callable[[str, dict[str, Any]], None]
ContextCallback = Callable[[str], None]


class DeckInterface(ABC):
    """A grid of physical buttons, each identified by a context id."""

    @abstractmethod
    def register_appear_callback(self, callback: AppearCallback) -> None:
        """Register *callback(context_id, kind, settings)* for a button becoming visible."""

    @abstractmethod
    def register_disappear_callback(self, callback: ContextCallback) -> None:
        """Register *callback(context_id)* for a button leaving the screen."""

    @abstractmethod
    def register_settings_callback(self, callback: SettingsCallback) -> None:
        """Register *callback(context_id, partial_settings)* for settings edits."""

    @abstractmethod
    def register_key_down_callback(self, callback: ContextCallback) -> None:
        """Register *callback(context_id)* for a key press."""

    @abstractmethod
    def register_options_request_callback(self, callback: ContextCallback) -> None:
        """Register *callback(context_id)* for a settings panel asking for target options."""

    @abstractmethod
    def show(self, context_id: str, visual: ButtonVisual) -> None:
        """Render *visual* on the button *context_id*."""

    @abstractmethod
    def persist_settings(self, context_id: str, settings: dict[str, Any]) -> None:
        """Store *settings* for *context_id* in the deck's own settings store."""

    @abstractmethod
    def send_to_inspector(self, context_id: str, payload: dict[str, Any]) -> None:
        """Push *payload* to the settings panel of *context_id*."""
