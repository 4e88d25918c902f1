"""Deck panel — a browser-rendered button grid for development without hardware.

Draws one square per configured button from the visuals the controller
hands to :class:`MockDeck`, and routes clicks and settings edits back
through the mock's ``simulate_*`` helpers so the full appear → poll →
render → key-down flow is exercised exactly as on a real deck.
"""

from __future__ import annotations

import asyncio
import logging as _logging
from typing import Any

from nicegui import ui

from vscsdeck.core.models.config import ButtonConfig
from vscsdeck.core.models.visual import ButtonVisual
from vscsdeck.deck.mock_deck import MockDeck

_log = _logging.getLogger(__name__)

_BUTTON_SIZE = 96
_REFRESH_SECONDS = 0.1


def button_style(visual: ButtonVisual | None) -> str:
    """CSS for one simulated key."""
    visual = visual or ButtonVisual()
    border = f"3px solid {visual.border}" if visual.border else "3px solid #222222"
    return (
        f"background: {visual.background} !important; color: {visual.text_color}; "
        f"border: {border}; width: {_BUTTON_SIZE}px; height: {_BUTTON_SIZE}px; "
        "border-radius: 8px; font-size: 12px; font-weight: bold; "
        "white-space: pre-line; line-height: 1.2; padding: 2px;"
    )


def button_text(visual: ButtonVisual | None) -> str:
    if visual is None:
        return ""
    if visual.title:
        return visual.title
    return "\n".join(part for part in visual.label if part)


class DeckPanel:
    """Button grid plus a minimal settings inspector.

    Args:
        deck: The :class:`MockDeck` the controller renders into.
        buttons: Button layout (context id, kind, initial settings).
        columns: Grid width.
    """

    def __init__(self, deck: MockDeck, buttons: list[ButtonConfig], columns: int = 5) -> None:
        self._deck = deck
        self._buttons = buttons
        self._columns = columns
        self._keys: dict[str, ui.button] = {}
        self._rendered: dict[str, ButtonVisual | None] = {}
        self._visible: dict[str, bool] = {b.context_id: True for b in buttons}

        self._inspector_context: str | None = None
        self._target_select: ui.select | None = None

    def build(self) -> None:
        """Render the grid and inspector into the current page."""
        with ui.column().classes("items-center").style("gap: 12px; padding: 12px;"):
            ui.label("VSCS DECK").style("color: #888888; font-size: 12px; font-weight: bold;")
            with ui.grid(columns=self._columns).style("gap: 8px;"):
                for button in self._buttons:
                    self._build_key(button)
            ui.separator().style("background: #444444; margin: 0;")
            self._build_inspector()

        ui.timer(_REFRESH_SECONDS, self._sync_keys)

    # ------------------------------------------------------------------
    # Build sections
    # ------------------------------------------------------------------

    def _build_key(self, button: ButtonConfig) -> None:
        cid = button.context_id
        with ui.column().classes("items-center").style("gap: 2px;"):
            key = ui.button(
                "",
                on_click=lambda _, c=cid: self._on_key_click(c),
            ).style(button_style(None)).tooltip(f"{cid} ({button.kind})")
            self._keys[cid] = key
            ui.switch(
                value=True,
                on_change=lambda e, c=cid: self._on_visibility_change(c, bool(e.value)),
            ).style("font-size: 10px; color: #ffffff;").tooltip("Show on deck")

    def _build_inspector(self) -> None:
        """Settings editor for a single button."""
        ids = [b.context_id for b in self._buttons]
        with ui.row().classes("items-center").style("gap: 10px;"):
            ui.select(
                ids,
                label="Button",
                on_change=lambda e: self._on_inspect(e.value),
            ).style("min-width: 140px;")
            ui.select(
                ["auto", "manual"],
                label="Mode",
                on_change=lambda e: self._apply_settings({"mode": e.value}),
            ).style("min-width: 100px;")
            slot = ui.input(label="Auto slot").style("width: 90px;")
            ui.button(
                "Set slot",
                on_click=lambda _: self._apply_settings({"autoAssignId": slot.value or None}),
            )
            self._target_select = ui.select(
                {},
                label="Target",
                on_change=lambda e: self._apply_settings({"targetId": e.value}),
            ).style("min-width: 220px;")

    # ------------------------------------------------------------------
    # Actions (route through the mock deck)
    # ------------------------------------------------------------------

    def _on_key_click(self, context_id: str) -> None:
        if not self._visible.get(context_id, False):
            return
        self._deck.simulate_key_down(context_id)

    def _on_visibility_change(self, context_id: str, visible: bool) -> None:
        self._visible[context_id] = visible
        if visible:
            kind = self._deck.kinds.get(context_id)
            if kind is not None:
                self._deck.simulate_appear(context_id, kind)
        else:
            self._deck.simulate_disappear(context_id)

    async def _on_inspect(self, context_id: str | None) -> None:
        self._inspector_context = context_id
        if context_id is None or self._target_select is None:
            return
        future = self._deck.simulate_options_request(context_id)
        if future is not None:
            await asyncio.wrap_future(future)
        options = self._deck.last_options(context_id) or []
        self._target_select.options = {opt["id"]: opt["label"] for opt in options}
        self._target_select.update()

    def _apply_settings(self, partial: dict[str, Any]) -> None:
        if self._inspector_context is None:
            ui.notify("Pick a button first")
            return
        self._deck.simulate_settings(self._inspector_context, partial)

    # ------------------------------------------------------------------
    # Timer
    # ------------------------------------------------------------------

    def _sync_keys(self) -> None:
        """Push changed visuals to the browser."""
        for cid, key in self._keys.items():
            visual = self._deck.visuals.get(cid)
            if self._rendered.get(cid, ButtonVisual()) == visual:
                continue
            self._rendered[cid] = visual
            try:
                key.text = button_text(visual)
                key.style(replace=button_style(visual))
            except RuntimeError:
                _log.debug("key %s client gone, ignoring update", cid)
