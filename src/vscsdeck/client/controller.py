"""DeckController — wires deck events to polling, assignment, and commands.

Deck callbacks may fire on SDK threads; every callback is marshalled onto
the controller's asyncio loop via ``asyncio.run_coroutine_threadsafe``.
Blocking bridge calls run in worker threads so the loop keeps ticking.
"""

from __future__ import annotations

import asyncio
import logging
import time
from concurrent.futures import Future
from typing import Any, Callable, Coroutine

from vscsdeck.client.bridge_client import BridgeClient
from vscsdeck.client.poller import ContextPoller
from vscsdeck.client.render import (
    MISSING,
    PICK_TARGET,
    RenderProfile,
    next_frequency_mode,
    render_frequency,
    render_line,
    render_toggle,
)
from vscsdeck.client.slot_assignment import SlotAssignmentEngine, order_lines
from vscsdeck.client.state_store import DeckStateStore
from vscsdeck.core.errors import TransientFetchFailure, VscsDeckError
from vscsdeck.core.interfaces.deck import DeckInterface
from vscsdeck.core.models.context import ContextKind, DisplayContext
from vscsdeck.core.models.snapshot import StateSnapshot, ToggleName
from vscsdeck.core.models.visual import BLANK, ERROR, ButtonVisual
from vscsdeck.log_config.logger import ContextualLogger

_log = logging.getLogger(__name__)


def _wall_clock_ms() -> int:
    return int(time.time() * 1000)


class DeckController:
    """Owns one poller per visible button and turns key presses into commands.

    Args:
        deck: The button surface (real SDK adapter or :class:`MockDeck`).
        client: Bridge HTTP client.
        store: Shared client state.
        profile: Colours, intervals, and label heuristics.
        clock: Wall-clock milliseconds; injectable so flashing is testable.
    """

    def __init__(
        self,
        deck: DeckInterface,
        client: BridgeClient,
        store: DeckStateStore,
        profile: RenderProfile,
        clock: Callable[[], int] = _wall_clock_ms,
    ) -> None:
        self._deck = deck
        self._client = client
        self._store = store
        self._profile = profile
        self._clock = clock
        self._engine = SlotAssignmentEngine(store)
        self._pollers: dict[str, ContextPoller] = {}
        self._loop: asyncio.AbstractEventLoop | None = None

    @property
    def store(self) -> DeckStateStore:
        return self._store

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def attach(self) -> None:
        """Capture the running loop and register deck callbacks.

        Must be called from async code on the loop that will run pollers.
        """
        self._loop = asyncio.get_running_loop()
        self._deck.register_appear_callback(
            lambda cid, kind, settings: self._submit(self.on_appear(cid, kind, settings))
        )
        self._deck.register_disappear_callback(lambda cid: self._submit(self.on_disappear(cid)))
        self._deck.register_settings_callback(
            lambda cid, settings: self._submit(self.on_settings(cid, settings))
        )
        self._deck.register_key_down_callback(lambda cid: self._submit(self.on_key_down(cid)))
        self._deck.register_options_request_callback(
            lambda cid: self._submit(self.on_options_request(cid))
        )
        _log.info("Deck controller attached (profile=%s)", self._profile.name)

    async def close(self) -> None:
        """Stop every poller."""
        for poller in self._pollers.values():
            poller.stop()
        self._pollers.clear()
        _log.info("Deck controller closed")

    def _submit(self, coro: Coroutine[Any, Any, None]) -> Future[None]:
        assert self._loop is not None, "DeckController.attach() has not been called"
        return asyncio.run_coroutine_threadsafe(coro, self._loop)

    # ------------------------------------------------------------------
    # Deck events
    # ------------------------------------------------------------------

    async def on_appear(self, context_id: str, kind: ContextKind, settings: dict[str, Any]) -> None:
        context = DisplayContext.from_settings(context_id, kind, settings)
        self._store.insert(context)

        poller = self._pollers.pop(context_id, None)
        if poller is not None:
            poller.stop()
        poller = ContextPoller(context_id, self.refresh, self._profile.poll_interval(kind.value))
        self._pollers[context_id] = poller
        poller.start()

        await self.refresh(context_id)

    async def on_disappear(self, context_id: str) -> None:
        poller = self._pollers.pop(context_id, None)
        if poller is not None:
            poller.stop()
        self._store.remove(context_id)

    async def on_settings(self, context_id: str, incoming: dict[str, Any]) -> None:
        current = self._store.get(context_id)
        if current is None:
            _log.debug("Settings for unknown context %s ignored", context_id)
            return
        context = current.merge_settings(incoming)
        self._store.update(context)
        self._deck.persist_settings(context_id, context.to_settings())
        await self.refresh(context_id)

    async def on_key_down(self, context_id: str) -> None:
        context = self._store.get(context_id)
        if context is None:
            return
        log = ContextualLogger(_log, context=context_id, kind=context.kind.value)

        if context.kind is ContextKind.LINE:
            await self._press_line(context, log)
        elif context.kind is ContextKind.FREQUENCY:
            await self._press_frequency(context, log)
        else:
            await self._press_toggle(context, log)

    async def on_options_request(self, context_id: str) -> None:
        options = await self.line_options()
        self._deck.send_to_inspector(context_id, {"type": "options", "options": options})

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------

    async def refresh(self, context_id: str) -> None:
        """Fetch state and re-render one button."""
        context = self._store.get(context_id)
        if context is None or not self._store.is_visible(context_id):
            return
        log = ContextualLogger(_log, context=context_id, kind=context.kind.value)

        if context.kind is ContextKind.FREQUENCY and not context.manual_target_id:
            self._show(context_id, PICK_TARGET)
            return

        snapshot = await self._fetch(log)
        if not self._store.is_visible(context_id):
            return
        if snapshot is None:
            previous = self._store.last_visual(context_id)
            if previous is None or previous.is_blank:
                self._show(context_id, ERROR)
            return

        if context.kind is ContextKind.LINE:
            visual = self._line_visual(context, snapshot)
        elif context.kind is ContextKind.FREQUENCY:
            visual = self._frequency_visual(context, snapshot)
        else:
            visual = render_toggle(_toggle_name(context), snapshot.toggles, self._profile)
        self._show(context_id, visual)

    def _line_visual(self, context: DisplayContext, snapshot: StateSnapshot) -> ButtonVisual:
        lines_by_id = snapshot.lines_by_id()
        self._engine.update_assignments(snapshot.lines)
        target = self._engine.resolve_target(context, lines_by_id)
        self._store.set_resolved_target(context.context_id, target)
        if target is None:
            return BLANK
        return render_line(lines_by_id[target], self._profile, self._clock())

    def _frequency_visual(self, context: DisplayContext, snapshot: StateSnapshot) -> ButtonVisual:
        freq = snapshot.find_frequency(context.manual_target_id or "")
        if freq is None:
            return MISSING
        return render_frequency(freq, self._profile)

    async def line_options(self) -> list[dict[str, str]]:
        """Ordered target choices for a line button's settings panel."""
        snapshot = await self._fetch(ContextualLogger(_log, context="options"))
        if snapshot is None:
            return []
        options = []
        for line in order_lines(snapshot.lines):
            code, friendly = self._profile.formatter.label_for(line.name)
            options.append(
                {
                    "id": line.id,
                    "label": f"{code} - {friendly}",
                    "detail": line.category.value,
                    "type": line.category.value,
                }
            )
        return options

    # ------------------------------------------------------------------
    # Key presses
    # ------------------------------------------------------------------

    async def _press_line(self, context: DisplayContext, log: ContextualLogger) -> None:
        target = self._store.resolved_target(context.context_id) or context.manual_target_id
        if not target:
            return
        try:
            action = await asyncio.to_thread(self._client.toggle_line, target)
        except VscsDeckError as exc:
            log.warning("Line toggle for %s failed: %s", target, exc)
            return
        log.info("Line %s → %s", target, action.value if action else "?")
        await self.refresh(context.context_id)

    async def _press_frequency(self, context: DisplayContext, log: ContextualLogger) -> None:
        target = context.manual_target_id
        if not target:
            self._show(context.context_id, PICK_TARGET)
            return
        try:
            snapshot = await asyncio.to_thread(self._client.fetch_state)
            freq = snapshot.find_frequency(target)
            if freq is None:
                self._show(context.context_id, MISSING)
                return
            mode = next_frequency_mode(freq)
            await asyncio.to_thread(self._client.set_frequency_mode, target, mode)
        except VscsDeckError as exc:
            log.warning("Frequency command for %s failed: %s", target, exc)
            self._show(context.context_id, ERROR)
            return
        log.info("Frequency %s → %s", target, mode.value)
        await self.refresh(context.context_id)

    async def _press_toggle(self, context: DisplayContext, log: ContextualLogger) -> None:
        name = _toggle_name(context)
        try:
            await asyncio.to_thread(self._client.toggle_switch, name)
        except VscsDeckError as exc:
            log.warning("Toggle %s failed: %s", name.value, exc)
            self._show(context.context_id, ERROR)
            return
        await self.refresh(context.context_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _fetch(self, log: ContextualLogger) -> StateSnapshot | None:
        try:
            snapshot = await asyncio.to_thread(self._client.fetch_state)
        except TransientFetchFailure as exc:
            log.debug("Fetch failed: %s", exc)
            return None
        self._store.last_snapshot = snapshot
        return snapshot

    def _show(self, context_id: str, visual: ButtonVisual) -> None:
        if not self._store.is_visible(context_id):
            return
        self._store.record_visual(context_id, visual)
        self._deck.show(context_id, visual)


def _toggle_name(context: DisplayContext) -> ToggleName:
    try:
        return ToggleName((context.toggle_name or ToggleName.MUTE.value).lower())
    except ValueError:
        _log.warning("Unknown toggle %r on %s — using mute", context.toggle_name, context.context_id)
        return ToggleName.MUTE
