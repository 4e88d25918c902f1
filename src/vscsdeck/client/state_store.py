"""Process-wide client state, held in one explicit object.

Nothing here is authoritative: it is the deck's short-lived view of the
bridge, rebuilt from polls and thrown away on restart.  Mappings that other
code reads while a refresh is in flight (slot assignments) are replaced
wholesale, never patched, so a reader sees either the previous complete
mapping or the next one.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from vscsdeck.core.models.context import ContextKind, ContextMode, DisplayContext
from vscsdeck.core.models.snapshot import StateSnapshot
from vscsdeck.core.models.visual import ButtonVisual

_log = logging.getLogger(__name__)


class DeckStateStore:
    """Contexts, resolved targets, slot assignments, and the last snapshot.

    Args:
        retain_on_disappear: Keep a hidden context's settings so its auto
            slot keeps participating in assignment ordering.
    """

    def __init__(self, retain_on_disappear: bool = True) -> None:
        self._retain = retain_on_disappear
        self._contexts: dict[str, DisplayContext] = {}
        self._visible: set[str] = set()
        self._resolved: dict[str, str] = {}
        self._visuals: dict[str, ButtonVisual] = {}
        self._assignments: Mapping[str, str] = MappingProxyType({})
        self.last_snapshot: StateSnapshot | None = None

    # ------------------------------------------------------------------
    # Context lifecycle
    # ------------------------------------------------------------------

    def insert(self, context: DisplayContext) -> None:
        """Register a context that just became visible."""
        self._contexts[context.context_id] = context
        self._visible.add(context.context_id)

    def update(self, context: DisplayContext) -> None:
        """Replace a context's settings (it stays visible if it was)."""
        self._contexts[context.context_id] = context

    def remove(self, context_id: str) -> None:
        """Forget per-context render state for a context that disappeared."""
        self._visible.discard(context_id)
        self._resolved.pop(context_id, None)
        self._visuals.pop(context_id, None)
        if not self._retain:
            self._contexts.pop(context_id, None)
        _log.debug("Context %s removed (settings retained=%s)", context_id, self._retain)

    def get(self, context_id: str) -> DisplayContext | None:
        return self._contexts.get(context_id)

    def is_visible(self, context_id: str) -> bool:
        return context_id in self._visible

    @property
    def visible_contexts(self) -> list[DisplayContext]:
        return [self._contexts[cid] for cid in self._visible if cid in self._contexts]

    # ------------------------------------------------------------------
    # Slot assignment
    # ------------------------------------------------------------------

    def active_auto_slots(self) -> set[str]:
        """Distinct non-empty slots declared by line contexts in auto mode."""
        return {
            ctx.slot
            for ctx in self._contexts.values()
            if ctx.kind is ContextKind.LINE and ctx.effective_mode is ContextMode.AUTO and ctx.slot
        }

    @property
    def assignments(self) -> Mapping[str, str]:
        """Read-only view of the current ``slot -> line id`` mapping."""
        return self._assignments

    def replace_assignments(self, mapping: Mapping[str, str]) -> None:
        self._assignments = MappingProxyType(dict(mapping))

    # ------------------------------------------------------------------
    # Per-context render state
    # ------------------------------------------------------------------

    def resolved_target(self, context_id: str) -> str | None:
        return self._resolved.get(context_id)

    def set_resolved_target(self, context_id: str, target_id: str | None) -> None:
        if target_id is None:
            self._resolved.pop(context_id, None)
        else:
            self._resolved[context_id] = target_id

    def last_visual(self, context_id: str) -> ButtonVisual | None:
        return self._visuals.get(context_id)

    def record_visual(self, context_id: str, visual: ButtonVisual) -> None:
        self._visuals[context_id] = visual
