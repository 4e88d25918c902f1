"""Slot assignment: map auto-mode buttons onto the current line list.

Each poll cycle recomputes the whole ``slot -> line id`` mapping from the
declared auto slots and the latest lines, then swaps it into the store in one
assignment.  Hotlines fill slots before coldlines, coldlines before
everything else.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from vscsdeck.client.state_store import DeckStateStore
from vscsdeck.core.models.context import ContextMode, DisplayContext
from vscsdeck.core.models.snapshot import Line, LineCategory

_log = logging.getLogger(__name__)

_CATEGORY_PRIORITY: dict[LineCategory, int] = {
    LineCategory.HOTLINE: 0,
    LineCategory.COLDLINE: 1,
}


def slot_sort_key(slot: str) -> tuple[int, int, str]:
    """Numeric slots ascending, then non-numeric; ties break lexically."""
    try:
        return 0, int(slot), slot
    except ValueError:
        return 1, 0, slot


def line_priority(line: Line) -> int:
    return _CATEGORY_PRIORITY.get(line.category, 2)


def order_lines(lines: Iterable[Line]) -> list[Line]:
    """Category priority, then case-insensitive name, then id."""
    return sorted(lines, key=lambda line: (line_priority(line), line.name.casefold(), line.id))


def compute_assignments(slots: Iterable[str], lines: Iterable[Line]) -> dict[str, str]:
    """Bind each sorted slot to the next unused line.

    A line id is bound to at most one slot; slots beyond the number of
    distinct lines stay unbound.
    """
    assignments: dict[str, str] = {}
    used: set[str] = set()
    candidates = iter(order_lines(lines))
    for slot in sorted(set(slots), key=slot_sort_key):
        line = next((c for c in candidates if c.id not in used), None)
        if line is None:
            break
        used.add(line.id)
        assignments[slot] = line.id
    return assignments


class SlotAssignmentEngine:
    """Keeps the store's slot mapping in step with the latest lines.

    Args:
        store: Shared client state; supplies the declared slots and receives
            the rebuilt mapping.
    """

    def __init__(self, store: DeckStateStore) -> None:
        self._store = store

    def update_assignments(self, lines: Iterable[Line]) -> Mapping[str, str]:
        """Recompute and install the mapping for this cycle; return it."""
        mapping = compute_assignments(self._store.active_auto_slots(), lines)
        self._store.replace_assignments(mapping)
        _log.debug("Slot assignments: %s", mapping)
        return self._store.assignments

    def resolve_target(self, context: DisplayContext, lines_by_id: Mapping[str, Line]) -> str | None:
        """Return the line id *context* represents right now, or ``None``."""
        if context.effective_mode is ContextMode.MANUAL:
            target = context.manual_target_id
            return target if target and target in lines_by_id else None

        slot = context.slot
        if not slot:
            return None
        assigned = self._store.assignments.get(slot)
        return assigned if assigned and assigned in lines_by_id else None
