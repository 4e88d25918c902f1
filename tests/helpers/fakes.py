"""Test helpers — an in-process stand-in for BridgeClient."""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from vscsdeck.bridge.aggregator import BridgeAggregator
from vscsdeck.core.errors import TransientFetchFailure, VscsDeckError
from vscsdeck.core.models.snapshot import FrequencyMode, LineAction, StateSnapshot, ToggleName

_T = TypeVar("_T")


class AggregatorClient:
    """Same surface as :class:`BridgeClient`, served straight from an aggregator.

    Snapshots go through the wire form so aliasing is exercised.  Host faults
    surface as :class:`VscsDeckError`, as a 500 from the real bridge would.
    Set ``fail_fetch`` to make every fetch raise :class:`TransientFetchFailure`.
    """

    def __init__(self, aggregator: BridgeAggregator) -> None:
        self._aggregator = aggregator
        self.fail_fetch = False
        self.fetches = 0

    def fetch_state(self) -> StateSnapshot:
        self.fetches += 1
        if self.fail_fetch:
            raise TransientFetchFailure("Bridge not running")
        return StateSnapshot.model_validate(self._aggregator.build_snapshot().to_wire())

    def set_frequency_mode(self, target_id: str, mode: FrequencyMode | str) -> None:
        self._call(self._aggregator.set_frequency_mode, target_id, getattr(mode, "value", mode))

    def remove_frequency(self, target_id: str) -> None:
        self._call(self._aggregator.remove_frequency, target_id)

    def toggle_line(self, target_id: str) -> LineAction:
        return self._call(self._aggregator.toggle_line, target_id)

    def toggle_switch(self, name: ToggleName | str) -> None:
        self._call(self._aggregator.toggle_switch, getattr(name, "value", name))

    @staticmethod
    def _call(fn: Callable[..., _T], *args: Any) -> _T:
        try:
            return fn(*args)
        except VscsDeckError:
            raise
        except Exception as exc:
            raise VscsDeckError(str(exc)) from exc
