"""Per-context refresh timer.

Each visible button gets its own asyncio task.  The task sleeps for the
interval only after the previous refresh has finished, so a slow fetch
delays that button's next tick and nothing else.  Stopping the task on
disappear is the only lifecycle control.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from vscsdeck.log_config.logger import ContextualLogger

_log = logging.getLogger(__name__)


class ContextPoller:
    """Calls ``refresh(context_id)`` every *interval* seconds.

    Args:
        context_id: The deck button this poller serves.
        refresh: Coroutine function that re-renders the button.
        interval: Seconds between the end of one refresh and the next.
    """

    def __init__(
        self,
        context_id: str,
        refresh: Callable[[str], Awaitable[None]],
        interval: float,
    ) -> None:
        self._context_id = context_id
        self._refresh = refresh
        self._interval = interval
        self._task: asyncio.Task[None] | None = None
        self._log = ContextualLogger(_log, context=context_id)

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start ticking on the running event loop.  No-op if already running."""
        if self.is_running:
            return
        self._task = asyncio.create_task(self._run(), name=f"poll-{self._context_id}")
        self._log.debug("Polling every %.1fs", self._interval)

    def stop(self) -> None:
        """Cancel the timer task."""
        if self._task is not None:
            self._task.cancel()
            self._task = None
            self._log.debug("Polling stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                await self._refresh(self._context_id)
            except Exception:
                self._log.exception("Refresh failed")
