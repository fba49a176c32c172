"""
Cancellable delayed calls on the running event loop.

Used for the two timers a wheel game owns: delivering a spin outcome after the
presentation delay, and re-triggering the next spin when auto-spin is on.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger("party_wheel.services.spin_scheduler")


class DeferredCall:
    """
    At most one pending delayed coroutine call.

    Starting a new call cancels the pending one. Cancelling guarantees the
    callback does not run if it has not started yet.
    """

    def __init__(self, name: str):
        self.name = name
        self._task: asyncio.Task | None = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, delay: float, callback: Callable[[], Awaitable[None]]) -> asyncio.Task:
        """Schedule callback after delay seconds. Requires a running event loop."""
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._run_after_delay(delay, callback))
        return self._task

    async def _run_after_delay(self, delay: float, callback: Callable[[], Awaitable[None]]) -> None:
        try:
            await asyncio.sleep(delay)
            await callback()
        except asyncio.CancelledError:
            return
        except Exception as exc:
            logger.error(f"Deferred call '{self.name}' failed: {exc}", exc_info=True)

    def cancel(self) -> bool:
        """
        Cancel the pending call.

        Returns:
            True if a call was pending and is now cancelled
        """
        task, self._task = self._task, None
        if task is None or task.done():
            return False
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        if task is current:
            # Cancelling from inside the callback; it is already running
            return False
        task.cancel()
        return True
