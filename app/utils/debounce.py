"""Cancel-and-reschedule debouncing on the running asyncio loop."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Callable
from typing import Any


class Debouncer:
    """Run ``callback`` once calls have been quiet for ``delay`` seconds.

    Each call cancels the pending timer and starts a new one, so only the
    last arguments are delivered. A callback that has already started is
    left to finish.
    """

    def __init__(self, callback: Callable[..., Any], delay: float) -> None:
        self.callback = callback
        self.delay = delay
        self._timer: asyncio.Task | None = None
        self._running: set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        self.cancel()
        self._timer = asyncio.get_running_loop().create_task(self._wait_then_fire(args, kwargs))

    def cancel(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    async def drain(self) -> None:
        """Wait for the pending timer and any callbacks it started."""
        if self._timer is not None:
            try:
                await self._timer
            except asyncio.CancelledError:
                pass
        if self._running:
            await asyncio.gather(*self._running)

    async def _wait_then_fire(self, args: tuple, kwargs: dict) -> None:
        await asyncio.sleep(self.delay)
        # Detach from the timer slot so a later call cannot cancel the callback
        task = asyncio.get_running_loop().create_task(self._invoke(args, kwargs))
        self._running.add(task)
        task.add_done_callback(self._running.discard)
        self._timer = None

    async def _invoke(self, args: tuple, kwargs: dict) -> None:
        result = self.callback(*args, **kwargs)
        if inspect.isawaitable(result):
            await result
