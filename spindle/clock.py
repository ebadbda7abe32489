"""Recurring animation tick on the asyncio event loop."""

from __future__ import annotations

import asyncio
from collections.abc import Callable


class AnimationClock:
    """Calls `on_tick` every `interval` milliseconds until stopped.

    Each tick is armed with `loop.call_later`. A pending timer handle does not
    keep `asyncio.run()` (or the process) alive: once the main coroutine
    returns, the loop closes and the remaining tick is simply dropped.
    """

    def __init__(self, interval: int, on_tick: Callable[[], None]):
        self.interval = interval
        self.on_tick = on_tick
        self._loop: asyncio.AbstractEventLoop | None = None
        self._handle: asyncio.TimerHandle | None = None

    @property
    def running(self) -> bool:
        return self._handle is not None

    def start(self, loop: asyncio.AbstractEventLoop) -> None:
        if self.running:
            return
        self._loop = loop
        self._arm()

    def stop(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._loop = None

    def _arm(self) -> None:
        assert self._loop is not None
        self._handle = self._loop.call_later(self.interval / 1000, self._fire)

    def _fire(self) -> None:
        # Re-arm first so on_tick may stop the clock.
        self._arm()
        self.on_tick()
