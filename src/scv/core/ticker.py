"""Fixed-period frame pacing."""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


class FrameTicker:
    """Monotonic frame scheduler.

    Deadlines advance by exactly one period, so time spent working inside a
    frame does not accumulate as drift. A frame that overran its deadline
    ticks again at once and the schedule restarts from now.
    """

    def __init__(
        self,
        period: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.period = period
        self._clock = clock
        self._sleep = sleep
        self._deadline = clock() + period
        self._last = clock()
        self.missed = 0

    def delta(self) -> float:
        """Seconds since the previous call."""
        now = self._clock()
        elapsed = now - self._last
        self._last = now
        return max(elapsed, 0.0)

    def set_period(self, period: float) -> None:
        self.period = period
        self._deadline = self._clock() + period

    async def tick(self) -> None:
        """Sleep until the next frame boundary."""
        now = self._clock()
        if self._deadline <= now:
            self.missed += 1
            self._deadline = now + self.period
            await self._sleep(0)
            return
        delay = self._deadline - now
        self._deadline += self.period
        await self._sleep(delay)
