"""Injectable time source for the poll loop and the elapsed-time ticker."""

import asyncio
import time
from typing import Protocol


class Clock(Protocol):
    """Monotonic time reading plus a non-blocking sleep."""

    def now(self) -> float:
        """Seconds on a monotonic scale; only differences are meaningful."""

    async def sleep(self, seconds: float) -> None:
        """Suspend the calling task for ``seconds``."""


class MonotonicClock:
    """Real clock: ``time.monotonic`` and ``asyncio.sleep``."""

    def now(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)
