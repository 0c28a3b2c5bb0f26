"""
Elapsed-time ticker for the in-flight job.

Runs as its own ``asyncio.Task`` next to the poll loop and only reads the
clock; it never touches job state or timeout accounting.
"""

import asyncio
import logging
from collections.abc import Callable

from shorts2text.services.clock import Clock

logger = logging.getLogger(__name__)

BLINK_PERIOD_S = 0.5


def format_elapsed(elapsed_s: float) -> str:
    """Format seconds as ``MM:SS`` (minutes keep growing past 99)."""
    total = max(0, int(elapsed_s))
    return f"{total // 60:02d}:{total % 60:02d}"


def separator_visible(elapsed_s: float) -> bool:
    """Blink state of the ``:`` glyph, toggling every half second."""
    return int(max(0.0, elapsed_s) / BLINK_PERIOD_S) % 2 == 1


class ElapsedTicker:
    """Periodically reports ``(timer_text, separator_visible)`` since ``start()``.

    Args:
        clock: Time source shared with the controller.
        on_tick: Called synchronously with the formatted time and blink state.
        interval: Seconds between ticks.
    """

    def __init__(
        self,
        clock: Clock,
        on_tick: Callable[[str, bool], None],
        interval: float = 0.1,
    ) -> None:
        self._clock = clock
        self._on_tick = on_tick
        self._interval = interval
        self._started_at = 0.0
        self._task: asyncio.Task | None = None
        self._stopping: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def elapsed(self) -> float:
        return self._clock.now() - self._started_at

    def start(self, started_at: float | None = None) -> None:
        """Launch the tick loop on the running event loop."""
        self._started_at = self._clock.now() if started_at is None else started_at
        self._task = asyncio.create_task(self._run())

    def stop(self) -> str:
        """Cancel the tick loop and return the final ``MM:SS`` reading.

        The loop is suspended in ``sleep`` (or not yet started) whenever this
        runs, so no tick is delivered after ``stop()`` returns. Call
        ``aclose()`` to wait for the cancelled task to finish.
        """
        if self._task is not None:
            self._task.cancel()
            self._stopping = self._task
            self._task = None
        return format_elapsed(self.elapsed())

    async def aclose(self) -> None:
        """Stop the loop and wait until its task has fully finished."""
        self.stop()
        task, self._stopping = self._stopping, None
        if task is not None:
            # asyncio.wait never raises the task's CancelledError
            await asyncio.wait([task])

    async def _run(self) -> None:
        while True:
            elapsed = self.elapsed()
            try:
                self._on_tick(format_elapsed(elapsed), separator_visible(elapsed))
            except Exception:
                logger.warning("Ticker callback failed (non-fatal)", exc_info=True)
            await self._clock.sleep(self._interval)
