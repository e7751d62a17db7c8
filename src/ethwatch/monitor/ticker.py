"""Fixed-interval ticker with tick coalescing.

Ticks fall on a fixed grid (``t0 + k * interval``). When the consumer is
busy past one or more grid points, a single pending tick is delivered
immediately and the remaining missed ticks are dropped, so a slow consumer
never receives a burst of queued ticks.
"""

import time
from collections.abc import Callable


class IntervalTicker:
    """Coalescing interval ticker.

    The first tick is due one interval after construction.

    Example:
        ticker = IntervalTicker(60.0)
        await asyncio.sleep(ticker.time_until_tick())
        ticker.consume()
    """

    def __init__(
        self,
        interval: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.interval = interval
        self._clock = clock
        self._next_tick = clock() + interval

    @property
    def next_tick(self) -> float:
        """Clock time at which the next tick is due."""
        return self._next_tick

    def time_until_tick(self) -> float:
        """Seconds until the next tick, 0 if a tick is pending."""
        return max(0.0, self._next_tick - self._clock())

    def consume(self) -> None:
        """Consume the pending tick and schedule the next grid point.

        Missed grid points between the pending tick and now are dropped.
        """
        now = self._clock()
        if now < self._next_tick:
            self._next_tick += self.interval
            return

        missed = int((now - self._next_tick) // self.interval)
        self._next_tick += (missed + 1) * self.interval
