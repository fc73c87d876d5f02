# lanebattle/clock.py
from __future__ import annotations

from typing import Optional

from lanebattle.config import MAX_TICKS_PER_STEP, TICK_MS


class TickClock:
    """
    Turns wall-clock time (seconds, e.g. time.monotonic()) into whole ticks.

    The fractional remainder is carried to the next call, so the simulation
    only ever sees integer tick counts no matter how uneven the frame timing
    is. Once stopped the clock yields nothing until reset().
    """

    def __init__(self, tick_ms: float = TICK_MS, max_ticks: Optional[int] = MAX_TICKS_PER_STEP) -> None:
        if tick_ms <= 0:
            raise ValueError("tick_ms must be positive")
        self.tick_ms = tick_ms
        self.max_ticks = max_ticks
        self._last: Optional[float] = None
        self._carry_ms = 0.0
        self._stopped = False
        self.total_ticks = 0

    @property
    def stopped(self) -> bool:
        return self._stopped

    def start(self, now: float) -> None:
        self._last = now
        self._carry_ms = 0.0

    def stop(self) -> None:
        self._stopped = True

    def reset(self) -> None:
        self._last = None
        self._carry_ms = 0.0
        self._stopped = False
        self.total_ticks = 0

    def consume(self, now: float) -> int:
        """Whole ticks elapsed since the previous call (first call primes)."""
        if self._stopped:
            return 0
        if self._last is None:
            self.start(now)
            return 0

        elapsed_ms = max(0.0, (now - self._last) * 1000.0) + self._carry_ms
        self._last = now

        ticks = int(elapsed_ms // self.tick_ms)
        self._carry_ms = elapsed_ms - ticks * self.tick_ms

        if self.max_ticks is not None and ticks > self.max_ticks:
            # Drop the backlog instead of stalling to catch up
            ticks = self.max_ticks
            self._carry_ms = 0.0

        self.total_ticks += ticks
        return ticks
