"""Once-per-second tick source for focus sessions."""

from __future__ import annotations

import time
from collections.abc import Callable


class Ticker:
    """Calls a callback at a fixed interval on a monotonic schedule.

    Deadlines are computed from the start time rather than from the last
    wake-up, so a late wake-up is followed by catch-up ticks instead of
    drifting.
    """

    def __init__(
        self,
        interval: float = 1.0,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self._clock = clock
        self._sleep = sleep

    def run(
        self,
        callback: Callable[[], object],
        should_continue: Callable[[], bool],
    ) -> int:
        """Tick until ``should_continue`` returns False.

        Returns:
            Number of ticks delivered
        """
        ticks = 0
        next_deadline = self._clock() + self.interval
        while should_continue():
            delay = next_deadline - self._clock()
            if delay > 0:
                self._sleep(delay)
            if not should_continue():
                break
            callback()
            ticks += 1
            next_deadline += self.interval
        return ticks
