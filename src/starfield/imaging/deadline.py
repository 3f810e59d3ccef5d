"""Cooperative time budget for star detection.

Detection polls the deadline between units of work (after the scan,
before each clustering seed, after clustering). Nothing is interrupted
mid-flight; an expired deadline only prevents the next unit from starting.
"""

import time
from typing import Callable, Optional, Union

from starfield.errors import DetectionTimeout

__all__ = ['Deadline']


class Deadline:
    """A time budget measured on a monotonic clock.

    Parameters
    ----------
    budget_sec : float
        Seconds available from construction.
    clock : callable, optional
        Returns the current time in seconds (default ``time.monotonic``).
        Tests inject a fake clock.
    """

    def __init__(self, budget_sec: float, clock: Callable[[], float] = time.monotonic):
        self.budget_sec = float(budget_sec)
        self._clock = clock
        self._start = clock()

    @classmethod
    def coerce(cls, deadline: Optional[Union["Deadline", float]], default_sec: float) -> "Deadline":
        """Accept a Deadline, a number of seconds, or None (use the default budget)."""
        if isinstance(deadline, Deadline):
            return deadline
        if deadline is None:
            return cls(default_sec)
        return cls(float(deadline))

    def elapsed(self) -> float:
        return self._clock() - self._start

    def expired(self) -> bool:
        return self.elapsed() > self.budget_sec

    def check(self, phase: str) -> None:
        """Raise DetectionTimeout if the budget is spent."""
        elapsed = self.elapsed()
        if elapsed > self.budget_sec:
            raise DetectionTimeout(phase, elapsed, self.budget_sec)
