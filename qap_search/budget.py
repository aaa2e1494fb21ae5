"""Stopping budget shared by the search strategies."""
from __future__ import annotations

import time
from typing import Callable


class SearchBudget:
    """Wall-clock deadline and/or iteration cap.

    Strategies call :meth:`poll` once per inner-loop iteration; it counts the
    iteration and reports whether the run must stop. The clock is injectable
    so that tests can drive time explicitly.
    """

    def __init__(
        self,
        time_limit_s: float | None = None,
        max_iterations: int | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        if time_limit_s is None and max_iterations is None:
            raise ValueError("A time limit or an iteration cap is required")
        if time_limit_s is not None and time_limit_s < 0:
            raise ValueError("time_limit_s must be >= 0")
        if max_iterations is not None and max_iterations < 0:
            raise ValueError("max_iterations must be >= 0")
        self.time_limit_s = time_limit_s
        self.max_iterations = max_iterations
        self.clock = clock
        self.iterations = 0
        self._start: float | None = None

    def start(self) -> "SearchBudget":
        self.iterations = 0
        self._start = self.clock()
        return self

    @property
    def elapsed(self) -> float:
        if self._start is None:
            return 0.0
        return self.clock() - self._start

    def poll(self) -> bool:
        """True once a limit is reached; otherwise count one iteration and return False.

        The poll that ends the run is not counted, so :attr:`iterations` is the
        number of iterations actually performed.
        """
        if self._start is None:
            self.start()
        if self.max_iterations is not None and self.iterations >= self.max_iterations:
            return True
        if self.time_limit_s is not None and self.elapsed > self.time_limit_s:
            return True
        self.iterations += 1
        return False
