"""Tunable parameters of the search strategies."""
from __future__ import annotations

from dataclasses import dataclass

DEFAULT_TIME_LIMIT_S = 60.0
TABU_TIME_LIMIT_S = 10.0
TABU_TENURE = 5
COOLING_FACTOR = 0.8
TEMPERATURE_TRIALS = 10_000
ACCEPTANCE_PROBABILITY = 0.9

INIT_MODES = ("random", "heuristic")


@dataclass
class SearchConfig:
    """Settings for one or more strategy runs.

    ``time_limit_s`` and ``max_iterations`` left at ``None`` fall back to the
    strategy's own default time limit. ``initial_temperature`` left at
    ``None`` is estimated from the instance before annealing starts.
    """

    time_limit_s: float | None = None
    max_iterations: int | None = None
    seed: int | None = None
    init: str = "random"
    runs: int = 1
    tabu_tenure: int = TABU_TENURE
    cooling: float = COOLING_FACTOR
    temperature_trials: int = TEMPERATURE_TRIALS
    acceptance_probability: float = ACCEPTANCE_PROBABILITY
    initial_temperature: float | None = None

    def __post_init__(self) -> None:
        if self.init not in INIT_MODES:
            raise ValueError(f"init must be one of {INIT_MODES}, got {self.init!r}")
        if self.runs < 1:
            raise ValueError("runs must be >= 1")
        if self.tabu_tenure < 1:
            raise ValueError("tabu_tenure must be >= 1")
        if not 0.0 < self.cooling < 1.0:
            raise ValueError("cooling must lie strictly between 0 and 1")
