"""Name-based construction of strategies from a :class:`SearchConfig`."""
from __future__ import annotations

import time
from typing import Callable, Dict, Type

import numpy as np

from .annealing import SimulatedAnnealing
from .config import SearchConfig
from .cost import CostModel
from .heuristics import constructive_permutation
from .sampling import PermutationSampler
from .search import (
    GreedyLocalSearch,
    RandomSearch,
    RandomWalk,
    SearchStrategy,
    SteepestLocalSearch,
)
from .tabu import TabuSearch
from .temperature import estimate_initial_temperature
from .utils import LOGGER

STRATEGIES: Dict[str, Type[SearchStrategy]] = {
    cls.name: cls
    for cls in (
        RandomSearch,
        RandomWalk,
        GreedyLocalSearch,
        SteepestLocalSearch,
        SimulatedAnnealing,
        TabuSearch,
    )
}


def build_strategy(
    name: str,
    model: CostModel,
    sampler: PermutationSampler,
    config: SearchConfig,
    clock: Callable[[], float] = time.perf_counter,
) -> SearchStrategy:
    """Instantiate the strategy registered under ``name``.

    Annealing without an explicit ``initial_temperature`` gets one estimated
    from the instance with the same sampler.
    """
    if name not in STRATEGIES:
        raise ValueError(f"Unknown algorithm {name!r}; choose from {sorted(STRATEGIES)}")
    cls = STRATEGIES[name]
    budget_kwargs = dict(
        time_limit_s=config.time_limit_s,
        max_iterations=config.max_iterations,
        clock=clock,
    )
    if cls is SimulatedAnnealing:
        temperature = config.initial_temperature
        if temperature is None:
            temperature = estimate_initial_temperature(
                model,
                sampler,
                trials=config.temperature_trials,
                acceptance=config.acceptance_probability,
            )
            LOGGER.info("Estimated initial temperature: %.3f", temperature)
        return SimulatedAnnealing(
            model,
            sampler,
            initial_temperature=temperature,
            cooling=config.cooling,
            **budget_kwargs,
        )
    if cls is TabuSearch:
        return TabuSearch(model, sampler, tenure=config.tabu_tenure, **budget_kwargs)
    return cls(model, sampler, **budget_kwargs)


def initial_permutation(model: CostModel, config: SearchConfig) -> np.ndarray | None:
    """Starting point requested by ``config.init``; ``None`` lets the strategy sample one."""
    if config.init == "heuristic":
        return constructive_permutation(model)
    return None
