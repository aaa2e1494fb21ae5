"""Initial temperature calibration for simulated annealing."""
from __future__ import annotations

import math

from .cost import CostModel
from .neighborhoods import apply_swap
from .sampling import PermutationSampler
from .utils import LOGGER

DEFAULT_TRIALS = 10_000
DEFAULT_ACCEPTANCE = 0.9


def estimate_initial_temperature(
    model: CostModel,
    sampler: PermutationSampler,
    trials: int = DEFAULT_TRIALS,
    acceptance: float = DEFAULT_ACCEPTANCE,
) -> float:
    """Temperature at which a typical single swap degradation is accepted with
    probability ``acceptance``.

    Each trial draws a random permutation and a random swap and records the
    absolute cost change. With ``diff_mean`` the truncated integer mean of those
    changes, the temperature is ``-diff_mean / ln(acceptance)``.
    """
    if trials <= 0:
        raise ValueError("trials must be strictly positive")
    if not 0.0 < acceptance < 1.0:
        raise ValueError("acceptance must lie strictly between 0 and 1")
    n = model.n
    diff_sum = 0
    for _ in range(trials):
        perm = sampler.random_permutation(n)
        cost = model.full_cost(perm)
        i, j = sampler.random_move(n)
        neighbour = apply_swap(perm, i, j)
        diff_sum += abs(cost - model.delta_cost(cost, perm, neighbour, i, j))
    diff_mean = diff_sum // trials
    temperature = -diff_mean / math.log(acceptance)
    LOGGER.debug("Mean |delta| over %d trials: %d -> T0=%.3f", trials, diff_mean, temperature)
    return temperature
