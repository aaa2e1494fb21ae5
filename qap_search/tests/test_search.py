import random

import numpy as np
import pytest

from conftest import IDENTITY_COST, FakeClock, is_permutation
from qap_search.errors import InvalidInstanceError
from qap_search.neighborhoods import apply_swap, swap_neighbors
from qap_search.sampling import PermutationSampler
from qap_search.search import GreedyLocalSearch, RandomSearch, RandomWalk, SteepestLocalSearch
from qap_search.state import SearchStatus


def _is_local_optimum(model, perm):
    cost = model.full_cost(perm)
    return all(model.full_cost(apply_swap(perm, i, j)) >= cost for i, j in swap_neighbors(model.n))


@pytest.mark.parametrize("strategy_cls", [GreedyLocalSearch, SteepestLocalSearch])
def test_descent_from_identity_never_exceeds_golden_cost(golden_model, sampler, strategy_cls):
    result = strategy_cls(golden_model, sampler, time_limit_s=30).run([0, 1, 2, 3])
    assert result.initial_cost == IDENTITY_COST
    assert result.cost <= IDENTITY_COST
    assert result.cost == golden_model.full_cost(result.permutation)
    assert result.status is SearchStatus.CONVERGED
    assert _is_local_optimum(golden_model, result.permutation)


@pytest.mark.parametrize("strategy_cls", [GreedyLocalSearch, SteepestLocalSearch])
def test_descent_on_random_instance_reaches_local_optimum(random_model, sampler, strategy_cls):
    result = strategy_cls(random_model, sampler, time_limit_s=30).run()
    assert is_permutation(result.permutation, random_model.n)
    assert result.cost == random_model.full_cost(result.permutation)
    assert result.cost <= result.initial_cost
    assert _is_local_optimum(random_model, result.permutation)


def test_steepest_takes_the_best_first_move(golden_model, sampler):
    perm = np.arange(4)
    scan = [golden_model.full_cost(apply_swap(perm, i, j)) for i, j in swap_neighbors(4)]
    assert min(scan) < IDENTITY_COST
    # The cap stops the search at the first poll of the second scan.
    result = SteepestLocalSearch(golden_model, sampler, max_iterations=len(scan)).run(perm)
    assert result.steps == 1
    assert result.cost == min(scan)


def test_greedy_takes_the_first_improving_move(golden_model, sampler):
    perm = np.arange(4)
    moves = list(swap_neighbors(4))
    first = next(k for k, (i, j) in enumerate(moves) if golden_model.full_cost(apply_swap(perm, i, j)) < IDENTITY_COST)
    i, j = moves[first]
    result = GreedyLocalSearch(golden_model, sampler, max_iterations=first + 1).run(perm)
    assert result.steps == 1
    assert result.permutation == apply_swap(perm, i, j).tolist()
    assert result.status is SearchStatus.TIMED_OUT


def test_seeded_runs_are_reproducible(random_model):
    first = GreedyLocalSearch(random_model, PermutationSampler(seed=5), time_limit_s=30).run()
    second = GreedyLocalSearch(random_model, PermutationSampler(seed=5), time_limit_s=30).run()
    assert first.as_tuple() == second.as_tuple()


def test_descent_times_out_with_valid_state(random_model, sampler):
    result = SteepestLocalSearch(random_model, sampler, time_limit_s=3, clock=FakeClock(1.0)).run()
    assert result.status is SearchStatus.TIMED_OUT
    assert result.evaluations <= 5
    assert result.cost == random_model.full_cost(result.permutation)


def test_random_search_counts_samples_and_reports_last(random_model):
    result = RandomSearch(random_model, PermutationSampler(seed=8), max_iterations=7).run()
    assert result.steps == 7
    assert result.status is SearchStatus.TIMED_OUT
    assert result.cost == random_model.full_cost(result.permutation)

    replay = PermutationSampler(seed=8)
    samples = [replay.random_permutation(random_model.n).tolist() for _ in range(8)]
    assert result.permutation == samples[-1]


def test_random_walk_swaps_without_evaluating(random_model):
    result = RandomWalk(random_model, PermutationSampler(seed=2), max_iterations=50).run(list(range(8)))
    assert result.steps == 50
    assert is_permutation(result.permutation, random_model.n)
    assert result.cost == random_model.full_cost(result.permutation)
    assert result.initial_cost == random_model.full_cost(list(range(8)))


def test_initial_permutation_is_not_mutated(golden_model, sampler):
    start = [3, 2, 1, 0]
    RandomWalk(golden_model, sampler, max_iterations=20).run(start)
    assert start == [3, 2, 1, 0]


def test_invalid_initial_permutation_is_rejected(golden_model, sampler):
    with pytest.raises(InvalidInstanceError):
        GreedyLocalSearch(golden_model, sampler).run([0, 0, 1, 2])


def test_default_budget_is_a_time_limit(golden_model):
    strategy = GreedyLocalSearch(golden_model, PermutationSampler(rng=random.Random(0)))
    assert strategy.time_limit_s == 60.0
    assert strategy.max_iterations is None


@pytest.mark.parametrize("strategy_cls", [RandomSearch, RandomWalk])
def test_baselines_stop_on_the_clock(random_model, strategy_cls):
    # The clock reads 1, 2, ... at the successive polls; the 31st poll is past the limit.
    result = strategy_cls(random_model, PermutationSampler(seed=6), time_limit_s=30, clock=FakeClock(1.0)).run()
    assert result.status is SearchStatus.TIMED_OUT
    assert result.evaluations == 30
    assert result.steps == 30
    assert result.cost == random_model.full_cost(result.permutation)


def test_evaluations_count_only_performed_iterations(random_model):
    result = RandomSearch(random_model, PermutationSampler(seed=8), max_iterations=7).run()
    assert result.evaluations == result.steps == 7
