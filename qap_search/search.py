"""Baseline and descent strategies over the swap neighbourhood."""
from __future__ import annotations

import time
from typing import Callable, Sequence, Tuple

import numpy as np

from .budget import SearchBudget
from .config import DEFAULT_TIME_LIMIT_S
from .cost import CostModel
from .neighborhoods import swap_in_place, swap_neighbors
from .sampling import PermutationSampler
from .state import SearchResult, SearchState, SearchStatus
from .utils import LOGGER, log_progress


class SearchStrategy:
    """Common driver: seed a state, search until converged or out of budget.

    Subclasses implement :meth:`_search`, which must leave the state either
    ``CONVERGED`` or ``TIMED_OUT``. ``time_limit_s`` and ``max_iterations``
    both left unset fall back to ``default_time_limit_s``.
    """

    name = "search"
    default_time_limit_s: float = DEFAULT_TIME_LIMIT_S

    def __init__(
        self,
        model: CostModel,
        sampler: PermutationSampler | None = None,
        *,
        time_limit_s: float | None = None,
        max_iterations: int | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.model = model
        self.sampler = sampler if sampler is not None else PermutationSampler()
        if time_limit_s is None and max_iterations is None:
            time_limit_s = self.default_time_limit_s
        self.time_limit_s = time_limit_s
        self.max_iterations = max_iterations
        self.clock = clock

    def _initial_state(self, initial: Sequence[int] | None) -> SearchState:
        if initial is None:
            perm = self.sampler.random_permutation(self.model.n)
        else:
            perm = self.model.check_permutation(initial).copy()
        return SearchState(permutation=perm, cost=self.model.full_cost(perm))

    def run(self, initial: Sequence[int] | None = None) -> SearchResult:
        state = self._initial_state(initial)
        budget = SearchBudget(self.time_limit_s, self.max_iterations, self.clock).start()
        LOGGER.info("%s: start n=%d cost=%d", self.name, self.model.n, state.cost)
        state.begin()
        self._search(state, budget)
        permutation, cost = self._reported(state)
        result = SearchResult(
            algorithm=self.name,
            permutation=[int(v) for v in permutation],
            cost=int(cost),
            initial_cost=state.initial_cost,
            steps=state.steps,
            evaluations=budget.iterations,
            elapsed_s=budget.elapsed,
            status=state.status,
        )
        log_progress(self.name, result.initial_cost, result.cost, result.steps)
        return result

    def _search(self, state: SearchState, budget: SearchBudget) -> None:
        raise NotImplementedError

    def _reported(self, state: SearchState) -> Tuple[np.ndarray, int]:
        return state.best_permutation, state.best_cost


class RandomSearch(SearchStrategy):
    """Samples a fresh permutation every iteration.

    Returns the last sample, not the best one: it is a null baseline.
    """

    name = "random-search"

    def _search(self, state: SearchState, budget: SearchBudget) -> None:
        n = self.model.n
        while not budget.poll():
            state.permutation = self.sampler.random_permutation(n)
            state.steps += 1
        state.cost = self.model.full_cost(state.permutation)
        state.status = SearchStatus.TIMED_OUT

    def _reported(self, state: SearchState) -> Tuple[np.ndarray, int]:
        return state.permutation, state.cost


class RandomWalk(SearchStrategy):
    """Applies one random swap per iteration without looking at the cost."""

    name = "random-walk"

    def _search(self, state: SearchState, budget: SearchBudget) -> None:
        n = self.model.n
        while not budget.poll():
            i, j = self.sampler.random_move(n)
            swap_in_place(state.permutation, i, j)
            state.steps += 1
        state.cost = self.model.full_cost(state.permutation)
        state.status = SearchStatus.TIMED_OUT

    def _reported(self, state: SearchState) -> Tuple[np.ndarray, int]:
        return state.permutation, state.cost


class GreedyLocalSearch(SearchStrategy):
    """First improvement: take the first cheaper neighbour, then rescan from the top."""

    name = "greedy"

    def _search(self, state: SearchState, budget: SearchBudget) -> None:
        model = self.model
        improved = True
        while improved:
            improved = False
            for i, j in swap_neighbors(model.n):
                if budget.poll():
                    state.status = SearchStatus.TIMED_OUT
                    return
                neighbour, cost = model.swap_cost(state.cost, state.permutation, i, j)
                if cost < state.cost:
                    state.accept(neighbour, cost)
                    LOGGER.debug("%s: step %d swap (%d, %d) cost=%d", self.name, state.steps, i, j, cost)
                    improved = True
                    break
        state.status = SearchStatus.CONVERGED


class SteepestLocalSearch(SearchStrategy):
    """Best improvement: scan the whole neighbourhood, move to its cheapest member."""

    name = "steepest"

    def _search(self, state: SearchState, budget: SearchBudget) -> None:
        model = self.model
        while True:
            best_neighbour = None
            best_move = None
            best_cost = state.cost
            for i, j in swap_neighbors(model.n):
                if budget.poll():
                    state.status = SearchStatus.TIMED_OUT
                    return
                neighbour, cost = model.swap_cost(state.cost, state.permutation, i, j)
                if cost < best_cost:
                    best_neighbour, best_move, best_cost = neighbour, (i, j), cost
            if best_neighbour is None:
                state.status = SearchStatus.CONVERGED
                return
            state.accept(best_neighbour, best_cost)
            LOGGER.debug("%s: step %d swap %s cost=%d", self.name, state.steps, best_move, best_cost)
