"""Simulated annealing over the swap neighbourhood."""
from __future__ import annotations

import math

from .budget import SearchBudget
from .config import COOLING_FACTOR
from .cost import CostModel
from .neighborhoods import move_count, swap_neighbors
from .sampling import PermutationSampler
from .search import SearchStrategy
from .state import SearchState, SearchStatus
from .utils import LOGGER


class SimulatedAnnealing(SearchStrategy):
    """Epoch-based annealing with geometric cooling.

    An epoch is ``epoch_length`` scans at a fixed temperature. Each scan walks
    the neighbourhood in canonical order and stops at the first accepted move;
    the next scan starts again from the top. Improving moves are always
    accepted, the others with probability ``exp(-delta / T)``. After every
    epoch the temperature is multiplied by ``cooling``.

    The run ends when the last scan of an epoch leaves the cost unchanged, or
    when ``stall_limit`` candidates in a row have been evaluated without an
    acceptance. By default ``epoch_length`` is n(n-1)/2 and ``stall_limit``
    a quarter of it, so on instances with n <= 4 no move is ever tried.
    """

    name = "annealing"

    def __init__(
        self,
        model: CostModel,
        sampler: PermutationSampler | None = None,
        *,
        initial_temperature: float,
        cooling: float = COOLING_FACTOR,
        epoch_length: int | None = None,
        stall_limit: int | None = None,
        **budget_kwargs,
    ) -> None:
        super().__init__(model, sampler, **budget_kwargs)
        if initial_temperature < 0:
            raise ValueError("initial_temperature must be >= 0")
        if not 0.0 < cooling < 1.0:
            raise ValueError("cooling must lie strictly between 0 and 1")
        moves = move_count(model.n)
        self.initial_temperature = float(initial_temperature)
        self.cooling = cooling
        self.epoch_length = epoch_length if epoch_length is not None else moves
        self.stall_limit = stall_limit if stall_limit is not None else (moves // 2) // 2
        self.temperature = self.initial_temperature
        self.epochs = 0

    def _accepts(self, delta: int, temperature: float) -> bool:
        if delta < 0:
            return True
        if temperature <= 0:
            return False
        return math.exp(-delta / temperature) > self.sampler.random()

    def _search(self, state: SearchState, budget: SearchBudget) -> None:
        model = self.model
        self.temperature = self.initial_temperature
        self.epochs = 0
        stalled = 0
        while True:
            segment_start = state.cost
            for _ in range(self.epoch_length):
                segment_start = state.cost
                for i, j in swap_neighbors(model.n):
                    stalled += 1
                    if budget.poll():
                        state.status = SearchStatus.TIMED_OUT
                        return
                    if stalled >= self.stall_limit:
                        state.status = SearchStatus.CONVERGED
                        return
                    neighbour, cost = model.swap_cost(state.cost, state.permutation, i, j)
                    if self._accepts(cost - state.cost, self.temperature):
                        state.accept(neighbour, cost)
                        stalled = 0
                        break
            self.epochs += 1
            self.temperature *= self.cooling
            LOGGER.debug(
                "%s: epoch %d done, cost=%d, T=%.4f", self.name, self.epochs, state.cost, self.temperature
            )
            if segment_start == state.cost:
                state.status = SearchStatus.CONVERGED
                return
