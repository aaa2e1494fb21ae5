"""Tabu search over the swap neighbourhood."""
from __future__ import annotations

from typing import Dict, Iterator

from .budget import SearchBudget
from .config import TABU_TENURE, TABU_TIME_LIMIT_S
from .cost import CostModel
from .neighborhoods import Move, apply_swap, swap_neighbors
from .sampling import PermutationSampler
from .search import SearchStrategy
from .state import SearchState, SearchStatus
from .utils import LOGGER


class TabuMemory:
    """Cooldown counter for every swap move.

    All n(n-1)/2 moves are present from the start with a cooldown of 0. A move
    applied by the search gets ``tenure``; each iteration decrements every
    positive counter by one.
    """

    def __init__(self, n: int, tenure: int = TABU_TENURE) -> None:
        if tenure < 1:
            raise ValueError("tenure must be >= 1")
        self.tenure = tenure
        self._cooldown: Dict[Move, int] = {move: 0 for move in swap_neighbors(n)}

    def __len__(self) -> int:
        return len(self._cooldown)

    def __iter__(self) -> Iterator[Move]:
        return iter(self._cooldown)

    def cooldown(self, move: Move) -> int:
        return self._cooldown[move]

    def is_tabu(self, move: Move) -> bool:
        return self._cooldown[move] > 0

    def tick(self) -> None:
        for move, remaining in self._cooldown.items():
            if remaining > 0:
                self._cooldown[move] = remaining - 1

    def mark(self, move: Move) -> None:
        if move not in self._cooldown:
            raise KeyError(move)
        self._cooldown[move] = self.tenure

    def record(self, move: Move) -> None:
        """End-of-iteration update: age every entry, then forbid ``move``."""
        self.tick()
        self.mark(move)


class TabuSearch(SearchStrategy):
    """Anytime tabu search; it only stops when the budget runs out.

    Every iteration evaluates the full neighbourhood. The cheapest move that
    beats the best known cost is taken whatever its tabu status; failing
    that, the cheapest non-tabu move; failing that, ``fallback_move``.
    Returns the best permutation seen.
    """

    name = "tabu"
    default_time_limit_s = TABU_TIME_LIMIT_S

    def __init__(
        self,
        model: CostModel,
        sampler: PermutationSampler | None = None,
        *,
        tenure: int = TABU_TENURE,
        **budget_kwargs,
    ) -> None:
        super().__init__(model, sampler, **budget_kwargs)
        self.tenure = tenure
        # TODO: revisit the fixed fallback once a policy for fully-tabu neighbourhoods is chosen.
        self.fallback_move: Move = (1, 2) if model.n > 2 else (0, 1)
        self.memory = TabuMemory(model.n, tenure)

    def _select_move(self, costs: Dict[Move, int], best_cost: int) -> Move:
        aspirant = None
        for move, cost in costs.items():
            if cost < best_cost and (aspirant is None or cost < costs[aspirant]):
                aspirant = move
        if aspirant is not None:
            return aspirant
        allowed = [move for move in costs if not self.memory.is_tabu(move)]
        if allowed:
            return min(allowed, key=costs.__getitem__)
        LOGGER.debug("%s: every move is tabu, using %s", self.name, self.fallback_move)
        return self.fallback_move

    def _search(self, state: SearchState, budget: SearchBudget) -> None:
        model = self.model
        self.memory = TabuMemory(model.n, self.tenure)
        while True:
            costs: Dict[Move, int] = {}
            for i, j in swap_neighbors(model.n):
                if budget.poll():
                    state.status = SearchStatus.TIMED_OUT
                    return
                neighbour = apply_swap(state.permutation, i, j)
                costs[(i, j)] = model.delta_cost(state.cost, state.permutation, neighbour, i, j)
            move = self._select_move(costs, state.best_cost)
            self.memory.record(move)
            state.swap(move[0], move[1], costs[move])
            LOGGER.debug("%s: step %d swap %s cost=%d", self.name, state.steps, move, state.cost)
