"""Local-search metaheuristics for the Quadratic Assignment Problem."""
from __future__ import annotations

from .annealing import SimulatedAnnealing
from .budget import SearchBudget
from .config import SearchConfig
from .cost import CostModel
from .errors import DegenerateInstanceError, InconsistentCostModelError, InvalidInstanceError
from .heuristics import constructive_permutation
from .neighborhoods import move_count, swap_neighbors
from .sampling import PermutationSampler
from .search import GreedyLocalSearch, RandomSearch, RandomWalk, SearchStrategy, SteepestLocalSearch
from .state import SearchResult, SearchStatus
from .strategies import STRATEGIES, build_strategy
from .tabu import TabuMemory, TabuSearch
from .temperature import estimate_initial_temperature

__all__ = [
    "CostModel",
    "DegenerateInstanceError",
    "GreedyLocalSearch",
    "InconsistentCostModelError",
    "InvalidInstanceError",
    "PermutationSampler",
    "RandomSearch",
    "RandomWalk",
    "STRATEGIES",
    "SearchBudget",
    "SearchConfig",
    "SearchResult",
    "SearchStatus",
    "SearchStrategy",
    "SimulatedAnnealing",
    "SteepestLocalSearch",
    "TabuMemory",
    "TabuSearch",
    "build_strategy",
    "constructive_permutation",
    "estimate_initial_temperature",
    "move_count",
    "swap_neighbors",
]
