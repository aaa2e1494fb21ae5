"""Per-run search state and the result handed back to callers."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

import numpy as np

from .neighborhoods import swap_in_place


class SearchStatus(str, Enum):
    INIT = "init"
    SEARCHING = "searching"
    CONVERGED = "converged"
    TIMED_OUT = "timed_out"


@dataclass
class SearchResult:
    """Outcome of one strategy run; ``cost`` is the full cost of ``permutation``."""

    algorithm: str
    permutation: List[int]
    cost: int
    initial_cost: int
    steps: int
    evaluations: int
    elapsed_s: float
    status: SearchStatus

    def as_tuple(self) -> Tuple[List[int], int, int]:
        return self.permutation, self.cost, self.steps

    def to_dict(self) -> dict:
        return {
            "algorithm": self.algorithm,
            "permutation": list(self.permutation),
            "cost": self.cost,
            "initial_cost": self.initial_cost,
            "steps": self.steps,
            "evaluations": self.evaluations,
            "elapsed_s": self.elapsed_s,
            "status": self.status.value,
        }


@dataclass
class SearchState:
    """Mutable state owned by a single strategy invocation."""

    permutation: np.ndarray
    cost: int
    initial_cost: int = field(init=False)
    best_permutation: np.ndarray = field(init=False)
    best_cost: int = field(init=False)
    steps: int = 0
    status: SearchStatus = SearchStatus.INIT

    def __post_init__(self) -> None:
        self.initial_cost = self.cost
        self.best_permutation = self.permutation.copy()
        self.best_cost = self.cost

    def begin(self) -> None:
        self.status = SearchStatus.SEARCHING

    def accept(self, neighbour: np.ndarray, cost: int) -> None:
        """Move to ``neighbour`` and count the step."""
        self.permutation = neighbour
        self.cost = cost
        self.steps += 1
        if cost < self.best_cost:
            self.best_permutation = neighbour.copy()
            self.best_cost = cost

    def swap(self, i: int, j: int, cost: int) -> None:
        """Swap positions in place; used when the neighbour was not materialised."""
        swap_in_place(self.permutation, i, j)
        self.cost = cost
        self.steps += 1
        if cost < self.best_cost:
            self.best_permutation = self.permutation.copy()
            self.best_cost = cost
