"""Random permutations and random swap moves."""
from __future__ import annotations

import random

import numpy as np

from .neighborhoods import Move, require_neighbourhood


class PermutationSampler:
    """Random source for the strategies.

    The generator is passed in explicitly so that runs can be replayed with a
    seeded :class:`random.Random`.
    """

    def __init__(self, rng: random.Random | None = None, seed: int | None = None):
        self.rng = rng if rng is not None else random.Random(seed)

    def random_permutation(self, n: int) -> np.ndarray:
        """Uniform permutation of range(n) (Fisher-Yates shuffle)."""
        perm = list(range(n))
        self.rng.shuffle(perm)
        return np.array(perm, dtype=np.int64)

    def random_move(self, n: int) -> Move:
        require_neighbourhood(n)
        i = self.rng.randrange(n - 1)
        j = self.rng.randrange(i + 1, n)
        return (i, j)

    def random(self) -> float:
        return self.rng.random()
