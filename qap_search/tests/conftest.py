from __future__ import annotations

import random
import sys
from pathlib import Path

import numpy as np
import pytest

# Make ``qap_search`` importable when the suite runs from a checkout without
# an installed package.
PROJECT_DIR = Path(__file__).resolve().parents[2]
if str(PROJECT_DIR) not in sys.path:
    sys.path.insert(0, str(PROJECT_DIR))

from qap_search.cost import CostModel  # noqa: E402
from qap_search.sampling import PermutationSampler  # noqa: E402

FACILITIES = [[0, 1, 1, 2], [1, 0, 2, 1], [1, 2, 0, 1], [2, 1, 1, 0]]
LOCATIONS = [[0, 3, 1, 2], [3, 0, 4, 1], [1, 4, 0, 3], [2, 1, 3, 0]]
IDENTITY_COST = 40


class FakeClock:
    """Clock that advances by ``step`` every time it is read."""

    def __init__(self, step: float = 1.0) -> None:
        self.now = 0.0
        self.step = step

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        return value


def random_matrices(n: int, seed: int, high: int = 20) -> tuple[np.ndarray, np.ndarray]:
    """Asymmetric random instance with non-zero diagonals."""
    rng = np.random.default_rng(seed)
    return rng.integers(0, high, size=(n, n)), rng.integers(0, high, size=(n, n))


def is_permutation(perm, n: int) -> bool:
    return sorted(int(v) for v in perm) == list(range(n))


@pytest.fixture
def golden_model() -> CostModel:
    return CostModel(FACILITIES, LOCATIONS)


@pytest.fixture
def random_model() -> CostModel:
    facilities, locations = random_matrices(8, seed=3)
    return CostModel(facilities, locations, check_consistency=True)


@pytest.fixture
def sampler() -> PermutationSampler:
    return PermutationSampler(rng=random.Random(1234))
