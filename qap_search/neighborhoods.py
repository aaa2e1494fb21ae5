"""Swap neighbourhood over permutations.

Every strategy scans moves in the order produced by :func:`swap_neighbors`,
so "first improving move" is reproducible across strategies.
"""
from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np

from .errors import DegenerateInstanceError

Move = Tuple[int, int]


def require_neighbourhood(n: int) -> None:
    if n < 2:
        raise DegenerateInstanceError(n)


def move_count(n: int) -> int:
    """Number of unordered position pairs, n(n-1)/2."""
    require_neighbourhood(n)
    return n * (n - 1) // 2


def swap_neighbors(n: int) -> Iterable[Move]:
    """Yield (i, j) pairs with i < j in canonical scan order."""
    require_neighbourhood(n)
    for i in range(n - 1):
        for j in range(i + 1, n):
            yield (i, j)


def apply_swap(perm: np.ndarray, i: int, j: int) -> np.ndarray:
    p = perm.copy()
    p[i], p[j] = p[j], p[i]
    return p


def swap_in_place(perm: np.ndarray, i: int, j: int) -> None:
    perm[i], perm[j] = perm[j], perm[i]
