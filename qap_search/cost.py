"""Cost evaluation for the Quadratic Assignment Problem."""
from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

from .errors import InconsistentCostModelError, InvalidInstanceError
from .neighborhoods import apply_swap, require_neighbourhood

INT64_MAX = int(np.iinfo(np.int64).max)


def _as_matrix(values, name: str) -> np.ndarray:
    """Return a read-only int64 copy of ``values`` after validating it."""
    arr = np.asarray(values)
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        raise InvalidInstanceError(f"{name} matrix must be square, got shape {arr.shape}")
    if not np.issubdtype(arr.dtype, np.number):
        raise InvalidInstanceError(f"{name} matrix must be numeric, got dtype {arr.dtype}")
    if not np.issubdtype(arr.dtype, np.integer) and not np.all(np.mod(arr, 1) == 0):
        raise InvalidInstanceError(f"{name} matrix must contain integers only")
    if (arr < 0).any():
        raise InvalidInstanceError(f"{name} matrix must be non-negative")
    if arr.size and arr.max() > INT64_MAX:
        raise InvalidInstanceError(f"{name} matrix has entries beyond the int64 range")
    matrix = arr.astype(np.int64)
    matrix.setflags(write=False)
    return matrix


def _check_cost_range(facilities: np.ndarray, locations: np.ndarray) -> None:
    """Reject instances whose costs could overflow int64 arithmetic."""
    n = facilities.shape[0]
    if n == 0:
        return
    # the floor of 1 also bounds the row and column sums
    bound = n * n * max(int(facilities.max()), 1) * max(int(locations.max()), 1)
    if bound > INT64_MAX:
        raise InvalidInstanceError(
            f"costs up to {bound} exceed the int64 range; scale the matrices down"
        )


class CostModel:
    """Flow/distance matrices of one instance and the two cost primitives.

    ``full_cost`` is the O(n²) definition, ``delta_cost`` the O(n) update for a
    swap of two positions. Both return exact Python integers, and the update
    must always agree with the full recomputation. Set ``check_consistency``
    to compare them on every call.
    """

    def __init__(self, facilities, locations, *, check_consistency: bool = False):
        self.facilities = _as_matrix(facilities, "facilities")
        self.locations = _as_matrix(locations, "locations")
        if self.facilities.shape != self.locations.shape:
            raise InvalidInstanceError(
                "facilities and locations must have the same size, got "
                f"{self.facilities.shape} and {self.locations.shape}"
            )
        self.n = int(self.facilities.shape[0])
        require_neighbourhood(self.n)
        _check_cost_range(self.facilities, self.locations)
        self.check_consistency = check_consistency

    def check_permutation(self, perm: Sequence[int]) -> np.ndarray:
        """Return ``perm`` as an int64 array, or raise if it is not a bijection over [0, n)."""
        p = np.asarray(perm)
        if p.shape != (self.n,):
            raise InvalidInstanceError(f"permutation must have length {self.n}, got shape {p.shape}")
        if not np.issubdtype(p.dtype, np.integer):
            raise InvalidInstanceError("permutation must contain integers")
        if not np.array_equal(np.sort(p), np.arange(self.n)):
            raise InvalidInstanceError(f"{list(p)} is not a permutation of 0..{self.n - 1}")
        return p.astype(np.int64, copy=False)

    def full_cost(self, perm: Sequence[int]) -> int:
        p = self.check_permutation(perm)
        return int((self.facilities * self.locations[np.ix_(p, p)]).sum())

    def _touched_terms(self, perm: np.ndarray, rows: np.ndarray, others: np.ndarray) -> int:
        F, D = self.facilities, self.locations
        # rows i and j against every column
        row_terms = F[rows, :] * D[perm[rows][:, None], perm[None, :]]
        # columns i and j against the remaining rows
        col_terms = F[others][:, rows] * D[perm[others][:, None], perm[rows][None, :]]
        return int(row_terms.sum()) + int(col_terms.sum())

    def delta_cost(
        self,
        old_cost: int,
        old_perm: Sequence[int],
        new_perm: Sequence[int],
        i: int,
        j: int,
    ) -> int:
        """Cost of ``new_perm``, which is ``old_perm`` with positions i and j exchanged.

        Only the terms having i or j as first or second index change, so the
        old contribution of those terms is removed and the new one added. The
        cost is not assumed symmetric.
        """
        if i == j or not (0 <= i < self.n and 0 <= j < self.n):
            raise InvalidInstanceError(f"invalid move ({i}, {j}) for n={self.n}")
        old_p = np.asarray(old_perm)
        new_p = np.asarray(new_perm)
        rows = np.array((i, j))
        others = np.ones(self.n, dtype=bool)
        others[rows] = False
        new_cost = (
            int(old_cost)
            - self._touched_terms(old_p, rows, others)
            + self._touched_terms(new_p, rows, others)
        )
        if self.check_consistency:
            full = self.full_cost(new_p)
            if full != new_cost:
                raise InconsistentCostModelError((i, j), new_cost, full)
        return new_cost

    def swap_cost(self, cost: int, perm: np.ndarray, i: int, j: int) -> Tuple[np.ndarray, int]:
        """Return the neighbour obtained by swapping i and j, and its cost."""
        neighbour = apply_swap(perm, i, j)
        return neighbour, self.delta_cost(cost, perm, neighbour, i, j)
