"""Constructive starting solution."""
from __future__ import annotations

import numpy as np

from .cost import CostModel


def constructive_permutation(model: CostModel) -> np.ndarray:
    """Pair heavy-flow facilities with central locations.

    Repeatedly takes the unassigned facility with the largest row sum of the
    flow matrix and gives it the unassigned location with the smallest column
    sum of the distance matrix. Ties go to the lowest index, so the result is
    deterministic.
    """
    n = model.n
    taken_row = np.iinfo(np.int64).min
    taken_col = np.iinfo(np.int64).max
    rows = model.facilities.sum(axis=1)
    cols = model.locations.sum(axis=0)
    solution = np.zeros(n, dtype=np.int64)
    for _ in range(n):
        max_row = int(np.argmax(rows))
        min_col = int(np.argmin(cols))
        solution[max_row] = min_col
        rows[max_row] = taken_row
        cols[min_col] = taken_col
    return solution
