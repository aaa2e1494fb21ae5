"""Input/output helpers: QAPLIB files, result JSON, random instances."""
from __future__ import annotations

import io
import json
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

import numpy as np

from .cost import CostModel
from .errors import InvalidInstanceError
from .state import SearchResult
from .utils import format_permutation


@dataclass
class QAPInstance:
    """Flow (facilities) and distance (locations) matrices of one instance."""

    name: str
    facilities: np.ndarray
    locations: np.ndarray

    @property
    def n(self) -> int:
        return int(self.facilities.shape[0])

    def cost_model(self, **kwargs) -> CostModel:
        return CostModel(self.facilities, self.locations, **kwargs)


@dataclass
class QAPSolution:
    """Reference solution as listed in a QAPLIB ``.sln`` file (0-based permutation)."""

    n: int
    cost: int
    permutation: List[int]


def _int_tokens(text: str, what: str) -> List[int]:
    try:
        return [int(tok) for tok in text.replace(",", " ").split()]
    except ValueError as exc:
        raise InvalidInstanceError(f"Non-integer token in {what}: {exc}") from exc


def parse_qaplib(text: str, name: str = "instance") -> QAPInstance:
    """Parse QAPLIB data: the size n followed by the n×n flow and distance matrices."""
    values = _int_tokens(text, name)
    if not values:
        raise InvalidInstanceError(f"{name} is empty")
    n = values[0]
    if n < 0:
        raise InvalidInstanceError(f"{name}: negative size {n}")
    found = len(values) - 1
    if found != 2 * n * n:
        raise InvalidInstanceError(f"{name}: expected {2 * n * n} matrix entries for n={n}, found {found}")
    facilities = np.array(values[1 : 1 + n * n], dtype=np.int64).reshape(n, n)
    locations = np.array(values[1 + n * n :], dtype=np.int64).reshape(n, n)
    return QAPInstance(name=name, facilities=facilities, locations=locations)


def read_qaplib(path: str | Path) -> QAPInstance:
    path = Path(path)
    return parse_qaplib(path.read_text(encoding="utf-8"), name=path.stem)


def write_qaplib(path: str | Path, facilities, locations) -> None:
    """Write the flow and distance matrices in QAPLIB format."""
    facilities = np.asarray(facilities)
    locations = np.asarray(locations)
    s = io.StringIO()
    s.write(f"{len(facilities)}\n\n")
    np.savetxt(s, facilities, fmt="%d")
    s.write("\n")
    np.savetxt(s, locations, fmt="%d")
    Path(path).write_text(s.getvalue(), encoding="utf-8")


def read_solution(path: str | Path) -> QAPSolution:
    """Read a QAPLIB ``.sln`` file: n, optimal cost, then the 1-based permutation."""
    path = Path(path)
    values = _int_tokens(path.read_text(encoding="utf-8"), path.name)
    if len(values) < 2:
        raise InvalidInstanceError(f"{path.name}: missing size or cost")
    n, cost = values[0], values[1]
    perm = [v - 1 for v in values[2:]]
    if len(perm) != n or sorted(perm) != list(range(n)):
        raise InvalidInstanceError(f"{path.name}: permutation does not match n={n}")
    return QAPSolution(n=n, cost=cost, permutation=perm)


def build_output_payload(
    instance_name: str,
    results: List[SearchResult],
    optimum: int | None = None,
) -> Dict[str, object]:
    """Create a serialisable dictionary describing the runs."""
    runs = []
    for result in results:
        entry = result.to_dict()
        entry["permutation_qaplib"] = format_permutation(result.permutation)
        if optimum:
            entry["gap"] = (result.cost - optimum) / optimum
        runs.append(entry)
    best = min(results, key=lambda r: r.cost) if results else None
    return {
        "instance": instance_name,
        "optimum": optimum,
        "best_cost": best.cost if best is not None else None,
        "best_algorithm": best.algorithm if best is not None else None,
        "runs": runs,
    }


def write_output(
    path: str | Path,
    instance_name: str,
    results: List[SearchResult],
    optimum: int | None = None,
) -> Dict[str, object]:
    """Serialise the runs to JSON and return the payload."""
    payload = build_output_payload(instance_name, results, optimum)
    Path(path).write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return payload


def generate_random_instance(
    n: int,
    seed: int,
    *,
    max_flow: int = 10,
    max_distance: int = 10,
) -> QAPInstance:
    """Random instance with zero diagonals and symmetric distances."""
    if n < 0:
        raise ValueError("n must be >= 0")
    rng = random.Random(seed)
    facilities = np.zeros((n, n), dtype=np.int64)
    locations = np.zeros((n, n), dtype=np.int64)
    for i in range(n):
        for j in range(n):
            if i != j:
                facilities[i, j] = rng.randint(0, max_flow)
            if i < j:
                locations[i, j] = locations[j, i] = rng.randint(1, max_distance)
    return QAPInstance(name=f"random{n}_s{seed}", facilities=facilities, locations=locations)
