"""Repeated runs of several strategies on one instance, tabulated with pandas."""
from __future__ import annotations

import time
from pathlib import Path
from typing import Callable, Iterable, List

import matplotlib.pyplot as plt
import pandas as pd

from .config import SearchConfig
from .cost import CostModel
from .sampling import PermutationSampler
from .state import SearchResult
from .strategies import build_strategy, initial_permutation
from .utils import LOGGER, Timer

COLUMNS = [
    "algorithm",
    "run",
    "initial_cost",
    "cost",
    "steps",
    "evaluations",
    "elapsed_s",
    "wall_s",
    "status",
    "gap",
]


def run_benchmark(
    model: CostModel,
    algorithms: Iterable[str],
    config: SearchConfig,
    sampler: PermutationSampler | None = None,
    optimum: int | None = None,
    clock: Callable[[], float] = time.perf_counter,
) -> tuple[pd.DataFrame, List[SearchResult]]:
    """Run every algorithm ``config.runs`` times and collect one row per run.

    All runs share ``sampler``, so a seeded sampler makes the whole benchmark
    reproducible (up to the time budget).
    """
    sampler = sampler if sampler is not None else PermutationSampler(seed=config.seed)
    rows = []
    results: List[SearchResult] = []
    for name in algorithms:
        strategy = build_strategy(name, model, sampler, config, clock=clock)
        for run in range(config.runs):
            with Timer() as timer:
                result = strategy.run(initial_permutation(model, config))
            gap = (result.cost - optimum) / optimum if optimum else None
            LOGGER.info(
                "Run %02d/%d %s: cost=%d steps=%d (%.2fs)",
                run + 1,
                config.runs,
                name,
                result.cost,
                result.steps,
                timer.elapsed,
            )
            rows.append(
                {
                    "algorithm": name,
                    "run": run,
                    "initial_cost": result.initial_cost,
                    "cost": result.cost,
                    "steps": result.steps,
                    "evaluations": result.evaluations,
                    "elapsed_s": result.elapsed_s,
                    "wall_s": timer.elapsed,
                    "status": result.status.value,
                    "gap": gap,
                }
            )
            results.append(result)
    return pd.DataFrame(rows, columns=COLUMNS), results


def summarize(frame: pd.DataFrame) -> pd.DataFrame:
    """Per-algorithm mean/std/min of cost, mean steps and mean time."""
    if frame.empty:
        return pd.DataFrame(
            columns=["cost_mean", "cost_std", "cost_min", "steps_mean", "elapsed_mean"]
        )
    grouped = frame.groupby("algorithm", sort=False)
    summary = grouped.agg(
        cost_mean=("cost", "mean"),
        cost_std=("cost", "std"),
        cost_min=("cost", "min"),
        steps_mean=("steps", "mean"),
        elapsed_mean=("elapsed_s", "mean"),
    )
    summary["cost_std"] = summary["cost_std"].fillna(0.0)
    if frame["gap"].notna().any():
        summary["gap_mean"] = grouped["gap"].mean()
    return summary


def plot_costs(frame: pd.DataFrame, path: str | Path, title: str | None = None) -> Path:
    """Boxplot of final costs per algorithm, saved to ``path``."""
    path = Path(path)
    names = list(dict.fromkeys(frame["algorithm"]))
    data = [frame.loc[frame["algorithm"] == name, "cost"].to_list() for name in names]
    fig, ax = plt.subplots()
    ax.boxplot(data)
    ax.set_xticks(range(1, len(names) + 1))
    ax.set_xticklabels(names, rotation=20)
    ax.set_ylabel("Cost")
    ax.set_title(title or "Final cost per algorithm")
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)
    return path
