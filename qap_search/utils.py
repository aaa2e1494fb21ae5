"""Utility helpers shared by the QAP search package."""
from __future__ import annotations

import logging
import random
import time
from typing import Sequence


LOGGER = logging.getLogger("qap_search")


def configure_logging(level: int = logging.INFO) -> None:
    """Configure the package logger once."""
    if LOGGER.handlers:
        LOGGER.setLevel(level)
        return
    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        "[%(asctime)s] %(levelname)s %(message)s", "%H:%M:%S"
    )
    handler.setFormatter(formatter)
    LOGGER.addHandler(handler)
    LOGGER.setLevel(level)


def set_seed(seed: int) -> random.Random:
    """Seed the module-level RNG and return a dedicated generator for the run."""
    random.seed(seed)
    return random.Random(seed)


class Timer:
    """Context manager for timing code blocks."""

    def __init__(self) -> None:
        self.start_time: float | None = None
        self.elapsed: float = 0.0

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        self.elapsed = time.perf_counter() - (self.start_time or time.perf_counter())


def log_progress(algorithm: str, initial_cost: int, cost: int, steps: int) -> None:
    """Log the outcome of a search run."""
    LOGGER.info("%s: cost %d -> %d in %d steps", algorithm, initial_cost, cost, steps)


def format_permutation(permutation: Sequence[int], base: int = 1) -> str:
    """Render a permutation the way QAPLIB solution files list it."""
    return " ".join(str(int(v) + base) for v in permutation)

