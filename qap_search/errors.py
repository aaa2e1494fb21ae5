"""Exceptions raised by the QAP search engine."""
from __future__ import annotations


class InvalidInstanceError(ValueError):
    """The matrices or a permutation do not describe a valid QAP state."""


class DegenerateInstanceError(InvalidInstanceError):
    """The instance is too small for a swap neighbourhood (n < 2)."""

    def __init__(self, n: int) -> None:
        super().__init__(f"Swap neighbourhood is empty for n={n}; at least 2 facilities are required")
        self.n = n


class InconsistentCostModelError(AssertionError):
    """Incremental and full cost evaluation disagree."""

    def __init__(self, move: tuple[int, int], incremental: int, full: int) -> None:
        super().__init__(
            f"Delta cost for move {move} gave {incremental}, full recomputation gave {full}"
        )
        self.move = move
        self.incremental = incremental
        self.full = full
