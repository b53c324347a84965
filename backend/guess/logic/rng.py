"""
Random number source for per-round number assignment.

Each round every player is assigned a number drawn uniformly from
[1, max_guess]. The source is injected into the server context so tests
can substitute a scripted source and get deterministic scenarios.
"""

import random
from typing import Protocol


class NumberSource(Protocol):
    def draw(self, upper: int) -> int:
        """Return a number in [1, upper]."""
        ...


class RandomNumberSource:
    """
    Uniform number source backed by stdlib random.Random.

    Unseeded by default. A seed makes the sequence reproducible, which is
    only useful for local debugging; statistical quality is not critical
    for number assignment.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)  # noqa: S311

    def draw(self, upper: int) -> int:
        if upper < 1:
            raise ValueError(f"upper bound must be positive, got {upper}")
        return self._rng.randint(1, upper)
