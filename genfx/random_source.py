"""Pluggable random number service shared by sampling, mutation and seeding."""

from __future__ import annotations

import random


class RandomSource:
    """Uniform integer and ratio draws backed by a private ``random.Random``."""

    def __init__(self, seed: int | None = None):
        self.seed = seed
        self._random = random.Random(seed)

    def random_int(self, max_value: int) -> int:
        """Return an integer in ``[0, max_value)``."""
        if max_value <= 0:
            raise ValueError(f"max_value must be positive, got {max_value}")
        return self._random.randrange(max_value)

    def random_int_range(self, min_value: int, max_value: int) -> int:
        """Return an integer in ``[min_value, max_value)``."""
        if max_value <= min_value:
            raise ValueError(
                f"max_value ({max_value}) must be greater than min_value ({min_value})"
            )
        return self._random.randrange(min_value, max_value)

    def random_ratio(self) -> float:
        """Return a float in ``[0.0, 1.0)``."""
        return self._random.random()

    def __repr__(self) -> str:
        return f"RandomSource(seed={self.seed})"


_instance = RandomSource()


def get_random_source() -> RandomSource:
    """Process-wide default random source."""
    return _instance


def set_random_source(source: RandomSource) -> None:
    """Replace the process-wide default (e.g. with a seeded source in tests)."""
    global _instance
    if source is None:
        raise ValueError("source cannot be None")
    _instance = source
