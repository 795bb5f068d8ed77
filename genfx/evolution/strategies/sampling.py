from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple

import numpy as np

from genfx.entities.base import GeneticEntity
from genfx.exceptions import SamplingDegenerateError
from genfx.random_source import RandomSource


class WheelSlice(NamedTuple):
    entity: GeneticEntity
    weight: float


class RouletteWheelSampler:
    """Draws one entity with probability proportional to its slice weight."""

    @staticmethod
    def sample(slices: Sequence[WheelSlice], rng: RandomSource) -> GeneticEntity:
        if not slices:
            raise SamplingDegenerateError("Cannot sample from an empty wheel")

        weights = np.fromiter(
            (s.weight for s in slices), dtype=np.float64, count=len(slices)
        )
        if not np.all(weights > 0):
            bad = float(weights[~(weights > 0)][0])
            raise SamplingDegenerateError(
                f"Wheel slice weights must be positive, got {bad}"
            )

        bounds = np.cumsum(weights)
        target = rng.random_ratio() * bounds[-1]
        index = int(np.searchsorted(bounds, target, side="right"))
        return slices[min(index, len(slices) - 1)].entity
