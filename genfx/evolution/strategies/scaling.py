from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np
from loguru import logger

from genfx.entities.base import GeneticEntity
from genfx.entities.lists import ListEntity
from genfx.population import Population


class FitnessScalingStrategy(ABC):
    """Rewrites ``scaled_fitness_value`` of every member as a function of the raw distribution."""

    def validate(self) -> list[str]:
        return []

    def rescale(self, population: Population) -> None:
        if population.size == 0:
            return
        for entity in population:
            if not entity.is_evaluated:
                raise ValueError(
                    f"Cannot scale population {population.index}: {entity!r} is not evaluated"
                )
            entity.scaled_fitness_value = entity.raw_fitness_value
        self._update_scaled_values(population)

    @abstractmethod
    def _update_scaled_values(self, population: Population) -> None:
        """Overwrite scaled values in place; they start out equal to raw."""


class ExponentialScalingStrategy(FitnessScalingStrategy):
    def __init__(self, scaling_power: float = 1.005):
        self.scaling_power = scaling_power

    def validate(self) -> list[str]:
        if not self.scaling_power > 0:
            return [f"scaling_power must be positive, got {self.scaling_power}"]
        return []

    def _update_scaled_values(self, population: Population) -> None:
        for entity in population:
            entity.scaled_fitness_value = float(
                np.power(entity.raw_fitness_value, self.scaling_power)
            )


class SigmaScalingStrategy(FitnessScalingStrategy):
    """``max(0, raw - (mean - multiplier * std))`` over the population's raw values."""

    def __init__(self, multiplier: float = 2.0):
        self.multiplier = multiplier

    def validate(self) -> list[str]:
        if not self.multiplier >= 1:
            return [f"multiplier must be >= 1, got {self.multiplier}"]
        return []

    def _update_scaled_values(self, population: Population) -> None:
        stats = population.raw_stats
        floor = stats.mean - self.multiplier * stats.standard_deviation
        for entity in population:
            entity.scaled_fitness_value = max(0.0, entity.raw_fitness_value - floor)


class FitnessSharingScalingStrategy(FitnessScalingStrategy):
    """
    Divides each scaled value by the entity's niche count.

    The niche count of entity i is the sum over all j with
    ``d(i, j) < scaling_distance_cutoff`` of
    ``1 - (d(i, j) / scaling_distance_cutoff) ** scaling_curvature``.
    Crowded regions of the search space therefore pay a fitness penalty.
    """

    def __init__(
        self, scaling_distance_cutoff: float = 1.0, scaling_curvature: float = 1.0
    ):
        self.scaling_distance_cutoff = scaling_distance_cutoff
        self.scaling_curvature = scaling_curvature

    def validate(self) -> list[str]:
        if not self.scaling_distance_cutoff > 0:
            return [
                f"scaling_distance_cutoff must be positive, got {self.scaling_distance_cutoff}"
            ]
        return []

    @abstractmethod
    def fitness_distance(self, first: GeneticEntity, second: GeneticEntity) -> float:
        """Symmetric, non-negative distance with ``d(e, e) == 0``."""

    def _update_scaled_values(self, population: Population) -> None:
        n = population.size
        distances = np.zeros((n, n), dtype=np.float64)
        for i in range(n):
            for j in range(i + 1, n):
                distances[i, j] = distances[j, i] = self.fitness_distance(
                    population[i], population[j]
                )

        within = distances < self.scaling_distance_cutoff
        share = np.where(
            within,
            1 - np.power(distances / self.scaling_distance_cutoff, self.scaling_curvature),
            0.0,
        )
        niche_counts = share.sum(axis=1)
        for entity, niche in zip(population, niche_counts):
            entity.scaled_fitness_value = entity.scaled_fitness_value / float(niche)

        logger.debug(
            "[FitnessSharing] Population {} mean niche count {:.3f}",
            population.index,
            float(niche_counts.mean()),
        )


class HammingSharingScalingStrategy(FitnessSharingScalingStrategy):
    """Fitness sharing over list entities; distance is the count of differing positions."""

    def fitness_distance(self, first: GeneticEntity, second: GeneticEntity) -> float:
        if not isinstance(first, ListEntity) or not isinstance(second, ListEntity):
            raise TypeError("HammingSharingScalingStrategy requires ListEntity members")
        differing = sum(a != b for a, b in zip(first.values, second.values))
        return float(differing + abs(len(first) - len(second)))
