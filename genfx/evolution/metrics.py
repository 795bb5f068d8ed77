"""Per-population statistics recorded after every generation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from genfx.entities.base import GeneticEntity
from genfx.evolution.context import EvolutionContext
from genfx.evolution.strategies.models import FitnessType
from genfx.population import Population
from genfx.utils.stats import FitnessStats


class MetricResult(BaseModel):
    generation_index: int = Field(ge=0)
    population_index: int = Field(ge=0)
    value: Any = Field(description="Metric value; a float or an entity snapshot")
    model_config = ConfigDict(arbitrary_types_allowed=True)


class Metric(ABC):
    """Pure function of a population, with a result history per population index."""

    def __init__(self) -> None:
        self._results: dict[int, list[MetricResult]] = defaultdict(list)

    @property
    def name(self) -> str:
        return type(self).__name__

    def validate(self) -> list[str]:
        return []

    @abstractmethod
    def calculate(self, population: Population, ctx: EvolutionContext) -> Any: ...

    def record(self, population: Population, ctx: EvolutionContext) -> MetricResult:
        result = MetricResult(
            generation_index=ctx.generation,
            population_index=population.index,
            value=self.calculate(population, ctx),
        )
        self._results[population.index].append(result)
        return result

    def get_results(self, population_index: int) -> list[MetricResult]:
        return list(self._results.get(population_index, []))

    def latest(self, population_index: int) -> MetricResult | None:
        results = self._results.get(population_index)
        return results[-1] if results else None

    def reset(self) -> None:
        self._results.clear()


def _population_stats(population: Population, ctx: EvolutionContext) -> FitnessStats:
    # Without scaling, scaled values equal raw ones and the cached raw aggregates apply.
    if not ctx.scaling_enabled:
        return population.raw_stats
    return population.scaled_stats()


def _metric_fitness_type(ctx: EvolutionContext) -> FitnessType:
    return FitnessType.SCALED if ctx.scaling_enabled else FitnessType.RAW


class MeanFitness(Metric):
    def calculate(self, population: Population, ctx: EvolutionContext) -> float:
        return _population_stats(population, ctx).mean


class MinimumFitness(Metric):
    def calculate(self, population: Population, ctx: EvolutionContext) -> float:
        return _population_stats(population, ctx).minimum


class MaximumFitness(Metric):
    def calculate(self, population: Population, ctx: EvolutionContext) -> float:
        return _population_stats(population, ctx).maximum


class FitnessStandardDeviation(Metric):
    def calculate(self, population: Population, ctx: EvolutionContext) -> float:
        return _population_stats(population, ctx).standard_deviation


class BestMaximumFitness(Metric):
    """Largest maximum fitness seen so far in each population."""

    def __init__(self) -> None:
        super().__init__()
        self._best: dict[int, float] = {}

    def calculate(self, population: Population, ctx: EvolutionContext) -> float:
        current = _population_stats(population, ctx).maximum
        best = self._best.get(population.index)
        if best is None or current > best:
            self._best[population.index] = best = current
        return best

    def reset(self) -> None:
        super().reset()
        self._best.clear()


class BestMinimumFitness(Metric):
    """Smallest minimum fitness seen so far in each population."""

    def __init__(self) -> None:
        super().__init__()
        self._best: dict[int, float] = {}

    def calculate(self, population: Population, ctx: EvolutionContext) -> float:
        current = _population_stats(population, ctx).minimum
        best = self._best.get(population.index)
        if best is None or current < best:
            self._best[population.index] = best = current
        return best

    def reset(self) -> None:
        super().reset()
        self._best.clear()


class BestMaximumFitnessEntity(Metric):
    """Snapshot (clone) of the highest-fitness entity seen so far in each population."""

    def __init__(self) -> None:
        super().__init__()
        self._best: dict[int, GeneticEntity] = {}

    def calculate(
        self, population: Population, ctx: EvolutionContext
    ) -> GeneticEntity | None:
        if population.size == 0:
            return self._best.get(population.index)
        fitness_type = _metric_fitness_type(ctx)
        candidate = max(population, key=lambda e: e.get_fitness_value(fitness_type))
        best = self._best.get(population.index)
        if best is None or candidate.get_fitness_value(
            fitness_type
        ) > best.get_fitness_value(fitness_type):
            self._best[population.index] = best = candidate.clone()
        return best

    def reset(self) -> None:
        super().reset()
        self._best.clear()
