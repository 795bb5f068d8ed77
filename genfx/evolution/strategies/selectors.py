from __future__ import annotations

from abc import ABC, abstractmethod
import math

from loguru import logger

from genfx.entities.base import GeneticEntity
from genfx.evolution.context import EvolutionContext
from genfx.evolution.strategies.models import EvaluationMode, FitnessType
from genfx.evolution.strategies.sampling import RouletteWheelSampler, WheelSlice
from genfx.evolution.strategies.utils import goodness, sort_by_fitness
from genfx.population import Population


class SelectionOperator(ABC):
    """Chooses entities (with replacement) from a population to act as parents."""

    def __init__(self, fitness_type: FitnessType = FitnessType.SCALED):
        self.fitness_type = FitnessType(fitness_type)

    def validate(self) -> list[str]:
        return []

    def select_entities(
        self, count: int, population: Population, ctx: EvolutionContext
    ) -> list[GeneticEntity]:
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        if count == 0:
            return []
        if population.size == 0:
            raise ValueError(
                f"Cannot select from empty population {population.index}"
            )
        selected = self._select(count, population, ctx)
        logger.debug(
            "[{}] Selected {} entities from population {}",
            type(self).__name__,
            len(selected),
            population.index,
        )
        return selected

    @abstractmethod
    def _select(
        self, count: int, population: Population, ctx: EvolutionContext
    ) -> list[GeneticEntity]:
        """Return exactly ``count`` members of ``population``."""

    def on_generation(self, ctx: EvolutionContext) -> None:
        """Called once after every generation is created."""

    def reset(self) -> None:
        """Drop per-run state before a fresh run starts."""


class UniformSelectionOperator(SelectionOperator):
    def _select(
        self, count: int, population: Population, ctx: EvolutionContext
    ) -> list[GeneticEntity]:
        return [population[ctx.rng.random_int(population.size)] for _ in range(count)]


class FitnessProportionateSelectionOperator(SelectionOperator):
    """
    Roulette-wheel selection with slice size equal to fitness.

    Under ``MINIMIZE`` each entity, taken in ascending fitness order, is
    paired with the fitness of its mirror entity from the descending end, so
    the smallest value owns the largest slice. If any weight is not positive
    every weight is shifted up by ``abs(min) + 1``.
    """

    def build_slices(
        self, population: Population, ctx: EvolutionContext
    ) -> list[WheelSlice]:
        if ctx.evaluation_mode == EvaluationMode.MINIMIZE:
            ordered = sort_by_fitness(
                population, self.fitness_type, EvaluationMode.MAXIMIZE
            )
            weights = [
                e.get_fitness_value(self.fitness_type) for e in reversed(ordered)
            ]
        else:
            ordered = list(population)
            weights = [e.get_fitness_value(self.fitness_type) for e in ordered]

        lowest = min(weights)
        if lowest <= 0:
            shift = abs(lowest) + 1
            weights = [w + shift for w in weights]

        return [WheelSlice(e, w) for e, w in zip(ordered, weights)]

    def _select(
        self, count: int, population: Population, ctx: EvolutionContext
    ) -> list[GeneticEntity]:
        slices = self.build_slices(population, ctx)
        return [RouletteWheelSampler.sample(slices, ctx.rng) for _ in range(count)]


class RankSelectionOperator(SelectionOperator):
    """Slice size equals 1-based rank from worst to best. Always ranks on raw fitness."""

    def build_slices(
        self, population: Population, ctx: EvolutionContext
    ) -> list[WheelSlice]:
        ordered = sort_by_fitness(population, FitnessType.RAW, ctx.evaluation_mode)
        return [WheelSlice(e, float(rank)) for rank, e in enumerate(ordered, start=1)]

    def _select(
        self, count: int, population: Population, ctx: EvolutionContext
    ) -> list[GeneticEntity]:
        slices = self.build_slices(population, ctx)
        return [RouletteWheelSampler.sample(slices, ctx.rng) for _ in range(count)]


class BoltzmannSelectionOperator(SelectionOperator):
    """
    Slice size ``exp(f / T) / mean(exp(f / T))``.

    The temperature starts at ``initial_temperature`` and is multiplied by
    ``1 - cooling_rate`` after every generation, shifting pressure from
    exploration towards exploitation. Under ``MINIMIZE`` fitness is negated.
    """

    def __init__(
        self,
        fitness_type: FitnessType = FitnessType.SCALED,
        initial_temperature: float = 100.0,
        cooling_rate: float = 0.0,
    ):
        super().__init__(fitness_type)
        self.initial_temperature = initial_temperature
        self.cooling_rate = cooling_rate
        self.current_temperature = initial_temperature

    def validate(self) -> list[str]:
        errors = []
        if not self.initial_temperature > 0:
            errors.append(
                f"initial_temperature must be positive, got {self.initial_temperature}"
            )
        if not 0 <= self.cooling_rate < 1:
            errors.append(f"cooling_rate must be in [0, 1), got {self.cooling_rate}")
        return errors

    def reset(self) -> None:
        self.current_temperature = self.initial_temperature

    def on_generation(self, ctx: EvolutionContext) -> None:
        self.current_temperature *= 1 - self.cooling_rate
        logger.debug(
            "[BoltzmannSelectionOperator] Temperature now {:.6g} at generation {}",
            self.current_temperature,
            ctx.generation,
        )

    def build_slices(
        self, population: Population, ctx: EvolutionContext
    ) -> list[WheelSlice]:
        terms = []
        for entity in population:
            value = goodness(entity, self.fitness_type, ctx.evaluation_mode)
            try:
                terms.append(math.exp(value / self.current_temperature))
            except OverflowError as e:
                raise OverflowError(
                    f"Boltzmann term overflowed at temperature {self.current_temperature}"
                ) from e
        total = math.fsum(terms)
        if math.isinf(total):
            raise OverflowError(
                f"Boltzmann total overflowed at temperature {self.current_temperature}"
            )
        mean = total / len(terms)
        return [WheelSlice(e, t / mean) for e, t in zip(population, terms)]

    def _select(
        self, count: int, population: Population, ctx: EvolutionContext
    ) -> list[GeneticEntity]:
        slices = self.build_slices(population, ctx)
        return [RouletteWheelSampler.sample(slices, ctx.rng) for _ in range(count)]
