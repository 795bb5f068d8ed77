from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from loguru import logger

from genfx.entities.base import GeneticEntity
from genfx.entities.lists import ListEntity
from genfx.evolution.context import EvolutionContext


class CrossoverOperator(ABC):
    """
    Recombines a group of parents into offspring.

    With probability ``crossover_rate`` the parents are cloned and the clones
    recombined; offspring start at age 0 with no fitness. Otherwise clones of
    the parents pass through with their age and fitness intact. Parents
    themselves are never modified.
    """

    required_parent_count: int = 2

    def __init__(self, crossover_rate: float = 0.7):
        self.crossover_rate = crossover_rate

    def validate(self) -> list[str]:
        errors = []
        if not 0 <= self.crossover_rate <= 1:
            errors.append(f"crossover_rate must be in [0, 1], got {self.crossover_rate}")
        if self.required_parent_count < 2:
            errors.append(
                f"required_parent_count must be >= 2, got {self.required_parent_count}"
            )
        return errors

    def crossover(
        self, parents: Sequence[GeneticEntity], ctx: EvolutionContext
    ) -> list[GeneticEntity]:
        if len(parents) != self.required_parent_count:
            raise ValueError(
                f"{type(self).__name__} expects {self.required_parent_count} parents, got {len(parents)}"
            )

        if ctx.rng.random_ratio() > self.crossover_rate:
            return [p.clone() for p in parents]

        offspring = self._recombine([p.clone() for p in parents], ctx)
        for child in offspring:
            child.age = 0
            child.reset_fitness()
        return offspring

    @abstractmethod
    def _recombine(
        self, parents: list[GeneticEntity], ctx: EvolutionContext
    ) -> list[GeneticEntity]:
        """Recombine freshly cloned parents in place and return the offspring."""


def _as_lists(parents: list[GeneticEntity]) -> tuple[ListEntity, ListEntity]:
    first, second = parents
    if not isinstance(first, ListEntity) or not isinstance(second, ListEntity):
        raise TypeError("List crossover operators require ListEntity parents")
    return first, second


class SinglePointCrossoverOperator(CrossoverOperator):
    """Swaps the tails of two list entities after a random locus."""

    def _recombine(
        self, parents: list[GeneticEntity], ctx: EvolutionContext
    ) -> list[GeneticEntity]:
        first, second = _as_lists(parents)
        first_len, second_len = len(first), len(second)
        shortest = min(first_len, second_len)
        locus = ctx.rng.random_int(shortest) if shortest > 0 else 0

        longest = max(first_len, second_len)
        first.resize(longest)
        second.resize(longest)
        for i in range(locus, longest):
            first[i], second[i] = second[i], first[i]
        first.resize(second_len)
        second.resize(first_len)

        logger.debug("[SinglePointCrossover] locus={} lengths={}/{}", locus, first_len, second_len)
        return [first, second]


class MultiPointCrossoverOperator(CrossoverOperator):
    """Alternates the source parent at ``crossover_point_count`` distinct loci."""

    def __init__(self, crossover_rate: float = 0.7, crossover_point_count: int = 2):
        super().__init__(crossover_rate)
        self.crossover_point_count = crossover_point_count

    def validate(self) -> list[str]:
        errors = super().validate()
        if self.crossover_point_count < 1:
            errors.append(
                f"crossover_point_count must be >= 1, got {self.crossover_point_count}"
            )
        return errors

    def _recombine(
        self, parents: list[GeneticEntity], ctx: EvolutionContext
    ) -> list[GeneticEntity]:
        first, second = _as_lists(parents)
        first_len, second_len = len(first), len(second)
        shortest = min(first_len, second_len)
        if self.crossover_point_count > shortest:
            raise ValueError(
                f"crossover_point_count ({self.crossover_point_count}) exceeds the shorter parent length ({shortest})"
            )

        loci: set[int] = set()
        while len(loci) < self.crossover_point_count:
            loci.add(ctx.rng.random_int(shortest))

        longest = max(first_len, second_len)
        first.resize(longest)
        second.resize(longest)
        swapped = False
        for i in range(longest):
            if i in loci:
                swapped = not swapped
            if swapped:
                first[i], second[i] = second[i], first[i]
        first.resize(second_len if swapped else first_len)
        second.resize(first_len if swapped else second_len)

        logger.debug("[MultiPointCrossover] loci={}", sorted(loci))
        return [first, second]
