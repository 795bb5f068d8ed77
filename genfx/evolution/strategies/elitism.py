from __future__ import annotations

import math

from loguru import logger

from genfx.entities.base import GeneticEntity
from genfx.evolution.context import EvolutionContext
from genfx.evolution.strategies.utils import sort_best_first
from genfx.population import Population


class ElitismStrategy:
    """Carries the ``floor(elitist_ratio * size)`` fittest entities forward unchanged."""

    def __init__(self, elitist_ratio: float = 0.1):
        self.elitist_ratio = elitist_ratio

    def validate(self) -> list[str]:
        if not 0 <= self.elitist_ratio <= 1:
            return [f"elitist_ratio must be in [0, 1], got {self.elitist_ratio}"]
        return []

    def elite_count(self, population_size: int) -> int:
        return math.floor(self.elitist_ratio * population_size)

    def select_elite(
        self, population: Population, ctx: EvolutionContext
    ) -> list[GeneticEntity]:
        count = self.elite_count(population.size)
        if count == 0:
            return []
        elite = sort_best_first(population, ctx.fitness_type, ctx.evaluation_mode)[
            :count
        ]
        logger.debug(
            "[ElitismStrategy] {} elite(s) from population {}",
            len(elite),
            population.index,
        )
        return elite
