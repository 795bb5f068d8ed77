from __future__ import annotations

from loguru import logger

from genfx.evolution.engine.core import GeneticAlgorithm
from genfx.population import Population


class SimpleGeneticAlgorithm(GeneticAlgorithm):
    """Generational replacement: elites first, then bred offspring up to the current size."""

    def _create_next_generation(self, population: Population) -> None:
        size = population.size
        elitism = self.config.elitism_strategy
        elites = elitism.select_elite(population, self.context) if elitism else []
        offspring = self._generate_offspring(population, size - len(elites))

        population.replace_all(elites + offspring[: size - len(elites)])
        self.engine_metrics.elites_preserved += len(elites)
        logger.debug(
            "[{}] Population {}: {} elite(s), {} offspring",
            self.name,
            population.index,
            len(elites),
            population.size - len(elites),
        )
