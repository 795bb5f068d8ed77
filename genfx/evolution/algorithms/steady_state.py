from __future__ import annotations

from loguru import logger
from pydantic import Field, field_validator

from genfx.evolution.engine.config import AlgorithmConfig
from genfx.evolution.engine.core import GeneticAlgorithm
from genfx.evolution.strategies.replacement import (
    PopulationReplacementValue,
    ReplacementValueKind,
)
from genfx.evolution.strategies.utils import sort_by_fitness
from genfx.population import Population


class SteadyStateAlgorithmConfig(AlgorithmConfig):
    replacement_value: PopulationReplacementValue = Field(
        default_factory=PopulationReplacementValue,
        description="Entities replaced per generation: percentage or fixed count",
    )

    @field_validator("replacement_value", mode="before")
    @classmethod
    def parse_replacement_value(cls, value):
        if isinstance(value, (str, int)) and not isinstance(value, bool):
            return PopulationReplacementValue.parse(value)
        return value

    def cross_field_violations(self) -> list[tuple[str, str]]:
        violations = super().cross_field_violations()
        if (
            self.replacement_value.kind == ReplacementValueKind.FIXED_COUNT
            and self.replacement_value.value > self.min_population_size
        ):
            violations.append(
                (
                    "replacement_value",
                    f"fixed replacement count {self.replacement_value.value} exceeds "
                    f"min_population_size {self.min_population_size}",
                )
            )
        return violations


class SteadyStateGeneticAlgorithm(GeneticAlgorithm):
    """
    Partial replacement: each generation adds ``replacement_count`` offspring
    and then drops the same number of the weakest pre-step entities.

    Offspring are unevaluated when the removal happens, so only entities that
    already carry fitness compete for removal. Elites, when an elitism
    strategy is configured, are exempt from removal; since removal already
    targets the weakest, elitism has no observable effect here.
    """

    config: SteadyStateAlgorithmConfig
    config_class = SteadyStateAlgorithmConfig

    def _create_next_generation(self, population: Population) -> None:
        size = population.size
        count = self.config.replacement_value.resolve(size)
        if count == 0:
            return

        elitism = self.config.elitism_strategy
        protected = (
            {id(e) for e in elitism.select_elite(population, self.context)}
            if elitism
            else set()
        )
        candidates = [e for e in population if id(e) not in protected]
        if count > len(candidates):
            logger.warning(
                "[{}] Population {}: replacement count {} clamped to {}",
                self.name,
                population.index,
                count,
                len(candidates),
            )
            count = len(candidates)
            if count == 0:
                return

        weakest = sort_by_fitness(
            candidates, self.context.fitness_type, self.context.evaluation_mode
        )[:count]
        offspring = self._generate_offspring(population, count)[:count]

        population.extend(offspring)
        for entity in weakest:
            population.remove(entity)

        self.engine_metrics.entities_replaced += count
        logger.debug(
            "[{}] Population {}: replaced {} of {}",
            self.name,
            population.index,
            count,
            size,
        )
