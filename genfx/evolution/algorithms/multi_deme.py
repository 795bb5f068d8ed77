from __future__ import annotations

from loguru import logger
from pydantic import Field

from genfx.entities.base import GeneticEntity
from genfx.evolution.algorithms.simple import SimpleGeneticAlgorithm
from genfx.evolution.engine.config import AlgorithmConfig
from genfx.evolution.strategies.utils import sort_by_fitness


class MultiDemeAlgorithmConfig(AlgorithmConfig):
    migrant_count: int = Field(
        default=0, ge=0, description="Entities moved between neighbouring demes per migration"
    )
    migrate_each_generation: int = Field(
        default=1, ge=1, description="Migrate whenever current_generation is a multiple of this"
    )

    def cross_field_violations(self) -> list[tuple[str, str]]:
        violations = super().cross_field_violations()
        if self.migrant_count > self.min_population_size:
            violations.append(
                (
                    "migrant_count",
                    f"migrant_count {self.migrant_count} exceeds "
                    f"min_population_size {self.min_population_size}",
                )
            )
        return violations


class MultiDemeGeneticAlgorithm(SimpleGeneticAlgorithm):
    """Generational demes joined in a ring; the fittest entities move one hop per migration."""

    config: MultiDemeAlgorithmConfig
    config_class = MultiDemeAlgorithmConfig

    def _on_generation_created(self) -> None:
        if (
            self.config.migrant_count > 0
            and len(self.environment) > 1
            and self.current_generation % self.config.migrate_each_generation == 0
        ):
            self.migrate()

    def _sorted(self, entities) -> list[GeneticEntity]:
        return sort_by_fitness(
            entities, self.context.fitness_type, self.context.evaluation_mode
        )

    def migrate(self) -> None:
        """
        Ring migration over demes ``0..P-1``.

        Deme 0's top ``migrant_count`` form the first batch. Each later deme
        receives the batch and gives up its own top entities as the next
        batch: the arriving migrant is appended after the deme's fitness-sorted
        list and the entity at ``len - i - 2`` leaves. Finally deme 0 receives
        the last batch and drops the entities it originally sent, so every
        deme keeps its size. Every deme is rescaled afterwards.
        """
        populations = self.environment.populations
        count = self.config.migrant_count

        first_sorted = self._sorted(populations[0])
        migrants = [first_sorted[len(first_sorted) - i - 1] for i in range(count)]

        for population in populations[1:] + populations[:1]:
            ordered = self._sorted(population)
            for i in range(count):
                population.append(migrants[i])
                ordered.append(migrants[i])
                displaced = ordered[len(ordered) - i - 2]
                migrants[i] = displaced
                population.remove(displaced)
                ordered.remove(displaced)

        # Rescale for the post-migration membership.
        self._refresh_fitness()
        self.engine_metrics.migrations_performed += 1
        logger.debug(
            "[Migration] Moved {} entities around {} demes at generation {}",
            count,
            len(populations),
            self.current_generation,
        )
