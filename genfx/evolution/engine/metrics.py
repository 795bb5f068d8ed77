from __future__ import annotations

from pydantic import BaseModel, Field


class EngineMetrics(BaseModel):
    """Run-level counters, independent of the per-population fitness metrics."""

    total_generations: int = Field(
        default=0, description="Total number of generations created"
    )
    entities_evaluated: int = Field(
        default=0, description="Total number of fitness evaluations"
    )
    offspring_created: int = Field(
        default=0, description="Total offspring produced by the breeding phase"
    )
    mutations_applied: int = Field(
        default=0, description="Offspring changed by the mutation operator"
    )
    elites_preserved: int = Field(
        default=0, description="Total elites carried forward unchanged"
    )
    entities_replaced: int = Field(
        default=0, description="Total weakest entities removed by steady-state replacement"
    )
    migrations_performed: int = Field(
        default=0, description="Total migration events across the environment"
    )
    generations_rolled_back: int = Field(
        default=0, description="Generations discarded because a step failed"
    )

    def record_breeding_metrics(
        self, offspring_created: int, mutations_applied: int
    ) -> None:
        self.offspring_created += offspring_created
        self.mutations_applied += mutations_applied

    def record_evaluation_metrics(self, entities_evaluated: int) -> None:
        self.entities_evaluated += entities_evaluated
