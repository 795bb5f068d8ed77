from __future__ import annotations

from collections.abc import Callable

from pydantic import BaseModel, ConfigDict, Field

from genfx.entities.base import GeneticEntity
from genfx.evolution.fitness import FitnessEvaluator
from genfx.evolution.metrics import Metric
from genfx.evolution.operators.crossover import CrossoverOperator
from genfx.evolution.operators.mutation import MutationOperator
from genfx.evolution.plugins import Plugin
from genfx.evolution.strategies.elitism import ElitismStrategy
from genfx.evolution.strategies.scaling import FitnessScalingStrategy
from genfx.evolution.strategies.selectors import SelectionOperator
from genfx.evolution.terminators import EmptyTerminator, Terminator
from genfx.random_source import RandomSource


class AlgorithmConfig(BaseModel):
    """Components and settings shared by every GeneticAlgorithm variant."""

    environment_size: int = Field(default=1, ge=1, description="Number of demes")
    min_population_size: int = Field(
        default=10, ge=1, description="Entities seeded into each population"
    )
    entity_factory: Callable[[RandomSource], GeneticEntity] = Field(
        ..., description="Creates one new, initialized entity"
    )
    fitness_evaluator: FitnessEvaluator
    selection_operator: SelectionOperator
    crossover_operator: CrossoverOperator | None = None
    mutation_operator: MutationOperator | None = None
    elitism_strategy: ElitismStrategy | None = None
    fitness_scaling_strategy: FitnessScalingStrategy | None = None
    terminator: Terminator = Field(default_factory=EmptyTerminator)
    metrics: list[Metric] = Field(default_factory=list)
    plugins: list[Plugin] = Field(default_factory=list)
    generation_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Seconds allowed for the evaluation phase of one generation (None = unlimited)",
    )
    seed: int | None = Field(
        default=None, description="Seed for a run-private RandomSource"
    )
    model_config = ConfigDict(arbitrary_types_allowed=True)

    def components(self) -> list[tuple[str, object]]:
        """Every configured component paired with the field name it lives under."""
        named: list[tuple[str, object]] = [
            ("fitness_evaluator", self.fitness_evaluator),
            ("selection_operator", self.selection_operator),
            ("crossover_operator", self.crossover_operator),
            ("mutation_operator", self.mutation_operator),
            ("elitism_strategy", self.elitism_strategy),
            ("fitness_scaling_strategy", self.fitness_scaling_strategy),
            ("terminator", self.terminator),
        ]
        named += [(f"metrics[{i}]", m) for i, m in enumerate(self.metrics)]
        named += [(f"plugins[{i}]", p) for i, p in enumerate(self.plugins)]
        return [(name, c) for name, c in named if c is not None]

    def cross_field_violations(self) -> list[tuple[str, str]]:
        """(field, message) pairs for constraints spanning several fields."""
        return []
