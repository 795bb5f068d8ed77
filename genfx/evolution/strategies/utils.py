from collections.abc import Iterable

from genfx.entities.base import GeneticEntity
from genfx.evolution.strategies.models import EvaluationMode, FitnessType


def goodness(
    entity: GeneticEntity,
    fitness_type: FitnessType,
    evaluation_mode: EvaluationMode,
) -> float:
    """Fitness value oriented so that larger always means better."""
    value = entity.get_fitness_value(fitness_type)
    return value if evaluation_mode == EvaluationMode.MAXIMIZE else -value


def sort_by_fitness(
    entities: Iterable[GeneticEntity],
    fitness_type: FitnessType,
    evaluation_mode: EvaluationMode,
) -> list[GeneticEntity]:
    """Stable sort from worst to best; ties keep their incoming order."""
    return sorted(
        entities, key=lambda e: goodness(e, fitness_type, evaluation_mode)
    )


def sort_best_first(
    entities: Iterable[GeneticEntity],
    fitness_type: FitnessType,
    evaluation_mode: EvaluationMode,
) -> list[GeneticEntity]:
    """Stable sort from best to worst; ties keep their incoming order."""
    return sorted(
        entities,
        key=lambda e: goodness(e, fitness_type, evaluation_mode),
        reverse=True,
    )
