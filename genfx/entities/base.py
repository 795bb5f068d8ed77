from __future__ import annotations

from abc import ABC, abstractmethod
import copy
from typing import Any

from genfx.evolution.strategies.models import FitnessType


class GeneticEntity(ABC):
    """
    One candidate solution.

    Fitness values are ``None`` until the evaluation phase has run for the
    entity. The scaled value tracks the raw value until a scaling strategy
    overwrites it. Operators never change an entity that is already part of a
    population; they work on clones.
    """

    def __init__(self) -> None:
        self.age = 0
        self.raw_fitness_value: float | None = None
        self.scaled_fitness_value: float | None = None

    @property
    @abstractmethod
    def representation(self) -> Any:
        """Opaque genetic material, used for display and debugging."""

    @property
    def is_evaluated(self) -> bool:
        return self.raw_fitness_value is not None

    def set_fitness(self, value: float) -> None:
        """Store a freshly evaluated raw fitness; scaled follows until rescaled."""
        self.raw_fitness_value = self.scaled_fitness_value = float(value)

    def reset_fitness(self) -> None:
        """Mark the entity as needing evaluation."""
        self.raw_fitness_value = None
        self.scaled_fitness_value = None

    def get_fitness_value(self, fitness_type: FitnessType) -> float:
        value = (
            self.raw_fitness_value
            if fitness_type == FitnessType.RAW
            else self.scaled_fitness_value
        )
        if value is None:
            raise ValueError(f"Entity {self!r} has not been evaluated")
        return value

    def clone(self) -> GeneticEntity:
        """Deep copy with an independent representation."""
        return copy.deepcopy(self)

    def __str__(self) -> str:
        return str(self.representation)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(representation={self.representation!r}, "
            f"raw={self.raw_fitness_value}, age={self.age})"
        )
