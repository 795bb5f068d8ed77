from __future__ import annotations

from abc import ABC, abstractmethod
import math
import time

from loguru import logger

from genfx.evolution.strategies.models import FitnessType
from genfx.population import Environment


class Terminator(ABC):
    """Decides when a run is complete; consulted after every generation."""

    def validate(self) -> list[str]:
        return []

    def on_algorithm_starting(self) -> None:
        """Called once, right before the first generation is created."""

    @abstractmethod
    def is_complete(self, environment: Environment, current_generation: int) -> bool: ...


class EmptyTerminator(Terminator):
    """Never completes; the run must be stopped by the driver."""

    def is_complete(self, environment: Environment, current_generation: int) -> bool:
        return False


class GenerationalTerminator(Terminator):
    def __init__(self, final_generation: int = 100):
        self.final_generation = final_generation

    def validate(self) -> list[str]:
        if self.final_generation < 1:
            return [f"final_generation must be >= 1, got {self.final_generation}"]
        return []

    def is_complete(self, environment: Environment, current_generation: int) -> bool:
        return current_generation >= self.final_generation


class FitnessTargetTerminator(Terminator):
    """Completes as soon as any entity in any deme hits ``fitness_target`` (within float tolerance)."""

    def __init__(
        self, fitness_target: float, fitness_type: FitnessType = FitnessType.RAW
    ):
        self.fitness_target = fitness_target
        self.fitness_type = FitnessType(fitness_type)

    def is_complete(self, environment: Environment, current_generation: int) -> bool:
        for population in environment:
            for entity in population:
                value = entity.get_fitness_value(self.fitness_type)
                if math.isclose(value, self.fitness_target, rel_tol=1e-9, abs_tol=1e-12):
                    logger.info(
                        "[FitnessTargetTerminator] Target {} reached in population {} at generation {}",
                        self.fitness_target,
                        population.index,
                        current_generation,
                    )
                    return True
        return False


class TimeDurationTerminator(Terminator):
    """Completes once ``time_limit`` seconds have elapsed since the algorithm started."""

    def __init__(self, time_limit: float):
        self.time_limit = time_limit
        self._started_at: float | None = None

    def validate(self) -> list[str]:
        if not self.time_limit > 0:
            return [f"time_limit must be positive, got {self.time_limit}"]
        return []

    def on_algorithm_starting(self) -> None:
        self._started_at = time.monotonic()

    def is_complete(self, environment: Environment, current_generation: int) -> bool:
        if self._started_at is None:
            self._started_at = time.monotonic()
        return time.monotonic() - self._started_at >= self.time_limit
