from __future__ import annotations

from abc import ABC
from collections.abc import Callable

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from genfx.evolution.metrics import Metric
from genfx.population import Environment


class GenerationEvent(BaseModel):
    """Emitted after generation 0 and after every later generation is created."""

    generation: int = Field(ge=0, description="Index of the generation just completed")
    environment: Environment = Field(..., description="Live environment, not a copy")
    metrics: list[Metric] = Field(default_factory=list)
    model_config = ConfigDict(arbitrary_types_allowed=True)


class Plugin(ABC):
    """Observer of an algorithm run. Hooks are called synchronously by the engine."""

    def validate(self) -> list[str]:
        return []

    def on_algorithm_starting(self) -> None:
        pass

    def on_generation(self, event: GenerationEvent) -> None:
        pass

    def on_algorithm_completed(self) -> None:
        pass


class CallbackPlugin(Plugin):
    def __init__(self, callback: Callable[[GenerationEvent], None]):
        self.callback = callback

    def on_generation(self, event: GenerationEvent) -> None:
        self.callback(event)


class MetricLogger(Plugin):
    """Writes the latest value of every metric, per population, to loguru."""

    def __init__(self, category: str = "genfx.metrics"):
        self.category = category
        self._log = logger.bind(category=category)

    def on_algorithm_starting(self) -> None:
        self._log.info("[MetricLogger] Algorithm starting")

    def on_generation(self, event: GenerationEvent) -> None:
        for population in event.environment:
            for metric in event.metrics:
                result = metric.latest(population.index)
                if result is None or result.generation_index != event.generation:
                    continue
                self._log.info(
                    "[MetricLogger] gen={} pop={} {}={}",
                    event.generation,
                    population.index,
                    metric.name,
                    result.value,
                )

    def on_algorithm_completed(self) -> None:
        self._log.info("[MetricLogger] Algorithm completed")
