from __future__ import annotations

from abc import ABC, abstractmethod
import asyncio
from collections.abc import Callable
import inspect
from typing import Any

from genfx.entities.base import GeneticEntity
from genfx.evolution.strategies.models import EvaluationMode


class FitnessEvaluator(ABC):
    """Computes the raw fitness of one entity; may be long-running."""

    def __init__(self, evaluation_mode: EvaluationMode = EvaluationMode.MAXIMIZE):
        self.evaluation_mode = EvaluationMode(evaluation_mode)

    def validate(self) -> list[str]:
        return []

    @abstractmethod
    async def evaluate(self, entity: GeneticEntity) -> float: ...


class FunctionFitnessEvaluator(FitnessEvaluator):
    """
    Adapts a plain callable.

    Coroutine functions are awaited directly. Synchronous callables run
    inline, or in a worker thread when ``run_in_thread`` is set so that slow
    evaluations of one generation overlap.
    """

    def __init__(
        self,
        function: Callable[[GeneticEntity], Any],
        evaluation_mode: EvaluationMode = EvaluationMode.MAXIMIZE,
        run_in_thread: bool = False,
    ):
        super().__init__(evaluation_mode)
        self.function = function
        self.run_in_thread = run_in_thread

    async def evaluate(self, entity: GeneticEntity) -> float:
        if inspect.iscoroutinefunction(self.function):
            return float(await self.function(entity))
        if self.run_in_thread:
            return float(await asyncio.to_thread(self.function, entity))
        return float(self.function(entity))
