from __future__ import annotations

import asyncio
from collections.abc import Iterable

from loguru import logger

from genfx.entities.base import GeneticEntity
from genfx.evolution.fitness import FitnessEvaluator
from genfx.exceptions import EvaluationFailureError


async def _evaluate_one(evaluator: FitnessEvaluator, entity: GeneticEntity) -> float:
    try:
        return await evaluator.evaluate(entity)
    except Exception as exc:
        raise EvaluationFailureError(
            f"Fitness evaluation failed for {entity!r}: {exc}"
        ) from exc


async def evaluate_entities(
    entities: Iterable[GeneticEntity],
    evaluator: FitnessEvaluator,
    timeout: float | None = None,
) -> int:
    """
    Evaluate every unevaluated entity concurrently and join on the whole batch.

    Fitness values are only written once all evaluations succeeded, so a
    failed, timed out, or cancelled batch leaves every entity untouched. The
    remaining tasks are cancelled on the first failure. Returns the number of
    entities evaluated.
    """
    pending = [e for e in entities if not e.is_evaluated]
    if not pending:
        return 0

    tasks = [asyncio.create_task(_evaluate_one(evaluator, e)) for e in pending]
    try:
        values = await asyncio.wait_for(asyncio.gather(*tasks), timeout=timeout)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    for entity, value in zip(pending, values):
        entity.set_fitness(value)
    logger.debug("[evaluate_entities] Evaluated {} entities", len(pending))
    return len(pending)
