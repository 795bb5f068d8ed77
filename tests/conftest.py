"""Pytest configuration and fixtures for GenFx tests."""

import asyncio

import pytest

from genfx.entities.base import GeneticEntity
from genfx.evolution.context import EvolutionContext
from genfx.evolution.fitness import FitnessEvaluator
from genfx.evolution.strategies.models import EvaluationMode, FitnessType
from genfx.population import Population
from genfx.random_source import RandomSource


class ScoredEntity(GeneticEntity):
    """Entity whose genetic material is a single number that is also its fitness."""

    def __init__(self, score: float, label: str | None = None):
        super().__init__()
        self.score = score
        self.label = label

    @property
    def representation(self):
        return self.label if self.label is not None else self.score


class ScoreEvaluator(FitnessEvaluator):
    """Fitness equals the entity's score; optional delay and failure injection."""

    def __init__(self, evaluation_mode=EvaluationMode.MAXIMIZE):
        super().__init__(evaluation_mode)
        self.calls = 0
        self.delay = 0.0
        self.fail_on_call: int | None = None

    async def evaluate(self, entity):
        self.calls += 1
        if self.fail_on_call is not None and self.calls >= self.fail_on_call:
            raise RuntimeError("boom")
        if self.delay:
            await asyncio.sleep(self.delay)
        return entity.score


class ScoredFactory:
    def __call__(self, rng: RandomSource) -> ScoredEntity:
        return ScoredEntity(rng.random_ratio())


def make_entity(raw: float, label: str | None = None, scaled: float | None = None) -> ScoredEntity:
    entity = ScoredEntity(raw, label)
    entity.set_fitness(raw)
    if scaled is not None:
        entity.scaled_fitness_value = scaled
    return entity


def make_population(values, index: int = 0) -> Population:
    return Population(index, [make_entity(v, label=f"e{i}") for i, v in enumerate(values)])


@pytest.fixture
def rng():
    """Provide a deterministic random source for tests."""
    return RandomSource(42)


@pytest.fixture
def make_ctx(rng):
    def _make(
        evaluation_mode=EvaluationMode.MAXIMIZE,
        fitness_type=FitnessType.RAW,
        scaling_enabled=False,
        source=None,
    ):
        return EvolutionContext(
            rng=source or rng,
            evaluation_mode=evaluation_mode,
            fitness_type=fitness_type,
            scaling_enabled=scaling_enabled,
        )

    return _make


@pytest.fixture
def ctx(make_ctx):
    return make_ctx()


@pytest.fixture
def score_evaluator():
    return ScoreEvaluator()
