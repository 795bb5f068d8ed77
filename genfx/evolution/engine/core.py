from __future__ import annotations

from abc import ABC, abstractmethod
import asyncio
import math
from typing import Any

from loguru import logger

from genfx.entities.base import GeneticEntity
from genfx.evolution.context import EvolutionContext
from genfx.evolution.engine.config import AlgorithmConfig
from genfx.evolution.engine.evaluation import evaluate_entities
from genfx.evolution.engine.metrics import EngineMetrics
from genfx.evolution.engine.state import (
    AlgorithmState,
    is_steppable,
    validate_transition,
)
from genfx.evolution.engine.validation import validate_config
from genfx.evolution.plugins import GenerationEvent
from genfx.exceptions import (
    ConfigurationInvalidError,
    GenerationTimeoutError,
    RunCancelledError,
    UninitializedUseError,
)
from genfx.population import Environment, Population
from genfx.random_source import RandomSource, get_random_source
from genfx.utils.stats import FitnessStats

__all__ = ["GeneticAlgorithm"]


class GeneticAlgorithm(ABC):
    """
    Generation loop shared by all algorithm variants.

    One step ages every entity, lets the variant build the next generation of
    each population, evaluates unevaluated entities concurrently, rescales,
    and then runs the post-generation hooks (migration, selection cooling,
    metrics, plugins, terminator). If anything fails before the evaluation
    batch has joined, every population is restored to its pre-step contents.
    """

    config_class: type[AlgorithmConfig] = AlgorithmConfig

    def __init__(self, config: AlgorithmConfig):
        if not isinstance(config, self.config_class):
            raise TypeError(
                f"{type(self).__name__} requires {self.config_class.__name__}, got {type(config).__name__}"
            )
        violations = validate_config(config)
        if violations:
            raise ConfigurationInvalidError(violations)

        self.config = config
        self.rng: RandomSource = (
            RandomSource(config.seed) if config.seed is not None else get_random_source()
        )
        self.context = EvolutionContext(
            rng=self.rng,
            evaluation_mode=config.fitness_evaluator.evaluation_mode,
            fitness_type=config.selection_operator.fitness_type,
            scaling_enabled=config.fitness_scaling_strategy is not None,
        )
        self.environment = Environment()
        self.current_generation = 0
        self.state = AlgorithmState.CREATED
        self.engine_metrics = EngineMetrics()
        self._cancel_requested = False
        self._initialized = False

        logger.info(
            "[{}] Init | demes={}, population={}, selection={}, crossover={}, mutation={}, elitism={}, scaling={}",
            self.name,
            config.environment_size,
            config.min_population_size,
            type(config.selection_operator).__name__,
            type(config.crossover_operator).__name__ if config.crossover_operator else None,
            type(config.mutation_operator).__name__ if config.mutation_operator else None,
            type(config.elitism_strategy).__name__ if config.elitism_strategy else None,
            type(config.fitness_scaling_strategy).__name__
            if config.fitness_scaling_strategy
            else None,
        )

    @property
    def name(self) -> str:
        return type(self).__name__

    # ---- lifecycle -------------------------------------------------
    async def initialize(self) -> None:
        """Seed one population per deme, evaluate it, and emit generation 0."""
        validate_transition(self.state, AlgorithmState.INITIALIZED)
        self.state = AlgorithmState.CREATED
        self._initialized = False
        self.environment.clear()
        self.current_generation = 0
        self.context.generation = 0
        self._cancel_requested = False
        self.engine_metrics = EngineMetrics()
        self.config.selection_operator.reset()
        for metric in self.config.metrics:
            metric.reset()

        for index in range(self.config.environment_size):
            population = Population(index)
            for _ in range(self.config.min_population_size):
                population.append(self.config.entity_factory(self.rng))
            self.environment.add(population)

        try:
            await self._evaluate_environment()
        except (asyncio.TimeoutError, TimeoutError) as exc:
            self._set_state(AlgorithmState.FAILED)
            raise GenerationTimeoutError(
                f"Evaluation of generation 0 exceeded {self.config.generation_timeout}s"
            ) from exc
        except BaseException:
            self._set_state(AlgorithmState.FAILED)
            raise
        self._refresh_fitness()
        self._initialized = True
        self._set_state(AlgorithmState.INITIALIZED)

        self.config.terminator.on_algorithm_starting()
        for plugin in self.config.plugins:
            plugin.on_algorithm_starting()
        self._calculate_metrics()
        self._notify_generation()

        logger.info(
            "[{}] Initialized {} population(s) of {} entities",
            self.name,
            len(self.environment),
            self.config.min_population_size,
        )

    async def step(self) -> bool:
        """Create one generation. Returns True once the terminator reports completion."""
        self._require_steppable()
        if self._cancel_requested:
            self._set_state(AlgorithmState.FAILED)
            logger.warning(
                "[{}] Cancelled before generation {}",
                self.name,
                self.current_generation + 1,
            )
            raise RunCancelledError(
                f"Run cancelled at generation {self.current_generation}"
            )
        self._set_state(AlgorithmState.RUNNING)

        snapshot = [(p, list(p.entities)) for p in self.environment]
        ages = [(e, e.age) for e in self.environment.all_entities()]
        try:
            for entity in self.environment.all_entities():
                entity.age += 1
            for population in self.environment:
                self._create_next_generation(population)
            await self._evaluate_environment()
        except (asyncio.TimeoutError, TimeoutError) as exc:
            self._rollback(snapshot, ages)
            self._set_state(AlgorithmState.FAILED)
            logger.error(
                "[{}] Generation {} timed out after {}s",
                self.name,
                self.current_generation + 1,
                self.config.generation_timeout,
            )
            raise GenerationTimeoutError(
                f"Evaluation of generation {self.current_generation + 1} exceeded "
                f"{self.config.generation_timeout}s"
            ) from exc
        except asyncio.CancelledError:
            self._rollback(snapshot, ages)
            self._set_state(AlgorithmState.FAILED)
            logger.error("[{}] Generation {} cancelled", self.name, self.current_generation + 1)
            raise
        except Exception as exc:
            self._rollback(snapshot, ages)
            logger.error(
                "[{}] Generation {} failed: {}",
                self.name,
                self.current_generation + 1,
                exc,
            )
            raise

        self._refresh_fitness()
        self.current_generation += 1
        self.context.generation = self.current_generation
        self.engine_metrics.total_generations += 1

        self._on_generation_created()
        self.config.selection_operator.on_generation(self.context)
        self._calculate_metrics()
        self._notify_generation()

        if self.config.terminator.is_complete(self.environment, self.current_generation):
            self._set_state(AlgorithmState.COMPLETED)
            for plugin in self.config.plugins:
                plugin.on_algorithm_completed()
            logger.info(
                "[{}] Completed at generation {}", self.name, self.current_generation
            )
            return True

        logger.debug("[{}] Generation {} done", self.name, self.current_generation)
        return False

    async def run(self) -> None:
        """Step until the terminator reports completion."""
        self._require_steppable()
        logger.info("[{}] Start", self.name)
        while not await self.step():
            pass

    def cancel(self) -> None:
        """Request cancellation; honoured before the next generation starts."""
        self._cancel_requested = True
        logger.info("[{}] Cancellation requested", self.name)

    def get_status(self) -> dict[str, Any]:
        return {
            "algorithm": self.name,
            "state": self.state.value,
            "current_generation": self.current_generation,
            "population_sizes": [p.size for p in self.environment],
            "cancel_requested": self._cancel_requested,
            "engine_metrics": self.engine_metrics.model_dump(),
        }

    def get_population_stats(self, population_index: int = 0) -> FitnessStats:
        """Cached raw fitness aggregates of one deme."""
        self._require_initialized()
        return self.environment[population_index].raw_stats

    # ---- variant hooks ---------------------------------------------
    @abstractmethod
    def _create_next_generation(self, population: Population) -> None:
        """Replace the contents of ``population`` with the next generation."""

    def _on_generation_created(self) -> None:
        """Runs after the new generation is evaluated and before metrics are calculated."""

    # ---- breeding helpers ------------------------------------------
    def _generate_offspring(
        self, population: Population, count: int
    ) -> list[GeneticEntity]:
        """Select parents, recombine and mutate until at least ``count`` offspring exist."""
        offspring: list[GeneticEntity] = []
        if count <= 0:
            return offspring

        crossover = self.config.crossover_operator
        arity = crossover.required_parent_count if crossover else 1
        mutations = 0
        while len(offspring) < count:
            groups = math.ceil((count - len(offspring)) / arity)
            parents = self.config.selection_operator.select_entities(
                groups * arity, population, self.context
            )
            for g in range(groups):
                group = parents[g * arity : (g + 1) * arity]
                if crossover:
                    children = crossover.crossover(group, self.context)
                else:
                    children = [p.clone() for p in group]
                for child in children:
                    if self._mutate(child):
                        mutations += 1
                offspring.extend(children)

        self.engine_metrics.record_breeding_metrics(len(offspring), mutations)
        return offspring

    def _mutate(self, entity: GeneticEntity) -> bool:
        """Mutate a freshly produced offspring; a changed entity restarts at age 0 and needs evaluation."""
        mutation = self.config.mutation_operator
        if mutation is None or not mutation.mutate(entity, self.context):
            return False
        entity.age = 0
        entity.reset_fitness()
        return True

    # ---- internals -------------------------------------------------
    async def _evaluate_environment(self) -> None:
        evaluated = await evaluate_entities(
            self.environment.all_entities(),
            self.config.fitness_evaluator,
            timeout=self.config.generation_timeout,
        )
        self.engine_metrics.record_evaluation_metrics(evaluated)

    def _refresh_fitness(self) -> None:
        for population in self.environment:
            if self.config.fitness_scaling_strategy is not None:
                self.config.fitness_scaling_strategy.rescale(population)
            population.invalidate()

    def _calculate_metrics(self) -> None:
        for metric in self.config.metrics:
            for population in self.environment:
                metric.record(population, self.context)

    def _notify_generation(self) -> None:
        if not self.config.plugins:
            return
        event = GenerationEvent(
            generation=self.current_generation,
            environment=self.environment,
            metrics=self.config.metrics,
        )
        for plugin in self.config.plugins:
            plugin.on_generation(event)

    def _rollback(
        self,
        snapshot: list[tuple[Population, list[GeneticEntity]]],
        ages: list[tuple[GeneticEntity, int]],
    ) -> None:
        for population, entities in snapshot:
            population.replace_all(entities)
        for entity, age in ages:
            entity.age = age
        self.engine_metrics.generations_rolled_back += 1
        logger.warning(
            "[{}] Rolled back generation {}", self.name, self.current_generation + 1
        )

    def _require_steppable(self) -> None:
        if not is_steppable(self.state):
            raise UninitializedUseError(
                f"{self.name} is {self.state.value}; call initialize() first"
            )

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise UninitializedUseError(f"{self.name} has not been initialized")

    def _set_state(self, new: AlgorithmState) -> None:
        validate_transition(self.state, new)
        if new != self.state:
            logger.debug("[{}] State {} -> {}", self.name, self.state.value, new.value)
        self.state = new
