from __future__ import annotations

from collections.abc import Iterable, Iterator

from loguru import logger

from genfx.entities.base import GeneticEntity
from genfx.evolution.strategies.models import FitnessType
from genfx.utils.stats import FitnessStats, compute_stats


class Population:
    """
    Ordered, mutable collection of entities for one deme.

    Insertion order carries no fitness meaning. Raw fitness aggregates are
    cached and keyed by the identity and raw fitness of every member, so any
    change to membership or to a member's raw value invalidates the cache
    without explicit bookkeeping.
    """

    def __init__(self, index: int = 0, entities: Iterable[GeneticEntity] = ()):
        if index < 0:
            raise ValueError(f"index must be non-negative, got {index}")
        self.index = index
        self._entities: list[GeneticEntity] = list(entities)
        self._raw_key: tuple | None = None
        self._raw_stats: FitnessStats | None = None

    @property
    def entities(self) -> list[GeneticEntity]:
        return self._entities

    @property
    def size(self) -> int:
        return len(self._entities)

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[GeneticEntity]:
        return iter(self._entities)

    def __getitem__(self, index: int) -> GeneticEntity:
        return self._entities[index]

    def append(self, entity: GeneticEntity) -> None:
        self._entities.append(entity)

    def extend(self, entities: Iterable[GeneticEntity]) -> None:
        self._entities.extend(entities)

    def remove(self, entity: GeneticEntity) -> None:
        """Remove by identity; entities do not define value equality."""
        for i, member in enumerate(self._entities):
            if member is entity:
                del self._entities[i]
                return
        raise ValueError(f"{entity!r} is not in population {self.index}")

    def replace_all(self, entities: Iterable[GeneticEntity]) -> None:
        self._entities = list(entities)

    def clear(self) -> None:
        self._entities.clear()

    def invalidate(self) -> None:
        self._raw_key = None
        self._raw_stats = None

    def unevaluated(self) -> list[GeneticEntity]:
        return [e for e in self._entities if not e.is_evaluated]

    def fitness_values(self, fitness_type: FitnessType) -> list[float]:
        return [e.get_fitness_value(fitness_type) for e in self._entities]

    @property
    def raw_stats(self) -> FitnessStats:
        key = tuple((id(e), e.raw_fitness_value) for e in self._entities)
        if self._raw_stats is None or key != self._raw_key:
            self._raw_stats = compute_stats(self.fitness_values(FitnessType.RAW))
            self._raw_key = key
            logger.debug(
                "[Population] Recomputed raw aggregates for population {} (size={})",
                self.index,
                self.size,
            )
        return self._raw_stats

    def scaled_stats(self) -> FitnessStats:
        return compute_stats(self.fitness_values(FitnessType.SCALED))

    @property
    def raw_mean(self) -> float:
        return self.raw_stats.mean

    @property
    def raw_min(self) -> float:
        return self.raw_stats.minimum

    @property
    def raw_max(self) -> float:
        return self.raw_stats.maximum

    @property
    def raw_standard_deviation(self) -> float:
        return self.raw_stats.standard_deviation

    def __repr__(self) -> str:
        return f"Population(index={self.index}, size={self.size})"


class Environment:
    """The demes of one run, indexed in creation order."""

    def __init__(self, populations: Iterable[Population] = ()):
        self.populations: list[Population] = list(populations)

    def add(self, population: Population) -> None:
        self.populations.append(population)

    def clear(self) -> None:
        self.populations.clear()

    def all_entities(self) -> list[GeneticEntity]:
        return [e for p in self.populations for e in p]

    def __len__(self) -> int:
        return len(self.populations)

    def __iter__(self) -> Iterator[Population]:
        return iter(self.populations)

    def __getitem__(self, index: int) -> Population:
        return self.populations[index]

    def __repr__(self) -> str:
        return f"Environment(populations={[p.size for p in self.populations]})"
