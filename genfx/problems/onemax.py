"""OneMax: maximize the number of set bits in a binary string."""

from __future__ import annotations

from genfx.entities.base import GeneticEntity
from genfx.entities.lists import BinaryStringEntity
from genfx.evolution.fitness import FitnessEvaluator
from genfx.evolution.strategies.models import EvaluationMode
from genfx.random_source import RandomSource


class OneMaxEvaluator(FitnessEvaluator):
    def __init__(self) -> None:
        super().__init__(EvaluationMode.MAXIMIZE)

    async def evaluate(self, entity: GeneticEntity) -> float:
        if not isinstance(entity, BinaryStringEntity):
            raise TypeError("OneMaxEvaluator requires a BinaryStringEntity")
        return float(sum(1 for bit in entity.values if bit))


class BinaryStringFactory:
    """Picklable, Hydra-instantiable entity factory producing random bit strings."""

    def __init__(self, length: int = 32):
        if length < 1:
            raise ValueError(f"length must be >= 1, got {length}")
        self.length = length

    def __call__(self, rng: RandomSource) -> BinaryStringEntity:
        return BinaryStringEntity.random(rng, self.length)
