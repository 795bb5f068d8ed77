from __future__ import annotations

from abc import ABC, abstractmethod

from genfx.entities.base import GeneticEntity
from genfx.entities.lists import BinaryStringEntity, IntegerListEntity, ListEntity
from genfx.evolution.context import EvolutionContext


class MutationOperator(ABC):
    """
    Perturbs an entity in place and reports whether anything changed.

    The engine only ever passes clones, so implementations may modify the
    argument freely. Zero-length entities must be a no-op returning False.
    """

    def __init__(self, mutation_rate: float = 0.001):
        self.mutation_rate = mutation_rate

    def validate(self) -> list[str]:
        if not 0 <= self.mutation_rate <= 1:
            return [f"mutation_rate must be in [0, 1], got {self.mutation_rate}"]
        return []

    @abstractmethod
    def mutate(self, entity: GeneticEntity, ctx: EvolutionContext) -> bool: ...


class UniformBitMutationOperator(MutationOperator):
    """Flips each bit independently with probability ``mutation_rate``."""

    def mutate(self, entity: GeneticEntity, ctx: EvolutionContext) -> bool:
        if not isinstance(entity, BinaryStringEntity):
            raise TypeError("UniformBitMutationOperator requires a BinaryStringEntity")
        mutated = False
        for i in range(len(entity)):
            if ctx.rng.random_ratio() < self.mutation_rate:
                entity[i] = not entity[i]
                mutated = True
        return mutated


class UniformIntegerMutationOperator(MutationOperator):
    """Replaces each element, with probability ``mutation_rate``, by a different in-range value."""

    def mutate(self, entity: GeneticEntity, ctx: EvolutionContext) -> bool:
        if not isinstance(entity, IntegerListEntity):
            raise TypeError("UniformIntegerMutationOperator requires an IntegerListEntity")
        if entity.min_element_value == entity.max_element_value:
            return False
        mutated = False
        for i in range(len(entity)):
            if ctx.rng.random_ratio() < self.mutation_rate:
                current = entity[i]
                value = current
                while value == current:
                    value = ctx.rng.random_int_range(
                        entity.min_element_value, entity.max_element_value + 1
                    )
                entity[i] = value
                mutated = True
        return mutated


class InversionOperator(MutationOperator):
    """With probability ``mutation_rate`` swaps the values at two distinct positions."""

    def mutate(self, entity: GeneticEntity, ctx: EvolutionContext) -> bool:
        if not isinstance(entity, ListEntity):
            raise TypeError("InversionOperator requires a ListEntity")
        if len(entity) < 2 or ctx.rng.random_ratio() >= self.mutation_rate:
            return False
        first = ctx.rng.random_int(len(entity))
        second = first
        while second == first:
            second = ctx.rng.random_int(len(entity))
        entity[first], entity[second] = entity[second], entity[first]
        return True


class ListShiftMutationOperator(MutationOperator):
    """
    With probability ``mutation_rate`` rotates the segment between two
    distinct random positions by one place.

    The value at the first drawn position moves one step toward the second,
    and the value at the second position wraps around to the first.
    """

    def mutate(self, entity: GeneticEntity, ctx: EvolutionContext) -> bool:
        if not isinstance(entity, ListEntity):
            raise TypeError("ListShiftMutationOperator requires a ListEntity")
        if len(entity) < 2 or ctx.rng.random_ratio() >= self.mutation_rate:
            return False
        first = ctx.rng.random_int(len(entity))
        second = first
        while second == first:
            second = ctx.rng.random_int(len(entity))

        values = entity.values
        if first < second:
            segment = values[first : second + 1]
            values[first : second + 1] = segment[-1:] + segment[:-1]
        else:
            segment = values[second : first + 1]
            values[second : first + 1] = segment[1:] + segment[:1]
        return True
