import pytest

from genfx.entities import BinaryStringEntity, IntegerListEntity, ListEntity
from genfx.evolution.operators.mutation import (
    InversionOperator,
    UniformBitMutationOperator,
)
from genfx.evolution.strategies.models import FitnessType


def test_unevaluated_entity_has_no_fitness():
    entity = BinaryStringEntity.from_string("0101")
    assert not entity.is_evaluated
    with pytest.raises(ValueError):
        entity.get_fitness_value(FitnessType.RAW)


def test_scaled_tracks_raw_until_rescaled():
    entity = BinaryStringEntity.from_string("11")
    entity.set_fitness(2)
    assert entity.get_fitness_value(FitnessType.SCALED) == 2.0
    entity.scaled_fitness_value = 7.0
    assert entity.get_fitness_value(FitnessType.RAW) == 2.0


def test_clone_is_independent():
    original = BinaryStringEntity.from_string("1010")
    original.set_fitness(2)
    original.age = 3
    clone = original.clone()

    clone[0] = False
    clone.set_fitness(9)
    clone.age = 0

    assert original.representation == "1010"
    assert original.raw_fitness_value == 2.0
    assert original.age == 3


def test_mutating_a_clone_leaves_original_untouched(ctx):
    original = BinaryStringEntity.from_string("00000000")
    original.set_fitness(0)
    clone = original.clone()

    changed = UniformBitMutationOperator(mutation_rate=1.0).mutate(clone, ctx)

    assert changed
    assert clone.representation == "11111111"
    assert original.representation == "00000000"
    assert original.raw_fitness_value == 0.0
    assert original.scaled_fitness_value == 0.0


def test_inversion_on_clone_leaves_original_untouched(ctx):
    original = IntegerListEntity([1, 2, 3, 4], min_element_value=0, max_element_value=9)
    clone = original.clone()
    assert InversionOperator(mutation_rate=1.0).mutate(clone, ctx)
    assert original.values == [1, 2, 3, 4]
    assert sorted(clone.values) == [1, 2, 3, 4]
    assert clone.values != [1, 2, 3, 4]


def test_resize_pads_with_fill_value():
    bits = BinaryStringEntity.from_string("11")
    bits.resize(4)
    assert bits.representation == "1100"
    bits.resize(1)
    assert bits.representation == "1"

    ints = IntegerListEntity([5], min_element_value=2, max_element_value=8)
    ints.resize(3)
    assert ints.values == [5, 2, 2]


def test_random_constructors_respect_bounds(rng):
    bits = BinaryStringEntity.random(rng, 40)
    assert len(bits) == 40
    assert set(bits.representation) <= {"0", "1"}

    ints = IntegerListEntity.random(rng, 200, min_element_value=3, max_element_value=5)
    assert set(ints.values) == {3, 4, 5}


def test_invalid_inputs():
    with pytest.raises(ValueError):
        BinaryStringEntity.from_string("012")
    with pytest.raises(ValueError):
        IntegerListEntity([], min_element_value=5, max_element_value=1)
    with pytest.raises(ValueError):
        ListEntity([1]).resize(-1)
