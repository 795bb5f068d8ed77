"""Tests for crossover and mutation operators."""

import pytest

from genfx.entities import BinaryStringEntity, IntegerListEntity
from genfx.evolution.operators import (
    InversionOperator,
    ListShiftMutationOperator,
    MultiPointCrossoverOperator,
    SinglePointCrossoverOperator,
    UniformBitMutationOperator,
    UniformIntegerMutationOperator,
)
from genfx.random_source import RandomSource

from conftest import ScoredEntity


def _parents():
    first = BinaryStringEntity.from_string("00000000")
    second = BinaryStringEntity.from_string("11111111")
    for parent in (first, second):
        parent.set_fitness(1.0)
        parent.age = 4
    return first, second


class TestCrossover:
    def test_skipped_crossover_passes_clones_through(self, ctx):
        first, second = _parents()
        offspring = SinglePointCrossoverOperator(crossover_rate=0.0).crossover(
            [first, second], ctx
        )
        assert [o.representation for o in offspring] == ["00000000", "11111111"]
        assert all(o is not p for o, p in zip(offspring, (first, second)))
        assert all(o.raw_fitness_value == 1.0 and o.age == 4 for o in offspring)

    def test_applied_crossover_resets_offspring(self, ctx):
        first, second = _parents()
        offspring = SinglePointCrossoverOperator(crossover_rate=1.0).crossover(
            [first, second], ctx
        )
        assert len(offspring) == 2
        assert all(o.age == 0 and not o.is_evaluated for o in offspring)

    def test_parents_are_never_modified(self, ctx):
        first, second = _parents()
        operator = MultiPointCrossoverOperator(crossover_rate=1.0, crossover_point_count=3)
        for _ in range(20):
            operator.crossover([first, second], ctx)
        assert first.representation == "00000000"
        assert second.representation == "11111111"
        assert first.raw_fitness_value == 1.0

    def test_single_point_swaps_tails(self, ctx):
        first, second = _parents()
        a, b = SinglePointCrossoverOperator(crossover_rate=1.0).crossover([first, second], ctx)
        locus = a.representation.find("1")
        assert locus >= 0
        assert a.representation == "0" * locus + "1" * (8 - locus)
        assert b.representation == "1" * locus + "0" * (8 - locus)

    def test_single_point_with_unequal_lengths(self, ctx):
        short = BinaryStringEntity.from_string("000")
        long = BinaryStringEntity.from_string("111111")
        a, b = SinglePointCrossoverOperator(crossover_rate=1.0).crossover([short, long], ctx)
        assert sorted([len(a), len(b)]) == [3, 6]
        assert a.representation.count("0") + b.representation.count("0") == 3

    def test_multi_point_conserves_genes(self, ctx):
        first, second = _parents()
        a, b = MultiPointCrossoverOperator(
            crossover_rate=1.0, crossover_point_count=2
        ).crossover([first, second], ctx)
        assert len(a) == len(b) == 8
        for i in range(8):
            assert {a[i], b[i]} == {True, False}

    def test_multi_point_needs_enough_loci(self, ctx):
        first = BinaryStringEntity.from_string("01")
        second = BinaryStringEntity.from_string("10")
        operator = MultiPointCrossoverOperator(crossover_rate=1.0, crossover_point_count=3)
        with pytest.raises(ValueError):
            operator.crossover([first, second], ctx)

    def test_parent_count_is_checked(self, ctx):
        first, _ = _parents()
        with pytest.raises(ValueError):
            SinglePointCrossoverOperator().crossover([first], ctx)

    def test_validation(self):
        assert SinglePointCrossoverOperator(crossover_rate=1.2).validate()
        assert MultiPointCrossoverOperator(crossover_point_count=0).validate()
        assert SinglePointCrossoverOperator().crossover_rate == 0.7


class TestMutation:
    def test_bit_mutation_full_rate_flips_every_bit(self, ctx):
        entity = BinaryStringEntity.from_string("0101")
        assert UniformBitMutationOperator(mutation_rate=1.0).mutate(entity, ctx)
        assert entity.representation == "1010"

    def test_zero_rate_changes_nothing(self, ctx):
        entity = BinaryStringEntity.from_string("0101")
        assert not UniformBitMutationOperator(mutation_rate=0.0).mutate(entity, ctx)
        assert entity.representation == "0101"

    @pytest.mark.parametrize(
        "operator,entity",
        [
            (UniformBitMutationOperator(1.0), BinaryStringEntity()),
            (UniformIntegerMutationOperator(1.0), IntegerListEntity()),
            (InversionOperator(1.0), IntegerListEntity()),
            (ListShiftMutationOperator(1.0), IntegerListEntity()),
        ],
        ids=["bit", "integer", "inversion", "shift"],
    )
    def test_empty_entity_is_a_no_op(self, operator, entity, ctx):
        assert operator.mutate(entity, ctx) is False
        assert len(entity) == 0

    def test_integer_mutation_picks_a_different_in_range_value(self, ctx):
        entity = IntegerListEntity([2] * 50, min_element_value=0, max_element_value=3)
        assert UniformIntegerMutationOperator(1.0).mutate(entity, ctx)
        assert all(v != 2 and 0 <= v <= 3 for v in entity.values)

    def test_integer_mutation_with_single_value_range(self, ctx):
        entity = IntegerListEntity([4, 4], min_element_value=4, max_element_value=4)
        assert not UniformIntegerMutationOperator(1.0).mutate(entity, ctx)

    def test_default_rate(self):
        assert UniformBitMutationOperator().mutation_rate == 0.001
        assert UniformBitMutationOperator(mutation_rate=2.0).validate()

    def test_type_mismatch(self, ctx):
        with pytest.raises(TypeError):
            UniformBitMutationOperator(1.0).mutate(IntegerListEntity([1]), ctx)

    def test_list_shift_is_noop_at_zero_rate(self, ctx):
        entity = IntegerListEntity([0, 1, 2, 3])
        assert not ListShiftMutationOperator(0.0).mutate(entity, ctx)
        assert entity.values == [0, 1, 2, 3]


class ScriptedSource(RandomSource):
    """Replays fixed integer draws; ratios are always 0."""

    def __init__(self, ints):
        super().__init__(0)
        self._ints = list(ints)

    def random_int(self, max_value):
        return self._ints.pop(0)

    def random_ratio(self):
        return 0.0


class TestListShift:
    @pytest.mark.parametrize(
        "draws,expected",
        [
            ([1, 4], [0, 4, 1, 2, 3, 5]),
            ([4, 1], [0, 2, 3, 4, 1, 5]),
            ([2, 2, 3], [0, 1, 3, 2, 4, 5]),
        ],
        ids=["rightward", "leftward", "redraws-equal-position"],
    )
    def test_segment_rotates_by_one(self, draws, expected, make_ctx):
        entity = IntegerListEntity([0, 1, 2, 3, 4, 5], max_element_value=5)
        ctx = make_ctx(source=ScriptedSource(draws))
        assert ListShiftMutationOperator(1.0).mutate(entity, ctx)
        assert entity.values == expected

    def test_requires_list_entity(self, ctx):
        with pytest.raises(TypeError):
            ListShiftMutationOperator(1.0).mutate(ScoredEntity(1.0), ctx)
