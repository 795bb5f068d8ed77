import random

import pytest

from genfx.evolution.strategies.elitism import ElitismStrategy
from genfx.evolution.strategies.models import EvaluationMode

from conftest import make_population


def test_ten_percent_of_twenty_is_the_two_best(ctx):
    values = list(range(20))
    random.Random(0).shuffle(values)
    population = make_population([float(v) for v in values])

    elite = ElitismStrategy(elitist_ratio=0.1).select_elite(population, ctx)

    assert [e.raw_fitness_value for e in elite] == [19.0, 18.0]


def test_quarter_of_four(ctx):
    population = make_population([5.0, 3.0, 8.0, 1.0])
    elite = ElitismStrategy(elitist_ratio=0.25).select_elite(population, ctx)
    assert len(elite) == 1
    assert elite[0] is population[2]


def test_minimize_keeps_lowest(make_ctx):
    population = make_population([5.0, 3.0, 8.0, 1.0])
    ctx = make_ctx(evaluation_mode=EvaluationMode.MINIMIZE)
    elite = ElitismStrategy(elitist_ratio=0.5).select_elite(population, ctx)
    assert [e.raw_fitness_value for e in elite] == [1.0, 3.0]


def test_ties_keep_original_order(ctx):
    population = make_population([2.0, 7.0, 7.0, 7.0])
    elite = ElitismStrategy(elitist_ratio=0.5).select_elite(population, ctx)
    assert [e.representation for e in elite] == ["e1", "e2"]


@pytest.mark.parametrize("ratio,size,expected", [(0.0, 10, 0), (0.19, 10, 1), (0.5, 7, 3), (1.0, 4, 4)])
def test_count_is_floored(ratio, size, expected, ctx):
    population = make_population([float(i) for i in range(size)])
    assert len(ElitismStrategy(ratio).select_elite(population, ctx)) == expected


def test_validation():
    assert ElitismStrategy(1.5).validate()
    assert ElitismStrategy(-0.1).validate()
    assert ElitismStrategy(0.3).validate() == []
