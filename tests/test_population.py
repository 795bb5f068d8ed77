import pytest

from genfx.population import Environment, Population

from conftest import make_entity, make_population


def test_raw_aggregates():
    population = make_population([1.0, 2.0, 3.0, 6.0])
    assert population.raw_mean == pytest.approx(3.0)
    assert population.raw_min == 1.0
    assert population.raw_max == 6.0
    assert population.raw_standard_deviation == pytest.approx(1.8708286933869707)


def test_cache_follows_raw_fitness_changes():
    population = make_population([1.0, 2.0, 3.0])
    assert population.raw_max == 3.0
    population[0].set_fitness(10.0)
    assert population.raw_max == 10.0


def test_cache_follows_membership_changes():
    population = make_population([1.0, 2.0, 3.0])
    assert population.raw_mean == pytest.approx(2.0)
    population.append(make_entity(10.0))
    assert population.raw_mean == pytest.approx(4.0)
    population.remove(population[-1])
    assert population.raw_mean == pytest.approx(2.0)


def test_remove_is_by_identity():
    population = make_population([1.0, 1.0])
    twin = population[1]
    population.remove(twin)
    assert population.size == 1
    assert population[0] is not twin
    with pytest.raises(ValueError):
        population.remove(twin)


def test_aggregates_need_members():
    with pytest.raises(ValueError):
        Population(0).raw_mean


def test_scaled_stats_are_fresh():
    population = make_population([1.0, 2.0])
    population[0].scaled_fitness_value = 5.0
    assert population.scaled_stats().maximum == 5.0
    assert population.raw_max == 2.0


def test_environment_collects_entities():
    environment = Environment([make_population([1.0, 2.0], 0), make_population([3.0], 1)])
    assert len(environment) == 2
    assert [e.raw_fitness_value for e in environment.all_entities()] == [1.0, 2.0, 3.0]
    assert environment[1].index == 1
