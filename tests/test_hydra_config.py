from pathlib import Path

from hydra import compose, initialize_config_dir
from hydra.utils import instantiate
import pytest

from genfx.config.resolvers import register_resolvers
from genfx.evolution.algorithms import (
    MultiDemeGeneticAlgorithm,
    SimpleGeneticAlgorithm,
    SteadyStateGeneticAlgorithm,
)
from genfx.evolution.engine import AlgorithmState
from genfx.evolution.strategies.replacement import ReplacementValueKind
from run import run_experiment

CONFIG_DIR = str(Path(__file__).resolve().parents[1] / "config")

SMALL_RUN = ["population_size=8", "bit_length=8", "max_generations=2"]


@pytest.fixture(autouse=True)
def resolvers():
    register_resolvers()


def _compose(algorithm, *overrides):
    with initialize_config_dir(version_base=None, config_dir=CONFIG_DIR):
        return compose(
            config_name="config",
            overrides=[f"algorithm={algorithm}", *SMALL_RUN, *overrides],
        )


@pytest.mark.parametrize(
    "algorithm,expected",
    [
        ("simple", SimpleGeneticAlgorithm),
        ("steady_state", SteadyStateGeneticAlgorithm),
        ("multi_deme", MultiDemeGeneticAlgorithm),
    ],
)
def test_every_variant_instantiates(algorithm, expected):
    instance = instantiate(_compose(algorithm).algorithm, _convert_="all")
    assert type(instance) is expected
    assert instance.config.min_population_size == 8
    assert instance.config.terminator.final_generation == 2
    assert instance.state == AlgorithmState.CREATED


def test_replacement_resolver_builds_value():
    instance = instantiate(_compose("steady_state").algorithm, _convert_="all")
    assert instance.config.replacement_value.kind == ReplacementValueKind.PERCENTAGE
    assert instance.config.replacement_value.value == 10


@pytest.mark.asyncio
@pytest.mark.parametrize("algorithm", ["simple", "steady_state", "multi_deme"])
async def test_run_experiment_completes(algorithm):
    cfg = _compose(algorithm, "algorithm.config.environment_size=2")
    instance = await run_experiment(cfg)
    assert instance.state == AlgorithmState.COMPLETED
    assert instance.current_generation == 2
    assert [p.size for p in instance.environment] == [8, 8]
