from genfx.evolution.algorithms.multi_deme import (
    MultiDemeAlgorithmConfig,
    MultiDemeGeneticAlgorithm,
)
from genfx.evolution.algorithms.simple import SimpleGeneticAlgorithm
from genfx.evolution.algorithms.steady_state import (
    SteadyStateAlgorithmConfig,
    SteadyStateGeneticAlgorithm,
)

__all__ = [
    "MultiDemeAlgorithmConfig",
    "MultiDemeGeneticAlgorithm",
    "SimpleGeneticAlgorithm",
    "SteadyStateAlgorithmConfig",
    "SteadyStateGeneticAlgorithm",
]
