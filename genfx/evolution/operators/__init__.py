from genfx.evolution.operators.crossover import (
    CrossoverOperator,
    MultiPointCrossoverOperator,
    SinglePointCrossoverOperator,
)
from genfx.evolution.operators.mutation import (
    InversionOperator,
    ListShiftMutationOperator,
    MutationOperator,
    UniformBitMutationOperator,
    UniformIntegerMutationOperator,
)

__all__ = [
    "CrossoverOperator",
    "InversionOperator",
    "ListShiftMutationOperator",
    "MultiPointCrossoverOperator",
    "MutationOperator",
    "SinglePointCrossoverOperator",
    "UniformBitMutationOperator",
    "UniformIntegerMutationOperator",
]
