"""GenFx: a pluggable evolutionary-computation engine."""

from genfx.entities import (
    BinaryStringEntity,
    GeneticEntity,
    IntegerListEntity,
    ListEntity,
)
from genfx.population import Environment, Population
from genfx.random_source import RandomSource, get_random_source, set_random_source

__version__ = "0.1.0"

__all__ = [
    "BinaryStringEntity",
    "Environment",
    "GeneticEntity",
    "IntegerListEntity",
    "ListEntity",
    "Population",
    "RandomSource",
    "get_random_source",
    "set_random_source",
]
