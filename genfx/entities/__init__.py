from genfx.entities.base import GeneticEntity
from genfx.entities.lists import BinaryStringEntity, IntegerListEntity, ListEntity

__all__ = ["BinaryStringEntity", "GeneticEntity", "IntegerListEntity", "ListEntity"]
