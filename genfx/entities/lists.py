from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from genfx.entities.base import GeneticEntity
from genfx.random_source import RandomSource


class ListEntity(GeneticEntity):
    """Entity whose genetic material is a flat list of values."""

    fill_value: Any = None

    def __init__(self, values: Iterable[Any] = ()):
        super().__init__()
        self.values = list(values)

    @property
    def representation(self) -> str:
        return ", ".join(str(v) for v in self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> Any:
        return self.values[index]

    def __setitem__(self, index: int, value: Any) -> None:
        self.values[index] = value

    def resize(self, length: int) -> None:
        """Truncate, or pad with ``fill_value``, to exactly ``length`` elements."""
        if length < 0:
            raise ValueError(f"length must be non-negative, got {length}")
        if length < len(self.values):
            del self.values[length:]
        else:
            self.values.extend([self.fill_value] * (length - len(self.values)))


class BinaryStringEntity(ListEntity):
    fill_value = False

    @property
    def representation(self) -> str:
        return "".join("1" if bit else "0" for bit in self.values)

    @classmethod
    def random(cls, rng: RandomSource, length: int) -> BinaryStringEntity:
        return cls(rng.random_int(2) == 1 for _ in range(length))

    @classmethod
    def from_string(cls, bits: str) -> BinaryStringEntity:
        if set(bits) - {"0", "1"}:
            raise ValueError(f"Not a binary string: {bits!r}")
        return cls(b == "1" for b in bits)


class IntegerListEntity(ListEntity):
    """List of integers bounded by ``[min_element_value, max_element_value]``."""

    def __init__(
        self,
        values: Iterable[int] = (),
        *,
        min_element_value: int = 0,
        max_element_value: int = 9,
    ):
        if min_element_value > max_element_value:
            raise ValueError(
                f"min_element_value ({min_element_value}) must be <= max_element_value ({max_element_value})"
            )
        super().__init__(values)
        self.min_element_value = min_element_value
        self.max_element_value = max_element_value
        self.fill_value = min_element_value

    @classmethod
    def random(
        cls,
        rng: RandomSource,
        length: int,
        min_element_value: int = 0,
        max_element_value: int = 9,
    ) -> IntegerListEntity:
        return cls(
            (
                rng.random_int_range(min_element_value, max_element_value + 1)
                for _ in range(length)
            ),
            min_element_value=min_element_value,
            max_element_value=max_element_value,
        )
