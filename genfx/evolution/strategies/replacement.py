from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator


class ReplacementValueKind(str, Enum):
    PERCENTAGE = "percentage"
    FIXED_COUNT = "fixed_count"


class PopulationReplacementValue(BaseModel):
    """How many entities a steady-state generation replaces: a percentage or a fixed count."""

    value: int = Field(default=10, ge=0)
    kind: ReplacementValueKind = Field(default=ReplacementValueKind.PERCENTAGE)

    @model_validator(mode="after")
    def check_percentage(self) -> PopulationReplacementValue:
        if self.kind == ReplacementValueKind.PERCENTAGE and self.value > 100:
            raise ValueError(f"percentage must be in [0, 100], got {self.value}")
        return self

    @classmethod
    def parse(cls, raw: str | int) -> PopulationReplacementValue:
        """Accept ``"25%"`` for a percentage, or an integer (or digit string) for a fixed count."""
        if isinstance(raw, str):
            text = raw.strip()
            if text.endswith("%"):
                return cls(value=int(text[:-1]), kind=ReplacementValueKind.PERCENTAGE)
            return cls(value=int(text), kind=ReplacementValueKind.FIXED_COUNT)
        return cls(value=raw, kind=ReplacementValueKind.FIXED_COUNT)

    def resolve(self, population_size: int) -> int:
        if self.kind == ReplacementValueKind.PERCENTAGE:
            return round(population_size * self.value / 100)
        return self.value

    def __str__(self) -> str:
        if self.kind == ReplacementValueKind.PERCENTAGE:
            return f"{self.value}%"
        return str(self.value)
