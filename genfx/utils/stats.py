from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from pydantic import BaseModel, Field


class FitnessStats(BaseModel):
    """Aggregate view of a set of fitness values."""

    count: int = Field(ge=1)
    mean: float
    minimum: float
    maximum: float
    standard_deviation: float = Field(
        ge=0, description="Population standard deviation (ddof=0)"
    )


def compute_stats(values: Sequence[float]) -> FitnessStats:
    if len(values) == 0:
        raise ValueError("Cannot compute statistics of an empty sequence")
    arr = np.asarray(values, dtype=np.float64)
    return FitnessStats(
        count=arr.size,
        mean=float(arr.mean()),
        minimum=float(arr.min()),
        maximum=float(arr.max()),
        standard_deviation=float(arr.std()),
    )
