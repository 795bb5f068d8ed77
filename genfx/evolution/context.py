from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from genfx.evolution.strategies.models import EvaluationMode, FitnessType
from genfx.random_source import RandomSource


class EvolutionContext(BaseModel):
    """Run-wide state handed to every operator call instead of a back-reference to the algorithm."""

    rng: RandomSource = Field(..., description="Shared random source for the run")
    evaluation_mode: EvaluationMode = Field(
        default=EvaluationMode.MAXIMIZE,
        description="Whether the fitness evaluator rewards larger or smaller values",
    )
    fitness_type: FitnessType = Field(
        default=FitnessType.SCALED,
        description="Fitness kind used by the selection operator",
    )
    generation: int = Field(default=0, ge=0, description="Current generation index")
    scaling_enabled: bool = Field(
        default=False, description="Whether a fitness scaling strategy is configured"
    )
    model_config = ConfigDict(arbitrary_types_allowed=True)
