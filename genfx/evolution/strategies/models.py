from enum import Enum


class FitnessType(str, Enum):
    """Which fitness value comparisons are based on."""

    RAW = "raw"
    SCALED = "scaled"


class EvaluationMode(str, Enum):
    """Whether larger or smaller fitness values are better."""

    MAXIMIZE = "maximize"
    MINIMIZE = "minimize"
