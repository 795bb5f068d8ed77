from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from genfx.evolution.engine.validation import ConfigViolation


class GenFxError(Exception):
    """Base for all GenFx exceptions."""

    pass


# Configuration / lifecycle
class ConfigurationInvalidError(GenFxError, ValueError):
    """Algorithm configuration failed validation; the run never starts."""

    def __init__(self, violations: list[ConfigViolation]):
        self.violations = list(violations)
        details = "; ".join(str(v) for v in self.violations)
        super().__init__(f"Invalid configuration: {details}")


class UninitializedUseError(GenFxError, RuntimeError):
    """Generation step or statistic requested before initialization."""

    pass


class InvalidStateTransitionError(GenFxError):
    """Algorithm moved between lifecycle states illegally."""

    pass


# Evolution process
class EvolutionError(GenFxError):
    """Evolution process failures."""

    pass


class EvaluationFailureError(EvolutionError):
    """A fitness evaluation raised; the whole generation step fails."""

    pass


class SamplingDegenerateError(EvolutionError, ValueError):
    """Roulette wheel invoked with no slices or a non-positive weight."""

    pass


class GenerationTimeoutError(EvolutionError):
    """Fitness evaluation exceeded the configured generation timeout."""

    pass


class RunCancelledError(EvolutionError):
    """The run was cancelled between generations."""

    pass
