from __future__ import annotations

from loguru import logger
from pydantic import BaseModel, Field

from genfx.evolution.engine.config import AlgorithmConfig


class ConfigViolation(BaseModel):
    """One reason an algorithm configuration cannot be run."""

    field: str = Field(description="Config field (or component) at fault")
    message: str = Field(description="Human-readable explanation")

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


def validate_config(config: AlgorithmConfig) -> list[ConfigViolation]:
    """Collect every component's own violations plus cross-field checks; empty means valid."""
    violations = [
        ConfigViolation(field=name, message=message)
        for name, component in config.components()
        for message in component.validate()
    ]
    violations += [
        ConfigViolation(field=name, message=message)
        for name, message in config.cross_field_violations()
    ]
    if violations:
        logger.debug(
            "[validate_config] {} violation(s): {}",
            len(violations),
            "; ".join(str(v) for v in violations),
        )
    return violations
