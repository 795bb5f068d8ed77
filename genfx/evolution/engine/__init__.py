from __future__ import annotations

from genfx.evolution.engine.config import AlgorithmConfig
from genfx.evolution.engine.core import GeneticAlgorithm
from genfx.evolution.engine.metrics import EngineMetrics
from genfx.evolution.engine.state import AlgorithmState
from genfx.evolution.engine.validation import ConfigViolation, validate_config
