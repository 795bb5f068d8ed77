from genfx.utils.logger_setup import setup_logger
from genfx.utils.stats import FitnessStats, compute_stats

__all__ = ["FitnessStats", "compute_stats", "setup_logger"]
