import asyncio
from datetime import datetime, timezone
import time

import hydra
from hydra.utils import instantiate
from loguru import logger
from omegaconf import DictConfig

from genfx.config.resolvers import register_resolvers
from genfx.evolution.engine import GeneticAlgorithm
from genfx.evolution.metrics import BestMaximumFitnessEntity
from genfx.utils.logger_setup import setup_logger


async def run_experiment(cfg: DictConfig) -> GeneticAlgorithm:
    start_time = time.time()

    logger.info("=" * 80)
    logger.info("GenFx Evolution Run")
    logger.info("=" * 80)
    logger.info("Algorithm: {}", cfg.algorithm._target_)
    logger.info("Start time: {}", datetime.now(timezone.utc).isoformat())

    algorithm: GeneticAlgorithm | None = None
    try:
        logger.info("Step 1/3: Building algorithm...")
        algorithm = instantiate(cfg.algorithm, _convert_="all")
        logger.info("Step 1/3: Complete")

        logger.info("Step 2/3: Seeding initial populations...")
        await algorithm.initialize()
        logger.info("Step 2/3: Complete")

        logger.info("Step 3/3: Evolving...")
        await algorithm.run()
        logger.info("Step 3/3: Complete at generation {}", algorithm.current_generation)

        for metric in algorithm.config.metrics:
            if not isinstance(metric, BestMaximumFitnessEntity):
                continue
            for population in algorithm.environment:
                best = metric.latest(population.index)
                if best is not None:
                    logger.info(
                        "Best entity of population {}: {} (fitness={})",
                        population.index,
                        best.value,
                        best.value.raw_fitness_value,
                    )
    except KeyboardInterrupt:
        logger.info("Evolution run interrupted by user")
        if algorithm is not None:
            algorithm.cancel()
    except Exception as e:  # pylint: disable=broad-except
        logger.error("Evolution run failed: {}", e)
        raise
    finally:
        duration = time.time() - start_time
        logger.info("Total run duration: {:.2f} seconds", duration)
        logger.info("End time: {}", datetime.now(timezone.utc).isoformat())
        logger.info("=" * 80)
    return algorithm


@hydra.main(version_base=None, config_path="config", config_name="config")
def main(cfg: DictConfig) -> None:
    """Main entrypoint with Hydra configuration management."""
    log_file_path = setup_logger(
        log_dir=cfg.logging.log_dir,
        level=cfg.logging.level,
        rotation=cfg.logging.rotation,
        retention=cfg.logging.retention,
    )
    logger.info(
        "Working directory: {}.",
        hydra.core.hydra_config.HydraConfig.get().runtime.output_dir,
    )
    logger.info("Log file: {}", log_file_path)
    asyncio.run(run_experiment(cfg))


if __name__ == "__main__":
    register_resolvers()
    main()
