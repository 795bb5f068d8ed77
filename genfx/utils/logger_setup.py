from datetime import datetime, timezone
import os
import sys

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{line} | {message}"


def setup_logger(
    log_dir: str = "logs",
    level: str = "INFO",
    rotation: str = "50 MB",
    retention: str = "30 days",
) -> str:
    """
    Route loguru to stdout and to a per-run file under ``log_dir``.

    Returns the path of the run's log file. Rotated files are zip-compressed.
    """
    os.makedirs(log_dir, exist_ok=True)
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    log_file = os.path.join(log_dir, f"genfx_{stamp}.log")

    logger.remove()
    logger.add(sys.stdout, level=level, format=LOG_FORMAT, diagnose=False)
    logger.add(
        log_file,
        level=level,
        format=LOG_FORMAT,
        rotation=rotation,
        retention=retention,
        compression="zip",
        encoding="utf-8",
        diagnose=False,
    )

    logger.info("[setup_logger] Logging to stdout and {}", log_file)
    return log_file
