"""
Logging for the Garden Plan API

The console sink is always installed. A rotating file sink is added only
when a log directory is configured (Settings.LOG_DIR).
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

LOG_FILE = "gardenplan.log"

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]}:{line} - {message}"

logger.configure(extra={"name": "gardenplan"})


def setup_logging(log_level: str = "INFO", log_dir: Optional[str] = None) -> Optional[Path]:
    """
    Replace the active sinks with the configured ones

    Args:
        log_level: Minimum level for every sink
        log_dir: Directory for gardenplan.log; no file sink when empty

    Returns:
        Path of the log file, or None when logging to the console only
    """
    logger.remove()
    level = log_level.upper()

    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if not log_dir:
        return None

    log_path = Path(log_dir) / LOG_FILE
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger.add(
        str(log_path),
        format=FILE_FORMAT,
        level=level,
        rotation="10 MB",
        retention="30 days",
        compression="zip",
    )
    logger.info(f"Logging to {log_path} at level {level}")
    return log_path


def get_logger(name: Optional[str] = None):
    """Loguru logger bound to a module name"""
    if name:
        return logger.bind(name=name)
    return logger
