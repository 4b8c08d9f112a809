"""Logging setup

Level guidelines used across taghooks:

logger.warning()
    - Recoverable problems, e.g. a malformed entry in a hooks file.

logger.info()
    - Major state changes, e.g. hooks registered from a file.

logger.debug()
    - Registration changes and, with tracing on, every filter value.
"""

import logging
from datetime import datetime
from pathlib import Path

from taghooks.config import Config


def setup_logging() -> logging.Logger:
    """Configure logging and return the package logger"""
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if Config.LOG_PATH:
        log_dir = Path(Config.LOG_PATH)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"taghooks_{datetime.now().strftime('%Y%m%d')}.log"
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, Config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )

    return logging.getLogger("taghooks")
