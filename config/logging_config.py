"""
Logging configuration for the salary dashboard.

Console output by default, with an optional dated log file.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from config.settings import Config


# Top-level packages whose module loggers (logging.getLogger(__name__)) we own
APP_LOGGERS = ("core", "datasource", "app")

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_dir: Optional[Path] = None,
    console: bool = True,
    file_logging: bool = False,
) -> List[logging.Logger]:
    """
    Configure the loggers of the dashboard packages.

    Safe to call on every Streamlit rerun: existing handlers are closed
    and replaced, never duplicated.

    Args:
        level: Logging level name or number (default: INFO)
        log_dir: Directory for log files (default: Config.logs_dir)
        console: Whether to log to stdout
        file_logging: Whether to also log to a dated file

    Returns:
        The configured package loggers
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        level = resolved if isinstance(resolved, int) else logging.INFO

    formatter = logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT)
    handlers: List[logging.Handler] = []

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    if file_logging:
        log_dir = Path(log_dir or Config.load().logs_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"dashboard_{datetime.now().strftime('%Y%m%d')}.log"
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    loggers = []
    for name in APP_LOGGERS:
        logger = logging.getLogger(name)
        for stale in logger.handlers:
            stale.close()
        logger.handlers.clear()
        logger.setLevel(level)
        logger.propagate = False
        for handler in handlers:
            handler.setLevel(level)
            logger.addHandler(handler)
        loggers.append(logger)

    return loggers
