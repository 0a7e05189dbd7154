"""Logging setup for the season report and sheet tools."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

LOGGER_NAME = 'racepoints'

FILE_FORMAT = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
CONSOLE_FORMAT = logging.Formatter('%(levelname)s: %(message)s')


def log_file_path(log_dir: Optional[Path] = None, now: Optional[datetime] = None) -> Path:
    """Timestamped log file for one run, e.g. logs/racepoints_20250301_181500.log."""
    stamp = (now or datetime.now()).strftime('%Y%m%d_%H%M%S')
    return Path(log_dir or 'logs') / f'{LOGGER_NAME}_{stamp}.log'


def setup_logging(
    log_dir: Optional[Path] = None,
    level: int = logging.INFO,
    log_to_file: bool = True,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Configure the ``racepoints`` logger for a command-line run.

    Handlers from an earlier call are closed and replaced, so calling this
    twice in one process doesn't duplicate output.

    Args:
        log_dir: Directory for the run's log file (default: ./logs)
        level: Level for the logger and both handlers
        log_to_file: Write a detailed, timestamped log file
        log_to_console: Write ``LEVEL: message`` lines to stdout

    Returns:
        The configured ``racepoints`` logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers = []
    if log_to_file:
        log_file = log_file_path(log_dir)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(FILE_FORMAT)
        handlers.append(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(CONSOLE_FORMAT)
        handlers.append(console_handler)

    for handler in handlers:
        handler.setLevel(level)
        logger.addHandler(handler)

    return logger
