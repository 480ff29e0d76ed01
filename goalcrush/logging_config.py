"""Logging setup for scoring runs."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional


def log_file_name(run_name: Optional[str] = None, started: Optional[datetime] = None) -> str:
    """File name for one scoring run, e.g. ``scoring_match_42_20250906_141500.log``."""
    stamp = (started or datetime.now()).strftime('%Y%m%d_%H%M%S')
    return f'scoring_{run_name}_{stamp}.log' if run_name else f'scoring_{stamp}.log'


def setup_logging(
    log_dir: Optional[Path] = None,
    run_name: Optional[str] = None,
    level: int = logging.INFO,
    console_level: Optional[int] = None,
    log_to_file: bool = True,
) -> logging.Logger:
    """
    Configure the ``goalcrush`` logger for one scoring run.

    The log file always records the whole run at ``level``; the console can
    be quieter (``goalcrush-score --quiet`` only shows warnings there).

    Args:
        log_dir: Directory for log files (default: ./logs)
        run_name: What is being scored, e.g. ``match_42`` or ``season_3``
        level: Level for the logger and the log file
        console_level: Level for stdout (default: same as ``level``)
        log_to_file: Whether to write a per-run log file

    Returns:
        Configured logger instance
    """
    console_level = level if console_level is None else console_level

    logger = logging.getLogger('goalcrush')
    logger.setLevel(min(level, console_level))
    for handler in logger.handlers:
        handler.close()
    logger.handlers = []

    if log_to_file:
        log_dir = Path(log_dir) if log_dir is not None else Path('logs')
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_dir / log_file_name(run_name), encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S',
        ))
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    logger.addHandler(console_handler)

    return logger
