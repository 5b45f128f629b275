"""Logging configuration for buildflow."""

import logging
import sys
from pathlib import Path
from datetime import datetime

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"


def setup_logging(
    level: str = "INFO",
    log_dir: Path | None = None,
    verbose: bool = False,
) -> logging.Logger:
    """
    Configure the `buildflow` logger for one run.

    Progress for the user is printed by the CLI with rich; the logger is
    for diagnostics. The console only shows warnings unless verbose.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_dir: Also write a daily log file here (usually the project's
            .buildflow/logs, see Settings.log_path)
        verbose: Show INFO and above on stderr

    Returns:
        Configured package logger
    """
    logger = logging.getLogger("buildflow")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Drop handlers from a previous run, releasing any open log file
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.INFO if verbose else logging.WARNING)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"buildflow_{datetime.now().strftime('%Y%m%d')}.log"

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")

    return logger


def get_logger(name: str = "buildflow") -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)
