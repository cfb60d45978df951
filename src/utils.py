"""
utils.py
--------
Logging, timing decorators, and shared formatting helpers.
"""

import os
import logging
import time
import functools
from datetime import datetime
from pathlib import Path


def get_logger(name: str, log_dir: str = None,
               level: str = None) -> logging.Logger:
    """
    Return a named logger writing to both stdout and a daily log file.

    Parameters
    ----------
    name    : Logger name (typically the module __name__).
    log_dir : Directory for log files (defaults to $LOG_DIR or outputs/logs).
    level   : Logging level string ("DEBUG", "INFO", "WARNING", "ERROR").

    Returns
    -------
    logging.Logger
    """
    log_dir = log_dir or os.getenv("LOG_DIR", "outputs/logs")
    level   = level or os.getenv("LOG_LEVEL", "INFO")
    Path(log_dir).mkdir(parents=True, exist_ok=True)
    logger = logging.getLogger(name)

    if logger.handlers:          # avoid duplicate handlers on re-import
        return logger

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Console handler
    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    # File handler
    log_file = os.path.join(
        log_dir, f"stock_report_{datetime.now().strftime('%Y%m%d')}.log"
    )
    fh = logging.FileHandler(log_file)
    fh.setFormatter(fmt)
    logger.addHandler(fh)

    return logger


def set_level(level: str) -> None:
    """Apply a log level to every logger created through get_logger."""
    lvl = getattr(logging, level.upper(), logging.INFO)
    for name in list(logging.Logger.manager.loggerDict):
        if name != "main" and not name.startswith("src."):
            continue
        logger = logging.getLogger(name)
        if logger.handlers:
            logger.setLevel(lvl)


def timeit(func):
    """Decorator that logs the execution time of any function."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = logging.getLogger(func.__module__)
        t0 = time.perf_counter()
        result = func(*args, **kwargs)
        elapsed = time.perf_counter() - t0
        logger.debug("%s completed in %.3f s", func.__qualname__, elapsed)
        return result
    return wrapper


def format_volume(value: float) -> str:
    """Abbreviate share counts: 1.5M, 250.0K, 900."""
    if value >= 1e6:
        return f"{round(value / 1e6, 1)}M"
    if value >= 1e3:
        return f"{round(value / 1e3, 1)}K"
    return f"{value:g}"
