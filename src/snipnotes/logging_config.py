"""Logging configuration for snipnotes."""

import sys
from pathlib import Path

from loguru import logger


def configure_logging(*, verbose: bool = False, log_file: Path | None = None) -> None:
    """Configure loguru with appropriate level.

    The full-screen front end owns the terminal, so it logs to ``log_file``
    instead of stderr.
    """
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    if log_file is None:
        logger.add(sys.stderr, level=level, format="{level.icon} {message}")
        return
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} {level: <8} {name}: {message}",
        rotation="1 MB",
        retention=5,
        encoding="utf-8",
    )
