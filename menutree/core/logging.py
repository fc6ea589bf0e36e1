from __future__ import annotations
import os
import sys
from typing import Optional
from loguru import logger

_CONFIGURED = False

DEFAULT_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"


def setup_logging(level: Optional[str] = None, force: bool = False) -> None:
    """Configure loguru logger once based on environment variables.

    Env vars:
    - MENUTREE_LOG_LEVEL: log level (DEBUG/INFO/WARNING/ERROR), default INFO
    - MENUTREE_LOG_FILE: optional path to write logs in addition to the console
    - MENUTREE_LOG_FORMAT: optional log format string for loguru

    Progress messages go to stdout, warnings and errors to stderr.
    """
    global _CONFIGURED
    if _CONFIGURED and not force:
        return

    level = (level or os.getenv("MENUTREE_LOG_LEVEL", "INFO")).upper()
    fmt = os.getenv("MENUTREE_LOG_FORMAT", DEFAULT_FORMAT)
    # Remove default handler then add our sink(s)
    logger.remove()
    logger.add(
        lambda msg: print(msg, end="", file=sys.stdout),
        level=level,
        format=fmt,
        filter=lambda record: record["level"].no < logger.level("WARNING").no,
    )
    logger.add(
        lambda msg: print(msg, end="", file=sys.stderr),
        level=max(logger.level(level).no, logger.level("WARNING").no),
        format=fmt,
    )

    log_file = os.getenv("MENUTREE_LOG_FILE")
    if log_file:
        logger.add(log_file, level=level, format=fmt, encoding="utf-8")

    _CONFIGURED = True


__all__ = ["setup_logging", "logger"]
