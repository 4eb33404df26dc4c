"""Logging setup for the canvascluster command line and library loggers."""

import logging
import sys
from pathlib import Path
from typing import TextIO

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _attach(logger: logging.Logger, handler: logging.Handler, formatter: logging.Formatter) -> None:
    handler.setLevel(logger.level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def setup_logger(
    name: str,
    level: str = "INFO",
    log_file: str | None = None,
    format_string: str | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """
    Configure a logger that writes to a stream and, optionally, a file.

    Calling this again for the same name replaces the earlier handlers, so the
    CLI can reconfigure once the config file has been read.

    Args:
        name: Logger name, usually the package name so module loggers inherit it
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file; parent directories are created
        format_string: Record format, DEFAULT_FORMAT when omitted
        stream: Stream for records, stderr when omitted so stdout stays free
            for JSON output

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)
    _attach(logger, logging.StreamHandler(stream or sys.stderr), formatter)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        _attach(logger, logging.FileHandler(log_path, encoding="utf-8"), formatter)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Module or class logger; handlers come from setup_logger on the package."""
    return logging.getLogger(name)
