"""
Logging for boilerpipe.

Every module logs through a child of the "boilerpipe" logger
("boilerpipe.content_handler", "boilerpipe.tokenizer", ...). The segmenter
writes one DEBUG line per emitted block, so DEBUG is only useful on small
inputs; the parser's INFO lines mark the start and end of each document.
"""

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "boilerpipe"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _attach(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)


def setup_logger(
    name: str = PACKAGE_LOGGER,
    level: int = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure the package logger.

    The first call installs a stdout handler (and a file handler when
    log_file is given). Later calls, e.g. DocumentParser(log_level=...),
    only move the logger and its handlers to the new level.

    Args:
        name: Logger name, "boilerpipe" unless a caller wants its own tree
        level: Logging level (default: INFO)
        log_file: Optional path that receives a copy of every record

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    _attach(logger, logging.StreamHandler(sys.stdout), level)
    if log_file:
        _attach(logger, logging.FileHandler(log_file), level)

    return logger


logger = setup_logger()


def get_module_logger(module_name: str) -> logging.Logger:
    """Child logger "boilerpipe.<module_name>", sharing the package handlers."""
    return logging.getLogger(f"{PACKAGE_LOGGER}.{module_name}")
