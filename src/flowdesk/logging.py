"""Logging setup for the flowdesk namespace."""

import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

LOGGER_NAME = "flowdesk"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Marks handlers installed here so a second setup replaces them
_HANDLER_TAG = "_flowdesk_handler"


def level_for(verbose: int) -> int:
    """Map a -v count to a logging level (0 = WARNING, 1 = INFO, 2+ = DEBUG)."""
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def _tagged(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    setattr(handler, _HANDLER_TAG, True)
    return handler


def _remove_own_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_TAG, False):
            logger.removeHandler(handler)
            handler.close()


def setup_logging(verbose: int = 0, log_file: Path | None = None) -> logging.Logger:
    """Route flowdesk log records to stderr and/or a file.

    Nothing is installed when verbose is 0 and no log file is given. A log
    file without -v still records at INFO, since the timer and drop history
    is what it is kept for.
    """
    logger = logging.getLogger(LOGGER_NAME)
    _remove_own_handlers(logger)
    if verbose == 0 and log_file is None:
        return logger

    level = level_for(max(verbose, 1))
    logger.setLevel(level)

    if verbose > 0:
        logger.addHandler(_tagged(logging.StreamHandler(sys.stderr), level))
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.addHandler(_tagged(logging.FileHandler(log_file), level))

    started = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")
    logger.info("flowdesk session started %s (level=%s)", started, logging.getLevelName(level))
    return logger
