"""Debug message printing with a compact, severity-labelled format."""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "chunkpic"

# Level below DEBUG for the most detailed messages.
VERBOSE = 5
logging.addLevelName(VERBOSE, "VERBOSE")


def _label(levelno: int) -> str:
    if levelno >= logging.ERROR:
        return "ERROR!"
    if levelno >= logging.WARNING:
        return "------"
    if levelno >= logging.INFO:
        return "DEBUG0"
    if levelno >= logging.DEBUG:
        return "DEBUG1"
    return "DEBUG2"


class DebugFormatter(logging.Formatter):
    """Format records as ``LABEL [function@line] message``."""

    def format(self, record: logging.LogRecord) -> str:
        label = _label(record.levelno)
        return f"{label:<6}[{record.funcName}@{record.lineno}] {record.getMessage()}"


class _StderrHandler(logging.Handler):
    """Write formatted records to whatever ``sys.stderr`` currently is."""

    def __init__(self) -> None:
        super().__init__()
        self.setFormatter(DebugFormatter())

    def emit(self, record: logging.LogRecord) -> None:
        try:
            stream = sys.stderr
            stream.write(self.format(record) + "\n")
            stream.flush()
        except Exception:
            self.handleError(record)


def get_logger() -> logging.Logger:
    """Return the package logger."""
    return logging.getLogger(LOGGER_NAME)


def init() -> logging.Logger:
    """Attach the standard-error handler once and enable every level."""
    logger = get_logger()
    if not any(isinstance(handler, _StderrHandler) for handler in logger.handlers):
        logger.addHandler(_StderrHandler())
    logger.setLevel(VERBOSE)
    logger.propagate = False
    return logger


def set_level(level: int = 0) -> None:
    """Set verbosity: 0 shows DEBUG0, 1 adds DEBUG1, 2 adds DEBUG2.

    Levels above 2 are ignored.
    """
    logger = get_logger()
    if level > 2:
        return
    if level == 2:
        logger.setLevel(VERBOSE)
    elif level == 1:
        logger.setLevel(logging.DEBUG)
    elif level == 0:
        logger.setLevel(logging.INFO)