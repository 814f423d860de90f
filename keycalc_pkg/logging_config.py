"""Logging for Keycalc.

All loggers live under the ``keycalc`` namespace. Records may carry the
equation being worked on via ``extra={"equation": ...}``; the formatter
prints it after the message so a log line can be replayed by hand.
"""

import logging
import sys
from datetime import datetime
from typing import Optional

ROOT_LOGGER = "keycalc"
LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class StructuredFormatter(logging.Formatter):
    """``<iso timestamp> [LEVEL] name: message | equation=<tokens>`` plus any traceback."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).isoformat()
        line = f"{timestamp} [{record.levelname}] {record.name}: {record.getMessage()}"
        equation = getattr(record, "equation", None)
        if equation is not None:
            line = f"{line} | equation={equation}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def setup_logging(level: str = "WARNING", log_file: Optional[str] = None) -> logging.Logger:
    """Route the ``keycalc`` loggers to stderr and, optionally, a file.

    Calling it again replaces the handlers installed by the previous call.

    Raises:
        ValueError: if ``level`` is not a logging level name
    """
    level = level.upper()
    if level not in LEVELS:
        raise ValueError(f"Unknown log level: {level!r}")

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for one Keycalc module, e.g. ``get_logger("editor")``."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
