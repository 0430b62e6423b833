"""
Logging configuration for coretools-advisor.

Console output is plain for informational messages and level-prefixed
otherwise. The optional log file receives everything, with telemetry
events written as one JSON object per line.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional


LOGGER_NAME = "coretools_advisor"

_logger: Optional[logging.Logger] = None


def setup_logging(log_file: Optional[str] = None, verbose: bool = False) -> logging.Logger:
    """
    Configure the advisor's logger.

    Args:
        log_file: Optional file receiving all records, debug included
        verbose: Show debug records on the console

    Returns:
        Configured logger instance
    """
    global _logger

    console_level = logging.DEBUG if verbose else logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file else console_level)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(ConsoleFormatter(use_colors=sys.stderr.isatty()))
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(TelemetryFormatter())
        logger.addHandler(file_handler)

    logger.propagate = False

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """Get the configured logger, setting up defaults on first use."""
    global _logger
    if _logger is None:
        _logger = setup_logging()
    return _logger


class ConsoleFormatter(logging.Formatter):
    """
    Console formatter: info messages as-is, other levels behind a
    lowercase, optionally colored, level prefix ("warning: ...").
    """

    COLORS = {
        logging.DEBUG: "\033[2m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = False):
        super().__init__("%(message)s")
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno == logging.INFO:
            return message
        prefix = f"{record.levelname.lower()}:"
        if self.use_colors:
            color = self.COLORS.get(min(record.levelno, logging.ERROR), "")
            prefix = f"{color}{prefix}{self.RESET}"
        return f"{prefix} {message}"


class TelemetryFormatter(logging.Formatter):
    """
    File formatter. Records carrying a ``telemetry`` extra are written as a
    JSON object; everything else as a timestamped text line.
    """

    def __init__(self):
        super().__init__(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        event = getattr(record, "telemetry", None)
        if event is None:
            return super().format(record)
        return json.dumps({"time": self.formatTime(record, self.datefmt), **event}, sort_keys=True)
